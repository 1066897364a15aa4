# dynamicnft

An in-memory non-fungible token collection whose tokens carry a list of
media entries. The active entry can be rotated on a schedule: the token's
owner starts an update run, and the program keeps advancing the token's
`current_media_index` every few blocks until the requested number of updates
has been made.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `dynamicnft.models` – data types, errors and events: `TokenMetadata`,
  `Ledger`, `UpdateRequest`, the events `Minted`, `Burned`,
  `MetadataStartedUpdating`, `MetadataUpdated`, and the errors `NftError`,
  `TokenDoesNotExist`, `DeniedAccess`, `NotAllowed`.
- `dynamicnft.funcs` – the state transitions `mint`, `burn`,
  `start_metadata_update` and `update_metadata`, working on a `Ledger` and a
  dict of metadata by token id.
- `dynamicnft.program` – `DynamicNftProgram`, which holds the collection's
  state, checks roles and delivers scheduled updates block by block.

## Concepts

- **Roles.** The `admin` passed to `DynamicNftProgram` becomes its first
  admin, minter and burner. Admins grant and revoke the three roles
  (`grant_admin_role`, `grant_minter_role`, `grant_burner_role`,
  `revoke_admin_role`, `revoke_minter_role`, `revoke_burner_role`).
- **Tokens.** Minters create tokens for any account; token ids count up
  from 0. Burners remove tokens, together with their approval entry and
  metadata.
- **Metadata.** `TokenMetadata` holds `name`, `description`, `media` (a list
  of links), `reference` and `current_media_index`. `TokenMetadata.advance()`
  moves to the next media entry, wrapping around to 0.
- **Scheduled updates.** The token owner calls `start_metadata_update` with a
  number of updates and a period in blocks. The first advance happens at
  once; each further one is an `UpdateRequest` the program queues to itself,
  delivered as an `update_metadata` call when `run_next_block` reaches its
  block. Only the program's own id may call `update_metadata`. A delivered
  update that fails (for instance because the token was burned or changed
  owner) is dropped.

Every method that takes a `sender` checks that caller's role or ownership.

## Example

```python
from dynamicnft.models import TokenMetadata
from dynamicnft.program import DynamicNftProgram

ADMIN, USER = 10, 11
PROGRAM_ID = 1000

nft = DynamicNftProgram(ADMIN, "collection_name", "collection_symbol", 5_000_000_000, PROGRAM_ID)

nft.mint(ADMIN, ADMIN, TokenMetadata(
    name="token_name",
    description="token_description",
    current_media_index=0,
    media=["token_media 1", "token_media 2", "token_media 3"],
    reference="token_reference",
))

assert nft.balance_of(ADMIN) == 1
assert nft.owner_of(0) == ADMIN
assert nft.token_id() == 1

nft.start_metadata_update(ADMIN, 3, 5, 0)
assert nft.token_metadata_by_id(0).current_media_index == 1

for _ in range(5):
    nft.run_next_block()
assert nft.token_metadata_by_id(0).current_media_index == 2

for _ in range(5):
    nft.run_next_block()
assert nft.token_metadata_by_id(0).current_media_index == 0
```

Role management:

```python
nft.grant_minter_role(ADMIN, USER)
assert USER in nft.minters()
nft.revoke_minter_role(ADMIN, USER)
assert nft.minters() == [ADMIN]
```

## Queries

- `minters()`, `burners()`, `admins()` – sorted lists of actor ids.
- `token_id()` – the id the next minted token will receive.
- `token_metadata_by_id(token_id)` – a copy of the token's metadata, or
  `None`.
- `tokens_for_owner(owner)` – `(token_id, metadata)` pairs, sorted by id.
- `balance_of(owner)` – number of tokens held.
- `owner_of(token_id)` – the owner, or `0` for a token that does not exist.

## Events and errors

`mint`, `burn`, `start_metadata_update` and `update_metadata` return the
event they record (`Minted`, `Burned`, `MetadataStartedUpdating`,
`MetadataUpdated`) and append it to the program's `events` list;
`run_next_block` returns the events of the updates it delivered.

Refused operations raise:

- `NotAllowed` – the sender lacks the required role, or someone other than
  the program calls `update_metadata`;
- `TokenDoesNotExist` – the token id is unknown;
- `DeniedAccess` – the sender does not own the token;
- `ValueError` – `current_media_index` is out of range for `media` at mint,
  or the update count or period given to `start_metadata_update` is zero.

The first three derive from `NftError`.

## What this package does not do

- State lives only in memory; nothing is saved or loaded.
- There are no transfer or approval operations: ownership changes only by
  minting and burning, and the `Ledger.token_approvals` table is only
  cleared on burn.
- Gas amounts are only recorded on each `UpdateRequest`; nothing is charged
  or metered.
- There is no command-line tool or network interface; the package is used
  as a library.