"""State transitions of the dynamic NFT collection."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from .models import (
    ActorId,
    DeniedAccess,
    Ledger,
    TokenDoesNotExist,
    TokenId,
    TokenMetadata,
    UpdateRequest,
)

_U64_MAX = 2**64 - 1
_GAS_RESERVE = 1_000_000_000


def _saturating_u64(value: int) -> int:
    return max(0, min(value, _U64_MAX))


def mint(
    ledger: Ledger,
    metadata_by_id: Dict[TokenId, TokenMetadata],
    token_id: TokenId,
    to: ActorId,
    token_metadata: TokenMetadata,
) -> TokenId:
    """Record ``token_id`` as owned by ``to`` and return the next free token id."""
    ledger.owner_by_id[token_id] = to
    ledger.tokens_for_owner.setdefault(to, set()).add(token_id)
    metadata_by_id[token_id] = token_metadata
    return token_id + 1


def burn(
    ledger: Ledger,
    metadata_by_id: Dict[TokenId, TokenMetadata],
    token_id: TokenId,
) -> None:
    """Remove a token with its approvals and metadata."""
    try:
        owner = ledger.owner_by_id.pop(token_id)
    except KeyError:
        raise TokenDoesNotExist(token_id) from None
    tokens = ledger.tokens_for_owner.get(owner)
    if tokens is not None:
        tokens.discard(token_id)
        if not tokens:
            del ledger.tokens_for_owner[owner]
    ledger.token_approvals.pop(token_id, None)
    metadata_by_id.pop(token_id, None)


def _rotate(
    ledger: Ledger,
    metadata_by_id: Dict[TokenId, TokenMetadata],
    token_id: TokenId,
    actor: ActorId,
) -> TokenMetadata:
    owner = ledger.owner_by_id.get(token_id)
    if owner is None:
        raise TokenDoesNotExist(token_id)
    if owner != actor:
        raise DeniedAccess(f"{actor} does not own token {token_id}")
    metadata = metadata_by_id.get(token_id)
    if metadata is None:
        raise TokenDoesNotExist(token_id)
    metadata.advance()
    return metadata


def start_metadata_update(
    gas_for_one_time_updating: int,
    ledger: Ledger,
    metadata_by_id: Dict[TokenId, TokenMetadata],
    token_id: TokenId,
    msg_src: ActorId,
    updates_count: int,
    update_period: int,
) -> Optional[UpdateRequest]:
    """Rotate the token's media once and return the follow-up request, if any."""
    _rotate(ledger, metadata_by_id, token_id, msg_src)
    if updates_count <= 1:
        return None
    return UpdateRequest(
        token_id=token_id,
        owner=msg_src,
        update_period=update_period,
        updates_count=updates_count - 1,
        gas=_saturating_u64(gas_for_one_time_updating * updates_count),
        delay=update_period,
    )


def update_metadata(
    ledger: Ledger,
    metadata_by_id: Dict[TokenId, TokenMetadata],
    token_id: TokenId,
    owner: ActorId,
    update_period: int,
    updates_count: int,
    gas_available: int,
) -> Tuple[int, Optional[UpdateRequest]]:
    """Perform one scheduled rotation.

    Returns the new media index and the next request, if more updates remain.
    """
    metadata = _rotate(ledger, metadata_by_id, token_id, owner)
    request = None
    if updates_count > 1:
        request = UpdateRequest(
            token_id=token_id,
            owner=owner,
            update_period=update_period,
            updates_count=updates_count - 1,
            gas=max(gas_available - _GAS_RESERVE, 0),
            delay=update_period,
        )
    return metadata.current_media_index, request