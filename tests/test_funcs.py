import pytest

from dynamicnft import funcs
from dynamicnft.models import (
    DeniedAccess,
    Ledger,
    TokenDoesNotExist,
    TokenMetadata,
)

OWNER = 10
OTHER = 11


def _metadata(count=3):
    return TokenMetadata(
        name="token_name",
        description="token_description",
        media=[f"token_media {n}" for n in range(1, count + 1)],
        reference="token_reference",
    )


@pytest.fixture
def state():
    ledger = Ledger()
    metadata_by_id = {}
    funcs.mint(ledger, metadata_by_id, 0, OWNER, _metadata())
    return ledger, metadata_by_id


def test_mint_records_token(state):
    ledger, metadata_by_id = state
    next_id = funcs.mint(ledger, metadata_by_id, 1, OWNER, _metadata())
    assert next_id == 2
    assert ledger.owner_by_id[1] == OWNER
    assert ledger.tokens_for_owner[OWNER] == {0, 1}
    assert metadata_by_id[1] == _metadata()


def test_burn_removes_everything(state):
    ledger, metadata_by_id = state
    ledger.token_approvals[0] = OTHER
    funcs.burn(ledger, metadata_by_id, 0)
    assert ledger.owner_by_id == {}
    assert OWNER not in ledger.tokens_for_owner
    assert ledger.token_approvals == {}
    assert metadata_by_id == {}


def test_burn_missing_token(state):
    ledger, metadata_by_id = state
    with pytest.raises(TokenDoesNotExist):
        funcs.burn(ledger, metadata_by_id, 9)


def test_start_update_single_count_sends_nothing(state):
    ledger, metadata_by_id = state
    request = funcs.start_metadata_update(5_000_000_000, ledger, metadata_by_id, 0, OWNER, 1, 5)
    assert request is None
    assert metadata_by_id[0].current_media_index == 1


def test_start_update_schedules_next(state):
    ledger, metadata_by_id = state
    request = funcs.start_metadata_update(5_000_000_000, ledger, metadata_by_id, 0, OWNER, 3, 5)
    assert request.updates_count == 2
    assert request.delay == 5
    assert request.owner == OWNER
    assert request.gas == 15_000_000_000


def test_start_update_gas_saturates(state):
    ledger, metadata_by_id = state
    request = funcs.start_metadata_update(2**64 - 1, ledger, metadata_by_id, 0, OWNER, 2, 5)
    assert request.gas == 2**64 - 1


def test_start_update_denied_for_non_owner(state):
    ledger, metadata_by_id = state
    with pytest.raises(DeniedAccess):
        funcs.start_metadata_update(1, ledger, metadata_by_id, 0, OTHER, 3, 5)
    assert metadata_by_id[0].current_media_index == 0


def test_start_update_missing_token(state):
    ledger, metadata_by_id = state
    with pytest.raises(TokenDoesNotExist):
        funcs.start_metadata_update(1, ledger, metadata_by_id, 4, OWNER, 3, 5)


def test_update_metadata_last_step(state):
    ledger, metadata_by_id = state
    index, request = funcs.update_metadata(ledger, metadata_by_id, 0, OWNER, 5, 1, 10**10)
    assert index == metadata_by_id[0].current_media_index
    assert request is None


def test_update_metadata_reserves_gas(state):
    ledger, metadata_by_id = state
    _, request = funcs.update_metadata(ledger, metadata_by_id, 0, OWNER, 5, 3, 500)
    assert request.gas == 0
    assert request.updates_count == 2


def test_update_metadata_denied(state):
    ledger, metadata_by_id = state
    with pytest.raises(DeniedAccess):
        funcs.update_metadata(ledger, metadata_by_id, 0, OTHER, 5, 3, 10**10)