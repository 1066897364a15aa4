import pytest

from dynamicnft.models import (
    Burned,
    DeniedAccess,
    Ledger,
    NftError,
    NotAllowed,
    TokenDoesNotExist,
    TokenMetadata,
)


def _metadata(media):
    return TokenMetadata(
        name="token_name",
        description="token_description",
        current_media_index=0,
        media=list(media),
        reference="token_reference",
    )


def test_advance_rotates_and_wraps():
    meta = _metadata(["token_media 1", "token_media 2", "token_media 3"])
    assert meta.advance() == 1
    assert meta.advance() == 2
    assert meta.advance() == 0
    assert meta.current_media_index == 0


def test_advance_single_media_stays_at_zero():
    meta = _metadata(["token_media"])
    assert meta.advance() == 0


def test_advance_without_media_raises():
    with pytest.raises(ValueError):
        _metadata([]).advance()


def test_ledger_balance_and_owner():
    ledger = Ledger(owner_by_id={0: 10, 1: 10}, tokens_for_owner={10: {0, 1}})
    assert ledger.balance_of(10) == 2
    assert ledger.balance_of(11) == 0
    assert ledger.owner_of(1) == 10
    assert ledger.owner_of(7) == 0


def test_error_hierarchy():
    err = TokenDoesNotExist(5)
    assert isinstance(err, NftError)
    assert err.token_id == 5
    assert issubclass(DeniedAccess, NftError)
    assert issubclass(NotAllowed, NftError)


def test_events_compare_by_value():
    assert Burned(from_=10, token_id=0) == Burned(from_=10, token_id=0)
    assert Burned(from_=10, token_id=0) != Burned(from_=11, token_id=0)