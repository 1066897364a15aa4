"""Data types, errors and events of the dynamic NFT collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Set, Union

ActorId = int
TokenId = int


class NftError(Exception):
    """Base class for every error the collection reports."""


class TokenDoesNotExist(NftError):
    """The token id is not known to the collection."""

    def __init__(self, token_id: TokenId) -> None:
        super().__init__(f"token {token_id} does not exist")
        self.token_id = token_id


class DeniedAccess(NftError):
    """The caller does not own the token it tries to act on."""


class NotAllowed(NftError):
    """The caller lacks the role the action requires."""


@dataclass
class TokenMetadata:
    """Descriptive data of one token, with a rotating set of media."""

    name: str = ""
    description: str = ""
    current_media_index: int = 0
    media: List[str] = field(default_factory=list)
    reference: str = ""

    def advance(self) -> int:
        """Move to the next media entry, wrapping around, and return its index."""
        if not self.media:
            raise ValueError("token has no media to rotate")
        self.current_media_index = (self.current_media_index + 1) % len(self.media)
        return self.current_media_index


@dataclass
class Ledger:
    """Ownership records shared with the base NFT service."""

    owner_by_id: Dict[TokenId, ActorId] = field(default_factory=dict)
    tokens_for_owner: Dict[ActorId, Set[TokenId]] = field(default_factory=dict)
    token_approvals: Dict[TokenId, ActorId] = field(default_factory=dict)

    def balance_of(self, owner: ActorId) -> int:
        """Number of tokens held by ``owner``."""
        return len(self.tokens_for_owner.get(owner, ()))

    def owner_of(self, token_id: TokenId) -> ActorId:
        """Owner of the token, or the zero actor when it does not exist."""
        return self.owner_by_id.get(token_id, 0)


@dataclass(frozen=True)
class UpdateRequest:
    """A delayed message asking the program to rotate a token's media."""

    token_id: TokenId
    owner: ActorId
    update_period: int
    updates_count: int
    gas: int
    delay: int


@dataclass(frozen=True)
class Minted:
    to: ActorId
    token_metadata: TokenMetadata


@dataclass(frozen=True)
class Burned:
    from_: ActorId
    token_id: TokenId


@dataclass(frozen=True)
class MetadataStartedUpdating:
    updates_count: int
    update_period_in_blocks: int
    token_id: TokenId


@dataclass(frozen=True)
class MetadataUpdated:
    token_id: TokenId
    current_media_index: int


Event = Union[Minted, Burned, MetadataStartedUpdating, MetadataUpdated]