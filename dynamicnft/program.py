"""The dynamic NFT program: roles, minting, burning and scheduled media rotation."""

from __future__ import annotations

import copy
import heapq
from typing import Dict, List, Optional, Set, Tuple

from . import funcs
from .models import (
    ActorId,
    Burned,
    Event,
    Ledger,
    MetadataStartedUpdating,
    MetadataUpdated,
    Minted,
    NftError,
    NotAllowed,
    TokenId,
    TokenMetadata,
    UpdateRequest,
)


class DynamicNftProgram:
    """An NFT collection whose tokens rotate through their media over time."""

    def __init__(
        self,
        admin: ActorId,
        name: str,
        symbol: str,
        gas_for_one_time_updating: int,
        program_id: ActorId,
    ) -> None:
        self.name = name
        self.symbol = symbol
        self.gas_for_one_time_updating = gas_for_one_time_updating
        self.program_id = program_id
        self.ledger = Ledger()
        self.block = 0
        self.events: List[Event] = []
        self._admins: Set[ActorId] = {admin}
        self._minters: Set[ActorId] = {admin}
        self._burners: Set[ActorId] = {admin}
        self._metadata: Dict[TokenId, TokenMetadata] = {}
        self._next_token_id: TokenId = 0
        self._queue: List[Tuple[int, int, UpdateRequest]] = []
        self._sequence = 0
        self._gas_available: Optional[int] = None

    def _emit(self, event: Event) -> Event:
        self.events.append(event)
        return event

    def _ensure_is_admin(self, sender: ActorId) -> None:
        if sender not in self._admins:
            raise NotAllowed("Not admin")

    def _schedule(self, request: Optional[UpdateRequest]) -> None:
        if request is None:
            return
        self._sequence += 1
        heapq.heappush(self._queue, (self.block + request.delay, self._sequence, request))

    def mint(self, sender: ActorId, to: ActorId, token_metadata: TokenMetadata) -> Event:
        if sender not in self._minters:
            raise NotAllowed("Not allowed to mint")
        if len(token_metadata.media) < token_metadata.current_media_index + 1:
            raise ValueError("Wrong value of current media index")
        self._next_token_id = funcs.mint(
            self.ledger,
            self._metadata,
            self._next_token_id,
            to,
            copy.deepcopy(token_metadata),
        )
        return self._emit(Minted(to=to, token_metadata=copy.deepcopy(token_metadata)))

    def burn(self, sender: ActorId, from_: ActorId, token_id: TokenId) -> Event:
        if sender not in self._burners:
            raise NotAllowed("Not allowed to burn")
        funcs.burn(self.ledger, self._metadata, token_id)
        return self._emit(Burned(from_=from_, token_id=token_id))

    def grant_admin_role(self, sender: ActorId, to: ActorId) -> None:
        self._ensure_is_admin(sender)
        self._admins.add(to)

    def grant_minter_role(self, sender: ActorId, to: ActorId) -> None:
        self._ensure_is_admin(sender)
        self._minters.add(to)

    def grant_burner_role(self, sender: ActorId, to: ActorId) -> None:
        self._ensure_is_admin(sender)
        self._burners.add(to)

    def revoke_admin_role(self, sender: ActorId, from_: ActorId) -> None:
        self._ensure_is_admin(sender)
        self._admins.discard(from_)

    def revoke_minter_role(self, sender: ActorId, from_: ActorId) -> None:
        self._ensure_is_admin(sender)
        self._minters.discard(from_)

    def revoke_burner_role(self, sender: ActorId, from_: ActorId) -> None:
        self._ensure_is_admin(sender)
        self._burners.discard(from_)

    def start_metadata_update(
        self,
        sender: ActorId,
        updates_count: int,
        update_period_in_blocks: int,
        token_id: TokenId,
    ) -> Event:
        if updates_count == 0:
            raise ValueError("Updates count cannot be zero")
        if update_period_in_blocks == 0:
            raise ValueError("Updates period cannot be zero")
        request = funcs.start_metadata_update(
            self.gas_for_one_time_updating,
            self.ledger,
            self._metadata,
            token_id,
            sender,
            updates_count,
            update_period_in_blocks,
        )
        self._schedule(request)
        return self._emit(
            MetadataStartedUpdating(
                updates_count=updates_count,
                update_period_in_blocks=update_period_in_blocks,
                token_id=token_id,
            )
        )

    def update_metadata(
        self,
        sender: ActorId,
        token_id: TokenId,
        owner: ActorId,
        update_period: int,
        updates_count: int,
    ) -> Event:
        """Handle one scheduled rotation; only the program itself may send it."""
        if sender != self.program_id:
            raise NotAllowed("This message can only be sent by the programme")
        gas_available = self._gas_available
        if gas_available is None:
            gas_available = self.gas_for_one_time_updating * updates_count
        index, request = funcs.update_metadata(
            self.ledger,
            self._metadata,
            token_id,
            owner,
            update_period,
            updates_count,
            gas_available,
        )
        self._schedule(request)
        return self._emit(MetadataUpdated(token_id=token_id, current_media_index=index))

    def run_next_block(self) -> List[Event]:
        """Advance one block and deliver the delayed messages that fall due.

        A delivered message that fails is dropped, as a failed message would be.
        """
        self.block += 1
        emitted: List[Event] = []
        while self._queue and self._queue[0][0] <= self.block:
            _, _, request = heapq.heappop(self._queue)
            self._gas_available = request.gas
            try:
                emitted.append(
                    self.update_metadata(
                        self.program_id,
                        request.token_id,
                        request.owner,
                        request.update_period,
                        request.updates_count,
                    )
                )
            except NftError:
                continue
            finally:
                self._gas_available = None
        return emitted

    def minters(self) -> List[ActorId]:
        return sorted(self._minters)

    def burners(self) -> List[ActorId]:
        return sorted(self._burners)

    def admins(self) -> List[ActorId]:
        return sorted(self._admins)

    def token_id(self) -> TokenId:
        """The id the next minted token will receive."""
        return self._next_token_id

    def token_metadata_by_id(self, token_id: TokenId) -> Optional[TokenMetadata]:
        metadata = self._metadata.get(token_id)
        return copy.deepcopy(metadata) if metadata is not None else None

    def tokens_for_owner(self, owner: ActorId) -> List[Tuple[TokenId, TokenMetadata]]:
        result = []
        for token_id in sorted(self.ledger.tokens_for_owner.get(owner, ())):
            metadata = self.token_metadata_by_id(token_id)
            if metadata is not None:
                result.append((token_id, metadata))
        return result

    def balance_of(self, owner: ActorId) -> int:
        return self.ledger.balance_of(owner)

    def owner_of(self, token_id: TokenId) -> ActorId:
        return self.ledger.owner_of(token_id)