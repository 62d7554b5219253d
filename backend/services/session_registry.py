"""The single shared two-participant session and its three mutating operations."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Awaitable, Callable

from models import SESSION_CAPACITY, SessionState, Slot
from services.errors import CapacityExceeded
from services.round_resolver import coerce_choice, resolve
from services.state_hub import state_hub

logger = logging.getLogger(__name__)

Broadcast = Callable[[list[str], dict[str, Any]], Awaitable[None]]


class SessionRegistry:
    """
    Owns the authoritative SessionState.

    join / submit_input / leave are serialized by one asyncio.Lock and every
    mutation broadcasts the full snapshot to the admitted participants before
    the lock is released, so all participants see the same ordered sequence
    of states. The broadcast callable must not wait on slow consumers.
    """

    def __init__(self, broadcast: Broadcast, *, capacity: int = SESSION_CAPACITY) -> None:
        self._broadcast = broadcast
        self._capacity = capacity
        self._lock = asyncio.Lock()
        self._state = SessionState()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def participant_ids(self) -> list[str]:
        return list(self._state.slots)

    def is_admitted(self, participant_id: str) -> bool:
        return participant_id in self._state.slots

    def snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self._state.snapshot())

    async def join(self, participant_id: str) -> dict[str, Any]:
        """
        Admit `participant_id` into a free slot and broadcast.

        Raises CapacityExceeded when every slot is taken. A participant that
        is already admitted is left as is (no new slot, no broadcast).
        """
        async with self._lock:
            if participant_id in self._state.slots:
                logger.info("[session_registry] Duplicate join ignored: participant=%s", participant_id)
                return self.snapshot()
            if len(self._state.slots) >= self._capacity:
                logger.info(
                    "[session_registry] Join rejected, session full: participant=%s", participant_id
                )
                raise CapacityExceeded(self._capacity)
            self._state.slots[participant_id] = Slot(participant_id=participant_id)
            logger.info(
                "[session_registry] Joined: participant=%s slots=%d/%d",
                participant_id,
                len(self._state.slots),
                self._capacity,
            )
            return await self._publish()

    async def submit_input(self, participant_id: str, choice: Any) -> bool:
        """
        Store `choice` for `participant_id` and resolve once both slots are filled.

        Returns False (no change, no broadcast) for a participant holding no slot.
        Raises InvalidChoice before touching state for a value outside the choice set.
        """
        validated = coerce_choice(choice)
        async with self._lock:
            slot = self._state.slots.get(participant_id)
            if slot is None:
                logger.debug(
                    "[session_registry] Input from unknown participant=%s ignored", participant_id
                )
                return False
            slot.choice = validated
            if self._state.both_chosen():
                first, second = self._state.slots.values()
                outcome = resolve(first.choice, second.choice)
                self._state.result_message = outcome.message
                self._state.winner = (
                    None if outcome.winner_index is None
                    else (first, second)[outcome.winner_index].participant_id
                )
                logger.info(
                    "[session_registry] Round resolved: %s (winner=%s)",
                    outcome.message,
                    self._state.winner,
                )
            await self._publish()
            return True

    async def leave(self, participant_id: str) -> bool:
        """Reset the whole round, drop `participant_id`'s slot and broadcast to whoever remains."""
        async with self._lock:
            self._state.clear_round()
            removed = self._state.slots.pop(participant_id, None) is not None
            logger.info(
                "[session_registry] Left: participant=%s removed=%s remaining=%d",
                participant_id,
                removed,
                len(self._state.slots),
            )
            await self._publish()
            return removed

    async def _publish(self) -> dict[str, Any]:
        payload = self.snapshot()
        await self._broadcast(list(self._state.slots), payload)
        return payload


# Process-wide session used by the websocket route.
session_registry = SessionRegistry(state_hub.publish)
