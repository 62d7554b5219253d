from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable

logger = logging.getLogger(__name__)


class StateHub:
    """
    In-memory fan-out of session state to connected participants.

    - Each participant connection gets an asyncio.Queue(maxsize=16).
    - publish() never waits on a consumer; a full queue drops its oldest
      payload, since every payload is a complete snapshot.
    """

    def __init__(self, maxsize: int = 16) -> None:
        self._lock = asyncio.Lock()
        self._maxsize = maxsize
        self._subscribers: dict[str, asyncio.Queue[dict[str, Any]]] = {}

    async def subscribe(self, participant_id: str) -> asyncio.Queue[dict[str, Any]]:
        q: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=self._maxsize)
        async with self._lock:
            self._subscribers[participant_id] = q
        return q

    async def unsubscribe(self, participant_id: str) -> None:
        async with self._lock:
            self._subscribers.pop(participant_id, None)

    async def publish(self, recipients: Iterable[str], payload: dict[str, Any]) -> None:
        async with self._lock:
            queues = [
                (pid, self._subscribers[pid]) for pid in recipients if pid in self._subscribers
            ]
        for pid, q in queues:
            if q.full():
                try:
                    _ = q.get_nowait()
                except asyncio.QueueEmpty:
                    pass
                logger.debug("[state_hub] Dropped stale payload for participant=%s", pid)
            try:
                q.put_nowait(payload)
            except asyncio.QueueFull:
                # Raced between full-check and put; the next publish supersedes it.
                pass

    def subscriber_count(self) -> int:
        return len(self._subscribers)


state_hub = StateHub()
