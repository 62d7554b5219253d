from __future__ import annotations

import asyncio
import json
import logging
import secrets
from contextlib import suppress
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from app.models import InputMessage
from services.errors import CapacityExceeded
from services.session_registry import session_registry
from services.state_hub import state_hub

router = APIRouter(tags=["session"])
logger = logging.getLogger(__name__)

# Avoid 0/O, 1/I/l so ids read back unambiguously in logs and client UIs.
_PARTICIPANT_ALPHABET = "23456789abcdefghjkmnpqrstuvwxyz"
_PARTICIPANT_ID_LENGTH = 12


def _generate_participant_id() -> str:
    return "".join(secrets.choice(_PARTICIPANT_ALPHABET) for _ in range(_PARTICIPANT_ID_LENGTH))


async def _forward_state(websocket: WebSocket, q: asyncio.Queue[dict[str, Any]]) -> None:
    while True:
        payload = await q.get()
        await websocket.send_json({"type": "state", **payload})


async def _receive_frame(websocket: WebSocket) -> dict[str, Any]:
    """Next text or binary frame; raises WebSocketDisconnect when the client goes away."""
    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
    return message


async def _drain_until_disconnect(websocket: WebSocket) -> None:
    """Keep a rejected connection open without letting it touch the session."""
    try:
        while True:
            await _receive_frame(websocket)
    except WebSocketDisconnect:
        return


def _parse_input(frame: dict[str, Any]) -> InputMessage | None:
    raw = frame.get("text")
    if raw is None:
        logger.warning("[session_ws] Dropping non-text frame (%d bytes)", len(frame.get("bytes") or b""))
        return None
    try:
        return InputMessage.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("[session_ws] Dropping malformed message %.80r: %s", raw, e)
        return None


@router.websocket("/ws/session")
async def ws_session(websocket: WebSocket) -> None:
    """
    One participant connection.

    Outbound payloads:
      {"type": "welcome", "id": str}                               (this connection only)
      {"type": "state", "slots": [...], "resultMessage": ..., "winner": ...}
      {"type": "full"}                                             (rejected connection)
    Inbound payloads:
      {"type": "input", "choice": "rock" | "paper" | "scissors"}
    """
    await websocket.accept()
    participant_id = _generate_participant_id()
    q = await state_hub.subscribe(participant_id)
    try:
        await session_registry.join(participant_id)
    except CapacityExceeded:
        await state_hub.unsubscribe(participant_id)
        logger.info("[session_ws] Session full; rejected connection %s", participant_id)
        await websocket.send_json({"type": "full"})
        await _drain_until_disconnect(websocket)
        return

    logger.info("[session_ws] Participant %s connected", participant_id)
    sender_task: asyncio.Task[None] | None = None
    try:
        await websocket.send_json({"type": "welcome", "id": participant_id})
        sender_task = asyncio.create_task(_forward_state(websocket, q))
        while True:
            message = _parse_input(await _receive_frame(websocket))
            if message is None:
                continue
            accepted = await session_registry.submit_input(participant_id, message.choice)
            if not accepted:
                logger.debug("[session_ws] Input from %s arrived after it left", participant_id)
    except WebSocketDisconnect:
        pass
    finally:
        if sender_task is not None:
            sender_task.cancel()
            try:
                with suppress(asyncio.CancelledError):
                    await sender_task
            except Exception as e:
                logger.warning("[session_ws] Sender for %s stopped with error: %s", participant_id, e)
        await session_registry.leave(participant_id)
        await state_hub.unsubscribe(participant_id)
        logger.info("[session_ws] Participant %s disconnected", participant_id)
