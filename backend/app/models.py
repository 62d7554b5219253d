from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from models import Choice


class InputMessage(BaseModel):
    """Inbound websocket message: {"type": "input", "choice": "rock"}."""

    type: Literal["input"]
    choice: Choice


class SlotView(BaseModel):
    id: str
    choice: Choice | None = None


class SessionReadResponse(BaseModel):
    """Current session state for polling. GET /api/session."""

    model_config = ConfigDict(populate_by_name=True)

    slots: list[SlotView]
    result_message: str | None = Field(default=None, alias="resultMessage")
    winner: str | None = None
    capacity: int
    open_slots: int
