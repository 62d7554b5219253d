"""Session errors raised by the registry and resolver; the websocket route handles them."""

from typing import Any


class SessionError(Exception):
    """Base class for session errors."""


class CapacityExceeded(SessionError):
    """A join arrived while every slot is taken."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        super().__init__(f"Session is full ({capacity} participants)")


class InvalidChoice(SessionError, ValueError):
    """A choice outside rock/paper/scissors reached the core."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid choice: {value!r}")
