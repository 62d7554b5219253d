from .outcome import DRAW_MESSAGE, Outcome
from .session import SESSION_CAPACITY, Choice, SessionState, Slot

__all__ = [
    "Choice",
    "Slot",
    "SessionState",
    "SESSION_CAPACITY",
    "Outcome",
    "DRAW_MESSAGE",
]
