from .errors import CapacityExceeded, InvalidChoice, SessionError
from .round_resolver import resolve
from .session_registry import SessionRegistry, session_registry
from .state_hub import StateHub, state_hub

__all__ = [
    "SessionError",
    "CapacityExceeded",
    "InvalidChoice",
    "resolve",
    "SessionRegistry",
    "session_registry",
    "StateHub",
    "state_hub",
]
