from dataclasses import dataclass, field
from enum import Enum
from typing import Any

SESSION_CAPACITY = 2


class Choice(str, Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


@dataclass
class Slot:
    participant_id: str
    choice: Choice | None = None


@dataclass
class SessionState:
    # dict keeps insertion order, which is the slot order used for resolution
    slots: dict[str, Slot] = field(default_factory=dict)
    result_message: str | None = None
    winner: str | None = None

    def both_chosen(self) -> bool:
        return len(self.slots) == SESSION_CAPACITY and all(
            slot.choice is not None for slot in self.slots.values()
        )

    def clear_round(self) -> None:
        for slot in self.slots.values():
            slot.choice = None
        self.result_message = None
        self.winner = None

    def snapshot(self) -> dict[str, Any]:
        """Wire-shaped copy of the state: slots, resultMessage, winner."""
        return {
            "slots": [
                {
                    "id": slot.participant_id,
                    "choice": slot.choice.value if slot.choice is not None else None,
                }
                for slot in self.slots.values()
            ],
            "resultMessage": self.result_message,
            "winner": self.winner,
        }
