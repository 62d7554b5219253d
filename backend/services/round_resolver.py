"""Rock/paper/scissors round resolution. Pure functions, no session access."""

from __future__ import annotations

from typing import Any

from models import DRAW_MESSAGE, Choice, Outcome
from services.errors import InvalidChoice

# winner -> the choice it beats
BEATS: dict[Choice, Choice] = {
    Choice.ROCK: Choice.SCISSORS,
    Choice.SCISSORS: Choice.PAPER,
    Choice.PAPER: Choice.ROCK,
}


def coerce_choice(value: Any) -> Choice:
    """Return `value` as a Choice, raising InvalidChoice for anything else."""
    if isinstance(value, Choice):
        return value
    try:
        return Choice(value)
    except ValueError:
        raise InvalidChoice(value) from None


def beats(a: Any, b: Any) -> bool:
    return BEATS[coerce_choice(a)] is coerce_choice(b)


def resolve(choice_a: Any, choice_b: Any) -> Outcome:
    """
    Resolve one round between side A (index 0) and side B (index 1).

    Equal choices are a draw; otherwise the message reads
    "<winning choice> wins against <losing choice>".
    """
    a = coerce_choice(choice_a)
    b = coerce_choice(choice_b)
    if a is b:
        return Outcome(message=DRAW_MESSAGE, winner_index=None)
    if BEATS[a] is b:
        return Outcome(message=f"{a.value} wins against {b.value}", winner_index=0)
    return Outcome(message=f"{b.value} wins against {a.value}", winner_index=1)
