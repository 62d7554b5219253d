from models import SESSION_CAPACITY, Choice, Outcome, SessionState, Slot


def test_session_state_defaults() -> None:
    state = SessionState()
    assert state.slots == {}
    assert state.result_message is None
    assert state.winner is None
    assert state.snapshot() == {"slots": [], "resultMessage": None, "winner": None}


def test_snapshot_keeps_insertion_order_and_plain_values() -> None:
    state = SessionState()
    state.slots["b"] = Slot(participant_id="b", choice=Choice.PAPER)
    state.slots["a"] = Slot(participant_id="a")
    assert state.snapshot()["slots"] == [
        {"id": "b", "choice": "paper"},
        {"id": "a", "choice": None},
    ]


def test_both_chosen_requires_full_session() -> None:
    state = SessionState()
    state.slots["a"] = Slot(participant_id="a", choice=Choice.ROCK)
    assert SESSION_CAPACITY == 2
    assert state.both_chosen() is False
    state.slots["b"] = Slot(participant_id="b")
    assert state.both_chosen() is False
    state.slots["b"].choice = Choice.ROCK
    assert state.both_chosen() is True


def test_clear_round_keeps_slots() -> None:
    state = SessionState(result_message="rock wins against scissors", winner="a")
    state.slots["a"] = Slot(participant_id="a", choice=Choice.ROCK)
    state.clear_round()
    assert list(state.slots) == ["a"]
    assert state.slots["a"].choice is None
    assert state.result_message is None
    assert state.winner is None


def test_outcome_draw_flag() -> None:
    assert Outcome(message="Draw", winner_index=None).is_draw
    assert not Outcome(message="rock wins against scissors", winner_index=0).is_draw
