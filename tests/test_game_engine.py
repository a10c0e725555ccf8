"""Game engine tests against a real SQLite store."""

from __future__ import annotations

import pytest

from conftest import run, win_game
from pig_server.dice import DiceRoller
from pig_server.domain.pig_rules import MAX_POINTS
from pig_server.errors import GameOver, InvalidInput, NoSession
from pig_server.models.dc_models import SessionFieldModel, SessionModel


def test_roll_then_hold_banks_points(game_engine) -> None:
    run(game_engine.roll_with_face("alice", 3))
    run(game_engine.roll_with_face("alice", 4))
    state = run(game_engine.hold("alice"))

    assert state.total_score == 7
    assert state.turn_score == 0
    assert state.turn == 1
    assert state.round == 2
    assert state.last_roll == 0
    assert not state.game_over


def test_bust_loses_the_turn(game_engine) -> None:
    run(game_engine.roll_with_face("alice", 3))
    run(game_engine.roll_with_face("alice", 4))
    state = run(game_engine.roll_with_face("alice", 1))

    assert state.turn_score == 0
    assert state.last_roll == 1
    assert state.turn == 1
    assert state.round == 3
    assert state.total_score == 0


def test_reaching_target_ends_the_game(game_engine) -> None:
    for _ in range(8):
        run(game_engine.roll_with_face("alice", 6))
    state = run(game_engine.roll_with_face("alice", 2))
    assert state.turn_score == 50
    assert not state.game_over

    state = run(game_engine.hold("alice"))

    assert state.total_score == 50
    assert state.game_over
    assert state.turn_score == 0


def test_hold_without_session_fails_but_roll_creates_one(game_engine, store) -> None:
    with pytest.raises(NoSession):
        run(game_engine.hold("fresh"))
    assert not run(store.exists("fresh"))

    state = run(game_engine.roll_with_face("fresh", 5))

    assert run(store.exists("fresh"))
    assert state == SessionModel(turn_score=5, last_roll=5, round=1)


def test_reset_requires_session(game_engine) -> None:
    with pytest.raises(NoSession):
        run(game_engine.reset("nobody"))


def test_hold_with_nothing_at_risk_still_ends_turn(game_engine) -> None:
    run(game_engine.roll_with_face("alice", 1))
    state = run(game_engine.hold("alice"))

    assert state.total_score == 0
    assert state.turn == 2
    assert state.last_roll == 0


def test_invalid_face_leaves_no_trace(game_engine, store) -> None:
    with pytest.raises(InvalidInput):
        run(game_engine.roll_with_face("alice", 7))
    assert not run(store.exists("alice"))

    run(game_engine.roll_with_face("alice", 4))
    with pytest.raises(InvalidInput):
        run(game_engine.roll_with_face("alice", 0))
    assert run(store.get("alice")) == SessionModel(turn_score=4, last_roll=4, round=1)


def test_rejected_operations_after_win_leave_state_unchanged(game_engine, store) -> None:
    won = win_game(game_engine, "alice")

    with pytest.raises(GameOver):
        run(game_engine.roll_with_face("alice", 3))
    with pytest.raises(GameOver):
        run(game_engine.hold("alice"))
    with pytest.raises(GameOver):
        run(game_engine.roll("alice"))

    assert run(store.get("alice")) == won


def test_reset_is_legal_mid_game_and_idempotent(game_engine) -> None:
    run(game_engine.roll_with_face("alice", 6))
    run(game_engine.hold("alice"))
    run(game_engine.roll_with_face("alice", 5))

    once = run(game_engine.reset("alice"))
    twice = run(game_engine.reset("alice"))

    assert once == SessionModel()
    assert twice == once


def test_hold_with_points_skips_rolling(game_engine) -> None:
    state = run(game_engine.hold_with_points("bob", 30))
    assert state.total_score == 30
    assert state.turn == 1
    assert state.round == 0
    assert not state.game_over

    run(game_engine.roll_with_face("bob", 4))
    state = run(game_engine.hold_with_points("bob", 20))
    assert state.total_score == 54
    assert state.game_over

    with pytest.raises(GameOver):
        run(game_engine.hold_with_points("bob", 1))
    with pytest.raises(InvalidInput):
        run(game_engine.hold_with_points("carol", -3))


def test_random_rolls_stay_in_range(game_engine) -> None:
    faces = []
    for _ in range(40):
        state = run(game_engine.roll("alice"))
        faces.append(state.last_roll)
        assert 1 <= state.last_roll <= 6
    assert run(game_engine.round("alice")) == 40
    assert run(game_engine.turn("alice")) == faces.count(1)


def test_dice_roller_is_reproducible_with_a_seed() -> None:
    a = DiceRoller(seed=99)
    b = DiceRoller(seed=99)

    rolls = [a.roll() for _ in range(200)]
    assert rolls == [b.roll() for _ in range(200)]
    assert set(rolls) == {1, 2, 3, 4, 5, 6}
    assert all(type(face) is int for face in rolls)


def test_views_default_to_zero_for_unknown_identity(game_engine) -> None:
    assert run(game_engine.last_roll("ghost")) == 0
    assert run(game_engine.round("ghost")) == 0
    assert run(game_engine.turn("ghost")) == 0
    assert run(game_engine.turn_score("ghost")) == 0
    assert run(game_engine.total_score("ghost")) == 0
    assert run(game_engine.game_over("ghost")) is False
    assert run(game_engine.user_completions("ghost")) == 0
    assert run(game_engine.session_view("ghost")) == SessionModel()


def test_views_read_any_identity(game_engine) -> None:
    run(game_engine.roll_with_face("alice", 6))
    run(game_engine.roll_with_face("alice", 3))

    assert run(game_engine.read_field("alice", SessionFieldModel.turn_score)) == 9
    assert run(game_engine.last_roll("alice")) == 3
    assert run(game_engine.round("alice")) == 2
    assert run(game_engine.turn_score("bob")) == 0


def test_sessions_are_independent(game_engine) -> None:
    run(game_engine.roll_with_face("alice", 6))
    run(game_engine.roll_with_face("bob", 1))
    run(game_engine.hold("alice"))

    assert run(game_engine.total_score("alice")) == 6
    assert run(game_engine.total_score("bob")) == 0
    assert run(game_engine.turn("bob")) == 1


def test_hold_with_points_rejects_scores_the_store_cannot_hold(game_engine, store) -> None:
    with pytest.raises(InvalidInput):
        run(game_engine.hold_with_points("zed", MAX_POINTS + 1))
    assert not run(store.exists("zed"))

    state = run(game_engine.hold_with_points("zed", MAX_POINTS))
    assert state.total_score == MAX_POINTS
    assert state.game_over
