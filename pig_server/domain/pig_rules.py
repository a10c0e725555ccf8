"""Pig rules that are independent from HTTP and DB.

Every transition takes the current session and returns the next one; the
caller decides where the session comes from and where it goes.

Rule of thumb:
- OK: validation, counters, win check.
- Not OK: touching DB sessions, FastAPI, random number generators.
"""

from pig_server.errors import GameOver, InvalidInput, NotWon, AlreadyCompleted
from pig_server.models.dc_models import SessionModel

TARGET_SCORE = 50
BUST_FACE = 1
MIN_FACE = 1
MAX_FACE = 6
# Largest score a BigInteger column holds
MAX_POINTS = 2**63 - 1


def validate_face(identity: str, face: int) -> int:
    """Reject anything that is not a die face in [1, 6]."""
    if isinstance(face, bool) or not isinstance(face, int):
        raise InvalidInput(identity, f"Dice face must be an integer, got {face!r}")
    if face < MIN_FACE or face > MAX_FACE:
        raise InvalidInput(identity, f"Dice face must be between {MIN_FACE} and {MAX_FACE}, got {face}")
    return face


def validate_points(identity: str, points: int) -> int:
    if isinstance(points, bool) or not isinstance(points, int) or points < 0:
        raise InvalidInput(identity, f"Points must be a non-negative integer, got {points!r}")
    if points > MAX_POINTS:
        raise InvalidInput(identity, f"Points must not exceed {MAX_POINTS}, got {points}")
    return points


def ensure_playable(identity: str, session: SessionModel) -> None:
    if session.game_over:
        raise GameOver(identity)


def is_won(total_score: int) -> bool:
    # Overshooting the target is allowed; the margin is kept as is.
    return total_score >= TARGET_SCORE


def apply_roll(identity: str, session: SessionModel, face: int) -> SessionModel:
    """Add one die face to the current turn.

    A 1 is a bust: the turn's points are lost and the turn ends.
    Winning is never evaluated here, only on hold.
    """
    validate_face(identity, face)
    ensure_playable(identity, session)

    if face == BUST_FACE:
        return session.model_copy(
            update={
                "turn_score": 0,
                "last_roll": BUST_FACE,
                "round": session.round + 1,
                "turn": session.turn + 1,
            }
        )
    return session.model_copy(
        update={
            "turn_score": session.turn_score + face,
            "last_roll": face,
            "round": session.round + 1,
        }
    )


def apply_hold(identity: str, session: SessionModel) -> SessionModel:
    """Bank the turn's points and end the turn.

    Holding with no points at risk is valid and still ends the turn.
    """
    ensure_playable(identity, session)

    total_score = session.total_score + session.turn_score
    return session.model_copy(
        update={
            "total_score": total_score,
            "turn_score": 0,
            "last_roll": 0,
            "turn": session.turn + 1,
            "game_over": is_won(total_score),
        }
    )


def apply_bonus_points(identity: str, session: SessionModel, points: int) -> SessionModel:
    """Put points at risk without rolling for them."""
    validate_points(identity, points)
    ensure_playable(identity, session)
    turn_score = session.turn_score + points
    if session.total_score + turn_score > MAX_POINTS:
        raise InvalidInput(identity, f"Banking {points} more points would exceed {MAX_POINTS}")
    return session.model_copy(update={"turn_score": turn_score})


def apply_complete(identity: str, session: SessionModel) -> SessionModel:
    """Count a won game for its owner. The session stays over until reset."""
    if not session.game_over:
        raise NotWon(identity)
    if session.completed:
        raise AlreadyCompleted(identity)
    return session.model_copy(
        update={"games_played": session.games_played + 1, "completed": True}
    )


def apply_reset(session: SessionModel) -> SessionModel:
    """Start over. Lifetime games_played survives."""
    return SessionModel(games_played=session.games_played)
