"""Rejections raised by game and statistics operations.

Every error is raised before anything is written, or inside the transaction
that would have written, so a rejected operation leaves the stored state as it was.
"""

from typing import Any


class PigError(Exception):
    """Base class for rejected game operations."""

    def __init__(self, identity: str | None, message: str):
        self.identity = identity
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {"type": self.__class__.__name__, "message": str(self), "identity": self.identity}


class InvalidInput(PigError):
    """Raised when a supplied dice face or point count is out of range."""


class NoSession(PigError):
    """Raised when a mutating operation other than roll targets an identity without a session."""

    def __init__(self, identity: str):
        super().__init__(identity, f"No session for {identity}")


class GameOver(PigError):
    """Raised when roll or hold is attempted after the game has been won."""

    def __init__(self, identity: str):
        super().__init__(identity, f"Game is over for {identity}; reset to play again")


class NotWon(PigError):
    """Raised when complete is attempted before the game has been won."""

    def __init__(self, identity: str):
        super().__init__(identity, f"Game has not been won yet by {identity}")


class AlreadyCompleted(PigError):
    """Raised when complete is attempted twice for the same win."""

    def __init__(self, identity: str):
        super().__init__(identity, f"Game already completed for {identity}; reset to play again")
