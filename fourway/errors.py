"""
errors.py - Exceptions raised by the fourway engine

Every error leaves the board and the session exactly as they were before
the failing call.
"""

from typing import Any, Optional

from fourway.utils import MAX_DIMENSION


class FourWayError(Exception):
    """Base exception for all engine errors."""

    pass


class InvalidIdentityError(FourWayError, ValueError):
    """Raised when a player identity is not a recognised colour."""

    def __init__(self, identity: Any, message: Optional[str] = None):
        self.identity = identity

        if message is None:
            message = f"Invalid player identity {identity!r}: expected a colour name, hex code or rgb() value."

        super().__init__(message)


class InvalidRosterError(FourWayError, ValueError):
    """Raised when a session is given an empty roster or duplicate identities."""

    pass


class InvalidDimensionError(FourWayError, ValueError):
    """Raised when a board width or height is not an integer in [1, MAX_DIMENSION)."""

    def __init__(self, name: str, value: Any, message: Optional[str] = None):
        self.name = name
        self.value = value

        if message is None:
            message = f"Board {name} must be an integer between 1 and {MAX_DIMENSION - 1}, got {value!r}."

        super().__init__(message)


class InvalidColumnError(FourWayError, ValueError):
    """Raised when a drop targets a column that is not on the board."""

    def __init__(self, column: Any, width: int, message: Optional[str] = None):
        self.column = column
        self.width = width

        if message is None:
            message = f"Column {column!r} out of range: expected 0 to {width - 1}."

        super().__init__(message)


class FullColumnError(FourWayError):
    """Raised when a drop targets a column with no empty cell."""

    def __init__(self, column: int, message: Optional[str] = None):
        self.column = column

        if message is None:
            message = f"Column {column} is full."

        super().__init__(message)


class GameAlreadyOverError(FourWayError):
    """Raised when a move is attempted after the game has been won or tied."""

    def __init__(self, status: Any, message: Optional[str] = None):
        self.status = status

        if message is None:
            message = f"Game is already over ({status}); reset to play again."

        super().__init__(message)
