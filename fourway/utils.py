"""
utils.py - Constants and helper functions for the fourway engine

This module provides the default game dimensions, the direction vectors used
for win detection and a few grid helpers shared by the board and the adapters.
"""

from enum import Enum, auto
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np

# Game constants
DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 6
CONNECT_N = 4  # Number of aligned pieces needed to win
MAX_DIMENSION = 100  # Exclusive upper bound for width and height
EMPTY = 0  # Grid value of an empty cell

DEFAULT_PLAYERS = ("red", "gold")

Coord = Tuple[int, int]  # (column, row), row 0 at the bottom


class Direction(Enum):
    """Directions of the four rays checked for a win."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # bottom-left to top-right
    DIAGONAL_DOWN = auto()  # top-left to bottom-right


# Direction vectors (d_column, d_row) for each direction
DIRECTION_VECTORS: Dict[Direction, Coord] = {
    Direction.HORIZONTAL: (1, 0),
    Direction.VERTICAL: (0, 1),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (1, -1),
}


def is_valid_position(column: int, row: int, width: int, height: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        column: Column index
        row: Row index (0 is the bottom row)
        width: Board width
        height: Board height

    Returns:
        True if position is on the board, False otherwise
    """
    return 0 <= column < width and 0 <= row < height


def ray(column: int, row: int, direction: Direction, length: int = CONNECT_N) -> List[Coord]:
    """Coordinates of the ``length`` cells starting at (column, row) along ``direction``."""
    dc, dr = DIRECTION_VECTORS[direction]
    return [(column + i * dc, row + i * dr) for i in range(length)]


def render_board_ascii(grid: np.ndarray, symbols: Optional[Mapping[int, str]] = None) -> str:
    """
    Render a grid as ASCII art.

    Args:
        grid: Array of shape (height, width), row 0 is the bottom row
        symbols: Mapping of grid values to single characters. Values missing
            from the mapping are drawn as their number (modulo 10).

    Returns:
        ASCII representation, top row first, with column numbers underneath
    """
    height, width = grid.shape
    symbols = symbols or {}

    def symbol(value: int) -> str:
        if value == EMPTY:
            return " "
        return symbols.get(int(value), str(int(value) % 10))

    border = "|" + "-" * (width * 2 - 1) + "|"
    result = [border]
    for row in range(height - 1, -1, -1):
        result.append("|" + " ".join(symbol(v) for v in grid[row]) + "|")
    result.append(border)
    result.append("|" + " ".join(str(c % 10) for c in range(width)) + "|")

    return "\n".join(result)


def code_dtype(n_values: int) -> np.dtype:
    """Smallest signed integer dtype that holds every value in [0, n_values]."""
    for dtype in (np.int8, np.int16, np.int32):
        if n_values <= np.iinfo(dtype).max:
            return np.dtype(dtype)
    return np.dtype(np.int64)
