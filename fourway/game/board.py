"""
board.py - Board representation and win detection for the fourway engine

This module implements the Board class: a fixed-size grid that pieces are
dropped into, column by column, with gravity settling each piece into the
lowest empty row. The board knows nothing about players or turns; each
piece is marked with an opaque occupant value chosen by the caller.

Coordinates are (column, row) with row 0 at the bottom of the board.
"""

import math
import numbers
from typing import Dict, Hashable, List, Mapping, Optional, Sequence

import numpy as np

from fourway.debug import debug
from fourway.errors import FullColumnError, InvalidColumnError, InvalidDimensionError
from fourway.utils import (CONNECT_N, DEFAULT_HEIGHT, DEFAULT_WIDTH, DIRECTION_VECTORS,
                           EMPTY, MAX_DIMENSION, Coord, Direction, is_valid_position,
                           code_dtype, ray, render_board_ascii)


def _validate_dimension(name: str, value) -> int:
    if isinstance(value, bool):
        raise InvalidDimensionError(name, value)

    if isinstance(value, numbers.Integral):
        size = int(value)
    elif isinstance(value, numbers.Real) and math.isfinite(value) and float(value).is_integer():
        size = int(value)
    else:
        raise InvalidDimensionError(name, value)

    if not 0 < size < MAX_DIMENSION:
        raise InvalidDimensionError(name, value)

    return size


class Board:
    """
    A connect-four grid of ``width`` columns and ``height`` rows.

    Occupants are interned to small positive integer codes so the grid can
    be kept as a numpy array; 0 marks an empty cell.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        """
        Create an empty board.

        Raises:
            InvalidDimensionError: If width or height is not an integer in [1, 100)
        """
        self._width = _validate_dimension("width", width)
        self._height = _validate_dimension("height", height)
        debug.debug(f"Initializing new {self._width}x{self._height} Board", "board")
        self.reset()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def reset(self) -> None:
        """Empty every cell, keeping the dimensions."""
        debug.debug("Resetting board", "board")
        self.grid = np.zeros((self._height, self._width), dtype=np.int16)
        self._codes: Dict[Hashable, int] = {}
        self._occupants: Dict[int, Hashable] = {}

    def _code(self, occupant: Hashable, create: bool = False) -> Optional[int]:
        code = self._codes.get(occupant)
        if code is None and create:
            code = len(self._codes) + 1
            self._codes[occupant] = code
            self._occupants[code] = occupant
        return code

    def _check_column(self, column) -> int:
        if isinstance(column, bool) or not isinstance(column, numbers.Integral):
            raise InvalidColumnError(column, self._width)
        if not 0 <= column < self._width:
            raise InvalidColumnError(column, self._width)
        return int(column)

    def column_height(self, column: int) -> int:
        """Number of pieces already stacked in ``column``."""
        c = self._check_column(column)
        return int(np.count_nonzero(self.grid[:, c]))

    def is_column_full(self, column: int) -> bool:
        return self.column_height(column) == self._height

    def valid_columns(self) -> List[int]:
        """Columns that can still take a piece."""
        return [int(c) for c in np.flatnonzero(self.grid[-1] == EMPTY)]

    def is_full(self) -> bool:
        """True iff every cell is occupied."""
        return bool(np.all(self.grid != EMPTY))

    def cell(self, column: int, row: int) -> Optional[Hashable]:
        """
        Get the occupant of a cell.

        Returns:
            The occupant value, or None for an empty cell
        """
        if not is_valid_position(column, row, self._width, self._height):
            raise IndexError(f"Cell ({column}, {row}) is off the board")
        return self._occupants.get(int(self.grid[row, column]))

    def drop_piece(self, column: int, occupant: Hashable) -> int:
        """
        Drop a piece into a column; it settles in the lowest empty row.

        Args:
            column: Column to drop into (0-indexed)
            occupant: Value to mark the cell with

        Returns:
            The row the piece landed in (0 is the bottom row)

        Raises:
            InvalidColumnError: If the column is not on the board
            FullColumnError: If the column has no empty cell
        """
        c = self._check_column(column)
        if occupant is None:
            raise ValueError("Occupant must not be None")

        for row in range(self._height):
            if self.grid[row, c] == EMPTY:
                self.grid[row, c] = self._code(occupant, create=True)
                debug.trace(f"Placed {occupant!r} at ({c}, {row})", "board")
                return row

        debug.debug(f"Rejected drop: column {c} is full", "board")
        raise FullColumnError(c)

    def _ray_matches(self, code: int, column: int, row: int, direction: Direction) -> bool:
        for c, r in ray(column, row, direction):
            if not is_valid_position(c, r, self._width, self._height) or self.grid[r, c] != code:
                return False
        return True

    def winning_line(self, occupant: Hashable) -> List[Coord]:
        """
        Find a four-in-a-row of ``occupant`` anywhere on the board.

        Every cell is tried as the start of a horizontal, vertical and both
        diagonal rays.

        Returns:
            The four (column, row) cells of the first line found, or an empty list
        """
        code = self._code(occupant)
        if code is None:
            return []

        for row in range(self._height):
            for column in range(self._width):
                if self.grid[row, column] != code:
                    continue
                for direction in Direction:
                    if self._ray_matches(code, column, row, direction):
                        return ray(column, row, direction)

        return []

    def has_winning_line_through(self, occupant: Hashable) -> bool:
        """True iff ``occupant`` has four aligned pieces somewhere on the board."""
        return bool(self.winning_line(occupant))

    def is_winning_placement(self, column: int, row: int) -> bool:
        """
        Check whether the piece at (column, row) is part of a four-in-a-row.

        Only the lines through this one cell are examined, which is all that
        needs checking right after a piece is placed.
        """
        code = int(self.grid[row, column])
        if code == EMPTY:
            return False

        for dc, dr in DIRECTION_VECTORS.values():
            count = 1

            c, r = column + dc, row + dr
            while is_valid_position(c, r, self._width, self._height) and self.grid[r, c] == code:
                count += 1
                c += dc
                r += dr

            c, r = column - dc, row - dr
            while is_valid_position(c, r, self._width, self._height) and self.grid[r, c] == code:
                count += 1
                c -= dc
                r -= dr

            if count >= CONNECT_N:
                return True

        return False

    def encode(self, occupants: Sequence[Hashable]) -> np.ndarray:
        """
        Get the grid with occupants numbered by their position in ``occupants``.

        Returns:
            Array of shape (height, width) in the smallest signed dtype that
            holds ``len(occupants)``; ``occupants[k]`` is written as ``k + 1``
            and empty cells as 0
        """
        lookup = np.zeros(len(self._codes) + 1, dtype=code_dtype(len(occupants)))
        for index, occupant in enumerate(occupants):
            code = self._code(occupant)
            if code is not None:
                lookup[code] = index + 1
        return lookup[self.grid]

    def render(self, symbols: Optional[Mapping[Hashable, str]] = None) -> str:
        """
        Render the board as a string.

        Args:
            symbols: Character to draw for each occupant
        """
        code_symbols = {}
        for occupant, code in self._codes.items():
            if symbols and occupant in symbols:
                code_symbols[code] = symbols[occupant]
        return render_board_ascii(self.grid, code_symbols)

    def __str__(self) -> str:
        return self.render()
