"""
rules.py - Game session state machine for the fourway engine

This module provides GameSession, which owns a Board and an ordered roster of
players and drives each move through drop, win check, tie check and turn
rotation. All state lives on the session instance.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

from fourway.debug import debug
from fourway.errors import FullColumnError, GameAlreadyOverError
from fourway.game.board import Board
from fourway.game.player import Player, make_roster
from fourway.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, Coord


class GameStatus(Enum):
    """Lifecycle state of a session."""
    IN_PROGRESS = auto()
    WON = auto()
    TIED = auto()

    def is_game_over(self) -> bool:
        return self != GameStatus.IN_PROGRESS


@dataclass(frozen=True)
class MoveOutcome:
    """
    Result of one apply_move call.

    A rejected move (full column) has ``accepted`` False, ``row`` None and a
    ``reason``; the session is unchanged in that case.
    """
    status: GameStatus
    column: int
    row: Optional[int]
    player: Player
    winner: Optional[str] = None
    accepted: bool = True
    reason: Optional[str] = None

    @property
    def placed_at(self) -> Optional[Coord]:
        """(column, row) of the placed piece, or None if the move was rejected."""
        if self.row is None:
            return None
        return (self.column, self.row)


class GameSession:
    """
    A single game between an ordered roster of players.

    The first player in the roster moves first; turns rotate in roster order
    after every move that does not end the game.
    """

    def __init__(self, players: Iterable, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        """
        Start a new game.

        Args:
            players: Player instances or colour strings, in turn order
            width: Number of columns
            height: Number of rows

        Raises:
            InvalidIdentityError: If a colour string is not valid
            InvalidRosterError: If the roster is empty or has duplicate identities
            InvalidDimensionError: If width or height is out of range
        """
        self._players = make_roster(players)
        self.board = Board(width, height)
        debug.debug(f"Initializing GameSession with {len(self._players)} players", "session")
        self._start()

    @classmethod
    def from_identities(cls, identities: Iterable[str], width: int = DEFAULT_WIDTH,
                        height: int = DEFAULT_HEIGHT) -> "GameSession":
        """Create a session from colour strings."""
        return cls([Player(identity) for identity in identities], width, height)

    def _start(self) -> None:
        self._active_index = 0
        self._status = GameStatus.IN_PROGRESS
        self._winner: Optional[Player] = None
        self._moves_played = 0
        self._last_placement: Optional[Coord] = None

    @property
    def players(self) -> Tuple[Player, ...]:
        return self._players

    @property
    def active_player_index(self) -> int:
        return self._active_index

    @property
    def active_player(self) -> Player:
        return self._players[self._active_index]

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def winner(self) -> Optional[str]:
        """Identity of the winning player, or None."""
        return self._winner.identity if self._winner else None

    @property
    def winning_player(self) -> Optional[Player]:
        return self._winner

    @property
    def is_over(self) -> bool:
        return self._status.is_game_over()

    @property
    def moves_played(self) -> int:
        return self._moves_played

    @property
    def last_placement(self) -> Optional[Coord]:
        return self._last_placement

    def valid_columns(self) -> List[int]:
        """Columns a move can be made in; empty once the game is over."""
        if self.is_over:
            return []
        return self.board.valid_columns()

    def winning_line(self) -> List[Coord]:
        """The winner's four aligned cells, or an empty list."""
        if self._winner is None:
            return []
        return self.board.winning_line(self._winner.identity)

    def apply_move(self, column: int) -> MoveOutcome:
        """
        Drop the active player's piece into ``column``.

        Args:
            column: Column to play (0-indexed)

        Returns:
            MoveOutcome with the resulting status and the placement

        Raises:
            GameAlreadyOverError: If the game has already been won or tied
            InvalidColumnError: If the column is not on the board
        """
        if self.is_over:
            debug.debug(f"Move in column {column} refused: game is over", "session")
            raise GameAlreadyOverError(self._status)

        player = self.active_player
        debug.debug(f"Player {player} plays column {column}", "session")

        try:
            row = self.board.drop_piece(column, player.identity)
        except FullColumnError as e:
            return MoveOutcome(self._status, int(column), None, player,
                               accepted=False, reason=str(e))

        self._moves_played += 1
        self._last_placement = (int(column), row)

        # Win is checked before the tie so a board-filling winner still wins
        debug.start_timer("win_check")
        won = self.board.is_winning_placement(int(column), row)
        debug.end_timer("win_check", "session")

        if won:
            self._status = GameStatus.WON
            self._winner = player
            debug.info(f"Player {player} wins after move at ({column}, {row})", "session")
        elif self.board.is_full():
            self._status = GameStatus.TIED
            debug.info("Game ends in a tie", "session")
        else:
            self._active_index = (self._active_index + 1) % len(self._players)
            debug.trace(f"Switching to player {self.active_player}", "session")

        return MoveOutcome(self._status, int(column), row, player, winner=self.winner)

    def reset(self) -> None:
        """Start over with an empty board and the same roster."""
        debug.debug("Resetting game session", "session")
        self.board = Board(self.board.width, self.board.height)
        self._start()

    def symbols(self) -> dict:
        """One display character per player, from the first letter of its label."""
        result = {}
        for index, player in enumerate(self._players):
            letter = player.label.lstrip("#")[:1].upper()
            if not letter.isalpha() or letter in result.values():
                letter = str((index + 1) % 10)
            result[player.identity] = letter
        return result

    def render(self) -> str:
        return self.board.render(self.symbols())

    def __str__(self) -> str:
        return self.render()
