"""
fourway.game - Core game mechanics

This package contains the board representation, player identities and the
game session state machine.
"""

from fourway.game.board import Board
from fourway.game.player import Player
from fourway.game.rules import GameSession, GameStatus, MoveOutcome

__all__ = ['Board', 'Player', 'GameSession', 'GameStatus', 'MoveOutcome']
