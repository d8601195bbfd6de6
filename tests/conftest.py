"""
Pytest configuration and shared fixtures for fourway tests.
"""

import pytest

from fourway.game.board import Board
from fourway.game.rules import GameSession


@pytest.fixture
def board():
    """A classic empty 7x6 board."""
    return Board()


@pytest.fixture
def session():
    """A two-player game on the classic board."""
    return GameSession(["red", "gold"])


@pytest.fixture
def three_player_session():
    """A three-player game on a wider board."""
    return GameSession(["red", "gold", "#00f"], width=9, height=7)
