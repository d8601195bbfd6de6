"""
fourway - Connect-four game engine for any number of players

This package provides the board model, win detection and the turn/lifecycle
state machine of a connect-four game, plus a Gymnasium environment and a
terminal front end built on top of them.
"""

# Version number
__version__ = '0.1.0'
