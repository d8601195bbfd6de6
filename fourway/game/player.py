"""
player.py - Player identities for the fourway engine

A player is nothing more than a validated, immutable colour identity. The
order of players in a session's roster is the turn order.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from fourway.debug import debug
from fourway.errors import InvalidIdentityError, InvalidRosterError
from fourway.game.colors import NAMED_COLORS, RGB, is_color, normalize_color, parse_color


@dataclass(frozen=True)
class Player:
    """
    A participant in a game, identified by a colour.

    The identity is normalised on construction so that ``Player("Red")`` and
    ``Player("red")`` compare equal. Equality is by identity string; rosters
    additionally reject distinct spellings of the same colour.
    """

    identity: str

    def __post_init__(self):
        if not is_color(self.identity):
            debug.debug(f"Rejected player identity {self.identity!r}", "session")
            raise InvalidIdentityError(self.identity)

        # frozen dataclass: bypass __setattr__ to store the normalised value
        object.__setattr__(self, "identity", normalize_color(self.identity))

    @property
    def rgb(self) -> RGB:
        """The identity as an (r, g, b) triple."""
        return parse_color(self.identity)

    @property
    def label(self) -> str:
        """Name used in messages: the colour name if it has one, else the identity."""
        if self.identity in NAMED_COLORS:
            return self.identity.capitalize()
        return self.identity

    def __str__(self) -> str:
        return self.identity


def make_roster(players: Iterable) -> Tuple[Player, ...]:
    """
    Build an ordered roster from players or identity strings.

    Two players whose colours resolve to the same (r, g, b) value are
    duplicates even when written differently, e.g. "red", "#f00" and
    "rgb(255, 0, 0)"; alpha is ignored.

    Args:
        players: Player instances or colour strings, in turn order

    Returns:
        Tuple of players

    Raises:
        InvalidIdentityError: If a string is not a valid colour
        InvalidRosterError: If the roster is empty or repeats a colour
    """
    roster: List[Player] = [p if isinstance(p, Player) else Player(p) for p in players]

    if not roster:
        raise InvalidRosterError("A game needs at least one player.")

    seen = {}
    for player in roster:
        if player.rgb in seen:
            raise InvalidRosterError(
                f"Duplicate player colour {player.identity!r} (same as {seen[player.rgb]!r}).")
        seen[player.rgb] = player.identity

    if len(roster) < 2:
        debug.warning("Session created with a single player", "session")

    return tuple(roster)
