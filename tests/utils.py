"""
Helpers shared by the fourway tests.
"""


def play(board, moves):
    """Drop (column, occupant) pairs in order; returns the landing rows."""
    return [board.drop_piece(column, occupant) for column, occupant in moves]


def alternate(columns, occupants=("A", "B")):
    """Pair each column with occupants taken in rotation."""
    return [(column, occupants[i % len(occupants)]) for i, column in enumerate(columns)]
