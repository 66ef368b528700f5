from __future__ import annotations

from enum import Enum
from typing import Tuple

from .errors import InvalidDirectionError

Coord = Tuple[int, int]  # (col, row), (0, 0) is the lower-left corner


class Direction(Enum):
    """A tilt direction and the rotation that makes it point "up".

    Each member carries (col0, row0, dcol, drow): the board corner that the
    canonical frame's origin lands on, and the board step taken by one canonical
    row. Viewing the board from a direction means canonical row size-1 is the
    edge the tiles slide toward.
    """
    UP = (0, 0, 0, 1)
    RIGHT = (0, 1, 1, 0)
    DOWN = (1, 1, 0, -1)
    LEFT = (1, 0, -1, 0)

    def __init__(self, col0: int, row0: int, dcol: int, drow: int) -> None:
        self.col0 = col0
        self.row0 = row0
        self.dcol = dcol
        self.drow = drow

    def to_board(self, col: int, row: int, size: int) -> Coord:
        """Maps a canonical-frame (col, row) to the board cell it names."""
        last = size - 1
        return (
            self.col0 * last + col * self.drow + row * self.dcol,
            self.row0 * last - col * self.dcol + row * self.drow,
        )

    def from_board(self, col: int, row: int, size: int) -> Coord:
        """Inverse of to_board."""
        last = size - 1
        c = col - self.col0 * last
        r = row - self.row0 * last
        # The rotation matrix is orthonormal, so its inverse is its transpose.
        return (
            c * self.drow - r * self.dcol,
            c * self.dcol + r * self.drow,
        )

    @classmethod
    def parse(cls, value: object) -> 'Direction':
        """Accepts a Direction, a member name or a single-letter/compass alias."""
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            found = _ALIASES.get(key)
            if found is not None:
                return found
        raise InvalidDirectionError(f'Invalid direction: {value!r}')


_ALIASES = {
    'UP': Direction.UP, 'U': Direction.UP, 'NORTH': Direction.UP, 'N': Direction.UP,
    'DOWN': Direction.DOWN, 'D': Direction.DOWN, 'SOUTH': Direction.DOWN, 'S': Direction.DOWN,
    'LEFT': Direction.LEFT, 'L': Direction.LEFT, 'WEST': Direction.LEFT, 'W': Direction.LEFT,
    'RIGHT': Direction.RIGHT, 'R': Direction.RIGHT, 'EAST': Direction.RIGHT, 'E': Direction.RIGHT,
}
