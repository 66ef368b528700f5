from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidTileError, MalformedGridError, TileCollisionError
from .orientation import Coord, Direction

RawValue = Optional[int]  # 0 or None means an empty cell


@dataclass(frozen=True)
class Tile:
    """A numbered tile at a board position (col, row). The value is always a positive power of two."""
    value: int
    col: int
    row: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidTileError(f'Tile value must be an int, got {self.value!r}')
        if self.value <= 0 or self.value & (self.value - 1):
            raise InvalidTileError(f'Tile value must be a positive power of two, got {self.value}')

    @classmethod
    def create(cls, value: int, col: int, row: int) -> 'Tile':
        """Builds a tile, rejecting values that are not positive powers of two."""
        return cls(value, col, row)

    def moved_to(self, col: int, row: int) -> 'Tile':
        return Tile(self.value, col, row)

    def merged_at(self, col: int, row: int) -> 'Tile':
        """The tile produced by merging this tile with an equal one at (col, row)."""
        return Tile(self.value * 2, col, row)


class Board:
    """An N x N grid of optional tiles with a switchable viewing perspective.

    Storage is always in board coordinates. All accessors that take a
    (col, row) interpret it in the current perspective, so a tilt toward any
    side can be written as a tilt toward the top.
    """

    def __init__(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, int) or size < 2:
            raise MalformedGridError(f'Board size must be an int >= 2, got {size!r}')
        self._size = size
        self._cells: List[List[Optional[Tile]]] = [[None] * size for _ in range(size)]
        self._perspective = Direction.UP

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[RawValue]]) -> 'Board':
        """Builds a board from raw values listed top row first, as they appear on screen."""
        size = len(rows)
        if size < 2:
            raise MalformedGridError(f'Board must have at least 2 rows, got {size}')
        for r in rows:
            if len(r) != size:
                raise MalformedGridError(f'Board must be square: expected {size} columns, got {len(r)}')
        board = cls(size)
        for screen_row, values in enumerate(rows):
            row = size - 1 - screen_row
            for col, value in enumerate(values):
                if value:
                    board.add_tile(Tile.create(value, col, row))
        return board

    @property
    def size(self) -> int:
        return self._size

    @property
    def perspective(self) -> Direction:
        return self._perspective

    def set_viewing_perspective(self, direction: Direction) -> None:
        self._perspective = Direction.parse(direction)

    @contextmanager
    def viewing(self, direction: Direction) -> Iterator['Board']:
        """Views the board from DIRECTION for the duration of the block, then resets to UP."""
        self.set_viewing_perspective(direction)
        try:
            yield self
        finally:
            self._perspective = Direction.UP

    def _board_coord(self, col: int, row: int) -> Coord:
        if not (0 <= col < self._size and 0 <= row < self._size):
            raise IndexError(f'({col}, {row}) is off a {self._size}x{self._size} board')
        return self._perspective.to_board(col, row, self._size)

    def tile(self, col: int, row: int) -> Optional[Tile]:
        """Returns the tile at (col, row) in the current perspective, or None."""
        bc, br = self._board_coord(col, row)
        return self._cells[bc][br]

    def add_tile(self, tile: Tile) -> None:
        """Places TILE at its own (board) position. The cell must be empty."""
        if not (0 <= tile.col < self._size and 0 <= tile.row < self._size):
            raise TileCollisionError(f'Tile position ({tile.col}, {tile.row}) is off the board')
        if self._cells[tile.col][tile.row] is not None:
            raise TileCollisionError(f'Cell ({tile.col}, {tile.row}) is already occupied')
        self._cells[tile.col][tile.row] = tile

    def remove(self, col: int, row: int) -> Optional[Tile]:
        """Removes and returns the tile at (col, row) in the current perspective."""
        bc, br = self._board_coord(col, row)
        tile = self._cells[bc][br]
        self._cells[bc][br] = None
        return tile

    def move(self, col: int, row: int, tile: Tile) -> Tile:
        """Slides TILE (already on the board) to the empty cell (col, row)."""
        bc, br = self._board_coord(col, row)
        if self._cells[bc][br] is not None:
            raise TileCollisionError(f'Cell ({bc}, {br}) is already occupied')
        self._cells[tile.col][tile.row] = None
        moved = tile.moved_to(bc, br)
        self._cells[bc][br] = moved
        return moved

    def merge(self, col: int, row: int, tile: Tile) -> Tile:
        """Merges TILE into the equal tile at (col, row); returns the doubled tile."""
        bc, br = self._board_coord(col, row)
        target = self._cells[bc][br]
        if target is None or target.value != tile.value:
            raise ValueError(f'Cannot merge {tile} into {target}')
        self._cells[tile.col][tile.row] = None
        merged = target.merged_at(bc, br)
        self._cells[bc][br] = merged
        return merged

    def clear(self) -> None:
        for col in range(self._size):
            for row in range(self._size):
                self._cells[col][row] = None

    def tiles(self) -> Iterable[Tile]:
        """Iterates over every live tile, column by column in board coordinates."""
        for column in self._cells:
            for tile in column:
                if tile is not None:
                    yield tile

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """Tile values by [col][row] in board coordinates, 0 for empty."""
        return tuple(tuple(t.value if t is not None else 0 for t in column) for column in self._cells)

    def rows(self) -> List[List[int]]:
        """Raw values listed top row first, 0 for empty; the inverse of from_rows."""
        n = self._size
        return [
            [self._cells[col][row].value if self._cells[col][row] is not None else 0 for col in range(n)]
            for row in range(n - 1, -1, -1)
        ]

    def pretty(self) -> str:
        """Row-major rendering, top row first, 4-character cells."""
        lines: List[str] = []
        n = self._size
        for row in range(n - 1, -1, -1):
            cells: List[str] = []
            for col in range(n):
                t = self._cells[col][row]
                cells.append('|    ' if t is None else f'|{t.value:4d}')
            lines.append(''.join(cells) + '|')
        return '\n'.join(lines)
