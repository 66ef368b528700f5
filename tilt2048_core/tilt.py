from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .board import Board
from .config import debug, debug_enabled
from .errors import InvalidDirectionError
from .orientation import Direction

MergeMarks = List[List[bool]]  # [col][row] in the canonical frame


@dataclass(frozen=True)
class TiltResult:
    """Outcome of one tilt: whether the board changed and the points it earned."""
    changed: bool
    score_delta: int


def new_merge_marks(size: int) -> MergeMarks:
    """Fresh per-tilt table of which cells hold a tile produced by a merge."""
    return [[False] * size for _ in range(size)]


def compact_lane(board: Board, col: int) -> None:
    """Slides every tile in column COL toward the top, closing gaps. Never merges."""
    for row in range(board.size - 1, 0, -1):
        if board.tile(col, row) is not None:
            continue
        for below in range(row - 1, -1, -1):
            t = board.tile(col, below)
            if t is not None:
                board.move(col, row, t)
                break


def merge_lane(board: Board, col: int, marks: MergeMarks) -> int:
    """Merges equal neighbours in compacted column COL, scanning from the top.

    The pair nearest the top wins, so a run of three leaves the bottom tile
    alone and a run of four becomes two merged tiles. A marked tile never
    merges again in the same tilt. Returns the points earned.
    """
    points = 0
    row = board.size - 1
    while row > 0:
        lead = board.tile(col, row)
        trail = board.tile(col, row - 1)
        if (
            lead is not None
            and trail is not None
            and lead.value == trail.value
            and not marks[col][row]
            and not marks[col][row - 1]
        ):
            merged = board.merge(col, row, trail)
            marks[col][row] = True
            points += merged.value
            # The trailing cell is consumed; resume below it.
            row -= 2
        else:
            row -= 1
    return points


def tilt(board: Board, direction: Direction) -> TiltResult:
    """Tilts BOARD toward DIRECTION in place.

    Every lane is compacted, merged and compacted again in a frame where the
    motion is upward; the board is always returned to the default perspective.
    """
    if not isinstance(direction, Direction):
        raise InvalidDirectionError(f'Invalid direction: {direction!r}')
    before = board.snapshot()
    points = 0
    marks = new_merge_marks(board.size)
    with board.viewing(direction):
        for col in range(board.size):
            compact_lane(board, col)
            points += merge_lane(board, col, marks)
            compact_lane(board, col)
    changed = board.snapshot() != before
    if debug_enabled():
        debug('tilt', f"{direction.name} changed={changed} +{points}\n{board.pretty()}")
    return TiltResult(changed=changed, score_delta=points)
