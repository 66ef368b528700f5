from __future__ import annotations

from dataclasses import replace
from typing import Iterator, Optional

from .board import Board, Tile
from . import config
from .orientation import Coord
from .state import GameState


def _cells(board: Board) -> Iterator[Coord]:
    for col in range(board.size):
        for row in range(board.size):
            yield (col, row)


def empty_space_exists(board: Board) -> bool:
    """True iff at least one cell on BOARD is empty."""
    return any(board.tile(c, r) is None for c, r in _cells(board))


def max_tile_exists(board: Board, max_piece: Optional[int] = None) -> bool:
    """True iff some tile has reached MAX_PIECE (the configured winning value by default)."""
    if max_piece is None:
        max_piece = config.max_piece()
    return any(t.value == max_piece for t in board.tiles())


def _same_value(a: Optional[Tile], b: Optional[Tile]) -> bool:
    return a is not None and b is not None and a.value == b.value


def at_least_one_move_exists(board: Board) -> bool:
    """
    True iff some tilt could change BOARD: there is an empty cell, or two
    edge-adjacent tiles share a value. Every cell is checked against its right
    and upper neighbour, which covers each adjacent pair exactly once,
    including the pairs along the border.
    """
    if empty_space_exists(board):
        return True
    n = board.size
    for col, row in _cells(board):
        here = board.tile(col, row)
        if col + 1 < n and _same_value(here, board.tile(col + 1, row)):
            return True
        if row + 1 < n and _same_value(here, board.tile(col, row + 1)):
            return True
    return False


def is_game_over(board: Board, max_piece: Optional[int] = None) -> bool:
    """The game ends when the winning tile appears or no move remains."""
    return max_tile_exists(board, max_piece) or not at_least_one_move_exists(board)


def record_game_over(state: GameState, over: bool) -> GameState:
    """Sets the game-over flag to OVER, folding the score into the running maximum when it is set.

    Recording an end that is already recorded returns the same state.
    """
    if not over:
        return replace(state, game_over=False) if state.game_over else state
    best = max(state.score, state.max_score)
    if state.game_over and best == state.max_score:
        return state
    return GameState(score=state.score, max_score=best, game_over=True)
