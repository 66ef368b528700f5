from __future__ import annotations

from typing import Optional, Sequence, Tuple

from . import config
from .board import Board, RawValue, Tile
from .orientation import Direction
from .state import GameState
from .status import is_game_over, record_game_over
from .tilt import TiltResult, tilt


# ---------- Explicitly threaded operations ----------

def evaluate(board: Board, state: GameState, max_piece: Optional[int] = None) -> GameState:
    """Recomputes the game-over flag for BOARD and records the max score if the game ended."""
    return record_game_over(state, is_game_over(board, max_piece))


def place_tile(board: Board, state: GameState, tile: Tile, max_piece: Optional[int] = None) -> GameState:
    """Adds TILE to BOARD (the cell must be empty) and returns the re-evaluated state."""
    board.add_tile(tile)
    return evaluate(board, state, max_piece)


def apply_tilt(
    board: Board,
    state: GameState,
    direction: Direction,
    max_piece: Optional[int] = None,
) -> Tuple[GameState, TiltResult]:
    """Tilts BOARD toward DIRECTION, returning the new state and the tilt outcome."""
    result = tilt(board, direction)
    return evaluate(board, state.with_score(result.score_delta), max_piece), result


def reset(board: Board, state: GameState) -> GameState:
    """Removes every tile and starts a new game, keeping the max score."""
    board.clear()
    return state.cleared()


def render(board: Board, state: GameState) -> str:
    """Debug rendering; two games are equal iff their renderings are."""
    over = 'over' if state.game_over else 'not over'
    return f"\n[\n{board.pretty()}\n] {state.score} (max: {state.max_score}) (game is {over}) \n"


# ---------- Stateful session ----------

class Model:
    """The state of a game of 2048: a board plus score bookkeeping.

    Coordinates are (col, row) with (0, 0) at the lower-left corner.
    """

    def __init__(self, size: Optional[int] = None, *, max_piece: Optional[int] = None) -> None:
        self._board = Board(size if size is not None else config.default_size())
        self._max_piece = max_piece if max_piece is not None else config.max_piece()
        self._state = GameState()

    @classmethod
    def from_values(
        cls,
        rows: Sequence[Sequence[RawValue]],
        score: int = 0,
        max_score: int = 0,
        *,
        max_piece: Optional[int] = None,
    ) -> 'Model':
        """A game whose tiles are ROWS (top row first, 0 for empty). Used for testing."""
        model = cls(len(rows), max_piece=max_piece)
        model._board = Board.from_rows(rows)
        model._state = evaluate(model._board, GameState(score=score, max_score=max_score), model._max_piece)
        return model

    @property
    def board(self) -> Board:
        return self._board

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def max_piece(self) -> int:
        return self._max_piece

    def tile(self, col: int, row: int) -> Optional[Tile]:
        return self._board.tile(col, row)

    def size(self) -> int:
        return self._board.size

    def score(self) -> int:
        return self._state.score

    def max_score(self) -> int:
        """The best score of any finished game (updated when a game ends)."""
        return self._state.max_score

    def game_over(self) -> bool:
        """True iff there are no moves, or the winning tile is on the board."""
        return self._state.game_over

    def clear(self) -> None:
        self._state = reset(self._board, self._state)

    def add_tile(self, tile: Tile) -> None:
        """Adds TILE to the board. There must be no tile at the same position."""
        self._state = place_tile(self._board, self._state, tile, self._max_piece)

    def tilt(self, side: object) -> TiltResult:
        """Tilts the board toward SIDE (a Direction or its name)."""
        direction = Direction.parse(side)
        self._state, result = apply_tilt(self._board, self._state, direction, self._max_piece)
        return result

    def __str__(self) -> str:
        return render(self._board, self._state)

    def __repr__(self) -> str:
        return f"Model(size={self.size()}, score={self.score()}, max_score={self.max_score()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))
