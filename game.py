from __future__ import annotations

# Facade module that re-exports the tilt2048 core.
# The Flask app and the tests import from here.
# Single-responsibility modules live under tilt2048_core/*.

from tilt2048_core.board import Board, RawValue, Tile
from tilt2048_core.config import MAX_PIECE
from tilt2048_core.errors import (
    InvalidDirectionError,
    InvalidTileError,
    MalformedGridError,
    TileCollisionError,
    Tilt2048Error,
)
from tilt2048_core.orientation import Coord, Direction
from tilt2048_core.state import GameState
from tilt2048_core.status import (
    at_least_one_move_exists,
    empty_space_exists,
    is_game_over,
    max_tile_exists,
    record_game_over,
)
from tilt2048_core.tilt import (
    TiltResult,
    compact_lane,
    merge_lane,
    new_merge_marks,
    tilt,
)
from tilt2048_core.model import (
    Model,
    apply_tilt,
    evaluate,
    place_tile,
    render,
    reset,
)


def main() -> None:
    # CLI driver delegated to tilt2048_core.cli
    from tilt2048_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
