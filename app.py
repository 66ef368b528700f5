from __future__ import annotations

import os
import sys
from typing import Any, Dict, Tuple

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from the repo root
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from game import (  # noqa: E402
    Board,
    Direction,
    GameState,
    Model,
    Tile,
    Tilt2048Error,
    apply_tilt,
    at_least_one_move_exists,
    evaluate,
    max_tile_exists,
    place_tile,
    render,
    reset,
)
from tilt2048_core import config  # noqa: E402

app = Flask(__name__)


def _json_int(v: Any, what: str) -> int:
    """Accepts JSON integers only; floats, bools and strings are rejected."""
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"{what} must be an integer, got {v!r}")
    return v


def board_to_json(b: Board) -> Dict[str, Any]:
    return {"size": int(b.size), "rows": b.rows()}


def board_from_json(obj: Dict[str, Any]) -> Board:
    rows = obj.get("rows")
    if not isinstance(rows, list) or not all(isinstance(r, list) for r in rows):
        raise ValueError("rows must be a list of lists")
    return Board.from_rows([[_json_int(v, "tile value") if v is not None else 0 for v in r] for r in rows])


def state_to_json(b: Board, s: GameState) -> Dict[str, Any]:
    out = board_to_json(b)
    out.update({
        "score": int(s.score),
        "maxScore": int(s.max_score),
        "gameOver": bool(s.game_over),
    })
    return out


def json_to_state(obj: Dict[str, Any]) -> Tuple[Board, GameState]:
    """Rebuilds (board, state) from a request body; the game-over flag is recomputed."""
    board = board_from_json(obj)
    state = GameState(
        score=_json_int(obj.get("score", 0), "score"),
        max_score=_json_int(obj.get("maxScore", 0), "maxScore"),
    )
    return board, evaluate(board, state, _max_piece())


def _max_piece() -> int:
    return config.max_piece()


def _bad_request(message: str) -> Any:
    return jsonify({"ok": False, "error": message}), 400


def _read_state(body: Dict[str, Any]) -> Tuple[Board, GameState]:
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        raise ValueError("state required")
    return json_to_state(s_in)


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        size = _json_int(body.get("size", config.default_size()), "size")
        model = Model(size, max_piece=_max_piece())
    except (TypeError, ValueError) as e:
        return _bad_request(f"bad size: {e}")
    return jsonify({"ok": True, "state": state_to_json(model.board, model.state)})


@app.post("/api/add")
def api_add() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board, state = _read_state(body)
        t = body.get("tile")
        if not isinstance(t, dict):
            raise ValueError("tile required")
        tile = Tile.create(
            _json_int(t["value"], "value"), _json_int(t["col"], "col"), _json_int(t["row"], "row")
        )
        state = place_tile(board, state, tile, _max_piece())
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(str(e))
    return jsonify({"ok": True, "state": state_to_json(board, state)})


@app.post("/api/tilt")
def api_tilt() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board, state = _read_state(body)
        direction = Direction.parse(body.get("direction"))
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(str(e))
    state, result = apply_tilt(board, state, direction, _max_piece())
    config.debug("api", f"tilt {direction.name} changed={result.changed} +{result.score_delta}")
    return jsonify({
        "ok": True,
        "state": state_to_json(board, state),
        "changed": bool(result.changed),
        "scoreDelta": int(result.score_delta),
    })


@app.post("/api/status")
def api_status() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board, state = _read_state(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(str(e))
    return jsonify({
        "ok": True,
        "gameOver": bool(state.game_over),
        "maxTile": max_tile_exists(board, _max_piece()),
        "hasMove": at_least_one_move_exists(board),
        "maxScore": int(state.max_score),
        "text": render(board, state),
    })


@app.post("/api/clear")
def api_clear() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board, state = _read_state(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(str(e))
    state = reset(board, state)
    return jsonify({"ok": True, "state": state_to_json(board, state)})


@app.errorhandler(Tilt2048Error)
def handle_game_error(e: Tilt2048Error) -> Any:
    return _bad_request(str(e))


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
