"""
tilt2048 core Python package.

Pure rules engine for a 2048-style sliding-tile puzzle. No I/O beyond the
CLI driver; the Flask app and tests go through the game.py facade.
Modules:
- orientation.py: Direction and the canonical "tilt is upward" frame
- board.py: Tile, Board (grid with a viewing perspective)
- state.py: GameState
- tilt.py: tilt and its lane helpers
- status.py: game-over detection
- model.py: Model, the stateful session
- errors.py, config.py, cli.py
"""
