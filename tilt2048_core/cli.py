from __future__ import annotations

import argparse
from typing import List, Optional, Sequence, Tuple

from . import config
from .board import Tile
from .errors import Tilt2048Error
from .model import Model
from .orientation import Direction


def parse_tile(text: str) -> Tile:
    """Parses 'col,row,value' into a Tile."""
    parts = [p for p in text.replace(' ', ',').split(',') if p != '']
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f'expected col,row,value, got {text!r}')
    try:
        col, row, value = (int(p) for p in parts)
        return Tile.create(value, col, row)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_moves(text: str) -> List[Direction]:
    """Parses a move string such as 'UULR' (or 'NNWE') into directions."""
    return [Direction.parse(ch) for ch in text if not ch.isspace() and ch not in ',;']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='2048 rules engine: place tiles and tilt the board')
    parser.add_argument('--size', type=int, default=None, help='Board size (NxN), default TILT2048_SIZE or 4')
    parser.add_argument('--max-piece', type=int, default=None, help='Winning tile value, default 2048')
    parser.add_argument('--tile', type=parse_tile, action='append', default=[],
                        metavar='COL,ROW,VALUE', help='Place a tile before playing (repeatable)')
    parser.add_argument('--moves', default='', help='Tilts to apply, e.g. UDLR or NSWE')
    parser.add_argument('--play', action='store_true', help='Read commands interactively')
    return parser


def run_moves(model: Model, moves: Sequence[Direction]) -> None:
    for direction in moves:
        if model.game_over():
            print('Game over; remaining moves ignored.')
            return
        result = model.tilt(direction)
        print(f"Tilt {direction.name}: {'changed' if result.changed else 'no change'} (+{result.score_delta})")
        print(model)


def handle_command(model: Model, text: str) -> Tuple[bool, Optional[str]]:
    """Applies one interactive command. Returns (keep_going, message)."""
    words = text.split()
    if not words:
        return True, None
    cmd = words[0].lower()
    if cmd in ('q', 'quit', 'exit'):
        return False, None
    if cmd == 'clear':
        model.clear()
        return True, str(model)
    if cmd == 'add':
        if len(words) != 4:
            return True, 'Usage: add COL ROW VALUE'
        try:
            col, row, value = (int(w) for w in words[1:])
            model.add_tile(Tile.create(value, col, row))
        except ValueError as e:
            return True, f'error: {e}'
        return True, str(model)
    try:
        direction = Direction.parse(cmd)
    except Tilt2048Error:
        return True, 'Commands: u|d|l|r, add COL ROW VALUE, clear, q'
    result = model.tilt(direction)
    note = '' if result.changed else 'No change.\n'
    return True, f"{note}{model}"


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        model = Model(args.size, max_piece=args.max_piece)
        for tile in args.tile:
            model.add_tile(tile)
        moves = parse_moves(args.moves)
    except Tilt2048Error as e:
        parser.error(str(e))
        return

    config.debug('cli', f'size={model.size()} max_piece={model.max_piece}')
    print('Initial board:')
    print(model)
    run_moves(model, moves)

    if not args.play:
        return

    while True:
        try:
            text = input('> ')
        except EOFError:
            break
        keep_going, message = handle_command(model, text)
        if message:
            print(message)
        if not keep_going:
            break
        if model.game_over():
            print(f'Game over. Score {model.score()}, best {model.max_score()}.')


if __name__ == '__main__':
    main()
