"""Command-line driver: solve a subtraction game or analyse a chess position."""

import argparse
import logging
import math
import sys

from zerosum.config import CONFIG, MAX_LINE_LENGTH, MAX_SEARCH_DEPTH
from zerosum.core.search import NoMoveError
from zerosum.core.utils import format_score
from zerosum.games.chess_game import ChessGame
from zerosum.games.nim import SubtractionGame
from zerosum.main import Engine


def _int_in_range(minimum, maximum=None):
    def parse(text):
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}")
        if value < minimum:
            raise argparse.ArgumentTypeError(f"must be >= {minimum}, got {value}")
        if maximum is not None and value > maximum:
            raise argparse.ArgumentTypeError(f"must be <= {maximum}, got {value}")
        return value
    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zerosum", description=__doc__)
    parser.add_argument("--log-level", default=None,
                        help=f"logging level (default from config: {CONFIG.log_level})")
    sub = parser.add_subparsers(dest="command", required=True)

    nim = sub.add_parser("nim", help="solve a single-pile subtraction game")
    nim.add_argument("items", type=_int_in_range(0))
    nim.add_argument("--depth", type=_int_in_range(0, MAX_SEARCH_DEPTH), help="search depth (default: items)")
    nim.add_argument("--length", type=_int_in_range(1, MAX_LINE_LENGTH), help="best line length (default: items)")
    nim.add_argument("--max-take", type=_int_in_range(1), default=None)
    nim.add_argument("--misere", action="store_true", default=None,
                     help="taking the last item loses")

    ch = sub.add_parser("chess", help="analyse a chess position")
    ch.add_argument("--fen", default=None, help="position to analyse (default: start position)")
    ch.add_argument("--depth", type=_int_in_range(0, MAX_SEARCH_DEPTH), default=None)
    ch.add_argument("--length", type=_int_in_range(1, MAX_LINE_LENGTH), default=None)
    return parser


def describe(evaluation: float, first="Player 1", second="Player 2") -> str:
    if evaluation == math.inf:
        return f"{first} wins"
    if evaluation == -math.inf:
        return f"{second} wins"
    return f"Evaluation: {format_score(evaluation)}"


def format_line(line) -> str:
    return " ".join(str(m) for m in line) if line else "(none)"


def run_nim(args, parser) -> int:
    if args.depth is None and args.items > MAX_SEARCH_DEPTH:
        parser.error(f"a pile of {args.items} needs --depth <= {MAX_SEARCH_DEPTH}")
    game = SubtractionGame(args.items, args.max_take, args.misere)
    depth = args.items if args.depth is None else args.depth
    length = args.length or min(max(args.items, 1), MAX_LINE_LENGTH)
    engine = Engine(game, depth=depth)

    print(describe(engine.evaluate()))
    print(f"Best line: {format_line(engine.get_best_line(length))}")
    return 0


def run_chess(args, parser) -> int:
    try:
        game = ChessGame(args.fen)
    except ValueError as e:
        parser.error(f"invalid FEN: {e}")
    engine = Engine(game, depth=args.depth)

    try:
        move, evaluation = engine.get_best_move()
    except NoMoveError:
        print(describe(engine.search.last_result.evaluation, "White", "Black"))
        print("No best move: the game is over or depth is 0")
        return 1
    print(describe(evaluation, "White", "Black"))
    print(f"Best move: {move.uci()}")
    line = engine.get_best_line(args.length)
    print(f"Best line: {format_line([m.uci() for m in line])}")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=(args.log_level or CONFIG.log_level).upper(),
                        format="%(levelname)s %(name)s: %(message)s")

    if args.command == "nim":
        return run_nim(args, parser)
    return run_chess(args, parser)


if __name__ == "__main__":
    sys.exit(main())
