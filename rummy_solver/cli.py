from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from .engine import reconstruct_board, solve
from .rules import Ruleset
from .state import GameState, board_from_data, board_to_data, solutions_to_dict, tiles_from_data
from .tiles import format_tiles

DEFAULT_MAX_TILES = 5


def _load_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with Path(path).open(encoding="utf-8") as fh:
        return json.load(fh)


def _cmd_solve(args: argparse.Namespace) -> int:
    state = GameState.from_dict(_load_json(args.state))
    rules = Ruleset.from_env()
    max_tiles = args.max_tiles
    if max_tiles is None and rules.max_tiles is None:
        max_tiles = DEFAULT_MAX_TILES
    plays = solve(state.board, state.hand, max_tiles=max_tiles, rules=rules)
    if args.json:
        print(json.dumps(solutions_to_dict(plays), ensure_ascii=False))
        return 0
    if not plays:
        print("No playable tiles.")
        return 0
    for play in plays:
        noun = "move" if play.moves == 1 else "moves"
        print(f"{format_tiles(play.tiles)}: {play.moves} {noun}")
        if args.show_board:
            for meld in play.board.canonicalize():
                print(f"    {format_tiles(meld)}")
    return 0


def _cmd_partition(args: argparse.Namespace) -> int:
    board = reconstruct_board(tiles_from_data(_load_json(args.tiles)))
    if args.json:
        print(json.dumps({"board": board_to_data(board)}, ensure_ascii=False))
        return 0
    for meld in board:
        print(format_tiles(meld))
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    board = board_from_data(_load_json(args.board))
    problems = dict(board.problems())
    for idx, meld in enumerate(board):
        status = "ok" if idx not in problems else f"invalid: {problems[idx]}"
        print(f"{format_tiles(meld)}: {status}")
    print("Board is valid." if not problems else "Board is invalid.")
    return 0 if not problems else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find every way to lay hand tiles onto a Rummy board.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log search progress.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_solve = sub.add_parser("solve", help="List playable hand subsets and their move counts.")
    p_solve.add_argument("state", help='JSON file with {"board": [...], "hand": [...]} ("-" for stdin).')
    p_solve.add_argument(
        "--max-tiles",
        type=int,
        default=None,
        help=f"Largest number of hand tiles per play (default: {DEFAULT_MAX_TILES}).",
    )
    p_solve.add_argument("--json", action="store_true", help="Print the solutions as JSON.")
    p_solve.add_argument("--show-board", action="store_true", help="Print the resulting layout of each play.")
    p_solve.set_defaults(func=_cmd_solve)

    p_partition = sub.add_parser("partition", help="Group a flat list of board tiles into melds.")
    p_partition.add_argument("tiles", help="JSON file with a list of tiles.")
    p_partition.add_argument("--json", action="store_true", help="Print the board as JSON.")
    p_partition.set_defaults(func=_cmd_partition)

    p_check = sub.add_parser("check", help="Validate every meld of a board.")
    p_check.add_argument("board", help="JSON file with a list of melds.")
    p_check.set_defaults(func=_cmd_check)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
