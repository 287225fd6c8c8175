#!/usr/bin/env python3
# sudoku_cli.py
# Command line front end. Reads a grid (numeric or ASCII box format) from a
# file or stdin and prints the result in ASCII box format to stdout.
#
# Usage:
#   sudoku solve [--generic] [FILE]
#   sudoku generate [--random] [--seed N] [--solver generic|elimination]
#                   [--allow-ambiguous] [--backend pysat|z3] [FILE]
#   sudoku check [FILE]

import argparse
import logging
import random
import sys
from typing import List, Optional

from bitset import is_unique
from sudoku import ERROR_MESSAGE, LoadError, SudokuError, needs_solving, require_valid, solve_or_raise
from sudoku_gen import BACKENDS, SOLVERS, generate, random_solution
from sudoku_io import load_stream, print_grid

log = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _read(path: str):
    """Load a grid from `path`, or from stdin for '-'."""
    if path == "-":
        return load_stream(sys.stdin)
    try:
        with open(path, "rt", encoding="utf-8") as f:
            return load_stream(f)
    except OSError as exc:
        raise LoadError(f"Cannot read {path}: {exc}") from exc


def _cmd_solve(args: argparse.Namespace) -> None:
    grid = _read(args.file)
    solve_or_raise(grid, generic=args.generic)
    print_grid(grid)


def _cmd_generate(args: argparse.Namespace) -> None:
    rng = random.Random(args.seed)
    if args.random:
        grid = random_solution(rng=rng)
    else:
        grid = _read(args.file)
        if needs_solving(grid):
            log.info("Input is not a full solution; completing it first")
            solve_or_raise(grid, generic=True)
    removed = generate(
        grid,
        rng=rng,
        solver=args.solver,
        unique=not args.allow_ambiguous,
        backend=args.backend,
    )
    clues = sum(1 for row in grid for cell in row if is_unique(cell))
    log.info("Removed %d clues, %d left", removed, clues)
    print_grid(grid)


def _cmd_check(args: argparse.Namespace) -> None:
    grid = _read(args.file)
    require_valid(grid)
    print_grid(grid)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudoku",
        description="Solve, check and generate 9x9 Sudoku puzzles.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Be verbose")
    subparsers = parser.add_subparsers(dest="command", required=True,
                                       help="Append --help for more help")

    def add_file(p: argparse.ArgumentParser) -> None:
        p.add_argument("file", nargs="?", default="-",
                       help="Puzzle file in numeric or ASCII box format (default: stdin)")

    p_solve = subparsers.add_parser("solve", help="Solve a puzzle")
    p_solve.add_argument("--generic", action="store_true",
                         help="Backtrack when elimination gets stuck")
    add_file(p_solve)
    p_solve.set_defaults(func=_cmd_solve)

    p_gen = subparsers.add_parser("generate", help="Turn a solved grid into a puzzle")
    p_gen.add_argument("--random", action="store_true",
                       help="Start from a random full grid instead of reading one")
    p_gen.add_argument("--seed", type=int, default=None, help="Random seed")
    p_gen.add_argument("--solver", choices=sorted(SOLVERS), default="generic",
                       help="Solver deciding whether a clue can be removed")
    p_gen.add_argument("--allow-ambiguous", action="store_true",
                       help="Skip the unique-solution check")
    p_gen.add_argument("--backend", choices=BACKENDS, default="pysat",
                       help="Solution counter for the unique-solution check")
    add_file(p_gen)
    p_gen.set_defaults(func=_cmd_generate)

    p_check = subparsers.add_parser("check", help="Validate a grid")
    add_file(p_check)
    p_check.set_defaults(func=_cmd_check)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    try:
        args.func(args)
    except SudokuError as exc:
        log.debug("%s failed: %s", args.command, exc)
        print(ERROR_MESSAGE, file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
