"""Command‑line interface wrapper around :pyfunc:`equation_fuzzer.SearchLoop`."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from . import constants as C
from .config import FuzzerConfig
from .evaluator import CompileError
from .report import format_progress, format_solution
from .search import Improvement, SearchLoop

__all__ = ["main"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="equation-fuzzer",
        description="Search for variable values such that EXPR1 == EXPR2 under optional conditions.",
        epilog="Use '--' before expressions that start with '-'.",
    )
    parser.add_argument(
        "expressions",
        nargs="*",
        metavar="EXPR",
        help="EXPR1 EXPR2 followed by zero or more conditions (true when they evaluate to 1)",
    )
    parser.add_argument(
        "-n",
        "--variables",
        type=int,
        default=C.DEFAULT_NUM_VARIABLES,
        help=f"Number of variables a, b, c, … (1-{C.MAX_NUM_VARIABLES}, default {C.DEFAULT_NUM_VARIABLES})",
    )
    parser.add_argument(
        "--no-round",
        action="store_true",
        help="Keep fractional parts after mutation instead of truncating to integers",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument(
        "--max-cycles",
        type=int,
        default=None,
        help="Give up after this many search cycles (default: run until solved)",
    )
    parser.add_argument(
        "--log-level",
        choices=["WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging level for equation_fuzzer",
    )
    return parser


def _print_progress(imp: Improvement) -> None:
    print(
        format_progress(
            imp.iteration,
            imp.corpus_size,
            imp.assignment,
            imp.score.result1,
            imp.score.result2,
            imp.score.diff,
        ),
        flush=True,
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    ns = parser.parse_intermixed_args(argv)

    level = getattr(logging, ns.log_level)
    pkg_logger = logging.getLogger("equation_fuzzer")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
    handler.setLevel(level)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(level)

    if len(ns.expressions) < 2:
        print(C.USAGE.format(prog=parser.prog))
        return 0

    expr1, expr2, *conditions = ns.expressions

    try:
        config = FuzzerConfig(num_variables=ns.variables, round_mode=not ns.no_round, seed=ns.seed)
        if ns.max_cycles is not None and ns.max_cycles < 0:
            raise ValueError(f"--max-cycles must be non-negative, got {ns.max_cycles}")
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        loop = SearchLoop.from_config(expr1, expr2, conditions, config, on_progress=_print_progress)
    except CompileError as exc:
        print(f"Error: {exc.message}")
        print(f"Expression: {exc.expression}")
        return 1

    result = loop.run(max_cycles=ns.max_cycles)
    if not result.solved or result.assignment is None:
        print(f"No exact solution after {result.cycles} cycles ({result.iterations} evaluations).")
        return 3

    print(format_solution(expr1, expr2, conditions, result.assignment))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
