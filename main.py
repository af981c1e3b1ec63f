"""
TriSolver — Entry point.

Without arguments, launch the Tkinter desktop application.  With ``--solve``
or ``--system``, print the derivation to stdout instead.
"""

import argparse
import json
import logging
import sys

from trisolver import config
from trisolver.core import solve_coefficients
from trisolver.derivation import METHOD_INFO, build_result, render_text
from trisolver.logging_config import setup_logging
from trisolver.parsing import parse_fields, parse_system

logger = logging.getLogger("trisolver.cli")


def _decimals(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{text}'")
    if not config.DECIMALS_MIN <= value <= config.DECIMALS_MAX:
        raise argparse.ArgumentTypeError(
            f"must be between {config.DECIMALS_MIN} and {config.DECIMALS_MAX}, got {value}"
        )
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trisolver",
        description="Solve a 2×2 linear system step by step.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--solve", nargs=6, metavar=("A11", "A12", "A21", "A22", "B1", "B2"),
        help="coefficients of a11·x + a12·y = b1 and a21·x + a22·y = b2",
    )
    source.add_argument(
        "--system", metavar="TEXT",
        help='the system as text, e.g. "2x + 3y = 7, x - 2y = 1"',
    )
    parser.add_argument("--method", choices=list(METHOD_INFO), default=None,
                        help="derivation to show (default: from settings)")
    parser.add_argument("--decimals", type=_decimals, default=None,
                        help="display precision (default: from settings)")
    parser.add_argument("--json", action="store_true",
                        help="print the result document as JSON")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    return parser


def run_cli(args: argparse.Namespace, settings: dict) -> int:
    try:
        if args.system is not None:
            coeffs = parse_system(args.system)
        else:
            a11, a12, a21, a22, b1, b2 = args.solve
            coeffs = parse_fields({"a11": a11, "a12": a12, "a21": a21,
                                   "a22": a22, "b1": b1, "b2": b2})
    except ValueError as e:
        logger.error("Invalid input: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    method = args.method or settings["method"]
    decimals = args.decimals if args.decimals is not None else settings["decimals"]
    document = build_result(solve_coefficients(coeffs), method, decimals)

    if args.json:
        print(json.dumps(document, indent=2, ensure_ascii=False))
    else:
        print(render_text(document))
    return 0


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    settings = config.get_settings()
    setup_logging(args.log_level or settings["log_level"], args.log_file)

    if args.solve is None and args.system is None:
        from gui import TriSolverApp

        app = TriSolverApp()
        app.mainloop()
        return 0
    return run_cli(args, settings)


if __name__ == "__main__":
    sys.exit(main())
