"""
===========================================================
Text Circle Check (CLI)
===========================================================

Usage
-----
    circle-check path/to/answer.txt
    circle-check path/to/answer.txt --challenge
    cat answer.txt | circle-check - --json

Exit code: 0 valid, 1 invalid, 2 usage error.
"""

# --- Imports --------------------------------------------------------------

import sys
import logging
import argparse
from colorama import Fore, Style, just_fix_windows_console

from .config import MarkerSpec, ValidationConfig
from .io import load_text
from .logging_config import setup_logging
from .validator import validate

logger = logging.getLogger(__name__)


# --- CLI Parsing ----------------------------------------------------------

def parse_args(argv=None) -> argparse.Namespace:
    defaults = ValidationConfig()
    p = argparse.ArgumentParser(
        prog="circle-check",
        description="Check whether a block of text draws a circle outline.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("file", help="Text file to check ('-' reads stdin).")
    p.add_argument("--challenge", action="store_true",
                   help="Apply the strict challenge rules instead of the circle fit.")
    p.add_argument("--connectivity", type=int, choices=(4, 8), default=defaults.connectivity)
    p.add_argument("--tolerance", type=float, default=defaults.roundness_tolerance_fraction,
                   help="Roundness tolerance as a fraction of the radius.")
    p.add_argument("--min-radius", type=float, default=defaults.min_radius)
    p.add_argument("--blank", default=" ",
                   help="Characters treated as background (whitespace always is).")
    p.add_argument("--marks", default=None,
                   help="Only these characters are marks (overrides --blank).")
    p.add_argument("--json", action="store_true", help="Print the verdict record as JSON.")
    p.add_argument("--no-color", action="store_true")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr.")
    p.add_argument("--log-file", default=None)
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> ValidationConfig:
    marker = MarkerSpec(
        blank_chars=frozenset(args.blank),
        marker_chars=frozenset(args.marks) if args.marks else None,
    )
    return ValidationConfig(
        marker=marker,
        connectivity=args.connectivity,
        roundness_tolerance_fraction=args.tolerance,
        min_radius=args.min_radius,
    )


# --- Main routine ---------------------------------------------------------

def main(argv=None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)
    just_fix_windows_console()

    try:
        text = sys.stdin.read() if args.file == "-" else load_text(args.file)
        config = build_config(args)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return 2

    verdict = validate(text, config, rules="challenge" if args.challenge else "fit")

    if args.json:
        print(verdict.to_json(indent=2, ensure_ascii=False))
    else:
        colored = not args.no_color and sys.stdout.isatty()
        color = Fore.GREEN if verdict.is_valid else Fore.RED
        head = f"{color}{Style.BRIGHT}{verdict.status.upper()}{Style.RESET_ALL}" if colored else verdict.status.upper()
        reason = "" if verdict.is_valid else f" [{verdict.reason.value}]"
        print(f"{head}{reason} {verdict.message}")
        if verdict.diagram:
            print(verdict.diagram)
    return 0 if verdict.is_valid else 1


# --- Entrypoint -----------------------------------------------------------

if __name__ == "__main__":
    raise SystemExit(main())
