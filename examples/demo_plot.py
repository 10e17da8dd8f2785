"""
===========================================================
Text Circle Demo (plot overlay)
===========================================================

Steps:
  1) Load a text answer
  2) Parse marks and fit a circle
  3) Validate
  4) Plot marks, fitted circle and offending cells

Author
------
Adrian Utge Le Gall, 2025
"""

# --- Imports --------------------------------------------------------------
import sys
import argparse

from circle_check import ValidationConfig, load_text, parse, extract, fit_circle, validate_shape
from circle_check.errors import CircleCheckError
from circle_check.plotting import plot_fit

# --- CLI -----------------------------------------------------------------
def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Text circle plot demo.")
    p.add_argument("txt", help="Path to the text answer.")
    p.add_argument("--connectivity", type=int, choices=(4, 8), default=8)
    p.add_argument("--tolerance", type=float, default=0.15)
    p.add_argument("--save", type=str, default="")
    p.add_argument("--title", type=str, default="Text Circle Fit Overlay")
    return p.parse_args(argv)

# --- Main ----------------------------------------------------------------
def main(argv=None):
    args = parse_args(argv or sys.argv[1:])
    config = ValidationConfig(connectivity=args.connectivity,
                              roundness_tolerance_fraction=args.tolerance)

    try:
        grid = parse(load_text(args.txt), config.marker)
        print(f"[info] loaded {grid.width}x{grid.height} grid from: {args.txt}")
        shape = extract(grid, config.connectivity)
        circle = fit_circle(*shape.outline_points())
    except CircleCheckError as e:
        print(f"[error] {e.reason.value}: {e.message}")
        return 1

    print(f"[fit] center=({circle.cx:.2f},{circle.cy:.2f}) r={circle.radius:.2f}")
    verdict = validate_shape(shape, circle, config)
    print(f"[verdict] {verdict}")

    fig = plot_fit(shape, circle, verdict, title=args.title, show=not args.save)
    if args.save:
        fig.savefig(args.save, dpi=180, bbox_inches="tight", facecolor="white")
        print(f"[ok] saved figure -> {args.save}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
