"""
===========================================================
Text Circle Demo (CLI version, exports CSVs)
===========================================================

Usage
-----
    python3 examples/demo_cli.py path/to/answer.txt

Outputs
-------
    marks.csv
    fitted_circle.csv
    residuals.csv
"""

# --- Imports --------------------------------------------------------------

import sys
from pathlib import Path
from circle_check import (
    load_text, save_xy_csv, save_residuals_csv,
    parse, extract, fit_circle, circle_points, validate_shape,
)
from circle_check.errors import CircleCheckError


# --- Main routine ---------------------------------------------------------

def main(argv=None):
    argv = argv or sys.argv[1:]
    if len(argv) != 1:
        print("Usage: demo_cli.py path/to/answer.txt")
        return 1

    txt_path = Path(argv[0])
    try:
        shape = extract(parse(load_text(txt_path)))
        circle = fit_circle(*shape.outline_points())
    except CircleCheckError as e:
        print(f"❌ {e.reason.value}: {e.message}")
        return 1
    verdict = validate_shape(shape, circle)
    Xf, Yf = circle_points(circle.cx, circle.cy, circle.radius)

    save_xy_csv("marks.csv", shape.x, shape.y)
    save_xy_csv("fitted_circle.csv", Xf, Yf)
    save_residuals_csv("residuals.csv", shape, circle)

    print(f"center=({circle.cx:.2f},{circle.cy:.2f}), r={circle.radius:.2f}, marks={shape.count}")
    print(verdict)
    print("✅ Exported 'marks.csv', 'fitted_circle.csv' and 'residuals.csv'")
    return 0


# --- Entrypoint -----------------------------------------------------------

if __name__ == "__main__":
    raise SystemExit(main())
