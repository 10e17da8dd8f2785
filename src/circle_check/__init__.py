"""
===========================================================
circle_check — is this block of text a circle?
===========================================================

A small NumPy/SciPy toolkit that checks answers to the "draw a circle with
text characters" golf challenge: the text is turned into a grid of marks,
a circle is fitted to the marks, and the result is judged for connectivity,
size, roundness, angular completeness and interior fill.

Main functions
--------------
- validate(text, config=None, rules="fit")
- check_challenge(text)
- parse(text, marker_spec=None)
- extract(grid, connectivity=8)
- fit_circle(x, y)

Typical workflow
----------------
    from circle_check import validate
    verdict = validate(open("answer.txt").read())
    print(verdict.status, verdict.message)
    record = verdict.to_record()

Author
------
Adrian Utge Le Gall, 2025
"""

# --- Public Imports -------------------------------------------------------

from .config import MarkerSpec, ValidationConfig
from .errors import Category, Reason, CircleCheckError, ParseError, ShapeError, FitError
from .grid import Grid, parse
from .shape import Shape, extract
from .core import FittedCircle, fit_circle, circle_points
from .verdict import Verdict
from .challenge import check_challenge
from .validator import validate, validate_shape
from .io import load_text, save_xy_csv, residual_table, save_residuals_csv, save_verdict_json

__all__ = [
    "MarkerSpec",
    "ValidationConfig",
    "Category",
    "Reason",
    "CircleCheckError",
    "ParseError",
    "ShapeError",
    "FitError",
    "Grid",
    "parse",
    "Shape",
    "extract",
    "FittedCircle",
    "fit_circle",
    "circle_points",
    "Verdict",
    "check_challenge",
    "validate",
    "validate_shape",
    "load_text",
    "save_xy_csv",
    "residual_table",
    "save_residuals_csv",
    "save_verdict_json",
]
