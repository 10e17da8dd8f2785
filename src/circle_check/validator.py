"""
===========================================================
circle_check.validator — acceptance criteria and entry point
===========================================================

validate(text, config) runs the whole pipeline:

    parse() -> extract() -> fit_circle() -> validate_shape()

and always returns a Verdict. Checks in validate_shape() run in order and
stop at the first failure:

  1. connectivity   : one coherent ring, no stray marks   -> FRAGMENTED
  2. size floor     : radius > min_radius                 -> TOO_SMALL
  3. roundness      : |residual| <= max(tolerance * radius,
                      min_roundness_band)                 -> NOT_ROUND
  4. completeness   : angular sectors covered by marks    -> INCOMPLETE
  5. interior fill  : no marks well inside the ring       -> FILLED

Marks outside the largest component that the connectivity check tolerates
play no part in checks 2-5 (nor in the fit).
"""

# --- Imports --------------------------------------------------------------

import logging
import math
from typing import Mapping, Optional

import numpy as np

from .challenge import check_challenge
from .config import ValidationConfig
from .core import FittedCircle, fit_circle
from .errors import CircleCheckError, Reason
from .grid import parse
from .shape import Shape, extract
from .verdict import Verdict

logger = logging.getLogger(__name__)


# --- Individual checks ----------------------------------------------------
# Each returns None when the check passes, an invalid Verdict otherwise.

def check_connectivity(shape: Shape, circle: FittedCircle, config: ValidationConfig) -> Optional[Verdict]:
    fraction = shape.largest_component_fraction
    if fraction >= config.min_coverage_fraction:
        return None
    stray = shape.stray_points()
    return Verdict.invalid(
        Reason.FRAGMENTED,
        f"The marks form {shape.component_count} separate pieces; the largest holds "
        f"{shape.largest_component_size} of {shape.count} marks ({fraction:.1%}, "
        f"at least {config.min_coverage_fraction:.1%} required).",
        offending=stray,
        circle=_as_tuple(circle),
    )


def check_size(shape: Shape, circle: FittedCircle, config: ValidationConfig) -> Optional[Verdict]:
    if circle.radius > config.min_radius:
        return None
    return Verdict.invalid(
        Reason.TOO_SMALL,
        f"The fitted radius {circle.radius:.2f} must be greater than {config.min_radius:g}.",
        circle=_as_tuple(circle),
    )


def check_roundness(shape: Shape, circle: FittedCircle, config: ValidationConfig) -> Optional[Verdict]:
    band = max(config.roundness_tolerance_fraction * circle.radius, config.min_roundness_band)
    if circle.residuals.size == 0 or np.max(np.abs(circle.residuals)) <= band:
        return None
    x, y, res = circle.worst_point()
    side = "outside" if res > 0 else "inside"
    return Verdict.invalid(
        Reason.NOT_ROUND,
        f"The mark at ({x}, {y}) lies {abs(res):.2f} cells {side} the fitted circle of radius "
        f"{circle.radius:.2f}; at most {band:.2f} is allowed.",
        offending=[(x, y)],
        circle=_as_tuple(circle),
    )


def sector_count(radius: float, config: ValidationConfig) -> int:
    """
    Number of angular sectors used for the coverage check: at most
    `angular_sector_count`, and few enough that each sector spans at least
    `min_sector_arc` cells of circumference (never fewer than 4).
    """
    by_arc = max(4, int(math.floor(2.0 * math.pi * radius / config.min_sector_arc)))
    return min(int(config.angular_sector_count), by_arc)


def sector_coverage(shape: Shape, circle: FittedCircle, n: int) -> np.ndarray:
    """Boolean array: sector k holds at least one mark."""
    width = 2.0 * np.pi / n
    idx = np.floor(circle.angles(*shape.main_points()) / width).astype(int)
    idx = np.clip(idx, 0, n - 1)
    covered = np.zeros(n, dtype=bool)
    covered[idx] = True
    return covered


def check_completeness(shape: Shape, circle: FittedCircle, config: ValidationConfig) -> Optional[Verdict]:
    n = sector_count(circle.radius, config)
    covered = sector_coverage(shape, circle, n)
    fraction = covered.sum() / n
    if fraction >= config.min_sector_fraction:
        return None
    width = 360.0 / n
    empty = ", ".join(f"{k * width:.0f}°" for k in np.flatnonzero(~covered))
    return Verdict.invalid(
        Reason.INCOMPLETE,
        f"Only {int(covered.sum())} of {n} angular sectors contain a mark ({fraction:.0%}, at least "
        f"{config.min_sector_fraction:.0%} required). Empty sectors start at: {empty}.",
        circle=_as_tuple(circle),
    )


def check_fill(shape: Shape, circle: FittedCircle, config: ValidationConfig) -> Optional[Verdict]:
    limit = (circle.radius
             - config.roundness_tolerance_fraction * circle.radius
             - config.ring_thickness_allowance)
    x, y = shape.main_points()
    inside = circle.distances(x, y) < limit
    if not inside.any():
        return None
    return Verdict.invalid(
        Reason.FILLED,
        f"{int(inside.sum())} mark(s) lie inside the ring (closer than {max(limit, 0.0):.2f} to the center); "
        "a circle outline must not be filled.",
        offending=zip(x[inside], y[inside]),
        circle=_as_tuple(circle),
    )


CHECKS = (check_connectivity, check_size, check_roundness, check_completeness, check_fill)


# --- Verdict --------------------------------------------------------------

def validate_shape(shape: Shape, circle: FittedCircle, config: Optional[ValidationConfig] = None) -> Verdict:
    """
    Apply the acceptance criteria to an extracted shape and its fitted circle.
    """
    config = config or ValidationConfig()
    for check in CHECKS:
        verdict = check(shape, circle, config)
        if verdict is not None:
            return verdict
    return Verdict.valid(
        f"This is a valid text circle of radius {circle.radius:.2f}.",
        circle=_as_tuple(circle),
    )


def validate(text: str, config=None, rules: str = "fit") -> Verdict:
    """
    Decide whether a text block draws a circle outline.

    Parameters
    ----------
    text : str
        Submitted text block.
    config : ValidationConfig or mapping, optional
        Thresholds (see ValidationConfig); a mapping is converted with
        ValidationConfig.from_mapping. Ignored when rules == "challenge".
    rules : {"fit", "challenge"}
        "fit" runs the geometric validator, "challenge" the strict rules of
        the original challenge (see check_challenge).

    Returns
    -------
    Verdict
        Always a verdict: a non-string `text` is tagged NOT_TEXT, a bad
        configuration or unknown `rules` BAD_CONFIG, and parse, shape and fit
        failures keep their specific reason.
    """
    if not isinstance(text, str):
        return Verdict.invalid(Reason.NOT_TEXT, f"Expected a text block, got {type(text).__name__}.")
    if rules == "challenge":
        return check_challenge(text)
    if rules != "fit":
        return Verdict.invalid(Reason.BAD_CONFIG, f"rules must be 'fit' or 'challenge', got {rules!r}.")
    try:
        config = _as_config(config)
    except (TypeError, ValueError) as err:
        logger.debug("rejected configuration: %s", err)
        return Verdict.invalid(Reason.BAD_CONFIG, f"Invalid configuration: {err}")

    try:
        grid = parse(text, config.marker)
        shape = extract(grid, config.connectivity)
        circle = fit_circle(*shape.outline_points())
    except CircleCheckError as err:
        verdict = Verdict.from_error(err)
    else:
        verdict = validate_shape(shape, circle, config)

    logger.debug("verdict: %s", verdict)
    return verdict


# --- Helpers --------------------------------------------------------------

def _as_config(config) -> ValidationConfig:
    if config is None:
        return ValidationConfig()
    if isinstance(config, ValidationConfig):
        return config
    if isinstance(config, Mapping):
        return ValidationConfig.from_mapping(config)
    raise TypeError(f"config must be a ValidationConfig or a mapping, got {type(config).__name__}")


def _as_tuple(circle: FittedCircle):
    return (circle.cx, circle.cy, circle.radius)
