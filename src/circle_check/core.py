"""
===========================================================
circle_check.core — closed-form circle fitting (NumPy-only)
===========================================================

Implements the computational part of the validator:
  - fit_circle()      : algebraic least-squares circle fit (Kåsa)
  - FittedCircle      : center, RMS radius and per-point residuals
  - circle_points()   : sample points on a fitted circle

Design goals
------------
- Closed form, no iteration: same input, same circle, no convergence cases
- Hartley normalization (mean-center + RMS scale) before solving
- Collinear input reported as FitError(DEGENERATE), never a crash

Author
------
Adrian Utge Le Gall, 2025
"""

# --- Imports --------------------------------------------------------------

import logging
from dataclasses import dataclass

import numpy as np

from .errors import FitError, Reason

logger = logging.getLogger(__name__)

# smallest/largest singular value ratio under which the system is singular
_RANK_TOL = 1e-10


# --- Result ---------------------------------------------------------------

@dataclass(frozen=True)
class FittedCircle:
    cx: float
    cy: float
    radius: float
    x: np.ndarray          # fitted points
    y: np.ndarray
    residuals: np.ndarray  # signed: distance - radius

    def distances(self, x, y) -> np.ndarray:
        """Euclidean distance of points (x, y) to the center."""
        x = np.asarray(x, float); y = np.asarray(y, float)
        return np.hypot(x - self.cx, y - self.cy)

    def angles(self, x, y) -> np.ndarray:
        """Angle of points around the center, in [0, 2π), image coords."""
        x = np.asarray(x, float); y = np.asarray(y, float)
        return np.mod(np.arctan2(y - self.cy, x - self.cx), 2.0 * np.pi)

    def worst_point(self):
        """(x, y, residual) of the point farthest from the circumference."""
        k = int(np.argmax(np.abs(self.residuals)))
        return int(self.x[k]), int(self.y[k]), float(self.residuals[k])


# --- Algebraic Least-Squares Circle Fit ----------------------------------

def fit_circle(x, y) -> FittedCircle:
    """
    Algebraic least-squares circle fit (Kåsa 1976).

    Solves x² + y² = A·x + B·y + C for (A, B, C) in the least-squares sense;
    the center is (A/2, B/2). The radius is then taken as the RMS distance
    from that center to the points, which is less biased than the algebraic
    radius sqrt(C + cx² + cy²) for short or noisy arcs.

    Parameters
    ----------
    x, y : array-like
        Point coordinates (same length).

    Returns
    -------
    FittedCircle

    Raises
    ------
    FitError
        TOO_FEW_POINTS if fewer than 3 points, DEGENERATE if all points
        are collinear.
    """
    x = np.asarray(x, float).ravel()
    y = np.asarray(y, float).ravel()
    if x.size != y.size:
        raise ValueError("x and y must have the same length")
    if x.size < 3:
        raise FitError(
            Reason.TOO_FEW_POINTS,
            f"A circle needs at least 3 points, got {x.size}.",
            offending=[(int(a), int(b)) for a, b in zip(x, y)],
        )

    # Normalize (mean-center + RMS scale)
    xm, ym = float(x.mean()), float(y.mean())
    X0, Y0 = x - xm, y - ym
    s = float(np.sqrt(np.mean(X0**2 + Y0**2))) or 1.0
    X, Y = X0 / s, Y0 / s

    # Design matrix D = [x, y, 1], target x² + y²
    D = np.column_stack([X, Y, np.ones_like(X)])
    t = X*X + Y*Y
    sol, _, rank, sv = np.linalg.lstsq(D, t, rcond=None)
    if rank < 3 or sv[-1] <= _RANK_TOL * sv[0]:
        raise FitError(Reason.DEGENERATE, "All marks lie on a straight line; no circle fits them.")

    # Un-normalize back to original coords
    cx = xm + s * sol[0] / 2.0
    cy = ym + s * sol[1] / 2.0

    d = np.hypot(x - cx, y - cy)
    radius = float(np.sqrt(np.mean(d * d)))
    circle = FittedCircle(float(cx), float(cy), radius, x, y, d - radius)
    logger.debug("fitted circle center=(%.3f, %.3f) r=%.3f on %d points", cx, cy, radius, x.size)
    return circle


# --- Sampling -------------------------------------------------------------

def circle_points(cx: float, cy: float, r: float, n: int = 400):
    """
    Generate n sampled points on the circle (no plotting).
    """
    t = np.linspace(0.0, 2.0 * np.pi, n)
    return cx + r * np.cos(t), cy + r * np.sin(t)
