"""
===========================================================
circle_check.shape — mark coordinates and connectivity
===========================================================

Implements:
  - outline_mask()  : marks with a blank (or off-grid) 4-neighbour
  - label_marks()   : connected components (4- or 8-neighbours)
  - extract()       : PointSet + connectivity summary for a Grid
"""

# --- Imports --------------------------------------------------------------

import logging
from dataclasses import dataclass

import numpy as np
from scipy import ndimage

from .errors import Reason, ShapeError

logger = logging.getLogger(__name__)


# --- Neighbourhoods -------------------------------------------------------

def neighbour_structure(connectivity: int) -> np.ndarray:
    """3x3 structuring element for 4- or 8-neighbour adjacency."""
    if connectivity == 4:
        return ndimage.generate_binary_structure(2, 1)
    if connectivity == 8:
        return ndimage.generate_binary_structure(2, 2)
    raise ValueError(f"connectivity must be 4 or 8, got {connectivity!r}")


def outline_mask(B: np.ndarray) -> np.ndarray:
    """
    Marks having at least one blank 4-neighbour (cells off the grid count
    as blank). On a one-cell-thick ring this is every mark; on a filled
    disk only the outer boundary.
    """
    B = np.asarray(B, dtype=bool)
    if B.ndim != 2:
        raise ValueError("outline_mask expects a 2D array")
    up    = np.zeros_like(B); up[1:,  :]  = B[:-1, :]
    down  = np.zeros_like(B); down[:-1,:] = B[1:,  :]
    left  = np.zeros_like(B); left[:, 1:] = B[:, :-1]
    right = np.zeros_like(B); right[:, :-1]= B[:, 1:]
    interior = up & down & left & right
    return B & ~interior


def label_marks(B: np.ndarray, connectivity: int = 8):
    """
    Label connected components of a boolean mask.

    Returns
    -------
    labels : np.ndarray
        Same shape as B, 0 for blank cells, 1..n for components.
    sizes : np.ndarray
        sizes[k] = number of cells in component k + 1.
    """
    labels, n = ndimage.label(np.asarray(B, dtype=bool), structure=neighbour_structure(connectivity))
    sizes = np.bincount(labels.ravel(), minlength=n + 1)[1:]
    return labels, sizes


# --- Shape ----------------------------------------------------------------

@dataclass(frozen=True)
class Shape:
    """
    PointSet of a grid plus its connectivity structure.

    `x`, `y` are the cell-index coordinates of every mark (row-major order);
    `labels` holds the component id of each mark, `sizes` the size of each
    component (index = id - 1).
    """
    x: np.ndarray
    y: np.ndarray
    labels: np.ndarray
    sizes: np.ndarray
    outline: np.ndarray  # bool per mark
    connectivity: int = 8

    @property
    def count(self) -> int:
        return int(self.x.size)

    @property
    def component_count(self) -> int:
        return int(self.sizes.size)

    @property
    def largest_component_size(self) -> int:
        return int(self.sizes.max())

    @property
    def largest_component_fraction(self) -> float:
        return self.largest_component_size / self.count

    @property
    def main(self) -> np.ndarray:
        """Bool per mark: belongs to the largest component (first one on ties)."""
        return self.labels == int(np.argmax(self.sizes)) + 1

    def stray_points(self) -> list[tuple[int, int]]:
        """Marks outside the largest component, as (x, y)."""
        keep = ~self.main
        return [(int(x), int(y)) for x, y in zip(self.x[keep], self.y[keep])]

    def main_points(self):
        m = self.main
        return self.x[m], self.y[m]

    def outline_points(self):
        """Outline marks of the largest component: the points a circle is fitted to."""
        m = self.outline & self.main
        return self.x[m], self.y[m]


def extract(grid, connectivity: int = 8) -> Shape:
    """
    Collect the marks of a Grid and their connected components.

    Raises
    ------
    ShapeError
        NO_MARKS if the grid has no foreground cell.
    """
    B = grid.mask
    i, j = np.nonzero(B)
    if i.size == 0:
        raise ShapeError(Reason.NO_MARKS, "The input contains no marks, only background.")

    labels, sizes = label_marks(B, connectivity)
    edge = outline_mask(B)
    shape = Shape(
        x=j.astype(float),
        y=i.astype(float),
        labels=labels[i, j],
        sizes=sizes,
        outline=edge[i, j],
        connectivity=connectivity,
    )
    logger.debug(
        "extracted %d marks in %d component(s), largest=%d, outline=%d",
        shape.count, shape.component_count, shape.largest_component_size, int(shape.outline.sum()),
    )
    return shape
