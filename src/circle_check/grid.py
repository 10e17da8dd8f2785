"""
===========================================================
circle_check.grid — text to MARK/BLANK matrix
===========================================================

Coordinates: a cell at row `i`, column `j` has x = j, y = i (cell-index
coordinates, cell centers on integers, y growing downward).
"""

# --- Imports --------------------------------------------------------------

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import MarkerSpec
from .errors import ParseError, Reason

logger = logging.getLogger(__name__)


# --- Grid -----------------------------------------------------------------

@dataclass(frozen=True)
class Grid:
    rows: tuple
    mask: np.ndarray  # bool, shape (height, width), True = MARK

    @property
    def height(self) -> int:
        return self.mask.shape[0]

    @property
    def width(self) -> int:
        return self.mask.shape[1]

    def char_at(self, x: int, y: int) -> str:
        return self.rows[y][x]


def split_rows(text: str) -> list[str]:
    """Split on line breaks and drop trailing empty lines."""
    rows = text.splitlines()
    while rows and rows[-1] == "":
        rows.pop()
    return rows


def parse(text: str, marker_spec: Optional[MarkerSpec] = None) -> Grid:
    """
    Turn raw text into a rectangular MARK/BLANK grid.

    Parameters
    ----------
    text : str
        Submitted text block.
    marker_spec : MarkerSpec, optional
        Character classification (default: space and whitespace are blank).

    Returns
    -------
    Grid

    Raises
    ------
    ParseError
        EMPTY if no line remains, RAGGED_ROWS if rows differ in length.
    """
    marker_spec = marker_spec or MarkerSpec()
    rows = split_rows(text)
    if not rows:
        raise ParseError(Reason.EMPTY, "The input is empty.")

    width = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != width:
            raise ParseError(
                Reason.RAGGED_ROWS,
                f"Row {i} has {len(row)} characters, expected {width} (rows must be of equal length).",
            )

    mask = np.array([[marker_spec.is_mark(ch) for ch in row] for row in rows], dtype=bool)
    logger.debug("parsed grid %dx%d with %d marks", width, len(rows), int(mask.sum()))
    return Grid(rows=tuple(rows), mask=mask)
