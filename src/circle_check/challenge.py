"""
===========================================================
circle_check.challenge — strict rules of the golf challenge
===========================================================

The challenge accepts a square canvas of odd side 2r + 1 drawn with exactly
two characters. The background character is the one at the center cell.
Every cell at distance <= r - 1 or >= r + 1 from the center must be
background, and the drawn ring must be closed: no 4-neighbour path of
background cells may lead from the center to the border.
"""

# --- Imports --------------------------------------------------------------

import logging
from collections import deque
from typing import Optional

import numpy as np

from .errors import Reason
from .verdict import Verdict

logger = logging.getLogger(__name__)

PAVING_CANDIDATES = ("#", "X", ".")


# --- Helpers --------------------------------------------------------------

def distinct_characters(rows) -> list[str]:
    """Characters of the canvas in order of first appearance."""
    return list(dict.fromkeys("".join(rows)))


def required_background(side: int) -> np.ndarray:
    """Cells that must hold the background character (outside the ring band)."""
    r = side // 2
    Y, X = np.mgrid[0:side, 0:side]
    d = np.hypot(X - r, Y - r)
    return (d <= r - 1) | (d >= r + 1)


def leak_path(open_cells: np.ndarray, start) -> Optional[list[tuple[int, int]]]:
    """
    Shortest 4-neighbour path through `open_cells` from `start` (x, y) to
    any border cell, as a list of (x, y) from start to border, or None.
    """
    H, W = open_cells.shape
    parent = {start: None}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        if x == 0 or y == 0 or x == W - 1 or y == H - 1:
            path = []
            node = (x, y)
            while node is not None:
                path.append(node)
                node = parent[node]
            return path[::-1]
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if 0 <= nx < W and 0 <= ny < H and open_cells[ny, nx] and (nx, ny) not in parent:
                parent[(nx, ny)] = (x, y)
                queue.append((nx, ny))
    return None


def path_diagram(rows, path, paving: str) -> str:
    """Redraw the canvas with the path cells replaced by `paving`."""
    cells = [list(row) for row in rows]
    for x, y in path:
        cells[y][x] = paving
    return "\n".join("".join(row) for row in cells)


# --- Entry point ----------------------------------------------------------

def check_challenge(text: str) -> Verdict:
    """
    Apply the challenge's own acceptance rules to a text block.

    Returns
    -------
    Verdict
        Invalid verdicts are tagged EMPTY, NOT_SQUARE, EVEN_SIDE,
        CHARACTER_COUNT, BACKGROUND_EXPECTED (offending cells listed) or
        LEAK (path listed and drawn in `diagram`).
    """
    if text == "":
        return Verdict.invalid(Reason.EMPTY, "The input is empty.")

    # no trimming: a blank last line is a row of width 0
    rows = text.splitlines()

    side = len(rows)
    if any(len(row) != side for row in rows):
        return Verdict.invalid(Reason.NOT_SQUARE, "The input is not square.")
    if side % 2 == 0:
        return Verdict.invalid(Reason.EVEN_SIDE, "The side length of the square is not odd.")

    used = distinct_characters(rows)
    if len(used) != 2:
        return Verdict.invalid(
            Reason.CHARACTER_COUNT,
            f"The input does not contain 2 distinct characters (found {len(used)}).",
        )

    r = side // 2
    background = rows[r][r]
    G = np.array([list(row) for row in rows])
    wrong = required_background(side) & (G != background)
    if wrong.any():
        ys, xs = np.nonzero(wrong)
        cells = "\n".join(f"({x}, {y})" for x, y in zip(xs, ys))
        return Verdict.invalid(
            Reason.BACKGROUND_EXPECTED,
            f'The following positions (x, y) from (0, 0) at left top should be background character "{background}":\n{cells}',
            offending=zip(xs, ys),
        )

    path = leak_path(G == background, (r, r))
    if path is not None:
        paving = next(c for c in PAVING_CANDIDATES if c not in used)
        logger.debug("leak path of %d cells from the center", len(path))
        return Verdict.invalid(
            Reason.LEAK,
            "There should not be a path from inside the circle to outside.",
            offending=path,
            diagram=path_diagram(rows, path, paving),
        )

    return Verdict.valid(f"This is a valid text circle of radius {r}.", circle=(float(r), float(r), float(r)))
