"""
===========================================================
Validator tests (text -> Verdict)
===========================================================

Synthetic answers are built on NumPy grids: band rings (cells whose
distance to the center lies in [R - 0.5, R + 0.5]), midpoint-algorithm
circles, filled disks, and damaged variants of those.
"""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
from circle_check import ValidationConfig, validate
from circle_check.errors import Category, Reason


# --- Helpers --------------------------------------------------------------

def to_text(M, mark="#", blank=" "):
    return "\n".join("".join(mark if v else blank for v in row) for row in M)


def distances(size, c):
    Y, X = np.mgrid[0:size, 0:size]
    return np.hypot(X - c, Y - c), np.degrees(np.arctan2(Y - c, X - c)) % 360.0


def band_ring(R, pad=0):
    size = 2*R + 1 + 2*pad
    d, _ = distances(size, R + pad)
    return (d >= R - 0.5) & (d <= R + 0.5)


def midpoint_circle(r, pad=1):
    size = 2*r + 1 + 2*pad
    c = r + pad
    M = np.zeros((size, size), bool)
    x, y, err = 0, r, 1 - r
    while x <= y:
        for dx, dy in ((x, y), (y, x), (-x, y), (-y, x), (x, -y), (y, -x), (-x, -y), (-y, -x)):
            M[c + dy, c + dx] = True
        if err < 0:
            err += 2*x + 3
        else:
            err += 2*(x - y) + 5
            y -= 1
        x += 1
    return M


def erase_arc(M, start_deg, stop_deg):
    size = M.shape[0]
    _, ang = distances(size, (size - 1) / 2)
    out = M.copy()
    out[(ang >= start_deg) & (ang < stop_deg)] = False
    return out


# --- Valid circles ----------------------------------------------------------

def test_band_ring_21x21_is_valid():
    M = band_ring(10)
    assert M.shape == (21, 21)
    v = validate(to_text(M))
    assert v.is_valid, v.message
    cx, cy, r = v.circle
    assert np.isclose(cx, 10.0, atol=1e-6) and np.isclose(cy, 10.0, atol=1e-6)
    assert np.isclose(r, 10.0, atol=0.2)
    assert v.message.startswith("This is a valid text circle of radius")


@pytest.mark.parametrize("r", [3, 4, 5, 6, 8, 10, 15, 25])
def test_midpoint_circles_are_valid(r):
    v = validate(to_text(midpoint_circle(r)))
    assert v.is_valid, f"r={r}: {v}"


def test_other_characters():
    text = to_text(midpoint_circle(6), mark="o", blank=".")
    assert validate(text, {"blank_chars": "."}).is_valid
    # '.' counts as a mark unless declared blank
    assert not validate(text).is_valid


# --- Input structure errors ------------------------------------------------

def test_ragged_rows():
    text = to_text(band_ring(5)) + "#"
    v = validate(text)
    assert v.reason is Reason.RAGGED_ROWS
    assert v.reason.category is Category.PARSE


def test_empty():
    assert validate("").reason is Reason.EMPTY


def test_all_blank():
    v = validate(to_text(np.zeros((7, 7), bool)))
    assert v.reason is Reason.NO_MARKS
    assert v.reason.category is Category.SHAPE


def test_too_few_points():
    v = validate(" # \n   \n # ")
    assert v.reason is Reason.TOO_FEW_POINTS
    assert v.reason.category is Category.FIT


def test_collinear_marks():
    assert validate("#######").reason is Reason.DEGENERATE


# --- Acceptance criteria ---------------------------------------------------

def test_stray_mark_is_fragmented():
    M = band_ring(10)
    M[0, 0] = True
    v = validate(to_text(M))
    assert v.reason is Reason.FRAGMENTED
    assert v.offending == ((0, 0),)


def test_stray_mark_within_coverage_tolerance():
    M = band_ring(10)
    M[0, 0] = True
    v = validate(to_text(M), ValidationConfig(min_coverage_fraction=0.95))
    assert v.is_valid, v.message


def test_four_connectivity_breaks_diagonal_steps():
    text = to_text(midpoint_circle(10))
    assert validate(text, {"connectivity": 4}).reason is Reason.FRAGMENTED


def test_tiny_ring_is_too_small():
    v = validate("###\n# #\n###")
    assert v.reason is Reason.TOO_SMALL


def test_square_is_not_round():
    M = np.zeros((15, 15), bool)
    M[0, :] = M[-1, :] = M[:, 0] = M[:, -1] = True
    v = validate(to_text(M))
    assert v.reason is Reason.NOT_ROUND
    assert v.offending[0] in {(0, 0), (14, 0), (0, 14), (14, 14)}


@pytest.mark.parametrize("R", [10, 20])
def test_quarter_erased_is_incomplete(R):
    v = validate(to_text(erase_arc(band_ring(R), 0.0, 90.0)))
    assert v.reason is Reason.INCOMPLETE


@pytest.mark.parametrize("r", [10, 20])
@pytest.mark.parametrize("start", [0.0, 45.0, 135.0, 250.0])
def test_quarter_erased_midpoint_circle_is_incomplete(r, start):
    v = validate(to_text(erase_arc(midpoint_circle(r), start, start + 90.0)))
    assert v.reason is Reason.INCOMPLETE, f"r={r}, start={start}: {v}"


def test_half_circle_is_incomplete():
    assert validate(to_text(erase_arc(midpoint_circle(12), 180.0, 360.0))).reason is Reason.INCOMPLETE


def test_small_gap_tolerated():
    # a single missing cell does not empty a sector
    M = band_ring(15)
    M[0, 15] = False
    assert validate(to_text(M)).is_valid


@pytest.mark.parametrize("R", [3, 4, 5, 6, 7, 8, 9, 10])
def test_filled_disk(R):
    d, _ = distances(2*R + 3, R + 1)
    v = validate(to_text(d <= R))
    assert v.reason is Reason.FILLED, f"R={R}: {v}"
    assert (R + 1, R + 1) in v.offending


def test_roundness_band_has_half_cell_floor():
    # small radii: the relative band is narrower than one cell step
    d, _ = distances(9, 4)
    text = to_text(d <= 3)
    assert validate(text, {"min_roundness_band": 0.0}).reason is Reason.NOT_ROUND
    assert validate(text).reason is Reason.FILLED


def test_spoke_toward_center_is_not_round():
    M = band_ring(10)
    M[10, 1:10] = True   # attached to the ring at (0, 10)
    v = validate(to_text(M))
    assert v.reason is Reason.NOT_ROUND
    assert v.offending == ((9, 10),)


# --- Properties -----------------------------------------------------------

def test_idempotent():
    text = to_text(erase_arc(band_ring(12), 30.0, 150.0))
    a, b = validate(text), validate(text)
    assert a == b


def test_scaling_relative_tolerances():
    small = validate(to_text(band_ring(10)))
    large = validate(to_text(band_ring(20)))
    assert small.status == large.status == "valid"


def test_concurrent_calls_agree():
    texts = [to_text(band_ring(10)), to_text(erase_arc(band_ring(10), 0, 90)), "ab\nc"]
    expected = [validate(t).to_record() for t in texts]
    with ThreadPoolExecutor(max_workers=4) as pool:
        got = list(pool.map(lambda t: validate(t).to_record(), texts * 5))
    assert got == expected * 5


# --- Config and record --------------------------------------------------------

def test_mapping_config():
    assert validate(to_text(band_ring(10)), {"min_radius": 12.0}).reason is Reason.TOO_SMALL


@pytest.mark.parametrize("config", [
    {"connectivity": 6},
    {"connectivity": "8"},
    {"min_radius": -1},
    {"min_radius": "two"},
    {"no_such_option": 1},
    ["connectivity", 8],
])
def test_bad_config_is_an_invalid_verdict(config):
    v = validate(to_text(band_ring(10)), config)
    assert v.reason is Reason.BAD_CONFIG
    assert v.reason.category is Category.INPUT
    assert v.to_record()["status"] == "invalid"


def test_unknown_rules_is_an_invalid_verdict():
    assert validate("#", rules="other").reason is Reason.BAD_CONFIG


@pytest.mark.parametrize("text", [None, 42, b"###\n# #\n###", ["###"]])
def test_non_text_input_is_an_invalid_verdict(text):
    for rules in ("fit", "challenge"):
        v = validate(text, rules=rules)
        assert v.reason is Reason.NOT_TEXT
        assert not v.is_valid


def test_verdict_record():
    rec = validate(to_text(band_ring(10))).to_record()
    assert rec["status"] == "valid"
    assert rec["details"]["reason"] is None
    assert set(rec["details"]["circle"]) == {"cx", "cy", "radius"}

    M = band_ring(10)
    M[0, 0] = True
    rec = validate(to_text(M)).to_record()
    assert rec["status"] == "invalid"
    assert rec["details"]["reason"] == "Fragmented"
    assert rec["details"]["category"] == "InvalidShape"
    assert rec["details"]["offending"] == [[0, 0]]
