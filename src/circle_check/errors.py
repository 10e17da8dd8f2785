"""
===========================================================
circle_check.errors — rejection reasons and stage errors
===========================================================

Every rejection carries a `Reason` tag. Stages (parse, extract, fit) raise
a `CircleCheckError` subclass; the entry points turn it into a Verdict.
"""

# --- Imports --------------------------------------------------------------

from enum import Enum


# --- Reasons --------------------------------------------------------------

class Category(str, Enum):
    PARSE = "ParseError"
    SHAPE = "ShapeError"
    FIT = "FitError"
    INPUT = "InputError"
    INVALID_SHAPE = "InvalidShape"
    CHALLENGE = "ChallengeRule"


class Reason(str, Enum):
    """Tagged rejection reasons (value = tag used in serialized verdicts)."""

    # ParseError
    EMPTY = "Empty"
    RAGGED_ROWS = "RaggedRows"
    # ShapeError
    NO_MARKS = "NoMarks"
    # FitError
    TOO_FEW_POINTS = "TooFewPoints"
    DEGENERATE = "Degenerate"
    # InputError
    NOT_TEXT = "NotText"
    BAD_CONFIG = "BadConfig"
    # InvalidShape
    FRAGMENTED = "Fragmented"
    TOO_SMALL = "TooSmall"
    NOT_ROUND = "NotRound"
    INCOMPLETE = "Incomplete"
    FILLED = "Filled"
    # Strict challenge rules
    NOT_SQUARE = "NotSquare"
    EVEN_SIDE = "EvenSide"
    CHARACTER_COUNT = "CharacterCount"
    BACKGROUND_EXPECTED = "BackgroundExpected"
    LEAK = "Leak"

    @property
    def category(self) -> Category:
        return _CATEGORIES[self]


_CATEGORIES = {
    Reason.EMPTY: Category.PARSE,
    Reason.RAGGED_ROWS: Category.PARSE,
    Reason.NO_MARKS: Category.SHAPE,
    Reason.TOO_FEW_POINTS: Category.FIT,
    Reason.DEGENERATE: Category.FIT,
    Reason.NOT_TEXT: Category.INPUT,
    Reason.BAD_CONFIG: Category.INPUT,
    Reason.FRAGMENTED: Category.INVALID_SHAPE,
    Reason.TOO_SMALL: Category.INVALID_SHAPE,
    Reason.NOT_ROUND: Category.INVALID_SHAPE,
    Reason.INCOMPLETE: Category.INVALID_SHAPE,
    Reason.FILLED: Category.INVALID_SHAPE,
    Reason.NOT_SQUARE: Category.CHALLENGE,
    Reason.EVEN_SIDE: Category.CHALLENGE,
    Reason.CHARACTER_COUNT: Category.CHALLENGE,
    Reason.BACKGROUND_EXPECTED: Category.CHALLENGE,
    Reason.LEAK: Category.CHALLENGE,
}


# --- Exceptions -----------------------------------------------------------

class CircleCheckError(ValueError):
    """
    Base class for errors raised by the pipeline stages.

    Parameters
    ----------
    reason : Reason
        Tag identifying the failure.
    message : str
        Human-readable explanation.
    offending : sequence of (x, y), optional
        Cell coordinates responsible for the failure.
    """

    def __init__(self, reason: Reason, message: str, offending=()):
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.offending = tuple(offending)


class ParseError(CircleCheckError):
    """Malformed text input (empty, ragged rows)."""


class ShapeError(CircleCheckError):
    """No foreground content."""


class FitError(CircleCheckError):
    """Too few or collinear points for a circle fit."""
