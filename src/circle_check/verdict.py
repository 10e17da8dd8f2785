"""Verdict value returned by the entry points, and its serialized record."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional

from .errors import CircleCheckError, Reason


@dataclass(frozen=True)
class Verdict:
    """
    Pass/fail decision with diagnostics.

    `reason` is None for a valid circle. `offending` lists (x, y) cells,
    x counted from the left and y from the top, both from 0.
    """

    reason: Optional[Reason]
    message: str
    offending: tuple = ()
    circle: Optional[tuple] = None  # (cx, cy, radius)
    diagram: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.reason is None

    @property
    def status(self) -> str:
        return "valid" if self.is_valid else "invalid"

    @classmethod
    def valid(cls, message: str, circle=None) -> "Verdict":
        return cls(None, message, circle=circle)

    @classmethod
    def invalid(cls, reason: Reason, message: str, offending=(), circle=None, diagram=None) -> "Verdict":
        offending = tuple((int(x), int(y)) for x, y in offending)
        return cls(reason, message, offending, circle, diagram)

    @classmethod
    def from_error(cls, err: CircleCheckError) -> "Verdict":
        return cls.invalid(err.reason, err.message, err.offending)

    def to_record(self) -> dict:
        circle = None
        if self.circle is not None:
            cx, cy, r = self.circle
            circle = {"cx": float(cx), "cy": float(cy), "radius": float(r)}
        return {
            "status": self.status,
            "details": {
                "reason": self.reason.value if self.reason else None,
                "category": self.reason.category.value if self.reason else None,
                "message": self.message,
                "offending": [list(p) for p in self.offending],
                "circle": circle,
                "diagram": self.diagram,
            },
        }

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_record(), **kwargs)

    def __str__(self) -> str:
        if self.is_valid:
            return f"Valid. {self.message}"
        return f"Invalid ({self.reason.value}). {self.message}"
