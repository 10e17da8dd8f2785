"""Acceptance thresholds and marker classification."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Mapping, Optional


@dataclass(frozen=True)
class MarkerSpec:
    """
    Decides which characters are marks (foreground).

    If `marker_chars` is given, only those characters are marks. Otherwise
    every character that is neither whitespace nor in `blank_chars` is a mark.
    """

    blank_chars: frozenset = frozenset(" ")
    marker_chars: Optional[frozenset] = None

    def is_mark(self, ch: str) -> bool:
        if self.marker_chars is not None:
            return ch in self.marker_chars
        return not ch.isspace() and ch not in self.blank_chars


@dataclass(frozen=True)
class ValidationConfig:
    """Controls the acceptance strictness of the validator."""

    marker: MarkerSpec = field(default_factory=MarkerSpec)

    # 4- or 8-neighbour adjacency between marks
    connectivity: int = 8

    # largest component must hold this share of all marks
    min_coverage_fraction: float = 1.0

    # fitted radius must be strictly greater (grid units)
    min_radius: float = 2.0

    # |residual| <= fraction * radius
    roundness_tolerance_fraction: float = 0.15

    # the band never narrows below this many grid units (cell quantization)
    min_roundness_band: float = 0.5

    # angular coverage: upper bound on sector count, and minimum
    # circumference (grid units) spanned by one sector
    angular_sector_count: int = 36
    min_sector_arc: float = 2.0
    min_sector_fraction: float = 0.9

    # grid units tolerated inside the roundness band before a mark counts as fill
    ring_thickness_allowance: float = 1.0

    def __post_init__(self):
        if self.connectivity not in (4, 8):
            raise ValueError(f"connectivity must be 4 or 8, got {self.connectivity!r}")
        if not 0.0 < self.min_coverage_fraction <= 1.0:
            raise ValueError("min_coverage_fraction must be in (0, 1]")
        if not self.min_radius > 0.0:
            raise ValueError("min_radius must be > 0")
        if not self.roundness_tolerance_fraction > 0.0:
            raise ValueError("roundness_tolerance_fraction must be > 0")
        if not self.min_roundness_band >= 0.0:
            raise ValueError("min_roundness_band must be >= 0")
        if int(self.angular_sector_count) != self.angular_sector_count or self.angular_sector_count <= 0:
            raise ValueError("angular_sector_count must be a positive integer")
        if not self.min_sector_arc > 0.0:
            raise ValueError("min_sector_arc must be > 0")
        if not 0.0 < self.min_sector_fraction <= 1.0:
            raise ValueError("min_sector_fraction must be in (0, 1]")
        if not self.ring_thickness_allowance >= 0.0:
            raise ValueError("ring_thickness_allowance must be >= 0")

    @classmethod
    def from_mapping(cls, options: Mapping) -> "ValidationConfig":
        """
        Build a config from plain options, e.g. a JSON object sent by the page.

        `marker_chars` / `blank_chars` may be strings or iterables of characters.
        Unknown keys raise ValueError.
        """
        options = dict(options)
        marker_chars = options.pop("marker_chars", None)
        blank_chars = options.pop("blank_chars", None)

        known = {f.name for f in fields(cls)} - {"marker"}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(f"Unknown config option(s): {', '.join(unknown)}")

        marker = MarkerSpec()
        if blank_chars is not None:
            marker = replace(marker, blank_chars=frozenset(blank_chars))
        if marker_chars is not None:
            marker = replace(marker, marker_chars=frozenset(marker_chars))
        return cls(marker=marker, **options)
