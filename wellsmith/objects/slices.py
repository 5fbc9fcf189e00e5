"""Depth slices produced by overlaying pipe and annulus segmentations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DepthSlice:
    """A depth band in which both the annulus and the pipe are constant.

    Attributes:
        top: Slice top (m MD).
        bottom: Slice bottom (m MD).
        area: Annular cross-section with pipe (m²).
        volume: ``area * (bottom - top)`` (m³).
    """

    top: float
    bottom: float
    area: float
    volume: float

    @property
    def length(self) -> float:
        """Slice length (m)."""
        return self.bottom - self.top
