"""Drill-string and annulus sections along measured depth.

Two independent depth-ordered segmentations describe a well: the drill
string (pipe sections) and the borehole/casing wall (annulus sections).
Their boundaries need not align.
"""

from dataclasses import dataclass

import numpy as np


def _as_float(value) -> float:
    """Coerce to float; non-numeric or non-finite input becomes 0.0."""
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    return result if np.isfinite(result) else 0.0


@dataclass(frozen=True)
class PipeSection:
    """One drill-string section.

    Attributes:
        top: Measured depth of the section top (m).
        length: Section length along MD (m).
        inner_diameter: Pipe bore (m).
        outer_diameter: Pipe OD (m).
        name: Optional display name, e.g. '5" DP'.
    """

    top: float
    length: float
    inner_diameter: float
    outer_diameter: float
    name: str = ""

    def __post_init__(self) -> None:
        """Normalize numeric fields to finite floats."""
        for field_name in ("top", "length", "inner_diameter", "outer_diameter"):
            object.__setattr__(self, field_name, _as_float(getattr(self, field_name)))

    @property
    def bottom(self) -> float:
        """Measured depth of the section bottom (m)."""
        return self.top + self.length

    def __repr__(self) -> str:
        """String representation."""
        name_str = f"'{self.name}', " if self.name else ""
        return (
            f"PipeSection({name_str}{self.top:g}-{self.bottom:g} m, "
            f"ID={self.inner_diameter:g}, OD={self.outer_diameter:g})"
        )


@dataclass(frozen=True)
class AnnulusSection:
    """One borehole or casing section.

    ``inner_diameter`` is the hole or casing ID, i.e. the outer wall of the
    annulus. ``outer_diameter`` is the casing OD and is informational only.

    Attributes:
        top: Measured depth of the section top (m).
        length: Section length along MD (m).
        inner_diameter: Hole or casing ID (m).
        outer_diameter: Casing OD (m), 0 for open hole.
        is_cased: True for cased hole.
        name: Optional display name.
    """

    top: float
    length: float
    inner_diameter: float
    outer_diameter: float = 0.0
    is_cased: bool = False
    name: str = ""

    def __post_init__(self) -> None:
        """Normalize numeric fields to finite floats."""
        for field_name in ("top", "length", "inner_diameter", "outer_diameter"):
            object.__setattr__(self, field_name, _as_float(getattr(self, field_name)))
        object.__setattr__(self, "is_cased", bool(self.is_cased))

    @property
    def bottom(self) -> float:
        """Measured depth of the section bottom (m)."""
        return self.top + self.length

    def __repr__(self) -> str:
        """String representation."""
        kind = "cased" if self.is_cased else "open"
        name_str = f"'{self.name}', " if self.name else ""
        return (
            f"AnnulusSection({name_str}{self.top:g}-{self.bottom:g} m, "
            f"ID={self.inner_diameter:g}, {kind})"
        )
