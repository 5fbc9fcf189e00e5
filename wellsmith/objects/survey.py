"""Directional survey stations."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SurveyStation:
    """A surveyed point on the well path.

    Attributes:
        md: Measured depth (m).
        tvd: True vertical depth (m). ``None`` means not yet computed, in
            which case the station is treated as vertical (``tvd == md``).
    """

    md: float
    tvd: Optional[float] = None

    @property
    def tvd_or_md(self) -> float:
        """TVD, or MD when TVD is unknown."""
        return self.md if self.tvd is None else self.tvd
