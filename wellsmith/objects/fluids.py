"""Fluid layers and mud placement steps."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from wellsmith.objects.sections import _as_float

DEFAULT_BASE_COLOR = "#808080"
DEFAULT_STEP_COLOR = "#007AFF"


class FluidDomain(str, Enum):
    """Side of the drill string a fluid layer occupies."""

    STRING = "string"
    ANNULUS = "annulus"


class Placement(str, Enum):
    """Where a mud step is placed."""

    ANNULUS = "annulus"
    STRING = "string"
    BOTH = "both"

    @classmethod
    def parse(cls, value) -> "Placement":
        """Parse a placement name case-insensitively.

        Unknown values fall back to ``ANNULUS``.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.ANNULUS

    @property
    def domains(self) -> tuple[FluidDomain, ...]:
        """Fluid domains this placement writes to."""
        if self is Placement.BOTH:
            return (FluidDomain.ANNULUS, FluidDomain.STRING)
        if self is Placement.STRING:
            return (FluidDomain.STRING,)
        return (FluidDomain.ANNULUS,)

    @property
    def rank(self) -> int:
        """Sort rank used when ordering steps: annulus, string, both."""
        return {Placement.ANNULUS: 0, Placement.STRING: 1, Placement.BOTH: 2}[self]


@dataclass(frozen=True)
class FluidLayer:
    """A constant-density fluid occupying a depth band in one domain.

    Attributes:
        domain: String or annulus.
        top: Layer top (m MD).
        bottom: Layer bottom (m MD).
        name: Fluid name, e.g. "Base" or "Balance Slug".
        density: Fluid density (kg/m³).
        color: Display color as ``#RRGGBB``.
        fluid_ref: Optional reference to a named mud.
    """

    domain: FluidDomain
    top: float
    bottom: float
    name: str
    density: float
    color: str = DEFAULT_BASE_COLOR
    fluid_ref: Optional[str] = None

    def __post_init__(self) -> None:
        """Normalize numeric fields and the domain."""
        object.__setattr__(self, "domain", FluidDomain(self.domain))
        for field_name in ("top", "bottom", "density"):
            object.__setattr__(self, field_name, _as_float(getattr(self, field_name)))

    @property
    def length(self) -> float:
        """Layer length along MD (m)."""
        return abs(self.bottom - self.top)


@dataclass(frozen=True)
class MudStep:
    """A user-authored candidate fluid placement.

    Steps need not be contiguous, ordered, or have ``top <= bottom``.

    Attributes:
        name: Step name.
        top: Interval top (m MD).
        bottom: Interval bottom (m MD).
        density: Fluid density (kg/m³).
        placement: Annulus, string, or both.
        color: Display color as ``#RRGGBB``.
        fluid_ref: Optional reference to a named mud.
    """

    name: str
    top: float
    bottom: float
    density: float
    placement: Placement = Placement.ANNULUS
    color: str = DEFAULT_STEP_COLOR
    fluid_ref: Optional[str] = None

    def __post_init__(self) -> None:
        """Normalize numeric fields and the placement."""
        object.__setattr__(self, "placement", Placement.parse(self.placement))
        for field_name in ("top", "bottom", "density"):
            object.__setattr__(self, field_name, _as_float(getattr(self, field_name)))

    def to_layer(self, domain: FluidDomain) -> FluidLayer:
        """Layer covering this step's normalized interval in ``domain``."""
        return FluidLayer(
            domain=domain,
            top=min(self.top, self.bottom),
            bottom=max(self.top, self.bottom),
            name=self.name,
            density=self.density,
            color=self.color,
            fluid_ref=self.fluid_ref,
        )
