"""Volumetric aggregation over depth intervals.

Layer 2: Primitives - Pure operations.

Answers "how much fluid lies between depth A and depth B" for annular
volume with pipe in hole, string capacity, string displacement, open-hole
volume and steel volume. All functions are total: they never raise,
inverted intervals are swapped and malformed geometry is clamped.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field

import numpy as np
from scipy.optimize import brentq

from wellsmith.objects.sections import AnnulusSection, PipeSection, _as_float
from wellsmith.objects.slices import DepthSlice
from wellsmith.primitives.geometry import (
    Section,
    capacity_per_meter,
    circle_area,
    displacement_per_meter,
    max_depth,
    section_capacity,
    section_displacement,
    section_span,
    steel_cross_section,
)
from wellsmith.primitives.slicing import slice_geometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntervalVolumes:
    """Volumes contained in a depth interval.

    Attributes:
        top: Interval top (m MD).
        bottom: Interval bottom (m MD).
        annular_with_pipe: Annulus volume with the string in hole (m³).
        string_capacity: Inner bore volume of the string (m³).
        string_displacement: Volume swept by the string OD, i.e. wet
            displacement (m³).
        open_hole: Hole/casing volume ignoring the string (m³).
        string_metal: Steel volume of the string, i.e. dry displacement (m³).
    """

    top: float
    bottom: float
    annular_with_pipe: float = 0.0
    string_capacity: float = 0.0
    string_displacement: float = 0.0
    open_hole: float = 0.0
    string_metal: float = 0.0

    @property
    def length(self) -> float:
        """Interval length (m)."""
        return self.bottom - self.top

    def _per_meter(self, volume: float) -> float:
        return volume / self.length if self.length > 0 else 0.0

    @property
    def annular_per_meter(self) -> float:
        return self._per_meter(self.annular_with_pipe)

    @property
    def string_capacity_per_meter(self) -> float:
        return self._per_meter(self.string_capacity)

    @property
    def string_displacement_per_meter(self) -> float:
        return self._per_meter(self.string_displacement)

    @property
    def open_hole_per_meter(self) -> float:
        return self._per_meter(self.open_hole)

    @property
    def string_metal_per_meter(self) -> float:
        return self._per_meter(self.string_metal)

    @property
    def identity_check(self) -> float:
        """Open hole minus (annulus + bore + steel).

        Zero wherever the string sits inside defined hole; anything else
        points at pipe outside the hole or gaps in the annulus list.
        """
        return self.open_hole - (
            self.annular_with_pipe + self.string_capacity + self.string_metal
        )

    def as_dict(self) -> dict[str, float]:
        """Plain dictionary including length and per-metre values."""
        data = asdict(self)
        data.update(
            length=self.length,
            annular_per_meter=self.annular_per_meter,
            string_capacity_per_meter=self.string_capacity_per_meter,
            string_displacement_per_meter=self.string_displacement_per_meter,
            open_hole_per_meter=self.open_hole_per_meter,
            string_metal_per_meter=self.string_metal_per_meter,
            identity_check=self.identity_check,
        )
        return data


@dataclass(frozen=True)
class EqualVolumeResult:
    """Pipe-in interval holding the open-hole volume of a target interval.

    Attributes:
        length: Length of pipe-in interval measured up from the bottom (m).
        total: Annular plus string volume of that interval (m³).
        annular: Annular part (m³).
        string: String capacity part (m³).
        mud_top: Top of the fluid column with pipe in hole (m MD).
    """

    length: float
    total: float
    annular: float
    string: float
    mud_top: float


@dataclass(frozen=True)
class VolumeTotals:
    """Whole-well volumes.

    Attributes:
        string_capacity: Total inner bore volume (m³).
        string_displacement: Total OD-swept volume (m³).
        string_metal: Total steel volume (m³).
        annular_with_pipe: Annulus volume with string in hole (m³).
        open_hole: Hole/casing volume ignoring the string (m³).
        tank_volume: Active surface tank volume (m³).
        surface_line_volume: Surface line volume (m³).
        slices: Depth slices the annular volume was built from.
    """

    string_capacity: float
    string_displacement: float
    string_metal: float
    annular_with_pipe: float
    open_hole: float
    tank_volume: float = 0.0
    surface_line_volume: float = 0.0
    slices: list[DepthSlice] = field(default_factory=list)

    @property
    def total_circulating_volume(self) -> float:
        """String + annulus + tanks + surface lines (m³)."""
        return (
            self.string_capacity
            + self.annular_with_pipe
            + self.tank_volume
            + self.surface_line_volume
        )


def _clean_depth(value: float, deepest: float) -> float:
    """Replace NaN by 0 and infinities by the nearest end of the well."""
    value = float(value)
    if np.isnan(value):
        return 0.0
    if np.isinf(value):
        return deepest if value > 0 else 0.0
    return value


def _normalize_interval(
    top: float,
    bottom: float,
    pipes: Sequence[PipeSection],
    annuli: Sequence[AnnulusSection],
) -> tuple[float, float]:
    deepest = max_depth(pipes, annuli)
    a = _clean_depth(top, deepest)
    b = _clean_depth(bottom, deepest)
    return (a, b) if a <= b else (b, a)


def _overlap(section: Section, top: float, bottom: float) -> float:
    s_top, s_bottom = section_span(section)
    return max(0.0, min(s_bottom, bottom) - max(s_top, top))


def volumes_between(
    pipes: Sequence[PipeSection],
    annuli: Sequence[AnnulusSection],
    top: float,
    bottom: float,
    slices: Sequence[DepthSlice] | None = None,
) -> IntervalVolumes:
    """Volumes between two measured depths.

    Args:
        pipes: Drill-string sections.
        annuli: Annulus sections.
        top: Interval top (m MD). Swapped with ``bottom`` if deeper.
        bottom: Interval bottom (m MD).
        slices: Pre-built slices from ``slice_geometry``; built on demand
            when omitted.

    Returns:
        IntervalVolumes for ``[top, bottom]``.

    Example:
        >>> from wellsmith.objects import AnnulusSection, PipeSection
        >>> annuli = [AnnulusSection(top=0, length=500, inner_diameter=0.340, is_cased=True),
        ...           AnnulusSection(top=500, length=2000, inner_diameter=0.311)]
        >>> pipes = [PipeSection(top=0, length=2500, inner_diameter=0.0953, outer_diameter=0.127)]
        >>> v = volumes_between(pipes, annuli, 0, 2500)
        >>> round(v.string_capacity, 2)
        17.83
    """
    lo, hi = _normalize_interval(top, bottom, pipes, annuli)
    if slices is None:
        slices = slice_geometry(pipes, annuli)

    annular = 0.0
    for s in slices:
        overlap = min(s.bottom, hi) - max(s.top, lo)
        if overlap > 0:
            annular += s.area * overlap

    capacity = displacement = metal = 0.0
    for pipe in pipes:
        overlap = _overlap(pipe, lo, hi)
        if overlap > 0:
            capacity += capacity_per_meter(pipe) * overlap
            displacement += displacement_per_meter(pipe) * overlap
            metal += steel_cross_section(pipe) * overlap

    open_hole = 0.0
    for annulus in annuli:
        overlap = _overlap(annulus, lo, hi)
        if overlap > 0:
            open_hole += circle_area(annulus.inner_diameter) * overlap

    return IntervalVolumes(
        top=lo,
        bottom=hi,
        annular_with_pipe=annular,
        string_capacity=capacity,
        string_displacement=displacement,
        open_hole=open_hole,
        string_metal=metal,
    )


def total_mud_with_pipe(
    pipes: Sequence[PipeSection],
    annuli: Sequence[AnnulusSection],
    top: float,
    bottom: float,
) -> tuple[float, float, float]:
    """Fluid volume inside and outside the string over an interval.

    Returns:
        Tuple ``(total, annular, string)`` in m³.
    """
    v = volumes_between(pipes, annuli, top, bottom)
    return (
        v.annular_with_pipe + v.string_capacity,
        v.annular_with_pipe,
        v.string_capacity,
    )


def solve_pipe_in_for_equal_volume(
    pipes: Sequence[PipeSection],
    annuli: Sequence[AnnulusSection],
    top: float,
    bottom: float,
    xtol: float = 1e-6,
    maxiter: int = 100,
) -> EqualVolumeResult:
    """Find how tall a column the open-hole volume of an interval makes with pipe in.

    The fluid that fills ``[top, bottom]`` of open hole occupies a taller
    interval ``[bottom - L, bottom]`` once the string is run in, split
    between the annulus and the string bore. ``L`` is found by root finding
    on ``annular + capacity - target``, which is continuous and
    non-decreasing in ``L``.

    Args:
        pipes: Drill-string sections.
        annuli: Annulus sections.
        top: Target interval top (m MD).
        bottom: Target interval bottom (m MD).
        xtol: Absolute tolerance on ``L`` (m).
        maxiter: Iteration cap for the root finder.

    Returns:
        EqualVolumeResult. When even the full column to surface cannot
        hold the target volume, the plain interval is returned.
    """
    t, b = _normalize_interval(top, bottom, pipes, annuli)
    if b <= t:
        return EqualVolumeResult(length=0.0, total=0.0, annular=0.0, string=0.0, mud_top=b)

    slices = slice_geometry(pipes, annuli)
    target = volumes_between(pipes, annuli, t, b, slices=slices).open_hole

    def _with_pipe(length: float) -> IntervalVolumes:
        return volumes_between(pipes, annuli, max(0.0, b - length), b, slices=slices)

    def _residual(length: float) -> float:
        v = _with_pipe(length)
        return v.annular_with_pipe + v.string_capacity - target

    upper = max(0.0, b)
    if _residual(upper) < 0:
        v = volumes_between(pipes, annuli, t, b, slices=slices)
        logger.debug(
            f"Pipe-in column cannot hold {target:.3f} m³ below {b:g} m; "
            "returning the plain interval"
        )
        return EqualVolumeResult(
            length=b - t,
            total=v.annular_with_pipe + v.string_capacity,
            annular=v.annular_with_pipe,
            string=v.string_capacity,
            mud_top=t,
        )

    length = brentq(_residual, 0.0, upper, xtol=xtol, maxiter=maxiter)
    v = _with_pipe(length)
    return EqualVolumeResult(
        length=float(length),
        total=v.annular_with_pipe + v.string_capacity,
        annular=v.annular_with_pipe,
        string=v.string_capacity,
        mud_top=max(0.0, b - length),
    )


def well_totals(
    pipes: Sequence[PipeSection],
    annuli: Sequence[AnnulusSection],
    tank_volume: float = 0.0,
    surface_line_volume: float = 0.0,
) -> VolumeTotals:
    """Whole-well capacity, displacement and circulating volume.

    Args:
        pipes: Drill-string sections.
        annuli: Annulus sections.
        tank_volume: Active surface tank volume (m³), negatives clamp to 0.
        surface_line_volume: Surface line volume (m³), negatives clamp to 0.

    Returns:
        VolumeTotals.
    """
    slices = slice_geometry(pipes, annuli)
    return VolumeTotals(
        string_capacity=sum(section_capacity(p) for p in pipes),
        string_displacement=sum(section_displacement(p) for p in pipes),
        string_metal=sum(steel_cross_section(p) * max(p.length, 0.0) for p in pipes),
        annular_with_pipe=sum(s.volume for s in slices),
        open_hole=sum(section_capacity(a) for a in annuli),
        tank_volume=max(_as_float(tank_volume), 0.0),
        surface_line_volume=max(_as_float(surface_line_volume), 0.0),
        slices=slices,
    )
