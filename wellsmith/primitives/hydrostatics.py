"""Hydrostatic pressure of piecewise-constant fluid columns.

Layer 2: Primitives - Pure operations.

Fluid layers are indexed by measured depth; pressure is integrated over
true vertical depth through an MD→TVD mapping. Pressures are in kPa for
densities in kg/m³ and depths in metres.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Optional, Union

import numpy as np

from wellsmith.objects.fluids import FluidLayer
from wellsmith.objects.survey import SurveyStation

GRAVITY = 9.80665  # m/s²

TvdFunction = Callable[[float], float]


class TvdSampler:
    """Linear MD→TVD interpolation over survey stations.

    Stations are sorted by MD and repeated MDs are dropped (first wins).
    Stations without TVD are treated as vertical. Outside the surveyed
    range the first or last TVD is returned; with no stations the well
    is vertical and ``tvd(md) == md``.

    Example:
        >>> from wellsmith.objects import SurveyStation
        >>> sampler = TvdSampler([SurveyStation(0, 0), SurveyStation(1000, 800)])
        >>> sampler(500.0)
        400.0
    """

    def __init__(self, stations: Iterable[SurveyStation] = ()):
        md: list[float] = []
        tvd: list[float] = []
        for station in sorted(stations, key=lambda s: s.md):
            if md and station.md <= md[-1]:
                continue
            md.append(float(station.md))
            tvd.append(float(station.tvd_or_md))
        self.md = np.asarray(md, dtype=np.float64)
        self.tvd_values = np.asarray(tvd, dtype=np.float64)

    def tvd(self, md: Union[np.ndarray, float]) -> Union[np.ndarray, float]:
        """TVD at one or more measured depths."""
        if self.md.size == 0:
            return md if isinstance(md, np.ndarray) else float(md)
        result = np.interp(md, self.md, self.tvd_values)
        if np.ndim(result) == 0:
            return float(result)
        return result

    __call__ = tvd

    def __len__(self) -> int:
        return int(self.md.size)

    def __repr__(self) -> str:
        """String representation."""
        return f"TvdSampler(n_stations={len(self)})"


def vertical_tvd(md: float) -> float:
    """MD→TVD mapping of a vertical well."""
    return md


def _finite(value: float, default: float = 0.0) -> float:
    value = float(value)
    return value if np.isfinite(value) else default


def layers_max_depth(layers: Iterable[FluidLayer]) -> float:
    """Deepest layer bound (m MD), 0 for no layers."""
    return max((max(layer.top, layer.bottom) for layer in layers), default=0.0)


def hydrostatic_pressure(
    layers: Sequence[FluidLayer],
    tvd_of: TvdFunction,
    to_depth_tvd: float,
    g: float = GRAVITY,
    max_depth: Optional[float] = None,
) -> float:
    """Hydrostatic pressure from surface down to a TVD.

    P = Σ ρ·g·Δh / 1000 over the TVD extent of each layer above the target.

    Args:
        layers: One domain's fluid partition (MD-indexed).
        tvd_of: MD→TVD mapping, expected to be non-decreasing.
        to_depth_tvd: Target true vertical depth (m).
        g: Gravitational acceleration (m/s²), default 9.80665.
        max_depth: Deepest MD of the well; defaults to the deepest layer.

    Returns:
        Pressure (kPa). Never negative for non-negative densities; negative
        or non-finite densities contribute nothing.

    Example:
        >>> from wellsmith.objects import FluidDomain, FluidLayer
        >>> water = [FluidLayer(FluidDomain.ANNULUS, 0, 1000, "Water", 1000)]
        >>> round(hydrostatic_pressure(water, vertical_tvd, 1000.0), 3)
        9806.65
    """
    if not layers:
        return 0.0
    deepest = layers_max_depth(layers) if max_depth is None else max_depth
    tvd_limit = max(_finite(tvd_of(deepest)), 0.0)
    target = float(to_depth_tvd)
    if np.isnan(target):
        return 0.0
    limit = min(max(target, 0.0), tvd_limit)
    if limit <= 0:
        return 0.0

    pressure = 0.0
    for layer in sorted(layers, key=lambda layer: min(layer.top, layer.bottom)):
        t_tvd = _finite(tvd_of(layer.top))
        b_tvd = _finite(tvd_of(layer.bottom))
        seg_top = max(0.0, min(t_tvd, b_tvd))
        seg_bottom = min(limit, max(t_tvd, b_tvd))
        if seg_bottom <= seg_top:
            continue
        density = max(_finite(layer.density), 0.0)
        pressure += density * g * (seg_bottom - seg_top) / 1000.0
    return pressure


def differential_pressure(
    annulus_layers: Sequence[FluidLayer],
    string_layers: Sequence[FluidLayer],
    tvd_of: TvdFunction,
    to_depth_tvd: float,
    g: float = GRAVITY,
    max_depth: Optional[float] = None,
) -> float:
    """Annulus minus string hydrostatic pressure at a TVD (kPa).

    Positive values mean the annulus column is heavier (U-tube flow up
    the string when the pumps stop).
    """
    p_annulus = hydrostatic_pressure(annulus_layers, tvd_of, to_depth_tvd, g, max_depth)
    p_string = hydrostatic_pressure(string_layers, tvd_of, to_depth_tvd, g, max_depth)
    return p_annulus - p_string


def pressure_profile(
    layers: Sequence[FluidLayer],
    tvd_of: TvdFunction,
    depths_tvd: Union[np.ndarray, Sequence[float]],
    g: float = GRAVITY,
    max_depth: Optional[float] = None,
) -> np.ndarray:
    """Hydrostatic pressure at each of several TVDs (kPa)."""
    depths = np.asarray(depths_tvd, dtype=np.float64)
    return np.array(
        [hydrostatic_pressure(layers, tvd_of, d, g, max_depth) for d in depths.ravel()],
        dtype=np.float64,
    ).reshape(depths.shape)


def interval_pressure(
    density: float,
    top_md: float,
    bottom_md: float,
    tvd_of: TvdFunction = vertical_tvd,
    g: float = GRAVITY,
) -> float:
    """Pressure of a single fluid column spanning an MD interval (kPa)."""
    span = abs(_finite(tvd_of(bottom_md)) - _finite(tvd_of(top_md)))
    return max(_finite(density), 0.0) * g * span / 1000.0


def equivalent_mud_density(
    pressure: float, depth_tvd: float, g: float = GRAVITY
) -> float:
    """Density whose column gives ``pressure`` at ``depth_tvd``.

    EMD = P·1000 / (g·TVD)

    Args:
        pressure: Pressure (kPa).
        depth_tvd: True vertical depth (m).
        g: Gravitational acceleration (m/s²).

    Returns:
        Equivalent mud density (kg/m³), 0 at or above surface.
    """
    depth = _finite(depth_tvd)
    if depth <= 0:
        return 0.0
    return _finite(pressure) * 1000.0 / (g * depth)
