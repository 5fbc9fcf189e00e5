"""Mud mixing: mass-balance blending and barite weight-up.

Layer 2: Primitives - Pure operations.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from math import ceil, floor

import numpy as np

BARITE_DENSITY = 4250.0  # kg/m³
SACK_MASS = 40.0  # kg


@dataclass(frozen=True)
class BariteRequirement:
    """Barite needed to weight up a mud volume.

    Attributes:
        density_increase: Target minus current density, floored at 0 (kg/m³).
        barite_per_m3: Barite mass per m³ of mud (kg/m³).
        total_mass: Barite mass for the whole volume (kg).
        sacks: Number of sacks.
    """

    density_increase: float
    barite_per_m3: float
    total_mass: float
    sacks: int


def blend_density(
    volumes: Sequence[float], densities: Sequence[float]
) -> float:
    """Density of mixed fluids by mass balance.

    ρ = Σ ρᵢ·Vᵢ / Σ Vᵢ

    Negative volumes and densities count as zero.

    Args:
        volumes: Component volumes (m³).
        densities: Component densities (kg/m³).

    Returns:
        Blend density (kg/m³), 0 when the total volume is 0.

    Raises:
        ValueError: If the sequences differ in length.

    Example:
        >>> blend_density([10.0, 10.0], [1200.0, 1800.0])
        1500.0
    """
    v = np.asarray(volumes, dtype=np.float64)
    rho = np.asarray(densities, dtype=np.float64)
    if v.shape != rho.shape:
        raise ValueError("volumes and densities must have same length")
    v = np.clip(np.nan_to_num(v, nan=0.0, posinf=0.0, neginf=0.0), 0.0, None)
    rho = np.clip(np.nan_to_num(rho, nan=0.0, posinf=0.0, neginf=0.0), 0.0, None)
    total = v.sum()
    if total <= 0:
        return 0.0
    return float((v * rho).sum() / total)


def _round_sacks(raw: float, rounding: str) -> int:
    mode = (rounding or "nearest").lower()
    if mode == "ceil":
        return int(ceil(raw))
    if mode == "floor":
        return int(floor(raw))
    return int(floor(raw + 0.5))


def barite_requirement(
    current_density: float,
    target_density: float,
    volume: float,
    barite_density: float = BARITE_DENSITY,
    sack_mass: float = SACK_MASS,
    rounding: str = "nearest",
) -> BariteRequirement:
    """Barite needed to raise a mud volume to a target density.

    Wb = ρb·Δρ / (ρb − ρtarget) kg per m³ of mud, with the denominator
    floored at 1 kg/m³.

    Args:
        current_density: Current mud density (kg/m³).
        target_density: Desired mud density (kg/m³).
        volume: Mud volume to treat (m³).
        barite_density: Barite density (kg/m³), default 4250.
        sack_mass: Mass per sack (kg), default 40.
        rounding: 'nearest' (default), 'ceil' or 'floor' for the sack count.

    Returns:
        BariteRequirement. All zero when no increase is needed.

    Example:
        >>> req = barite_requirement(1260.0, 1500.0, 100.0)
        >>> req.sacks
        927
    """
    increase = max(float(target_density) - float(current_density), 0.0)
    if increase <= 0:
        return BariteRequirement(0.0, 0.0, 0.0, 0)

    rho_b = max(float(barite_density), 1.0)
    per_m3 = rho_b * increase / max(rho_b - float(target_density), 1.0)
    total = per_m3 * max(float(volume), 0.0)
    sacks = _round_sacks(total / max(float(sack_mass), 1.0), rounding)
    return BariteRequirement(
        density_increase=increase,
        barite_per_m3=per_m3,
        total_mass=total,
        sacks=sacks,
    )
