"""Fluid layer overlay for the string and annulus domains.

Layer 2: Primitives - Pure operations.

Each domain holds a flat partition of ``[0, max_depth]`` into constant
density layers. It starts as a single full-span "Base" layer and every
mud step is overlaid on top of it: existing layers are split around the
step interval and the step's own layer is inserted in between.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from typing import Optional

import pandas as pd

from wellsmith.objects.fluids import (
    DEFAULT_BASE_COLOR,
    FluidDomain,
    FluidLayer,
    MudStep,
)
from wellsmith.objects.sections import AnnulusSection, PipeSection
from wellsmith.primitives.volumes import volumes_between


def overlay_step(
    layers: Sequence[FluidLayer], new_layer: FluidLayer
) -> list[FluidLayer]:
    """Overlay a layer onto a partition.

    Layers entirely outside the new interval are kept. Layers that
    intersect it are split; the parts above and below survive with their
    own fluid, the part inside is discarded. The new layer then covers
    exactly its interval.

    Args:
        layers: Current partition of one domain.
        new_layer: Layer to place; ``top``/``bottom`` may be inverted.

    Returns:
        New partition ordered by top.

    Example:
        >>> from wellsmith.objects import FluidDomain, FluidLayer
        >>> base = FluidLayer(FluidDomain.ANNULUS, 0, 1000, "Base", 1200)
        >>> slug = FluidLayer(FluidDomain.ANNULUS, 100, 200, "Slug", 1500)
        >>> [(l.top, l.bottom, l.density) for l in overlay_step([base], slug)]
        [(0.0, 100.0, 1200.0), (100.0, 200.0, 1500.0), (200.0, 1000.0, 1200.0)]
    """
    t = min(new_layer.top, new_layer.bottom)
    b = max(new_layer.top, new_layer.bottom)

    out: list[FluidLayer] = []
    for layer in layers:
        if layer.bottom <= t or layer.top >= b:
            out.append(layer)
            continue
        if layer.top < t:
            out.append(dataclasses.replace(layer, bottom=t))
        if layer.bottom > b:
            out.append(dataclasses.replace(layer, top=b))

    out.append(dataclasses.replace(new_layer, top=t, bottom=b))
    out.sort(key=lambda layer: (layer.top, layer.bottom))
    return out


def base_layer(
    domain: FluidDomain,
    max_depth: float,
    density: float,
    name: str = "Base",
    color: str = DEFAULT_BASE_COLOR,
    fluid_ref: Optional[str] = None,
) -> FluidLayer:
    """Full-span layer ``[0, max_depth]`` seeding a domain's partition."""
    return FluidLayer(
        domain=domain,
        top=0.0,
        bottom=max(max_depth, 0.0),
        name=name,
        density=density,
        color=color,
        fluid_ref=fluid_ref,
    )


def sort_steps(steps: Iterable[MudStep]) -> list[MudStep]:
    """Steps ordered by placement (annulus, string, both), then top, then bottom.

    Steps placed in both domains come last so they win over single-domain
    steps covering the same interval.
    """
    return sorted(steps, key=lambda s: (s.placement.rank, s.top, s.bottom))


def rebuild_layers(
    steps: Iterable[MudStep],
    max_depth: float,
    base_annulus_density: float,
    base_string_density: float,
    base_color: str = DEFAULT_BASE_COLOR,
    base_fluid_ref: Optional[str] = None,
) -> tuple[list[FluidLayer], list[FluidLayer]]:
    """Rebuild both domain partitions from a base fluid and mud steps.

    Steps are applied in the order given; use ``sort_steps`` first for
    the conventional ordering.

    Args:
        steps: Mud steps to overlay.
        max_depth: Bottom of the base layers (m MD).
        base_annulus_density: Base fluid density in the annulus (kg/m³).
        base_string_density: Base fluid density in the string (kg/m³).
        base_color: Display color of the base layers.
        base_fluid_ref: Optional mud reference of the base fluid.

    Returns:
        Tuple ``(annulus_layers, string_layers)``.
    """
    partitions = {
        FluidDomain.ANNULUS: [
            base_layer(
                FluidDomain.ANNULUS,
                max_depth,
                base_annulus_density,
                color=base_color,
                fluid_ref=base_fluid_ref,
            )
        ],
        FluidDomain.STRING: [
            base_layer(
                FluidDomain.STRING,
                max_depth,
                base_string_density,
                color=base_color,
                fluid_ref=base_fluid_ref,
            )
        ],
    }
    for step in steps:
        for domain in step.placement.domains:
            partitions[domain] = overlay_step(partitions[domain], step.to_layer(domain))
    return partitions[FluidDomain.ANNULUS], partitions[FluidDomain.STRING]


def steps_have_overlap(steps: Sequence[MudStep], tol: float = 1e-6) -> bool:
    """True if any two steps overlap by more than ``tol`` (placement ignored)."""
    if len(steps) < 2:
        return False
    spans = sorted((min(s.top, s.bottom), max(s.top, s.bottom)) for s in steps)
    for (_, a_bottom), (b_top, _) in zip(spans, spans[1:]):
        if b_top < a_bottom - tol:
            return True
    return False


def layers_for_domain(
    layers: Iterable[FluidLayer], domain: FluidDomain
) -> list[FluidLayer]:
    """Layers of one domain with normalized bounds, ordered by top."""
    selected = [
        dataclasses.replace(
            layer, top=min(layer.top, layer.bottom), bottom=max(layer.top, layer.bottom)
        )
        for layer in layers
        if layer.domain == FluidDomain(domain)
    ]
    return sorted(selected, key=lambda layer: (layer.top, layer.bottom))


def slice_layers(
    layers: Iterable[FluidLayer],
    top: float,
    bottom: float,
    merge_adjacent: bool = True,
    tol: float = 1e-9,
) -> list[FluidLayer]:
    """Clip layers to a depth window, ordered deep to shallow.

    Args:
        layers: Layers of one domain.
        top: Window top (m MD).
        bottom: Window bottom (m MD).
        merge_adjacent: Join touching pieces with the same density.
        tol: Minimum piece length and matching tolerance.

    Returns:
        Clipped layers, deepest first.
    """
    lo, hi = min(top, bottom), max(top, bottom)
    pieces = []
    for layer in layers:
        t = max(lo, min(layer.top, layer.bottom))
        b = min(hi, max(layer.top, layer.bottom))
        if b > t + tol:
            pieces.append(dataclasses.replace(layer, top=t, bottom=b))
    pieces.sort(key=lambda layer: layer.bottom, reverse=True)

    if not merge_adjacent or not pieces:
        return pieces

    merged = [pieces[0]]
    for piece in pieces[1:]:
        current = merged[-1]
        if abs(current.density - piece.density) < tol and abs(current.top - piece.bottom) < tol:
            merged[-1] = dataclasses.replace(current, top=piece.top)
        else:
            merged.append(piece)
    return merged


def layer_volume(
    layer: FluidLayer,
    pipes: Sequence[PipeSection],
    annuli: Sequence[AnnulusSection],
) -> tuple[float, float]:
    """Volume a layer occupies in its domain.

    Returns:
        Tuple ``(total, per_meter)``: annular volume for annulus layers,
        string capacity for string layers.
    """
    v = volumes_between(pipes, annuli, layer.top, layer.bottom)
    if layer.domain == FluidDomain.ANNULUS:
        return v.annular_with_pipe, v.annular_per_meter
    return v.string_capacity, v.string_capacity_per_meter


def layers_to_frame(layers: Sequence[FluidLayer]) -> pd.DataFrame:
    """Tabulate layers.

    Returns:
        DataFrame with columns domain, top, bottom, length, name, density,
        color, fluid_ref.
    """
    columns = ["domain", "top", "bottom", "length", "name", "density", "color", "fluid_ref"]
    return pd.DataFrame(
        [
            {
                "domain": layer.domain.value,
                "top": layer.top,
                "bottom": layer.bottom,
                "length": layer.length,
                "name": layer.name,
                "density": layer.density,
                "color": layer.color,
                "fluid_ref": layer.fluid_ref,
            }
            for layer in layers
        ],
        columns=columns,
    )
