"""Layer 2: Primitives - Pure operations.

This layer holds the numerical core. It can import numpy, pandas and
scipy. No file I/O. Every function returns a freshly computed value and
none of them raise on malformed geometry; input is clamped instead.
"""

# Import order matters: geometry and slicing first, then modules built on them
from wellsmith.primitives.geometry import (
    capacity_per_meter,
    circle_area,
    displacement_per_meter,
    enforce_no_overlap,
    fill_gaps,
    find_gaps,
    has_gaps,
    max_depth,
    next_top,
    section_capacity,
    section_covering,
    section_displacement,
    section_span,
    sort_sections,
    steel_cross_section,
)
from wellsmith.primitives.slicing import (
    clip_slices,
    slice_geometry,
    slices_to_frame,
    unique_boundaries,
)
from wellsmith.primitives.volumes import (
    EqualVolumeResult,
    IntervalVolumes,
    VolumeTotals,
    solve_pipe_in_for_equal_volume,
    total_mud_with_pipe,
    volumes_between,
    well_totals,
)
from wellsmith.primitives.layers import (
    base_layer,
    layer_volume,
    layers_for_domain,
    layers_to_frame,
    overlay_step,
    rebuild_layers,
    slice_layers,
    sort_steps,
    steps_have_overlap,
)
from wellsmith.primitives.hydrostatics import (
    GRAVITY,
    TvdSampler,
    differential_pressure,
    equivalent_mud_density,
    hydrostatic_pressure,
    interval_pressure,
    layers_max_depth,
    pressure_profile,
    vertical_tvd,
)
from wellsmith.primitives.mixing import (
    BARITE_DENSITY,
    SACK_MASS,
    BariteRequirement,
    barite_requirement,
    blend_density,
)

__all__ = [
    # Geometry
    "capacity_per_meter",
    "circle_area",
    "displacement_per_meter",
    "enforce_no_overlap",
    "fill_gaps",
    "find_gaps",
    "has_gaps",
    "max_depth",
    "next_top",
    "section_capacity",
    "section_covering",
    "section_displacement",
    "section_span",
    "sort_sections",
    "steel_cross_section",
    # Slicing
    "clip_slices",
    "slice_geometry",
    "slices_to_frame",
    "unique_boundaries",
    # Volumes
    "EqualVolumeResult",
    "IntervalVolumes",
    "VolumeTotals",
    "solve_pipe_in_for_equal_volume",
    "total_mud_with_pipe",
    "volumes_between",
    "well_totals",
    # Layers
    "base_layer",
    "layer_volume",
    "layers_for_domain",
    "layers_to_frame",
    "overlay_step",
    "rebuild_layers",
    "slice_layers",
    "sort_steps",
    "steps_have_overlap",
    # Hydrostatics
    "GRAVITY",
    "TvdSampler",
    "differential_pressure",
    "equivalent_mud_density",
    "hydrostatic_pressure",
    "interval_pressure",
    "layers_max_depth",
    "pressure_profile",
    "vertical_tvd",
    # Mixing
    "BARITE_DENSITY",
    "SACK_MASS",
    "BariteRequirement",
    "barite_requirement",
    "blend_density",
]
