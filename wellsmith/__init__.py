"""WellSmith: drill-string and annulus volumes, mud placement and hydrostatics.

Layout:
    objects     immutable sections, steps, layers and survey stations
    primitives  pure volume, overlay, pressure and mixing calculations
    tasks       the WellModel aggregate
    workflows   well files, CSV reports and the workflow orchestrator
"""

from wellsmith.objects import (
    AnnulusSection,
    DepthSlice,
    FluidDomain,
    FluidLayer,
    MudStep,
    PipeSection,
    Placement,
    SurveyStation,
)
from wellsmith.primitives import (
    TvdSampler,
    enforce_no_overlap,
    hydrostatic_pressure,
    overlay_step,
    slice_geometry,
    volumes_between,
)
from wellsmith.tasks import WellModel

__version__ = "0.1.0"

__all__ = [
    "AnnulusSection",
    "DepthSlice",
    "FluidDomain",
    "FluidLayer",
    "MudStep",
    "PipeSection",
    "Placement",
    "SurveyStation",
    "TvdSampler",
    "WellModel",
    "enforce_no_overlap",
    "hydrostatic_pressure",
    "overlay_step",
    "slice_geometry",
    "volumes_between",
]
