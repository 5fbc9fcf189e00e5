"""Layer 1: Objects - Immutable data representations.

This layer contains only data structures. No I/O, no pandas, no plotting.
Objects are frozen dataclasses; edits produce new instances.
"""

from wellsmith.objects.fluids import (
    DEFAULT_BASE_COLOR,
    DEFAULT_STEP_COLOR,
    FluidDomain,
    FluidLayer,
    MudStep,
    Placement,
)
from wellsmith.objects.sections import AnnulusSection, PipeSection
from wellsmith.objects.slices import DepthSlice
from wellsmith.objects.survey import SurveyStation

__all__ = [
    "AnnulusSection",
    "DEFAULT_BASE_COLOR",
    "DEFAULT_STEP_COLOR",
    "DepthSlice",
    "FluidDomain",
    "FluidLayer",
    "MudStep",
    "PipeSection",
    "Placement",
    "SurveyStation",
]
