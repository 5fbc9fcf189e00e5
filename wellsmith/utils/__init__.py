"""Utility modules for WellSmith."""

from wellsmith.utils.errors import (
    DataValidationError,
    GeometryError,
    ParameterError,
    WellSmithError,
    describe_interval,
    describe_section,
    format_parameter_error,
    format_validation_error,
    raise_geometry_error,
    raise_parameter_error,
    raise_validation_error,
)
from wellsmith.utils.validation import (
    validate_annulus_section,
    validate_mud_step,
    validate_no_overlap,
    validate_pipe_section,
    validate_sections,
)

__all__ = [
    "WellSmithError",
    "DataValidationError",
    "GeometryError",
    "ParameterError",
    "describe_interval",
    "describe_section",
    "format_validation_error",
    "format_parameter_error",
    "raise_validation_error",
    "raise_geometry_error",
    "raise_parameter_error",
    "validate_annulus_section",
    "validate_mud_step",
    "validate_no_overlap",
    "validate_pipe_section",
    "validate_sections",
]
