"""Boundary validation for well data.

The numerical primitives clamp malformed input instead of failing. Hosts
that prefer to reject bad data entry call these validators before handing
data to the primitives (``WellModel(strict=True)`` does this on every edit).
"""

from collections.abc import Sequence
from typing import Union

import numpy as np

from wellsmith.objects.fluids import MudStep
from wellsmith.objects.sections import AnnulusSection, PipeSection
from wellsmith.utils.errors import (
    describe_section,
    raise_geometry_error,
    raise_validation_error,
)


def _check_non_negative(label: str, name: str, value: float) -> None:
    if not np.isfinite(value) or value < 0:
        raise_validation_error(
            f"{label}: {name} must be a non-negative number",
            expected=">= 0",
            received=str(value),
            details={"field": name},
        )


def validate_pipe_section(section: PipeSection) -> None:
    """Validate one drill-string section.

    Raises:
        DataValidationError: Negative length or diameter.
        GeometryError: Inner diameter larger than outer diameter.
    """
    label = describe_section("Pipe section", section)
    _check_non_negative(label, "length", section.length)
    _check_non_negative(label, "inner_diameter", section.inner_diameter)
    _check_non_negative(label, "outer_diameter", section.outer_diameter)
    if section.outer_diameter < section.inner_diameter:
        raise_geometry_error(
            f"{label}: outer diameter is smaller than inner diameter",
            expected=f"OD >= {section.inner_diameter:g}",
            received=f"OD = {section.outer_diameter:g}",
            suggestion="Check that ID and OD were not entered swapped.",
        )


def validate_annulus_section(section: AnnulusSection) -> None:
    """Validate one annulus section.

    Raises:
        DataValidationError: Negative length or diameter.
    """
    label = describe_section("Annulus section", section)
    _check_non_negative(label, "length", section.length)
    _check_non_negative(label, "inner_diameter", section.inner_diameter)
    _check_non_negative(label, "outer_diameter", section.outer_diameter)


def validate_no_overlap(
    sections: Sequence[Union[PipeSection, AnnulusSection]], tol: float = 1e-6
) -> None:
    """Check that no two sections of one list overlap.

    Raises:
        GeometryError: Two sections overlap by more than ``tol``.
    """
    ordered = sorted(sections, key=lambda s: s.top)
    for prev, curr in zip(ordered, ordered[1:]):
        if curr.top < prev.bottom - tol:
            raise_geometry_error(
                "Sections overlap",
                interval=(curr.top, prev.bottom),
                expected=f"top >= {prev.bottom:g}",
                received=f"top = {curr.top:g}",
                suggestion="Shorten the upper section or move the lower one down.",
                details={"upper": prev.name, "lower": curr.name},
            )


def validate_sections(
    pipes: Sequence[PipeSection], annuli: Sequence[AnnulusSection]
) -> None:
    """Validate both section lists and the pipe-in-hole fit.

    Raises:
        DataValidationError: A section has invalid dimensions.
        GeometryError: Sections overlap, or a pipe OD exceeds the hole ID
            at some depth.
    """
    for pipe in pipes:
        validate_pipe_section(pipe)
    for annulus in annuli:
        validate_annulus_section(annulus)
    validate_no_overlap(pipes)
    validate_no_overlap(annuli)

    for pipe in pipes:
        for annulus in annuli:
            overlaps = min(pipe.bottom, annulus.bottom) > max(pipe.top, annulus.top)
            if overlaps and pipe.outer_diameter > annulus.inner_diameter:
                raise_geometry_error(
                    f"{describe_section('Pipe section', pipe)} is larger than "
                    "the hole it sits in",
                    interval=(
                        max(pipe.top, annulus.top),
                        min(pipe.bottom, annulus.bottom),
                    ),
                    expected=f"OD <= {annulus.inner_diameter:g}",
                    received=f"OD = {pipe.outer_diameter:g}",
                    details={"pipe": pipe.name, "annulus": annulus.name},
                )


def validate_mud_step(step: MudStep) -> None:
    """Validate one mud step.

    Raises:
        DataValidationError: Negative depth or density.
    """
    label = describe_section("Mud step", step)
    _check_non_negative(label, "top", min(step.top, step.bottom))
    _check_non_negative(label, "density", step.density)
