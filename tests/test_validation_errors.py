"""Tests for error formatting and boundary validation."""

import pytest

from wellsmith.objects import AnnulusSection, MudStep, PipeSection
from wellsmith.utils import (
    DataValidationError,
    GeometryError,
    ParameterError,
    WellSmithError,
    describe_section,
    format_parameter_error,
    format_validation_error,
    raise_parameter_error,
    validate_annulus_section,
    validate_mud_step,
    validate_no_overlap,
    validate_pipe_section,
    validate_sections,
)


class TestErrorFormatting:
    """Tests for error message helpers."""

    def test_validation_message(self):
        """Expected, received and suggestion are joined on lines."""
        message = format_validation_error("Bad", expected=">= 0", received="-1", suggestion="Fix it")
        assert message == "Bad\nExpected: >= 0, Received: -1\nSuggestion: Fix it"

    def test_parameter_message(self):
        """Valid values are listed."""
        message = format_parameter_error("kind", "x", valid_values=["pipe", "annulus"])
        assert "Invalid value for parameter 'kind': x" in message
        assert "Valid values: pipe, annulus" in message

    def test_raise_parameter_error(self):
        """ParameterError carries the parameter name."""
        with pytest.raises(ParameterError) as excinfo:
            raise_parameter_error("kind", "x")
        assert excinfo.value.details == {"parameter": "kind"}

    def test_suggestion_in_str(self):
        """The suggestion is appended to str()."""
        error = WellSmithError("Broken", suggestion="Try again")
        assert str(error) == "Broken\n\nSuggestion: Try again"

    def test_section_label(self):
        """Sections are named with their depth interval."""
        pipe = PipeSection(top=0, length=2500, inner_diameter=0.0953, outer_diameter=0.127, name="DP")
        assert describe_section("Pipe section", pipe) == "Pipe section 'DP' (0-2500 m MD)"
        step = MudStep("", 200, 100, 1500)
        assert describe_section("Mud step", step) == "Mud step (200-100 m MD)"

    def test_geometry_error_interval(self):
        """The interval is stored on the error and in its details."""
        error = GeometryError("Bad fit", interval=(10.0, 20.0))
        assert error.interval == (10.0, 20.0)
        assert error.details == {"interval": (10.0, 20.0)}

    def test_hierarchy(self):
        """Geometry errors are validation errors."""
        assert issubclass(GeometryError, DataValidationError)
        assert issubclass(DataValidationError, WellSmithError)


class TestSectionValidation:
    """Tests for section validators."""

    def test_valid_pipe(self):
        """A normal pipe passes."""
        validate_pipe_section(PipeSection(top=0, length=100, inner_diameter=0.0953, outer_diameter=0.127))

    def test_negative_length(self):
        """Negative length is rejected."""
        with pytest.raises(DataValidationError, match="length must be a non-negative number"):
            validate_pipe_section(PipeSection(top=0, length=-1, inner_diameter=0.1, outer_diameter=0.12))

    def test_swapped_diameters(self):
        """OD smaller than ID is a geometry error."""
        with pytest.raises(GeometryError, match="outer diameter is smaller"):
            validate_pipe_section(PipeSection(top=0, length=10, inner_diameter=0.127, outer_diameter=0.0953))

    def test_negative_annulus_diameter(self):
        """Annulus diameters must not be negative."""
        with pytest.raises(DataValidationError, match="inner_diameter"):
            validate_annulus_section(AnnulusSection(top=0, length=10, inner_diameter=-0.3))

    def test_overlap(self):
        """Overlapping sections are rejected."""
        sections = [
            AnnulusSection(top=0, length=600, inner_diameter=0.34),
            AnnulusSection(top=500, length=100, inner_diameter=0.311),
        ]
        with pytest.raises(GeometryError, match="Sections overlap") as excinfo:
            validate_no_overlap(sections)
        assert excinfo.value.interval == (500.0, 600.0)
        assert "500-600 m MD" in str(excinfo.value)

    def test_pipe_larger_than_hole(self, scenario_annuli):
        """Pipe OD must fit the hole."""
        pipes = [PipeSection(top=0, length=100, inner_diameter=0.3, outer_diameter=0.4)]
        with pytest.raises(GeometryError, match="larger than the hole"):
            validate_sections(pipes, scenario_annuli)

    def test_scenario_is_valid(self, scenario_pipes, scenario_annuli):
        """The reference well passes all checks."""
        validate_sections(scenario_pipes, scenario_annuli)


class TestMudStepValidation:
    """Tests for validate_mud_step."""

    def test_negative_density(self):
        """Negative densities are rejected."""
        with pytest.raises(DataValidationError, match="density"):
            validate_mud_step(MudStep("Bad", 0, 100, -1))

    def test_inverted_interval_allowed(self):
        """Steps may be entered bottom-up."""
        validate_mud_step(MudStep("Slug", 200, 100, 1500))
