"""Tests for interval volume aggregation."""

import numpy as np
import pytest

from wellsmith.objects import AnnulusSection, PipeSection
from wellsmith.primitives import (
    solve_pipe_in_for_equal_volume,
    total_mud_with_pipe,
    volumes_between,
    well_totals,
)

FIELDS = ("annular_with_pipe", "string_capacity", "string_displacement", "open_hole")


class TestVolumesBetween:
    """Tests for volumes_between."""

    def test_scenario_string_capacity(self, scenario_pipes, scenario_annuli):
        """Full-string capacity of 2500 m of 0.0953 m bore."""
        v = volumes_between(scenario_pipes, scenario_annuli, 0, 2500)
        assert v.string_capacity == pytest.approx(17.83, abs=0.01)

    def test_scenario_open_hole(self, scenario_pipes, scenario_annuli):
        """Open hole below the casing shoe."""
        v = volumes_between(scenario_pipes, scenario_annuli, 500, 2500)
        assert v.open_hole == pytest.approx(151.93, abs=0.01)

    def test_scenario_annular_in_casing(self, scenario_pipes, scenario_annuli):
        """Annulus between casing and pipe."""
        v = volumes_between(scenario_pipes, scenario_annuli, 0, 500)
        assert v.annular_with_pipe == pytest.approx(39.06, abs=0.01)

    def test_inverted_interval_swapped(self, scenario_pipes, scenario_annuli):
        """top > bottom gives the same volumes."""
        a = volumes_between(scenario_pipes, scenario_annuli, 300, 1800)
        b = volumes_between(scenario_pipes, scenario_annuli, 1800, 300)
        for name in FIELDS:
            assert getattr(a, name) == pytest.approx(getattr(b, name))
        assert b.top == 300.0

    def test_zero_length_interval(self, scenario_pipes, scenario_annuli):
        """A point interval holds nothing."""
        v = volumes_between(scenario_pipes, scenario_annuli, 700, 700)
        assert all(getattr(v, name) == 0.0 for name in FIELDS)
        assert v.annular_per_meter == 0.0

    def test_beyond_well_clamped(self, scenario_pipes, scenario_annuli):
        """Depths below the well add nothing."""
        a = volumes_between(scenario_pipes, scenario_annuli, 0, 2500)
        b = volumes_between(scenario_pipes, scenario_annuli, 0, 10000)
        for name in FIELDS:
            assert getattr(b, name) == pytest.approx(getattr(a, name))

    def test_non_finite_depths(self, scenario_pipes, scenario_annuli):
        """NaN is surface and infinity is the deepest bound."""
        v = volumes_between(scenario_pipes, scenario_annuli, float("nan"), float("inf"))
        full = volumes_between(scenario_pipes, scenario_annuli, 0, 2500)
        assert v.open_hole == pytest.approx(full.open_hole)

    def test_empty_geometry(self):
        """No sections, zero volumes."""
        v = volumes_between([], [], 0, 1000)
        assert all(getattr(v, name) == 0.0 for name in FIELDS)

    def test_monotonic_in_bottom(self, scenario_pipes, scenario_annuli):
        """Growing the interval never shrinks a volume."""
        depths = np.linspace(0, 3000, 61)
        previous = None
        for depth in depths:
            v = volumes_between(scenario_pipes, scenario_annuli, 0, depth)
            if previous is not None:
                for name in FIELDS:
                    assert getattr(v, name) >= getattr(previous, name) - 1e-12
            previous = v

    @pytest.mark.parametrize("x,y", [(250.0, 1000.0), (500.0, 2500.0), (1234.5, 2000.0)])
    def test_additive(self, scenario_pipes, scenario_annuli, x, y):
        """[0,X] + [X,Y] equals [0,Y]."""
        upper = volumes_between(scenario_pipes, scenario_annuli, 0, x)
        lower = volumes_between(scenario_pipes, scenario_annuli, x, y)
        whole = volumes_between(scenario_pipes, scenario_annuli, 0, y)
        for name in FIELDS:
            assert getattr(upper, name) + getattr(lower, name) == pytest.approx(getattr(whole, name))

    def test_partial_pipe_overlap(self):
        """Only the overlapping part of a pipe section counts."""
        pipes = [PipeSection(top=100, length=100, inner_diameter=0.1, outer_diameter=0.12)]
        annuli = [AnnulusSection(top=0, length=300, inner_diameter=0.3)]
        v = volumes_between(pipes, annuli, 150, 300)
        assert v.string_capacity == pytest.approx(np.pi * 0.1**2 / 4 * 50)
        assert v.string_displacement == pytest.approx(np.pi * 0.12**2 / 4 * 50)

    def test_identity_check_zero_inside_hole(self, scenario_pipes, scenario_annuli):
        """Open hole splits into annulus, bore and steel."""
        v = volumes_between(scenario_pipes, scenario_annuli, 0, 2500)
        assert v.identity_check == pytest.approx(0.0, abs=1e-9)

    def test_as_dict_has_per_meter(self, scenario_pipes, scenario_annuli):
        """The dictionary form carries derived values."""
        data = volumes_between(scenario_pipes, scenario_annuli, 0, 500).as_dict()
        assert data["length"] == 500.0
        assert data["annular_per_meter"] == pytest.approx(data["annular_with_pipe"] / 500)


class TestTotalMudWithPipe:
    """Tests for total_mud_with_pipe."""

    def test_sum_of_parts(self, scenario_pipes, scenario_annuli):
        """Total is annulus plus string."""
        total, annular, string = total_mud_with_pipe(scenario_pipes, scenario_annuli, 0, 2500)
        assert total == pytest.approx(annular + string)
        assert string == pytest.approx(17.83, abs=0.01)


class TestSolvePipeInForEqualVolume:
    """Tests for solve_pipe_in_for_equal_volume."""

    def test_uniform_well(self):
        """Column length follows from the per-metre areas."""
        annuli = [AnnulusSection(top=0, length=2500, inner_diameter=0.311)]
        pipes = [PipeSection(top=0, length=2500, inner_diameter=0.0953, outer_diameter=0.127)]

        result = solve_pipe_in_for_equal_volume(pipes, annuli, 2000, 2500)

        hole = 0.311**2
        with_pipe = 0.311**2 - 0.127**2 + 0.0953**2
        expected = 500 * hole / with_pipe
        assert result.length == pytest.approx(expected, abs=1e-4)
        assert result.mud_top == pytest.approx(2500 - expected, abs=1e-4)
        assert result.total == pytest.approx(np.pi / 4 * hole * 500, rel=1e-6)
        assert result.total == pytest.approx(result.annular + result.string)

    def test_empty_interval(self, scenario_pipes, scenario_annuli):
        """A zero-length target needs no column."""
        result = solve_pipe_in_for_equal_volume(scenario_pipes, scenario_annuli, 800, 800)
        assert result.length == 0.0
        assert result.total == 0.0

    def test_full_column_too_small(self):
        """Falls back to the plain interval when surface is reached."""
        annuli = [AnnulusSection(top=0, length=1000, inner_diameter=0.311)]
        pipes = [PipeSection(top=0, length=1000, inner_diameter=0.0953, outer_diameter=0.127)]
        result = solve_pipe_in_for_equal_volume(pipes, annuli, 0, 1000)
        assert result.length == pytest.approx(1000.0)
        assert result.mud_top == pytest.approx(0.0)


class TestWellTotals:
    """Tests for well_totals."""

    def test_totals(self, scenario_pipes, scenario_annuli):
        """Whole-well totals and circulating volume."""
        totals = well_totals(scenario_pipes, scenario_annuli, tank_volume=40.0, surface_line_volume=2.0)
        full = volumes_between(scenario_pipes, scenario_annuli, 0, 2500)

        assert totals.string_capacity == pytest.approx(full.string_capacity)
        assert totals.annular_with_pipe == pytest.approx(full.annular_with_pipe)
        assert totals.open_hole == pytest.approx(full.open_hole)
        assert totals.total_circulating_volume == pytest.approx(
            full.string_capacity + full.annular_with_pipe + 42.0
        )
        assert len(totals.slices) == 2

    def test_negative_surface_volumes_clamped(self, scenario_pipes, scenario_annuli):
        """Negative tank volumes count as zero."""
        totals = well_totals(scenario_pipes, scenario_annuli, tank_volume=-5.0)
        assert totals.tank_volume == 0.0
