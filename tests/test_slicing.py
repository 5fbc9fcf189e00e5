"""Tests for the slice builder."""

import numpy as np
import pytest

from wellsmith.objects import AnnulusSection, PipeSection
from wellsmith.primitives import clip_slices, slice_geometry, slices_to_frame, unique_boundaries


class TestUniqueBoundaries:
    """Tests for unique_boundaries."""

    def test_sorted_and_deduplicated(self):
        """Values within tolerance collapse to the first."""
        assert unique_boundaries([500.0, 0.0, 500.0000001, 2500.0]) == [0.0, 500.0, 2500.0]

    def test_non_finite_dropped(self):
        """NaN and infinities are not boundaries."""
        assert unique_boundaries([0.0, float("nan"), float("inf"), 10.0]) == [0.0, 10.0]


class TestSliceGeometry:
    """Tests for slice_geometry."""

    def test_scenario_slices(self, scenario_pipes, scenario_annuli):
        """Two slices at the casing shoe with pipe-in annular areas."""
        slices = slice_geometry(scenario_pipes, scenario_annuli)

        assert [(s.top, s.bottom) for s in slices] == [(0.0, 500.0), (500.0, 2500.0)]
        assert slices[0].area == pytest.approx(np.pi / 4 * (0.340**2 - 0.127**2))
        assert slices[1].area == pytest.approx(np.pi / 4 * (0.311**2 - 0.127**2))
        assert slices[0].volume == pytest.approx(slices[0].area * 500)

    def test_pipe_boundaries_split_slices(self):
        """Pipe tops and bottoms are boundaries too."""
        annuli = [AnnulusSection(top=0, length=1000, inner_diameter=0.3)]
        pipes = [
            PipeSection(top=0, length=600, inner_diameter=0.1, outer_diameter=0.127),
            PipeSection(top=600, length=200, inner_diameter=0.07, outer_diameter=0.165),
        ]
        slices = slice_geometry(pipes, annuli)

        assert [(s.top, s.bottom) for s in slices] == [(0.0, 600.0), (600.0, 800.0), (800.0, 1000.0)]
        assert slices[2].area == pytest.approx(np.pi / 4 * 0.3**2)  # open hole below the bit

    def test_bands_without_annulus_skipped(self):
        """No slice is produced where no annulus section is defined."""
        annuli = [
            AnnulusSection(top=0, length=100, inner_diameter=0.3),
            AnnulusSection(top=200, length=100, inner_diameter=0.3),
        ]
        slices = slice_geometry([], annuli)
        assert [(s.top, s.bottom) for s in slices] == [(0.0, 100.0), (200.0, 300.0)]

    def test_pipe_larger_than_hole_gives_zero_area(self):
        """Area never goes negative."""
        annuli = [AnnulusSection(top=0, length=100, inner_diameter=0.1)]
        pipes = [PipeSection(top=0, length=100, inner_diameter=0.05, outer_diameter=0.2)]
        assert slice_geometry(pipes, annuli)[0].area == 0.0

    def test_empty(self):
        """No sections, no slices."""
        assert slice_geometry([], []) == []

    def test_slices_are_contiguous_and_ordered(self, scenario_pipes, scenario_annuli):
        """Ascending, non-overlapping, positive-length slices."""
        slices = slice_geometry(scenario_pipes, scenario_annuli)
        for prev, curr in zip(slices, slices[1:]):
            assert curr.top >= prev.bottom
        assert all(s.length > 0 for s in slices)


class TestClipAndFrame:
    """Tests for clip_slices and slices_to_frame."""

    def test_clip(self, scenario_pipes, scenario_annuli):
        """Clipping trims slices and rescales their volume."""
        clipped = clip_slices(slice_geometry(scenario_pipes, scenario_annuli), 400, 600)
        assert [(s.top, s.bottom) for s in clipped] == [(400.0, 500.0), (500.0, 600.0)]
        assert clipped[0].volume == pytest.approx(clipped[0].area * 100)

    def test_frame_cumulative_volume(self, scenario_pipes, scenario_annuli):
        """The last cumulative value equals the summed volume."""
        frame = slices_to_frame(slice_geometry(scenario_pipes, scenario_annuli))
        assert list(frame.columns) == ["top", "bottom", "length", "area", "volume", "cumulative_volume"]
        assert frame["cumulative_volume"].iloc[-1] == pytest.approx(frame["volume"].sum())

    def test_empty_frame(self):
        """No slices gives an empty frame with the same columns."""
        frame = slices_to_frame([])
        assert len(frame) == 0
        assert "cumulative_volume" in frame.columns
