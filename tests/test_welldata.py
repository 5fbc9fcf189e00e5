"""Tests for well file I/O and CSV reports."""

import json

import pandas as pd
import pytest

from wellsmith.objects import MudStep, Placement, SurveyStation
from wellsmith.tasks import WellModel
from wellsmith.utils import ParameterError
from wellsmith.workflows import (
    export_report,
    load_well,
    save_well,
    well_from_dict,
    well_report,
    well_to_dict,
)

WELL_YAML = """
name: Demo
base_annulus_density: 1300
tank_volume: 40
pipes:
  - {top: 0, length: 2500, inner_diameter: 0.0953, outer_diameter: 0.127, name: DP}
annuli:
  - {top: 0, length: 500, inner_diameter: 0.340, is_cased: true}
  - {top: 500, length: 2000, inner_diameter: 0.311}
steps:
  - {name: Slug, top: 100, bottom: 200, density: 1500, placement: String}
surveys:
  - {md: 0, tvd: 0}
  - {md: 2500}
"""


@pytest.fixture
def demo_well(scenario_pipes, scenario_annuli):
    """Well with one step of each placement and a survey."""
    return WellModel(
        name="Demo",
        pipes=scenario_pipes,
        annuli=scenario_annuli,
        steps=[
            MudStep("Kill", 300, 800, 1800, Placement.ANNULUS),
            MudStep("Slug", 100, 200, 2100, Placement.STRING, fluid_ref="slug-1"),
            MudStep("Lube", 2000, 2500, 1260, Placement.BOTH),
        ],
        surveys=[SurveyStation(0, 0), SurveyStation(2500, 2300)],
        tank_volume=40.0,
        surface_line_volume=2.0,
    )


class TestLoadWell:
    """Tests for load_well."""

    def test_yaml(self, tmp_path):
        """Fields, defaults and placement parsing."""
        path = tmp_path / "well.yaml"
        path.write_text(WELL_YAML)

        well = load_well(path)

        assert well.name == "Demo"
        assert well.base_annulus_density == 1300.0
        assert well.base_string_density == 1260.0
        assert well.tank_volume == 40
        assert len(well.annuli) == 2
        assert well.annuli[0].is_cased
        assert well.steps[0].placement is Placement.STRING
        assert well.surveys[1].tvd is None
        assert [l.name for l in well.string_layers] == ["Base", "Slug", "Base"]

    def test_without_rebuild(self, tmp_path):
        """Layers stay empty when rebuilding is skipped."""
        path = tmp_path / "well.yaml"
        path.write_text(WELL_YAML)
        assert load_well(path, rebuild=False).annulus_layers == []

    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Well file not found"):
            load_well(tmp_path / "absent.yaml")

    def test_unsupported_format(self, tmp_path):
        """Only YAML and JSON are read."""
        path = tmp_path / "well.txt"
        path.write_text("name: x")
        with pytest.raises(ValueError, match="Unsupported well file format"):
            load_well(path)

    def test_bad_entries(self):
        """Section lists must contain mappings."""
        with pytest.raises(ValueError, match="Entry 0 of 'pipes'"):
            well_from_dict({"pipes": [[0, 100]]})
        with pytest.raises(ValueError, match="must be a mapping"):
            well_from_dict(["not", "a", "mapping"])

    def test_empty_document(self, tmp_path):
        """An empty file is an empty well."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        well = load_well(path)
        assert well.pipes == [] and well.annuli == []
        assert len(well.annulus_layers) == 1


class TestSaveWell:
    """Tests for save_well."""

    @pytest.mark.parametrize("suffix", [".yaml", ".json"])
    def test_round_trip(self, demo_well, tmp_path, suffix):
        """Saved wells load back with the same content."""
        path = save_well(demo_well, tmp_path / f"demo{suffix}")
        loaded = load_well(path)
        assert well_to_dict(loaded) == well_to_dict(demo_well)

    def test_json_is_plain(self, demo_well, tmp_path):
        """Placement is stored as its lowercase name."""
        path = save_well(demo_well, tmp_path / "demo.json")
        data = json.loads(path.read_text())
        assert [s["placement"] for s in data["steps"]] == ["annulus", "string", "both"]

    def test_unsupported_format(self, demo_well, tmp_path):
        """Unknown suffixes are rejected."""
        with pytest.raises(ValueError, match="Unsupported well file format"):
            save_well(demo_well, tmp_path / "demo.xml")


class TestReports:
    """Tests for well_report and export_report."""

    def test_summary_report(self, demo_well):
        """Summary is a quantity/value table."""
        demo_well.rebuild_layers()
        frame = well_report(demo_well, "summary", depth_md=2500.0)
        values = dict(zip(frame["quantity"], frame["value"]))
        assert values["depth_tvd"] == pytest.approx(2300.0)
        assert values["string_capacity"] == pytest.approx(17.83, abs=0.01)

    def test_export_csv(self, demo_well, tmp_path):
        """Reports are written as CSV."""
        demo_well.rebuild_layers()
        path = export_report(demo_well, tmp_path / "out" / "layers.csv", kind="layers")
        frame = pd.read_csv(path)
        assert len(frame) == len(demo_well.annulus_layers) + len(demo_well.string_layers)
        assert "volume" in frame.columns

    def test_slices_report(self, demo_well):
        """Slice report mirrors the geometry."""
        assert len(well_report(demo_well, "slices")) == 2

    def test_unknown_kind(self, demo_well):
        """Unknown report kinds raise ParameterError."""
        with pytest.raises(ParameterError, match="Valid values"):
            well_report(demo_well, "pressure")
