"""Integration tests for config-driven well workflows."""

import pandas as pd
import pytest

pytestmark = pytest.mark.integration

from wellsmith.config import ConfigManager
from wellsmith.primitives import GRAVITY
from wellsmith.workflows import (
    STEP_REGISTRY,
    WorkflowOrchestrator,
    load_workflow,
    register_step,
    run_workflow,
)

WELL_YAML = """
name: Kill Sheet Well
pipes:
  - {top: 0, length: 3000, inner_diameter: 0.0953, outer_diameter: 0.127}
annuli:
  - {top: 0, length: 3000, inner_diameter: 0.216}
"""

WORKFLOW_YAML = """
config: settings.yaml
steps:
  - name: well
    type: load_well
    params:
      path: well.yaml
  - name: slug
    type: add_step
    params:
      well: ${well}
      name: Slug
      top: 0
      bottom: 1000
      density: 1800
      placement: both
  - name: layers
    type: rebuild_layers
    params:
      well: ${slug}
  - name: pressure
    type: hydrostatic
    params:
      well: ${layers}
      depth_md: 3000
  - name: totals
    type: well_totals
    params:
      well: ${well}
  - name: barite
    type: barite_requirement
    params:
      current_density: ${config.fluids.base_annulus_density}
      target_density: 1500
      volume: ${totals.total_circulating_volume}
  - name: report
    type: export_report
    params:
      well: ${well}
      path: out/summary.csv
      depth_md: ${pressure.depth_md}
"""

SETTINGS_YAML = """
fluids:
  base_annulus_density: 1200
  base_string_density: 1200
"""


class TestWellWorkflow:
    """End-to-end workflow from a well file to a CSV report."""

    def test_complete_workflow(self, tmp_path):
        """Load, place a slug, compute pressures and mixing, export."""
        (tmp_path / "well.yaml").write_text(WELL_YAML)
        (tmp_path / "settings.yaml").write_text(SETTINGS_YAML)
        workflow_path = tmp_path / "workflow.yaml"
        workflow_path.write_text(WORKFLOW_YAML)

        results = run_workflow(workflow_path)

        well = results["well"]
        assert well.base_annulus_density == 1200.0
        assert [l.name for l in well.annulus_layers] == ["Slug", "Base"]

        expected = (1800 * 1000 + 1200 * 2000) * GRAVITY / 1000
        assert results["pressure"].annulus == pytest.approx(expected)
        assert results["pressure"].differential == pytest.approx(0.0)

        assert results["barite"].density_increase == pytest.approx(300.0)

        report = pd.read_csv(tmp_path / "out" / "summary.csv")
        values = dict(zip(report["quantity"], report["value"]))
        assert values["annulus_pressure"] == pytest.approx(expected)


class TestOrchestrator:
    """Tests for WorkflowOrchestrator behaviour."""

    def test_custom_step(self):
        """Registered functions can be referenced by later steps."""
        register_step("double", lambda value: 2 * value)
        try:
            orchestrator = WorkflowOrchestrator()
            results = orchestrator.execute(
                {
                    "steps": [
                        {"name": "a", "type": "double", "params": {"value": 2}},
                        {"name": "b", "type": "double", "params": {"value": "${a}"}},
                    ]
                }
            )
        finally:
            STEP_REGISTRY.pop("double", None)
        assert results == {"a": 4, "b": 8}

    def test_config_reference(self):
        """Config values resolve from the orchestrator's config."""
        orchestrator = WorkflowOrchestrator(config=ConfigManager({"mixing": {"sack_mass": 25}}))
        results = orchestrator.execute(
            {
                "steps": [
                    {
                        "name": "mix",
                        "type": "blend_density",
                        "params": {"volumes": [1, 1], "densities": ["${config.mixing.sack_mass}", 75]},
                    }
                ]
            }
        )
        assert results["mix"] == pytest.approx(50.0)

    def test_unknown_step_type(self):
        """Unknown step types raise ValueError."""
        with pytest.raises(ValueError, match="Unknown step type"):
            WorkflowOrchestrator().execute({"steps": [{"name": "x", "type": "nope"}]})

    def test_missing_steps(self):
        """A workflow needs steps."""
        with pytest.raises(ValueError, match="must contain 'steps'"):
            WorkflowOrchestrator().execute({})

    def test_missing_reference(self):
        """References to unknown steps raise ValueError."""
        workflow = {"steps": [{"name": "a", "type": "blend_density", "params": {"volumes": "${ghost}", "densities": []}}]}
        with pytest.raises(ValueError, match="Step 'ghost' not found"):
            WorkflowOrchestrator().execute(workflow)

    def test_continue_on_error(self):
        """stop_on_error: false keeps going after a failed step."""
        workflow = {
            "stop_on_error": False,
            "steps": [
                {"name": "bad", "type": "blend_density", "params": {"volumes": [1, 2], "densities": [1000]}},
                {"name": "good", "type": "blend_density", "params": {"volumes": [1], "densities": [1000]}},
            ],
        }
        results = WorkflowOrchestrator().execute(workflow)
        assert "bad" not in results
        assert results["good"] == pytest.approx(1000.0)

    def test_load_workflow(self, tmp_path):
        """Workflow files can be read without running them."""
        path = tmp_path / "wf.json"
        path.write_text('{"steps": [{"name": "a", "type": "well_totals"}]}')
        assert load_workflow(path)["steps"][0]["name"] == "a"

    def test_load_workflow_missing(self, tmp_path):
        """Missing workflow files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_workflow(tmp_path / "none.yaml")

    def test_missing_config_file_warns(self, tmp_path, caplog):
        """A missing config file falls back to defaults."""
        register_step("noop", lambda: None)
        try:
            with caplog.at_level("WARNING"):
                WorkflowOrchestrator(working_dir=tmp_path).execute(
                    {"config": "absent.yaml", "steps": [{"name": "n", "type": "noop"}]}
                )
        finally:
            STEP_REGISTRY.pop("noop", None)
        assert "Config file not found" in caplog.text
