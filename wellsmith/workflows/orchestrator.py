"""
Workflow orchestrator for executing config-driven well workflows.

Supports YAML/JSON workflow definitions with named steps and parameters
that may reference earlier step results and config values.
"""

import inspect
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from wellsmith.config import ConfigManager, get_config, load_config
from wellsmith.objects.fluids import MudStep
from wellsmith.primitives.mixing import barite_requirement, blend_density
from wellsmith.tasks.wellmodel import WellModel
from wellsmith.workflows.welldata import (
    export_report,
    load_well,
    save_well,
    well_report,
)

logger = logging.getLogger(__name__)


# Registry of available workflow steps
STEP_REGISTRY: dict[str, Callable] = {}


def register_step(name: str, func: Callable):
    """Register a function as a workflow step."""
    STEP_REGISTRY[name] = func
    logger.debug(f"Registered workflow step: {name}")


def _add_step(
    well: WellModel,
    name: str,
    top: float,
    bottom: float,
    density: float,
    placement: str = "annulus",
    color: str | None = None,
    fluid_ref: str | None = None,
) -> WellModel:
    """Add a mud step to a well and return the well."""
    kwargs: dict[str, Any] = {"fluid_ref": fluid_ref}
    if color is not None:
        kwargs["color"] = color
    well.add_step(MudStep(name, top, bottom, density, placement, **kwargs))
    return well


def _rebuild_layers(well: WellModel) -> WellModel:
    well.rebuild_layers()
    return well


def _volumes_between(well: WellModel, top: float, bottom: float) -> dict[str, float]:
    return well.volumes_between(top, bottom).as_dict()


def _equal_volume(well: WellModel, top: float, bottom: float):
    return well.equal_volume(top, bottom)


def _well_totals(well: WellModel):
    return well.totals()


def _hydrostatic(well: WellModel, depth_md: float):
    return well.hydrostatic(depth_md)


def _summary(well: WellModel, depth_md: float | None = None) -> dict[str, float]:
    return well.summary(depth_md)


def _barite(
    current_density: float,
    target_density: float,
    volume: float,
    config: ConfigManager | None = None,
):
    """Barite requirement using the mixing settings of the active config."""
    config = config or get_config()
    return barite_requirement(
        current_density,
        target_density,
        volume,
        barite_density=float(config.get("mixing.barite_density", 4250.0)),
        sack_mass=float(config.get("mixing.sack_mass", 40.0)),
    )


def _register_default_steps():
    """Register default workflow steps."""
    # Well data
    register_step("load_well", load_well)
    register_step("save_well", save_well)
    register_step("export_report", export_report)
    register_step("well_report", well_report)

    # Placement
    register_step("add_step", _add_step)
    register_step("rebuild_layers", _rebuild_layers)

    # Volumes
    register_step("volumes_between", _volumes_between)
    register_step("equal_volume", _equal_volume)
    register_step("well_totals", _well_totals)

    # Pressures
    register_step("hydrostatic", _hydrostatic)
    register_step("summary", _summary)

    # Mixing
    register_step("blend_density", blend_density)
    register_step("barite_requirement", _barite)


# Initialize default steps
_register_default_steps()


class WorkflowOrchestrator:
    """
    Orchestrator for executing config-driven workflows.

    Loads workflow definitions from YAML/JSON and executes steps
    in order, with config-aware parameters.
    """

    def __init__(
        self, config: ConfigManager | None = None, working_dir: str | Path | None = None
    ):
        """
        Initialize workflow orchestrator.

        Parameters
        ----------
        config : ConfigManager, optional
            Configuration manager. If None, uses global config.
        working_dir : str or Path, optional
            Working directory for relative paths in workflow
        """
        self.config = config
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        self.results: dict[str, Any] = {}
        self.logger = logging.getLogger(self.__class__.__name__)

    def load_workflow_file(self, file_path: str | Path) -> dict[str, Any]:
        """
        Load workflow definition from file.

        Parameters
        ----------
        file_path : str or Path
            Path to YAML or JSON workflow file

        Returns
        -------
        dict
            Workflow definition

        Raises
        ------
        FileNotFoundError
            If file doesn't exist
        ValueError
            If file format is unsupported
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Workflow file not found: {file_path}")

        suffix = file_path.suffix.lower()

        with open(file_path) as f:
            if suffix in (".yaml", ".yml"):
                workflow = yaml.safe_load(f)
            elif suffix == ".json":
                workflow = json.load(f)
            else:
                raise ValueError(
                    f"Unsupported workflow file format: {suffix}. "
                    "Use .yaml, .yml, or .json"
                )

        self.logger.info(f"Loaded workflow from {file_path}")
        return workflow

    def _config_value(self, key: str) -> Any:
        config = self.config or get_config()
        if key not in config:
            raise ValueError(f"Config key '{key}' not found")
        return config.get(key)

    def _resolve_parameter(self, value: Any, step_name: str) -> Any:
        """
        Resolve parameter value, supporting references to previous steps.

        Parameters
        ----------
        value : any
            Parameter value (may be a reference like "${step_name.attr}")
        step_name : str
            Current step name

        Returns
        -------
        any
            Resolved value
        """
        is_reference = (
            isinstance(value, str) and value.startswith("${") and value.endswith("}")
        )
        if not is_reference:
            return value

        ref = value[2:-1]
        if ref.startswith("config."):
            return self._config_value(ref[len("config.") :])

        if "." in ref:
            step_ref, attr = ref.split(".", 1)
        else:
            step_ref, attr = ref, "output"

        if step_ref not in self.results:
            raise ValueError(
                f"Step '{step_ref}' not found in results "
                f"(referenced by {value} in step '{step_name}')"
            )

        result = self.results[step_ref]
        if attr == "output":
            return result
        if isinstance(result, pd.DataFrame):
            if attr in result.columns:
                return result[attr].values
            raise ValueError(
                f"Column '{attr}' not found in step '{step_ref}' output. "
                f"Available columns: {list(result.columns)}"
            )
        if isinstance(result, dict) and attr in result:
            return result[attr]
        if hasattr(result, attr):
            return getattr(result, attr)
        raise ValueError(
            f"Reference {value} not found in step '{step_ref}'. "
            f"Result type: {type(result)}"
        )

    def _resolve_parameters(
        self, params: dict[str, Any], step_name: str
    ) -> dict[str, Any]:
        """Resolve all parameters in a dictionary."""
        resolved = {}
        for key, value in params.items():
            if isinstance(value, dict):
                resolved[key] = self._resolve_parameters(value, step_name)
            elif isinstance(value, list):
                resolved[key] = [
                    self._resolve_parameter(item, step_name) for item in value
                ]
            else:
                resolved[key] = self._resolve_parameter(value, step_name)
        return resolved

    def _resolve_path(self, value: Any) -> Any:
        if isinstance(value, str) and Path(value).suffix.lower() in (
            ".yaml",
            ".yml",
            ".json",
            ".csv",
        ):
            path = Path(value)
            return path if path.is_absolute() else self.working_dir / path
        return value

    def _execute_step(self, step: dict[str, Any], step_index: int) -> Any:
        """
        Execute a single workflow step.

        Parameters
        ----------
        step : dict
            Step definition
        step_index : int
            Step index (for logging)

        Returns
        -------
        any
            Step result
        """
        step_name = step.get("name") or step.get("step") or f"step_{step_index}"
        step_type = step.get("type") or step.get("function")

        if not step_type:
            raise ValueError(f"Step {step_name} missing 'type' or 'function' field")

        self.logger.info(f"Executing step {step_index + 1}: {step_name} ({step_type})")

        func = STEP_REGISTRY.get(step_type)
        if func is None:
            raise ValueError(
                f"Unknown step type: {step_type}. "
                f"Available: {list(STEP_REGISTRY.keys())}"
            )

        params = step.get("params", step.get("parameters", {})) or {}
        params = self._resolve_parameters(params, step_name)
        if "path" in params:
            params["path"] = self._resolve_path(params["path"])

        # Pass config to functions that accept it
        sig = inspect.signature(func)
        if "config" in sig.parameters and "config" not in params:
            params["config"] = self.config

        try:
            result = func(**params)
        except Exception as e:
            self.logger.error(f"✗ Step {step_name} failed: {e}")
            raise
        self.results[step_name] = result
        self.logger.info(f"✓ Step {step_name} completed successfully")
        return result

    def _load_workflow_config(self, config_file: str) -> None:
        config_path = Path(config_file)
        if not config_path.is_absolute():
            config_path = self.working_dir / config_path
        if config_path.exists():
            self.config = load_config(config_path)
            self.logger.info(f"Loaded config from {config_path}")
        else:
            self.logger.warning(f"Config file not found: {config_file}, using defaults")

    def execute(self, workflow: dict[str, Any]) -> dict[str, Any]:
        """
        Execute a workflow definition.

        Parameters
        ----------
        workflow : dict
            Workflow definition with 'steps' list, optional 'config' file
            and optional 'stop_on_error' flag (default True)

        Returns
        -------
        dict
            Results from all steps, keyed by step name
        """
        self.logger.info("Starting workflow execution")

        config_file = workflow.get("config")
        if config_file:
            self._load_workflow_config(config_file)

        steps = workflow.get("steps", [])
        if not steps:
            raise ValueError("Workflow must contain 'steps' list")

        for i, step in enumerate(steps):
            try:
                self._execute_step(step, i)
            except Exception as e:
                self.logger.error(f"Workflow failed at step {i + 1}: {e}")
                if workflow.get("stop_on_error", True):
                    raise

        self.logger.info(f"Workflow completed ({len(steps)} steps)")
        return self.results

    def execute_file(self, file_path: str | Path) -> dict[str, Any]:
        """
        Load and execute workflow from file.

        Parameters
        ----------
        file_path : str or Path
            Path to workflow file

        Returns
        -------
        dict
            Results from all steps
        """
        workflow = self.load_workflow_file(file_path)
        return self.execute(workflow)


def run_workflow(
    workflow_file: str | Path,
    config: ConfigManager | None = None,
    working_dir: str | Path | None = None,
) -> dict[str, Any]:
    """
    Convenience function to run a workflow from a file.

    Parameters
    ----------
    workflow_file : str or Path
        Path to workflow YAML/JSON file
    config : ConfigManager, optional
        Configuration manager
    working_dir : str or Path, optional
        Working directory for relative paths; defaults to the workflow
        file's directory

    Returns
    -------
    dict
        Results from all steps

    Example
    -------
    >>> from wellsmith.workflows import run_workflow
    >>> results = run_workflow("kill_sheet.yaml")  # doctest: +SKIP
    """
    workflow_file = Path(workflow_file)
    orchestrator = WorkflowOrchestrator(
        config=config, working_dir=working_dir or workflow_file.parent
    )
    return orchestrator.execute_file(workflow_file)


def load_workflow(file_path: str | Path) -> dict[str, Any]:
    """
    Load workflow definition without executing.

    Parameters
    ----------
    file_path : str or Path
        Path to workflow file

    Returns
    -------
    dict
        Workflow definition
    """
    orchestrator = WorkflowOrchestrator()
    return orchestrator.load_workflow_file(file_path)
