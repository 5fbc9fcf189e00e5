"""Well file I/O.

Wells are stored as YAML or JSON documents::

    name: Demo
    base_annulus_density: 1260
    base_string_density: 1260
    tank_volume: 40
    surface_line_volume: 2
    pipes:
      - {top: 0, length: 2500, inner_diameter: 0.0953, outer_diameter: 0.127}
    annuli:
      - {top: 0, length: 500, inner_diameter: 0.340, is_cased: true}
    steps:
      - {name: Slug, top: 100, bottom: 200, density: 1500, placement: string}
    surveys:
      - {md: 0, tvd: 0}

Reports are written as CSV through pandas.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd
import yaml

from wellsmith.config import ConfigManager
from wellsmith.objects.fluids import MudStep, Placement
from wellsmith.objects.sections import AnnulusSection, PipeSection
from wellsmith.objects.survey import SurveyStation
from wellsmith.primitives.slicing import slices_to_frame
from wellsmith.tasks.wellmodel import WellModel
from wellsmith.utils.errors import raise_parameter_error

logger = logging.getLogger(__name__)

REPORT_KINDS = ("summary", "pipes", "annuli", "layers", "slices")


def well_to_dict(well: WellModel) -> dict[str, Any]:
    """Plain-data representation of a well, suitable for YAML or JSON."""
    return {
        "name": well.name,
        "base_annulus_density": well.base_annulus_density,
        "base_string_density": well.base_string_density,
        "tank_volume": float(well.tank_volume),
        "surface_line_volume": float(well.surface_line_volume),
        "pipes": [
            {
                "name": p.name,
                "top": p.top,
                "length": p.length,
                "inner_diameter": p.inner_diameter,
                "outer_diameter": p.outer_diameter,
            }
            for p in well.pipes
        ],
        "annuli": [
            {
                "name": a.name,
                "top": a.top,
                "length": a.length,
                "inner_diameter": a.inner_diameter,
                "outer_diameter": a.outer_diameter,
                "is_cased": a.is_cased,
            }
            for a in well.annuli
        ],
        "steps": [
            {
                "name": s.name,
                "top": s.top,
                "bottom": s.bottom,
                "density": s.density,
                "placement": s.placement.value,
                "color": s.color,
                "fluid_ref": s.fluid_ref,
            }
            for s in well.steps
        ],
        "surveys": [{"md": s.md, "tvd": s.tvd} for s in well.surveys],
    }


def well_from_dict(
    data: dict[str, Any],
    config: Optional[ConfigManager] = None,
    strict: Optional[bool] = None,
) -> WellModel:
    """Build a WellModel from plain data.

    Missing lists are empty; missing densities fall back to the config.
    Placement strings are matched case-insensitively.

    Raises:
        ValueError: If ``data`` is not a mapping or a list entry is not one.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Well data must be a mapping, got {type(data).__name__}")

    def _entries(key: str) -> list[dict[str, Any]]:
        entries = data.get(key) or []
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ValueError(f"Entry {i} of '{key}' must be a mapping")
        return entries

    steps = []
    for entry in _entries("steps"):
        entry = dict(entry)
        entry["placement"] = Placement.parse(entry.get("placement", "annulus"))
        if entry.get("color") is None:
            entry.pop("color", None)
        steps.append(MudStep(**entry))

    return WellModel(
        name=data.get("name") or "",
        pipes=[PipeSection(**entry) for entry in _entries("pipes")],
        annuli=[AnnulusSection(**entry) for entry in _entries("annuli")],
        steps=steps,
        surveys=[SurveyStation(**entry) for entry in _entries("surveys")],
        base_annulus_density=data.get("base_annulus_density"),
        base_string_density=data.get("base_string_density"),
        tank_volume=data.get("tank_volume") or 0.0,
        surface_line_volume=data.get("surface_line_volume") or 0.0,
        config=config,
        strict=strict,
    )


def load_well(
    path: Union[str, Path],
    config: Optional[ConfigManager] = None,
    strict: Optional[bool] = None,
    rebuild: bool = True,
) -> WellModel:
    """Load a well from a YAML or JSON file.

    Args:
        path: Path to a ``.yaml``, ``.yml`` or ``.json`` file.
        config: Configuration for the well; defaults to the global config.
        strict: Validate sections and steps while loading.
        rebuild: Rebuild the fluid layers after loading.

    Returns:
        WellModel.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the format is unsupported or the content malformed.

    Example:
        >>> from wellsmith.workflows import load_well
        >>> well = load_well("demo_well.yaml")  # doctest: +SKIP
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Well file not found: {path}")

    suffix = path.suffix.lower()
    with open(path) as f:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(
                f"Unsupported well file format: {suffix}. Use .yaml, .yml, or .json"
            )

    well = well_from_dict(data or {}, config=config, strict=strict)
    if rebuild:
        well.rebuild_layers()
    logger.info(
        f"Loaded well '{well.name}' from {path}: {len(well.pipes)} pipe sections, "
        f"{len(well.annuli)} annulus sections, {len(well.steps)} steps"
    )
    return well


def save_well(well: WellModel, path: Union[str, Path]) -> Path:
    """Write a well to a YAML or JSON file, chosen by suffix.

    Returns:
        The path written.

    Raises:
        ValueError: If the format is unsupported.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    data = well_to_dict(well)
    if suffix in (".yaml", ".yml"):
        text = yaml.safe_dump(data, sort_keys=False)
    elif suffix == ".json":
        text = json.dumps(data, indent=2)
    else:
        raise ValueError(
            f"Unsupported well file format: {suffix}. Use .yaml, .yml, or .json"
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    logger.info(f"Saved well '{well.name}' to {path}")
    return path


def well_report(
    well: WellModel, kind: str = "summary", depth_md: Optional[float] = None
) -> pd.DataFrame:
    """Tabular report of one aspect of a well.

    Args:
        well: Well to report on.
        kind: One of 'summary', 'pipes', 'annuli', 'layers', 'slices'.
        depth_md: Evaluation depth for pressures in the summary report.

    Returns:
        DataFrame.

    Raises:
        ParameterError: If ``kind`` is unknown.
    """
    if kind == "summary":
        summary = well.summary(depth_md)
        return pd.DataFrame({"quantity": list(summary), "value": list(summary.values())})
    if kind == "pipes":
        return well.sections_frame("pipe")
    if kind == "annuli":
        return well.sections_frame("annulus")
    if kind == "layers":
        return well.layers_frame()
    if kind == "slices":
        return slices_to_frame(well.slices())
    raise_parameter_error(
        "kind",
        kind,
        valid_values=list(REPORT_KINDS),
        suggestion="Pick one of the listed report kinds.",
    )


def export_report(
    well: WellModel,
    path: Union[str, Path],
    kind: str = "summary",
    depth_md: Optional[float] = None,
) -> Path:
    """Write a report as CSV.

    Args:
        well: Well to report on.
        path: Output CSV path.
        kind: Report kind, see ``well_report``.
        depth_md: Evaluation depth for pressures in the summary report.

    Returns:
        The path written.
    """
    path = Path(path)
    frame = well_report(well, kind=kind, depth_md=depth_md)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, index=False)
    logger.info(f"Exported {kind} report ({len(frame)} rows) to {path}")
    return path
