"""Well aggregate: geometry, mud steps and fluid layers of one well.

Layer 3: Tasks - User intent translation.

``WellModel`` owns the in-memory collections of a single well and turns
edits (add a section, change a top, add a mud step) into primitive calls.
Derived values are recomputed on demand. The fluid layers are stored and
rebuilt after every edit made through the model; direct changes to the
public lists need an explicit ``rebuild_layers``.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional

import pandas as pd

from wellsmith.config import ConfigManager, get_config
from wellsmith.objects.fluids import FluidDomain, FluidLayer, MudStep
from wellsmith.objects.sections import AnnulusSection, PipeSection
from wellsmith.objects.survey import SurveyStation
from wellsmith.primitives.geometry import (
    capacity_per_meter,
    displacement_per_meter,
    enforce_no_overlap,
    fill_gaps,
    find_gaps,
    max_depth,
    next_top,
    section_capacity,
    section_displacement,
    sort_sections,
    steel_cross_section,
)
from wellsmith.primitives.hydrostatics import (
    TvdSampler,
    equivalent_mud_density,
    hydrostatic_pressure,
)
from wellsmith.primitives.layers import (
    layer_volume,
    layers_to_frame,
    rebuild_layers,
    sort_steps,
    steps_have_overlap,
)
from wellsmith.primitives.mixing import BariteRequirement, barite_requirement
from wellsmith.primitives.slicing import slice_geometry
from wellsmith.primitives.volumes import (
    EqualVolumeResult,
    IntervalVolumes,
    VolumeTotals,
    solve_pipe_in_for_equal_volume,
    volumes_between,
    well_totals,
)
from wellsmith.utils.errors import raise_parameter_error
from wellsmith.utils.validation import (
    validate_annulus_section,
    validate_mud_step,
    validate_pipe_section,
    validate_sections,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HydrostaticResult:
    """Hydrostatic pressures of both domains at one depth.

    Attributes:
        depth_md: Measured depth of evaluation (m).
        depth_tvd: True vertical depth of evaluation (m).
        annulus: Annulus hydrostatic pressure (kPa).
        string: String hydrostatic pressure (kPa).
    """

    depth_md: float
    depth_tvd: float
    annulus: float
    string: float

    @property
    def differential(self) -> float:
        """Annulus minus string pressure (kPa)."""
        return self.annulus - self.string


class WellModel:
    """In-memory aggregate for one well.

    Section edits go through the no-overlap rule; with ``strict=True``
    invalid dimensions are rejected with ``DataValidationError`` instead
    of being clamped.

    Example:
        >>> from wellsmith.tasks import WellModel
        >>> well = WellModel(name="Demo")
        >>> _ = well.add_annulus(inner_diameter=0.311, length=2500)
        >>> _ = well.add_pipe(length=2500)
        >>> round(well.volumes_between(0, 2500).string_capacity, 2)
        17.83
    """

    def __init__(
        self,
        name: str = "",
        pipes: Iterable[PipeSection] = (),
        annuli: Iterable[AnnulusSection] = (),
        steps: Iterable[MudStep] = (),
        surveys: Iterable[SurveyStation] = (),
        base_annulus_density: Optional[float] = None,
        base_string_density: Optional[float] = None,
        tank_volume: float = 0.0,
        surface_line_volume: float = 0.0,
        config: Optional[ConfigManager] = None,
        strict: Optional[bool] = None,
    ):
        """Initialize the well.

        Args:
            name: Well name.
            pipes: Drill-string sections.
            annuli: Annulus sections.
            steps: Mud placement steps.
            surveys: Survey stations for the MD→TVD mapping.
            base_annulus_density: Base fluid in the annulus (kg/m³);
                defaults to ``fluids.base_annulus_density``.
            base_string_density: Base fluid in the string (kg/m³);
                defaults to ``fluids.base_string_density``.
            tank_volume: Active surface tank volume (m³).
            surface_line_volume: Surface line volume (m³).
            config: Configuration; defaults to the process-wide config.
            strict: Reject invalid data instead of clamping; defaults to
                ``validation.strict``.
        """
        self.config = config or get_config()
        self.name = name
        self.strict = bool(
            self.config.get("validation.strict", False) if strict is None else strict
        )
        self.pipes: list[PipeSection] = sort_sections(list(pipes))
        self.annuli: list[AnnulusSection] = sort_sections(list(annuli))
        self.steps: list[MudStep] = list(steps)
        self._surveys: list[SurveyStation] = list(surveys)
        self._tvd_sampler = TvdSampler(self._surveys)
        self._base_annulus_density = float(
            self.config.get("fluids.base_annulus_density", 1260.0)
            if base_annulus_density is None
            else base_annulus_density
        )
        self._base_string_density = float(
            self.config.get("fluids.base_string_density", 1260.0)
            if base_string_density is None
            else base_string_density
        )
        self.tank_volume = tank_volume
        self.surface_line_volume = surface_line_volume
        self.annulus_layers: list[FluidLayer] = []
        self.string_layers: list[FluidLayer] = []

        if self.strict:
            validate_sections(self.pipes, self.annuli)
            for step in self.steps:
                validate_mud_step(step)

    # ------------------------------------------------------------------
    # Configuration-derived settings

    @property
    def gravity(self) -> float:
        return float(self.config.get("physics.gravity", 9.80665))

    @property
    def tolerance(self) -> float:
        return float(self.config.get("geometry.boundary_tolerance", 1e-6))

    @property
    def max_depth(self) -> float:
        """Deepest section bottom (m MD)."""
        return max_depth(self.pipes, self.annuli)

    @property
    def base_annulus_density(self) -> float:
        return self._base_annulus_density

    @base_annulus_density.setter
    def base_annulus_density(self, density: float) -> None:
        self._base_annulus_density = float(density)
        self._refresh_layers()

    @property
    def base_string_density(self) -> float:
        return self._base_string_density

    @base_string_density.setter
    def base_string_density(self, density: float) -> None:
        self._base_string_density = float(density)
        self._refresh_layers()

    # ------------------------------------------------------------------
    # Surveys

    @property
    def surveys(self) -> list[SurveyStation]:
        return list(self._surveys)

    @surveys.setter
    def surveys(self, stations: Iterable[SurveyStation]) -> None:
        self._surveys = list(stations)
        self._tvd_sampler = TvdSampler(self._surveys)

    def tvd(self, md: float) -> float:
        """TVD at a measured depth via the survey stations."""
        return self._tvd_sampler(md)

    # ------------------------------------------------------------------
    # Section editing

    def add_pipe(
        self,
        length: float = 100.0,
        inner_diameter: float = 0.0953,
        outer_diameter: float = 0.127,
        name: str = "",
    ) -> PipeSection:
        """Append a drill-string section below the deepest one."""
        section = PipeSection(
            top=next_top(self.pipes),
            length=length,
            inner_diameter=inner_diameter,
            outer_diameter=outer_diameter,
            name=name,
        )
        return self._insert(self.pipes, section, validate_pipe_section)

    def add_annulus(
        self,
        inner_diameter: float,
        length: float = 100.0,
        outer_diameter: float = 0.0,
        is_cased: bool = False,
        name: str = "",
    ) -> AnnulusSection:
        """Append an annulus section below the deepest one."""
        section = AnnulusSection(
            top=next_top(self.annuli),
            length=length,
            inner_diameter=inner_diameter,
            outer_diameter=outer_diameter,
            is_cased=is_cased,
            name=name,
        )
        return self._insert(self.annuli, section, validate_annulus_section)

    def update_pipe(self, index: int, **changes: Any) -> PipeSection:
        """Edit a drill-string section and re-apply the no-overlap rule.

        Args:
            index: Position in ``pipes`` (ordered by top).
            **changes: Field values, e.g. ``top=120.0`` or ``length=30.0``.

        Returns:
            The stored, possibly clamped, section.
        """
        return self._update(self.pipes, index, changes, validate_pipe_section)

    def update_annulus(self, index: int, **changes: Any) -> AnnulusSection:
        """Edit an annulus section and re-apply the no-overlap rule."""
        return self._update(self.annuli, index, changes, validate_annulus_section)

    def remove_pipe(self, index: int) -> PipeSection:
        removed = self.pipes.pop(index)
        self._refresh_layers()
        return removed

    def remove_annulus(self, index: int) -> AnnulusSection:
        removed = self.annuli.pop(index)
        self._refresh_layers()
        return removed

    def pipe_gaps(self) -> list[tuple[float, float]]:
        return find_gaps(self.pipes)

    def annulus_gaps(self) -> list[tuple[float, float]]:
        return find_gaps(self.annuli)

    def fill_pipe_gaps(self) -> None:
        """Lengthen drill-string sections to close gaps between them."""
        self.pipes = fill_gaps(self.pipes)
        self._refresh_layers()

    def fill_annulus_gaps(self) -> None:
        """Lengthen annulus sections to close gaps between them."""
        self.annuli = fill_gaps(self.annuli)
        self._refresh_layers()

    def _insert(self, sections, section, validator):
        if self.strict:
            validator(section)
        section = enforce_no_overlap(section, sections)
        sections.append(section)
        sections.sort(key=lambda s: s.top)
        logger.debug(f"Added {section!r} to well {self.name or '<unnamed>'}")
        self._refresh_layers()
        return section

    def _update(self, sections, index, changes, validator):
        edited = dataclasses.replace(sections[index], **changes)
        if self.strict:
            validator(edited)
        siblings = sections[:index] + sections[index + 1 :]
        edited = enforce_no_overlap(edited, siblings)
        sections[index] = edited
        sections.sort(key=lambda s: s.top)
        self._refresh_layers()
        return edited

    # ------------------------------------------------------------------
    # Mud steps

    def add_step(self, step: MudStep) -> None:
        if self.strict:
            validate_mud_step(step)
        self.steps.append(step)
        self._refresh_layers()

    def remove_step(self, index: int) -> MudStep:
        removed = self.steps.pop(index)
        self._refresh_layers()
        return removed

    def clear_steps(self) -> None:
        self.steps.clear()
        self._refresh_layers()

    @property
    def sorted_steps(self) -> list[MudStep]:
        """Steps in the order they are overlaid."""
        return sort_steps(self.steps)

    @property
    def steps_overlap(self) -> bool:
        return steps_have_overlap(self.steps)

    # ------------------------------------------------------------------
    # Volumes

    def slices(self):
        """Depth slices of the current geometry."""
        return slice_geometry(self.pipes, self.annuli, tol=self.tolerance)

    def volumes_between(self, top: float, bottom: float) -> IntervalVolumes:
        return volumes_between(
            self.pipes, self.annuli, top, bottom, slices=self.slices()
        )

    def equal_volume(self, top: float, bottom: float) -> EqualVolumeResult:
        """Pipe-in column holding the open-hole volume of ``[top, bottom]``."""
        return solve_pipe_in_for_equal_volume(self.pipes, self.annuli, top, bottom)

    def totals(self) -> VolumeTotals:
        return well_totals(
            self.pipes,
            self.annuli,
            tank_volume=self.tank_volume,
            surface_line_volume=self.surface_line_volume,
        )

    def barite_for(
        self, target_density: float, current_density: Optional[float] = None
    ) -> BariteRequirement:
        """Barite to weight up the whole circulating system.

        Args:
            target_density: Desired density (kg/m³).
            current_density: Current density (kg/m³); defaults to the base
                annulus density.
        """
        current = (
            self.base_annulus_density if current_density is None else current_density
        )
        return barite_requirement(
            current,
            target_density,
            self.totals().total_circulating_volume,
            barite_density=float(self.config.get("mixing.barite_density", 4250.0)),
            sack_mass=float(self.config.get("mixing.sack_mass", 40.0)),
        )

    # ------------------------------------------------------------------
    # Fluid layers

    def _refresh_layers(self) -> None:
        """Recompute the stored layers after an edit."""
        self.annulus_layers, self.string_layers = rebuild_layers(
            self.sorted_steps,
            self.max_depth,
            self.base_annulus_density,
            self.base_string_density,
            base_color=self.config.get("fluids.base_color", "#808080"),
        )
        logger.debug(
            f"Refreshed fluid layers for well {self.name or '<unnamed>'}: "
            f"{len(self.annulus_layers)} annulus, {len(self.string_layers)} string"
        )

    def rebuild_layers(self) -> tuple[list[FluidLayer], list[FluidLayer]]:
        """Fill both domains with the base fluid and overlay every step.

        Edits made through the model already keep the layers current; call
        this after changing ``pipes``, ``annuli`` or ``steps`` directly.

        Returns:
            Tuple ``(annulus_layers, string_layers)``, also stored on the model.
        """
        if self.steps_overlap:
            logger.warning(
                f"Mud steps of well {self.name or '<unnamed>'} overlap; "
                "later steps overwrite earlier ones"
            )
        self._refresh_layers()
        logger.info(
            f"Rebuilt fluid layers for well {self.name or '<unnamed>'}: "
            f"{len(self.annulus_layers)} annulus, {len(self.string_layers)} string"
        )
        return self.annulus_layers, self.string_layers

    def layers(self, domain: FluidDomain) -> list[FluidLayer]:
        if FluidDomain(domain) == FluidDomain.ANNULUS:
            return list(self.annulus_layers)
        return list(self.string_layers)

    def hydrostatic(self, depth_md: float) -> HydrostaticResult:
        """Hydrostatic pressures at a measured depth from the stored layers."""
        depth_tvd = self.tvd(depth_md)
        deepest = self.max_depth
        p_annulus = hydrostatic_pressure(
            self.annulus_layers, self.tvd, depth_tvd, g=self.gravity, max_depth=deepest
        )
        p_string = hydrostatic_pressure(
            self.string_layers, self.tvd, depth_tvd, g=self.gravity, max_depth=deepest
        )
        return HydrostaticResult(
            depth_md=float(depth_md),
            depth_tvd=float(depth_tvd),
            annulus=p_annulus,
            string=p_string,
        )

    # ------------------------------------------------------------------
    # Reports

    def sections_frame(self, kind: str = "pipe") -> pd.DataFrame:
        """Tabulate sections with per-metre and total volumes.

        Args:
            kind: 'pipe' or 'annulus'.

        Raises:
            ParameterError: If ``kind`` is neither.
        """
        if kind not in ("pipe", "annulus"):
            raise_parameter_error("kind", kind, valid_values=["pipe", "annulus"])
        sections = self.pipes if kind == "pipe" else self.annuli
        rows = []
        for s in sections:
            rows.append(
                {
                    "name": s.name,
                    "top": s.top,
                    "bottom": s.bottom,
                    "length": s.length,
                    "inner_diameter": s.inner_diameter,
                    "outer_diameter": s.outer_diameter,
                    "capacity_per_meter": capacity_per_meter(s),
                    "displacement_per_meter": displacement_per_meter(s),
                    "steel_area": steel_cross_section(s),
                    "capacity": section_capacity(s),
                    "displacement": section_displacement(s),
                }
            )
        return pd.DataFrame(rows)

    def layers_frame(self) -> pd.DataFrame:
        """Stored layers of both domains with their volumes."""
        layers = list(self.annulus_layers) + list(self.string_layers)
        frame = layers_to_frame(layers)
        volumes = [layer_volume(layer, self.pipes, self.annuli) for layer in layers]
        frame["volume"] = [v[0] for v in volumes]
        frame["volume_per_meter"] = [v[1] for v in volumes]
        return frame

    def summary(self, depth_md: Optional[float] = None) -> dict[str, float]:
        """Headline numbers: totals and, optionally, pressures at a depth."""
        totals = self.totals()
        result = {
            "max_depth": self.max_depth,
            "string_capacity": totals.string_capacity,
            "string_displacement": totals.string_displacement,
            "string_metal": totals.string_metal,
            "annular_with_pipe": totals.annular_with_pipe,
            "open_hole": totals.open_hole,
            "total_circulating_volume": totals.total_circulating_volume,
        }
        if depth_md is not None:
            hydro = self.hydrostatic(depth_md)
            result.update(
                depth_md=hydro.depth_md,
                depth_tvd=hydro.depth_tvd,
                annulus_pressure=hydro.annulus,
                string_pressure=hydro.string,
                differential_pressure=hydro.differential,
                annulus_emd=equivalent_mud_density(
                    hydro.annulus, hydro.depth_tvd, g=self.gravity
                ),
            )
        return result

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"WellModel(name='{self.name}', pipes={len(self.pipes)}, "
            f"annuli={len(self.annuli)}, steps={len(self.steps)})"
        )
