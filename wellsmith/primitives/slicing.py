"""Slice builder: merge pipe and annulus segmentations into depth slices.

Layer 2: Primitives - Pure operations.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
import pandas as pd

from wellsmith.objects.sections import AnnulusSection, PipeSection
from wellsmith.objects.slices import DepthSlice
from wellsmith.primitives.geometry import (
    circle_area,
    section_covering,
    section_span,
    sort_sections,
)


def unique_boundaries(values: Iterable[float], tol: float = 1e-6) -> list[float]:
    """Sorted depth values with near-duplicates (within ``tol``) collapsed.

    Example:
        >>> unique_boundaries([500.0, 0.0, 500.0000001, 2500.0])
        [0.0, 500.0, 2500.0]
    """
    arr = np.asarray(list(values), dtype=np.float64)
    arr = np.sort(arr[np.isfinite(arr)])
    out: list[float] = []
    for v in arr:
        if out and abs(v - out[-1]) <= tol:
            continue
        out.append(float(v))
    return out


def slice_geometry(
    pipes: Sequence[PipeSection],
    annuli: Sequence[AnnulusSection],
    tol: float = 1e-6,
) -> list[DepthSlice]:
    """Build depth slices over every region where an annulus is defined.

    Every top and bottom of both lists becomes a boundary. Each band between
    consecutive boundaries is governed by one annulus section and at most
    one pipe section; bands with no annulus are skipped and bands with no
    pipe are open hole (pipe OD 0).

    Args:
        pipes: Drill-string sections.
        annuli: Annulus sections.
        tol: Boundaries closer than this are merged (m).

    Returns:
        Slices in ascending depth order. Empty when there are no sections.

    Example:
        >>> from wellsmith.objects import AnnulusSection, PipeSection
        >>> annuli = [AnnulusSection(top=0, length=500, inner_diameter=0.340, is_cased=True),
        ...           AnnulusSection(top=500, length=2000, inner_diameter=0.311)]
        >>> pipes = [PipeSection(top=0, length=2500, inner_diameter=0.0953, outer_diameter=0.127)]
        >>> [(s.top, s.bottom) for s in slice_geometry(pipes, annuli)]
        [(0.0, 500.0), (500.0, 2500.0)]
    """
    ordered_annuli = sort_sections(annuli)
    ordered_pipes = sort_sections(pipes)

    values: list[float] = []
    for section in list(ordered_annuli) + list(ordered_pipes):
        values.extend(section_span(section))
    boundaries = unique_boundaries(values, tol=tol)

    slices = []
    for top, bottom in zip(boundaries, boundaries[1:]):
        if bottom <= top:
            continue
        annulus = section_covering(ordered_annuli, top, bottom, tol=tol)
        if annulus is None:
            continue
        pipe = section_covering(ordered_pipes, top, bottom, tol=tol)
        pipe_area = circle_area(pipe.outer_diameter) if pipe is not None else 0.0
        area = max(0.0, circle_area(annulus.inner_diameter) - pipe_area)
        slices.append(
            DepthSlice(top=top, bottom=bottom, area=area, volume=area * (bottom - top))
        )
    return slices


def clip_slices(
    slices: Sequence[DepthSlice], top: float, bottom: float
) -> list[DepthSlice]:
    """Slices trimmed to ``[top, bottom]``; slices outside are dropped."""
    lo, hi = min(top, bottom), max(top, bottom)
    clipped = []
    for s in slices:
        t = max(s.top, lo)
        b = min(s.bottom, hi)
        if b > t:
            clipped.append(DepthSlice(top=t, bottom=b, area=s.area, volume=s.area * (b - t)))
    return clipped


def slices_to_frame(slices: Sequence[DepthSlice]) -> pd.DataFrame:
    """Tabulate slices with a cumulative volume column.

    Returns:
        DataFrame with columns top, bottom, length, area, volume,
        cumulative_volume.
    """
    frame = pd.DataFrame(
        {
            "top": [s.top for s in slices],
            "bottom": [s.bottom for s in slices],
            "length": [s.length for s in slices],
            "area": [s.area for s in slices],
            "volume": [s.volume for s in slices],
        },
        columns=["top", "bottom", "length", "area", "volume"],
    )
    frame["cumulative_volume"] = frame["volume"].cumsum()
    return frame
