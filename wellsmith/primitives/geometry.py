"""Depth-interval geometry for drill-string and annulus sections.

Layer 2: Primitives - Pure operations.

Per-metre capacity and displacement of a single section, and the
neighbor-aware "no overlap" rule applied when a section is edited.
Negative diameters and lengths are clamped to zero before use, so
malformed input never produces negative volumes.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence
from typing import TypeVar, Union

import numpy as np

from wellsmith.objects.sections import AnnulusSection, PipeSection

logger = logging.getLogger(__name__)

Section = Union[PipeSection, AnnulusSection]
S = TypeVar("S", PipeSection, AnnulusSection)


def circle_area(diameter: float) -> float:
    """Area of a circle (m²) with negative diameters clamped to zero."""
    d = max(float(diameter), 0.0)
    return np.pi * d * d / 4.0


def capacity_per_meter(section: Section) -> float:
    """Inner bore volume per metre, π·ID²/4 (m³/m).

    Example:
        >>> from wellsmith.objects import PipeSection
        >>> dp = PipeSection(top=0, length=100, inner_diameter=0.0953, outer_diameter=0.127)
        >>> round(capacity_per_meter(dp), 6)
        0.007133
    """
    return circle_area(section.inner_diameter)


def displacement_per_meter(section: Section) -> float:
    """Outer-swept volume per metre, π·OD²/4 (m³/m)."""
    return circle_area(section.outer_diameter)


def steel_cross_section(section: Section) -> float:
    """Metal area π(OD²−ID²)/4 (m²), never negative."""
    return max(0.0, circle_area(section.outer_diameter) - circle_area(section.inner_diameter))


def clamped_length(section: Section) -> float:
    """Section length with negatives clamped to zero."""
    return max(section.length, 0.0)


def section_capacity(section: Section) -> float:
    """Inner bore volume of the whole section (m³)."""
    return capacity_per_meter(section) * clamped_length(section)


def section_displacement(section: Section) -> float:
    """Outer-swept volume of the whole section (m³)."""
    return displacement_per_meter(section) * clamped_length(section)


def section_span(section: Section) -> tuple[float, float]:
    """MD bounds of a section with a negative length clamped to zero."""
    return section.top, section.top + clamped_length(section)


def sort_sections(sections: Sequence[S]) -> list[S]:
    """Sections ordered by top depth."""
    return sorted(sections, key=lambda s: s.top)


def enforce_no_overlap(section: S, siblings: Sequence[S]) -> S:
    """Clamp an edited section so it does not overlap its neighbors.

    Pushes the section down below the one above it and caps its length so
    its bottom stays above the next one. Only the edited section changes.
    A sibling starting at exactly the same depth is both the previous and
    the next section, so the edited one collapses to zero length at its
    bottom.

    Args:
        section: The edited section.
        siblings: The other sections of the same list. Entries that are the
            section itself (identity or equality) are ignored.

    Returns:
        The adjusted section (a new instance when anything changed).

    Example:
        >>> from wellsmith.objects import PipeSection
        >>> above = PipeSection(top=0, length=100, inner_diameter=0.1, outer_diameter=0.127)
        >>> below = PipeSection(top=300, length=100, inner_diameter=0.07, outer_diameter=0.165)
        >>> edited = PipeSection(top=50, length=400, inner_diameter=0.08, outer_diameter=0.127)
        >>> fixed = enforce_no_overlap(edited, [above, below])
        >>> fixed.top, fixed.length
        (100.0, 200.0)
    """
    others = sort_sections(
        [s for s in siblings if s is not section and s != section]
    )
    prev = None
    for other in others:
        if other.top <= section.top:
            prev = other
    nxt = next((s for s in others if s.top >= section.top), None)

    top = section.top
    length = section.length
    if prev is not None and top < section_span(prev)[1]:
        top = section_span(prev)[1]
    length = max(length, 0.0)
    if nxt is not None:
        length = min(length, max(0.0, nxt.top - top))

    if top == section.top and length == section.length:
        return section
    logger.debug(
        f"Clamped section {section.name or '<unnamed>'}: "
        f"top {section.top:g} -> {top:g}, length {section.length:g} -> {length:g}"
    )
    return dataclasses.replace(section, top=top, length=length)


def find_gaps(sections: Sequence[Section]) -> list[tuple[float, float]]:
    """Depth intervals not covered between consecutive sections.

    Returns:
        List of ``(top, bottom)`` gaps in ascending depth order.
    """
    ordered = sort_sections(sections)
    gaps = []
    for prev, curr in zip(ordered, ordered[1:]):
        prev_bottom = section_span(prev)[1]
        if curr.top > prev_bottom:
            gaps.append((prev_bottom, curr.top))
    return gaps


def has_gaps(sections: Sequence[Section]) -> bool:
    """True if any consecutive sections leave an uncovered interval."""
    return bool(find_gaps(sections))


def fill_gaps(sections: Sequence[S]) -> list[S]:
    """Lengthen sections so each one reaches the top of the next.

    Returns:
        New list ordered by top depth.
    """
    ordered = sort_sections(sections)
    filled: list[S] = []
    for i, curr in enumerate(ordered):
        if i + 1 < len(ordered):
            gap = ordered[i + 1].top - section_span(curr)[1]
            if gap > 0:
                curr = dataclasses.replace(curr, length=clamped_length(curr) + gap)
        filled.append(curr)
    return filled


def next_top(sections: Sequence[Section]) -> float:
    """Top depth for a section appended below all others (0 when empty)."""
    return max((section_span(s)[1] for s in sections), default=0.0)


def max_depth(
    pipes: Sequence[PipeSection], annuli: Sequence[AnnulusSection]
) -> float:
    """Deepest section bottom of either list (0 when both are empty)."""
    bottoms = [section_span(s)[1] for s in [*pipes, *annuli]]
    return max(max(bottoms, default=0.0), 0.0)


def section_covering(
    sections: Sequence[S], top: float, bottom: float, tol: float = 1e-6
) -> S | None:
    """First section whose ``[top, bottom]`` covers the band, if any."""
    for s in sections:
        s_top, s_bottom = section_span(s)
        if s_top <= top + tol and s_bottom >= bottom - tol:
            return s
    return None
