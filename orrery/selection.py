#!/usr/bin/env python3
"""
Selection handling for the Orrery.

A pick in the viewport becomes a SelectionSummary: a frozen, human-facing record
derived from the picked body's descriptor. The summary is not linked to the live
body state, so the overlay keeps showing the values from click time.

Display names come from texture identities. "/textures/2k_saturn.jpg" reads as
"saturn": directories, extension and a leading resolution token ("2k_", "4k_",
"8k_", ...) are dropped. Parsing is best effort; an identity that leaves nothing
usable falls back to the raw string.
"""
import logging
import re
from typing import List, Optional

from .data_models import BodyDescriptor, SelectionSummary
from .orbits import orbital_period

logger = logging.getLogger(__name__)

_RESOLUTION_PREFIX = re.compile(r"^\d+k_", re.IGNORECASE)


def display_name_from_texture(texture_id: str) -> str:
    base = texture_id.replace("\\", "/").rsplit("/", 1)[-1]
    stem = base.split(".", 1)[0]
    name = _RESOLUTION_PREFIX.sub("", stem)
    if not name:
        logger.debug("texture identity %r has no usable name; using it as-is", texture_id)
        return texture_id
    return name


def summarize(descriptor: BodyDescriptor) -> SelectionSummary:
    return SelectionSummary(
        display_name=display_name_from_texture(descriptor.surface_texture_id),
        distance_from_center=descriptor.distance_from_center,
        visual_size=descriptor.visual_size,
        orbital_period=orbital_period(descriptor),
    )


def format_summary(summary: SelectionSummary) -> List[str]:
    """Lines shown in the planet details panel."""
    return [
        summary.display_name.capitalize(),
        f"Distance from Sun: {summary.distance_from_center:g} AU",
        f"Size: {summary.visual_size:g} Earth radii",
        f"Orbital Period: {summary.orbital_period:.2f} Earth years",
    ]


class SelectionBridge:
    """Holds the last selection; a new pick always replaces the previous one."""

    def __init__(self):
        self._current: Optional[SelectionSummary] = None

    def select(self, descriptor: BodyDescriptor) -> SelectionSummary:
        self._current = summarize(descriptor)
        return self._current

    def get_current(self) -> Optional[SelectionSummary]:
        return self._current

    def clear(self) -> None:
        self._current = None
