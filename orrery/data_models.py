#!/usr/bin/env python3
"""
Data models for the Orrery.

This module defines the records shared between the orbital engine, the scene
composer, the viewport and the controls window.

Units and usage
- distances are in scene units (read as AU in the overlay), sizes in Earth radii,
  angular speeds in radians per second of scene time.
- BodyDescriptor is the static configuration of one orbiting body; it is created once
  and never mutated.
- BodyState is replaced, not mutated, on every tick; SceneAssembler owns the table.
- RenderNode is renderer-agnostic: the viewport decides how to draw each kind.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from .constants import (
    CENTRAL_COLOR,
    CENTRAL_LIGHT_INTENSITY,
    CENTRAL_MESH_RADIUS,
    CENTRAL_TEXTURE_ID,
    DEFAULT_BODY_COLOR,
    DEFAULT_MESH_RADIUS,
)

Vec3 = Tuple[float, float, float]
Color = Tuple[int, int, int]

# RenderNode kinds
NODE_BODY = "Body"
NODE_RING = "Ring"
NODE_GUIDE_PATH = "GuidePath"
NODE_STAR = "Star"


@dataclass(frozen=True)
class BodyDescriptor:
    """
    Static description of an orbiting body.

    Fields:
    - distance_from_center: Orbit radius in scene units (> 0)
    - visual_size: Reported size in Earth radii (> 0)
    - angular_speed: Radians per second of scene time (> 0)
    - surface_texture_id: Texture identity, e.g. "/textures/2k_earth.jpg"
    - has_ring: Whether a ring is attached to the body
    - mesh_radius: Radius of the drawn sphere in scene units
    - color: RGB fallback used when the texture cannot be resolved
    """
    distance_from_center: float
    visual_size: float
    angular_speed: float
    surface_texture_id: str
    has_ring: bool = False
    mesh_radius: float = DEFAULT_MESH_RADIUS
    color: Color = DEFAULT_BODY_COLOR

    def __post_init__(self):
        for name in ("distance_from_center", "visual_size", "angular_speed", "mesh_radius"):
            value = getattr(self, name)
            # NaN and inf compare False against 0, so check finiteness first
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a finite number > 0")


@dataclass(frozen=True)
class CentralBodyDescriptor:
    """The emissive body fixed at the origin."""
    mesh_radius: float = CENTRAL_MESH_RADIUS
    surface_texture_id: str = CENTRAL_TEXTURE_ID
    light_intensity: float = CENTRAL_LIGHT_INTENSITY
    color: Color = CENTRAL_COLOR


@dataclass(frozen=True)
class BodyState:
    """Orbital phase of one body; any real phase maps onto the orbit circle."""
    phase_angle: float
    initial_phase_offset: float
    spin_angle: float = 0.0


@dataclass(frozen=True)
class SelectionSummary:
    """Snapshot of a picked body, taken from its descriptor at click time."""
    display_name: str
    distance_from_center: float
    visual_size: float
    orbital_period: float


@dataclass(frozen=True)
class RenderNode:
    """
    A drawable primitive.

    kind is one of NODE_STAR, NODE_GUIDE_PATH, NODE_BODY, NODE_RING. body_id is the
    index of the owning body in registration order (None for the star).
    """
    kind: str
    geometry: Dict[str, Any]
    position: Optional[Vec3] = None
    texture_ref: Optional[str] = None
    body_id: Optional[int] = None


@dataclass(frozen=True)
class ComposedBody:
    """The render nodes derived from one body plus its pick handler."""
    body_id: int
    guide_path: RenderNode
    body: RenderNode
    ring: Optional[RenderNode]
    on_pick: Callable[[], Any] = field(compare=False, repr=False)

    def nodes(self) -> Iterator[RenderNode]:
        yield self.guide_path
        yield self.body
        if self.ring is not None:
            yield self.ring


@dataclass(frozen=True)
class SceneFrame:
    """Everything the viewport and overlay need for one frame."""
    nodes: Tuple[RenderNode, ...]
    selection: Optional[SelectionSummary]
    delta: float
    timestamp: Optional[float]
