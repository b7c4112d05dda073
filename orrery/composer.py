#!/usr/bin/env python3
"""
Scene composition for the Orrery.

Maps a body's static descriptor and current state to renderer-agnostic nodes:
the orbit guide path, the body itself and, for ringed bodies, the ring. Nothing
here loads textures or touches the renderer; texture identities are passed
through for the viewport to resolve.
"""
from typing import Any, Callable

from .constants import (
    GUIDE_PATH_COLOR,
    GUIDE_PATH_OPACITY,
    RING_COLOR,
    RING_INNER_RADIUS,
    RING_OPACITY,
    RING_OUTER_RADIUS,
    RING_SEGMENTS,
    RING_TILT,
    SPHERE_SEGMENTS,
)
from .data_models import (
    NODE_BODY,
    NODE_GUIDE_PATH,
    NODE_RING,
    NODE_STAR,
    BodyDescriptor,
    BodyState,
    CentralBodyDescriptor,
    ComposedBody,
    RenderNode,
)
from .orbits import OrbitPathBuilder, orbital_position


def compose(
    body_id: int,
    descriptor: BodyDescriptor,
    state: BodyState,
    path_builder: OrbitPathBuilder,
    on_select: Callable[[BodyDescriptor], Any],
) -> ComposedBody:
    """
    Compose the render nodes for one orbiting body.

    Args:
        body_id: Index of the body in registration order
        descriptor: Static body configuration
        state: Current orbital state
        path_builder: Shared, memoising guide path sampler
        on_select: Called with the descriptor when the body is picked

    Returns:
        ComposedBody whose on_pick() forwards to on_select and returns its result.
    """
    position = orbital_position(descriptor, state)

    guide_path = RenderNode(
        kind=NODE_GUIDE_PATH,
        geometry={
            "points": path_builder.build_path(descriptor.distance_from_center),
            "color": GUIDE_PATH_COLOR,
            "opacity": GUIDE_PATH_OPACITY,
        },
        body_id=body_id,
    )

    body = RenderNode(
        kind=NODE_BODY,
        geometry={
            "radius": descriptor.mesh_radius,
            "width_segments": SPHERE_SEGMENTS,
            "height_segments": SPHERE_SEGMENTS,
            "rotation": state.spin_angle,
            "color": descriptor.color,
        },
        position=position,
        texture_ref=descriptor.surface_texture_id,
        body_id=body_id,
    )

    ring = None
    if descriptor.has_ring:
        # Fixed radii regardless of the body's size
        ring = RenderNode(
            kind=NODE_RING,
            geometry={
                "inner_radius": RING_INNER_RADIUS,
                "outer_radius": RING_OUTER_RADIUS,
                "segments": RING_SEGMENTS,
                "tilt": RING_TILT,
                "color": RING_COLOR,
                "opacity": RING_OPACITY,
            },
            position=position,
            body_id=body_id,
        )

    return ComposedBody(
        body_id=body_id,
        guide_path=guide_path,
        body=body,
        ring=ring,
        on_pick=lambda: on_select(descriptor),
    )


def compose_central_body(central: CentralBodyDescriptor) -> RenderNode:
    return RenderNode(
        kind=NODE_STAR,
        geometry={
            "radius": central.mesh_radius,
            "width_segments": SPHERE_SEGMENTS,
            "height_segments": SPHERE_SEGMENTS,
            "light_intensity": central.light_intensity,
            "color": central.color,
        },
        position=(0.0, 0.0, 0.0),
        texture_ref=central.surface_texture_id,
    )
