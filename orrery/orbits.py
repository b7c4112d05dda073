#!/usr/bin/env python3
"""
Kinematic Orbit Engine for the Orrery

Responsibilities
- Seed each body's orbital phase from an injected random source.
- Advance body states from elapsed time (phase += angular_speed * dt).
- Derive positions on the circular, coplanar orbits.
- Sample orbit guide paths, memoised per radius.

Units and conventions
- Positions are in scene units; orbits lie in the x/z plane (y is always 0).
- Angular speeds are in radians per second; time steps are in seconds.
- Phases are never wrapped: cos/sin map any real phase onto the orbit circle.

Numerical notes
- Orbits are kinematic, not dynamic. There is no force integration, so advancing
  by t1 then t2 matches advancing by t1 + t2 up to floating-point rounding.
"""

import math
import random
from dataclasses import replace
from typing import Dict, Tuple

from .constants import BODY_SPIN_RATE, ORBIT_PATH_SEGMENTS
from .data_models import BodyDescriptor, BodyState, Vec3

TWO_PI = 2.0 * math.pi


def initial_state(rng: random.Random) -> BodyState:
    """
    Create a body state at a random phase in [0, 2*pi).

    Args:
        rng: Random source; pass a seeded random.Random for reproducible scenes.

    Returns:
        A fresh BodyState whose phase equals its recorded initial offset.
    """
    phase = rng.random() * TWO_PI
    return BodyState(phase_angle=phase, initial_phase_offset=phase)


def advance(state: BodyState, descriptor: BodyDescriptor, dt: float) -> BodyState:
    """
    Advance a body by dt seconds.

    Must be called once per body per tick; calling it twice moves that body
    ahead of its siblings.
    """
    return replace(
        state,
        phase_angle=state.phase_angle + descriptor.angular_speed * dt,
        spin_angle=state.spin_angle + BODY_SPIN_RATE * dt,
    )


def orbital_position(descriptor: BodyDescriptor, state: BodyState) -> Vec3:
    r = descriptor.distance_from_center
    return (math.cos(state.phase_angle) * r, 0.0, math.sin(state.phase_angle) * r)


def orbital_period(descriptor: BodyDescriptor) -> float:
    """Time for one revolution in the overlay's units (1 / angular_speed)."""
    return 1.0 / descriptor.angular_speed


class OrbitPathBuilder:
    """
    Samples closed circular guide paths.

    A path depends on its radius alone, so each distinct radius is computed once
    and reused by every body that happens to share it.
    """

    def __init__(self, segments: int = ORBIT_PATH_SEGMENTS):
        if segments < 3:
            raise ValueError("segments must be >= 3")
        self.segments = int(segments)
        self._cache: Dict[float, Tuple[Vec3, ...]] = {}

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def build_path(self, radius: float) -> Tuple[Vec3, ...]:
        """
        Sample a circle of the given radius at segments + 1 evenly spaced angles
        over [0, 2*pi] inclusive; the first and last angles coincide.

        Args:
            radius: Orbit radius in scene units (> 0)

        Returns:
            Tuple of (x, 0.0, z) points.
        """
        radius = float(radius)
        cached = self._cache.get(radius)
        if cached is not None:
            return cached
        if radius <= 0:
            raise ValueError("radius must be > 0")

        n = self.segments
        points = []
        for i in range(n + 1):
            angle = (i / n) * TWO_PI
            points.append((math.cos(angle) * radius, 0.0, math.sin(angle) * radius))
        path = tuple(points)
        self._cache[radius] = path
        return path
