#!/usr/bin/env python3
"""
Background star field.

Stars are fixed to the screen rather than the scene, so panning and zooming do
not move them. Positions are normalised to [0, 1) and scaled by the viewport when
drawn; brightness is in [min_brightness, 1].
"""
import random
from dataclasses import dataclass
from typing import List

from .constants import STARFIELD_COUNT, STARFIELD_MIN_BRIGHTNESS


@dataclass(frozen=True)
class Star:
    u: float
    v: float
    brightness: float


def generate_starfield(
    rng: random.Random,
    count: int = STARFIELD_COUNT,
    min_brightness: float = STARFIELD_MIN_BRIGHTNESS,
) -> List[Star]:
    if count < 0:
        raise ValueError("count must be >= 0")
    if not 0.0 <= min_brightness <= 1.0:
        raise ValueError("min_brightness must be within [0, 1]")
    span = 1.0 - min_brightness
    return [
        Star(rng.random(), rng.random(), min_brightness + span * rng.random())
        for _ in range(count)
    ]


def star_color(star: Star):
    """Greyscale colour for a star (the field is unsaturated)."""
    level = int(round(255 * star.brightness))
    return (level, level, level)
