#!/usr/bin/env python3
"""
Small numeric helpers shared by the camera and the viewport.
"""
import math
from typing import Tuple


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def rotate2d(p: Tuple[float, float], angle: float) -> Tuple[float, float]:
    c, s = math.cos(angle), math.sin(angle)
    return (p[0] * c - p[1] * s, p[0] * s + p[1] * c)
