#!/usr/bin/env python3
"""
Camera utilities for the top-down viewport.

The orbital plane is y = 0 and the camera hangs above it looking down the y axis:
scene +x is screen right and scene +z is screen down. Positions go in as scene
Vec3s, the height is discarded, and screen points come back out on the plane.
"""
from typing import Optional, Tuple

from .constants import (
    AUTO_FIT_MARGIN,
    DEFAULT_UNITS_PER_PIXEL,
    MAX_UNITS_PER_PIXEL,
    MIN_UNITS_PER_PIXEL,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .data_models import Vec3
from .vector_utils import clamp


class TopDownCamera:
    """
    Looks straight down on the orbital plane.

    Attributes:
        focus: Scene (x, z) under the middle of the viewport
        upp: Scene units per pixel; smaller means zoomed in
    """

    def __init__(self, focus: Vec3 = (0.0, 0.0, 0.0), units_per_pixel: float = DEFAULT_UNITS_PER_PIXEL):
        self.focus = (float(focus[0]), float(focus[2]))
        self.upp = units_per_pixel
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def _half_viewport(self) -> Tuple[float, float]:
        return (self.viewport_size[0] / 2, self.viewport_size[1] / 2)

    def project(self, pos: Vec3) -> Tuple[int, int]:
        """Screen pixel of a scene position; height above the plane is ignored."""
        hw, hh = self._half_viewport()
        fx, fz = self.focus
        return (int(hw + (pos[0] - fx) / self.upp), int(hh + (pos[2] - fz) / self.upp))

    def unproject(self, screen: Tuple[int, int]) -> Vec3:
        """Point on the orbital plane under a screen pixel."""
        hw, hh = self._half_viewport()
        fx, fz = self.focus
        return (fx + (screen[0] - hw) * self.upp, 0.0, fz + (screen[1] - hh) * self.upp)

    def length_to_pixels(self, length: float) -> float:
        return length / self.upp

    def zoom(self, factor: float, pivot_screen: Optional[Tuple[int, int]] = None) -> None:
        """Zoom in by `factor` (> 1 zooms in); the scene point under pivot_screen stays put."""
        factor = clamp(factor, 0.05, 20.0)
        anchor = self.unproject(pivot_screen) if pivot_screen is not None else None
        self.upp = clamp(self.upp / factor, MIN_UNITS_PER_PIXEL, MAX_UNITS_PER_PIXEL)
        if anchor is not None:
            hw, hh = self._half_viewport()
            self.focus = (
                anchor[0] - (pivot_screen[0] - hw) * self.upp,
                anchor[2] - (pivot_screen[1] - hh) * self.upp,
            )

    def drag(self, dx_pixels: float, dy_pixels: float) -> None:
        """Move the view with the cursor: the plane follows a drag of (dx, dy) pixels."""
        fx, fz = self.focus
        self.focus = (fx - dx_pixels * self.upp, fz - dy_pixels * self.upp)

    def fit_radius(self, radius: float) -> None:
        """Look at the star and zoom so an orbit of `radius` fits with a margin."""
        w, h = self.viewport_size
        self.focus = (0.0, 0.0)
        self.upp = clamp(2.0 * radius * AUTO_FIT_MARGIN / max(min(w, h), 1), MIN_UNITS_PER_PIXEL, MAX_UNITS_PER_PIXEL)
