#!/usr/bin/env python3
"""
Shared constants for the Orrery (scene units unless stated otherwise).

Distances are in scene units (one unit reads as one AU in the overlay), angles
in radians and times in seconds. Keeping constants in one place helps ensure
values are consistent across the codebase and makes tuning easier.
"""
import math

# Orbit guide paths
ORBIT_PATH_SEGMENTS = 64  # polyline has SEGMENTS + 1 points, first == last
GUIDE_PATH_COLOR = (255, 255, 255)
GUIDE_PATH_OPACITY = 0.2

# Bodies
DEFAULT_MESH_RADIUS = 1.0  # drawn sphere radius; independent of reported size
SPHERE_SEGMENTS = 32
BODY_SPIN_RATE = 0.6  # rad/s of self-rotation for every body mesh
DEFAULT_BODY_COLOR = (200, 200, 255)

# Rings: fixed radii, not scaled by the body's size
RING_INNER_RADIUS = 2.0
RING_OUTER_RADIUS = 2.5
RING_SEGMENTS = 64
RING_OPACITY = 0.5
RING_TILT = -math.pi / 2
RING_COLOR = (255, 255, 255)

# Central body (the star)
CENTRAL_MESH_RADIUS = 3.0
CENTRAL_TEXTURE_ID = "/textures/2k_sun.jpg"
CENTRAL_LIGHT_INTENSITY = 2.0
CENTRAL_COLOR = (255, 204, 0)

# Clock
MAX_FRAME_DELTA = 0.25  # s; cap used by the viewport so a stalled window can't jump
DEFAULT_TIME_SCALE = 1.0  # scene seconds per real second

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
SELECTION_COLOR = (255, 255, 0)
HUD_TEXT_COLOR = (200, 200, 200)
MIN_BODY_PIXELS = 3
MAX_BODY_PIXELS = 60

# Camera zoom bounds (scene units per pixel)
DEFAULT_UNITS_PER_PIXEL = 0.05
MIN_UNITS_PER_PIXEL = 0.002
MAX_UNITS_PER_PIXEL = 1.0
AUTO_FIT_MARGIN = 1.15

# Background stars
STARFIELD_COUNT = 1500
STARFIELD_MIN_BRIGHTNESS = 0.25

# Theme audio
THEME_VOLUME = 0.5

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
