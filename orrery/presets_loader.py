#!/usr/bin/env python3
"""
Scene preset loading for the Orrery.

A preset is a fixed, ordered table of orbiting bodies plus an optional star and
time scale. Presets live as JSON files in templates/; the built-in solar system is
used whenever no template is available.

Schema
======
Template JSON (templates/*.json):
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "time_scale": 1.0,                     # optional, default None
  "central_body": {                      # optional
    "mesh_radius": 3.0,
    "texture": "/textures/2k_sun.jpg",
    "light_intensity": 2.0,
    "color": "#ffcc00"
  },
  "bodies": [
    {
      "distance": 21,                    # scene units (AU)
      "size": 9.4,                       # Earth radii, shown in the overlay
      "speed": 0.3,                      # radians per second
      "texture": "/textures/2k_saturn.jpg",
      "rings": true,                     # optional, default false
      "mesh_radius": 1.0,                # optional
      "color": [210, 190, 140]           # optional, hex string also accepted
    }
  ]
}

Users can add their own JSON files into templates/ and they'll be picked up by the loader.
"""
import json
import logging
import os
from typing import List, Optional, Tuple

from .constants import CENTRAL_COLOR, DEFAULT_BODY_COLOR, DEFAULT_MESH_RADIUS
from .data_models import BodyDescriptor, CentralBodyDescriptor
from .utils import coerce_color, try_float

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

BUILTIN_PRESET_NAME = "Solar System"


def template_solar_system() -> List[BodyDescriptor]:
    """
    Seven planets on scaled, circular orbits; Saturn carries the ring.
    Sizes are in Earth radii and only feed the overlay; every mesh is drawn at radius 1.
    """
    return [
        BodyDescriptor(5, 0.38, 2.0, "/textures/2k_mercury.jpg", color=(170, 160, 150)),
        BodyDescriptor(7, 0.95, 1.6, "/textures/2k_venus.jpg", color=(230, 200, 140)),
        BodyDescriptor(10, 1.0, 1.0, "/textures/2k_earth.jpg", color=(100, 149, 237)),
        BodyDescriptor(13, 0.53, 0.8, "/textures/2k_mars.jpg", color=(188, 39, 50)),
        BodyDescriptor(17, 11.2, 0.4, "/textures/2k_jupiter.jpg", color=(210, 180, 140)),
        BodyDescriptor(21, 9.4, 0.3, "/textures/2k_saturn.jpg", has_ring=True, color=(220, 200, 150)),
        BodyDescriptor(29, 3.8, 0.1, "/textures/2k_neptune.jpg", color=(80, 110, 220)),
    ]


def _read_json(path: str) -> Optional[dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("could not read %s: %s", path, exc)
        return None


def parse_body(raw: dict) -> BodyDescriptor:
    """Build a descriptor from one template entry; raises KeyError/ValueError if invalid."""
    distance = try_float(raw["distance"])
    size = try_float(raw["size"])
    speed = try_float(raw["speed"])
    if distance is None or size is None or speed is None:
        raise ValueError("distance, size and speed must be finite numbers")
    texture = raw["texture"]
    if not isinstance(texture, str) or not texture:
        raise ValueError("texture must be a non-empty string")
    mesh_radius = try_float(raw.get("mesh_radius", DEFAULT_MESH_RADIUS))
    if mesh_radius is None:
        raise ValueError("mesh_radius must be a finite number")
    return BodyDescriptor(
        distance_from_center=distance,
        visual_size=size,
        angular_speed=speed,
        surface_texture_id=texture,
        has_ring=bool(raw.get("rings", False)),
        mesh_radius=mesh_radius,
        color=coerce_color(raw.get("color"), DEFAULT_BODY_COLOR),
    )


def parse_central_body(raw: Optional[dict]) -> CentralBodyDescriptor:
    if not raw:
        return CentralBodyDescriptor()
    default = CentralBodyDescriptor()
    mesh_radius = try_float(raw.get("mesh_radius"))
    intensity = try_float(raw.get("light_intensity"))
    return CentralBodyDescriptor(
        mesh_radius=mesh_radius if mesh_radius and mesh_radius > 0 else default.mesh_radius,
        surface_texture_id=raw.get("texture") or default.surface_texture_id,
        light_intensity=intensity if intensity is not None else default.light_intensity,
        color=coerce_color(raw.get("color"), CENTRAL_COLOR),
    )


def list_templates(templates_dir: str = TEMPLATES_DIR) -> List[Tuple[str, str]]:
    """Return list of (file_name, display_name) for available templates."""
    items: List[Tuple[str, str]] = []
    if not os.path.isdir(templates_dir):
        return items
    for fn in sorted(os.listdir(templates_dir)):
        if not fn.lower().endswith(".json"):
            continue
        data = _read_json(os.path.join(templates_dir, fn)) or {}
        display = data.get("name") or os.path.splitext(fn)[0]
        items.append((fn, display))
    return items


def load_template(
    file_name: str, templates_dir: str = TEMPLATES_DIR
) -> Tuple[List[BodyDescriptor], CentralBodyDescriptor, Optional[float], str]:
    """
    Load a template JSON by file name.
    Returns (bodies, central_body, time_scale, display_name); invalid bodies are skipped.
    """
    path = os.path.join(templates_dir, file_name)
    data = _read_json(path) or {}
    display_name = data.get("name") or os.path.splitext(file_name)[0]
    time_scale = try_float(data.get("time_scale"))
    if time_scale is not None and time_scale < 0:
        logger.warning("%s: ignoring negative time_scale %r", file_name, time_scale)
        time_scale = None
    central = parse_central_body(data.get("central_body"))
    bodies: List[BodyDescriptor] = []
    for i, raw in enumerate(data.get("bodies", [])):
        try:
            bodies.append(parse_body(raw))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("%s: skipping body #%d: %s", file_name, i, exc)
    return bodies, central, time_scale, display_name


def load_preset(
    name: Optional[str] = None, templates_dir: str = TEMPLATES_DIR
) -> Tuple[List[BodyDescriptor], CentralBodyDescriptor, Optional[float], str]:
    """
    Resolve a preset by display name or file name, falling back to the built-in
    solar system when it cannot be found or has no usable bodies.
    """
    if name:
        for fn, display in list_templates(templates_dir):
            if name in (fn, display, os.path.splitext(fn)[0]):
                bodies, central, time_scale, display_name = load_template(fn, templates_dir)
                if bodies:
                    return bodies, central, time_scale, display_name
                logger.warning("preset %r has no usable bodies; using built-in", name)
                break
        else:
            logger.warning("preset %r not found; using built-in", name)
    return template_solar_system(), CentralBodyDescriptor(), None, BUILTIN_PRESET_NAME
