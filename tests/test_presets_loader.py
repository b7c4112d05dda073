import json

import pytest

from orrery.data_models import BodyDescriptor, CentralBodyDescriptor
from orrery.presets_loader import (
    BUILTIN_PRESET_NAME,
    TEMPLATES_DIR,
    list_templates,
    load_preset,
    load_template,
    parse_body,
    template_solar_system,
)


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_builtin_solar_system():
    bodies = template_solar_system()
    assert len(bodies) == 7
    assert [b.distance_from_center for b in bodies] == [5, 7, 10, 13, 17, 21, 29]
    assert [b.has_ring for b in bodies].count(True) == 1
    assert bodies[5].surface_texture_id == "/textures/2k_saturn.jpg"
    assert all(b.mesh_radius == 1.0 for b in bodies)


def test_shipped_solar_system_template_matches_builtin():
    bodies, central, time_scale, name = load_template("solar_system.json", TEMPLATES_DIR)
    assert name == "Solar System"
    assert time_scale == 1.0
    assert central == CentralBodyDescriptor()
    assert bodies == template_solar_system()


def test_parse_body_defaults():
    b = parse_body({"distance": "8", "size": 2, "speed": 0.5, "texture": "/textures/2k_x.jpg"})
    assert b == BodyDescriptor(8.0, 2.0, 0.5, "/textures/2k_x.jpg")


@pytest.mark.parametrize(
    "raw",
    [
        {"size": 1, "speed": 1, "texture": "t"},
        {"distance": "far", "size": 1, "speed": 1, "texture": "t"},
        {"distance": 1, "size": 1, "speed": 0, "texture": "t"},
        {"distance": 1, "size": 1, "speed": 1, "texture": ""},
        {"distance": "nan", "size": 1, "speed": "inf", "texture": "t"},
        {"distance": 1, "size": float("inf"), "speed": 1, "texture": "t"},
        {"distance": 1, "size": 1, "speed": 1, "texture": "t", "mesh_radius": "nan"},
    ],
)
def test_parse_body_rejects_invalid(raw):
    with pytest.raises((KeyError, ValueError)):
        parse_body(raw)


def test_load_template_skips_invalid_bodies(tmp_path, caplog):
    _write(tmp_path, "mixed.json", {
        "name": "Mixed",
        "time_scale": 2,
        "central_body": {"mesh_radius": 5, "color": "#ff0000"},
        "bodies": [
            {"distance": 4, "size": 1, "speed": 1, "texture": "/textures/2k_a.jpg", "rings": True, "color": "#0a0b0c"},
            {"distance": -4, "size": 1, "speed": 1, "texture": "/textures/2k_b.jpg"},
            {"distance": 6, "size": 1, "speed": 0.5, "texture": "/textures/2k_c.jpg", "color": [300, -5, 20]},
        ],
    })
    bodies, central, time_scale, name = load_template("mixed.json", str(tmp_path))
    assert name == "Mixed"
    assert time_scale == 2.0
    assert central.mesh_radius == 5.0
    assert central.color == (255, 0, 0)
    assert len(bodies) == 2
    assert bodies[0].has_ring and bodies[0].color == (10, 11, 12)
    assert bodies[1].color == (255, 0, 20)
    assert "skipping body #1" in caplog.text


def test_unreadable_template_is_empty(tmp_path):
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    bodies, central, time_scale, name = load_template("broken.json", str(tmp_path))
    assert bodies == []
    assert time_scale is None
    assert name == "broken"


def test_list_templates(tmp_path):
    _write(tmp_path, "b.json", {"name": "Beta", "bodies": []})
    _write(tmp_path, "a.json", {"bodies": []})
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    assert list_templates(str(tmp_path)) == [("a.json", "a"), ("b.json", "Beta")]
    assert list_templates(str(tmp_path / "missing")) == []


def test_load_preset_by_display_or_file_name(tmp_path):
    _write(tmp_path, "pair.json", {"name": "Pair", "bodies": [
        {"distance": 3, "size": 1, "speed": 1, "texture": "/textures/2k_a.jpg"},
        {"distance": 6, "size": 1, "speed": 1, "texture": "/textures/2k_b.jpg"},
    ]})
    for key in ("Pair", "pair.json", "pair"):
        bodies, _, _, name = load_preset(key, str(tmp_path))
        assert name == "Pair"
        assert len(bodies) == 2


def test_load_preset_falls_back_to_builtin(tmp_path):
    _write(tmp_path, "empty.json", {"name": "Empty", "bodies": []})
    for key in ("Empty", "Nowhere", None):
        bodies, central, time_scale, name = load_preset(key, str(tmp_path))
        assert name == BUILTIN_PRESET_NAME
        assert bodies == template_solar_system()
        assert time_scale is None


def test_load_template_ignores_bad_time_scale(tmp_path):
    body = {"distance": 4, "size": 1, "speed": 1, "texture": "/textures/2k_a.jpg"}
    _write(tmp_path, "negative.json", {"time_scale": -2, "bodies": [body]})
    _write(tmp_path, "nan.json", {"time_scale": "nan", "bodies": [body]})
    assert load_template("negative.json", str(tmp_path))[2] is None
    assert load_template("nan.json", str(tmp_path))[2] is None
