import pytest

from orrery.data_models import BodyDescriptor
from orrery.selection import (
    SelectionBridge,
    display_name_from_texture,
    format_summary,
    summarize,
)


@pytest.mark.parametrize(
    "texture_id,expected",
    [
        ("/textures/2k_saturn.jpg", "saturn"),
        ("textures/8k_earth.png", "earth"),
        ("4K_mars.tif", "mars"),
        ("/textures/moon.jpg", "moon"),
        ("C:\\assets\\2k_venus.jpg", "venus"),
        ("custom_asset", "custom_asset"),
    ],
)
def test_display_name_from_texture(texture_id, expected):
    assert display_name_from_texture(texture_id) == expected


@pytest.mark.parametrize("texture_id", ["/textures/", "2k_", ".jpg", "/textures/2k_.jpg"])
def test_display_name_falls_back_to_raw_identity(texture_id):
    assert display_name_from_texture(texture_id) == texture_id


def test_summarize_is_a_snapshot():
    d = BodyDescriptor(21, 9.4, 0.3, "/textures/2k_saturn.jpg", has_ring=True)
    s = summarize(d)
    assert s.display_name == "saturn"
    assert s.distance_from_center == 21
    assert s.visual_size == 9.4
    assert s.orbital_period == pytest.approx(1 / 0.3)


def test_last_selection_wins():
    a = BodyDescriptor(5, 0.38, 2.0, "/textures/2k_mercury.jpg")
    b = BodyDescriptor(7, 0.95, 1.6, "/textures/2k_venus.jpg")
    bridge = SelectionBridge()
    assert bridge.get_current() is None
    bridge.select(a)
    bridge.select(b)
    assert bridge.get_current() == summarize(b)
    bridge.clear()
    assert bridge.get_current() is None


def test_format_summary_lines():
    d = BodyDescriptor(17, 11.2, 0.4, "/textures/2k_jupiter.jpg")
    assert format_summary(summarize(d)) == [
        "Jupiter",
        "Distance from Sun: 17 AU",
        "Size: 11.2 Earth radii",
        "Orbital Period: 2.50 Earth years",
    ]
