import pytest

from orrery.camera import TopDownCamera
from orrery.constants import MAX_UNITS_PER_PIXEL, MIN_UNITS_PER_PIXEL
from orrery.orbits import OrbitPathBuilder


def test_star_is_viewport_center():
    cam = TopDownCamera()
    cam.set_viewport_size(800, 600)
    assert cam.project((0.0, 0.0, 0.0)) == (400, 300)


def test_project_ignores_height_above_plane():
    cam = TopDownCamera(units_per_pixel=0.5)
    cam.set_viewport_size(800, 600)
    assert cam.project((10.0, 7.0, -5.0)) == cam.project((10.0, 0.0, -5.0)) == (420, 290)


def test_unproject_lands_on_orbital_plane():
    cam = TopDownCamera(focus=(2.0, 9.0, -3.0), units_per_pixel=0.5)
    cam.set_viewport_size(1000, 500)
    x, y, z = cam.unproject((700, 100))
    assert y == 0.0
    assert (x, z) == (102.0, -78.0)
    assert cam.project((x, y, z)) == (700, 100)


def test_guide_path_projects_to_circle_around_center():
    cam = TopDownCamera(units_per_pixel=0.1)
    cam.set_viewport_size(1000, 1000)
    for p in OrbitPathBuilder(segments=8).build_path(10.0):
        px, py = cam.project(p)
        assert ((px - 500) ** 2 + (py - 500) ** 2) ** 0.5 == pytest.approx(100, abs=1.5)


def test_zoom_keeps_pivot_fixed():
    cam = TopDownCamera(units_per_pixel=0.05)
    cam.set_viewport_size(1000, 800)
    pivot = (900, 100)
    before = cam.unproject(pivot)
    cam.zoom(1.1, pivot)
    after = cam.unproject(pivot)
    assert after[0] == pytest.approx(before[0])
    assert after[2] == pytest.approx(before[2])
    assert cam.upp == pytest.approx(0.05 / 1.1)


def test_zoom_is_bounded():
    cam = TopDownCamera()
    for _ in range(200):
        cam.zoom(20.0)
    assert cam.upp == MIN_UNITS_PER_PIXEL
    for _ in range(200):
        cam.zoom(0.05)
    assert cam.upp == MAX_UNITS_PER_PIXEL


def test_fit_radius_shows_whole_orbit():
    cam = TopDownCamera(focus=(50.0, 0.0, 50.0))
    cam.set_viewport_size(1100, 800)
    cam.fit_radius(29.0)
    assert cam.focus == (0.0, 0.0)
    _, y = cam.project((0.0, 0.0, 29.0))
    assert 0 <= y <= 800
    x, _ = cam.project((-29.0, 0.0, 0.0))
    assert 0 <= x <= 1100


def test_drag_moves_focus_against_cursor():
    cam = TopDownCamera(units_per_pixel=0.5)
    cam.drag(10, -4)
    assert cam.focus == (-5.0, 2.0)
