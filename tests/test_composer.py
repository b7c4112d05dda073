import math

import pytest

from orrery.composer import compose, compose_central_body
from orrery.constants import RING_INNER_RADIUS, RING_OUTER_RADIUS
from orrery.data_models import (
    NODE_BODY,
    NODE_GUIDE_PATH,
    NODE_RING,
    NODE_STAR,
    BodyDescriptor,
    BodyState,
    CentralBodyDescriptor,
)
from orrery.orbits import OrbitPathBuilder
from orrery.selection import SelectionBridge


def _compose(descriptor, phase=0.0, body_id=0, bridge=None):
    bridge = bridge or SelectionBridge()
    return compose(body_id, descriptor, BodyState(phase, phase), OrbitPathBuilder(), bridge.select)


def test_plain_body_has_guide_path_and_body(earth):
    composed = _compose(earth, phase=math.pi, body_id=3)
    nodes = list(composed.nodes())
    assert [n.kind for n in nodes] == [NODE_GUIDE_PATH, NODE_BODY]
    assert composed.ring is None
    assert all(n.body_id == 3 for n in nodes)

    body = composed.body
    assert body.position[0] == pytest.approx(-10.0)
    assert body.position[1] == 0.0
    assert body.position[2] == pytest.approx(0.0, abs=1e-12)
    assert body.texture_ref == "/textures/2k_earth.jpg"
    assert body.geometry["radius"] == earth.mesh_radius
    assert len(composed.guide_path.geometry["points"]) == 65


def test_ringed_body_gets_fixed_ring(saturn):
    composed = _compose(saturn, phase=0.3)
    kinds = [n.kind for n in composed.nodes()]
    assert kinds == [NODE_GUIDE_PATH, NODE_BODY, NODE_RING]
    assert composed.ring.position == composed.body.position
    assert composed.ring.geometry["inner_radius"] == RING_INNER_RADIUS
    assert composed.ring.geometry["outer_radius"] == RING_OUTER_RADIUS


def test_ring_radii_ignore_visual_size():
    small = BodyDescriptor(5, 0.1, 1.0, "/textures/2k_a.jpg", has_ring=True)
    huge = BodyDescriptor(5, 50.0, 1.0, "/textures/2k_b.jpg", has_ring=True)
    assert _compose(small).ring.geometry == _compose(huge).ring.geometry


def test_guide_path_shared_between_equal_radii():
    builder = OrbitPathBuilder()
    bridge = SelectionBridge()
    a = BodyDescriptor(7, 1.0, 1.0, "/textures/2k_a.jpg")
    b = BodyDescriptor(7, 2.0, 0.5, "/textures/2k_b.jpg")
    pa = compose(0, a, BodyState(0.0, 0.0), builder, bridge.select).guide_path
    pb = compose(1, b, BodyState(1.0, 1.0), builder, bridge.select).guide_path
    assert pa.geometry["points"] is pb.geometry["points"]
    assert builder.cache_size == 1


def test_pick_handler_selects_descriptor():
    bridge = SelectionBridge()
    jupiter = BodyDescriptor(17, 11.2, 0.4, "/textures/2k_jupiter.jpg")
    composed = _compose(jupiter, bridge=bridge)
    assert bridge.get_current() is None

    summary = composed.on_pick()
    assert summary is bridge.get_current()
    assert summary.display_name == "jupiter"
    assert summary.orbital_period == pytest.approx(2.5)
    assert summary.distance_from_center == 17
    assert summary.visual_size == 11.2


def test_compose_has_no_selection_side_effect(earth):
    bridge = SelectionBridge()
    _compose(earth, bridge=bridge)
    assert bridge.get_current() is None


def test_central_body_static_at_origin():
    node = compose_central_body(CentralBodyDescriptor())
    assert node.kind == NODE_STAR
    assert node.position == (0.0, 0.0, 0.0)
    assert node.geometry["radius"] == 3.0
    assert node.geometry["light_intensity"] == 2.0
    assert node.texture_ref == "/textures/2k_sun.jpg"
    assert node.body_id is None
