import math

import pytest

from integration_map.topology import System
from integration_map.visual.layout import circular_layout, layout_radius, node_width


def make_systems(count: int):
    return [System(id=f"sys{i}", name=f"System {i}") for i in range(count)]


def test_layout_is_deterministic():
    systems = make_systems(5)
    assert circular_layout(systems) == circular_layout(systems)


def test_radius_grows_linearly_then_caps():
    assert layout_radius(2) == 100
    assert layout_radius(6) == 300
    assert layout_radius(10) == 300


def test_large_layout_stays_within_capped_circle():
    layouts = circular_layout(make_systems(10))

    for layout in layouts:
        dx = layout.position.x - 300
        dy = layout.position.y - 300
        assert math.hypot(dx, dy) == pytest.approx(300)
        assert layout.position.x >= -1e-9
        assert layout.position.y >= -1e-9


def test_width_floor_and_growth():
    assert node_width("A") == 150
    assert node_width("x" * 20) == 160
    assert node_width("") == 150


def test_empty_input_gives_empty_layout():
    assert circular_layout([]) == []


def test_single_system_sits_at_angle_zero():
    (layout,) = circular_layout([System(id="only", name="Only")])

    assert layout.position.x == pytest.approx(100)
    assert layout.position.y == pytest.approx(50)


def test_two_systems_sit_opposite_each_other():
    ehr, lab = circular_layout([System(id="ehr", name="EHR"), System(id="lab", name="Lab")])

    assert (ehr.position.x, ehr.position.y) == pytest.approx((200, 100))
    assert (lab.position.x, lab.position.y) == pytest.approx((0, 100))


def test_layout_depends_on_input_order():
    systems = make_systems(3)
    forward = {l.id: l.position for l in circular_layout(systems)}
    backward = {l.id: l.position for l in circular_layout(list(reversed(systems)))}

    assert forward["sys0"] != backward["sys0"]
