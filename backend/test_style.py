import pytest

from integration_map.topology import Connection
from integration_map.visual.visual_style import (
    ConnectionQuality,
    resolve_edge_style,
    stroke_width_for,
)


def conn(quality=None, volume=None, direction="one-way") -> Connection:
    return Connection(source="a", target="b", quality=quality, volume=volume, direction=direction)


@pytest.mark.parametrize(
    "quality, color, label, animated",
    [
        ("automated", "#4ade80", "HL7 FHIR", True),
        ("semi-automated", "#fb923c", "HL7 v2", False),
        ("manual", "#ef4444", "Manual Entry", False),
        ("smoke-signals", "#888888", "Unknown", False),
        (3, "#888888", "Unknown", False),
        (ConnectionQuality.MANUAL, "#ef4444", "Manual Entry", False),
        (None, "#888888", "Unknown", False),
    ],
)
def test_quality_table(quality, color, label, animated):
    style = resolve_edge_style(conn(quality))

    assert style.color == color
    assert style.protocol_label == label
    assert style.animated is animated


@pytest.mark.parametrize(
    "volume, expected",
    [(10, 1), (200, 5), (60, 3), (None, 2), (0, 2), (100, 5)],
)
def test_stroke_width_is_clamped(volume, expected):
    assert stroke_width_for(volume) == expected
    assert resolve_edge_style(conn("manual", volume)).stroke_width == expected


def test_direction_does_not_change_style():
    one_way = resolve_edge_style(conn("automated", 40, "one-way"))
    both = resolve_edge_style(conn("automated", 40, "bidirectional"))
    assert one_way == both


def test_parse_rejects_values_outside_the_enum():
    assert ConnectionQuality.parse("manual") is ConnectionQuality.MANUAL
    assert ConnectionQuality.parse(ConnectionQuality.AUTOMATED) is ConnectionQuality.AUTOMATED
    assert ConnectionQuality.parse("Automated") is None
    assert ConnectionQuality.parse(None) is None
