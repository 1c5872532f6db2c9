from enum import Enum
from typing import Optional

from integration_map.topology.model import Connection
from integration_map.visual.visual_schema import EdgeStyle


class ConnectionQuality(Enum):
    AUTOMATED = "automated"
    SEMI_AUTOMATED = "semi-automated"
    MANUAL = "manual"

    @classmethod
    def parse(cls, value) -> Optional["ConnectionQuality"]:
        """Return the matching quality, or None for anything outside the enum."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


QUALITY_STYLE = {
    ConnectionQuality.AUTOMATED: {
        "color": "#4ade80",
        "protocol_label": "HL7 FHIR",
        "animated": True,
    },
    ConnectionQuality.SEMI_AUTOMATED: {
        "color": "#fb923c",
        "protocol_label": "HL7 v2",
        "animated": False,
    },
    ConnectionQuality.MANUAL: {
        "color": "#ef4444",
        "protocol_label": "Manual Entry",
        "animated": False,
    },
}

DEFAULT_STYLE = {
    "color": "#888888",
    "protocol_label": "Unknown",
    "animated": False,
}

# Legend text used by exports
QUALITY_LEGEND = {
    ConnectionQuality.AUTOMATED: {
        "label": "Automatic Data Flow",
        "description": "No manual intervention needed",
    },
    ConnectionQuality.SEMI_AUTOMATED: {
        "label": "Partial Manual Process",
        "description": "Some staff input required",
    },
    ConnectionQuality.MANUAL: {
        "label": "Fully Manual Process",
        "description": "Staff must re-enter information",
    },
}

DEFAULT_STROKE_WIDTH = 2
MIN_STROKE_WIDTH = 1
MAX_STROKE_WIDTH = 5
VOLUME_PER_STROKE_UNIT = 20


def stroke_width_for(volume: Optional[float]) -> float:
    if not volume:  # absent or zero
        return DEFAULT_STROKE_WIDTH
    return max(MIN_STROKE_WIDTH, min(volume / VOLUME_PER_STROKE_UNIT, MAX_STROKE_WIDTH))


def resolve_edge_style(connection: Connection) -> EdgeStyle:
    quality = ConnectionQuality.parse(connection.quality)
    style = QUALITY_STYLE.get(quality, DEFAULT_STYLE)

    return EdgeStyle(
        color=style["color"],
        protocol_label=style["protocol_label"],
        animated=style["animated"],
        stroke_width=stroke_width_for(connection.volume),
    )
