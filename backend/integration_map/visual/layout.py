import math
from typing import List, Sequence

from integration_map.topology.model import System
from integration_map.visual.visual_schema import NodeLayout, Position

RADIUS_PER_SYSTEM = 50
MAX_RADIUS = 300
MIN_NODE_WIDTH = 150
WIDTH_PER_CHAR = 8


def layout_radius(count: int) -> int:
    return min(count * RADIUS_PER_SYSTEM, MAX_RADIUS)


def node_width(name: str) -> int:
    return max(MIN_NODE_WIDTH, len(name) * WIDTH_PER_CHAR)


def circular_layout(systems: Sequence[System]) -> List[NodeLayout]:
    """
    Place systems on a circle in input order, translated so that every
    coordinate is non-negative (the circle is centred on (r, r)).
    """
    count = len(systems)
    radius = layout_radius(count)

    layouts: List[NodeLayout] = []
    for index, system in enumerate(systems):
        angle = (index / count) * 2 * math.pi
        layouts.append(
            NodeLayout(
                id=system.id,
                position=Position(
                    x=radius * math.cos(angle) + radius,
                    y=radius * math.sin(angle) + radius,
                ),
                visual_width=node_width(system.name),
            )
        )

    return layouts
