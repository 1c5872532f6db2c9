# Visual module
# Layout, connection styling and the renderer-facing projection

from integration_map.visual.visual_schema import (
    DiagramEdge,
    DiagramNode,
    DiagramProjection,
    EdgeMetadata,
    EdgeStyle,
    NodeLayout,
    Position,
    PresentationOptions,
)
from integration_map.visual.visual_style import (
    ConnectionQuality,
    QUALITY_STYLE,
    QUALITY_LEGEND,
    resolve_edge_style,
)
from integration_map.visual.layout import circular_layout
from integration_map.visual.projection import build_edge, project_topology

__all__ = [
    "DiagramEdge",
    "DiagramNode",
    "DiagramProjection",
    "EdgeMetadata",
    "EdgeStyle",
    "NodeLayout",
    "Position",
    "PresentationOptions",
    "ConnectionQuality",
    "QUALITY_STYLE",
    "QUALITY_LEGEND",
    "resolve_edge_style",
    "circular_layout",
    "build_edge",
    "project_topology",
]
