from typing import List, Optional
from dataclasses import dataclass, field

from integration_map import config


NODE_COLOR = "#4f46e5"


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class NodeLayout:
    id: str
    position: Position
    visual_width: int


@dataclass(frozen=True)
class EdgeStyle:
    color: str
    protocol_label: str
    animated: bool
    stroke_width: float


@dataclass(frozen=True)
class EdgeMetadata:
    direction: str                          # one-way, bidirectional
    quality: Optional[str] = None
    volume: Optional[float] = None


@dataclass
class DiagramNode:
    id: str
    label: str
    position: Position
    visual_width: int
    color: str = NODE_COLOR                 # minimap keys on this
    selected: bool = False
    dragging: bool = False
    width: Optional[float] = None           # measured by the renderer
    height: Optional[float] = None


@dataclass
class DiagramEdge:
    id: str
    source: str
    target: str
    color: str
    animated: bool
    stroke_width: float
    protocol_label: str
    metadata: EdgeMetadata
    label: Optional[str] = None             # shown on the diagram when set
    type: str = "smoothstep"
    marker: str = "arrowclosed"             # single-headed, colored like the edge
    selected: bool = False
    source_handle: Optional[str] = None     # set only on user-drawn edges
    target_handle: Optional[str] = None


@dataclass
class DiagramProjection:
    nodes: List[DiagramNode] = field(default_factory=list)
    edges: List[DiagramEdge] = field(default_factory=list)


@dataclass(frozen=True)
class PresentationOptions:
    title: str = config.DEFAULT_TITLE
    subtitle: Optional[str] = None
    show_export_labels: bool = config.SHOW_EXPORT_LABELS
