"""
Change patches emitted by the rendering substrate.

The renderer reports drags, selections and measured sizes as small
patches keyed by node/edge id. They are merged into the session's
records; ids that are not present are ignored. Removal patches are
accepted structurally but never applied, since deleting systems or
connections is not a supported interaction.
"""

import logging
from dataclasses import replace
from typing import Annotated, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from integration_map.topology.model import Connection
from integration_map.visual.visual_schema import DiagramEdge, DiagramNode, Position

logger = logging.getLogger(__name__)


class XY(BaseModel):
    x: float
    y: float


class Dimensions(BaseModel):
    width: float
    height: float


class NodePositionChange(BaseModel):
    type: Literal["position"] = "position"
    id: str
    position: Optional[XY] = None
    dragging: Optional[bool] = None


class NodeDimensionsChange(BaseModel):
    type: Literal["dimensions"] = "dimensions"
    id: str
    dimensions: Optional[Dimensions] = None


class SelectChange(BaseModel):
    type: Literal["select"] = "select"
    id: str
    selected: bool


class RemoveChange(BaseModel):
    type: Literal["remove"] = "remove"
    id: str


NodeChange = Annotated[
    Union[NodePositionChange, NodeDimensionsChange, SelectChange, RemoveChange],
    Field(discriminator="type"),
]
EdgeChange = Annotated[
    Union[SelectChange, RemoveChange],
    Field(discriminator="type"),
]

_node_changes = TypeAdapter(List[NodeChange])
_edge_changes = TypeAdapter(List[EdgeChange])


class ConnectParams(BaseModel):
    """A connect gesture: the user dragged a line between two nodes."""
    model_config = ConfigDict(populate_by_name=True)

    source: str
    target: str
    source_handle: Optional[str] = Field(default=None, alias="sourceHandle")
    target_handle: Optional[str] = Field(default=None, alias="targetHandle")

    def matches(self, edge: DiagramEdge) -> bool:
        """True when the edge already links the same node handles."""
        return (
            edge.source == self.source
            and edge.target == self.target
            and edge.source_handle == self.source_handle
            and edge.target_handle == self.target_handle
        )

    def to_connection(self) -> Connection:
        # Freehand connections carry no quality and get the default style
        return Connection(source=self.source, target=self.target)


def parse_node_changes(changes: Sequence) -> list:
    return _node_changes.validate_python(list(changes))


def parse_edge_changes(changes: Sequence) -> list:
    return _edge_changes.validate_python(list(changes))


def _apply_node_change(node: DiagramNode, change) -> DiagramNode:
    if isinstance(change, NodePositionChange):
        updates = {}
        if change.position is not None:
            updates["position"] = Position(x=change.position.x, y=change.position.y)
        if change.dragging is not None:
            updates["dragging"] = change.dragging
        return replace(node, **updates)

    if isinstance(change, NodeDimensionsChange):
        if change.dimensions is None:
            return node
        return replace(
            node,
            width=change.dimensions.width,
            height=change.dimensions.height,
        )

    if isinstance(change, SelectChange):
        return replace(node, selected=change.selected)

    return node


def apply_node_changes(changes: Sequence, nodes: Sequence[DiagramNode]) -> List[DiagramNode]:
    """Return a new node list with every applicable patch merged in order."""
    result = list(nodes)
    index = {node.id: i for i, node in enumerate(result)}

    for change in parse_node_changes(changes):
        if isinstance(change, RemoveChange):
            logger.warning("Ignoring removal of node '%s': removal is not supported", change.id)
            continue
        position = index.get(change.id)
        if position is None:
            continue
        result[position] = _apply_node_change(result[position], change)

    return result


def apply_edge_changes(changes: Sequence, edges: Sequence[DiagramEdge]) -> List[DiagramEdge]:
    result = list(edges)
    index = {edge.id: i for i, edge in enumerate(result)}

    for change in parse_edge_changes(changes):
        if isinstance(change, RemoveChange):
            logger.warning("Ignoring removal of edge '%s': removal is not supported", change.id)
            continue
        position = index.get(change.id)
        if position is None:
            continue
        result[position] = replace(result[position], selected=change.selected)

    return result
