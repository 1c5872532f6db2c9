import logging
from typing import Optional

from integration_map.topology.model import Connection, Topology
from integration_map.visual.layout import circular_layout
from integration_map.visual.visual_schema import (
    DiagramEdge,
    DiagramNode,
    DiagramProjection,
    EdgeMetadata,
    PresentationOptions,
)
from integration_map.visual.visual_style import resolve_edge_style

logger = logging.getLogger(__name__)


def build_edge(
    edge_id: str,
    connection: Connection,
    options: Optional[PresentationOptions] = None,
) -> DiagramEdge:
    """Resolve one connection into a renderer-facing edge."""
    options = options or PresentationOptions()
    style = resolve_edge_style(connection)

    return DiagramEdge(
        id=edge_id,
        source=connection.source,
        target=connection.target,
        color=style.color,
        animated=style.animated,
        stroke_width=style.stroke_width,
        protocol_label=style.protocol_label,
        metadata=EdgeMetadata(
            direction=connection.direction,
            quality=connection.quality,
            volume=connection.volume,
        ),
        label=style.protocol_label if options.show_export_labels else None,
    )


def project_topology(
    topology: Topology,
    options: Optional[PresentationOptions] = None,
) -> DiagramProjection:
    """
    Transform a topology into the initial Node/Edge pair.

    Layout runs once over the whole system list; edge ids are the
    connection's position in the input ("e0", "e1", ...), so projecting
    the same topology twice yields identical output.
    """
    options = options or PresentationOptions()
    names = {system.id: system.name for system in topology.systems}

    nodes = [
        DiagramNode(
            id=layout.id,
            label=names[layout.id],
            position=layout.position,
            visual_width=layout.visual_width,
        )
        for layout in circular_layout(topology.systems)
    ]

    edges = []
    for index, connection in enumerate(topology.connections):
        if connection.source not in names or connection.target not in names:
            # Still projected; the renderer skips edges it cannot anchor
            logger.debug(
                "Edge e%d references unknown system (%s -> %s)",
                index, connection.source, connection.target,
            )
        edges.append(build_edge(f"e{index}", connection, options))

    return DiagramProjection(nodes=nodes, edges=edges)
