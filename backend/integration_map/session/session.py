import logging
from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple, Union

from integration_map.session.changes import (
    ConnectParams,
    apply_edge_changes,
    apply_node_changes,
)
from integration_map.topology.model import Connection, Topology
from integration_map.visual.projection import build_edge, project_topology
from integration_map.visual.visual_schema import (
    DiagramEdge,
    DiagramNode,
    DiagramProjection,
    PresentationOptions,
)

logger = logging.getLogger(__name__)

Listener = Callable[[List[DiagramNode], List[DiagramEdge]], None]


class InteractiveSession:
    """
    Live Node/Edge state for one mounted diagram view.

    The renderer reads `nodes`/`edges`, and reports drags and selections
    through `on_nodes_changed`/`on_edges_changed`. New user-drawn links
    arrive through `on_connect`, which is the only way the edge set grows;
    each one is kept in `connection_log`. Nothing is ever removed.

    Usage:
        session = InteractiveSession.from_topology(topology)
        session.subscribe(lambda nodes, edges: redraw(nodes, edges))
        session.on_connect({"source": "ehr", "target": "pacs"})
    """

    def __init__(
        self,
        nodes: Sequence[DiagramNode] = (),
        edges: Sequence[DiagramEdge] = (),
        options: Optional[PresentationOptions] = None,
    ):
        self.options = options or PresentationOptions()
        self._nodes: List[DiagramNode] = []
        self._edges: List[DiagramEdge] = []
        self._connection_log: List[Connection] = []
        self._listeners: List[Listener] = []
        self.seed(nodes, edges)

    @classmethod
    def from_topology(
        cls,
        topology: Topology,
        options: Optional[PresentationOptions] = None,
    ) -> "InteractiveSession":
        projection = project_topology(topology, options)
        return cls(projection.nodes, projection.edges, options)

    # ------------------------------------------------------------------ #
    # Read access
    # ------------------------------------------------------------------ #

    @property
    def nodes(self) -> List[DiagramNode]:
        return list(self._nodes)

    @property
    def edges(self) -> List[DiagramEdge]:
        return list(self._edges)

    @property
    def connection_log(self) -> Tuple[Connection, ...]:
        return tuple(self._connection_log)

    def snapshot(self) -> DiagramProjection:
        return DiagramProjection(nodes=self.nodes, edges=self.edges)

    # ------------------------------------------------------------------ #
    # Edits
    # ------------------------------------------------------------------ #

    def seed(self, nodes: Sequence[DiagramNode], edges: Sequence[DiagramEdge]) -> None:
        self._nodes = list(nodes)
        self._edges = list(edges)
        self._connection_log = []
        logger.debug("Session seeded with %d nodes, %d edges", len(self._nodes), len(self._edges))
        self._notify()

    def on_nodes_changed(self, changes: Sequence) -> None:
        self._nodes = apply_node_changes(changes, self._nodes)
        self._notify()

    def on_edges_changed(self, changes: Sequence) -> None:
        self._edges = apply_edge_changes(changes, self._edges)
        self._notify()

    def on_connect(self, params: Union[ConnectParams, dict]) -> Optional[DiagramEdge]:
        """
        Append an edge for a user-drawn connection.

        Returns the new edge, or None when an edge between the same
        source/target handles is already on the diagram.
        """
        if not isinstance(params, ConnectParams):
            params = ConnectParams.model_validate(params)

        if any(params.matches(edge) for edge in self._edges):
            logger.debug("Connection %s -> %s already drawn", params.source, params.target)
            return None

        edge_id = self._next_edge_id()
        connection = params.to_connection()
        edge = replace(
            build_edge(edge_id, connection, self.options),
            source_handle=params.source_handle,
            target_handle=params.target_handle,
        )
        self._edges.append(edge)
        self._connection_log.append(connection)
        logger.debug("Connected %s -> %s as %s", params.source, params.target, edge_id)

        self._notify()
        return edge

    def _next_edge_id(self) -> str:
        taken = {edge.id for edge in self._edges}
        counter = len(self._connection_log)
        while f"edge-{counter}" in taken:
            counter += 1
        return f"edge-{counter}"

    # ------------------------------------------------------------------ #
    # Change notification
    # ------------------------------------------------------------------ #

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.nodes, self.edges)
