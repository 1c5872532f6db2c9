"""
Interactive session module.
"""

from integration_map.session.changes import (
    ConnectParams,
    NodePositionChange,
    NodeDimensionsChange,
    SelectChange,
    RemoveChange,
    apply_node_changes,
    apply_edge_changes,
)
from integration_map.session.session import InteractiveSession
from integration_map.session.registry import (
    SessionNotFoundError,
    SessionRegistry,
    get_session_registry,
)

__all__ = [
    "ConnectParams",
    "NodePositionChange",
    "NodeDimensionsChange",
    "SelectChange",
    "RemoveChange",
    "apply_node_changes",
    "apply_edge_changes",
    "InteractiveSession",
    "SessionNotFoundError",
    "SessionRegistry",
    "get_session_registry",
]
