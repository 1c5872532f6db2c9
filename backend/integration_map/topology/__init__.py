# Topology module
# Caller-supplied systems and connections, checked at construction

from integration_map.topology.errors import (
    DuplicateSystemIdError,
    TopologyError,
    TopologyIssue,
)
from integration_map.topology.model import (
    Connection,
    System,
    Topology,
    TopologyResult,
    build_topology,
)
from integration_map.topology.validation import (
    CheckIssue,
    IssueSeverity,
    TopologyCheckResult,
    check_topology,
)

__all__ = [
    "System",
    "Connection",
    "Topology",
    "TopologyResult",
    "build_topology",
    "TopologyError",
    "DuplicateSystemIdError",
    "TopologyIssue",
    "CheckIssue",
    "IssueSeverity",
    "TopologyCheckResult",
    "check_topology",
]
