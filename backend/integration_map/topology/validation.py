"""
Topology Checks - Non-fatal diagnostics over an integration topology.

Catches issues like:
- Connections whose source/target is not a known system
- Self-referencing connections
- Repeated connections between the same pair
- Systems with no connections at all
- Empty display names

None of these stop a diagram from being projected; the renderer simply
skips edges it cannot anchor. Strict mode escalates dangling references
to errors for callers that want to refuse such topologies.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from .model import Topology

logger = logging.getLogger(__name__)


class IssueSeverity(Enum):
    ERROR = "error"      # topology should be refused
    WARNING = "warning"  # diagram renders but something will be missing
    INFO = "info"        # worth knowing, nothing is lost


@dataclass
class CheckIssue:
    """A single issue found in the topology"""
    severity: IssueSeverity
    code: str           # Machine-readable issue code
    message: str        # Human-readable description
    system_id: Optional[str] = None
    connection_index: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "system_id": self.system_id,
            "connection_index": self.connection_index,
        }


@dataclass
class TopologyCheckResult:
    is_valid: bool
    issues: List[CheckIssue] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    def _count(self, severity: IssueSeverity) -> int:
        return sum(1 for i in self.issues if i.severity == severity)

    @property
    def error_count(self) -> int:
        return self._count(IssueSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return self._count(IssueSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return self._count(IssueSeverity.INFO)

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "info_count": self.info_count,
            "issues": [i.to_dict() for i in self.issues],
            "stats": self.stats,
        }

    def get_summary(self) -> str:
        status = "Valid" if self.is_valid else "Invalid"
        return (
            f"{status} | Errors: {self.error_count}, "
            f"Warnings: {self.warning_count}, Info: {self.info_count}"
        )


class TopologyChecker:
    """
    Usage:
        checker = TopologyChecker()
        result = checker.check(topology)

        for issue in result.issues:
            print(f"[{issue.severity.value}] {issue.message}")
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def check(self, topology: Topology) -> TopologyCheckResult:
        issues: List[CheckIssue] = []
        system_ids = topology.system_ids()

        if not topology.systems:
            issues.append(CheckIssue(
                severity=IssueSeverity.INFO,
                code="NO_SYSTEMS",
                message="Topology has no systems; the diagram will be empty",
            ))

        issues.extend(self._check_empty_names(topology))
        issues.extend(self._check_dangling_references(topology, system_ids))
        issues.extend(self._check_self_loops(topology))
        issues.extend(self._check_duplicate_connections(topology))
        issues.extend(self._check_isolated_systems(topology))

        result = TopologyCheckResult(
            is_valid=not any(i.severity == IssueSeverity.ERROR for i in issues),
            issues=issues,
            stats=self._calculate_stats(topology, system_ids),
        )
        logger.debug("Topology check: %s", result.get_summary())
        return result

    def _check_empty_names(self, topology: Topology) -> List[CheckIssue]:
        issues = []
        for system in topology.systems:
            if not system.name.strip():
                issues.append(CheckIssue(
                    severity=IssueSeverity.WARNING,
                    code="EMPTY_NAME",
                    message=f"System '{system.id}' has an empty name",
                    system_id=system.id,
                ))
        return issues

    def _check_dangling_references(
        self, topology: Topology, system_ids: Set[str]
    ) -> List[CheckIssue]:
        severity = IssueSeverity.ERROR if self.strict else IssueSeverity.WARNING
        issues = []
        for index, conn in enumerate(topology.connections):
            for end, code in ((conn.source, "DANGLING_SOURCE"), (conn.target, "DANGLING_TARGET")):
                if end not in system_ids:
                    issues.append(CheckIssue(
                        severity=severity,
                        code=code,
                        message=f"Connection {index} references unknown system '{end}'",
                        system_id=end,
                        connection_index=index,
                    ))
        return issues

    def _check_self_loops(self, topology: Topology) -> List[CheckIssue]:
        issues = []
        for index, conn in enumerate(topology.connections):
            if conn.source == conn.target:
                issues.append(CheckIssue(
                    severity=IssueSeverity.WARNING,
                    code="SELF_LOOP",
                    message=f"Connection {index} links '{conn.source}' to itself",
                    system_id=conn.source,
                    connection_index=index,
                ))
        return issues

    def _check_duplicate_connections(self, topology: Topology) -> List[CheckIssue]:
        issues = []
        counts: Dict[Tuple[str, str], int] = Counter(
            (conn.source, conn.target) for conn in topology.connections
        )
        for (source, target), count in counts.items():
            if count > 1:
                issues.append(CheckIssue(
                    severity=IssueSeverity.INFO,
                    code="DUPLICATE_CONNECTION",
                    message=f"Connection '{source}' -> '{target}' appears {count} times",
                    system_id=source,
                ))
        return issues

    def _check_isolated_systems(self, topology: Topology) -> List[CheckIssue]:
        degree: Dict[str, int] = defaultdict(int)
        for conn in topology.connections:
            degree[conn.source] += 1
            degree[conn.target] += 1

        return [
            CheckIssue(
                severity=IssueSeverity.INFO,
                code="ISOLATED_SYSTEM",
                message=f"System '{system.name}' ({system.id}) has no connections",
                system_id=system.id,
            )
            for system in topology.systems
            if degree[system.id] == 0
        ]

    def _calculate_stats(self, topology: Topology, system_ids: Set[str]) -> Dict[str, int]:
        dangling = sum(
            1 for conn in topology.connections
            if conn.source not in system_ids or conn.target not in system_ids
        )
        return {
            "systems": len(topology.systems),
            "connections": len(topology.connections),
            "dangling_connections": dangling,
        }


def check_topology(topology: Topology, strict: bool = False) -> TopologyCheckResult:
    """Convenience function to check a topology."""
    return TopologyChecker(strict=strict).check(topology)
