from dataclasses import dataclass
from typing import List


@dataclass
class TopologyIssue:
    level: str
    message: str
    object_id: str


class TopologyError(Exception):
    """Base class for faults surfaced while building a topology."""


class DuplicateSystemIdError(TopologyError):
    def __init__(self, system_ids: List[str]):
        self.system_ids = system_ids
        super().__init__(
            "Duplicate system id(s): " + ", ".join(repr(i) for i in system_ids)
        )
