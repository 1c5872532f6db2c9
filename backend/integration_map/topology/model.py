from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .errors import DuplicateSystemIdError, TopologyIssue


# ---- Core Concepts ----

class System(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class Connection(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str   # system id, not checked against the system list
    target: str
    direction: Literal["one-way", "bidirectional"] = "one-way"
    # Free-form on purpose: unknown qualities fall back to the default style
    quality: Optional[str] = None
    volume: Optional[float] = Field(default=None, ge=0)  # messages per period

    @field_validator("quality", mode="before")
    @classmethod
    def _quality_as_text(cls, value: Any) -> Any:
        # Enum members keep their value; other non-text input (e.g. 3) becomes
        # text that matches no known quality
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, Enum):
            return str(value.value)
        return str(value)


# ---- Root Model ----

class Topology(BaseModel):
    model_config = ConfigDict(frozen=True)

    systems: List[System] = Field(default_factory=list)
    connections: List[Connection] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_system_ids(self):
        counts = Counter(system.id for system in self.systems)
        duplicates = [system_id for system_id, n in counts.items() if n > 1]
        if duplicates:
            raise DuplicateSystemIdError(duplicates)
        return self

    def system_ids(self) -> set:
        return {system.id for system in self.systems}


@dataclass
class TopologyResult:
    is_valid: bool
    topology: Optional[Topology] = None
    issues: List[TopologyIssue] = field(default_factory=list)

    @classmethod
    def success(cls, topology: Topology):
        return cls(is_valid=True, topology=topology, issues=[])

    @classmethod
    def failure(cls, issues: List[TopologyIssue]):
        return cls(is_valid=False, topology=None, issues=issues)


def build_topology(
    systems: Iterable[Any],
    connections: Iterable[Any] = (),
) -> TopologyResult:
    """
    Construct a Topology, reporting construction faults as a failed result
    rather than raising. Accepts model instances or plain dicts.
    """
    try:
        topology = Topology(systems=list(systems), connections=list(connections))
    except DuplicateSystemIdError as e:
        return TopologyResult.failure([
            TopologyIssue(
                level="error",
                message=f"system id '{system_id}' is not unique",
                object_id=system_id,
            )
            for system_id in e.system_ids
        ])
    except ValidationError as e:
        return TopologyResult.failure([
            TopologyIssue(
                level="error",
                message=err["msg"],
                object_id=".".join(str(part) for part in err["loc"]),
            )
            for err in e.errors()
        ])

    return TopologyResult.success(topology)
