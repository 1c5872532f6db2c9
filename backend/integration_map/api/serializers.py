from enum import Enum
from typing import Any

from integration_map.visual.visual_schema import DiagramProjection


PRIMITIVE_TYPES = (str, int, float, bool, type(None))


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def serialize_record(obj: Any):
    """
    Serialize visual records into the renderer's JSON shape.
    Field names become camelCase (visual_width -> visualWidth).
    """

    if isinstance(obj, PRIMITIVE_TYPES):
        return obj

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, (list, tuple)):
        return [serialize_record(item) for item in obj]

    if isinstance(obj, dict):
        return {k: serialize_record(v) for k, v in obj.items()}

    # dataclass-like records
    if hasattr(obj, "__dict__"):
        return {
            _camel(key): serialize_record(value)
            for key, value in obj.__dict__.items()
            if not key.startswith("_")
        }

    return str(obj)


def serialize_projection(projection: DiagramProjection) -> dict:
    return {
        "nodes": serialize_record(projection.nodes),
        "edges": serialize_record(projection.edges),
    }
