from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from integration_map import config
from integration_map.session.changes import EdgeChange, NodeChange
from integration_map.topology.model import Connection, System
from integration_map.visual.visual_schema import PresentationOptions


class DiagramRequest(BaseModel):
    """Systems and connections for one diagram, plus presentation settings"""
    model_config = ConfigDict(populate_by_name=True)

    systems: List[System] = []
    connections: List[Connection] = []
    title: Optional[str] = None
    subtitle: Optional[str] = None
    show_export_labels: Optional[bool] = Field(default=None, alias="showExportLabels")

    def presentation_options(self) -> PresentationOptions:
        return PresentationOptions(
            title=self.title or config.DEFAULT_TITLE,
            subtitle=self.subtitle,
            show_export_labels=(
                config.SHOW_EXPORT_LABELS
                if self.show_export_labels is None
                else self.show_export_labels
            ),
        )


class NodeChangesRequest(BaseModel):
    changes: List[NodeChange]


class EdgeChangesRequest(BaseModel):
    changes: List[EdgeChange]
