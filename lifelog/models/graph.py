"""
Relationship graph models built from memories.
"""

import math

from pydantic import BaseModel, Field, field_validator


class GraphNode(BaseModel):
    """A memory as a graph node."""

    model_config = {"extra": "ignore"}

    id: str = Field(..., description="Memory ID")
    label: str = Field(default="", description="Short display label")
    group: str = Field(default="Other", description="Theme bucket")
    val: float = Field(default=1.0, description="Relevance weight (positive)")

    @field_validator("label", "group", mode="before")
    @classmethod
    def _none_to_default(cls, value, info):
        if value is None:
            return "" if info.field_name == "label" else "Other"
        return value

    @field_validator("val", mode="before")
    @classmethod
    def _positive_val(cls, value):
        try:
            value = float(value)
        except (TypeError, ValueError):
            return 1.0
        if not math.isfinite(value) or value <= 0:
            return 1.0
        return value


class GraphLink(BaseModel):
    """Relation between two nodes; rendered undirected."""

    model_config = {"extra": "ignore"}

    source: str
    target: str
    reason: str = ""

    @field_validator("reason", mode="before")
    @classmethod
    def _none_reason(cls, value):
        return "" if value is None else value


class GraphData(BaseModel):
    """Nodes and links for one conversation turn. Not persisted."""

    model_config = {"extra": "ignore"}

    nodes: list[GraphNode] = Field(default_factory=list)
    links: list[GraphLink] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes


class PositionedNode(GraphNode):
    """Graph node with layout coordinates."""

    x: float
    y: float
    angle: float


class GraphEntry(BaseModel):
    """Per-memory metadata sent to the provider when building a graph."""

    id: str
    summary: str
    tags: list[str] = Field(default_factory=list)
