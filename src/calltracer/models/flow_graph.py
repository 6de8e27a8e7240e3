"""Fund-flow graph models: participants as nodes, transfers as edges."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .transfer import Amount


class GraphNode(BaseModel):
    """One participant of the fund flow."""

    model_config = ConfigDict(strict=True, extra="ignore")

    address: str
    label: str
    is_sender: bool = False
    is_receiver: bool = False
    color: str = ""
    link: str | None = None


class GraphEdge(BaseModel):
    """Directional transfer between two participants."""

    model_config = ConfigDict(strict=True, extra="ignore")

    index: int
    from_address: str
    to_address: str
    token: str
    amount: Amount
    amount_display: str
    token_label: str
    color: str
    link: str | None = None


class FundFlowGraph(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes
