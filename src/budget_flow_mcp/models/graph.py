"""
Flow graph and totals models produced by the conversion engine.
"""

from typing import Tuple

from pydantic import BaseModel, Field

REVENUES_NODE = "revenues"
NEEDS_NODE = "needs"
WANTS_NODE = "wants"
SAVINGS_NODE = "savings"

AGGREGATE_NODE_IDS: Tuple[str, ...] = (
    REVENUES_NODE,
    NEEDS_NODE,
    WANTS_NODE,
    SAVINGS_NODE,
)


class FlowNode(BaseModel):
    """A node of the flow graph."""

    model_config = {"frozen": True}

    id: str
    category: str  # revenues, needs, wants or savings
    aggregate: bool = False


class FlowLink(BaseModel):
    """A weighted link between two flow graph nodes."""

    model_config = {"frozen": True}

    source: str
    target: str
    value: float


class FlowGraph(BaseModel):
    """Ordered nodes and links describing how money flows through a budget."""

    model_config = {"frozen": True}

    nodes: Tuple[FlowNode, ...] = ()
    links: Tuple[FlowLink, ...] = ()


class Totals(BaseModel):
    """Aggregate sums derived from the budget data."""

    model_config = {"frozen": True, "populate_by_name": True}

    revenues_total: float = Field(0.0, alias="revenuesTotal")
    needs_total: float = Field(0.0, alias="needsTotal")
    wants_total: float = Field(0.0, alias="wantsTotal")
    saving_total: float = Field(0.0, alias="savingTotal")
