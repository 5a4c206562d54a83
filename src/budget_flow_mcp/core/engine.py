"""
Graph conversion engine.

Converts budget data into a flow graph and the four aggregate totals.
The conversion is pure and total: any structurally valid budget converts,
including empty maps, zero amounts and savings percentages that do not
sum to 100.
"""

from typing import Dict, List

from pydantic import BaseModel

from budget_flow_mcp.models.budget import BudgetData, SavingsNode
from budget_flow_mcp.models.graph import (
    AGGREGATE_NODE_IDS,
    NEEDS_NODE,
    REVENUES_NODE,
    SAVINGS_NODE,
    WANTS_NODE,
    FlowGraph,
    FlowLink,
    FlowNode,
    Totals,
)


class Conversion(BaseModel):
    """Result of converting budget data."""

    model_config = {"frozen": True}

    graph: FlowGraph
    totals: Totals


def compute_totals(data: BudgetData) -> Totals:
    """
    Compute the aggregate totals of a budget.

    Savings receive whatever revenue is left after needs and wants, never
    less than zero.
    """
    revenues_total = float(sum(data.revenues.values()))
    needs_total = float(sum(data.needs.values()))
    wants_total = float(sum(data.wants.values()))
    saving_total = max(revenues_total - needs_total - wants_total, 0.0)

    return Totals(
        revenues_total=revenues_total,
        needs_total=needs_total,
        wants_total=wants_total,
        saving_total=saving_total,
    )


def convert(data: BudgetData) -> Conversion:
    """
    Convert budget data into a flow graph and totals.

    Node order: revenue sources, the aggregate nodes, needs, wants, then the
    savings tree in pre-order. Zero-weight nodes and links are kept; hiding
    them is up to the renderer.

    Args:
        data: Budget data to convert

    Returns:
        Conversion with the graph and totals
    """
    totals = compute_totals(data)

    nodes: List[FlowNode] = [
        FlowNode(id=node_id, category=REVENUES_NODE) for node_id in data.revenues
    ]
    nodes.extend(
        FlowNode(id=node_id, category=node_id, aggregate=True)
        for node_id in AGGREGATE_NODE_IDS
    )
    nodes.extend(FlowNode(id=node_id, category=NEEDS_NODE) for node_id in data.needs)
    nodes.extend(FlowNode(id=node_id, category=WANTS_NODE) for node_id in data.wants)

    links: List[FlowLink] = [
        FlowLink(source=node_id, target=REVENUES_NODE, value=amount)
        for node_id, amount in data.revenues.items()
    ]
    links.append(
        FlowLink(source=REVENUES_NODE, target=NEEDS_NODE, value=totals.needs_total)
    )
    links.append(
        FlowLink(source=REVENUES_NODE, target=WANTS_NODE, value=totals.wants_total)
    )
    links.append(
        FlowLink(source=REVENUES_NODE, target=SAVINGS_NODE, value=totals.saving_total)
    )
    links.extend(
        FlowLink(source=NEEDS_NODE, target=node_id, value=amount)
        for node_id, amount in data.needs.items()
    )
    links.extend(
        FlowLink(source=WANTS_NODE, target=node_id, value=amount)
        for node_id, amount in data.wants.items()
    )

    _expand_savings(data.savings, SAVINGS_NODE, totals.saving_total, nodes, links)

    return Conversion(
        graph=FlowGraph(nodes=tuple(nodes), links=tuple(links)),
        totals=totals,
    )


def _expand_savings(
    children: Dict[str, SavingsNode],
    parent_id: str,
    incoming: float,
    nodes: List[FlowNode],
    links: List[FlowLink],
) -> None:
    # Each child gets percent/100 of what reaches its parent, with no
    # renormalization across siblings.
    for node_id, node in children.items():
        amount = node.percent / 100 * incoming
        nodes.append(FlowNode(id=node_id, category=SAVINGS_NODE))
        links.append(FlowLink(source=parent_id, target=node_id, value=amount))
        _expand_savings(node.sub_categories, node_id, amount, nodes, links)
