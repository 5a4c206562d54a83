"""
Label registry helpers.

Labels map node ids to display strings. Registries are plain dicts and
are never mutated in place; helpers return updated copies.
"""

from typing import Dict, List, Mapping

from budget_flow_mcp.models.budget import BudgetData
from budget_flow_mcp.models.graph import (
    NEEDS_NODE,
    REVENUES_NODE,
    SAVINGS_NODE,
    WANTS_NODE,
)

AGGREGATE_LABELS: Dict[str, str] = {
    REVENUES_NODE: "Revenues",
    NEEDS_NODE: "Needs",
    WANTS_NODE: "Wants",
    SAVINGS_NODE: "Savings",
}


def with_label(labels: Mapping[str, str], node_id: str, label: str) -> Dict[str, str]:
    """Return a copy of labels with node_id set to label."""
    updated = dict(labels)
    updated[node_id] = label
    return updated


def without_label(labels: Mapping[str, str], node_id: str) -> Dict[str, str]:
    """Return a copy of labels without node_id. Absent ids are ignored."""
    updated = dict(labels)
    updated.pop(node_id, None)
    return updated


def missing_labels(labels: Mapping[str, str], data: BudgetData) -> List[str]:
    """
    Find node ids of data that have no label.

    Labels without a matching node are allowed and not reported.

    Returns:
        Missing node ids in model order, without duplicates
    """
    missing: List[str] = []
    for node_id in data.iter_node_ids():
        if node_id not in labels and node_id not in missing:
            missing.append(node_id)
    return missing


def display_name(labels: Mapping[str, str], node_id: str) -> str:
    """Get the label for node_id, falling back to the id itself."""
    return labels.get(node_id) or node_id
