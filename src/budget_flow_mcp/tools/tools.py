"""
MCP tool definitions for budget flow editing.

Exposes the budget store through the Model Context Protocol.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from budget_flow_mcp.core.document import export_document, save_document, validate_document
from budget_flow_mcp.core.labels import display_name
from budget_flow_mcp.core.store import BudgetStore
from budget_flow_mcp.models.budget import FLAT_CATEGORIES
from budget_flow_mcp.utils.paths import parse_path


class BudgetFlowTools:
    """Collection of MCP tools for reading and editing a budget."""

    def __init__(self, store: BudgetStore, document_path: Optional[Path] = None):
        """
        Initialize tools with a budget store.

        Args:
            store: BudgetStore instance
            document_path: Optional file used by save_document
        """
        self.store = store
        self.document_path = document_path

    def _totals(self) -> Dict[str, float]:
        return self.store.totals.model_dump(by_alias=True)

    def get_flow_graph(self) -> Dict[str, Any]:
        """
        Get the flow graph of the current budget.

        Returns:
            Dict with labelled nodes, links and totals
        """
        snapshot = self.store.snapshot
        nodes = [
            {**node.model_dump(), "label": display_name(snapshot.labels, node.id)}
            for node in snapshot.graph.nodes
        ]
        return {
            "node_count": len(nodes),
            "link_count": len(snapshot.graph.links),
            "nodes": nodes,
            "links": [link.model_dump() for link in snapshot.graph.links],
            "totals": self._totals(),
        }

    def get_totals(self) -> Dict[str, float]:
        """Get revenues, needs, wants and savings totals."""
        return self._totals()

    def get_labels(self) -> Dict[str, Any]:
        """Get the label registry."""
        labels = self.store.labels
        return {"count": len(labels), "labels": dict(labels)}

    def get_budget(self) -> Dict[str, Any]:
        """Get the budget data with labels and totals."""
        return {**export_document(self.store.snapshot), "totals": self._totals()}

    def update_label(self, node_id: str, label: str) -> Dict[str, Any]:
        """
        Set the display label of a node.

        Args:
            node_id: Node id
            label: New label
        """
        self.store.update_label(node_id, label)
        return {"node_id": node_id, "label": label}

    def update_amount(self, category: str, node_id: str, amount: float) -> Dict[str, Any]:
        """
        Set the amount of a revenue, need or want.

        Args:
            category: needs, wants or revenues
            node_id: Node id
            amount: New amount (negative values are stored as 0)

        Returns:
            Dict with the stored amount and updated totals

        Raises:
            ValueError: If category is unknown
        """
        stored = self.store.update_data(category, node_id, amount)
        return {
            "category": category,
            "node_id": node_id,
            "amount": stored,
            "totals": self._totals(),
        }

    def update_saving(
        self, path: Union[str, Sequence[str]], percent: float
    ) -> Dict[str, Any]:
        """
        Set the percentage of a savings node.

        Args:
            path: Savings path (list of ids or dot-separated string)
            percent: New percentage (clamped to 0-100)

        Returns:
            Dict telling whether the node was found, and updated totals
        """
        segments = parse_path(path)
        updated = self.store.update_saving(segments, percent)
        result: Dict[str, Any] = {"path": list(segments), "updated": updated}
        if updated:
            result["percent"] = self.store.raw_data.get_saving(segments).percent
        result["totals"] = self._totals()
        return result

    def add_node(self, label: str, category: str) -> Dict[str, Any]:
        """
        Add a revenue, need or want with amount 0.

        Raises:
            ValueError: If category is unknown
        """
        node_id = self.store.add_node(label, category)
        return {"node_id": node_id, "label": label, "category": category}

    def add_saving(
        self, label: str, parent_path: Optional[Union[str, Sequence[str]]] = None
    ) -> Dict[str, Any]:
        """
        Add a savings node with percent 0.

        Args:
            label: Display label
            parent_path: Parent savings path (default: savings root)

        Returns:
            Dict with the new node id, or created=False if the parent is missing
        """
        segments = parse_path(parent_path) if parent_path is not None else ()
        node_id = self.store.add_saving(label, segments)
        return {
            "created": node_id is not None,
            "node_id": node_id,
            "label": label,
            "parent_path": list(segments),
        }

    def remove_node(self, node_id: str, category: str) -> Dict[str, Any]:
        """
        Remove a revenue, need or want.

        Raises:
            ValueError: If category is unknown
        """
        removed = self.store.remove_node(node_id, category)
        return {"node_id": node_id, "removed": removed, "totals": self._totals()}

    def delete_saving(self, path: Union[str, Sequence[str]]) -> Dict[str, Any]:
        """Delete a savings node and everything below it."""
        segments = parse_path(path)
        deleted = self.store.delete_saving(segments)
        return {"path": list(segments), "deleted": deleted, "totals": self._totals()}

    def export_document(self) -> Dict[str, Any]:
        """Export the budget as a document with labels and rawData."""
        return export_document(self.store.snapshot)

    def import_document(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace the budget with a document.

        Raises:
            DocumentValidationError: If the document is invalid
        """
        validated = validate_document(document)
        self.store.import_document(validated)
        return {
            "imported": True,
            "label_count": len(self.store.labels),
            "totals": self._totals(),
        }

    def save_document(self) -> Dict[str, Any]:
        """
        Save the budget to the configured document path.

        Raises:
            ValueError: If no document path is configured
        """
        if self.document_path is None:
            raise ValueError(
                "No document path configured. "
                "Start the server with --document to enable saving."
            )

        save_document(self.store.snapshot, self.document_path)
        return {"saved": True, "path": str(self.document_path)}


def _path_schema(description: str) -> Dict[str, Any]:
    return {
        "description": description,
        "oneOf": [
            {"type": "array", "items": {"type": "string"}},
            {"type": "string"},
        ],
    }


def create_tool_schemas() -> List[Dict[str, Any]]:
    """
    Create MCP tool schemas for all tools.

    Returns:
        List of tool schema definitions
    """
    category_schema = {
        "type": "string",
        "enum": list(FLAT_CATEGORIES),
        "description": "Flat category: needs, wants or revenues",
    }
    no_arguments: Dict[str, Any] = {"type": "object", "properties": {}}

    return [
        {
            "name": "get_flow_graph",
            "description": (
                "Get the money flow graph of the budget: revenue sources flow into "
                "Revenues, then into Needs, Wants and Savings, and savings flow "
                "down the allocation tree. Nodes carry display labels."
            ),
            "inputSchema": no_arguments,
        },
        {
            "name": "get_totals",
            "description": "Get revenues, needs, wants and savings totals.",
            "inputSchema": no_arguments,
        },
        {
            "name": "get_labels",
            "description": "Get the display label of every node id.",
            "inputSchema": no_arguments,
        },
        {
            "name": "get_budget",
            "description": "Get the raw budget data, labels and totals.",
            "inputSchema": no_arguments,
        },
        {
            "name": "update_label",
            "description": "Set the display label of a node.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "node_id": {"type": "string", "description": "Node ID"},
                    "label": {"type": "string", "description": "New label"},
                },
                "required": ["node_id", "label"],
            },
        },
        {
            "name": "update_amount",
            "description": (
                "Set the amount of a revenue, need or want. Creates the entry if "
                "it does not exist. Negative amounts are stored as 0."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "category": category_schema,
                    "node_id": {"type": "string", "description": "Node ID"},
                    "amount": {"type": "number", "description": "New amount"},
                },
                "required": ["category", "node_id", "amount"],
            },
        },
        {
            "name": "update_saving",
            "description": (
                "Set the percentage of a savings node. The percentage is the share "
                "of the parent's amount. Sibling percentages are not rescaled."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "path": _path_schema(
                        "Savings path, e.g. [\"etf\", \"msciworld\"] or \"etf.msciworld\""
                    ),
                    "percent": {
                        "type": "number",
                        "description": "Percentage between 0 and 100",
                    },
                },
                "required": ["path", "percent"],
            },
        },
        {
            "name": "add_node",
            "description": "Add a revenue, need or want with amount 0.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "label": {"type": "string", "description": "Display label"},
                    "category": category_schema,
                },
                "required": ["label", "category"],
            },
        },
        {
            "name": "add_saving",
            "description": (
                "Add a savings node with 0%. Without parent_path it is added at the "
                "top of the savings tree."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "label": {"type": "string", "description": "Display label"},
                    "parent_path": _path_schema("Path of the parent savings node"),
                },
                "required": ["label"],
            },
        },
        {
            "name": "remove_node",
            "description": "Remove a revenue, need or want and its label.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "node_id": {"type": "string", "description": "Node ID"},
                    "category": category_schema,
                },
                "required": ["node_id", "category"],
            },
        },
        {
            "name": "delete_saving",
            "description": "Delete a savings node and all nodes below it.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "path": _path_schema("Savings path of the node to delete"),
                },
                "required": ["path"],
            },
        },
        {
            "name": "export_document",
            "description": "Export the budget as a {labels, rawData} document.",
            "inputSchema": no_arguments,
        },
        {
            "name": "import_document",
            "description": (
                "Replace the whole budget with a {labels, rawData} document. "
                "The document is validated first."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "document": {
                        "type": "object",
                        "description": "Budget document with labels and rawData",
                    },
                },
                "required": ["document"],
            },
        },
        {
            "name": "save_document",
            "description": "Save the budget to the document file the server was started with.",
            "inputSchema": no_arguments,
        },
    ]
