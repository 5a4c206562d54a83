"""
Utility functions for Budget Flow MCP.
"""

from budget_flow_mcp.utils.id_utils import generate_node_id
from budget_flow_mcp.utils.paths import format_path, parse_path

__all__ = [
    "generate_node_id",
    "format_path",
    "parse_path",
]
