"""
MCP tools for Budget Flow.
"""

from budget_flow_mcp.tools.tools import BudgetFlowTools, create_tool_schemas

__all__ = ["BudgetFlowTools", "create_tool_schemas"]
