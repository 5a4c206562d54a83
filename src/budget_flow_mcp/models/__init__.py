"""
Pydantic models for budget data and flow graphs.
"""

from budget_flow_mcp.models.budget import FLAT_CATEGORIES, BudgetData, SavingsNode
from budget_flow_mcp.models.graph import FlowGraph, FlowLink, FlowNode, Totals

__all__ = [
    "FLAT_CATEGORIES",
    "BudgetData",
    "SavingsNode",
    "FlowGraph",
    "FlowLink",
    "FlowNode",
    "Totals",
]
