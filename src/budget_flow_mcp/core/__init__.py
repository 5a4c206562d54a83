"""
Core functionality for Budget Flow MCP.

The conversion engine, label registry, mutation store and document
validator live in the submodules of this package.
"""

from budget_flow_mcp.core.exceptions import (
    BudgetFlowError,
    DocumentNotFoundError,
    DocumentValidationError,
    SavingPathNotFoundError,
)

__all__ = [
    "BudgetFlowError",
    "DocumentNotFoundError",
    "DocumentValidationError",
    "SavingPathNotFoundError",
]
