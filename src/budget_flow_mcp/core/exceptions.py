"""
Custom exceptions for Budget Flow MCP.
"""


class BudgetFlowError(Exception):
    """Base exception for Budget Flow MCP errors."""
    pass


class SavingPathNotFoundError(BudgetFlowError):
    """Raised when a savings path does not resolve to a node."""

    def __init__(self, path):
        self.path = tuple(path)
        super().__init__(f"Savings path not found: {'.'.join(self.path) or '<root>'}")


class DocumentValidationError(BudgetFlowError):
    """Raised when a budget document does not match the expected shape."""
    pass


class DocumentNotFoundError(BudgetFlowError):
    """Raised when a budget document file cannot be found."""
    pass
