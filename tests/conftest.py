"""
Pytest configuration and fixtures for budget-flow-mcp tests.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from budget_flow_mcp.core.store import BudgetStore


@pytest.fixture(scope="session")
def document_path() -> Path:
    """Path to the example budget document used in tests."""
    path = Path(__file__).parent / "fixtures" / "budget_document.json"
    if not path.exists():
        pytest.skip(f"Budget document fixture not found at {path}.")
    return path


@pytest.fixture
def document_data(document_path: Path) -> Dict[str, Any]:
    """Parsed content of the example budget document."""
    return json.loads(document_path.read_text(encoding="utf-8"))


@pytest.fixture
def seed_store() -> BudgetStore:
    """Store holding the default budget."""
    return BudgetStore.from_seed()


@pytest.fixture
def empty_store() -> BudgetStore:
    """Store holding an empty budget."""
    return BudgetStore()
