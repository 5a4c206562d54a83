"""
Default budget used when no document is loaded.
"""

from typing import Any, Dict

from budget_flow_mcp.core.labels import AGGREGATE_LABELS
from budget_flow_mcp.models.budget import BudgetData

SEED_LABELS: Dict[str, str] = {
    **AGGREGATE_LABELS,
    "salary": "Salary",
    "rent": "Rent",
    "food": "Food",
    "electricity": "Electricity",
    "subscriptions": "Subscriptions",
    "transport": "Transport",
    "sports": "Sports",
    "bankbook": "Bankbook",
    "etf": "ETF",
    "crypto": "Crypto",
    "s&p500": "S&P 500",
    "msciworld": "MSCI World",
    "bitcoin": "Bitcoin",
    "ethereum": "Ethereum",
}

SEED_DATA: Dict[str, Any] = {
    "needs": {
        "rent": 500,
        "food": 250,
        "electricity": 40,
        "transport": 50,
    },
    "wants": {
        "subscriptions": 20,
        "sports": 50,
    },
    "revenues": {
        "salary": 1600,
    },
    "savings": {
        "bankbook": {"percent": 20, "subCategories": {}},
        "etf": {
            "percent": 60,
            "subCategories": {
                "s&p500": {"percent": 40, "subCategories": {}},
                "msciworld": {"percent": 60, "subCategories": {}},
            },
        },
        "crypto": {
            "percent": 20,
            "subCategories": {
                "bitcoin": {"percent": 50, "subCategories": {}},
                "ethereum": {"percent": 50, "subCategories": {}},
            },
        },
    },
}


def seed_labels() -> Dict[str, str]:
    """Get a fresh copy of the default labels."""
    return dict(SEED_LABELS)


def seed_budget() -> BudgetData:
    """Get a fresh copy of the default budget data."""
    return BudgetData.model_validate(SEED_DATA)
