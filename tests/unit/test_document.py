"""
Unit tests for budget document validation and export.
"""

import json
from typing import Any, Dict

import pytest

from budget_flow_mcp.core.document import export_document, validate_document
from budget_flow_mcp.core.exceptions import BudgetFlowError, DocumentValidationError
from budget_flow_mcp.core.seed import SEED_DATA, SEED_LABELS
from budget_flow_mcp.core.store import BudgetStore


def seed_document() -> Dict[str, Any]:
    """Default budget in document form."""
    return json.loads(json.dumps({"labels": SEED_LABELS, "rawData": SEED_DATA}))


class TestValidateDocument:
    """Tests for validate_document function."""

    def test_valid_mapping(self) -> None:
        """Test validating a parsed document."""
        document = validate_document(seed_document())
        assert document.labels["etf"] == "ETF"
        assert document.raw_data.revenues == {"salary": 1600}
        assert document.raw_data.get_saving(["etf", "s&p500"]).percent == 40

    def test_valid_json_text(self) -> None:
        """Test validating JSON text."""
        document = validate_document(json.dumps(seed_document()))
        assert document.raw_data.needs["rent"] == 500

    def test_missing_raw_data(self) -> None:
        """Test that rawData is required."""
        with pytest.raises(DocumentValidationError):
            validate_document({"labels": {}})

    def test_malformed_json(self) -> None:
        """Test that broken JSON is reported as a validation error."""
        with pytest.raises(DocumentValidationError):
            validate_document("{not json")

    def test_negative_amount(self) -> None:
        """Test that negative amounts are rejected."""
        document = seed_document()
        document["rawData"]["needs"]["rent"] = -1
        with pytest.raises(DocumentValidationError, match="Invalid budget document"):
            validate_document(document)

    def test_percent_above_100(self) -> None:
        """Test that percentages above 100 are rejected."""
        document = seed_document()
        document["rawData"]["savings"]["etf"]["subCategories"]["msciworld"]["percent"] = 120
        with pytest.raises(DocumentValidationError):
            validate_document(document)

    @pytest.mark.parametrize("amount", ["500", True])
    def test_amount_must_be_a_number(self, amount) -> None:
        """Test that string and boolean amounts are rejected."""
        document = seed_document()
        document["rawData"]["needs"]["rent"] = amount
        with pytest.raises(DocumentValidationError):
            validate_document(document)

    def test_json_amount_must_be_a_number(self) -> None:
        """Test that quoted amounts in JSON text are rejected."""
        document = seed_document()
        document["rawData"]["revenues"]["salary"] = "1600"
        with pytest.raises(DocumentValidationError):
            validate_document(json.dumps(document))

    def test_percent_must_be_a_number(self) -> None:
        """Test that a boolean percentage is rejected."""
        document = seed_document()
        document["rawData"]["savings"]["bankbook"]["percent"] = False
        with pytest.raises(DocumentValidationError):
            validate_document(document)

    def test_non_string_label(self) -> None:
        """Test that labels must be strings."""
        document = seed_document()
        document["labels"]["rent"] = 42
        with pytest.raises(DocumentValidationError):
            validate_document(document)

    def test_missing_label(self) -> None:
        """Test that every node needs a label."""
        document = seed_document()
        del document["labels"]["bitcoin"]
        with pytest.raises(DocumentValidationError, match="bitcoin"):
            validate_document(document)

    def test_sibling_percentages_need_not_sum_to_100(self) -> None:
        """Test that unbalanced allocations are valid documents."""
        document = seed_document()
        document["rawData"]["savings"]["crypto"]["subCategories"]["bitcoin"]["percent"] = 10
        assert validate_document(document).raw_data.get_saving(["crypto", "bitcoin"]).percent == 10

    def test_error_is_budget_flow_error(self) -> None:
        """Test that validation errors share the package base class."""
        assert issubclass(DocumentValidationError, BudgetFlowError)


class TestExportDocument:
    """Tests for export_document function."""

    def test_export_uses_wire_names(self, seed_store: BudgetStore) -> None:
        """Test that exported documents use labels/rawData/subCategories."""
        exported = export_document(seed_store.snapshot)

        assert set(exported) == {"labels", "rawData"}
        assert exported["labels"] == SEED_LABELS
        assert exported["rawData"]["savings"]["etf"]["subCategories"]["msciworld"] == {
            "percent": 60,
            "subCategories": {},
        }

    def test_export_is_json_serializable(self, seed_store: BudgetStore) -> None:
        """Test that the export can be dumped to JSON and validated again."""
        text = json.dumps(export_document(seed_store.snapshot))
        assert validate_document(text).raw_data == seed_store.raw_data

    def test_export_keeps_orphaned_labels(self, seed_store: BudgetStore) -> None:
        """Test that labels of deleted savings are exported."""
        seed_store.delete_saving(["crypto"])
        exported = export_document(seed_store.snapshot)
        assert "crypto" not in exported["rawData"]["savings"]
        assert exported["labels"]["bitcoin"] == "Bitcoin"
