"""
Budget document validation and export.

A budget document is the JSON exchange format of a budget:

    {"labels": {<node id>: <label>}, "rawData": {"needs": ..., "wants": ...,
     "revenues": ..., "savings": ...}}

Documents are validated here before they reach the store.
"""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping, Union

from pydantic import BaseModel, Field, ValidationError

from budget_flow_mcp.core.exceptions import DocumentNotFoundError, DocumentValidationError
from budget_flow_mcp.core.labels import missing_labels
from budget_flow_mcp.models.budget import BudgetData

if TYPE_CHECKING:
    from budget_flow_mcp.core.store import StoreSnapshot

logger = logging.getLogger(__name__)


class BudgetDocument(BaseModel):
    """A labelled budget, as exchanged with files and MCP clients."""

    model_config = {"populate_by_name": True}

    labels: Dict[str, str] = Field(default_factory=dict)
    raw_data: BudgetData = Field(alias="rawData")


def validate_document(document: Union[str, bytes, Mapping[str, Any]]) -> BudgetDocument:
    """
    Validate a budget document.

    Checks the document shape, that amounts are finite and non-negative,
    that percentages lie in [0, 100], and that every node has a label.

    Args:
        document: JSON text or an already parsed mapping

    Returns:
        The validated document

    Raises:
        DocumentValidationError: If the document is invalid
    """
    try:
        if isinstance(document, (str, bytes)):
            validated = BudgetDocument.model_validate_json(document)
        else:
            validated = BudgetDocument.model_validate(document)
    except ValidationError as e:
        raise DocumentValidationError(f"Invalid budget document: {e}") from e

    missing = missing_labels(validated.labels, validated.raw_data)
    if missing:
        raise DocumentValidationError(
            f"Missing labels for node ids: {', '.join(missing)}"
        )

    return validated


def export_document(snapshot: "StoreSnapshot") -> Dict[str, Any]:
    """
    Export a store snapshot as a JSON-ready budget document.

    Args:
        snapshot: Snapshot to export

    Returns:
        Dict with "labels" and "rawData"
    """
    return {
        "labels": dict(snapshot.labels),
        "rawData": snapshot.raw_data.model_dump(mode="json", by_alias=True),
    }


def load_document(path: Path) -> BudgetDocument:
    """
    Load and validate a budget document from a JSON file.

    Raises:
        DocumentNotFoundError: If the file does not exist
        DocumentValidationError: If the file content is invalid
    """
    if not path.is_file():
        raise DocumentNotFoundError(f"Budget document not found: {path}")

    document = validate_document(path.read_text(encoding="utf-8"))
    logger.info(f"Loaded budget document from {path}")
    return document


def save_document(snapshot: "StoreSnapshot", path: Path) -> None:
    """Write a store snapshot to path as a JSON budget document."""
    path.write_text(
        json.dumps(export_document(snapshot), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info(f"Saved budget document to {path}")
