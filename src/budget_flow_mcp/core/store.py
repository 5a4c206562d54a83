"""
Mutation store for budget data.

Holds the current labels and budget data together with the flow graph and
totals derived from them. Every edit builds a new snapshot: labels and data
are copied, the copy is changed, the graph is recomputed, and the snapshot
is swapped in one step. Snapshots handed out earlier are never modified.

The store is single-writer and not safe for concurrent use.
"""

import logging
import math
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel

from budget_flow_mcp.core.document import BudgetDocument
from budget_flow_mcp.core.engine import convert
from budget_flow_mcp.core.exceptions import SavingPathNotFoundError
from budget_flow_mcp.core.labels import with_label, without_label
from budget_flow_mcp.core.seed import seed_budget, seed_labels
from budget_flow_mcp.models.budget import BudgetData, SavingsNode
from budget_flow_mcp.models.graph import FlowGraph, Totals
from budget_flow_mcp.utils.id_utils import generate_node_id
from budget_flow_mcp.utils.paths import PathLike, format_path, parse_path

logger = logging.getLogger(__name__)

MAX_PERCENT = 100.0


class StoreSnapshot(BaseModel):
    """Labels, budget data and the graph and totals derived from them."""

    model_config = {"frozen": True}

    labels: Dict[str, str]
    raw_data: BudgetData
    graph: FlowGraph
    totals: Totals


Listener = Callable[[StoreSnapshot], None]


def coerce_amount(value: float) -> float:
    """Clamp an amount to a finite, non-negative number. Invalid input is 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_percent(value: float) -> float:
    """Clamp a percentage to [0, 100]. Invalid input is 0."""
    return min(coerce_amount(value), MAX_PERCENT)


class BudgetStore:
    """
    Current budget state with atomic edit operations.

    Operations addressed at a missing id or path change nothing and return
    normally. Invalid numbers are clamped instead of rejected.
    """

    def __init__(
        self,
        labels: Optional[Mapping[str, str]] = None,
        raw_data: Optional[BudgetData] = None,
    ):
        """
        Initialize the store.

        Args:
            labels: Initial label registry (default: empty)
            raw_data: Initial budget data (default: empty budget)
        """
        self._listeners: List[Listener] = []
        self._snapshot = self._derive(
            dict(labels or {}),
            raw_data.model_copy(deep=True) if raw_data is not None else BudgetData(),
        )

    @classmethod
    def from_seed(cls) -> "BudgetStore":
        """Create a store holding the default budget."""
        return cls(seed_labels(), seed_budget())

    @property
    def snapshot(self) -> StoreSnapshot:
        """The current snapshot. Treat it as read-only."""
        return self._snapshot

    @property
    def labels(self) -> Mapping[str, str]:
        """Read-only view of the current labels."""
        return MappingProxyType(self._snapshot.labels)

    @property
    def raw_data(self) -> BudgetData:
        """A copy of the current budget data. Edit through the store operations."""
        return self._snapshot.raw_data.model_copy(deep=True)

    @property
    def graph(self) -> FlowGraph:
        return self._snapshot.graph

    @property
    def totals(self) -> Totals:
        return self._snapshot.totals

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with every newly committed snapshot.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @staticmethod
    def _derive(labels: Dict[str, str], raw_data: BudgetData) -> StoreSnapshot:
        conversion = convert(raw_data)
        # Inputs are already owned copies; skip revalidation
        return StoreSnapshot.model_construct(
            labels=labels,
            raw_data=raw_data,
            graph=conversion.graph,
            totals=conversion.totals,
        )

    def _commit(self, labels: Dict[str, str], raw_data: BudgetData) -> None:
        self._snapshot = self._derive(labels, raw_data)
        for listener in list(self._listeners):
            try:
                listener(self._snapshot)
            except Exception:
                logger.exception("Snapshot listener failed")

    def _copy_data(self) -> BudgetData:
        return self._snapshot.raw_data.model_copy(deep=True)

    def _new_node_id(self, data: BudgetData) -> str:
        existing = set(self._snapshot.labels)
        existing.update(data.iter_node_ids())
        return generate_node_id(existing)

    def update_label(self, node_id: str, label: str) -> None:
        """Set the display label of node_id. The id does not need to exist."""
        self._commit(
            with_label(self._snapshot.labels, node_id, label),
            self._snapshot.raw_data,
        )

    def update_data(self, category: str, node_id: str, value: float) -> float:
        """
        Set the amount of node_id in a flat category.

        Args:
            category: needs, wants or revenues
            node_id: Node id, created if missing
            value: New amount; NaN, infinite and negative values become 0

        Returns:
            The stored amount

        Raises:
            ValueError: If category is not a flat category
        """
        amount = coerce_amount(value)
        if amount != value:
            logger.debug(f"Coerced {category}.{node_id} amount {value!r} to {amount}")

        data = self._copy_data()
        data.flat_category(category)[node_id] = amount
        self._commit(self._snapshot.labels, data)
        return amount

    def update_saving(self, path: PathLike, percent: float) -> bool:
        """
        Set the percent of the savings node at path.

        Args:
            path: Savings path
            percent: New percentage, clamped to [0, 100]

        Returns:
            True if the node exists and was updated, False otherwise
        """
        segments = parse_path(path)
        percent_value = coerce_percent(percent)
        if percent_value != percent:
            logger.debug(
                f"Coerced percent {percent!r} to {percent_value} for {format_path(segments)}"
            )

        data = self._copy_data()
        try:
            node = data.get_saving(segments)
        except SavingPathNotFoundError:
            logger.debug(f"Ignoring percent update for missing path {format_path(segments)}")
            return False

        node.percent = percent_value
        self._commit(self._snapshot.labels, data)
        return True

    def add_node(self, label: str, category: str) -> str:
        """
        Add a node with amount 0 to a flat category.

        Returns:
            The generated node id

        Raises:
            ValueError: If category is not a flat category
        """
        data = self._copy_data()
        amounts = data.flat_category(category)
        node_id = self._new_node_id(data)
        amounts[node_id] = 0.0

        self._commit(with_label(self._snapshot.labels, node_id, label), data)
        logger.debug(f"Added {category} node {node_id} ({label})")
        return node_id

    def add_saving(self, label: str, parent_path: Optional[PathLike] = None) -> Optional[str]:
        """
        Add an empty savings node with percent 0.

        Args:
            label: Display label for the new node
            parent_path: Parent savings path; the savings root if omitted

        Returns:
            The generated node id, or None if parent_path does not exist
        """
        data = self._copy_data()
        segments = parse_path(parent_path) if parent_path is not None else ()

        if segments:
            try:
                siblings = data.get_saving(segments).sub_categories
            except SavingPathNotFoundError:
                logger.debug(f"Ignoring new saving under missing path {format_path(segments)}")
                return None
        else:
            siblings = data.savings

        node_id = self._new_node_id(data)
        siblings[node_id] = SavingsNode(percent=0.0)

        self._commit(with_label(self._snapshot.labels, node_id, label), data)
        logger.debug(f"Added saving {format_path(segments + (node_id,))} ({label})")
        return node_id

    def remove_node(self, node_id: str, category: str) -> bool:
        """
        Remove a node and its label from a flat category.

        Returns:
            True if the node was removed, False if it did not exist

        Raises:
            ValueError: If category is not a flat category
        """
        if node_id not in self._snapshot.raw_data.flat_category(category):
            logger.debug(f"Ignoring removal of missing {category} node {node_id}")
            return False

        data = self._copy_data()
        del data.flat_category(category)[node_id]
        self._commit(without_label(self._snapshot.labels, node_id), data)
        return True

    def delete_saving(self, path: PathLike) -> bool:
        """
        Delete the savings subtree at path.

        Labels of the deleted nodes are kept.

        Returns:
            True if the subtree was deleted, False if the path did not exist
        """
        segments = parse_path(path)
        if not self._snapshot.raw_data.has_saving(segments):
            logger.debug(f"Ignoring deletion of missing path {format_path(segments)}")
            return False

        data = self._copy_data()
        data.remove_saving(segments)
        self._commit(self._snapshot.labels, data)
        return True

    def import_data(self, labels: Mapping[str, str], raw_data: BudgetData) -> None:
        """
        Replace labels and budget data wholesale.

        The input is trusted; validate documents with
        budget_flow_mcp.core.document.validate_document first.
        """
        self._commit(dict(labels), raw_data.model_copy(deep=True))
        logger.info(f"Imported budget with {len(self._snapshot.labels)} labels")

    def import_document(self, document: BudgetDocument) -> None:
        """Replace the store contents with a validated document."""
        self.import_data(document.labels, document.raw_data)
