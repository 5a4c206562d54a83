"""
Budget tree model.

Flat amount maps for revenues, needs and wants, and a recursive
percentage-allocation tree for savings.
"""

from typing import Annotated, Dict, Iterator, List, Sequence, Tuple

from pydantic import BaseModel, Field

from budget_flow_mcp.core.exceptions import SavingPathNotFoundError

FLAT_CATEGORIES: Tuple[str, ...] = ("needs", "wants", "revenues")

Amount = Annotated[float, Field(ge=0, allow_inf_nan=False, strict=True)]
Percent = Annotated[float, Field(ge=0, le=100, allow_inf_nan=False, strict=True)]


class SavingsNode(BaseModel):
    """
    A node of the savings allocation tree.

    ``percent`` is the share of the parent's incoming amount passed to this
    node. A node without sub-categories is a terminal savings instrument.
    """

    model_config = {"populate_by_name": True}

    percent: Percent = 0.0
    sub_categories: Dict[str, "SavingsNode"] = Field(
        default_factory=dict, alias="subCategories"
    )

    @property
    def is_leaf(self) -> bool:
        """True when the node has no sub-categories."""
        return not self.sub_categories


class BudgetData(BaseModel):
    """
    Canonical budget data.

    Savings nodes are addressed by paths: ordered sequences of node ids
    starting at the savings root, e.g. ``("etf", "s&p500")``.
    """

    model_config = {"populate_by_name": True}

    needs: Dict[str, Amount] = Field(default_factory=dict)
    wants: Dict[str, Amount] = Field(default_factory=dict)
    revenues: Dict[str, Amount] = Field(default_factory=dict)
    savings: Dict[str, SavingsNode] = Field(default_factory=dict)

    def flat_category(self, category: str) -> Dict[str, float]:
        """
        Get the amount map for a flat category.

        Raises:
            ValueError: If category is not needs, wants or revenues
        """
        if category not in FLAT_CATEGORIES:
            raise ValueError(
                f"Unknown category: {category}. "
                f"Expected one of: {', '.join(FLAT_CATEGORIES)}"
            )
        return getattr(self, category)

    def _siblings(self, path: Tuple[str, ...]) -> Dict[str, SavingsNode]:
        # Mapping that holds (or would hold) the last segment of path
        if not path:
            raise SavingPathNotFoundError(path)
        children = self.savings
        for segment in path[:-1]:
            node = children.get(segment)
            if node is None:
                raise SavingPathNotFoundError(path)
            children = node.sub_categories
        return children

    def get_saving(self, path: Sequence[str]) -> SavingsNode:
        """
        Get the savings node at path.

        Raises:
            SavingPathNotFoundError: If any segment does not resolve
        """
        path = tuple(path)
        node = self._siblings(path).get(path[-1])
        if node is None:
            raise SavingPathNotFoundError(path)
        return node

    def has_saving(self, path: Sequence[str]) -> bool:
        """Check whether path resolves to a savings node."""
        try:
            self.get_saving(path)
        except SavingPathNotFoundError:
            return False
        return True

    def set_saving(self, path: Sequence[str], node: SavingsNode) -> None:
        """
        Replace the savings node at an existing path.

        Raises:
            SavingPathNotFoundError: If the path does not already exist
        """
        path = tuple(path)
        siblings = self._siblings(path)
        if path[-1] not in siblings:
            raise SavingPathNotFoundError(path)
        siblings[path[-1]] = node

    def remove_saving(self, path: Sequence[str]) -> bool:
        """
        Remove the savings subtree at path.

        Returns:
            True if a subtree was removed, False if the path was absent
        """
        path = tuple(path)
        try:
            siblings = self._siblings(path)
        except SavingPathNotFoundError:
            return False
        return siblings.pop(path[-1], None) is not None

    def iter_savings(self) -> Iterator[Tuple[Tuple[str, ...], SavingsNode]]:
        """Yield (path, node) for every savings node, in pre-order."""
        stack: List[Tuple[Tuple[str, ...], SavingsNode]] = [
            ((node_id,), node) for node_id, node in reversed(self.savings.items())
        ]
        while stack:
            path, node = stack.pop()
            yield path, node
            stack.extend(
                (path + (child_id,), child)
                for child_id, child in reversed(node.sub_categories.items())
            )

    def iter_node_ids(self) -> Iterator[str]:
        """Yield every node id in the model: flat categories, then savings."""
        for category in FLAT_CATEGORIES:
            yield from self.flat_category(category)
        for path, _ in self.iter_savings():
            yield path[-1]
