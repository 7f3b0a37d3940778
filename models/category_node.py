"""Category node model: one row of the budget report.

Each node carries two ledgers, budgeted and actual, holding twelve monthly
values and a running total. Nodes with children never receive directly
entered budget data; their ledgers exist only as rollups of their
descendants.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from rollup.category_tree import CategoryTree

FIRST_MONTH = 1
LAST_MONTH = 12


class CategoryKind(str, Enum):
    """Kind of a report row.

    ROOT is the single synthetic "Income-Expenses" row. INCOME and EXPENSE
    are either a synthetic section header or a real category of that kind.
    """

    ROOT = "root"
    INCOME = "income"
    EXPENSE = "expense"


def check_month(month: int) -> None:
    """Raise ValueError if month is not in 1..12."""
    if not FIRST_MONTH <= month <= LAST_MONTH:
        raise ValueError(f"Month must be between 1 and 12, got {month}")


@dataclass
class Ledger:
    """Twelve monthly amounts plus their total, in minor currency units."""

    months: List[int] = field(default_factory=lambda: [0] * LAST_MONTH)
    total: int = 0

    def get(self, month: int) -> int:
        check_month(month)
        return self.months[month - 1]

    def set(self, month: int, value: int) -> int:
        """Store value for month, keep the total in step and return the delta."""
        check_month(month)
        delta = value - self.months[month - 1]
        self.months[month - 1] = value
        self.total += delta
        return delta

    def add(self, month: int, delta: int) -> None:
        check_month(month)
        self.months[month - 1] += delta
        self.total += delta

    def is_consistent(self) -> bool:
        return self.total == sum(self.months)


@dataclass
class CategoryNode:
    """A row of the report.

    Attributes:
        short_name: Display name without the parent prefix, e.g. "Fuel".
        full_name: Full path name, e.g. "Auto:Fuel". Synthetic rows use their display name.
        kind: CategoryKind of the row.
        indent_level: 0 for Root, 1 for section headers, 2+ for real categories.
        has_children: True for rollup rows.
        parent_index: Row index of the parent, None for Root.
        category_id: Store ID of the category, None for synthetic rows.
        budget: Budgeted amounts.
        actual: Actual amounts.
    """

    short_name: str
    full_name: str
    kind: CategoryKind
    indent_level: int
    has_children: bool
    parent_index: Optional[int] = None
    category_id: Optional[int] = None
    budget: Ledger = field(default_factory=Ledger)
    actual: Ledger = field(default_factory=Ledger)

    @property
    def key(self):
        return (self.full_name, self.kind)

    @property
    def is_synthetic(self) -> bool:
        return self.category_id is None

    @property
    def budget_total(self) -> int:
        return self.budget.total

    @property
    def actual_total(self) -> int:
        return self.actual.total

    def budget_month(self, month: int) -> int:
        return self.budget.get(month)

    def actual_month(self, month: int) -> int:
        return self.actual.get(month)

    def set_budget_month(self, tree: "CategoryTree", month: int, value: int) -> None:
        """Set the budget for one month and update every ancestor.

        Args:
            tree: CategoryTree owning this node, used to resolve parents.
            month: Month to set (1-12).
            value: New budget amount in minor units.

        Raises:
            ValueError: If this node is a rollup or month is out of range.
        """
        if self.has_children:
            raise ValueError(
                f"Category '{self.full_name}' has sub-categories; "
                "its budget is a rollup and cannot be set directly"
            )
        check_month(month)
        self._store_budget(tree, month, value)

    def _store_budget(self, tree: "CategoryTree", month: int, value: int) -> None:
        delta = self.budget.set(month, value)
        if self.parent_index is None:
            return

        parent = tree.find_by_index(self.parent_index)
        if parent is None:
            tree.diagnostics.orphan_propagation(self, "budget", month)
            return

        # Expenses reduce the Income-Expenses figure
        if parent.kind is CategoryKind.ROOT and self.kind is CategoryKind.EXPENSE:
            delta = -delta

        parent._store_budget(tree, month, parent.budget.get(month) + delta)

    def propagate_actuals(self, tree: "CategoryTree", deltas: Dict[int, int]) -> None:
        """Add this node's actual deltas to every ancestor.

        Below the Root every parent receives the plain sum of its children.
        The Root adds Income and subtracts Expense; the rule is evaluated
        again at each level by the kind of the node directly below the parent.

        Args:
            tree: CategoryTree owning this node.
            deltas: Mapping of month (1-12) to actual delta.
        """
        child = self
        while child.parent_index is not None:
            parent = tree.find_by_index(child.parent_index)
            if parent is None:
                tree.diagnostics.orphan_propagation(child, "actual")
                return

            sign = 1
            if parent.kind is CategoryKind.ROOT and child.kind is CategoryKind.EXPENSE:
                sign = -1

            for month, delta in deltas.items():
                parent.actual.add(month, sign * delta)

            child = parent
