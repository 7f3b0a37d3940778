"""Projection of ledger state into report table cells.

Column 0 is the category name. The remaining columns come in
Budget/Actual/Difference triples: one triple when not subtotaling, or one
triple per reporting month followed by a grand total triple in
subtotal-by-month mode.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from models.category_node import CategoryKind, CategoryNode
from models.report import SHORT_MONTH_NAMES, Report, SubtotalBy

COLUMN_NAMES = ["Category", "Budget", "Actual", "Difference"]

BUDGET = 0
ACTUAL = 1
DIFFERENCE = 2

NAME_MARGIN = "    "
INDENT_WIDTH = 6

Cell = Union[str, int, None]


@dataclass
class ColumnSpec:
    """What a value column shows.

    Attributes:
        quantity: BUDGET, ACTUAL or DIFFERENCE.
        month: Month shown (1-12), or None for the total.
    """

    quantity: int
    month: Optional[int]


def difference(kind: CategoryKind, budget: int, actual: int) -> int:
    """Positive when income beat its budget or spending stayed under it."""
    if kind is CategoryKind.EXPENSE:
        return budget - actual
    return actual - budget


class ReportProjection:
    """Translates a category tree into table cells for one report.

    Args:
        report: Report parameters (range, subtotal mode, parent totals).
    """

    def __init__(self, report: Report):
        self.report = report

    @property
    def by_month(self) -> bool:
        return self.report.subtotal_by == SubtotalBy.MONTH

    def column_count(self) -> int:
        if self.by_month:
            # Grand total triple after the per-month triples
            return self.report.month_count * 3 + 1 + 3
        return len(COLUMN_NAMES)

    def column_spec(self, column: int) -> ColumnSpec:
        """Describe value column `column` (1-based).

        Raises:
            IndexError: If column is 0 or past the last column.
        """
        if not 1 <= column < self.column_count():
            raise IndexError(f"Column {column} is not a value column")

        quantity = (column - 1) % 3
        if not self.by_month or column > self.report.month_count * 3:
            return ColumnSpec(quantity, None)
        return ColumnSpec(quantity, self.report.start_month + (column - 1) // 3)

    def column_name(self, column: int) -> str:
        if column == 0:
            return COLUMN_NAMES[0]

        spec = self.column_spec(column)
        name = COLUMN_NAMES[1 + spec.quantity]
        if self.by_month and spec.quantity == BUDGET:
            suffix = SHORT_MONTH_NAMES[12 if spec.month is None else spec.month - 1]
            return f"{name}: {suffix}"
        return name

    def column_names(self) -> List[str]:
        return [self.column_name(c) for c in range(self.column_count())]

    @staticmethod
    def category_label(node: CategoryNode) -> str:
        return NAME_MARGIN + " " * (node.indent_level * INDENT_WIDTH) + node.short_name

    def cell_value(self, node: CategoryNode, column: int) -> Cell:
        """Displayed value of a cell.

        Args:
            node: The row's node.
            column: Table column.

        Returns:
            The indented name for column 0, None for a blank cell, otherwise
            the amount in minor units.
        """
        if column == 0:
            return self.category_label(node)

        spec = self.column_spec(column)

        if node.has_children and not self.report.subtotal_parents:
            return None

        if spec.month is None:
            budget, actual = node.budget_total, node.actual_total
        else:
            budget = node.budget_month(spec.month)
            actual = node.actual_month(spec.month)

        if spec.quantity == BUDGET:
            return budget
        if spec.quantity == ACTUAL:
            return actual
        return difference(node.kind, budget, actual)

    def row(self, node: CategoryNode) -> List[Cell]:
        return [self.cell_value(node, c) for c in range(self.column_count())]

    def rows(self, tree) -> Iterator[List[Cell]]:
        for node in tree:
            yield self.row(node)
