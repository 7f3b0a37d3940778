"""Report service: builds category trees for budget reports and applies edits."""

from dataclasses import dataclass

from models.category_node import CategoryKind, CategoryNode
from models.report import Report
from rollup.aggregator import TransactionAggregator, date_window
from rollup.category_tree import (
    CategoryTree,
    DuplicateCategoryError,
    calc_indent_level,
)
from rollup.diagnostics import Diagnostics
from rollup.projection import ReportProjection
from logger import get_logger

logger = get_logger()

ROOT_NAME = "Income-Expenses"
INCOME_NAME = "Income"
EXPENSE_NAME = "Expenses"


@dataclass
class BudgetReport:
    """A built report: parameters, rows and what went wrong while building."""

    report: Report
    budget_id: int
    tree: CategoryTree
    diagnostics: Diagnostics
    projection: ReportProjection


class ReportService:
    """Service for building budget reports.

    Args:
        categories: CategoryService for the category hierarchy.
        budgets: BudgetService for budgeted amounts.
        transactions: TransactionService for actual amounts.
    """

    def __init__(self, categories, budgets, transactions):
        self.categories = categories
        self.budgets = budgets
        self.transactions = transactions

    def build(self, report: Report) -> BudgetReport:
        """Build a fresh category tree for a report.

        The report's period must already be resolved.

        Args:
            report: Report parameters.

        Returns:
            BudgetReport with a fully rolled up tree.

        Raises:
            ValueError: If the budget does not exist.
        """
        budget = self.budgets.find_by_name(report.budget_name)
        if budget is None:
            raise ValueError(f"Budget '{report.budget_name}' not found")

        logger.info(
            f"Building report for budget '{budget.name}', {report.date_range_label()}"
        )

        diagnostics = Diagnostics()
        tree = CategoryTree(diagnostics)
        aggregator = TransactionAggregator(diagnostics)

        tree.add(ROOT_NAME, CategoryKind.ROOT, 0)

        for kind, header in (
            (CategoryKind.INCOME, INCOME_NAME),
            (CategoryKind.EXPENSE, EXPENSE_NAME),
        ):
            tree.add(header, kind, 1)
            # Indent level of a rejected duplicate whose sub-categories are skipped
            rejected_level = None
            for descriptor in self.categories.walk(kind):
                level = calc_indent_level(descriptor.full_name)
                if rejected_level is not None:
                    if level > rejected_level:
                        diagnostics.skipped_under_duplicate(descriptor.full_name, kind)
                        continue
                    rejected_level = None

                try:
                    node = tree.add_category(descriptor)
                except DuplicateCategoryError:
                    diagnostics.duplicate_category(descriptor.full_name, kind)
                    rejected_level = level
                    continue

                if not node.has_children:
                    self._load_leaf(tree, node, aggregator, budget.id, report)

        logger.info(
            f"Built {tree.count()} rows with {len(diagnostics)} diagnostic(s)"
        )
        return BudgetReport(
            report=report,
            budget_id=budget.id,
            tree=tree,
            diagnostics=diagnostics,
            projection=ReportProjection(report),
        )

    def _load_leaf(self, tree, node: CategoryNode, aggregator, budget_id, report):
        amounts = self.budgets.amounts_for(budget_id, node.category_id, report.year)
        for month in report.months():
            amount = amounts.get(month)
            if amount is not None:
                node.set_budget_month(tree, month, amount)

        start, end = date_window(report.year, report.start_month, report.month_count)
        transactions = self.transactions.find_by_category_and_range(
            node.category_id, start, end
        )
        aggregator.seed_and_propagate(
            tree,
            node,
            transactions,
            report.year,
            report.start_month,
            report.month_count,
        )

    def update_budget(
        self, budget_report: BudgetReport, row: int, month: int, amount: int
    ) -> CategoryNode:
        """Change one budgeted amount, store it and roll it up.

        Args:
            budget_report: A report returned by build().
            row: Row index of a leaf category.
            month: Month to change; must be inside the report range.
            amount: New amount in minor units.

        Returns:
            The updated node.

        Raises:
            IndexError: If the row does not exist.
            ValueError: If the row cannot be budgeted or the month is outside the report.
        """
        node = budget_report.tree.get_by_index(row)
        report = budget_report.report

        if node.is_synthetic or node.has_children:
            raise ValueError(f"'{node.full_name}' is a rollup row and cannot be budgeted")
        if month not in report.months():
            raise ValueError(
                f"Month {month} is outside the report range "
                f"{report.start_month}-{report.end_month}"
            )

        self.budgets.set_amount(
            budget_report.budget_id, node.category_id, report.year, month, amount
        )
        node.set_budget_month(budget_report.tree, month, amount)
        logger.info(f"Budget for '{node.full_name}' month {month} set to {amount}")
        return node
