"""Actual amounts for leaf categories, aggregated by month from transactions."""

from datetime import date
from typing import Dict, Iterable

from dateutil.relativedelta import relativedelta

from models.category_node import CategoryKind, CategoryNode, check_month
from models.transaction import Transaction, date_to_int
from rollup.diagnostics import Diagnostics
from logger import get_logger

logger = get_logger()


def date_window(year: int, start_month: int, month_count: int):
    """Return the [start, end) YYYYMMDD window for a reporting range.

    The end is the first day after the last month, clamped to January 1st
    of the following year.
    """
    check_month(start_month)
    start = date(year, start_month, 1)
    end = min(start + relativedelta(months=month_count), date(year + 1, 1, 1))
    return date_to_int(start), date_to_int(end)


class TransactionAggregator:
    """Seeds leaf actual ledgers from transactions.

    Args:
        diagnostics: Where out of range months are reported.
    """

    def __init__(self, diagnostics: Diagnostics):
        self.diagnostics = diagnostics

    def aggregate(
        self,
        node: CategoryNode,
        transactions: Iterable[Transaction],
        year: int,
        start_month: int,
        month_count: int,
    ) -> Dict[int, int]:
        """Add matching transactions to the node's actual ledger.

        Income categories subtract each transaction's category value, every
        other kind adds it, so both show as positive amounts in normal use.

        Args:
            node: Leaf node to seed.
            transactions: Candidate transactions; non-matching ones are ignored.
            year: Reporting year.
            start_month: First reporting month (1-12).
            month_count: Number of reporting months.

        Returns:
            Mapping of month to the delta added to the node.
        """
        start, end = date_window(year, start_month, month_count)
        deltas: Dict[int, int] = {}

        for transaction in transactions:
            if transaction.category_id != node.category_id:
                continue
            if not start <= transaction.date_int < end:
                continue

            month = (transaction.date_int // 100) % 100
            if not 1 <= month <= 12:
                self.diagnostics.month_out_of_range(month, transaction.id)
                continue

            if node.kind is CategoryKind.INCOME:
                value = -transaction.category_value
            else:
                value = transaction.category_value

            node.actual.add(month, value)
            deltas[month] = deltas.get(month, 0) + value

        if deltas:
            logger.debug(
                f"Aggregated {sum(deltas.values())} over {len(deltas)} month(s) "
                f"for '{node.full_name}'"
            )
        return deltas

    def seed_and_propagate(
        self,
        tree,
        node: CategoryNode,
        transactions: Iterable[Transaction],
        year: int,
        start_month: int,
        month_count: int,
    ) -> Dict[int, int]:
        """Aggregate a leaf and push the result to all of its ancestors."""
        deltas = self.aggregate(node, transactions, year, start_month, month_count)
        if deltas:
            node.propagate_actuals(tree, deltas)
        return deltas
