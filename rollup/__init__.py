"""Category rollup engine for budget reports."""

from rollup.aggregator import TransactionAggregator
from rollup.category_tree import CategoryTree, DuplicateCategoryError
from rollup.diagnostics import Diagnostics, DiagnosticKind
from rollup.parent_tracker import ParentTracker
from rollup.projection import ReportProjection

__all__ = [
    "CategoryTree",
    "DiagnosticKind",
    "Diagnostics",
    "DuplicateCategoryError",
    "ParentTracker",
    "ReportProjection",
    "TransactionAggregator",
]
