"""Diagnostics recorded while building or editing a category tree.

None of these stop a report build. Each one is logged and kept so the
caller can surface it after the build.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from logger import get_logger

logger = get_logger()


class DiagnosticKind(str, Enum):
    DUPLICATE_CATEGORY = "duplicate_category"
    MISSING_PARENT_FRAME = "missing_parent_frame"
    ORPHAN_PROPAGATION = "orphan_propagation"
    MONTH_OUT_OF_RANGE = "month_out_of_range"


@dataclass
class Diagnostic:
    kind: DiagnosticKind
    message: str


class Diagnostics:
    """Collector for build and edit diagnostics."""

    def __init__(self):
        self.items: List[Diagnostic] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.items if d.kind == kind]

    def record(self, kind: DiagnosticKind, message: str, error: bool = False):
        """Keep a diagnostic and log it.

        Args:
            kind: The diagnostic kind.
            message: Human readable description.
            error: Log at ERROR instead of WARNING.
        """
        self.items.append(Diagnostic(kind, message))
        if error:
            logger.error(message)
        else:
            logger.warning(message)

    def duplicate_category(self, full_name: str, kind) -> None:
        self.record(
            DiagnosticKind.DUPLICATE_CATEGORY,
            f"Duplicate {kind.value} category '{full_name}' skipped",
        )

    def skipped_under_duplicate(self, full_name: str, kind) -> None:
        self.record(
            DiagnosticKind.DUPLICATE_CATEGORY,
            f"{kind.value.capitalize()} category '{full_name}' skipped, "
            "its parent is a duplicate",
        )

    def missing_parent_frame(self, indent_level: int) -> None:
        self.record(
            DiagnosticKind.MISSING_PARENT_FRAME,
            f"No parent frame for indent level {indent_level}, keeping current parent",
            error=True,
        )

    def orphan_propagation(self, node, ledger: str, month: Optional[int] = None):
        where = f" month {month}" if month is not None else ""
        self.record(
            DiagnosticKind.ORPHAN_PROPAGATION,
            f"Parent row {node.parent_index} of '{node.full_name}' not found, "
            f"{ledger}{where} not propagated",
            error=True,
        )

    def month_out_of_range(self, month: int, transaction_id: str) -> None:
        self.record(
            DiagnosticKind.MONTH_OUT_OF_RANGE,
            f"Calculated month {month} out of range for transaction {transaction_id[:8]}, skipped",
        )
