"""Report parameters: budget, period and display options."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

from models.category_node import check_month

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

# Column header suffixes in subtotal-by-month mode, the last one is the grand total
SHORT_MONTH_NAMES = [
    "Jan",
    "Feb",
    "March",
    "April",
    "May",
    "June",
    "July",
    "Aug",
    "Sept",
    "Oct",
    "Nov",
    "Dec",
    "Total",
]

UNSAVED_REPORT = "<Report Not Memorized>"


class Period(str, Enum):
    AUTOMATIC = "automatic"
    THIS_YEAR = "this-year"
    LAST_YEAR = "last-year"
    THIS_MONTH = "this-month"
    LAST_MONTH = "last-month"
    CUSTOM = "custom"


class SubtotalBy(str, Enum):
    NONE = "none"
    MONTH = "month"


@dataclass
class Report:
    """Parameters of one budget report.

    Attributes:
        budget_name: Name of the budget to compare against.
        period: Reporting period selector.
        year: Reporting year.
        start_month: First month of the report (1-12).
        end_month: Last month of the report (1-12, inclusive).
        subtotal_by: Whether value columns are expanded per month.
        subtotal_parents: Whether rollup rows show their totals.
        name: Report name.
    """

    budget_name: str
    period: Period = Period.AUTOMATIC
    year: int = 0
    start_month: int = 1
    end_month: int = 12
    subtotal_by: SubtotalBy = SubtotalBy.NONE
    subtotal_parents: bool = True
    name: str = UNSAVED_REPORT

    @property
    def month_count(self) -> int:
        return self.end_month - self.start_month + 1

    def months(self) -> range:
        return range(self.start_month, self.end_month + 1)

    def resolve_period(self, today: Optional[date] = None) -> "Report":
        """Set year, start and end month from the period selector.

        Args:
            today: Reference date, defaults to date.today().

        Returns:
            This report, for chaining.

        Raises:
            ValueError: If a custom range is not within one year.
        """
        today = today or date.today()
        this_year = today.year
        this_month = today.month

        if self.period == Period.AUTOMATIC:
            self.year, self.start_month, self.end_month = this_year, 1, this_month
        elif self.period == Period.THIS_YEAR:
            self.year, self.start_month, self.end_month = this_year, 1, 12
        elif self.period == Period.LAST_YEAR:
            self.year, self.start_month, self.end_month = this_year - 1, 1, 12
        elif self.period == Period.THIS_MONTH:
            self.year, self.start_month, self.end_month = (
                this_year,
                this_month,
                this_month,
            )
        elif self.period == Period.LAST_MONTH:
            last = today - relativedelta(months=1)
            self.year, self.start_month, self.end_month = (
                last.year,
                last.month,
                last.month,
            )
        else:
            check_month(self.start_month)
            check_month(self.end_month)
            if self.start_month > self.end_month:
                raise ValueError(
                    f"Start month {self.start_month} is after end month {self.end_month}"
                )
            if not self.year:
                self.year = this_year

        return self

    def date_range_label(self) -> str:
        """Human readable range, e.g. "January 2025 - March 2025"."""
        return (
            f"{MONTH_NAMES[self.start_month - 1]} {self.year} - "
            f"{MONTH_NAMES[self.end_month - 1]} {self.year}"
        )
