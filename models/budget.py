"""Budget models: named monthly budgets and their per-category amounts."""

from dataclasses import dataclass


@dataclass
class Budget:
    """A named monthly budget.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Budget name (unique), e.g. "Budget".
    """

    id: int
    name: str


@dataclass
class BudgetItem:
    """Budgeted amount for one category and month.

    Attributes:
        budget_id: ID of the budget this amount belongs to.
        category_id: ID of the budgeted category.
        year: Budget year, e.g. 2025.
        month: Budget month (1-12).
        amount: Budgeted amount in minor units.
    """

    budget_id: int
    category_id: int
    year: int
    month: int
    amount: int
