"""Budget service for database operations."""

from typing import Dict, List, Optional
from models.budget import Budget, BudgetItem
from models.category_node import check_month


class BudgetService:
    """Service for managing budgets and their monthly amounts."""

    def __init__(self, db_manager):
        """Initialize the budget service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Budget]:
        """Get all budgets, ordered by name."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute("SELECT id, name FROM budgets ORDER BY name")
            return [Budget(id=row[0], name=row[1]) for row in cursor.fetchall()]

    def find_by_name(self, name: str) -> Optional[Budget]:
        """Get a budget by name.

        Returns:
            Budget object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name FROM budgets WHERE name = ?", (name,)
            )
            row = cursor.fetchone()

            if row:
                return Budget(id=row[0], name=row[1])
            return None

    def create(self, name: str) -> Budget:
        """Create a new budget.

        Raises:
            sqlite3.IntegrityError: If a budget with this name exists.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("INSERT INTO budgets (name) VALUES (?)", (name,))
            conn.commit()
            return Budget(id=cursor.lastrowid, name=name)

    def set_amount(
        self, budget_id: int, category_id: int, year: int, month: int, amount: int
    ) -> BudgetItem:
        """Create or replace the budgeted amount for a category and month.

        Raises:
            ValueError: If month is not in 1..12.
        """
        check_month(month)
        with self.db_manager.connect() as conn:
            conn.execute(
                """
                INSERT INTO budget_items (budget_id, category_id, year, month, amount)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT (budget_id, category_id, year, month)
                DO UPDATE SET amount = excluded.amount
                """,
                (budget_id, category_id, year, month, amount),
            )
            conn.commit()

        return BudgetItem(budget_id, category_id, year, month, amount)

    def get_amount(
        self, budget_id: int, category_id: int, year: int, month: int
    ) -> Optional[int]:
        """Get the budgeted amount for a category and month.

        Returns:
            The amount in minor units, or None if nothing was budgeted.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT amount FROM budget_items
                WHERE budget_id = ? AND category_id = ? AND year = ? AND month = ?
                """,
                (budget_id, category_id, year, month),
            )
            row = cursor.fetchone()
            return row[0] if row else None

    def amounts_for(
        self, budget_id: int, category_id: int, year: int
    ) -> Dict[int, int]:
        """Get all budgeted amounts of a category in one year, keyed by month."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT month, amount FROM budget_items
                WHERE budget_id = ? AND category_id = ? AND year = ?
                ORDER BY month
                """,
                (budget_id, category_id, year),
            )
            return {row[0]: row[1] for row in cursor.fetchall()}
