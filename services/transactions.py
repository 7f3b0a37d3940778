"""Transaction service for database operations."""

from typing import List, Optional
from models.transaction import Transaction

_TRANSACTION_FIELDS = "id, category_id, date_int, amount, description, memo"

_TRANSACTION_INSERT_PLACEHOLDERS = (
    f"({', '.join(['?'] * len(_TRANSACTION_FIELDS.split(',')))})"
)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    @staticmethod
    def _to_row(t: Transaction) -> tuple:
        return (t.id, t.category_id, t.date_int, t.amount, t.description, t.memo)

    @staticmethod
    def _row_to_transaction(row) -> Transaction:
        return Transaction(
            id=row[0],
            category_id=row[1],
            date_int=row[2],
            amount=row[3],
            description=row[4],
            memo=row[5],
        )

    def create(self, transaction: Transaction) -> Transaction:
        """Create a single transaction in the database.

        Args:
            transaction: Transaction object to insert.

        Returns:
            The same Transaction object (already has its ID from checksum).

        Raises:
            Exception: If transaction creation fails (e.g., duplicate ID, unknown category).
        """
        with self.db_manager.connect() as conn:
            conn.execute(
                f"""
                INSERT INTO transactions ({_TRANSACTION_FIELDS})
                VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                """,
                self._to_row(transaction),
            )
            conn.commit()

        return transaction

    def bulk_create(self, transactions: List[Transaction]) -> int:
        """Create multiple transactions in a single database transaction.

        Transactions whose ID already exists are skipped.

        Args:
            transactions: List of Transaction objects to insert.

        Returns:
            Number of transactions inserted.
        """
        if not transactions:
            return 0

        with self.db_manager.connect() as conn:
            before = conn.total_changes
            conn.executemany(
                f"""
                INSERT OR IGNORE INTO transactions ({_TRANSACTION_FIELDS})
                VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                """,
                [self._to_row(t) for t in transactions],
            )
            conn.commit()
            return conn.total_changes - before

    def find(self, transaction_id: str) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Args:
            transaction_id: The transaction checksum ID.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_TRANSACTION_FIELDS} FROM transactions WHERE id = ?",
                (transaction_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def find_by_category(self, category_id: int) -> List[Transaction]:
        """Get all transactions for a category, ordered by date (oldest first)."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_FIELDS}
                FROM transactions
                WHERE category_id = ?
                ORDER BY date_int, id
                """,
                (category_id,),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def find_by_category_and_range(
        self, category_id: int, start_date_int: int, end_date_int: int
    ) -> List[Transaction]:
        """Get a category's transactions within a date window.

        Args:
            category_id: The category ID to filter by.
            start_date_int: First date included, YYYYMMDD.
            end_date_int: First date excluded, YYYYMMDD.

        Returns:
            List of Transaction objects ordered by date (oldest first).
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_FIELDS}
                FROM transactions
                WHERE category_id = ?
                  AND date_int >= ? AND date_int < ?
                ORDER BY date_int, id
                """,
                (category_id, start_date_int, end_date_int),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]
