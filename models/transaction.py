from dataclasses import dataclass
from datetime import date
from typing import Optional
import hashlib


def date_to_int(value: date) -> int:
    """Convert a date to its YYYYMMDD integer form."""
    return value.year * 10000 + value.month * 100 + value.day


def int_to_date(value: int) -> date:
    """Convert a YYYYMMDD integer to a date."""
    return date(value // 10000, (value // 100) % 100, value % 100)


@dataclass
class Transaction:
    id: str  # checksum of raw transaction data
    category_id: int
    date_int: int  # YYYYMMDD
    amount: int  # minor units, signed as seen by the bank account
    description: str = ""
    memo: Optional[str] = None

    @property
    def transaction_date(self) -> date:
        return int_to_date(self.date_int)

    @property
    def category_value(self) -> int:
        """Amount booked against the category (the other leg of the entry)."""
        return -self.amount

    @classmethod
    def create_with_checksum(
        cls,
        raw_data: str,
        category_id: int,
        transaction_date: date,
        amount: int,
        description: str = "",
        memo: Optional[str] = None,
    ) -> "Transaction":
        """Create a Transaction with auto-generated checksum ID."""
        transaction_id = hashlib.sha256(raw_data.encode("utf-8")).hexdigest()
        return cls(
            id=transaction_id,
            category_id=category_id,
            date_int=date_to_int(transaction_date),
            amount=amount,
            description=description,
            memo=memo,
        )

    def to_dict(self) -> dict:
        """Convert transaction to dictionary for database storage."""
        return {
            "id": self.id,
            "category_id": self.category_id,
            "date_int": self.date_int,
            "amount": self.amount,
            "description": self.description,
            "memo": self.memo,
        }
