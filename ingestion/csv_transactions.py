import csv
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Optional, TextIO

from models.transaction import Transaction

logger = logging.getLogger(__name__)

_CSV_HEADERS = ["Date", "Category", "Amount", "Description"]


def parse_amount(amount_str: str) -> int:
    """Convert a decimal amount such as "-1,234.56" to minor units.

    Raises:
        ValueError: If the amount is not a number or has more than two decimals.
    """
    cleaned = amount_str.strip().strip('"').replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Invalid amount '{amount_str}'")

    minor = amount * 100
    if minor != minor.to_integral_value():
        raise ValueError(f"Amount '{amount_str}' has more than two decimal places")
    return int(minor)


def row_to_transaction(
    row: List[str], resolve_category: Callable[[str], Optional[int]]
) -> Transaction:
    """Convert a CSV row to a Transaction object.

    Args:
        row: CSV row matching _CSV_HEADERS structure
        resolve_category: Maps a full category name to its ID, or None if unknown

    Returns:
        Transaction object

    Raises:
        ValueError: If required fields are missing or invalid
    """
    raw_line = ",".join(row)
    date_str = row[0].strip()
    category_name = row[1].strip().strip('"')
    amount_str = row[2].strip().strip('"')
    description = row[3].strip().strip('"') if len(row) > 3 else ""

    if not date_str or not category_name or not amount_str:
        raise ValueError(
            f"Missing required fields: date='{date_str}', "
            f"category='{category_name}', amount='{amount_str}'"
        )

    transaction_date = datetime.strptime(date_str, "%Y-%m-%d").date()
    amount = parse_amount(amount_str)

    category_id = resolve_category(category_name)
    if category_id is None:
        raise ValueError(f"Unknown category '{category_name}'")

    return Transaction.create_with_checksum(
        raw_data=raw_line,
        category_id=category_id,
        transaction_date=transaction_date,
        amount=amount,
        description=description,
    )


def ingest(
    source: TextIO, resolve_category: Callable[[str], Optional[int]]
) -> List[Transaction]:
    """
    Ingest transactions from a CSV file.

    Expected format:
    - Header row: Date,Category,Amount,Description
    - Transaction rows: 2025-03-01,Auto:Fuel,-45.10,SHELL

    Amounts are signed as seen by the bank account: money in is positive,
    money out is negative.

    Raises:
        ValueError: If the CSV header doesn't match the expected format
    """
    transactions = []
    reader = csv.reader(source)

    header = next(reader, None)
    if header is None or [h.strip() for h in header] != _CSV_HEADERS:
        raise ValueError(
            f"Unexpected header row: {header}\nExpected: {_CSV_HEADERS}"
        )

    line_num = 1
    for row in reader:
        line_num += 1

        if not row or len(row) < 3:
            logger.warning(f"Skipping malformed line {line_num}: {row}")
            continue

        try:
            transactions.append(row_to_transaction(row, resolve_category))
        except ValueError as e:
            logger.error(f"Error processing line {line_num}: {row} - {e}")
            continue

    logger.info(f"Successfully ingested {len(transactions)} transactions")
    return transactions
