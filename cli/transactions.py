#!/usr/bin/env python3

import sys
from datetime import datetime
from pathlib import Path
from ingestion.csv_transactions import ingest, parse_amount
from models.category_node import CategoryKind
from models.transaction import Transaction
from cli.report import format_amount
from logger import get_logger

logger = get_logger()


def _category_resolver(services):
    """Map full category names to IDs, caching lookups for one import."""
    cache = {}

    def resolve(full_name):
        if full_name not in cache:
            category = services.categories.find_by_name(full_name)
            cache[full_name] = category.id if category else None
        return cache[full_name]

    return resolve


def cmd_add(args, services):
    """Record a single transaction."""
    category = services.categories.find_by_name(args.category, CategoryKind(args.kind))
    if not category:
        logger.error(f"Category '{args.category}' ({args.kind}) not found.")
        sys.exit(1)

    try:
        transaction_date = datetime.strptime(args.date, "%Y-%m-%d").date()
        amount = parse_amount(args.amount)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    transaction = Transaction.create_with_checksum(
        raw_data=f"{args.date},{args.category},{args.amount},{args.description},"
        f"{datetime.now().isoformat()}",
        category_id=category.id,
        transaction_date=transaction_date,
        amount=amount,
        description=args.description,
    )
    services.transactions.create(transaction)
    logger.info(f"✓ Transaction recorded (ID: {transaction.id[:8]}...)")


def cmd_list(args, services):
    """List the transactions of a category."""
    category = services.categories.find_by_name(args.category)
    if not category:
        logger.error(f"Category '{args.category}' not found.")
        sys.exit(1)

    transactions = services.transactions.find_by_category(category.id)
    if not transactions:
        logger.info("No transactions found.")
        return

    logger.info(f"\nTransactions for {args.category}:")
    logger.info("=" * 80)
    for t in transactions:
        logger.info(
            f"{t.transaction_date.isoformat()}  {format_amount(t.amount):>14}  {t.description}"
        )
    logger.info(f"\nTotal transactions: {len(transactions)}")


def cmd_ingest(args, services):
    """Import transactions from a CSV file."""
    csv_path = Path(args.csv_file)
    if not csv_path.exists():
        logger.error(f"File not found: {args.csv_file}")
        sys.exit(1)

    try:
        with open(csv_path, "r", newline="") as f:
            transactions = ingest(f, _category_resolver(services))
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"\nParsed {len(transactions)} transactions from CSV")
    if not transactions:
        logger.info("No transactions to import.")
        return

    inserted_count = services.transactions.bulk_create(transactions)
    logger.info(f"✓ Successfully inserted {inserted_count} transactions")

    if inserted_count < len(transactions):
        skipped = len(transactions) - inserted_count
        logger.info(f"  ({skipped} duplicate transaction(s) skipped)")


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Record and import transactions",
        description="Record, list and import categorized transactions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    add_parser = transactions_subparsers.add_parser(
        "add", help="Record a single transaction"
    )
    add_parser.add_argument("date", help="Transaction date, YYYY-MM-DD")
    add_parser.add_argument("category", help="Full category name, e.g. Auto:Fuel")
    add_parser.add_argument(
        "amount", help="Signed amount as seen by the bank, e.g. -45.10"
    )
    add_parser.add_argument("--description", default="", help="Description")
    add_parser.add_argument(
        "--kind",
        choices=[CategoryKind.INCOME.value, CategoryKind.EXPENSE.value],
        default=CategoryKind.EXPENSE.value,
        help="Category kind (default: expense)",
    )
    add_parser.set_defaults(func=cmd_add)

    list_parser = transactions_subparsers.add_parser(
        "list", help="List the transactions of a category"
    )
    list_parser.add_argument("category", help="Full category name")
    list_parser.set_defaults(func=cmd_list)

    ingest_parser = transactions_subparsers.add_parser(
        "ingest", help="Import transactions from a CSV file"
    )
    ingest_parser.add_argument(
        "csv_file", help="CSV file with Date,Category,Amount,Description columns"
    )
    ingest_parser.set_defaults(func=cmd_ingest)
