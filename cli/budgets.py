#!/usr/bin/env python3

import sys
import sqlite3
from ingestion.csv_transactions import parse_amount
from models.category_node import CategoryKind
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all budgets."""
    budgets = services.budgets.find_all()

    if not budgets:
        logger.info("No budgets found.")
        return

    logger.info("\nBudgets:")
    logger.info("=" * 80)
    for budget in budgets:
        logger.info(f"{budget.id:>5}  {budget.name}")


def cmd_create(args, services):
    """Create a new budget."""
    try:
        budget = services.budgets.create(args.name)
    except sqlite3.IntegrityError:
        logger.error(f"Budget '{args.name}' already exists.")
        sys.exit(1)

    logger.info(f"✓ Budget '{budget.name}' created with ID: {budget.id}")


def cmd_set(args, services):
    """Set the budgeted amount for a leaf category and month."""
    budget = services.budgets.find_by_name(args.budget)
    if not budget:
        logger.error(f"Budget '{args.budget}' not found.")
        sys.exit(1)

    category = services.categories.find_by_name(args.category, CategoryKind(args.kind))
    if not category:
        logger.error(f"Category '{args.category}' ({args.kind}) not found.")
        sys.exit(1)

    if services.categories.children_of(category.id):
        logger.error(
            f"Category '{args.category}' has sub-categories; budget its children instead."
        )
        sys.exit(1)

    try:
        amount = parse_amount(args.amount)
        services.budgets.set_amount(
            budget.id, category.id, args.year, args.month, amount
        )
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(
        f"✓ {args.category} {args.year}-{args.month:02d}: {args.amount} ({budget.name})"
    )


def setup_parser(subparsers):
    """Setup budgets subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "budgets",
        help="Manage budgets",
        description="Create budgets and set budgeted amounts",
    )

    budgets_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available budget commands",
        dest="subcommand",
        required=True,
    )

    list_parser = budgets_subparsers.add_parser("list", help="List all budgets")
    list_parser.set_defaults(func=cmd_list)

    create_parser = budgets_subparsers.add_parser("create", help="Create a budget")
    create_parser.add_argument("name", help="Budget name")
    create_parser.set_defaults(func=cmd_create)

    set_parser = budgets_subparsers.add_parser(
        "set", help="Set a budgeted amount for a category and month"
    )
    set_parser.add_argument("budget", help="Budget name")
    set_parser.add_argument("category", help="Full category name, e.g. Auto:Fuel")
    set_parser.add_argument("year", type=int, help="Budget year")
    set_parser.add_argument("month", type=int, help="Budget month (1-12)")
    set_parser.add_argument("amount", help="Amount, e.g. 120.00")
    set_parser.add_argument(
        "--kind",
        choices=[CategoryKind.INCOME.value, CategoryKind.EXPENSE.value],
        default=CategoryKind.EXPENSE.value,
        help="Category kind (default: expense)",
    )
    set_parser.set_defaults(func=cmd_set)
