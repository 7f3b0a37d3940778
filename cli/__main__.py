#!/usr/bin/env python3
"""
Budget Report CLI - Compare budgeted and actual amounts by category.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   Manage income and expense categories
    budgets      Manage budgets and budgeted amounts
    transactions Record and import transactions
    report       Show budget reports and edit budget amounts
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli categories seed
    python -m cli budgets create Budget
    python -m cli budgets set Budget Auto:Fuel 2025 3 120.00
    python -m cli transactions ingest march.csv
    python -m cli report show --period this-year --subtotal month
"""

import sys
import argparse
from cli import budgets, categories, migrate, report, transactions
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Budget Report - Budget versus actual by category",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    categories.setup_parser(subparsers)
    budgets.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    report.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            if args.command == "migrate":
                # Migrate commands need db_manager for raw database operations
                args.func(args, DatabaseManager(config))
            else:
                args.func(args, Services(config))
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
