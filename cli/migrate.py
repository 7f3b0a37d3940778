#!/usr/bin/env python3

import sqlite3
import sys
from logger import get_logger

logger = get_logger()


def cmd_status(args, db_manager):
    """Show which migrations are applied and how much data is stored."""
    if not db_manager.get_db_path().exists():
        logger.info(
            "Database does not exist. Run 'python -m cli migrate apply' to create it."
        )
        return

    available = db_manager.available_migrations()
    if not available:
        logger.info("No migrations found.")
        return

    applied = db_manager.applied_migrations()

    logger.info("Migration Status:")
    logger.info("================")
    for migration in available:
        status_text = "APPLIED" if migration in applied else "PENDING"
        logger.info(f"{migration}: {status_text}")

    logger.info(f"\nApplied: {len(applied)} of {len(available)}")

    counts = db_manager.row_counts()
    if counts:
        logger.info("\nStored rows:")
        for table, count in counts.items():
            logger.info(f"  {table:<14} {count}")


def cmd_apply(args, db_manager):
    """Apply pending migrations."""
    pending = db_manager.pending_migrations()
    if not pending:
        logger.info("No pending migrations.")
        return

    logger.info(f"Applying {len(pending)} migration(s)...")
    try:
        applied = db_manager.apply_pending()
    except sqlite3.Error:
        sys.exit(1)

    logger.info(f"Successfully applied {len(applied)} migration(s).")


def setup_parser(subparsers):
    """Setup migrate subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "migrate",
        help="Database migrations",
        description="Create and upgrade the budget report database",
    )

    migrate_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available migration commands",
        dest="subcommand",
        required=True,
    )

    status_parser = migrate_subparsers.add_parser(
        "status", help="Show migration status and stored row counts"
    )
    status_parser.set_defaults(func=cmd_status)

    apply_parser = migrate_subparsers.add_parser(
        "apply", help="Apply pending migrations"
    )
    apply_parser.set_defaults(func=cmd_apply)
