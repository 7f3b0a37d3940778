"""Helper utilities for tests."""

from pathlib import Path
import sqlite3

from models.category import CategoryDescriptor
from models.category_node import CategoryKind, FIRST_MONTH, LAST_MONTH
from rollup.category_tree import CategoryTree


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        with open(migration_file, "r") as f:
            conn.executescript(f.read())

    conn.commit()


def build_tree(income=(), expense=()) -> CategoryTree:
    """Build a tree with the standard synthetic rows.

    Args:
        income: (full_name, has_children) pairs in pre-order.
        expense: (full_name, has_children) pairs in pre-order.

    Real categories get category IDs 100, 101, ... in insertion order.
    """
    tree = CategoryTree()
    next_id = 100

    tree.add("Income-Expenses", CategoryKind.ROOT, 0)
    for kind, header, categories in (
        (CategoryKind.INCOME, "Income", income),
        (CategoryKind.EXPENSE, "Expenses", expense),
    ):
        tree.add(header, kind, 1)
        for full_name, has_children in categories:
            tree.add_category(
                CategoryDescriptor(next_id, full_name, kind, has_children)
            )
            next_id += 1

    return tree


def assert_rollups_consistent(tree: CategoryTree) -> None:
    """Check every rollup row below Root against its direct children.

    Also checks the Root row, which adds Income and subtracts Expense, and
    that every ledger total equals the sum of its months.
    """
    for index, node in enumerate(tree):
        assert node.budget.is_consistent(), node.full_name
        assert node.actual.is_consistent(), node.full_name

        children = tree.children_of(index)
        if not node.has_children or not children:
            continue

        for month in range(FIRST_MONTH, LAST_MONTH + 1):
            for ledger in ("budget", "actual"):
                expected = 0
                for child in children:
                    value = getattr(child, ledger).get(month)
                    if node.kind is CategoryKind.ROOT and child.kind is CategoryKind.EXPENSE:
                        value = -value
                    expected += value
                assert getattr(node, ledger).get(month) == expected, (
                    f"{ledger} month {month} of '{node.full_name}'"
                )
