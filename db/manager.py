"""Database manager for SQLite connections, paths and schema migrations."""

import sqlite3
from contextlib import contextmanager
from typing import Dict, List, Set
from config import Config, get_migrations_dir
from logger import get_logger

logger = get_logger()

# Tables counted by `migrate status`
DATA_TABLES = ["categories", "budgets", "budget_items", "transactions"]


class DatabaseManager:
    """Manages database connections, paths and migrations.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Yields:
            sqlite3.Connection: Database connection with foreign keys enforced.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path)
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        finally:
            conn.close()

    def get_db_path(self):
        """Get the current database path."""
        return self.config.db_path

    def get_migrations_dir(self):
        """Get the migrations directory path."""
        return get_migrations_dir()

    def available_migrations(self) -> List[str]:
        """Migration file names in the order they apply."""
        migrations_dir = self.get_migrations_dir()
        if not migrations_dir.exists():
            return []
        return sorted(path.name for path in migrations_dir.glob("*.sql"))

    def applied_migrations(self) -> Set[str]:
        with self.connect() as conn:
            _ensure_migrations_table(conn)
            cursor = conn.execute("SELECT migration_file FROM schema_migrations")
            return {row[0] for row in cursor.fetchall()}

    def pending_migrations(self) -> List[str]:
        applied = self.applied_migrations()
        return [m for m in self.available_migrations() if m not in applied]

    def apply_pending(self) -> List[str]:
        """Apply every pending migration in order.

        Returns:
            Names of the migrations applied.

        Raises:
            sqlite3.Error: If a migration fails; it is rolled back and later
                migrations are not attempted.
        """
        pending = self.pending_migrations()
        with self.connect() as conn:
            for migration_file in pending:
                self._apply(conn, migration_file)
        return pending

    def _apply(self, conn, migration_file: str) -> None:
        with open(self.get_migrations_dir() / migration_file, "r") as f:
            sql = f.read()

        try:
            conn.executescript(sql)
            conn.execute(
                "INSERT INTO schema_migrations (migration_file) VALUES (?)",
                (migration_file,),
            )
            conn.commit()
            logger.info(f"Applied migration: {migration_file}")
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Error applying migration {migration_file}: {e}")
            raise

    def row_counts(self) -> Dict[str, int]:
        """Row count per data table, skipping tables not created yet."""
        counts = {}
        with self.connect() as conn:
            existing = {
                row[0]
                for row in conn.execute(
                    "SELECT name FROM sqlite_master WHERE type = 'table'"
                )
            }
            for table in DATA_TABLES:
                if table in existing:
                    counts[table] = conn.execute(
                        f"SELECT COUNT(*) FROM {table}"
                    ).fetchone()[0]
        return counts


def _ensure_migrations_table(conn):
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            migration_file TEXT PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    conn.commit()
