from db.manager import DatabaseManager


class TestDatabaseManager:
    """Tests for DatabaseManager migrations against a file database."""

    def test_all_migrations_pending_on_new_database(self, test_config):
        manager = DatabaseManager(test_config)

        assert manager.applied_migrations() == set()
        assert manager.pending_migrations() == manager.available_migrations()
        assert "001_initial_schema.sql" in manager.available_migrations()

    def test_apply_pending(self, test_config):
        manager = DatabaseManager(test_config)

        applied = manager.apply_pending()

        assert applied == manager.available_migrations()
        assert manager.pending_migrations() == []
        assert manager.apply_pending() == []
        assert test_config.db_path.exists()

    def test_row_counts(self, test_config):
        manager = DatabaseManager(test_config)
        assert manager.row_counts() == {}

        manager.apply_pending()
        with manager.connect() as conn:
            conn.execute("INSERT INTO budgets (name) VALUES ('Budget')")
            conn.commit()

        counts = manager.row_counts()

        assert counts["budgets"] == 1
        assert counts["transactions"] == 0
