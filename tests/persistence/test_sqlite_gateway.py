"""Tests for the SQLite document gateway."""

import sqlite3

from loadboard_app.data.models import AppState
from loadboard_app.data.seed import default_app_state
from loadboard_app.persistence.sqlite_gateway import SqliteDocumentGateway


class TestSqliteDocumentGateway:
    """Test SqliteDocumentGateway."""

    def setup_method(self):
        self.db_path = None

    def _gateway(self, tmp_path, **kwargs):
        self.db_path = tmp_path / "board.db"
        return SqliteDocumentGateway(str(self.db_path), **kwargs)

    def test_schema_created(self, tmp_path):
        self._gateway(tmp_path)

        with sqlite3.connect(self.db_path) as conn:
            tables = {row[0] for row in conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            )}
        assert "app_state" in tables

    def test_round_trip(self, tmp_path, sample_state):
        gateway = self._gateway(tmp_path)
        gateway.save(sample_state)

        assert gateway.load() == sample_state

    def test_save_replaces_single_row(self, tmp_path, sample_state):
        gateway = self._gateway(tmp_path)
        gateway.save(sample_state)
        gateway.save(AppState())

        with sqlite3.connect(self.db_path) as conn:
            count = conn.execute("SELECT COUNT(*) FROM app_state").fetchone()[0]
        assert count == 1
        assert gateway.load() == AppState()

    def test_empty_table_seeds(self, tmp_path):
        gateway = self._gateway(tmp_path)

        assert gateway.get_updated_at() is None
        assert gateway.load() == default_app_state()
        assert gateway.get_updated_at() is not None

    def test_null_document_seeds(self, tmp_path):
        gateway = self._gateway(tmp_path)
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("INSERT INTO app_state (id, document, updated_at) VALUES (1, NULL, 'x')")
            conn.commit()

        assert gateway.load() == default_app_state()

    def test_health_check(self, tmp_path):
        assert self._gateway(tmp_path).health_check()
