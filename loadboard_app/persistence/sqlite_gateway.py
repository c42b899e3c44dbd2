"""SQLite document persistence gateway."""

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Optional

from ..data.models import AppState
from ..errors import MalformedStoreError
from ..utils.time import format_timestamp, utc_now
from .gateway import PersistenceGateway

_DOCUMENT_ID = 1


class SqliteDocumentGateway(PersistenceGateway):
    """Stores the state document as a single row of an SQLite table."""

    def __init__(
        self,
        db_path: str = "loadboard.db",
        seed_factory: Optional[Callable[[], AppState]] = None,
        seed_on_empty: bool = True
    ):
        super().__init__("sqlite", seed_factory=seed_factory, seed_on_empty=seed_on_empty)
        self.db_path = Path(db_path)
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS app_state (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    document TEXT,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def _get_connection(self):
        """Get database connection with proper error handling."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", gateway=self.name, error=str(e))
            raise
        finally:
            if conn:
                conn.close()

    def _read_document(self) -> Optional[str]:
        with self._lock:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT document FROM app_state WHERE id = ?", (_DOCUMENT_ID,)
                ).fetchone()

        if row is None:
            return None
        if row["document"] is None:
            raise MalformedStoreError("Stored state row has no document", reason="null_document")
        return row["document"]

    def _write_document(self, document: str) -> None:
        now = format_timestamp(utc_now())
        with self._lock:
            with self._get_connection() as conn:
                conn.execute("""
                    INSERT INTO app_state (id, document, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        document = excluded.document,
                        updated_at = excluded.updated_at
                """, (_DOCUMENT_ID, document, now))
                conn.commit()

    def get_updated_at(self) -> Optional[str]:
        """When the document was last written, None if never."""
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT updated_at FROM app_state WHERE id = ?", (_DOCUMENT_ID,)
                ).fetchone()
                return row["updated_at"] if row else None

        except Exception as e:
            self.logger.error("Failed to read update time", gateway=self.name, error=str(e))
            return None

    def health_check(self) -> bool:
        try:
            with self._get_connection() as conn:
                conn.execute("SELECT 1").fetchone()
            return True

        except Exception as e:
            self.logger.warning("Health check failed", gateway=self.name, error=str(e))
            return False
