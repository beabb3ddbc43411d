"""Preference database — one SQLite file per project root.

The editor keeps a single table, ``app_settings``, holding string pairs:
last scope path, the include-derived flag and per-type column widths.
Schema changes are applied as numbered migrations tracked in
``PRAGMA user_version``.
"""

import logging
import sqlite3
from pathlib import Path

from asset_editor.constants import DB_FILENAME

logger = logging.getLogger(__name__)

# Index i upgrades the schema from version i to i + 1.
_MIGRATIONS: list[str] = [
    """
    CREATE TABLE IF NOT EXISTS app_settings (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """,
]

SCHEMA_VERSION = len(_MIGRATIONS)

EXPECTED_TABLES = [
    "app_settings",
]


class DatabaseManager:
    """Owns the preference database connection for one project."""

    def __init__(self, db_path: Path | str | None = None):
        self._path = Path(db_path) if db_path is not None else Path.cwd() / DB_FILENAME
        self._conn: sqlite3.Connection | None = None

    @property
    def db_path(self) -> Path:
        return self._path

    @property
    def schema_version(self) -> int:
        return self.connect().execute("PRAGMA user_version").fetchone()[0]

    def connect(self) -> sqlite3.Connection:
        """Return the open connection, opening it on first use."""
        if self._conn is None:
            self._conn = sqlite3.connect(str(self._path))
            self._conn.execute("PRAGMA journal_mode=WAL")
        return self._conn

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None

    def initialize_database(self) -> None:
        """Apply every migration newer than the stored schema version."""
        conn = self.connect()
        current = self.schema_version
        for version in range(current, SCHEMA_VERSION):
            logger.debug("Migrating %s to schema %d", self._path.name, version + 1)
            conn.executescript(_MIGRATIONS[version])
            conn.execute(f"PRAGMA user_version = {version + 1}")
        conn.commit()

    def get_tables(self) -> list[str]:
        rows = self.connect().execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
        )
        return [name for (name,) in rows]
