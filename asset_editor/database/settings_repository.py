"""Settings repository — key/value preference store on ``app_settings``."""

from __future__ import annotations

from datetime import datetime

from asset_editor.database.db_manager import DatabaseManager


class SettingsRepository:
    """Preference store: ``get(key)`` / ``set(key, value)`` string pairs."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a setting, or *default* when absent."""
        conn = self._db.connect()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row[0] if row else default

    def set(self, key: str, value: str) -> None:
        """Set a setting (upsert)."""
        conn = self._db.connect()
        conn.execute(
            "INSERT OR REPLACE INTO app_settings (key, value, updated_at) VALUES (?, ?, ?)",
            (key, value, datetime.now().isoformat()),
        )
        conn.commit()

    def delete(self, key: str) -> None:
        conn = self._db.connect()
        conn.execute("DELETE FROM app_settings WHERE key = ?", (key,))
        conn.commit()

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        if value is None:
            return default
        return value == "1"

    def set_bool(self, key: str, value: bool) -> None:
        self.set(key, "1" if value else "0")

