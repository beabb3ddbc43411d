"""Database layer — SQLite connection, schema, and the settings repository."""

from asset_editor.database.db_manager import DatabaseManager
from asset_editor.database.settings_repository import SettingsRepository

__all__ = [
    "DatabaseManager",
    "SettingsRepository",
]
