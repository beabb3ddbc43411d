"""Shared fixtures: headless Qt, a temporary project root and its store."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from asset_editor.database.db_manager import DatabaseManager  # noqa: E402
from asset_editor.database.settings_repository import SettingsRepository  # noqa: E402
from asset_editor.store.asset_store import FileAssetStore  # noqa: E402


@pytest.fixture
def store(tmp_path):
    """Empty asset store rooted at a fresh project directory."""
    (tmp_path / "Assets").mkdir()
    return FileAssetStore(tmp_path)


@pytest.fixture
def settings(tmp_path):
    """Settings repository over a fresh SQLite database."""
    db = DatabaseManager(tmp_path / "test.db")
    db.initialize_database()
    yield SettingsRepository(db)
    db.close()
