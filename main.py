"""Asset Grid Editor — Entry Point.

Usage: main.py [project_root]   (default: current directory)
"""
import sys
from pathlib import Path

from asset_editor.application import create_application
from asset_editor.constants import DB_FILENAME
from asset_editor.database.db_manager import DatabaseManager
from asset_editor.store.asset_store import FileAssetStore
from asset_editor.ui.main_window import AssetEditorWindow


def main():
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()
    # Asset classes are imported from modules inside the project.
    sys.path.insert(0, str(root.resolve()))
    app = create_application(sys.argv)

    db_manager = DatabaseManager(root / DB_FILENAME)
    db_manager.initialize_database()
    window = AssetEditorWindow(FileAssetStore(root), db_manager)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
