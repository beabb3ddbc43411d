"""Main window — asset management controls above the property grid.

Layout:
  Top:    Toolbar (Refresh, Reset Column Widths)
  Upper:  "Asset Management" section (scope path, browse, module selector)
          "Stats" section (count, total memory, filtered memory)
          Type selector, include-derived toggle, type/instance search, add-N
  Center: PropertyGrid inside a scroll area
  Footer: QStatusBar
"""

import logging
from pathlib import Path

from PyQt6.QtCore import QSettings, QSignalBlocker, Qt
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QSpinBox,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from asset_editor.constants import (
    APP_NAME,
    APP_VERSION,
    ASSET_EXTENSION,
    DEFAULT_SCOPE_PATH,
    MAX_CREATE_COUNT,
    MIN_CREATE_COUNT,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
    SETTING_INCLUDE_DERIVED,
    SETTING_SCOPE_PATH,
)
from asset_editor.core.errors import StoreError
from asset_editor.core.memory import format_kb
from asset_editor.core.session import EditorSession
from asset_editor.database.db_manager import DatabaseManager
from asset_editor.database.settings_repository import SettingsRepository
from asset_editor.models.grid import SearchFilter
from asset_editor.store.asset_store import FileAssetStore
from asset_editor.ui.grid.grid_controller import GridController
from asset_editor.ui.grid.property_grid import PropertyGrid
from asset_editor.ui.widgets.collapsible_section import CollapsibleSection

logger = logging.getLogger(__name__)


class AssetEditorWindow(QMainWindow):
    """Grid editor for every record of one selected asset type."""

    def __init__(
        self,
        store: FileAssetStore,
        db_manager: DatabaseManager,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)

        self._store = store
        self._db_manager = db_manager
        self._settings = SettingsRepository(db_manager)

        session = EditorSession(
            scope_path=self._settings.get(SETTING_SCOPE_PATH, DEFAULT_SCOPE_PATH),
            search=SearchFilter(
                include_derived=self._settings.get_bool(SETTING_INCLUDE_DERIVED, True),
            ),
        )
        self._controller = GridController(store, self._settings, session, parent=self)

        self._build_ui()
        self._connect_signals()
        self._restore_state()
        self._controller.refresh()

    @property
    def controller(self) -> GridController:
        return self._controller

    @property
    def grid(self) -> PropertyGrid:
        return self._grid

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        session = self._controller.session

        toolbar = QToolBar("Main")
        toolbar.setMovable(False)
        self._act_refresh = QAction("Refresh", self)
        self._act_reset_widths = QAction("Reset Column Widths", self)
        toolbar.addAction(self._act_refresh)
        toolbar.addAction(self._act_reset_widths)
        self.addToolBar(toolbar)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(4)

        # --- Asset Management ---
        self._mgmt_section = CollapsibleSection("Asset Management")
        mgmt = QWidget()
        mgmt_layout = QVBoxLayout(mgmt)
        mgmt_layout.setContentsMargins(0, 0, 0, 0)

        path_row = QHBoxLayout()
        path_row.addWidget(QLabel("Path:"))
        self._path_edit = QLineEdit(session.scope_path)
        path_row.addWidget(self._path_edit, 1)
        self._btn_browse = QPushButton("Browse")
        path_row.addWidget(self._btn_browse)
        self._btn_refresh = QPushButton("Refresh")
        path_row.addWidget(self._btn_refresh)
        mgmt_layout.addLayout(path_row)

        module_row = QHBoxLayout()
        module_row.addWidget(QLabel("Module:"))
        self._module_combo = QComboBox()
        module_row.addWidget(self._module_combo, 1)
        mgmt_layout.addLayout(module_row)

        self._mgmt_section.set_content_widget(mgmt)
        layout.addWidget(self._mgmt_section)

        # --- Stats ---
        self._stats_section = CollapsibleSection("Stats")
        stats = QWidget()
        stats_layout = QVBoxLayout(stats)
        stats_layout.setContentsMargins(0, 0, 0, 0)
        self._lbl_count = QLabel()
        self._lbl_total_memory = QLabel()
        self._lbl_filtered_memory = QLabel()
        for lbl in (self._lbl_count, self._lbl_total_memory, self._lbl_filtered_memory):
            stats_layout.addWidget(lbl)
        self._stats_section.set_content_widget(stats)
        layout.addWidget(self._stats_section)

        # --- Type selection ---
        type_row = QHBoxLayout()
        type_row.addWidget(QLabel("Type:"))
        self._type_combo = QComboBox()
        self._type_combo.setMinimumWidth(200)
        type_row.addWidget(self._type_combo, 1)
        self._chk_derived = QCheckBox("Include Derived")
        self._chk_derived.setChecked(session.search.include_derived)
        type_row.addWidget(self._chk_derived)
        layout.addLayout(type_row)

        search_row = QHBoxLayout()
        self._type_search = QLineEdit()
        self._type_search.setPlaceholderText("Search Types")
        self._type_search.setClearButtonEnabled(True)
        search_row.addWidget(self._type_search)
        self._instance_search = QLineEdit()
        self._instance_search.setPlaceholderText("Search Instances")
        self._instance_search.setClearButtonEnabled(True)
        search_row.addWidget(self._instance_search)
        layout.addLayout(search_row)

        add_row = QHBoxLayout()
        add_row.addWidget(QLabel("Amount:"))
        self._count_spin = QSpinBox()
        self._count_spin.setRange(MIN_CREATE_COUNT, MAX_CREATE_COUNT)
        self._count_spin.setValue(session.create_count)
        add_row.addWidget(self._count_spin)
        self._btn_add = QPushButton("Add")
        add_row.addWidget(self._btn_add)
        add_row.addStretch()
        layout.addLayout(add_row)

        # --- Grid ---
        self._grid = PropertyGrid(self._controller)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._grid)
        layout.addWidget(scroll, 1)

        self.setCentralWidget(central)
        self.statusBar().showMessage("Ready")

    def _connect_signals(self) -> None:
        self._act_refresh.triggered.connect(self._controller.refresh)
        self._act_reset_widths.triggered.connect(self._controller.reset_column_widths)
        self._btn_refresh.clicked.connect(self._controller.refresh)
        self._btn_browse.clicked.connect(self._on_browse)
        self._path_edit.editingFinished.connect(
            lambda: self._set_scope(self._path_edit.text()),
        )
        self._module_combo.currentTextChanged.connect(self._on_module_changed)
        self._type_combo.currentIndexChanged.connect(self._controller.select_type)
        self._type_search.textChanged.connect(self._controller.set_type_filter)
        self._instance_search.textChanged.connect(self._controller.set_instance_filter)
        self._chk_derived.toggled.connect(self._on_include_derived)
        self._count_spin.valueChanged.connect(self._controller.session.set_create_count)
        self._btn_add.clicked.connect(self._on_add)

        self._controller.types_changed.connect(self._populate_selectors)
        self._controller.records_changed.connect(self._update_stats)

    # ------------------------------------------------------------------
    # Selectors
    # ------------------------------------------------------------------

    def _populate_selectors(self) -> None:
        session = self._controller.session
        with QSignalBlocker(self._module_combo):
            self._module_combo.clear()
            self._module_combo.addItems(self._controller.modules)
            self._module_combo.setCurrentText(session.module_filter)

        with QSignalBlocker(self._type_combo):
            self._type_combo.clear()
            for type_desc in session.types:
                self._type_combo.addItem(type_desc.name, type_desc.qualified_id)
                self._type_combo.setItemData(
                    self._type_combo.count() - 1, type_desc.qualified_id,
                    Qt.ItemDataRole.ToolTipRole,
                )
            self._type_combo.setCurrentIndex(session.selected_type_index)

    def _on_module_changed(self, module: str) -> None:
        if module:
            self._controller.set_module_filter(module)

    def _on_include_derived(self, enabled: bool) -> None:
        self._controller.set_include_derived(enabled)
        self._settings.set_bool(SETTING_INCLUDE_DERIVED, enabled)

    def _set_scope(self, path: str) -> None:
        path = "" if path.strip() == "." else path
        if path.strip().rstrip("/") == self._controller.session.scope_path:
            return
        accepted = self._controller.set_scope_path(path)
        scope = self._controller.session.scope_path
        with QSignalBlocker(self._path_edit):
            self._path_edit.setText(scope)
        if not accepted:
            QMessageBox.warning(
                self, "Invalid Folder", f"{path} is not a folder inside the project.",
            )
            return
        self._settings.set(SETTING_SCOPE_PATH, scope)

    def _on_browse(self) -> None:
        start = self._store.root / self._controller.session.scope_path
        chosen = QFileDialog.getExistingDirectory(self, "Select Asset Folder", str(start))
        if not chosen:
            return
        try:
            scope = self._store.to_asset_path(chosen)
        except StoreError as e:
            QMessageBox.warning(self, "Invalid Folder", str(e))
            return
        self._set_scope(scope)

    # ------------------------------------------------------------------
    # Add instances
    # ------------------------------------------------------------------

    def _on_add(self) -> None:
        type_desc = self._controller.session.selected_type
        if type_desc is None:
            return
        folder = self._store.root / self._controller.default_create_folder()
        default = folder / f"{type_desc.name}{ASSET_EXTENSION}"
        path, _ = QFileDialog.getSaveFileName(
            self, f"Create {type_desc.name}", str(default),
            f"Assets (*{ASSET_EXTENSION})",
        )
        if not path:
            return
        if not path.endswith(ASSET_EXTENSION):
            path += ASSET_EXTENSION
        try:
            base = self._store.to_asset_path(Path(path))
        except StoreError as e:
            QMessageBox.warning(self, "Invalid Location", str(e))
            return
        created = self._controller.create_instances(base, self._count_spin.value())
        self.statusBar().showMessage(
            f"Created {len(created)} {type_desc.name} asset(s)", 3000,
        )

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def _update_stats(self) -> None:
        objects = self._controller.object_set
        self._lbl_count.setText(f"Instances: {len(objects)}")
        self._lbl_total_memory.setText(f"Total memory: {format_kb(objects.total_memory_all)}")
        self._lbl_filtered_memory.setText(
            f"Filtered memory: {format_kb(objects.total_memory_filtered)}",
        )
        type_desc = self._controller.session.selected_type
        self._btn_add.setEnabled(type_desc is not None)
        self._btn_add.setText(f"Add {type_desc.name}" if type_desc else "Add")

    # ------------------------------------------------------------------
    # State persistence
    # ------------------------------------------------------------------

    def closeEvent(self, event):
        self._save_state()
        self._db_manager.close()
        super().closeEvent(event)

    def _save_state(self) -> None:
        settings = QSettings()
        settings.setValue("mainwindow/geometry", self.saveGeometry())

    def _restore_state(self) -> None:
        settings = QSettings()
        geometry = settings.value("mainwindow/geometry")
        if geometry:
            self.restoreGeometry(geometry)
