"""Tests for the grid widgets and the editor window (headless)."""

import sys

import pytest

from PyQt6.QtCore import QPoint, Qt
from PyQt6.QtTest import QTest
from PyQt6.QtWidgets import QApplication, QLabel, QMessageBox

from asset_editor.constants import SETTING_INCLUDE_DERIVED, SETTING_SCOPE_PATH
from asset_editor.core.grid_state import PointerDown, PointerMove, PointerUp
from asset_editor.database.db_manager import DatabaseManager
from asset_editor.database.settings_repository import SettingsRepository
from asset_editor.models.grid import FIRST_FIELD_COLUMN, SortState
from asset_editor.ui.grid import property_grid
from asset_editor.ui.grid.grid_controller import GridController
from asset_editor.ui.grid.grid_header import header_label
from asset_editor.ui.grid.property_grid import GridRow, PropertyGrid
from asset_editor.ui.main_window import AssetEditorWindow
from asset_editor.ui.widgets.field_editors import IntSliderEditor

from sample_assets import WEAPON, Bow, Weapon, make_asset

_app = QApplication.instance() or QApplication(sys.argv)


@pytest.fixture
def armory(store):
    make_asset(store, Weapon, "Assets/Weapons/Axe.asset", damage=10)
    make_asset(store, Weapon, "Assets/Weapons/Bow.asset", damage=30)
    make_asset(store, Bow, "Assets/Weapons/Longbow.asset", damage=20)
    return store


@pytest.fixture
def controller(armory, settings):
    ctrl = GridController(armory, settings)
    ctrl.refresh()
    ctrl.select_type(ctrl.session.types.index(WEAPON))
    return ctrl


def _column(ctrl, name):
    return FIRST_FIELD_COLUMN + [f.name for f in ctrl.fields].index(name)


def _row(grid, name):
    return next(r for r in grid.rows if isinstance(r, GridRow) and r.record.name == name)


class TestHeaderLabel:

    def test_arrows(self):
        assert header_label("damage", 4, 4, True) == "damage ▲"
        assert header_label("damage", 4, 4, False) == "damage ▼"
        assert header_label("damage", 4, 3, True) == "damage"
        assert header_label("damage", 4, None, True) == "damage"


class TestPropertyGrid:

    def test_one_row_per_record(self, controller):
        grid = PropertyGrid(controller)
        assert len(grid.rows) == len(controller.records) == 3

    def test_cells_match_columns(self, controller):
        grid = PropertyGrid(controller)
        row = _row(grid, "Axe")
        assert len(row.cells) == len(controller.columns)
        assert row.cells[2].text() == "Axe"

    def test_editing_through_widget_saves(self, controller, armory):
        grid = PropertyGrid(controller)
        editor = _row(grid, "Axe").editor("damage")
        assert isinstance(editor, IntSliderEditor)
        editor.spin.setValue(42)
        assert armory.load("Assets/Weapons/Axe.asset").damage == 42

    def test_width_change_resizes_cells(self, controller):
        grid = PropertyGrid(controller)
        col = _column(controller, "damage")
        controller.handle_event(PointerDown(col, 400.0, True))
        controller.handle_event(PointerMove(450.0))
        controller.handle_event(PointerUp(450.0))
        expected = round(controller.widths[col])
        assert all(r.cells[col].maximumWidth() == expected for r in grid.rows)
        assert grid.header.width() == round(sum(controller.widths))

    def test_records_changed_rebuilds(self, controller):
        grid = PropertyGrid(controller)
        controller.set_instance_filter("axe")
        assert [r.record.name for r in grid.rows] == ["Axe"]

    def test_empty_set(self, controller):
        grid = PropertyGrid(controller)
        controller.set_instance_filter("zzz")
        assert grid.rows == []

    def test_failing_cell_becomes_placeholder(self, controller, monkeypatch):
        real = property_grid.create_editor

        def flaky(spec, value, on_commit, options=None):
            if spec.field.name == "damage":
                raise RuntimeError("boom")
            return real(spec, value, on_commit, options)

        monkeypatch.setattr(property_grid, "create_editor", flaky)
        grid = PropertyGrid(controller)
        row = _row(grid, "Axe")
        assert isinstance(row.cells[_column(controller, "damage")], QLabel)
        assert row.editor("speed") is not None

    def test_failing_row_becomes_placeholder(self, controller, monkeypatch):
        real = property_grid.GridRow

        def flaky(ctrl, record, index):
            if record.name == "Bow":
                raise RuntimeError("boom")
            return real(ctrl, record, index)

        monkeypatch.setattr(property_grid, "GridRow", flaky)
        grid = PropertyGrid(controller)
        assert len(grid.rows) == 3
        assert sum(isinstance(r, QLabel) for r in grid.rows) == 1

    def test_delete_button_is_deferred(self, controller, armory):
        grid = PropertyGrid(controller)
        row = _row(grid, "Bow")
        row.cells[1].click()
        assert armory.exists("Assets/Weapons/Bow.asset")
        QTest.qWait(20)
        assert not armory.exists("Assets/Weapons/Bow.asset")
        assert "Bow" not in [r.record.name for r in grid.rows]

    def test_failing_row_action_is_logged(self, controller, monkeypatch, caplog):
        def broken(event):
            raise RuntimeError("boom")

        grid = PropertyGrid(controller)
        monkeypatch.setattr(controller, "handle_event", broken)
        _row(grid, "Axe").cells[0].click()
        QTest.qWait(20)
        assert "DuplicateClicked on Axe failed" in caplog.text
        assert len(grid.rows) == 3

    def test_header_click_sorts(self, controller):
        grid = PropertyGrid(controller)
        grid.show()
        col = _column(controller, "damage")
        x = round(sum(controller.widths[:col]) + controller.widths[col] / 2)
        QTest.mouseClick(grid.header, Qt.MouseButton.LeftButton, pos=QPoint(x, 5))
        assert controller.session.sort == SortState(col, True)
        assert [r.record.name for r in grid.rows] == ["Axe", "Longbow", "Bow"]


class TestEditorWindow:

    @pytest.fixture
    def window(self, armory, tmp_path):
        db = DatabaseManager(tmp_path / "editor.db")
        db.initialize_database()
        return AssetEditorWindow(armory, db), SettingsRepository(db)

    def test_opens_on_first_type(self, window):
        win, _ = window
        assert [t.name for t in win.controller.session.types] == ["Bow", "Weapon"]
        assert win.controller.session.selected_type.name == "Bow"
        assert len(win.grid.rows) == 1

    def test_include_derived_persisted(self, window):
        win, settings = window
        win.controller.select_type(1)
        win._chk_derived.setChecked(False)
        assert settings.get_bool(SETTING_INCLUDE_DERIVED, True) is False
        assert len(win.grid.rows) == 2

    def test_scope_persisted(self, window):
        win, settings = window
        win._path_edit.setText("Assets/Weapons/")
        win._path_edit.editingFinished.emit()
        assert settings.get(SETTING_SCOPE_PATH) == "Assets/Weapons"
        assert win._path_edit.text() == "Assets/Weapons"

    def test_scope_outside_project_rejected(self, window, monkeypatch):
        win, settings = window
        warnings = []
        monkeypatch.setattr(QMessageBox, "warning", lambda *args: warnings.append(args))
        win._path_edit.setText("../elsewhere")
        win._path_edit.editingFinished.emit()
        assert len(warnings) == 1
        assert win.controller.session.scope_path == "Assets"
        assert win._path_edit.text() == "Assets"
        assert settings.get(SETTING_SCOPE_PATH) is None

    def test_stats(self, window):
        win, _ = window
        assert win._lbl_count.text() == "Instances: 1"
        assert win._btn_add.text() == "Add Bow"
