"""Property grid — header plus one editable row per record.

Rows are rebuilt whenever the controller reports a new working set; width
changes only resize the existing cells. A row or cell that fails to render
is replaced by a placeholder so the rest of the grid stays usable.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from asset_editor.constants import ROW_HEIGHT
from asset_editor.core.editor_selection import select_editor
from asset_editor.core.grid_state import (
    DeleteClicked,
    DuplicateClicked,
    FieldEdited,
    GridEvent,
)
from asset_editor.models.asset import Asset, FieldDescriptor
from asset_editor.ui.grid.grid_controller import GridController
from asset_editor.ui.grid.grid_header import GridHeader
from asset_editor.ui.styles.colors import ERROR, PANEL_BG, ROW_ALT_BG, TEXT_SECONDARY
from asset_editor.ui.widgets.field_editors import create_editor

logger = logging.getLogger(__name__)


class GridRow(QFrame):
    """One record: duplicate, delete, name, then one editor per field."""

    def __init__(self, controller: GridController, record: Asset, index: int,
                 parent: QWidget | None = None):
        super().__init__(parent)
        self._controller = controller
        self._record = record
        self._cells: list[QWidget] = []
        self._editors: dict[str, QWidget] = {}

        self.setObjectName("gridRow")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        bg = ROW_ALT_BG if index % 2 else PANEL_BG
        self.setStyleSheet(f"#gridRow {{ background: {bg}; }}")
        self.setMinimumHeight(ROW_HEIGHT)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self._layout = layout

        dup_btn = QPushButton("+")
        dup_btn.setToolTip("Duplicate")
        dup_btn.clicked.connect(lambda: self._defer(DuplicateClicked(record)))
        self._add_cell(dup_btn)

        del_btn = QPushButton("✕")
        del_btn.setToolTip("Delete")
        del_btn.setProperty("cssClass", "inline-delete")
        del_btn.clicked.connect(lambda: self._defer(DeleteClicked(record)))
        self._add_cell(del_btn)

        name_edit = QLineEdit(record.name)
        name_edit.setReadOnly(True)
        name_edit.setToolTip(record.asset_path or "")
        self._add_cell(name_edit)

        for field in controller.fields:
            self._add_cell(self._field_cell(field))

        layout.addStretch()
        self.set_widths(controller.widths)

    @property
    def record(self) -> Asset:
        return self._record

    @property
    def cells(self) -> list[QWidget]:
        return list(self._cells)

    def editor(self, field_name: str) -> QWidget | None:
        return self._editors.get(field_name)

    def set_widths(self, widths: list[float]) -> None:
        for cell, width in zip(self._cells, widths):
            cell.setFixedWidth(max(1, round(width)))

    def set_width(self, column: int, width: float) -> None:
        if 0 <= column < len(self._cells):
            self._cells[column].setFixedWidth(max(1, round(width)))

    def _add_cell(self, widget: QWidget) -> None:
        self._cells.append(widget)
        self._layout.addWidget(widget, 0, Qt.AlignmentFlag.AlignTop)

    def _field_cell(self, field: FieldDescriptor) -> QWidget:
        reflection = self._controller.reflection
        if not reflection.has_field(self._record, field.name):
            return QWidget()
        try:
            value = reflection.get_field(self._record, field.name)
            editor = create_editor(
                select_editor(field), value, partial(self._commit, field),
                self._controller.reference_options,
            )
        except Exception:
            logger.warning("Could not render %s.%s", self._record.name, field.name, exc_info=True)
            label = QLabel("⚠")
            label.setToolTip(f"{field.name} could not be displayed")
            label.setStyleSheet(f"color: {ERROR};")
            return label
        self._editors[field.name] = editor
        return editor

    def _commit(self, field: FieldDescriptor, value: Any) -> None:
        try:
            self._controller.handle_event(FieldEdited(self._record, field, value))
        except Exception:
            logger.warning("Edit of %s.%s failed", self._record.name, field.name, exc_info=True)

    def _defer(self, event: GridEvent) -> None:
        # Duplicate/delete rebuild the rows, including this one.
        QTimer.singleShot(0, lambda: self._dispatch(event))

    def _dispatch(self, event: GridEvent) -> None:
        try:
            self._controller.handle_event(event)
        except Exception:
            logger.warning("%s on %s failed", type(event).__name__, self._record.name, exc_info=True)


class PropertyGrid(QWidget):
    """Header and rows for the controller's current working set."""

    def __init__(self, controller: GridController, parent: QWidget | None = None):
        super().__init__(parent)
        self._controller = controller
        self._rows: list[QWidget] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._header = GridHeader(controller)
        layout.addWidget(self._header)

        self._rows_widget = QWidget()
        self._rows_layout = QVBoxLayout(self._rows_widget)
        self._rows_layout.setContentsMargins(0, 0, 0, 0)
        self._rows_layout.setSpacing(1)
        layout.addWidget(self._rows_widget)

        self._empty_label = QLabel("No assets to display")
        self._empty_label.setStyleSheet(f"color: {TEXT_SECONDARY}; padding: 6px;")
        layout.addWidget(self._empty_label)
        layout.addStretch()

        controller.records_changed.connect(self.rebuild)
        controller.columns_changed.connect(self._apply_widths)
        controller.width_changed.connect(self._on_width_changed)
        self.rebuild()

    @property
    def header(self) -> GridHeader:
        return self._header

    @property
    def rows(self) -> list[QWidget]:
        return list(self._rows)

    def rebuild(self) -> None:
        """Recreate every row from the controller's records."""
        for row in self._rows:
            self._rows_layout.removeWidget(row)
            row.deleteLater()
        self._rows = []

        for index, record in enumerate(self._controller.records):
            try:
                row = GridRow(self._controller, record, index)
            except Exception:
                logger.warning("Could not render row for %s", record.name, exc_info=True)
                row = QLabel(f"⚠ {record.name} could not be displayed")
                row.setStyleSheet(f"color: {ERROR}; padding: 2px 6px;")
            self._rows_layout.addWidget(row)
            self._rows.append(row)

        self._empty_label.setVisible(not self._rows)

    def _apply_widths(self) -> None:
        widths = self._controller.widths
        for row in self._rows:
            if isinstance(row, GridRow):
                row.set_widths(widths)

    def _on_width_changed(self, column: int) -> None:
        width = self._controller.widths[column]
        for row in self._rows:
            if isinstance(row, GridRow):
                row.set_width(column, width)
