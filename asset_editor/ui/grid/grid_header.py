"""Grid header — painted column titles with sort arrows and resize handles.

Mouse input is turned into PointerDown / PointerMove / PointerUp events and
fed to the GridController; the header never changes widths itself.
"""

from PyQt6.QtCore import QRectF, Qt
from PyQt6.QtGui import QColor, QMouseEvent, QPainter, QPen
from PyQt6.QtWidgets import QSizePolicy, QWidget

from asset_editor.constants import HEADER_HEIGHT
from asset_editor.core.grid_state import PointerDown, PointerMove, PointerUp, hit_test
from asset_editor.ui.grid.grid_controller import GridController
from asset_editor.ui.styles.colors import (
    BORDER,
    HEADER_ACTIVE_BG,
    HEADER_BG,
    RESIZE_HANDLE,
    TEXT_PRIMARY,
)

_ASCENDING = " ▲"
_DESCENDING = " ▼"


def header_label(label: str, column: int, sort_column: int | None, ascending: bool) -> str:
    if column != sort_column:
        return label
    return label + (_ASCENDING if ascending else _DESCENDING)


class GridHeader(QWidget):
    """Column header row of the property grid."""

    def __init__(self, controller: GridController, parent: QWidget | None = None):
        super().__init__(parent)
        self._controller = controller
        self._hover_handle = False

        self.setMouseTracking(True)
        self.setFixedHeight(HEADER_HEIGHT)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)

        controller.columns_changed.connect(self._relayout)
        controller.width_changed.connect(lambda _column: self._relayout())
        controller.sort_changed.connect(self.update)
        self._relayout()

    def _relayout(self) -> None:
        self.setFixedWidth(max(1, round(sum(self._controller.widths))))
        self.update()

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        sort = self._controller.session.sort
        border = QPen(QColor(BORDER))
        handle = QColor(RESIZE_HANDLE)

        left = 0.0
        for index, column in enumerate(self._controller.columns):
            rect = QRectF(left, 0, column.width, self.height())
            active = index == sort.column
            painter.fillRect(rect, QColor(HEADER_ACTIVE_BG if active else HEADER_BG))
            painter.setPen(border)
            painter.drawRect(rect.adjusted(0, 0, -1, -1))
            painter.setPen(QColor(TEXT_PRIMARY))
            painter.drawText(
                rect.adjusted(4, 0, -4, 0),
                Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft,
                header_label(column.label, index, sort.column, sort.ascending),
            )
            painter.fillRect(QRectF(rect.right() - 1, 3, 1, rect.height() - 6), handle)
            left += column.width
        painter.end()

    # ------------------------------------------------------------------
    # Mouse → pointer events
    # ------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        x = event.position().x()
        hit = hit_test(self._controller.widths, x)
        if hit is not None:
            column, on_handle = hit
            self._controller.handle_event(PointerDown(column, x, on_handle))
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        x = event.position().x()
        if self._controller.interaction.is_resizing:
            self._controller.handle_event(PointerMove(x))
        else:
            hit = hit_test(self._controller.widths, x)
            self._set_handle_cursor(hit is not None and hit[1])
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._controller.handle_event(PointerUp(event.position().x()))
        event.accept()

    def leaveEvent(self, event) -> None:
        if not self._controller.interaction.is_resizing:
            self._set_handle_cursor(False)
        super().leaveEvent(event)

    def _set_handle_cursor(self, on_handle: bool) -> None:
        if on_handle == self._hover_handle:
            return
        self._hover_handle = on_handle
        if on_handle:
            self.setCursor(Qt.CursorShape.SizeHorCursor)
        else:
            self.unsetCursor()
