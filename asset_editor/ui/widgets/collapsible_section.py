"""Collapsible section widget — foldout with a chevron header.

Used for the "Asset Management" and "Stats" regions of the editor window.
Sections start collapsed; their state lives for the window's lifetime.
"""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QFrame, QPushButton, QVBoxLayout, QWidget

_EXPANDED = "▼"
_COLLAPSED = "▶"


class CollapsibleSection(QWidget):
    """A section with a clickable header that shows/hides its content."""

    expanded_changed = pyqtSignal(bool)

    def __init__(self, title: str, expanded: bool = False, parent: QWidget | None = None):
        super().__init__(parent)
        self._title = title
        self._expanded = expanded

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._header = QPushButton()
        self._header.setFlat(True)
        self._header.setProperty("cssClass", "section-header")
        self._header.clicked.connect(self.toggle)
        layout.addWidget(self._header)

        self._content_frame = QFrame()
        self._content_layout = QVBoxLayout(self._content_frame)
        self._content_layout.setContentsMargins(12, 2, 0, 2)
        layout.addWidget(self._content_frame)

        self._sync()

    @property
    def expanded(self) -> bool:
        return self._expanded

    def set_content_widget(self, widget: QWidget) -> None:
        """Replace the section content with *widget*."""
        while self._content_layout.count():
            item = self._content_layout.takeAt(0)
            if item.widget():
                item.widget().setParent(None)
        self._content_layout.addWidget(widget)

    def toggle(self) -> None:
        self.set_expanded(not self._expanded)

    def set_expanded(self, expanded: bool) -> None:
        if expanded == self._expanded:
            return
        self._expanded = expanded
        self._sync()
        self.expanded_changed.emit(expanded)

    def _sync(self) -> None:
        self._content_frame.setVisible(self._expanded)
        arrow = _EXPANDED if self._expanded else _COLLAPSED
        self._header.setText(f"  {arrow}  {self._title}")
