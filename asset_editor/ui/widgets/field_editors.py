"""Field editor widgets — one compact editor per EditorKind.

``create_editor`` builds the widget for a resolved EditorSpec and wires it
so every user change is passed to ``on_commit`` at once.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Callable

from PyQt6.QtCore import QSignalBlocker, Qt
from PyQt6.QtGui import QColor, QValidator
from PyQt6.QtWidgets import (
    QCheckBox,
    QColorDialog,
    QComboBox,
    QDoubleSpinBox,
    QHBoxLayout,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QSlider,
    QSpinBox,
    QWidget,
)

from asset_editor.constants import FLOAT_SLIDER_STEPS, TEXT_AREA_LINE_HEIGHT
from asset_editor.core.editor_selection import EditorKind, EditorSpec
from asset_editor.models.asset import Asset, Color
from asset_editor.ui.styles.colors import BORDER

CommitFn = Callable[[Any], None]
OptionsFn = Callable[[type], list]

_INT_LIMIT = 2**31 - 1
_FLOAT_LIMIT = 1e12


def _unit(v: float) -> float:
    return min(1.0, max(0.0, v))


class DecimalSpinBox(QDoubleSpinBox):
    """QDoubleSpinBox accepting both '.' and ',' as decimal separator."""

    def _normalise(self, text: str) -> str:
        sep = self.locale().decimalPoint()
        alt = "." if sep == "," else ","
        return text.replace(alt, sep)

    def textFromValue(self, value: float) -> str:
        return f"{value:.{self.decimals()}f}".replace(".", self.locale().decimalPoint())

    def valueFromText(self, text: str) -> float:
        clean = text.strip().removesuffix(self.suffix()).removeprefix(self.prefix())
        try:
            return float(clean.strip().replace(",", "."))
        except ValueError:
            return self.minimum()

    def validate(self, text: str, pos: int) -> tuple[QValidator.State, str, int]:
        return super().validate(self._normalise(text), pos)

    def fixup(self, text: str) -> str:
        return super().fixup(self._normalise(text))


# ---------------------------------------------------------------------
# Composite editors
# ---------------------------------------------------------------------


class FloatSliderEditor(QWidget):
    """Slider plus spin box over a closed float range."""

    def __init__(self, minimum: float, maximum: float, value: float,
                 on_commit: CommitFn, parent: QWidget | None = None):
        super().__init__(parent)
        self._min, self._max = float(minimum), float(maximum)
        self._on_commit = on_commit

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(0, FLOAT_SLIDER_STEPS)
        layout.addWidget(self.slider, 1)

        self.spin = DecimalSpinBox()
        self.spin.setRange(self._min, self._max)
        self.spin.setDecimals(3)
        self.spin.setSingleStep((self._max - self._min) / 100 or 0.01)
        self.spin.setButtonSymbols(QDoubleSpinBox.ButtonSymbols.NoButtons)
        self.spin.setMaximumWidth(60)
        layout.addWidget(self.spin)

        self.set_value(value)
        self.slider.valueChanged.connect(self._on_slider)
        self.spin.valueChanged.connect(self._on_spin)

    def value(self) -> float:
        return self.spin.value()

    def set_value(self, value: float) -> None:
        value = min(self._max, max(self._min, float(value)))
        with QSignalBlocker(self.spin):
            self.spin.setValue(value)
        with QSignalBlocker(self.slider):
            self.slider.setValue(self._to_step(value))

    def _to_step(self, value: float) -> int:
        span = self._max - self._min
        if span <= 0:
            return 0
        return round((value - self._min) / span * FLOAT_SLIDER_STEPS)

    def _on_slider(self, step: int) -> None:
        value = self._min + (self._max - self._min) * step / FLOAT_SLIDER_STEPS
        with QSignalBlocker(self.spin):
            self.spin.setValue(value)
        self._on_commit(self.spin.value())

    def _on_spin(self, value: float) -> None:
        with QSignalBlocker(self.slider):
            self.slider.setValue(self._to_step(value))
        self._on_commit(value)


class IntSliderEditor(QWidget):
    """Slider plus spin box over a closed integer range."""

    def __init__(self, minimum: int, maximum: int, value: int,
                 on_commit: CommitFn, parent: QWidget | None = None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(int(minimum), int(maximum))
        layout.addWidget(self.slider, 1)

        self.spin = QSpinBox()
        self.spin.setRange(int(minimum), int(maximum))
        self.spin.setButtonSymbols(QSpinBox.ButtonSymbols.NoButtons)
        self.spin.setMaximumWidth(50)
        layout.addWidget(self.spin)

        self.spin.setValue(int(value))
        self.slider.setValue(self.spin.value())
        self.slider.valueChanged.connect(self.spin.setValue)
        self.spin.valueChanged.connect(self._on_spin)
        self._on_commit = on_commit

    def value(self) -> int:
        return self.spin.value()

    def _on_spin(self, value: int) -> None:
        with QSignalBlocker(self.slider):
            self.slider.setValue(value)
        self._on_commit(value)


class ColorEditor(QPushButton):
    """Colour swatch; click opens QColorDialog.

    HDR colours are shown normalised to their brightest channel and scaled
    back after picking, so the intensity survives an edit.
    """

    def __init__(self, value: Color | None, show_alpha: bool, hdr: bool,
                 on_commit: CommitFn, parent: QWidget | None = None):
        super().__init__(parent)
        self._color = value if isinstance(value, Color) else Color()
        self._show_alpha = show_alpha
        self._hdr = hdr
        self._on_commit = on_commit
        self.clicked.connect(self._pick)
        self._refresh()

    @property
    def color(self) -> Color:
        return self._color

    def _intensity(self) -> float:
        if not self._hdr:
            return 1.0
        return max(1.0, self._color.r, self._color.g, self._color.b)

    def to_qcolor(self) -> QColor:
        k = self._intensity()
        c = self._color
        return QColor.fromRgbF(_unit(c.r / k), _unit(c.g / k), _unit(c.b / k), _unit(c.a))

    def apply_qcolor(self, picked: QColor) -> Color:
        """Map a dialog result back to a Color and commit it."""
        k = self._intensity()
        alpha = picked.alphaF() if self._show_alpha else self._color.a
        self._color = Color(picked.redF() * k, picked.greenF() * k, picked.blueF() * k, alpha)
        self._refresh()
        self._on_commit(self._color)
        return self._color

    def _pick(self) -> None:
        options = QColorDialog.ColorDialogOption(0)
        if self._show_alpha:
            options |= QColorDialog.ColorDialogOption.ShowAlphaChannel
        picked = QColorDialog.getColor(self.to_qcolor(), self, "", options)
        if picked.isValid():
            self.apply_qcolor(picked)

    def _refresh(self) -> None:
        q = self.to_qcolor()
        self.setStyleSheet(
            f"QPushButton {{ background-color: rgba({q.red()}, {q.green()}, {q.blue()}, {q.alpha()});"
            f" border: 1px solid {BORDER}; }}"
        )
        suffix = " HDR" if self._hdr else ""
        self.setToolTip(
            ", ".join(f"{ch:.3f}" for ch in self._color.channels()) + suffix
        )


# ---------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------


def create_editor(
    spec: EditorSpec,
    value: Any,
    on_commit: CommitFn,
    reference_options: OptionsFn | None = None,
) -> QWidget:
    """Build the editor widget for *spec* showing *value*."""
    kind = spec.kind

    if kind is EditorKind.FLOAT_SLIDER:
        return FloatSliderEditor(spec.minimum, spec.maximum, value or 0.0, on_commit)
    if kind is EditorKind.INT_SLIDER:
        return IntSliderEditor(spec.minimum, spec.maximum, value or 0, on_commit)
    if kind in (EditorKind.FLOAT, EditorKind.FLOAT_MIN):
        spin = DecimalSpinBox()
        spin.setDecimals(3)
        spin.setRange(
            spec.minimum if spec.minimum is not None else -_FLOAT_LIMIT, _FLOAT_LIMIT,
        )
        spin.setValue(float(value or 0.0))
        spin.valueChanged.connect(on_commit)
        return spin
    if kind in (EditorKind.INT, EditorKind.INT_MIN):
        spin = QSpinBox()
        spin.setRange(
            int(spec.minimum) if spec.minimum is not None else -_INT_LIMIT - 1, _INT_LIMIT,
        )
        spin.setValue(int(value or 0))
        spin.valueChanged.connect(on_commit)
        return spin
    if kind is EditorKind.BOOL:
        check = QCheckBox()
        check.setChecked(bool(value))
        check.toggled.connect(on_commit)
        return check
    if kind is EditorKind.STRING:
        edit = QLineEdit(value or "")
        edit.editingFinished.connect(lambda: on_commit(edit.text()))
        return edit
    if kind is EditorKind.TEXT_AREA:
        area = QPlainTextEdit(value or "")
        area.setFixedHeight(spec.min_lines * TEXT_AREA_LINE_HEIGHT + 8)
        area.textChanged.connect(lambda: on_commit(area.toPlainText()))
        return area
    if kind is EditorKind.COLOR:
        return ColorEditor(value, spec.show_alpha, spec.hdr, on_commit)
    if kind is EditorKind.REFERENCE:
        return _reference_editor(spec, value, on_commit, reference_options)
    return _generic_editor(value, on_commit)


def _reference_editor(spec: EditorSpec, value: Any, on_commit: CommitFn,
                      reference_options: OptionsFn | None) -> QComboBox:
    combo = QComboBox()
    options: list[Asset | None] = [None]
    if reference_options is not None and isinstance(spec.field.value_type, type):
        options.extend(reference_options(spec.field.value_type))
    if value is not None and value not in options:
        options.append(value)
    for option in options:
        combo.addItem("None" if option is None else option.name)
    combo.setCurrentIndex(next((i for i, o in enumerate(options) if o is value), 0))
    combo.currentIndexChanged.connect(lambda i: on_commit(options[i]))
    return combo


def _generic_editor(value: Any, on_commit: CommitFn) -> QWidget:
    """Fallback: enum combo, JSON line edit, or read-only text."""
    if isinstance(value, Enum):
        members = list(type(value))
        combo = QComboBox()
        combo.addItems([m.name for m in members])
        combo.setCurrentIndex(members.index(value))
        combo.currentIndexChanged.connect(lambda i: on_commit(members[i]))
        return combo

    edit = QLineEdit()
    try:
        text = json.dumps(value)
        editable = json.loads(text) == value
    except (TypeError, ValueError):
        text, editable = repr(value), False
    edit.setText(text)
    edit.setReadOnly(not editable)
    if editable:
        def commit() -> None:
            try:
                parsed = json.loads(edit.text())
            except ValueError:
                edit.setText(text)
                return
            on_commit(parsed)
        edit.editingFinished.connect(commit)
    return edit
