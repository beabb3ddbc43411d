"""Editor selection — field descriptor → editor kind, plus edit clamping.

Priority table (first match wins):

    float  + Range      -> FLOAT_SLIDER
    int    + Range      -> INT_SLIDER
    float  + Min        -> FLOAT_MIN
    int    + Min        -> INT_MIN
    string + TextArea   -> TEXT_AREA
    color               -> COLOR (alpha shown, not HDR, unless hinted)
    anything else       -> the kind's default single-line editor
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from asset_editor.models.asset import (
    Color,
    ColorUsage,
    FieldDescriptor,
    Min,
    Range,
    TextArea,
    ValueKind,
)


class EditorKind(Enum):
    FLOAT_SLIDER = "float_slider"
    INT_SLIDER = "int_slider"
    FLOAT_MIN = "float_min"
    INT_MIN = "int_min"
    TEXT_AREA = "text_area"
    COLOR = "color"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    REFERENCE = "reference"
    GENERIC = "generic"


_DEFAULT_EDITORS = {
    ValueKind.INTEGER: EditorKind.INT,
    ValueKind.FLOAT: EditorKind.FLOAT,
    ValueKind.BOOLEAN: EditorKind.BOOL,
    ValueKind.STRING: EditorKind.STRING,
    ValueKind.REFERENCE: EditorKind.REFERENCE,
    ValueKind.OPAQUE: EditorKind.GENERIC,
}


@dataclass(frozen=True)
class EditorSpec:
    """Resolved editor for one field.

    Attributes:
        kind: Editor kind.
        field: Field being edited.
        minimum / maximum: Numeric bounds (None when unbounded).
        min_lines: Visible lines for TEXT_AREA.
        show_alpha / hdr: Colour editor hints.
    """
    kind: EditorKind
    field: FieldDescriptor
    minimum: float | None = None
    maximum: float | None = None
    min_lines: int = 1
    show_alpha: bool = True
    hdr: bool = False


def select_editor(field: FieldDescriptor) -> EditorSpec:
    """Pick the editor for *field* from the priority table."""
    kind, c = field.kind, field.constraint

    if isinstance(c, Range):
        if kind is ValueKind.FLOAT:
            return EditorSpec(EditorKind.FLOAT_SLIDER, field, c.min, c.max)
        if kind is ValueKind.INTEGER:
            return EditorSpec(EditorKind.INT_SLIDER, field, int(c.min), int(c.max))
    if isinstance(c, Min):
        if kind is ValueKind.FLOAT:
            return EditorSpec(EditorKind.FLOAT_MIN, field, minimum=c.min)
        if kind is ValueKind.INTEGER:
            return EditorSpec(EditorKind.INT_MIN, field, minimum=int(c.min))
    if kind is ValueKind.STRING and isinstance(c, TextArea):
        return EditorSpec(EditorKind.TEXT_AREA, field, min_lines=max(1, c.min_lines))
    if kind is ValueKind.COLOR:
        usage = c if isinstance(c, ColorUsage) else ColorUsage()
        return EditorSpec(EditorKind.COLOR, field, show_alpha=usage.show_alpha, hdr=usage.hdr)
    return EditorSpec(_DEFAULT_EDITORS.get(kind, EditorKind.GENERIC), field)


def coerce_edit(spec: EditorSpec, value: Any) -> Any:
    """Cast and clamp an edited value to what *spec* allows.

    Raises:
        ValueError: *value* cannot be converted to the field's kind.
    """
    kind = spec.kind
    if kind in (EditorKind.INT, EditorKind.INT_SLIDER, EditorKind.INT_MIN):
        value = int(value)
    elif kind in (EditorKind.FLOAT, EditorKind.FLOAT_SLIDER, EditorKind.FLOAT_MIN):
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"Non-finite value for {spec.field.name}")
    elif kind is EditorKind.BOOL:
        value = bool(value)
    elif kind in (EditorKind.STRING, EditorKind.TEXT_AREA):
        value = "" if value is None else str(value)
    elif kind is EditorKind.COLOR:
        if not isinstance(value, Color):
            value = Color(*[float(v) for v in value])
        if not spec.hdr:
            value = Color(*[min(1.0, max(0.0, ch)) for ch in value.channels()])
        return value
    else:
        return value

    if spec.minimum is not None and value < spec.minimum:
        value = type(value)(spec.minimum)
    if spec.maximum is not None and value > spec.maximum:
        value = type(value)(spec.maximum)
    return value
