"""Grid interaction reducer — pointer/edit events → grid intents.

Pure Python class (no Qt dependency). Owns the column-resize state machine:

    idle      --PointerDown(on handle)-->  resizing(column, anchor_x, anchor_width)
    resizing  --PointerMove(x)-------->    resizing   width = max(20, anchor_width + x - anchor_x)
    resizing  --PointerUp------------->    idle       (layout is saved)

A header PointerDown away from the handle becomes a ToggleSort intent; the
controller applies the sort toggle rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from asset_editor.constants import MIN_COLUMN_WIDTH, RESIZE_HANDLE_WIDTH
from asset_editor.models.asset import FieldDescriptor


# ---------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class PointerDown:
    column: int
    x: float
    on_handle: bool


@dataclass(frozen=True)
class PointerMove:
    x: float


@dataclass(frozen=True)
class PointerUp:
    x: float


@dataclass(frozen=True)
class FieldEdited:
    record: Any
    field: FieldDescriptor
    value: Any


@dataclass(frozen=True)
class DuplicateClicked:
    record: Any


@dataclass(frozen=True)
class DeleteClicked:
    record: Any


GridEvent = Union[PointerDown, PointerMove, PointerUp, FieldEdited, DuplicateClicked, DeleteClicked]


# ---------------------------------------------------------------------
# Intents
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class StartResize:
    column: int


@dataclass(frozen=True)
class DragResize:
    column: int
    delta: float
    width: float


@dataclass(frozen=True)
class EndResize:
    column: int


@dataclass(frozen=True)
class ToggleSort:
    column: int


@dataclass(frozen=True)
class EditField:
    record: Any
    field: FieldDescriptor
    value: Any


@dataclass(frozen=True)
class RequestDuplicate:
    record: Any


@dataclass(frozen=True)
class RequestDelete:
    record: Any


Intent = Union[StartResize, DragResize, EndResize, ToggleSort, EditField, RequestDuplicate, RequestDelete]


@dataclass(frozen=True)
class ResizeDrag:
    """The ``resizing`` state."""
    column: int
    anchor_x: float
    anchor_width: float


def resized_width(drag: ResizeDrag, x: float) -> float:
    return max(MIN_COLUMN_WIDTH, drag.anchor_width + (x - drag.anchor_x))


def hit_test(
    widths: list[float],
    x: float,
    handle_width: float = RESIZE_HANDLE_WIDTH,
) -> tuple[int, bool] | None:
    """Header column under *x* and whether *x* is on its resize handle.

    The handle straddles the column's right edge, so it also covers the
    first few pixels of the next column.
    """
    half = handle_width / 2
    left = 0.0
    for column, width in enumerate(widths):
        right = left + width
        if right - half <= x <= right + half:
            return column, True
        if left <= x < right:
            return column, False
        left = right
    return None


class GridInteraction:
    """Turns primitive events into intents.

    Usage::

        reducer = GridInteraction()
        for intent in reducer.handle(PointerDown(4, 310.0, True), widths):
            controller.apply(intent)
    """

    def __init__(self) -> None:
        self._drag: ResizeDrag | None = None

    @property
    def drag(self) -> ResizeDrag | None:
        return self._drag

    @property
    def is_resizing(self) -> bool:
        return self._drag is not None

    def cancel(self) -> None:
        """Drop any in-progress resize (columns were rebuilt)."""
        self._drag = None

    def handle(self, event: GridEvent, widths: list[float]) -> list[Intent]:
        """Reduce *event* against the current state.

        Args:
            event: Pointer or row event.
            widths: Current column widths (anchor for a new drag).

        Returns:
            Zero or more intents, in the order they must be applied.
        """
        if isinstance(event, PointerDown):
            if self._drag is not None or not 0 <= event.column < len(widths):
                return []
            if event.on_handle:
                self._drag = ResizeDrag(event.column, event.x, widths[event.column])
                return [StartResize(event.column)]
            return [ToggleSort(event.column)]

        if isinstance(event, PointerMove):
            if self._drag is None:
                return []
            drag = self._drag
            return [DragResize(drag.column, event.x - drag.anchor_x, resized_width(drag, event.x))]

        if isinstance(event, PointerUp):
            if self._drag is None:
                return []
            column = self._drag.column
            self._drag = None
            return [EndResize(column)]

        if isinstance(event, FieldEdited):
            return [EditField(event.record, event.field, event.value)]
        if isinstance(event, DuplicateClicked):
            return [RequestDuplicate(event.record)]
        if isinstance(event, DeleteClicked):
            return [RequestDelete(event.record)]
        return []
