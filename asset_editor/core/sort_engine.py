"""Sort engine — typed, stable column sorting and header toggle rule.

Column 2 sorts by display name; columns >= 3 by the mapped field value.
Colours sort by the sum of their four channels, references by the
referenced asset's name. Opaque fields are not orderable: sorting on them
returns the input order.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable

from asset_editor.models.asset import Asset, Color, FieldDescriptor, ValueKind
from asset_editor.models.grid import (
    ACTION_COLUMNS,
    NAME_COLUMN,
    SortState,
    field_for_column,
)


class Ordering(IntEnum):
    BEFORE = -1
    EQUAL = 0
    AFTER = 1


_ORDERABLE = {
    ValueKind.INTEGER,
    ValueKind.FLOAT,
    ValueKind.BOOLEAN,
    ValueKind.STRING,
    ValueKind.COLOR,
    ValueKind.REFERENCE,
}

_MISSING_KEY: tuple = (0,)


def _typed_key(kind: ValueKind, value: Any) -> Any:
    if kind is ValueKind.COLOR:
        return value.channel_sum() if isinstance(value, Color) else 0.0
    if kind is ValueKind.REFERENCE:
        return value.name if isinstance(value, Asset) else ""
    if kind is ValueKind.STRING:
        return value if isinstance(value, str) else ""
    if kind is ValueKind.BOOLEAN:
        return bool(value)
    return value if isinstance(value, (int, float)) else 0


def key_function(
    column: int,
    fields: list[FieldDescriptor],
) -> Callable[[Any], Any] | None:
    """Sort key for *column*, or None when the column is not orderable."""
    if column in ACTION_COLUMNS:
        return None
    if column == NAME_COLUMN:
        return lambda record: record.name

    field = field_for_column(fields, column)
    if field is None or field.kind not in _ORDERABLE:
        return None

    def key(record: Any) -> Any:
        value = getattr(record, field.name, _MISSING_KEY)
        if value is _MISSING_KEY:
            return _MISSING_KEY
        return (1, _typed_key(field.kind, value))

    return key


def compare(column: int, a: Any, b: Any, fields: list[FieldDescriptor]) -> Ordering:
    """Three-way comparison of two records on *column*."""
    key = key_function(column, fields)
    if key is None:
        return Ordering.EQUAL
    ka, kb = key(a), key(b)
    if ka < kb:
        return Ordering.BEFORE
    if kb < ka:
        return Ordering.AFTER
    return Ordering.EQUAL


def sort_records(
    records: list[Any],
    state: SortState,
    fields: list[FieldDescriptor],
) -> list[Any]:
    """Stable sort of *records* per *state*; a new list is returned."""
    if state.column is None:
        return list(records)
    key = key_function(state.column, fields)
    if key is None:
        return list(records)
    # sorted() is stable for reverse=True as well
    return sorted(records, key=key, reverse=not state.ascending)


def is_sortable(column: int, column_count: int) -> bool:
    return column not in ACTION_COLUMNS and 0 <= column < column_count


def toggle(state: SortState, column: int, column_count: int) -> SortState:
    """Header click: flip direction on the active column, else activate it."""
    if not is_sortable(column, column_count):
        return state
    if state.column == column:
        return SortState(column, not state.ascending)
    return SortState(column, True)
