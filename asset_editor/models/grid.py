"""Grid data models: columns, sort state, search filter."""

from __future__ import annotations

from dataclasses import dataclass

from asset_editor.models.asset import FieldDescriptor

DUPLICATE_COLUMN = 0
DELETE_COLUMN = 1
NAME_COLUMN = 2
FIRST_FIELD_COLUMN = 3

ACTION_COLUMNS = (DUPLICATE_COLUMN, DELETE_COLUMN)


@dataclass
class Column:
    """Grid column; ``field`` is None for the three leading columns."""
    label: str
    width: float
    field: FieldDescriptor | None = None


@dataclass(frozen=True)
class SortState:
    """Active sort column (None = unsorted) and direction."""
    column: int | None = None
    ascending: bool = True


@dataclass
class SearchFilter:
    """Case-insensitive type/instance filters plus the derived-types flag."""
    type_filter: str = ""
    instance_filter: str = ""
    include_derived: bool = True


def field_for_column(fields: list[FieldDescriptor], column: int) -> FieldDescriptor | None:
    """Map a column index onto its field, or None for the leading columns."""
    idx = column - FIRST_FIELD_COLUMN
    if 0 <= idx < len(fields):
        return fields[idx]
    return None
