"""Schema introspector — column schema from a representative record.

Field descriptors are derived once per record class and cached; every row
of the grid is then read positionally against that same sequence through
named get/set on the reflection provider.
"""

from __future__ import annotations

import logging
from typing import Any

from asset_editor.constants import (
    DELETE_COLUMN_WIDTH,
    DUPLICATE_COLUMN_WIDTH,
    FIELD_WIDTH_PER_CHAR,
    MIN_FIELD_COLUMN_WIDTH,
    NAME_COLUMN_WIDTH,
)
from asset_editor.models.asset import FieldDescriptor
from asset_editor.models.grid import FIRST_FIELD_COLUMN, Column
from asset_editor.store.reflection import DataclassReflection

logger = logging.getLogger(__name__)

LEADING_LABELS = ("Actions", "Delete", "Instance Name")


class SchemaIntrospector:
    """Derives ordered FieldDescriptors; never raises."""

    def __init__(self, reflection: DataclassReflection | None = None):
        self._reflection = reflection or DataclassReflection()
        self._cache: dict[type, tuple[FieldDescriptor, ...]] = {}

    @property
    def reflection(self) -> DataclassReflection:
        return self._reflection

    def describe_fields(self, sample: Any) -> list[FieldDescriptor]:
        """Visible fields of *sample* in declaration order.

        Args:
            sample: Representative record, or None for an empty working set.
        """
        if sample is None:
            return []
        cls = type(sample)
        cached = self._cache.get(cls)
        if cached is None:
            try:
                cached = tuple(self._reflection.fields_of(sample))
            except Exception:
                logger.warning("Field introspection failed for %s", cls.__name__, exc_info=True)
                cached = ()
            self._cache[cls] = cached
        return list(cached)

    def clear(self) -> None:
        """Forget cached schemas (after a module reload)."""
        self._cache.clear()


def default_widths(fields: list[FieldDescriptor]) -> list[float]:
    """Default pixel widths for the leading columns plus *fields*."""
    widths: list[float] = [DUPLICATE_COLUMN_WIDTH, DELETE_COLUMN_WIDTH, NAME_COLUMN_WIDTH]
    widths.extend(
        max(MIN_FIELD_COLUMN_WIDTH, len(f.name) * FIELD_WIDTH_PER_CHAR) for f in fields
    )
    return widths


def build_columns(fields: list[FieldDescriptor], widths: list[float]) -> list[Column]:
    """Pair the three leading columns and *fields* with *widths*.

    Raises:
        ValueError: ``len(widths)`` does not match the column count.
    """
    if len(widths) != FIRST_FIELD_COLUMN + len(fields):
        raise ValueError(
            f"Expected {FIRST_FIELD_COLUMN + len(fields)} widths, got {len(widths)}"
        )
    columns = [Column(label, widths[i]) for i, label in enumerate(LEADING_LABELS)]
    columns.extend(
        Column(f.name, widths[FIRST_FIELD_COLUMN + i], f) for i, f in enumerate(fields)
    )
    return columns
