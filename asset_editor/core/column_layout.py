"""Column layout store — per-type column widths in the preference store.

Widths are kept as a comma-separated string under
``column_widths/<module:QualName>``. A stored layout whose count does not
match the current column count is discarded in favour of defaults.
"""

from __future__ import annotations

import logging
import math
from typing import Protocol

from asset_editor.constants import COLUMN_WIDTHS_KEY_PREFIX, MIN_COLUMN_WIDTH
from asset_editor.core.errors import PersistedLayoutError
from asset_editor.core.schema_introspector import default_widths
from asset_editor.models.asset import FieldDescriptor, TypeDescriptor

logger = logging.getLogger(__name__)


class PreferenceStore(Protocol):
    def get(self, key: str, default: str | None = None) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


def layout_key(type_desc: TypeDescriptor) -> str:
    return f"{COLUMN_WIDTHS_KEY_PREFIX}{type_desc.qualified_id}"


def parse_widths(data: str, expected_count: int) -> list[float]:
    """Parse a stored width string.

    Raises:
        PersistedLayoutError: Unparsable entry, non-finite or too-small
            width, or wrong count.
    """
    try:
        widths = [float(part) for part in data.split(",")]
    except ValueError as exc:
        raise PersistedLayoutError(f"Unparsable widths: {data!r}") from exc
    if len(widths) != expected_count:
        raise PersistedLayoutError(
            f"Stored {len(widths)} widths, expected {expected_count}"
        )
    if any(not math.isfinite(w) or w < MIN_COLUMN_WIDTH for w in widths):
        raise PersistedLayoutError(f"Invalid width in {data!r}")
    return widths


def format_widths(widths: list[float]) -> str:
    return ",".join(f"{w:.10g}" for w in widths)


class ColumnLayoutStore:
    """Loads and saves per-type column widths."""

    def __init__(self, prefs: PreferenceStore):
        self._prefs = prefs

    def load(self, type_desc: TypeDescriptor, fields: list[FieldDescriptor]) -> list[float]:
        """Stored widths for *type_desc*, or defaults for *fields*."""
        defaults = default_widths(fields)
        data = self._prefs.get(layout_key(type_desc))
        if data is None:
            return defaults
        try:
            return parse_widths(data, len(defaults))
        except PersistedLayoutError:
            logger.debug("Discarding stored layout for %s", type_desc.name, exc_info=True)
            return defaults

    def save(self, type_desc: TypeDescriptor, widths: list[float]) -> None:
        self._prefs.set(layout_key(type_desc), format_widths(widths))

    def reset(self, type_desc: TypeDescriptor) -> None:
        self._prefs.delete(layout_key(type_desc))
