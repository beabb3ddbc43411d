"""Object set — the filtered, sorted, memory-annotated working set.

Built for one selected type. ``reload`` replaces every collection at once;
``resort`` only reorders the filtered records.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from asset_editor.core.errors import StoreError
from asset_editor.core.memory import measure_size
from asset_editor.core.sort_engine import sort_records
from asset_editor.models.asset import Asset, FieldDescriptor, TypeDescriptor
from asset_editor.models.grid import SearchFilter, SortState
from asset_editor.store.asset_store import FileAssetStore

logger = logging.getLogger(__name__)

SizeFn = Callable[[Any], int]


def matches_type(record: Any, target: type, include_derived: bool) -> bool:
    if include_derived:
        return isinstance(record, target)
    return type(record) is target


def matches_name(record: Asset, needle: str) -> bool:
    return not needle or needle.casefold() in record.name.casefold()


class ObjectSet:
    """Working set of records for the selected type."""

    def __init__(self, store: FileAssetStore, size_of: SizeFn = measure_size):
        self._store = store
        self._size_of = size_of
        self._all: list[Asset] = []
        self._filtered: list[Asset] = []
        self._memory: dict[int, int] = {}

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def all_records(self) -> list[Asset]:
        return list(self._all)

    @property
    def records(self) -> list[Asset]:
        """Filtered, sorted records (the rows of the grid)."""
        return list(self._filtered)

    def __len__(self) -> int:
        return len(self._filtered)

    def __iter__(self):
        return iter(self._filtered)

    @property
    def total_memory_all(self) -> int:
        return sum(self._memory.values())

    @property
    def total_memory_filtered(self) -> int:
        return sum(self._memory.get(id(r), 0) for r in self._filtered)

    def memory_of(self, record: Asset) -> int:
        return self._memory.get(id(record), 0)

    # ------------------------------------------------------------------
    # Load / sort
    # ------------------------------------------------------------------

    def clear(self) -> None:
        self._all, self._filtered, self._memory = [], [], {}

    def reload(
        self,
        scope: str,
        type_desc: TypeDescriptor | None,
        search: SearchFilter,
    ) -> None:
        """Load, measure and filter the records of *type_desc*.

        Records come back in storage order; call ``resort`` once the column
        schema is known.

        Args:
            scope: Asset folder to search.
            type_desc: Selected type (None empties the set).
            search: Instance filter and include-derived flag.
        """
        if type_desc is None:
            self.clear()
            return

        loaded: list[Asset] = []
        for path in self._store.find_records(scope, type_desc.cls):
            try:
                record = self._store.load(path)
            except StoreError:
                logger.warning("Skipping unreadable asset %s", path, exc_info=True)
                continue
            if matches_type(record, type_desc.cls, search.include_derived):
                loaded.append(record)

        memory = {id(r): self._measure(r) for r in loaded}
        filtered = [r for r in loaded if matches_name(r, search.instance_filter)]

        self._all, self._filtered, self._memory = loaded, filtered, memory

    def representative(self, type_desc: TypeDescriptor | None) -> Asset | None:
        """Record the column schema is derived from.

        The first filtered record of exactly *type_desc*, else the first
        filtered record. Chosen in storage order so re-sorting never changes
        the columns.
        """
        candidates = sorted(self._filtered, key=lambda r: r.asset_path or "")
        for record in candidates:
            if type_desc is not None and type(record) is type_desc.cls:
                return record
        return candidates[0] if candidates else None

    def resort(self, sort_state: SortState, fields: list[FieldDescriptor]) -> None:
        self._filtered = sort_records(self._filtered, sort_state, fields)

    def _measure(self, record: Asset) -> int:
        try:
            return max(0, int(self._size_of(record)))
        except Exception:
            logger.warning("Size measurement failed for %s", record.name, exc_info=True)
            return 0
