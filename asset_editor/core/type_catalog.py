"""Type catalog — asset types that have instances under a scope path."""

from __future__ import annotations

import logging

from asset_editor.constants import ALL_MODULES
from asset_editor.core.errors import StoreError
from asset_editor.models.asset import Asset, TypeDescriptor
from asset_editor.store.asset_store import FileAssetStore

logger = logging.getLogger(__name__)


class TypeCatalog:
    """Discovers selectable asset types from the records on disk.

    A type counts as discovered when at least one record under the scope
    is of that type or one of its subtypes.
    """

    def __init__(self, store: FileAssetStore):
        self._store = store

    def _instance_types(self, scope: str) -> list[type]:
        found: dict[type, None] = {}
        for path in self._store.find_records(scope):
            try:
                record = self._store.load(path)
            except StoreError:
                logger.warning("Skipping unreadable asset %s", path, exc_info=True)
                continue
            for cls in type(record).__mro__:
                if isinstance(cls, type) and issubclass(cls, Asset) and cls is not Asset:
                    found.setdefault(cls)
        return list(found)

    def discover_types(
        self,
        scope: str,
        module_filter: str = ALL_MODULES,
        name_filter: str = "",
    ) -> list[TypeDescriptor]:
        """Non-abstract discovered types sorted by name.

        Args:
            scope: Asset folder to search.
            module_filter: Defining module, or ``ALL_MODULES``.
            name_filter: Case-insensitive substring of the type name.
        """
        needle = name_filter.casefold()
        result = []
        for cls in self._instance_types(scope):
            desc = TypeDescriptor.from_class(cls)
            if desc.abstract:
                continue
            if module_filter != ALL_MODULES and desc.module != module_filter:
                continue
            if needle and needle not in desc.name.casefold():
                continue
            result.append(desc)
        result.sort(key=lambda d: (d.name, d.qualified_id))
        return result

    def available_modules(self, scope: str) -> list[str]:
        """Sorted modules defining at least one discoverable type."""
        return sorted({d.module for d in self.discover_types(scope)})
