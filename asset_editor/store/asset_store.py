"""File asset store — JSON ``.asset`` documents under a project root.

Asset paths are POSIX strings relative to the project root
(``Assets/Weapons/Axe.asset``). Loaded records are cached by path and
revalidated against the file mtime, so reloading the same files hands back
the same instances.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path, PurePosixPath
from typing import Any

from asset_editor.constants import ASSET_EXTENSION
from asset_editor.core.errors import StoreError
from asset_editor.core.path_namer import next_available_path
from asset_editor.models.asset import Asset, TypeDescriptor
from asset_editor.store.serializers import asset_to_document, document_to_asset

logger = logging.getLogger(__name__)


class FileAssetStore:
    """Record store over a directory tree of ``.asset`` JSON files."""

    def __init__(self, root: Path | str, extension: str = ASSET_EXTENSION):
        self._root = Path(root)
        self._extension = extension
        # asset_path -> (mtime_ns, record)
        self._cache: dict[str, tuple[int, Asset]] = {}
        self._loading: set[str] = set()

    @property
    def root(self) -> Path:
        return self._root

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_records(self, scope: str, type_filter: type | None = None) -> list[str]:
        """Sorted asset paths under *scope*.

        Args:
            scope: Asset path of the folder to search.
            type_filter: Keep only records of this class or a subclass.
        """
        folder = self._abs(scope)
        if not folder.is_dir():
            return []
        paths = sorted(
            p.relative_to(self._root).as_posix()
            for p in folder.rglob(f"*{self._extension}")
            if p.is_file()
        )
        if type_filter is None:
            return paths

        result = []
        for path in paths:
            try:
                record = self.load(path)
            except StoreError:
                logger.warning("Skipping unreadable asset %s", path, exc_info=True)
                continue
            if isinstance(record, type_filter):
                result.append(path)
        return result

    def exists(self, path: str) -> bool:
        return self._abs(path).exists()

    def check_path(self, path: str) -> None:
        """Raise StoreError unless *path* stays inside the project root."""
        self._abs(path)

    def path_of(self, record: Asset) -> str:
        if not record.asset_path:
            raise StoreError(f"{type(record).__name__} has no storage location")
        return record.asset_path

    def unique_available_path(self, base_path: str) -> str:
        return next_available_path(base_path, self.exists)

    # ------------------------------------------------------------------
    # Load / save
    # ------------------------------------------------------------------

    def load(self, path: str) -> Asset:
        """Load (or return the cached) record at *path*.

        Raises:
            StoreError: File missing, unreadable, or not a valid asset.
        """
        file = self._abs(path)
        try:
            mtime = file.stat().st_mtime_ns
        except OSError as exc:
            raise StoreError(f"Cannot stat {path}: {exc}") from exc

        cached = self._cache.get(path)
        if cached is not None and cached[0] == mtime:
            return cached[1]

        try:
            doc = json.loads(file.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read {path}: {exc}") from exc
        if not isinstance(doc, dict):
            raise StoreError(f"Malformed asset document: {path}")

        self._loading.add(path)
        try:
            record = document_to_asset(doc, self._resolve_reference)
        finally:
            self._loading.discard(path)
        if cached is not None:
            # Refresh in place so views holding the old instance stay valid
            target = cached[1]
            if type(target) is type(record):
                target.__dict__.update(record.__dict__)
                record = target
        record.asset_path = path
        self._cache[path] = (mtime, record)
        return record

    def save(self, record: Asset) -> None:
        """Write *record* to its asset path.

        Raises:
            StoreError: No asset path or write failure.
        """
        path = self.path_of(record)
        file = self._abs(path)
        try:
            file.parent.mkdir(parents=True, exist_ok=True)
            file.write_text(
                json.dumps(asset_to_document(record), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
            self._cache[path] = (file.stat().st_mtime_ns, record)
        except (OSError, TypeError, ValueError) as exc:
            raise StoreError(f"Cannot save {path}: {exc}") from exc

    def create(self, type_desc: TypeDescriptor, path: str) -> Asset:
        """Create a default-constructed record of *type_desc* at *path*."""
        try:
            record = type_desc.cls()
        except TypeError as exc:
            raise StoreError(f"{type_desc.name} has required fields without defaults") from exc
        record.asset_path = path
        self.save(record)
        return record

    def duplicate_at(self, record: Asset, path: str) -> Asset:
        """Persist a value copy of *record* at *path*.

        Asset references are shared, not deep-copied.
        """
        if self.exists(path):
            raise StoreError(f"Target already exists: {path}")
        memo: dict[int, Any] = {
            id(v): v for v in vars(record).values() if isinstance(v, Asset)
        }
        try:
            clone = copy.deepcopy(record, memo)
        except (copy.Error, TypeError, ValueError) as exc:
            raise StoreError(f"Cannot copy {record.name}: {exc}") from exc
        clone.asset_path = path
        self.save(clone)
        return clone

    def delete(self, path: str) -> None:
        """Remove the asset file at *path*.

        Raises:
            StoreError: File missing or cannot be removed.
        """
        try:
            self._abs(path).unlink()
        except OSError as exc:
            raise StoreError(f"Cannot delete {path}: {exc}") from exc
        self._cache.pop(path, None)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _abs(self, path: str) -> Path:
        rel = PurePosixPath(path)
        if rel.is_absolute() or ".." in rel.parts:
            raise StoreError(f"Asset path escapes the project root: {path}")
        return self._root.joinpath(*rel.parts)

    def _resolve_reference(self, path: str) -> Asset | None:
        if path in self._loading:
            logger.warning("Cyclic asset reference to %s left unset", path)
            return None
        try:
            return self.load(path)
        except StoreError:
            logger.warning("Dangling asset reference %s", path)
            return None

    def to_asset_path(self, file_path: Path | str) -> str:
        """Convert a filesystem path inside the root to an asset path.

        Raises:
            StoreError: *file_path* is outside the project root.
        """
        try:
            return Path(file_path).resolve().relative_to(self._root.resolve()).as_posix()
        except ValueError as exc:
            raise StoreError(f"{file_path} is outside {self._root}") from exc
