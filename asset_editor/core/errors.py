"""Error taxonomy for the asset editor.

Every error is recovered at a known seam; none of them reaches the user as a
crash:

- ``SchemaError``: field value kind cannot be classified (opaque fallback).
- ``PathError``: a duplicate/create path cannot be derived (no-op).
- ``StoreError``: create/save/delete/load failed on disk (working set kept).
- ``PersistedLayoutError``: stored column widths unusable (defaults).
"""


class AssetEditorError(Exception):
    """Base class for all asset editor errors."""


class SchemaError(AssetEditorError):
    pass


class PathError(AssetEditorError):
    """Raised when a path cannot be decomposed (InvalidPath)."""


class StoreError(AssetEditorError):
    pass


class PersistedLayoutError(AssetEditorError):
    pass
