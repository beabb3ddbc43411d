"""Serialization utilities — asset dataclass ↔ JSON-safe dict conversion.

Handles Enum fields, colours, asset references (stored as asset paths) and
nested dataclasses. Deserialization is driven by the resolved type hints.
"""

from __future__ import annotations

import dataclasses
import importlib
import typing
from enum import Enum
from typing import Any, Callable

from asset_editor.core.errors import StoreError
from asset_editor.models.asset import Asset, Color, qualified_id
from asset_editor.store.reflection import unwrap_annotation

ReferenceResolver = Callable[[str], Any]


# =====================================================================
# Generic helpers
# =====================================================================


def _serialize_value(val: Any) -> Any:
    """Convert a value to a JSON-safe type."""
    if val is None:
        return None
    if isinstance(val, Asset):
        return val.asset_path
    if isinstance(val, Color):
        return list(val.channels())
    if isinstance(val, Enum):
        return val.value
    if dataclasses.is_dataclass(val) and not isinstance(val, type):
        return _dataclass_to_dict(val)
    if isinstance(val, (list, tuple)):
        return [_serialize_value(v) for v in val]
    if isinstance(val, dict):
        return {str(k): _serialize_value(v) for k, v in val.items()}
    if isinstance(val, (int, float, str, bool)):
        return val
    return str(val)


def _dataclass_to_dict(obj: Any) -> dict:
    """Recursively convert a dataclass to a JSON-safe dict."""
    result = {}
    for f in dataclasses.fields(obj):
        result[f.name] = _serialize_value(getattr(obj, f.name))
    return result


def _deserialize_value(hint: Any, raw: Any, resolve: ReferenceResolver) -> Any:
    base, _ = unwrap_annotation(hint)
    if raw is None:
        return None
    if typing.get_origin(base) is not None or not isinstance(base, type):
        return raw
    if issubclass(base, Asset):
        return resolve(raw)
    if base is Color:
        return Color(*[float(c) for c in raw])
    if issubclass(base, Enum):
        return base(raw)
    if base is float and isinstance(raw, int):
        return float(raw)
    if dataclasses.is_dataclass(base) and isinstance(raw, dict):
        return _dict_to_dataclass(base, raw, resolve)
    return raw


def _dict_to_dataclass(cls: type, data: dict, resolve: ReferenceResolver) -> Any:
    """Build *cls* from *data*; unknown keys ignored, missing keys defaulted."""
    hints = typing.get_type_hints(cls, include_extras=True)
    kwargs = {}
    for f in dataclasses.fields(cls):
        if f.name in data and f.init:
            kwargs[f.name] = _deserialize_value(hints.get(f.name, f.type), data[f.name], resolve)
    return cls(**kwargs)


# =====================================================================
# Asset documents
# =====================================================================


def asset_to_document(record: Asset) -> dict:
    """Serialize an asset to the on-disk document shape."""
    return {
        "type": qualified_id(type(record)),
        "fields": _dataclass_to_dict(record),
    }


def document_to_asset(doc: dict, resolve: ReferenceResolver) -> Asset:
    """Rebuild an asset from its document.

    Raises:
        StoreError: Malformed document or unresolvable type.
    """
    try:
        cls = resolve_type(doc["type"])
        return _dict_to_dataclass(cls, doc.get("fields", {}), resolve)
    except StoreError:
        raise
    except (KeyError, TypeError, ValueError, NameError) as exc:
        raise StoreError(f"Malformed asset document: {exc}") from exc


def resolve_type(type_id: str) -> type:
    """Import the asset class named by ``module:QualName``.

    Raises:
        StoreError: Module or class cannot be found, or is not an Asset.
    """
    module_name, _, qualname = type_id.partition(":")
    try:
        obj: Any = importlib.import_module(module_name)
        for part in qualname.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError, ValueError) as exc:
        raise StoreError(f"Unknown asset type: {type_id}") from exc
    if not (isinstance(obj, type) and issubclass(obj, Asset) and dataclasses.is_dataclass(obj)):
        raise StoreError(f"Not an asset dataclass: {type_id}")
    return obj
