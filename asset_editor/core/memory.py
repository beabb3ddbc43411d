"""Best-effort in-memory size measurement for loaded assets."""

from __future__ import annotations

import logging
import sys
from typing import Any

from asset_editor.models.asset import Asset

logger = logging.getLogger(__name__)


def measure_size(obj: Any) -> int:
    """Deep size of *obj* in bytes.

    Referenced assets are counted as a pointer only; they are measured as
    records of their own. Failures yield 0.
    """
    try:
        return _deep_size(obj, set(), root=True)
    except Exception:
        logger.warning("Memory measurement failed for %r", obj, exc_info=True)
        return 0


def _deep_size(obj: Any, seen: set[int], root: bool = False) -> int:
    if id(obj) in seen:
        return 0
    seen.add(id(obj))
    size = sys.getsizeof(obj)
    if isinstance(obj, Asset) and not root:
        return 0
    if isinstance(obj, (str, bytes, bytearray, int, float, bool)) or obj is None:
        return size
    if isinstance(obj, dict):
        size += sum(_deep_size(k, seen) + _deep_size(v, seen) for k, v in obj.items())
    elif isinstance(obj, (list, tuple, set, frozenset)):
        size += sum(_deep_size(v, seen) for v in obj)
    if hasattr(obj, "__dict__"):
        size += _deep_size(vars(obj), seen)
    return size


def format_kb(num_bytes: int) -> str:
    return f"{num_bytes / 1024:.1f} KB"
