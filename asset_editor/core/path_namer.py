"""Collision-free path proposals for duplicated and newly created assets.

Pure functions over POSIX asset paths. Existence is checked through a
caller-supplied predicate so storage is never touched here.

Examples (with nothing else on disk)::

    Weapons/Axe3.asset    -> Weapons/Axe4.asset
    Weapons/Shield.asset  -> Weapons/Shield_Copy1.asset
    Weapons/Foo_Copy2.asset -> Weapons/Foo_Copy3.asset
"""

from __future__ import annotations

import posixpath
from typing import Callable

from asset_editor.constants import COPY_SUFFIX
from asset_editor.core.errors import PathError

ExistsFn = Callable[[str], bool]


def split_numeric_suffix(stem: str) -> tuple[str, int | None]:
    """Split *stem* into its prefix and maximal trailing run of ASCII digits.

    >>> split_numeric_suffix("Axe12")
    ('Axe', 12)
    >>> split_numeric_suffix("Shield")
    ('Shield', None)
    """
    pos = len(stem)
    while pos > 0 and "0" <= stem[pos - 1] <= "9":
        pos -= 1
    if pos == len(stem):
        return stem, None
    return stem[:pos], int(stem[pos:])


def _decompose(path: str) -> tuple[str, str, str]:
    if not path:
        raise PathError("InvalidPath: empty path")
    directory, filename = posixpath.split(path)
    stem, ext = posixpath.splitext(filename)
    if not stem:
        raise PathError(f"InvalidPath: {path!r}")
    return directory, stem, ext


def unique_path(original: str, exists: ExistsFn) -> str:
    """Propose a free sibling path for a copy of *original*.

    A trailing number is incremented (``Axe3`` -> ``Axe4``); otherwise
    ``_Copy<n>`` is appended starting at 1. The index keeps increasing until
    *exists* reports the candidate free.

    Raises:
        PathError: *original* is empty or has no file stem.
    """
    directory, stem, ext = _decompose(original)
    prefix, index = split_numeric_suffix(stem)
    if index is None:
        prefix, index = stem + COPY_SUFFIX, 0

    while True:
        index += 1
        candidate = posixpath.join(directory, f"{prefix}{index}{ext}")
        if not exists(candidate):
            return candidate


def next_available_path(base: str, exists: ExistsFn) -> str:
    """Host-style fallback namer: ``Name.asset``, ``Name 1.asset``, ...

    Used for bulk creation where the user picked *base* in a save dialog.
    """
    if not exists(base):
        return base
    directory, stem, ext = _decompose(base)
    prefix, index = split_numeric_suffix(stem)
    if index is None or not prefix.endswith(" "):
        prefix, index = stem + " ", 0
    while True:
        index += 1
        candidate = posixpath.join(directory, f"{prefix}{index}{ext}")
        if not exists(candidate):
            return candidate
