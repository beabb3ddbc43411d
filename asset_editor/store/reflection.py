"""Reflection provider over dataclass-based assets.

Reads declared fields with ``dataclasses.fields`` and resolves annotations
with ``typing.get_type_hints(include_extras=True)`` so ``Annotated`` extras
can carry constraint markers::

    @dataclass
    class Weapon(Asset):
        damage: Annotated[int, Range(0, 100)] = 10
        notes: str = field(default="", metadata={"constraints": TextArea(4)})
"""

from __future__ import annotations

import dataclasses
import logging
import types
import typing
from typing import Any

from asset_editor.core.errors import SchemaError
from asset_editor.models.asset import (
    CONSTRAINT_TYPES,
    Asset,
    Color,
    FieldDescriptor,
    ValueKind,
)

logger = logging.getLogger(__name__)

_SCALAR_KINDS: dict[type, ValueKind] = {
    bool: ValueKind.BOOLEAN,
    int: ValueKind.INTEGER,
    float: ValueKind.FLOAT,
    str: ValueKind.STRING,
    Color: ValueKind.COLOR,
}


def unwrap_annotation(hint: Any) -> tuple[Any, tuple]:
    """Strip ``Annotated`` and ``Optional`` wrappers.

    Returns:
        (base type, annotated extras)
    """
    extras: tuple = ()
    if typing.get_origin(hint) is typing.Annotated:
        extras = tuple(hint.__metadata__)
        hint = typing.get_args(hint)[0]

    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return unwrap_annotation(args[0])[0], extras
    return hint, extras


def classify(hint: Any) -> ValueKind:
    """Map a resolved annotation onto a ValueKind.

    Raises:
        SchemaError: *hint* is not a class (e.g. an unresolved string).
    """
    if typing.get_origin(hint) is not None:
        return ValueKind.OPAQUE
    if not isinstance(hint, type):
        raise SchemaError(f"Unclassifiable annotation: {hint!r}")
    # bool before int: bool is an int subclass
    for scalar, kind in _SCALAR_KINDS.items():
        if hint is scalar:
            return kind
    if issubclass(hint, Asset):
        return ValueKind.REFERENCE
    return ValueKind.OPAQUE


class DataclassReflection:
    """Reflection capability for ``Asset`` dataclasses."""

    def fields_of(self, record: Any) -> list[FieldDescriptor]:
        """Visible fields of *record* in declaration order."""
        cls = type(record)
        hints = self._hints(cls)
        result = []
        for f in self._visible_fields(cls):
            hint = hints.get(f.name, f.type)
            base, extras = unwrap_annotation(hint)
            try:
                kind = classify(base)
            except SchemaError:
                logger.debug("Field %s.%s classified as opaque", cls.__name__, f.name)
                kind = ValueKind.OPAQUE
            result.append(FieldDescriptor(
                name=f.name,
                kind=kind,
                constraint=self._pick_constraint(extras, f.metadata),
                value_type=base,
            ))
        return result

    def has_field(self, record: Any, name: str) -> bool:
        return any(f.name == name for f in self._visible_fields(type(record)))

    def get_field(self, record: Any, name: str) -> Any:
        if not self.has_field(record, name):
            raise KeyError(name)
        return getattr(record, name)

    def set_field(self, record: Any, name: str, value: Any) -> None:
        if not self.has_field(record, name):
            raise KeyError(name)
        setattr(record, name, value)

    def constraints_of(self, asset_cls: type, field_name: str) -> Any:
        """Constraint marker declared on *field_name*, or None."""
        hints = self._hints(asset_cls)
        for f in self._visible_fields(asset_cls):
            if f.name == field_name:
                _, extras = unwrap_annotation(hints.get(f.name, f.type))
                return self._pick_constraint(extras, f.metadata)
        return None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _visible_fields(cls: type) -> list[dataclasses.Field]:
        if not dataclasses.is_dataclass(cls):
            return []
        return [
            f for f in dataclasses.fields(cls)
            if not f.name.startswith("_") and not f.metadata.get("hidden", False)
        ]

    @staticmethod
    def _hints(cls: type) -> dict[str, Any]:
        try:
            return typing.get_type_hints(cls, include_extras=True)
        except Exception:
            # Unresolvable forward references: keep raw annotations
            logger.debug("Could not resolve type hints for %s", cls.__name__, exc_info=True)
            return {}

    @staticmethod
    def _pick_constraint(extras: tuple, metadata: Any) -> Any:
        declared = metadata.get("constraints", ()) if metadata else ()
        if isinstance(declared, CONSTRAINT_TYPES):
            declared = (declared,)
        for marker in (*extras, *declared):
            if isinstance(marker, CONSTRAINT_TYPES):
                return marker
        return None
