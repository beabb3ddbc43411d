"""Asset data models.

Defines the record base class, field/type descriptors, and the constraint
markers that drive editor selection in the grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Union


class ValueKind(Enum):
    INTEGER = "integer"
    BOOLEAN = "boolean"
    FLOAT = "float"
    STRING = "string"
    COLOR = "color"
    REFERENCE = "reference"
    OPAQUE = "opaque"


# ------------------------------------------------------------------
# Constraint markers
# ------------------------------------------------------------------

@dataclass(frozen=True)
class Range:
    """Closed numeric range [min, max] for slider editors."""
    min: float
    max: float


@dataclass(frozen=True)
class Min:
    """Numeric lower bound without an upper bound."""
    min: float


@dataclass(frozen=True)
class TextArea:
    """Multi-line text hint.

    Attributes:
        min_lines: Minimum number of visible lines.
    """
    min_lines: int = 3


@dataclass(frozen=True)
class ColorUsage:
    """Display hint for colour fields."""
    show_alpha: bool = True
    hdr: bool = False


Constraint = Union[Range, Min, TextArea, ColorUsage]
CONSTRAINT_TYPES = (Range, Min, TextArea, ColorUsage)


@dataclass(frozen=True)
class Color:
    """RGBA colour, channels as floats (HDR values may exceed 1.0)."""
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    def channels(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def channel_sum(self) -> float:
        return self.r + self.g + self.b + self.a


# ------------------------------------------------------------------
# Records
# ------------------------------------------------------------------

class Asset:
    """Base class for records editable in the grid.

    Subclasses are dataclasses. The storage location is kept outside the
    dataclass fields so it never shows up as a column.

    A subclass declaring ``__abstract__ = True`` in its own body is never
    offered in the type selector.
    """

    __abstract__ = True

    asset_path: str | None = None

    @property
    def name(self) -> str:
        """Display name: the asset file stem."""
        if self.asset_path:
            return PurePosixPath(self.asset_path).stem
        return type(self).__name__

    @classmethod
    def is_abstract(cls) -> bool:
        return bool(cls.__dict__.get("__abstract__", False))


@dataclass(frozen=True)
class TypeDescriptor:
    """Identifies an asset type.

    Attributes:
        name: Class name (shown in the type selector).
        qualified_id: ``module:QualName``; stable persistence key.
        module: Defining module (the "source module" filter).
        abstract: Abstract types are never selectable.
        cls: The asset class itself.
    """
    name: str
    qualified_id: str
    module: str
    abstract: bool
    cls: type

    @classmethod
    def from_class(cls, asset_cls: type) -> TypeDescriptor:
        return cls(
            name=asset_cls.__name__,
            qualified_id=qualified_id(asset_cls),
            module=asset_cls.__module__,
            abstract=asset_cls.is_abstract() if issubclass(asset_cls, Asset) else True,
            cls=asset_cls,
        )


def qualified_id(asset_cls: type) -> str:
    return f"{asset_cls.__module__}:{asset_cls.__qualname__}"


@dataclass(frozen=True)
class FieldDescriptor:
    """One editable field of an asset type.

    Attributes:
        name: Field name; column label and get/set key.
        kind: Declared value kind.
        constraint: Optional constraint marker.
        value_type: Resolved annotation (referenced class for REFERENCE).
    """
    name: str
    kind: ValueKind
    constraint: Any = None
    value_type: Any = None
