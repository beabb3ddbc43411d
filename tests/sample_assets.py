"""Asset types used across the test suite."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Optional

from asset_editor.models.asset import (
    Asset,
    Color,
    ColorUsage,
    Min,
    Range,
    TextArea,
    TypeDescriptor,
)


class Rarity(Enum):
    COMMON = "common"
    RARE = "rare"


@dataclass
class Item(Asset):
    __abstract__ = True

    price: Annotated[int, Min(0)] = 0


@dataclass
class Weapon(Item):
    damage: Annotated[int, Range(0, 100)] = 10
    speed: Annotated[float, Range(0.0, 2.0)] = 1.0
    weight: Annotated[float, Min(0.5)] = 1.0
    ranged: bool = False
    description: str = field(default="", metadata={"constraints": TextArea(4)})
    tint: Color = field(default_factory=Color)
    glow: Annotated[Color, ColorUsage(show_alpha=False, hdr=True)] = field(
        default_factory=lambda: Color(2.0, 1.0, 0.5, 1.0),
    )
    ammo: Optional["Weapon"] = None
    rarity: Rarity = Rarity.COMMON
    tags: list[str] = field(default_factory=list)
    _uses: int = 0


@dataclass
class Bow(Weapon):
    draw_strength: float = 5.0


@dataclass
class Shield(Item):
    armor: int = 5
    notes: str = field(default="", metadata={"hidden": True})


@dataclass
class Potion(Asset):
    heal: int = 20
    label: str = ""


WEAPON = TypeDescriptor.from_class(Weapon)
BOW = TypeDescriptor.from_class(Bow)
SHIELD = TypeDescriptor.from_class(Shield)
POTION = TypeDescriptor.from_class(Potion)


def make_asset(store, cls, path, **values):
    """Create and persist a record of *cls* at *path* with *values* set."""
    record = store.create(TypeDescriptor.from_class(cls), path)
    for name, value in values.items():
        setattr(record, name, value)
    store.save(record)
    return record
