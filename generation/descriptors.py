"""Content descriptors: what to draw, independent of the style it is drawn in."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import config


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @classmethod
    def _missing_(cls, value):
        return cls.COMMON


class ItemType(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"

    @classmethod
    def _missing_(cls, value):
        return cls.ACCESSORY


class WeaponType(str, Enum):
    SWORD = "sword"
    AXE = "axe"
    MACE = "mace"
    STAFF = "staff"

    @classmethod
    def _missing_(cls, value):
        if value == "wand":
            return cls.STAFF
        return cls.SWORD


@dataclass
class CharacterDescriptor:
    """A humanoid to generate.

    Equipment flags left as None inherit from the StyleConfig's equipment.
    `glow` adds the class-coloured halo around the head.
    """
    class_id: str = "adventurer"
    palette_name: str = "warm"
    bloodline: Optional[str] = None
    helmet: Optional[bool] = None
    chest_armor: Optional[bool] = None
    weapon: Optional[bool] = None
    outline_thickness: Optional[int] = None
    glow: bool = False
    width: int = field(default_factory=lambda: config.SPRITE_SIZE)
    height: int = field(default_factory=lambda: config.SPRITE_SIZE)

    @property
    def effective_palette(self) -> str:
        return self.bloodline or self.palette_name

    @classmethod
    def from_dict(cls, d: dict) -> CharacterDescriptor:
        return cls(
            class_id=d.get("class_id", "adventurer"),
            palette_name=d.get("palette_name", "warm"),
            bloodline=d.get("bloodline"),
            helmet=d.get("helmet"),
            chest_armor=d.get("chest_armor"),
            weapon=d.get("weapon"),
            outline_thickness=d.get("outline_thickness"),
            glow=bool(d.get("glow", False)),
            width=int(d.get("width") or config.SPRITE_SIZE),
            height=int(d.get("height") or config.SPRITE_SIZE),
        )


@dataclass
class ItemDescriptor:
    """An inventory icon to generate."""
    item_type: ItemType = ItemType.WEAPON
    weapon_type: WeaponType = WeaponType.SWORD
    rarity: Rarity = Rarity.COMMON
    size: int = field(default_factory=lambda: config.ITEM_ICON_SIZE)

    @classmethod
    def from_dict(cls, d: dict) -> ItemDescriptor:
        return cls(
            item_type=ItemType(d.get("item_type", ItemType.WEAPON.value)),
            weapon_type=WeaponType(d.get("weapon_type") or WeaponType.SWORD.value),
            rarity=Rarity(d.get("rarity", Rarity.COMMON.value)),
            size=int(d.get("size") or config.ITEM_ICON_SIZE),
        )


def descriptor_from_dict(d: dict) -> CharacterDescriptor | ItemDescriptor:
    """`{"kind": "character" | "item", ...}` → the matching descriptor."""
    if d.get("kind") == "item":
        return ItemDescriptor.from_dict(d)
    return CharacterDescriptor.from_dict(d)
