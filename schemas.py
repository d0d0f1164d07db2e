"""Pydantic request bodies for the HTTP service."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """One reference image (base64 PNG, optionally a data: URL)."""
    image: str
    max_colors: Optional[int] = Field(default=None, ge=0, le=256)


class AnalyzeBatchRequest(BaseModel):
    images: list[str]
    max_colors: Optional[int] = Field(default=None, ge=0, le=256)
    merge_strategy: Optional[str] = None   # first | majority


class DescriptorModel(BaseModel):
    """What to draw. kind=character uses the character fields, kind=item the item fields."""
    kind: str = "character"                # character | item
    # character
    class_id: str = "adventurer"
    palette_name: str = "warm"
    bloodline: Optional[str] = None
    helmet: Optional[bool] = None
    chest_armor: Optional[bool] = None
    weapon: Optional[bool] = None
    outline_thickness: Optional[int] = Field(default=None, ge=0, le=3)
    glow: Optional[bool] = None
    width: Optional[int] = Field(default=None, ge=1, le=256)
    height: Optional[int] = Field(default=None, ge=1, le=256)
    # item
    item_type: str = "weapon"              # weapon | armor | accessory
    weapon_type: Optional[str] = None      # sword | axe | mace | staff
    rarity: str = "common"
    size: Optional[int] = Field(default=None, ge=1, le=256)


class GenerateRequest(BaseModel):
    style: Optional[dict] = None           # StyleConfig.to_dict() output
    descriptor: DescriptorModel = Field(default_factory=DescriptorModel)
    seed: Optional[int] = None


class ValidateRequest(BaseModel):
    image: str
    style: Optional[dict] = None


class VariationsRequest(BaseModel):
    image: str
    count: int = Field(default=4, ge=0, le=64)
    seed: Optional[int] = None
    color_variation: Optional[float] = Field(default=None, ge=0, le=1)
    size_variation: Optional[float] = Field(default=None, ge=0, le=1)


class PaletteBody(BaseModel):
    """category → list of colours; each colour a packed int or "#RRGGBB"."""
    palette: dict[str, list[int | str]]
