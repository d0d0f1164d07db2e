"""StyleConfig: the one record that crosses from analysis into generation."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType

from engine.color import parse_color
from engine.materials import LightDirection, Material, ShadingMethod


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _section(d: Mapping, key: str) -> Mapping:
    """A nested object of the interchange dict; absent or null reads as empty."""
    value = d.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"'{key}' must be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class StyleBlock:
    """Stylistic conventions detected on a reference sprite."""
    outline_color: int = 0x000000
    outline_thickness: int = 1
    shading_method: ShadingMethod = ShadingMethod.FLAT
    dithering: bool = False
    color_count: int = 0
    has_highlights: bool = False
    highlight_color: int = 0xFFFFFF
    light_direction: LightDirection = LightDirection.TOP

    def to_dict(self) -> dict:
        return {
            "outlineColor": self.outline_color,
            "outlineThickness": self.outline_thickness,
            "shadingMethod": self.shading_method.value,
            "dithering": self.dithering,
            "colorCount": self.color_count,
            "hasHighlights": self.has_highlights,
            "highlightColor": self.highlight_color,
            "lightDirection": self.light_direction.value,
        }

    @classmethod
    def from_dict(cls, d: Mapping) -> StyleBlock:
        """Colours may be packed ints or "#RRGGBB" strings; bad values raise ValueError/TypeError."""
        return cls(
            outline_color=parse_color(d.get("outlineColor", 0x000000)),
            outline_thickness=int(d.get("outlineThickness", 1)),
            shading_method=ShadingMethod(d.get("shadingMethod", ShadingMethod.FLAT.value)),
            dithering=bool(d.get("dithering", False)),
            color_count=int(d.get("colorCount", 0)),
            has_highlights=bool(d.get("hasHighlights", False)),
            highlight_color=parse_color(d.get("highlightColor", 0xFFFFFF)),
            light_direction=LightDirection(d.get("lightDirection", LightDirection.TOP.value)),
        )


@dataclass(frozen=True)
class StyleConfig:
    """Palette-by-material, proportions, style flags and equipment flags.

    Built once per analysed reference (or per merge) and never mutated
    afterwards: the mapping fields are stored as read-only views over
    tuples, whatever the caller passed in. `to_dict()` is the interchange
    format for sprite tooling.
    """
    palette: Mapping[str, tuple[int, ...]] = field(default_factory=dict)
    proportions: Mapping[str, float] = field(default_factory=dict)
    style: StyleBlock = field(default_factory=StyleBlock)
    equipment: Mapping[str, Mapping] = field(default_factory=dict)
    sources: tuple[str, ...] = ()
    analyzed_at: str = field(default_factory=utc_now_iso)

    def __post_init__(self):
        object.__setattr__(self, "palette", MappingProxyType(
            {k: tuple(v) for k, v in self.palette.items()}))
        object.__setattr__(self, "proportions", MappingProxyType(dict(self.proportions)))
        object.__setattr__(self, "equipment", MappingProxyType(
            {k: MappingProxyType(dict(v)) for k, v in self.equipment.items()}))
        object.__setattr__(self, "sources", tuple(self.sources))

    def colors_for(self, category: Material | str) -> list[int]:
        """Palette entries for a material bucket (empty when absent)."""
        key = category.value if isinstance(category, Material) else str(category)
        return list(self.palette.get(key, ()))

    def equipment_present(self, item: str) -> bool:
        return bool(self.equipment.get(item, {}).get("present", False))

    def to_dict(self) -> dict:
        return {
            "sources": list(self.sources),
            "analyzedAt": self.analyzed_at,
            "palette": {k: list(v) for k, v in self.palette.items()},
            "proportions": dict(self.proportions),
            "style": self.style.to_dict(),
            "equipment": {k: dict(v) for k, v in self.equipment.items()},
        }

    @classmethod
    def from_dict(cls, d: Mapping) -> StyleConfig:
        """Tolerant of missing keys; raises ValueError/TypeError on malformed values."""
        if not isinstance(d, Mapping):
            raise TypeError(f"style config must be an object, got {type(d).__name__}")
        sources = d.get("sources")
        if sources is None and d.get("source"):
            sources = [d["source"]]
        if isinstance(sources, str):
            raise TypeError("'sources' must be a list of strings")

        palette = {}
        for k, v in _section(d, "palette").items():
            if isinstance(v, (str, Mapping)):
                raise TypeError(f"palette '{k}' must be a list of colours")
            palette[k] = [parse_color(c) for c in v]

        equipment = {}
        for k, v in _section(d, "equipment").items():
            if not isinstance(v, Mapping):
                raise TypeError(f"equipment '{k}' must be an object, got {type(v).__name__}")
            equipment[k] = dict(v)

        return cls(
            palette=palette,
            proportions={k: float(v) for k, v in _section(d, "proportions").items()},
            style=StyleBlock.from_dict(_section(d, "style")),
            equipment=equipment,
            sources=[str(s) for s in sources or []],
            analyzed_at=d.get("analyzedAt") or utc_now_iso(),
        )
