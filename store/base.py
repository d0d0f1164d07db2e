"""Abstract palette storage; swap implementations without changing callers."""
from __future__ import annotations

from abc import ABC, abstractmethod


class BasePaletteStore(ABC):
    """Named palettes (category → list of packed colours), get/set by name."""

    @abstractmethod
    def save_palette(self, name: str, palette: dict[str, list[int]]) -> None:
        """Persist one named palette, replacing any previous version."""

    @abstractmethod
    def load_palette(self, name: str) -> dict[str, list[int]] | None:
        """Return the stored palette, or None if missing or unreadable."""

    @abstractmethod
    def delete_palette(self, name: str) -> None:
        """Remove a stored palette; missing names are ignored."""

    @abstractmethod
    def list_palettes(self) -> list[str]:
        """Names of all stored palettes, sorted."""
