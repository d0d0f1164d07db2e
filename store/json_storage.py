"""JSON-file-based palette storage.

Storage layout:
    palettes/
        paladin.json      ← {"name": ..., "savedAt": ..., "palette": {category: [colour, ...]}}
        my_reference.json
        ...
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

import config
from engine.records import utc_now_iso
from store.base import BasePaletteStore

logger = logging.getLogger(__name__)


class JSONPaletteStore(BasePaletteStore):
    """One JSON file per palette; unreadable files are logged and skipped."""

    def __init__(self, save_dir: str | Path | None = None):
        self._root = Path(save_dir or config.PALETTE_SAVE_DIR)
        self._root.mkdir(parents=True, exist_ok=True)

    def _path(self, name: str) -> Path:
        safe = name.replace("/", "_").replace("\\", "_")
        return self._root / f"{safe}.json"

    def save_palette(self, name: str, palette: dict[str, list[int]]) -> None:
        p = self._path(name)
        doc = {
            "name": name,
            "savedAt": utc_now_iso(),
            "palette": {k: [int(c) for c in v] for k, v in palette.items()},
        }
        try:
            with p.open("w", encoding="utf-8") as f:
                json.dump(doc, f, ensure_ascii=False, indent=2)
            logger.info(f"Palette store: saved {name}")
        except OSError as e:
            logger.warning(f"Palette store: failed to save {name}: {e}")

    def load_palette(self, name: str) -> dict[str, list[int]] | None:
        p = self._path(name)
        if not p.exists():
            return None
        try:
            with p.open("r", encoding="utf-8") as f:
                doc = json.load(f)
            return {k: [int(c) for c in v] for k, v in doc["palette"].items()}
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Palette store: failed to load {name}: {e}")
            return None

    def delete_palette(self, name: str) -> None:
        p = self._path(name)
        if p.exists():
            p.unlink()
            logger.info(f"Palette store: deleted {name}")

    def list_palettes(self) -> list[str]:
        return sorted(p.stem for p in self._root.glob("*.json"))
