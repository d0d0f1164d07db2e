"""Palette persistence.

Swap the backend by replacing JSONPaletteStore with any class that
implements BasePaletteStore, e.g. SQLite or a remote asset service.
"""
from store.base import BasePaletteStore
from store.json_storage import JSONPaletteStore

__all__ = ["BasePaletteStore", "JSONPaletteStore"]
