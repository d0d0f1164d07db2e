"""Reference Sprite Set Generator.

Run once to render a reference set of characters, item icons and variants
into resources/sprites/, plus the style description of each character.
Every sprite is seeded, so re-running reproduces the same files.

Usage:
    python tools/generate_assets.py
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from analysis.analyzer import ImageAnalyzer
from engine.imaging import save_png
from engine.rng import SeededRng
from generation import CharacterDescriptor, ItemDescriptor, generate_sprite
from generation.descriptors import ItemType, Rarity, WeaponType
from qa.validator import QAValidator
from qa.variations import VariationConfig, VariationManager

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
OUT_DIR = ROOT / "resources" / "sprites"

BASE_SEED = 42

# (filename, descriptor)
CHARACTER_DEFS = [
    ("adventurer.png", CharacterDescriptor(class_id="adventurer", palette_name="warm")),
    ("scout.png", CharacterDescriptor(class_id="scout", palette_name="cool")),
    ("paladin.png", CharacterDescriptor(class_id="paladin", palette_name="paladin",
                                        helmet=True, chest_armor=True, weapon=True)),
    ("ancient_warrior.png", CharacterDescriptor(class_id="warrior", bloodline="ancient_warrior", weapon=True)),
    ("arcane_scholar.png", CharacterDescriptor(class_id="mage", bloodline="arcane_scholar")),
    ("shadow_assassin.png", CharacterDescriptor(class_id="rogue", bloodline="shadow_assassin")),
    ("dragon_born.png", CharacterDescriptor(class_id="warrior", bloodline="dragon_born", chest_armor=True)),
    ("nature_blessed.png", CharacterDescriptor(class_id="ranger", bloodline="nature_blessed")),
]

ITEM_DEFS = [
    ("sword_common.png", ItemDescriptor(ItemType.WEAPON, WeaponType.SWORD, Rarity.COMMON)),
    ("sword_legendary.png", ItemDescriptor(ItemType.WEAPON, WeaponType.SWORD, Rarity.LEGENDARY)),
    ("axe_uncommon.png", ItemDescriptor(ItemType.WEAPON, WeaponType.AXE, Rarity.UNCOMMON)),
    ("mace_rare.png", ItemDescriptor(ItemType.WEAPON, WeaponType.MACE, Rarity.RARE)),
    ("staff_epic.png", ItemDescriptor(ItemType.WEAPON, WeaponType.STAFF, Rarity.EPIC)),
    ("armor_rare.png", ItemDescriptor(ItemType.ARMOR, rarity=Rarity.RARE)),
    ("ring_epic.png", ItemDescriptor(ItemType.ACCESSORY, rarity=Rarity.EPIC)),
]

VARIANT_COUNT = 3


def generate_characters(char_dir: Path) -> int:
    analyzer = ImageAnalyzer()
    validator = QAValidator()
    count = 0
    for i, (fname, descriptor) in enumerate(CHARACTER_DEFS):
        sprite = generate_sprite(None, descriptor, SeededRng(BASE_SEED + i))
        save_png(sprite, char_dir / fname)

        style = analyzer.analyze_reference(sprite)
        report = validator.validate_sprite(sprite)
        doc = {"style": style.to_dict(), "qa": report.to_dict()}
        with (char_dir / fname.replace(".png", ".json")).open("w", encoding="utf-8") as f:
            json.dump(doc, f, indent=2)

        status = "ok" if report.valid else f"{len(report.issues)} issue(s)"
        print(f"  {fname:24s} QA: {status}")
        count += 1
    return count


def generate_items(icon_dir: Path) -> int:
    for i, (fname, descriptor) in enumerate(ITEM_DEFS):
        icon = generate_sprite(None, descriptor, SeededRng(BASE_SEED + 100 + i))
        save_png(icon, icon_dir / fname)
    return len(ITEM_DEFS)


def generate_variants(variant_dir: Path) -> int:
    fname, descriptor = CHARACTER_DEFS[0]
    base = generate_sprite(None, descriptor, SeededRng(BASE_SEED))
    manager = VariationManager(SeededRng(BASE_SEED))
    variations = manager.generate_variations(base, VARIANT_COUNT, VariationConfig(seed=BASE_SEED))
    for v in variations:
        save_png(v.buffer, variant_dir / fname.replace(".png", f"_v{v.index}.png"))
    return len(variations)


# ===================================================================
# MAIN
# ===================================================================

def main(out_dir: Optional[Path] = None) -> int:
    out = Path(out_dir) if out_dir else OUT_DIR
    char_dir = out / "characters"
    icon_dir = out / "icons"
    variant_dir = out / "variants"
    for d in (char_dir, icon_dir, variant_dir):
        d.mkdir(parents=True, exist_ok=True)

    print("=" * 50)
    print("Reference Sprite Set Generator")
    print("=" * 50)
    print(f"Output directory: {out}\n")

    print("Generating characters...")
    total = generate_characters(char_dir)

    print("Generating item icons...")
    total += generate_items(icon_dir)

    print("Generating variants...")
    total += generate_variants(variant_dir)

    print(f"\nDone! Generated {total} PNG files in {out}")
    for label, d in [("Characters", char_dir), ("Icons", icon_dir), ("Variants", variant_dir)]:
        n = len(list(d.glob("*.png")))
        print(f"  {label:12s}: {n} files  ({d})")
    return total


if __name__ == "__main__":
    main()
