"""Canonical chibi body layout: region lengths as fixed fractions of sprite height."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from itertools import product

import config

HEAD_RATIO = 0.33
TORSO_RATIO = 0.25
LIMB_RATIO = 0.20

# Acceptable bands, percent of total height
HEAD_BAND = (30, 36)
TORSO_BAND = (22, 28)
LIMB_BAND = (18, 22)
TOTAL_BAND = (95, 100)

HEAD_WIDTH_FACTOR = 0.9
TORSO_WIDTH_FACTOR = 0.8
ARM_WIDTH_FACTOR = 0.45
LEG_WIDTH_FACTOR = 0.55

TORSO_OVERLAP = 2   # torso starts this far up into the head
ARM_DROP = 2        # arms start this far below the torso top
LEG_OVERLAP = 3     # legs start this far above the torso bottom


@dataclass
class Bounds:
    x: int
    y: int
    width: int
    height: int
    center_x: int = 0
    center_y: int = 0

    def to_dict(self) -> dict:
        return {
            "x": self.x, "y": self.y, "width": self.width, "height": self.height,
            "centerX": self.center_x, "centerY": self.center_y,
        }


@dataclass
class ProportionReport:
    valid: bool
    errors: list[str] = field(default_factory=list)
    proportions: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


def _in_band(length: int, total: int, band: tuple[int, int]) -> bool:
    # Integer comparison of length/total against band percentages
    return band[0] * total <= length * 100 <= band[1] * total


def _layout(total_height: int) -> tuple[int, int, int]:
    """(head, torso, limb) lengths for a sprite `total_height` pixels tall.

    Each length is the floor or ceiling of its ratio; the combination that
    satisfies every band with the smallest deviation from the target ratios
    wins. Below ~19px no integer layout fits and plain rounding is used.
    """
    H = total_height
    head0 = H * 33 // 100
    torso0 = H * 25 // 100
    limb0 = H * 20 // 100

    best = None
    best_err = None
    for head, torso, limb in product((head0, head0 + 1), (torso0, torso0 + 1), (limb0, limb0 + 1)):
        if not (_in_band(head, H, HEAD_BAND) and _in_band(torso, H, TORSO_BAND)
                and _in_band(limb, H, LIMB_BAND)
                and _in_band(head + torso + 2 * limb, H, TOTAL_BAND)):
            continue
        err = ((head / H - HEAD_RATIO) ** 2 + (torso / H - TORSO_RATIO) ** 2
               + (limb / H - LIMB_RATIO) ** 2)
        if best_err is None or err < best_err:
            best, best_err = (head, torso, limb), err

    if best is None:
        best = (int(H * HEAD_RATIO + 0.5), int(H * TORSO_RATIO + 0.5), int(H * LIMB_RATIO + 0.5))
    return best


class ProportionManager:
    """Region lengths and bounding boxes for one sprite height."""

    def __init__(self, total_height: int = 48):
        self.set_total_height(total_height)

    def set_total_height(self, total_height: int):
        if total_height < 1:
            raise ValueError(f"sprite height must be positive, got {total_height}")
        self.total_height = int(total_height)
        self.head, self.torso, self.limbs = _layout(self.total_height)
        self.equipment_scale = config.EQUIPMENT_SCALE

        self.head_top = 0
        self.head_bottom = self.head
        self.torso_top = self.head
        self.torso_bottom = self.head + self.torso
        self.limbs_top = self.torso_bottom
        self.limbs_bottom = self.total_height

    def get_proportions(self) -> dict:
        return {
            "head": self.head,
            "torso": self.torso,
            "limbs": self.limbs,
            "equipmentScale": self.equipment_scale,
            "totalHeight": self.total_height,
            "positions": {
                "headTop": self.head_top,
                "headBottom": self.head_bottom,
                "torsoTop": self.torso_top,
                "torsoBottom": self.torso_bottom,
                "limbsTop": self.limbs_top,
                "limbsBottom": self.limbs_bottom,
            },
        }

    # ── Bounding boxes ────────────────────────────────────────────────────────

    def get_head_bounds(self, center_x: int) -> Bounds:
        width = int(self.head * HEAD_WIDTH_FACTOR)
        return Bounds(
            x=center_x - width // 2,
            y=self.head_top,
            width=width,
            height=self.head,
            center_x=center_x,
            center_y=self.head_top + self.head // 2,
        )

    def get_torso_bounds(self, center_x: int) -> Bounds:
        width = int(self.torso * TORSO_WIDTH_FACTOR)
        top = self.torso_top - TORSO_OVERLAP
        return Bounds(
            x=center_x - width // 2,
            y=top,
            width=width,
            height=self.torso,
            center_x=center_x,
            center_y=top + self.torso // 2,
        )

    def get_arm_bounds(self, center_x: int, side: str = "left") -> Bounds:
        width = int(self.limbs * ARM_WIDTH_FACTOR)
        torso = self.get_torso_bounds(center_x)
        top = torso.y + ARM_DROP
        if side == "left":
            x = torso.x - width + 2
        else:
            x = torso.x + torso.width - 2
        return Bounds(x, top, width, self.limbs, x + width // 2, top + self.limbs // 2)

    def get_leg_bounds(self, center_x: int, side: str = "left") -> Bounds:
        width = int(self.limbs * LEG_WIDTH_FACTOR)
        torso = self.get_torso_bounds(center_x)
        top = torso.y + torso.height - LEG_OVERLAP
        x = center_x - width + 1 if side == "left" else center_x - 1
        return Bounds(x, top, width, self.limbs, x + width // 2, top + self.limbs // 2)

    def get_equipment_bounds(self, base: Bounds) -> Bounds:
        """Scale a region's box by the equipment factor around its own centre."""
        width = int(base.width * self.equipment_scale)
        height = int(base.height * self.equipment_scale)
        x = base.x - (width - base.width) // 2
        y = base.y - (height - base.height) // 2
        return Bounds(x, y, width, height, x + width // 2, y + height // 2)

    # ── Validation ────────────────────────────────────────────────────────────

    def validate_proportions(self) -> ProportionReport:
        H = self.total_height
        head_pct = self.head * 100 / H
        torso_pct = self.torso * 100 / H
        limbs_pct = self.limbs * 100 / H
        total_pct = (self.head + self.torso + 2 * self.limbs) * 100 / H

        errors = []
        if not _in_band(self.head, H, HEAD_BAND):
            errors.append(f"Head proportion {head_pct:.1f}% is outside acceptable range (30-36%)")
        if not _in_band(self.torso, H, TORSO_BAND):
            errors.append(f"Torso proportion {torso_pct:.1f}% is outside acceptable range (22-28%)")
        if not _in_band(self.limbs, H, LIMB_BAND):
            errors.append(f"Limbs proportion {limbs_pct:.1f}% is outside acceptable range (18-22%)")
        if not _in_band(self.head + self.torso + 2 * self.limbs, H, TOTAL_BAND):
            errors.append(f"Total proportion {total_pct:.1f}% is outside acceptable range (95-100%)")

        return ProportionReport(
            valid=not errors,
            errors=errors,
            proportions={
                "head": head_pct,
                "torso": torso_pct,
                "limbs": limbs_pct,
                "total": total_pct,
            },
        )
