"""Edge detection, region growing and body-proportion measurement."""
from __future__ import annotations

import logging
import math
from collections import deque
from typing import Optional

import numpy as np

import config
from engine.pixels import PixelBuffer

logger = logging.getLogger(__name__)

Point = tuple[int, int]
BodyRegionSet = dict[str, list[Point]]

# Measurements used when a region could not be grown
DEFAULT_HEAD_SIZE = 8
DEFAULT_TORSO_WIDTH = 12
DEFAULT_TORSO_HEIGHT = 16
DEFAULT_LIMB_LENGTH = 12
DEFAULT_ARM_WIDTH = 4
DEFAULT_LEG_WIDTH = 6


def color_distance(c1: Optional[tuple], c2: Optional[tuple]) -> float:
    """Euclidean RGB distance; infinite when either side is missing."""
    if c1 is None or c2 is None:
        return math.inf
    dr = c1[0] - c2[0]
    dg = c1[1] - c2[1]
    db = c1[2] - c2[2]
    return math.sqrt(dr * dr + dg * dg + db * db)


def region_bounds(region: list[Point]) -> Optional[dict]:
    if not region:
        return None
    xs = [p[0] for p in region]
    ys = [p[1] for p in region]
    min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)
    return {
        "minX": min_x, "maxX": max_x, "minY": min_y, "maxY": max_y,
        "width": max_x - min_x + 1, "height": max_y - min_y + 1,
    }


class ProportionAnalyzer:
    def detect_edges(self, buffer: PixelBuffer) -> list[list[float]]:
        """3×3 Sobel magnitude over grey (channel mean); border cells stay 0."""
        w, h = buffer.width, buffer.height
        edges = [[0.0] * w for _ in range(h)]
        if w < 3 or h < 3:
            return edges

        gray = np.asarray(buffer.image, dtype=np.float64)[..., :3].mean(axis=2)
        gx = (gray[:-2, 2:] + 2 * gray[1:-1, 2:] + gray[2:, 2:]) - (gray[:-2, :-2] + 2 * gray[1:-1, :-2] + gray[2:, :-2])
        gy = (gray[2:, :-2] + 2 * gray[2:, 1:-1] + gray[2:, 2:]) - (gray[:-2, :-2] + 2 * gray[:-2, 1:-1] + gray[:-2, 2:])
        magnitude = np.zeros((h, w))
        magnitude[1:-1, 1:-1] = np.hypot(gx, gy)
        return magnitude.tolist()

    def region_growing(
        self,
        buffer: PixelBuffer,
        seed_x: int,
        seed_y: int,
        threshold: Optional[float] = None,
    ) -> list[Point]:
        """Breadth-first 4-connected flood from the seed, by colour distance to the seed.

        Transparent pixels never join; a transparent seed yields no region.
        """
        if threshold is None:
            threshold = config.REGION_GROW_THRESHOLD
        seed = buffer.get_pixel(seed_x, seed_y)
        if seed is None or seed[3] == 0:
            return []

        region: list[Point] = []
        queue: deque[Point] = deque([(seed_x, seed_y)])
        visited: set[Point] = set()

        while queue:
            x, y = queue.popleft()
            if (x, y) in visited:
                continue
            visited.add((x, y))

            pixel = buffer.get_pixel(x, y)
            if pixel is None or pixel[3] == 0:
                continue
            if color_distance(seed, pixel) > threshold:
                continue

            region.append((x, y))
            for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
                if buffer.in_bounds(nx, ny) and (nx, ny) not in visited:
                    queue.append((nx, ny))
        return region

    def detect_body_regions(self, buffer: PixelBuffer, threshold: Optional[float] = None) -> BodyRegionSet:
        """Grow one region per body part from fixed fractional seed points."""
        w, h = buffer.width, buffer.height
        cx = w // 2
        cy = h // 2
        head_y = int(h * 0.2)
        leg_y = int(h * 0.7)
        arm_y = int(h * 0.4)

        regions = {
            "head": self.region_growing(buffer, cx, head_y, threshold),
            "torso": self.region_growing(buffer, cx, cy, threshold),
            "leftLeg": self.region_growing(buffer, cx - 4, leg_y, threshold),
            "rightLeg": self.region_growing(buffer, cx + 4, leg_y, threshold),
            "leftArm": self.region_growing(buffer, cx - 8, arm_y, threshold),
            "rightArm": self.region_growing(buffer, cx + 8, arm_y, threshold),
        }
        logger.debug(
            "Body regions: " + ", ".join(f"{k}={len(v)}" for k, v in regions.items())
        )
        return regions

    def measure_proportions(self, regions: BodyRegionSet, total_height: Optional[int] = None) -> dict[str, float]:
        """Bounding-box measurements per region, with defaults for missing ones.

        When `total_height` is given the percentage-of-height keys
        head/torso/limbs are added alongside the pixel sizes.
        """
        head = region_bounds(regions.get("head", []))
        torso = region_bounds(regions.get("torso", []))
        left_leg = region_bounds(regions.get("leftLeg", []))
        left_arm = region_bounds(regions.get("leftArm", []))

        center_x = (torso["minX"] + torso["maxX"]) // 2 if torso else 32
        center_y = (torso["minY"] + torso["maxY"]) // 2 if torso else 32

        result: dict[str, float] = {
            "headSize": max(head["width"], head["height"]) if head else DEFAULT_HEAD_SIZE,
            "headY": (head["minY"] + head["maxY"]) // 2 if head else 12,
            "torsoWidth": torso["width"] if torso else DEFAULT_TORSO_WIDTH,
            "torsoHeight": torso["height"] if torso else DEFAULT_TORSO_HEIGHT,
            "torsoY": center_y if torso else 28,
            "armLength": left_arm["height"] if left_arm else DEFAULT_LIMB_LENGTH,
            "armWidth": left_arm["width"] if left_arm else DEFAULT_ARM_WIDTH,
            "legLength": left_leg["height"] if left_leg else DEFAULT_LIMB_LENGTH,
            "legWidth": left_leg["width"] if left_leg else DEFAULT_LEG_WIDTH,
            "centerX": center_x,
            "centerY": center_y,
            "symmetryAxis": center_x,
        }

        if total_height and total_height > 0:
            result["head"] = round(result["headSize"] * 100 / total_height, 1)
            result["torso"] = round(result["torsoHeight"] * 100 / total_height, 1)
            result["limbs"] = round(result["legLength"] * 100 / total_height, 1)
        return result

    def detect_equipment(self, buffer: PixelBuffer, regions: BodyRegionSet) -> dict[str, dict]:
        """Coarse equipment flags: populated head/torso regions and anything right of the body."""
        equipment: dict[str, dict] = {
            "helmet": {"present": bool(regions.get("head"))},
            "chestArmor": {"present": bool(regions.get("torso"))},
            "weapon": {"present": False, "type": "unknown"},
        }

        w, h = buffer.width, buffer.height
        cx = w // 2
        for x in range(cx + 10, w - 2):
            for y in range(int(h * 0.3), int(h * 0.7)):
                if buffer.is_opaque(x, y):
                    equipment["weapon"] = {
                        "present": True,
                        "type": "sword",
                        "position": {"x": x, "y": y},
                    }
                    return equipment
        return equipment
