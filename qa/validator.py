"""Style-guide checks for generated sprites."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Optional

import config
from analysis.style import StyleDetector
from engine.pixels import PixelBuffer
from engine.records import StyleConfig
from generation.proportions import HEAD_BAND, LIMB_BAND, TORSO_BAND, ProportionManager

logger = logging.getLogger(__name__)

OUTLINE_DARK_LIMIT = 25        # each channel below this counts as outline-black
OUTLINE_MIN_COVERAGE = 0.5     # share of the width the top/bottom rows must cover
SHADING_BUCKET = 25


@dataclass
class StyleGuide:
    max_colors: int = field(default_factory=lambda: config.QA_MAX_COLORS)
    shading_levels: int = field(default_factory=lambda: config.QA_SHADING_LEVELS)
    outline_min: int = 2
    outline_max: int = 3
    expected_outline_thickness: Optional[int] = None
    palette_deviation: float = 0.05
    proportions: dict = field(default_factory=lambda: {
        "head": {"min": HEAD_BAND[0] / 100, "max": HEAD_BAND[1] / 100},
        "torso": {"min": TORSO_BAND[0] / 100, "max": TORSO_BAND[1] / 100},
        "limbs": {"min": LIMB_BAND[0] / 100, "max": LIMB_BAND[1] / 100},
    })

    @classmethod
    def from_style_config(cls, style_config: StyleConfig) -> StyleGuide:
        """Guide tightened to an analysed reference: its colour count and outline width."""
        guide = cls()
        if style_config.style.color_count > 0:
            guide.max_colors = style_config.style.color_count
        guide.expected_outline_thickness = style_config.style.outline_thickness
        return guide

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ValidationReport:
    valid: bool
    issues: list[str] = field(default_factory=list)
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"valid": self.valid, "issues": list(self.issues), "details": self.details}


def _is_outline_pixel(p) -> bool:
    return (p is not None and p[3] > 0 and p[0] < OUTLINE_DARK_LIMIT
            and p[1] < OUTLINE_DARK_LIMIT and p[2] < OUTLINE_DARK_LIMIT)


class QAValidator:
    def __init__(self, style_guide: Optional[StyleGuide] = None):
        self.style_guide = style_guide or StyleGuide()
        self.style_detector = StyleDetector()

    def validate_sprite(
        self,
        buffer: PixelBuffer,
        style_config: Optional[StyleConfig] = None,
        style_guide: Optional[StyleGuide] = None,
    ) -> ValidationReport:
        """Run every check; the sprite is valid iff no check reports an issue."""
        if style_guide is not None:
            guide = style_guide
        elif style_config is not None:
            guide = StyleGuide.from_style_config(style_config)
        else:
            guide = self.style_guide

        issues: list[str] = []
        details: dict = {}

        proportions = self.check_proportions(buffer, guide)
        issues.extend(proportions["issues"])
        details["proportions"] = proportions

        color_count = self.style_detector.count_colors(buffer)
        details["colorCount"] = color_count
        if color_count > guide.max_colors:
            issues.append(f"Color count {color_count} exceeds maximum {guide.max_colors}")

        outline = self.check_outline_thickness(buffer, guide)
        issues.extend(outline["issues"])
        details["outline"] = outline

        shading = self.check_shading_levels(buffer, guide.shading_levels)
        issues.extend(shading["issues"])
        details["shading"] = shading

        clipping = self.check_clipping(buffer)
        issues.extend(clipping["issues"])
        details["clipping"] = clipping

        report = ValidationReport(valid=not issues, issues=issues, details=details)
        if report.valid:
            logger.info(f"QA passed for {buffer.width}x{buffer.height} sprite")
        else:
            logger.info(f"QA found {len(issues)} issue(s): {'; '.join(issues)}")
        return report

    def check_proportions(self, buffer: PixelBuffer, guide: StyleGuide) -> dict:
        height = buffer.height or config.SPRITE_SIZE
        result = ProportionManager(height).validate_proportions()
        return {
            "valid": result.valid,
            "issues": list(result.errors),
            "actual": result.proportions,
            "expected": guide.proportions,
        }

    def check_outline_thickness(self, buffer: PixelBuffer, guide: StyleGuide) -> dict:
        """Dark pixels along the top or bottom row must span over half the width."""
        covered = 0
        for x in range(buffer.width):
            if (_is_outline_pixel(buffer.get_pixel(x, 0))
                    or _is_outline_pixel(buffer.get_pixel(x, buffer.height - 1))):
                covered += 1
        detected = covered > buffer.width * OUTLINE_MIN_COVERAGE

        issues = []
        if not detected:
            issues.append(
                f"Missing or insufficient outer outline (expected {guide.outline_min}-{guide.outline_max}px)"
            )
        return {
            "valid": not issues,
            "issues": issues,
            "outerOutlineDetected": detected,
            "expectedThickness": guide.expected_outline_thickness,
        }

    def check_shading_levels(self, buffer: PixelBuffer, expected_levels: int) -> dict:
        buckets = {
            (p[0] // SHADING_BUCKET, p[1] // SHADING_BUCKET, p[2] // SHADING_BUCKET)
            for _, _, p in buffer.opaque_pixels()
        }
        detected = len(buckets)
        issues = []
        if detected < expected_levels - 1 or detected > expected_levels + 1:
            issues.append(f"Detected {detected} shading levels, expected {expected_levels} (±1)")
        return {
            "valid": not issues,
            "issues": issues,
            "detectedLevels": detected,
            "expectedLevels": expected_levels,
        }

    def check_clipping(self, buffer: PixelBuffer) -> dict:
        issues = []
        center = buffer.get_pixel(buffer.width // 2, buffer.height // 2)
        if center is not None and center[3] == 0:
            issues.append("Unexpected transparency in sprite center (possible clipping)")
        return {"valid": not issues, "issues": issues}
