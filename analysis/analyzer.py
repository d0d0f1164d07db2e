"""ImageAnalyzer: turns reference images into StyleConfig records."""
from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import Optional, Sequence

import config
from analysis.classifier import MaterialClassifier
from analysis.proportions import ProportionAnalyzer
from analysis.quantizer import ColorQuantizer
from analysis.style import StyleDetector
from engine.imaging import ImageSource, load_image, source_name
from engine.records import StyleBlock, StyleConfig, utc_now_iso

logger = logging.getLogger(__name__)


class MergeStrategy(str, Enum):
    FIRST = "first"          # style block of the first reference
    MAJORITY = "majority"    # per-field vote, ties go to the earliest reference

    @classmethod
    def _missing_(cls, value):
        return cls.FIRST


class ImageAnalyzer:
    def __init__(self):
        self.quantizer = ColorQuantizer()
        self.classifier = MaterialClassifier()
        self.proportions = ProportionAnalyzer()
        self.style_detector = StyleDetector()

    def analyze_reference(self, image: ImageSource, max_colors: Optional[int] = None) -> StyleConfig:
        """Quantize, classify, segment and style-detect one reference image.

        Raises ImageLoadError if the source cannot be decoded; any decodable
        image (including a fully transparent one) yields a StyleConfig.
        """
        if max_colors is None:
            max_colors = config.DEFAULT_MAX_COLORS
        buffer = load_image(image)

        palette = self.quantizer.extract_palette(buffer, max_colors)
        material_palette = self.classifier.group_by_material(palette)

        regions = self.proportions.detect_body_regions(buffer)
        measured = self.proportions.measure_proportions(regions, total_height=buffer.height)
        equipment = self.proportions.detect_equipment(buffer, regions)

        style = self.style_detector.detect(buffer)

        name = source_name(image)
        logger.info(
            f"Analyzed {name}: {len(palette)} colours in {len(material_palette)} materials, "
            f"shading={style.shading_method.value}"
        )
        return StyleConfig(
            palette=material_palette,
            proportions=measured,
            style=style,
            equipment=equipment,
            sources=[name],
            analyzed_at=utc_now_iso(),
        )

    def analyze_multiple_references(
        self,
        images: Sequence[ImageSource],
        max_colors: Optional[int] = None,
        merge_strategy: Optional[MergeStrategy | str] = None,
    ) -> StyleConfig:
        """Analyze each image and merge the results into one StyleConfig."""
        if not images:
            return StyleConfig()
        analyses = [self.analyze_reference(img, max_colors) for img in images]
        strategy = MergeStrategy(merge_strategy or config.STYLE_MERGE_STRATEGY)
        merged = self.merge(analyses, strategy)
        logger.info(f"Merged {len(analyses)} references ({strategy.value} style)")
        return merged

    def merge(self, analyses: list[StyleConfig], strategy: MergeStrategy = MergeStrategy.FIRST) -> StyleConfig:
        if not analyses:
            return StyleConfig()

        palette: dict[str, list[int]] = {}
        for a in analyses:
            for material, colors in a.palette.items():
                bucket = palette.setdefault(material, [])
                for c in colors:
                    if c not in bucket:
                        bucket.append(c)

        # Keys follow the first reference; a key it lacks elsewhere counts as 0
        proportions = {
            key: round(sum(a.proportions.get(key, 0) for a in analyses) / len(analyses), 1)
            for key in analyses[0].proportions
        }

        if strategy is MergeStrategy.MAJORITY:
            style = _vote_style([a.style for a in analyses])
        else:
            style = analyses[0].style

        equipment: dict[str, dict] = {}
        for a in analyses:
            for item, info in a.equipment.items():
                if info.get("present"):
                    equipment[item] = dict(info)

        sources: list[str] = []
        for a in analyses:
            sources.extend(a.sources)

        return StyleConfig(
            palette=palette,
            proportions=proportions,
            style=style,
            equipment=equipment,
            sources=sources,
            analyzed_at=utc_now_iso(),
        )


def _vote(values: list):
    counts = Counter(values)
    top = max(counts.values())
    # First value in reference order that reaches the top count
    for v in values:
        if counts[v] == top:
            return v
    return values[0]


def _vote_style(blocks: list[StyleBlock]) -> StyleBlock:
    return StyleBlock(
        outline_color=_vote([b.outline_color for b in blocks]),
        outline_thickness=_vote([b.outline_thickness for b in blocks]),
        shading_method=_vote([b.shading_method for b in blocks]),
        dithering=_vote([b.dithering for b in blocks]),
        color_count=_vote([b.color_count for b in blocks]),
        has_highlights=_vote([b.has_highlights for b in blocks]),
        highlight_color=_vote([b.highlight_color for b in blocks]),
        light_direction=_vote([b.light_direction for b in blocks]),
    )
