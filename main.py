"""FastAPI entry point: analyze, generate, validate and vary sprites over JSON."""
from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

import config
from analysis.analyzer import ImageAnalyzer
from engine.color import parse_color
from engine.imaging import ImageLoadError, decode_base64, decode_base64_bytes, encode_base64
from engine.records import StyleConfig
from engine.rng import SeededRng
from generation import PaletteManager, generate_sprite
from generation.descriptors import descriptor_from_dict
from qa.validator import QAValidator
from qa.variations import VariationConfig, VariationManager
from schemas import (
    AnalyzeBatchRequest,
    AnalyzeRequest,
    GenerateRequest,
    PaletteBody,
    ValidateRequest,
    VariationsRequest,
)
from store import JSONPaletteStore

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Sprite Style Service")
analyzer = ImageAnalyzer()
validator = QAValidator()

# Created on first use
palette_manager: Optional[PaletteManager] = None


def get_palette_manager() -> PaletteManager:
    global palette_manager
    if palette_manager is None:
        palette_manager = PaletteManager(JSONPaletteStore(config.PALETTE_SAVE_DIR))
    return palette_manager


class InvalidStyleError(ValueError):
    """A client-supplied style object could not be read as a StyleConfig."""


def _style_from(data: Optional[dict]) -> Optional[StyleConfig]:
    if not data:
        return None
    try:
        return StyleConfig.from_dict(data)
    except (ValueError, TypeError) as e:
        raise InvalidStyleError(f"invalid style: {e}") from e


# ── Error mapping ─────────────────────────────────────────────────────────────

@app.exception_handler(json.JSONDecodeError)
async def invalid_json(request: Request, exc: json.JSONDecodeError):
    return JSONResponse({"ok": False, "error": "invalid JSON"}, status_code=400)


@app.exception_handler(ValidationError)
async def invalid_body(request: Request, exc: ValidationError):
    return JSONResponse({"ok": False, "error": str(exc)}, status_code=400)


@app.exception_handler(ImageLoadError)
async def invalid_image(request: Request, exc: ImageLoadError):
    return JSONResponse({"ok": False, "error": str(exc)}, status_code=400)


@app.exception_handler(InvalidStyleError)
async def invalid_style(request: Request, exc: InvalidStyleError):
    return JSONResponse({"ok": False, "error": str(exc)}, status_code=400)


# ── Status / settings ─────────────────────────────────────────────────────────

@app.get("/")
async def index():
    return JSONResponse({"status": "ok", "service": "sprite-style"})


@app.get("/api/settings")
async def get_settings():
    return JSONResponse({
        "default_max_colors": config.DEFAULT_MAX_COLORS,
        "default_seed": config.DEFAULT_SEED,
        "region_grow_threshold": config.REGION_GROW_THRESHOLD,
        "style_merge_strategy": config.STYLE_MERGE_STRATEGY,
        "sprite_size": config.SPRITE_SIZE,
        "item_icon_size": config.ITEM_ICON_SIZE,
        "character_outline_thickness": config.CHARACTER_OUTLINE_THICKNESS,
        "leather_grain_density": config.LEATHER_GRAIN_DENSITY,
        "qa_max_colors": config.QA_MAX_COLORS,
        "qa_shading_levels": config.QA_SHADING_LEVELS,
        "variation_min_size": config.VARIATION_MIN_SIZE,
        "variation_max_size": config.VARIATION_MAX_SIZE,
        "palette_save_dir": config.PALETTE_SAVE_DIR,
    })


# ── Analysis ──────────────────────────────────────────────────────────────────

@app.post("/api/analyze")
async def analyze(request: Request):
    req = AnalyzeRequest.model_validate(await request.json())
    style = analyzer.analyze_reference(decode_base64_bytes(req.image), req.max_colors)
    return JSONResponse(style.to_dict())


@app.post("/api/analyze/batch")
async def analyze_batch(request: Request):
    req = AnalyzeBatchRequest.model_validate(await request.json())
    sources = [decode_base64_bytes(img) for img in req.images]
    style = analyzer.analyze_multiple_references(sources, req.max_colors, req.merge_strategy)
    return JSONResponse(style.to_dict())


# ── Generation / QA ───────────────────────────────────────────────────────────

@app.post("/api/generate")
async def generate(request: Request):
    req = GenerateRequest.model_validate(await request.json())
    seed = req.seed if req.seed is not None else config.DEFAULT_SEED
    descriptor = descriptor_from_dict(req.descriptor.model_dump(exclude_none=True))
    sprite = generate_sprite(_style_from(req.style), descriptor, SeededRng(seed), get_palette_manager())
    return JSONResponse({
        "image": encode_base64(sprite),
        "width": sprite.width,
        "height": sprite.height,
        "seed": seed,
    })


@app.post("/api/validate")
async def validate(request: Request):
    req = ValidateRequest.model_validate(await request.json())
    report = validator.validate_sprite(decode_base64(req.image), style_config=_style_from(req.style))
    return JSONResponse(report.to_dict())


@app.post("/api/variations")
async def variations(request: Request):
    req = VariationsRequest.model_validate(await request.json())
    base = decode_base64(req.image)
    seed = req.seed if req.seed is not None else config.DEFAULT_SEED
    variation = VariationConfig(seed=seed)
    if req.color_variation is not None:
        variation.color_variation = req.color_variation
    if req.size_variation is not None:
        variation.size_variation = req.size_variation

    manager = VariationManager(SeededRng(seed))
    results = []
    for v in manager.generate_variations(base, req.count, variation):
        check = manager.validate_variation(v.buffer)
        results.append({
            "index": v.index,
            "seed": v.seed,
            "image": encode_base64(v.buffer),
            "width": v.buffer.width,
            "height": v.buffer.height,
            "valid": check.valid,
            "issues": check.issues,
        })
    return JSONResponse(results)


# ── Palettes ──────────────────────────────────────────────────────────────────

@app.get("/api/palettes")
async def list_palettes():
    return JSONResponse({"palettes": get_palette_manager().names()})


@app.get("/api/palettes/{name}")
async def get_palette(name: str):
    palette = get_palette_manager().get_palette(name)
    if palette is None:
        return JSONResponse({"ok": False, "error": "palette not found"}, status_code=404)
    return JSONResponse({"name": name, "palette": palette})


@app.put("/api/palettes/{name}")
async def put_palette(name: str, request: Request):
    body = PaletteBody.model_validate(await request.json())
    try:
        palette = {k: [parse_color(c) for c in v] for k, v in body.palette.items()}
    except ValueError as e:
        return JSONResponse({"ok": False, "error": str(e)}, status_code=400)
    get_palette_manager().set_palette(name, palette)
    return JSONResponse({"ok": True, "name": name})


@app.delete("/api/palettes/{name}")
async def delete_palette(name: str):
    if not get_palette_manager().delete_palette(name):
        return JSONResponse({"ok": False, "error": "palette not found"}, status_code=404)
    return JSONResponse({"ok": True})
