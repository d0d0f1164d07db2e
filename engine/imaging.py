"""Image-loading boundary: decode files/bytes into PixelBuffers and back to PNG.

This is the only place the core touches Pillow or the filesystem, and the
only place it raises for bad input (ImageLoadError).
"""
from __future__ import annotations

import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from engine.pixels import PixelBuffer

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, bytearray, Image.Image, PixelBuffer]


class ImageLoadError(ValueError):
    """The image source could not be read or decoded."""


def from_image(img: Image.Image) -> PixelBuffer:
    return PixelBuffer.from_image(img)


def to_image(buffer: PixelBuffer) -> Image.Image:
    return buffer.to_image()


def load_image(source: ImageSource) -> PixelBuffer:
    """Decode any supported source into a fresh PixelBuffer.

    Buffers are copied so the caller's original is never aliased.
    """
    if isinstance(source, PixelBuffer):
        return source.copy()
    if isinstance(source, Image.Image):
        return from_image(source)
    try:
        if isinstance(source, (bytes, bytearray)):
            with Image.open(BytesIO(bytes(source))) as img:
                img.load()
                return from_image(img)
        path = Path(source)
        with Image.open(path) as img:
            img.load()
            return from_image(img)
    except (OSError, UnidentifiedImageError) as e:
        logger.warning(f"Image load failed for {_describe(source)}: {e}")
        raise ImageLoadError(f"cannot read image {_describe(source)}: {e}") from e


def decode_base64_bytes(data: str) -> bytes:
    """Strip an optional data: URL prefix and base64-decode to the raw file bytes."""
    if data.startswith("data:"):
        data = data.split(",", 1)[-1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageLoadError(f"invalid base64 image data: {e}") from e


def decode_base64(data: str) -> PixelBuffer:
    """Decode a base64 PNG (optionally a data: URL) into a PixelBuffer."""
    return load_image(decode_base64_bytes(data))


def encode_png(buffer: PixelBuffer) -> bytes:
    out = BytesIO()
    to_image(buffer).save(out, format="PNG")
    return out.getvalue()


def encode_base64(buffer: PixelBuffer) -> str:
    return base64.b64encode(encode_png(buffer)).decode("ascii")


def save_png(buffer: PixelBuffer, path: Union[str, Path]):
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    to_image(buffer).save(str(p))


def source_name(source: ImageSource) -> str:
    """Label recorded in StyleConfig.sources for a given input."""
    if isinstance(source, (str, Path)):
        return str(source)
    return _describe(source)


def _describe(source) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    if isinstance(source, PixelBuffer):
        return f"<buffer {source.width}x{source.height}>"
    if isinstance(source, Image.Image):
        return f"<image {source.width}x{source.height}>"
    return str(source)
