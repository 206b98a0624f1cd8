# -*- coding: utf-8 -*-
"""Oracle — downscale food photos before upload."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from ..errors import ValidationFailure

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIMENSION = 800
DEFAULT_QUALITY = 70


@dataclass(frozen=True)
class PreparedImage:
    data: bytes
    width: int
    height: int
    mime: str = "image/jpeg"


def _target_size(width: int, height: int, max_dimension: int) -> tuple[int, int]:
    longest = max(width, height)
    if longest <= max_dimension:
        return width, height
    ratio = max_dimension / longest
    return max(1, round(width * ratio)), max(1, round(height * ratio))


def _to_rgb(img: Image.Image) -> Image.Image:
    # JPEG has no alpha channel: composite transparent pixels onto white.
    if img.mode == "P" and "transparency" in img.info:
        img = img.convert("RGBA")
    if img.mode in ("RGBA", "LA", "PA"):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def prepare_image(
    image_bytes: bytes,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    quality: int = DEFAULT_QUALITY,
) -> PreparedImage:
    """Re-encode as JPEG with the longer side capped at ``max_dimension``.

    Aspect ratio is preserved; images already within bounds keep their size.
    """
    if not image_bytes:
        raise ValidationFailure("Empty image upload")
    try:
        with Image.open(io.BytesIO(image_bytes)) as src:
            src.load()
            img = ImageOps.exif_transpose(src)
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
        raise ValidationFailure(f"Unreadable image: {exc}") from exc
    img = _to_rgb(img)

    original = img.size
    size = _target_size(img.width, img.height, max_dimension)
    if size != original:
        img = img.resize(size, Image.Resampling.LANCZOS)

    out = io.BytesIO()
    img.save(out, format="JPEG", quality=quality, optimize=True)
    data = out.getvalue()
    logger.debug(
        "prepared image %sx%s -> %sx%s (%d -> %d bytes)",
        original[0], original[1], size[0], size[1], len(image_bytes), len(data),
    )
    return PreparedImage(data=data, width=size[0], height=size[1])
