"""Image transforms for drawing retrieval.

Turns a full-canvas export (mostly flat background) into a small image of just
the drawn content:

- smart_crop: trim background-coloured borders, falling back to a centered
  square crop when trimming fails
- resize_to_bound: aspect-preserving stretch so the longer side equals a bound
- encode_png / image_to_base64: output encodings

The sync functions are CPU-bound; use the *_async wrappers from handlers so the
event loop is not blocked.
"""

from __future__ import annotations

import asyncio
import base64
import io
import logging
import math
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from PIL import Image, ImageChops

from draw_it_mcp.errors import TrimError
from draw_it_mcp.events import EventSink, default_sink

# Percent of the 0-255 channel range a pixel may differ from the background
DEFAULT_TRIM_THRESHOLD = 10.0


@dataclass(frozen=True)
class Size:
    """Pixel dimensions."""

    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass
class CropResult:
    """Outcome of smart_crop.

    Attributes:
        image: Cropped image, fully loaded in memory
        original_size: Dimensions of the source image
        cropped_size: Dimensions after cropping
        strategy: "trim" when background trimming worked, "center" for the fallback
    """

    image: Image.Image
    original_size: Size
    cropped_size: Size
    strategy: Literal["trim", "center"] = "trim"


def _normalize(img: Image.Image) -> Image.Image:
    """Return a loaded RGB/RGBA copy of img."""
    if img.mode in ("RGB", "RGBA"):
        return img.copy()
    return img.convert("RGBA")


def detect_background(img: Image.Image) -> tuple[int, ...]:
    """Guess the background colour from the four corners.

    The most common corner colour wins; ties go to the top-left pixel.
    """
    w, h = img.size
    corners = [
        img.getpixel((0, 0)),
        img.getpixel((w - 1, 0)),
        img.getpixel((0, h - 1)),
        img.getpixel((w - 1, h - 1)),
    ]
    counts = Counter(corners)
    best = max(counts.values())
    return next(c for c in corners if counts[c] == best)


def find_content_box(
    img: Image.Image,
    background: tuple[int, ...],
    threshold: float = DEFAULT_TRIM_THRESHOLD,
) -> tuple[int, int, int, int]:
    """Bounding box (left, top, right, bottom) of pixels unlike the background.

    Raises:
        TrimError: If every pixel is within tolerance of the background.
    """
    tolerance = threshold / 100 * 255
    diff = ImageChops.difference(img, Image.new(img.mode, img.size, background))

    # Largest per-channel difference for each pixel
    bands = diff.split()
    mask = bands[0]
    for band in bands[1:]:
        mask = ImageChops.lighter(mask, band)
    mask = mask.point(lambda p: 255 if p > tolerance else 0)

    bbox = mask.getbbox()
    if bbox is None:
        raise TrimError("Image contains only background; nothing to trim to")
    return bbox


def trim(img: Image.Image, threshold: float = DEFAULT_TRIM_THRESHOLD) -> Image.Image:
    """Remove border regions matching the corner background colour."""
    if img.width == 0 or img.height == 0:
        raise TrimError(f"Degenerate image size {img.width}x{img.height}")
    background = detect_background(img)
    return img.crop(find_content_box(img, background, threshold))


def center_crop(image_path: str | Path) -> CropResult:
    """Crop the largest centered square.

    Errors opening or decoding the image propagate.
    """
    with Image.open(image_path) as src:
        width, height = src.size
        size = min(width, height)
        left = (width - size) // 2
        top = (height - size) // 2
        cropped = _normalize(src.crop((left, top, left + size, top + size)))

    return CropResult(
        image=cropped,
        original_size=Size(width, height),
        cropped_size=Size(size, size),
        strategy="center",
    )


def smart_crop(
    image_path: str | Path,
    threshold: float = DEFAULT_TRIM_THRESHOLD,
    event_sink: EventSink | None = None,
) -> CropResult:
    """Trim whitespace around the drawing, or center-crop if trimming fails."""
    sink = event_sink or default_sink(__name__)
    try:
        with Image.open(image_path) as src:
            original = Size(*src.size)
            img = _normalize(src)
        trimmed = trim(img, threshold)
    except Exception as e:
        sink.log_event(
            logging.WARNING,
            "Smart crop failed, falling back to center crop",
            path=str(image_path),
            error=str(e),
        )
        return center_crop(image_path)

    return CropResult(
        image=trimmed,
        original_size=original,
        cropped_size=Size(*trimmed.size),
        strategy="trim",
    )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_target_size(width: int, height: int, max_size: int) -> tuple[int, int]:
    """Target box whose longer side is max_size and whose ratio matches width/height."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Cannot resize image of size {width}x{height}")
    if max_size <= 0:
        raise ValueError(f"max_size must be positive, got {max_size}")

    aspect = width / height
    if aspect > 1:
        # Landscape: width is longer
        return max_size, max(1, _round_half_up(max_size / aspect))
    # Portrait or square
    return max(1, _round_half_up(max_size * aspect)), max_size


def resize_to_bound(img: Image.Image, max_size: int) -> tuple[Image.Image, int, int]:
    """Stretch img to the bounded target box. Enlarges small images."""
    target_width, target_height = compute_target_size(img.width, img.height, max_size)
    resized = img.resize((target_width, target_height), Image.Resampling.LANCZOS)
    return resized, target_width, target_height


def encode_png(img: Image.Image) -> bytes:
    """Encode image as PNG bytes."""
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def image_to_base64(img: Image.Image) -> str:
    """Convert PIL Image to base64 PNG string."""
    return base64.standard_b64encode(encode_png(img)).decode("utf-8")


async def smart_crop_async(
    image_path: str | Path,
    threshold: float = DEFAULT_TRIM_THRESHOLD,
    event_sink: EventSink | None = None,
) -> CropResult:
    """Async wrapper for smart_crop (runs in thread pool)."""
    return await asyncio.to_thread(smart_crop, image_path, threshold, event_sink)


async def resize_to_bound_async(img: Image.Image, max_size: int) -> tuple[Image.Image, int, int]:
    """Async wrapper for resize_to_bound."""
    return await asyncio.to_thread(resize_to_bound, img, max_size)


async def encode_png_async(img: Image.Image) -> bytes:
    """Async wrapper for encode_png."""
    return await asyncio.to_thread(encode_png, img)


async def image_to_base64_async(img: Image.Image) -> str:
    """Async wrapper for image_to_base64."""
    return await asyncio.to_thread(image_to_base64, img)
