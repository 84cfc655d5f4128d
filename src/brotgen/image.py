"""Raster assembly and encoding of a generated iteration field."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import numpy as np
from PIL import Image

from .coloring import OPAQUE, colorize

# Format selector -> (Pillow format name, supports alpha)
IMAGE_FORMATS: Dict[str, tuple[str, bool]] = {
    "png": ("PNG", True),
    "jpeg": ("JPEG", False),
    "jpg": ("JPEG", False),
    "bmp": ("BMP", False),
    "gif": ("GIF", False),
    "tiff": ("TIFF", True),
}
DEFAULT_FORMAT = "png"


class FieldNotGeneratedError(RuntimeError):
    """Raised when an iteration field is used before it has been generated."""

    def __init__(self, message: str = "You must generate the Mandelbrot data set before it can be rendered."):
        super().__init__(message)


def assemble_image(field: Optional[np.ndarray], max_iterations: int) -> np.ndarray:
    """Color a ``(height, width)`` iteration field into an RGBA uint8 raster."""
    if field is None or field.size == 0:
        raise FieldNotGeneratedError()
    if field.ndim != 2:
        raise ValueError(f"Iteration field must be two-dimensional (got shape {field.shape})")

    height, width = field.shape
    raster = np.empty((height, width, 4), dtype=np.uint8)
    raster[..., :3] = colorize(field, max_iterations)
    raster[..., 3] = OPAQUE
    return raster


def resolve_format(image_format: str) -> tuple[str, bool]:
    try:
        return IMAGE_FORMATS[image_format.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported image format {image_format!r}; expected one of {sorted(IMAGE_FORMATS)}"
        ) from None


def format_from_path(path: str | Path, default: str = DEFAULT_FORMAT) -> str:
    """Guess the format selector from a file suffix."""
    suffix = Path(path).suffix.lstrip(".").lower()
    return suffix if suffix in IMAGE_FORMATS else default


def to_pil(raster: np.ndarray, image_format: str = DEFAULT_FORMAT) -> Image.Image:
    _, keeps_alpha = resolve_format(image_format)
    if keeps_alpha:
        return Image.fromarray(raster)
    return Image.fromarray(np.ascontiguousarray(raster[..., :3]))


def save_image(raster: np.ndarray, path: str | Path, image_format: str = DEFAULT_FORMAT) -> Path:
    """Encode ``raster`` with Pillow and write it to ``path``."""
    pil_format, _ = resolve_format(image_format)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_pil(raster, image_format).save(path, format=pil_format)
    return path
