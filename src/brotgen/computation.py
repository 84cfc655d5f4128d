from __future__ import annotations

from typing import Tuple

import numpy as np
from numba import njit

from .config import GenerationConfig

__all__ = [
    "allocate_field",
    "grid_constants",
    "map_pixel",
    "escape_time",
    "compute_section",
]

FIELD_DTYPE = np.int32


def allocate_field(config: GenerationConfig) -> np.ndarray:
    """Flat buffer holding one iteration count per pixel, row-major."""
    return np.zeros(config.width * config.height, dtype=FIELD_DTYPE)


def grid_constants(config: GenerationConfig) -> Tuple[float, float, float, float]:
    center_x, center_y = config.center
    extent_x, extent_y = config.scale_extent
    return float(center_x), float(center_y), extent_x, extent_y


@njit(nogil=True)
def map_pixel(
    x: float,
    y: float,
    center_x: float,
    center_y: float,
    extent_x: float,
    extent_y: float,
) -> Tuple[float, float]:
    return (x - center_x) / extent_x, (y - center_y) / extent_y


@njit(nogil=True)
def escape_time(cx: float, cy: float, max_iterations: int, scale_squared: float) -> int:
    re = 0.0
    im = 0.0
    re_squared = 0.0
    im_squared = 0.0
    iteration = 0
    while iteration < max_iterations:
        if re_squared + im_squared >= scale_squared:
            break
        # im must be updated before re, it depends on the previous re.
        im = 2.0 * re * im + cy
        re = re_squared - im_squared + cx
        re_squared = re * re
        im_squared = im * im
        iteration += 1
    return iteration


@njit(nogil=True)
def _compute_section(
    field: np.ndarray,
    width: int,
    start_y: int,
    end_y: int,
    center_x: float,
    center_y: float,
    extent_x: float,
    extent_y: float,
    max_iterations: int,
    scale_squared: float,
) -> None:
    for y in range(start_y, end_y):
        offset = y * width
        for x in range(width):
            cx, cy = map_pixel(x, y, center_x, center_y, extent_x, extent_y)
            field[offset + x] = escape_time(cx, cy, max_iterations, scale_squared)


def compute_section(field: np.ndarray, config: GenerationConfig, start_y: int, end_y: int) -> None:
    """Fill rows ``[start_y, end_y)`` of the flat ``field`` in place.

    Only the slice ``field[start_y * width:end_y * width]`` is written, so
    sections with disjoint row ranges can run on separate threads against the
    same buffer.
    """
    center_x, center_y, extent_x, extent_y = grid_constants(config)
    _compute_section(
        field,
        config.width,
        start_y,
        end_y,
        center_x,
        center_y,
        extent_x,
        extent_y,
        config.max_iterations,
        config.scale_squared,
    )
