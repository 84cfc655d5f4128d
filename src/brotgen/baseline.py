"""Baseline Mandelbrot implementation."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .config import GenerationConfig


def compute_rows(config: GenerationConfig, rows: Iterable[int]) -> np.ndarray:
    """Compute escape times for the given rows in plain Python."""
    rows = list(rows)
    width = config.width
    center_x, center_y = config.center
    extent_x, extent_y = config.scale_extent
    image = np.zeros((len(rows), width), dtype=np.int64)

    for row_idx, y in enumerate(rows):
        cy = (y - center_y) / extent_y
        for x in range(width):
            cx = (x - center_x) / extent_x
            re = im = 0.0
            i = 0
            while i < config.max_iterations and re * re + im * im < config.scale_squared:
                re, im = re * re - im * im + cx, 2 * re * im + cy
                i += 1
            image[row_idx, x] = i

    return image
