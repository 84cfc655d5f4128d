"""Iteration count to RGB color ramp."""

from __future__ import annotations

from typing import Callable, List, Tuple

import numpy as np

from .computation import FIELD_DTYPE

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)
OPAQUE = 255

# Ordered (exclusive upper threshold, formula) pairs. Counts at or beyond the
# last threshold fall through to TAIL_COLOR. Divisions truncate.
COLOR_RAMP: List[Tuple[int, Callable[[int], Color]]] = [
    (64, lambda i: (i * 2, 0, 0)),
    (128, lambda i: ((i - 64) * 128 // 126 + 128, 0, 0)),
    (256, lambda i: ((i - 128) * 62 // 127 + 193, 0, 0)),
    (512, lambda i: (255, (i - 256) * 62 // 255 + 1, 0)),
    (1024, lambda i: (255, (i - 512) * 63 // 511 + 64, 0)),
    (2048, lambda i: (255, (i - 1024) * 63 // 1023 + 128, 0)),
    (4096, lambda i: (255, (i - 2048) * 63 // 2047 + 192, 0)),
]
TAIL_COLOR: Color = (255, 255, 0)


def lookup_color(iterations: int, max_iterations: int) -> Color:
    """Color of a pixel that escaped after ``iterations`` steps.

    Points that never escaped (``iterations >= max_iterations``) are black.
    """
    if iterations >= max_iterations:
        return BLACK
    for threshold, formula in COLOR_RAMP:
        if iterations < threshold:
            return formula(iterations)
    return TAIL_COLOR


def color_table(max_iterations: int) -> np.ndarray:
    """Precomputed ``(max_iterations + 1, 3)`` uint8 table indexed by count."""
    table = np.empty((max_iterations + 1, 3), dtype=np.uint8)
    for i in range(max_iterations + 1):
        table[i] = lookup_color(i, max_iterations)
    return table


def colorize(field: np.ndarray, max_iterations: int) -> np.ndarray:
    """Map an iteration field of any shape to RGB, adding a trailing axis of 3."""
    counts = np.clip(np.asarray(field, dtype=FIELD_DTYPE), 0, max_iterations)
    return color_table(max_iterations)[counts]
