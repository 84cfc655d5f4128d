"""Work partitioning for parallel Mandelbrot generation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Section:
    """Half-open row range ``[start_y, end_y)`` spanning the full image width."""

    index: int
    start_y: int
    end_y: int

    @property
    def height(self) -> int:
        return self.end_y - self.start_y

    @property
    def is_empty(self) -> bool:
        return self.end_y <= self.start_y

    def rows(self) -> range:
        return range(self.start_y, self.end_y)


def available_cpus() -> int:
    return os.cpu_count() or 1


def default_section_count(cpus: int, multiplier: int = 2) -> int:
    """Number of sections for a machine with ``cpus`` processing units."""
    return max(1, multiplier * cpus)


def horizontal_sections(height: int, count: int) -> List[Section]:
    """Split ``[0, height)`` into ``count`` contiguous sections.

    Every section gets ``ceil(height / count)`` rows except the last, which is
    clamped to end exactly at ``height``. When ``count`` is large relative to
    ``height`` the trailing sections come out empty.
    """
    if count < 1:
        raise ValueError(f"Section count must be at least 1 (got {count})")

    rows_per_section = -(-height // count)

    sections: List[Section] = []
    for index in range(count - 1):
        start_y = min(rows_per_section * index, height)
        end_y = min(start_y + rows_per_section, height)
        sections.append(Section(index, start_y, end_y))

    last_start = min(rows_per_section * (count - 1), height)
    sections.append(Section(count - 1, last_start, height))
    return sections
