"""Parallel generation of the Mandelbrot iteration field."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .computation import allocate_field, compute_section
from .config import GenerationConfig
from .image import DEFAULT_FORMAT, FieldNotGeneratedError, assemble_image, save_image
from .report import GenerationReport
from .scheduling import Section, available_cpus, default_section_count, horizontal_sections

__all__ = ["MandelbrotGenerator"]


def _section_record(section: Section, comp_time: float) -> Dict[str, Any]:
    return {
        "section_id": section.index,
        "start_row": section.start_y,
        "end_row": section.end_y,
        "rows": section.height,
        "comp_time": comp_time,
        "thread": threading.current_thread().name,
    }


def _compute_section_timed(field: np.ndarray, config: GenerationConfig, section: Section) -> Dict[str, Any]:
    comp_start = time.perf_counter()
    if not section.is_empty:
        compute_section(field, config, section.start_y, section.end_y)
    return _section_record(section, time.perf_counter() - comp_start)


class MandelbrotGenerator:
    """Computes and renders the escape-time field for one configuration.

    ``generate`` must run before ``render`` or ``save_image``. A single
    instance is not meant to be generated from several threads at once.
    """

    def __init__(self, config: GenerationConfig):
        self.config = config
        self._field: Optional[np.ndarray] = None

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def max_iterations(self) -> int:
        return self.config.max_iterations

    @property
    def field(self) -> np.ndarray:
        """Read-only ``(height, width)`` view of the generated iteration counts."""
        if self._field is None:
            raise FieldNotGeneratedError()
        return self._field.reshape(self.height, self.width)

    @property
    def is_generated(self) -> bool:
        return self._field is not None

    def generate(self, section_count: Optional[int] = None) -> GenerationReport:
        """Fill the iteration field, one thread-pool task per horizontal section.

        Each task writes straight into its own rows of the shared buffer, and
        the call returns only after every task has finished.
        """
        cpus = available_cpus()
        if section_count is None:
            section_count = default_section_count(cpus)
        sections = horizontal_sections(self.height, section_count)
        workers = max(1, min(len(sections), cpus))

        field = allocate_field(self.config)
        start_time = time.perf_counter()
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="section") as pool:
            futures = [
                pool.submit(_compute_section_timed, field, self.config, section)
                for section in sections
            ]
            records: List[Dict[str, Any]] = [future.result() for future in futures]
        wall_time = time.perf_counter() - start_time

        field.setflags(write=False)
        self._field = field

        timing = {
            "wall_time": wall_time,
            "comp_total": sum(record["comp_time"] for record in records),
            "max_section_time": max(record["comp_time"] for record in records),
            "total_sections": len(sections),
            "workers": workers,
        }
        return GenerationReport(self.field, timing, records)

    def render(self) -> np.ndarray:
        """RGBA raster of the generated field."""
        if self._field is None:
            raise FieldNotGeneratedError()
        return assemble_image(self.field, self.max_iterations)

    def save_image(self, filename: str | Path, image_format: str = DEFAULT_FORMAT) -> Path:
        if self._field is None or self._field.size == 0:
            raise FieldNotGeneratedError(
                "You must create the Mandelbrot data set before you can save the image to file."
            )
        return save_image(self.render(), filename, image_format)
