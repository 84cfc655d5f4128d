"""Structured results returned from a generation run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class GenerationReport:
    """Container for outputs produced by ``MandelbrotGenerator.generate``.

    ``field`` is the ``(height, width)`` iteration field; ``sections`` holds
    one timing record per horizontal section, and together their ``rows``
    must cover every row of the field.
    """

    field: np.ndarray
    timing: Dict[str, Any]
    sections: Optional[List[Dict[str, Any]]]

    def __post_init__(self) -> None:
        if self.field.ndim != 2:
            raise ValueError(f"Iteration field must be two-dimensional (got shape {self.field.shape})")
        if self.sections is not None:
            covered = sum(record["rows"] for record in self.sections)
            if covered != self.field.shape[0]:
                raise ValueError(
                    f"Section records cover {covered} rows, field has {self.field.shape[0]}"
                )

    @property
    def field_shape(self) -> Tuple[int, int]:
        height, width = self.field.shape
        return height, width

    @property
    def slowest_section(self) -> Optional[Dict[str, Any]]:
        if not self.sections:
            return None
        return max(self.sections, key=lambda record: record["comp_time"])

    def copy_sections(self) -> Optional[List[Dict[str, Any]]]:
        if self.sections is None:
            return None
        return [record.copy() for record in self.sections]
