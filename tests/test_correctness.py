"""Compare the compiled parallel field against the pure-Python baseline."""

from pathlib import Path

import numpy as np
import pytest

from brotgen.baseline import compute_rows
from brotgen.config import load_sweep_configs
from brotgen.generator import MandelbrotGenerator

TEST_CONFIGS = load_sweep_configs(Path(__file__).parent / "test_configs.yaml")


@pytest.mark.parametrize("config", TEST_CONFIGS, ids=lambda c: c.run_name)
def test_parallel_matches_baseline(config):
    generator = MandelbrotGenerator(config)
    generator.generate(section_count=6)

    # First row, a section boundary area, the center row and the last row.
    rows = [0, config.height // 6, config.height // 2, config.height - 1]
    baseline = compute_rows(config, rows)

    np.testing.assert_array_equal(
        generator.field[rows, :], baseline, err_msg=f"Mismatch: {config.run_name}"
    )
