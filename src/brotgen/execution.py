"""Execution helpers for Mandelbrot CLI workflows."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from .config import GenerationConfig, load_sweep_configs
from .generator import MandelbrotGenerator
from .image import DEFAULT_FORMAT
from .tracking import log_to_mlflow


def run_single_generation(
    config: GenerationConfig,
    output: str | Path,
    image_format: str = DEFAULT_FORMAT,
    section_count: Optional[int] = None,
    suite_name: Optional[str] = None,
) -> Path:
    """Generate, save and log a single Mandelbrot image."""
    print(
        f"[Run] Starting generation '{config.run_name}' "
        f"(size={config.width}x{config.height}, max_iterations={config.max_iterations}, "
        f"scale_factor={config.scale_factor:g})",
        flush=True,
    )

    generator = MandelbrotGenerator(config)
    report = generator.generate(section_count)
    print(
        f"[Timing] Field: {report.timing['wall_time']:.4f}s over "
        f"{report.timing['total_sections']} sections ({report.timing['workers']} threads)",
        flush=True,
    )
    slowest = report.slowest_section
    if slowest is not None:
        print(
            f"[Timing] Slowest section {slowest['section_id']} "
            f"(rows {slowest['start_row']}:{slowest['end_row']}) took {slowest['comp_time']:.4f}s",
            flush=True,
        )

    raster = generator.render()
    path = generator.save_image(output, image_format)
    print(f"[Run] Saved {image_format} image to {path}", flush=True)

    suite = suite_name or os.environ.get("BROTGEN_SUITE") or "default"
    log_to_mlflow(config, report, raster, suite)

    return path


def run_sweep(
    config_path: str | Path | None,
    output_dir: str | Path,
    task_id: Optional[int] = None,
    suite_name: Optional[str] = None,
    configs: Optional[list[GenerationConfig]] = None,
    descriptor: Optional[str] = None,
    image_format: str = DEFAULT_FORMAT,
    section_count: Optional[int] = None,
) -> int:
    """Run a sweep defined in a YAML configuration file or a pre-loaded list."""
    if configs is None:
        if config_path is None:
            raise ValueError("config_path must be provided when configs is None")
        configs = load_sweep_configs(config_path)
        descriptor = descriptor or str(config_path)
    else:
        descriptor = descriptor or (str(config_path) if config_path else "sweep")

    if not configs:
        print("ERROR: No configurations found in sweep", file=sys.stderr)
        return 1

    output_dir = Path(output_dir)

    def output_for(cfg: GenerationConfig) -> Path:
        return output_dir / f"{cfg.run_name}.{image_format}"

    if task_id is not None:
        if task_id < 0 or task_id >= len(configs):
            print(f"ERROR: task-id {task_id} out of range [0, {len(configs) - 1}]", file=sys.stderr)
            return 1
        config = configs[task_id]
        print(f"[Task {task_id}] Running: {config.run_name}", flush=True)
        run_single_generation(config, output_for(config), image_format, section_count, suite_name)
        return 0

    print("=" * 70)
    print(f"[Sweep] Running {len(configs)} configurations from {descriptor}")
    print("=" * 70, flush=True)

    successes = 0
    failures: list[tuple[int, str]] = []

    for idx, cfg in enumerate(configs):
        print(f"\n[{idx + 1}/{len(configs)}] {cfg.run_name}", flush=True)
        try:
            run_single_generation(cfg, output_for(cfg), image_format, section_count, suite_name)
        except (OSError, ValueError) as exc:
            print(f"    FAILED: {exc}", file=sys.stderr)
            failures.append((idx, cfg.run_name))
        else:
            successes += 1

    print("\n" + "=" * 70)
    print("Summary")
    print("=" * 70)
    print(f"Total:      {len(configs)}")
    print(f"Successful: {successes}")
    print(f"Failed:     {len(failures)}")

    if failures:
        print("\nFailed configurations:")
        for idx, name in failures:
            print(f"  [{idx}] {name}")
        return 1

    return 0
