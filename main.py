from __future__ import annotations

import argparse
import sys
from pathlib import Path

from brotgen.config import default_generation_config, load_named_sweep_configs
from brotgen.execution import run_single_generation, run_sweep
from brotgen.image import IMAGE_FORMATS, format_from_path


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate Mandelbrot escape-time images.")
    parser.add_argument("--sweep", type=str, help="Path to sweep YAML file")
    parser.add_argument("--suite", type=str, help="Name of suite/experiment within sweep file")
    parser.add_argument("--list-suites", action="store_true", help="List suites in sweep file")
    parser.add_argument("--task-id", type=int, help="Run specific config index (for HPC arrays)")
    parser.add_argument("--output-dir", type=str, default="images", help="Output directory for sweep images")

    parser.add_argument("--height", type=int, default=2048, help="Image height in pixels [512, 8192]")
    parser.add_argument("--max-iterations", type=int, default=1000, help="Iteration cap [100, 32000]")
    parser.add_argument("--scale-factor", type=float, default=2.0, help="Plane scale factor [1.0, 8.0]")
    parser.add_argument("--sections", type=int, help="Number of horizontal sections (default: 2 per CPU)")
    parser.add_argument("--output", type=str, default="image.jpg", help="Output image path")
    parser.add_argument("--format", type=str, choices=sorted(IMAGE_FORMATS), help="Output image format")

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Handle sweep runs
    if args.sweep:
        sweep_path = Path(args.sweep)

        if args.list_suites:
            suites = load_named_sweep_configs(sweep_path)
            for name, configs in suites:
                print(f"{name}: {len(configs)} configurations")
            return 0

        if args.task_id is not None and args.suite is None:
            sys.exit("ERROR: --task-id requires --suite")

        try:
            suites = load_named_sweep_configs(sweep_path, args.suite)
        except ValueError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

        exit_code = 0
        for suite_name, configs in suites:
            descriptor = f"{sweep_path}::{suite_name}"
            rc = run_sweep(
                sweep_path,
                Path(args.output_dir) / suite_name,
                args.task_id,
                suite_name,
                configs,
                descriptor,
                image_format=args.format or "png",
                section_count=args.sections,
            )
            exit_code = exit_code or rc
        return exit_code

    if args.suite or args.list_suites or args.task_id is not None:
        sys.exit("ERROR: --suite, --list-suites and --task-id require --sweep")

    image_format = args.format or format_from_path(args.output)
    try:
        config = default_generation_config(
            height=args.height,
            max_iterations=args.max_iterations,
            scale_factor=args.scale_factor,
        )
        run_single_generation(config, args.output, image_format, args.sections)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
