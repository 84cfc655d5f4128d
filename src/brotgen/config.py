"""Configuration objects and YAML loading for Mandelbrot generation runs."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from itertools import product
from pathlib import Path
from typing import Dict, List, Tuple

import yaml

# Arbitrary but practical inclusive limits.
HEIGHT_BOUNDS: Tuple[int, int] = (512, 8192)
ITERATION_BOUNDS: Tuple[int, int] = (100, 32000)
SCALE_BOUNDS: Tuple[float, float] = (1.0, 8.0)

SWEEP_KEYS = ("height", "max_iterations", "scale_factor")


class ConfigurationRangeError(ValueError):
    """A construction parameter lies outside its inclusive bounds."""

    def __init__(self, name: str, value: float, low: float, high: float):
        self.name = name
        self.value = value
        self.low = low
        self.high = high
        super().__init__(
            f"{name} must be between {low} and {high} inclusively (got {value})"
        )


def check_limits(name: str, value: float, low: float, high: float) -> None:
    if value < low or value > high:
        raise ConfigurationRangeError(name, value, low, high)


@dataclass(frozen=True)
class GenerationConfig:
    """Validated parameters of a single Mandelbrot generation run."""

    height: int
    max_iterations: int
    scale_factor: float = 2.0

    def __post_init__(self) -> None:
        check_limits("height", self.height, *HEIGHT_BOUNDS)
        check_limits("max_iterations", self.max_iterations, *ITERATION_BOUNDS)
        check_limits("scale_factor", self.scale_factor, *SCALE_BOUNDS)

    @property
    def width(self) -> int:
        # Half rounds up, 1.5 * 513 -> 770.
        return int(math.floor(self.scale_factor * self.height + 0.5))

    @property
    def center(self) -> Tuple[int, int]:
        return self.width // 2, self.height // 2

    @property
    def scale_squared(self) -> float:
        return self.scale_factor * self.scale_factor

    @property
    def scale_extent(self) -> Tuple[float, float]:
        """Plane units per pixel, horizontally and vertically.

        The vertical extent is the raw center row rather than ``center_y /
        scale_factor``, so the plane window is deliberately not square.
        """
        center_x, center_y = self.center
        return center_x / self.scale_factor, float(center_y)

    @property
    def run_name(self) -> str:
        return (
            f"h{self.height}_it{self.max_iterations}_s{self.scale_factor:g}_"
            f"{self.width}x{self.height}"
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for MLflow logging."""
        data = asdict(self)
        data["width"] = self.width
        return data


DEFAULT_GENERATION_CONFIG = GenerationConfig(height=2048, max_iterations=1000, scale_factor=2.0)


def default_generation_config(**overrides: object) -> GenerationConfig:
    """Return the canonical default config optionally overridden with kwargs."""
    return replace(DEFAULT_GENERATION_CONFIG, **_coerce_types(overrides))


def load_sweep_configs(yaml_path: str | Path) -> List[GenerationConfig]:
    """Load a YAML file and expand every sweep into configs.

    Supports a top-level ``sweep`` as well as a list of named
    ``experiments``, each carrying its own ``defaults`` and ``sweep``.
    """
    return [cfg for _, configs in load_named_sweep_configs(yaml_path) for cfg in configs]


def load_named_sweep_configs(
    yaml_path: str | Path,
    suite: str | None = None,
) -> List[tuple[str, List[GenerationConfig]]]:
    with open(yaml_path) as f:
        cfg = yaml.safe_load(f) or {}

    defaults: Dict[str, object] = cfg.get("defaults", {}) or {}
    experiments = cfg.get("experiments")
    results: List[tuple[str, List[GenerationConfig]]] = []

    if experiments:
        for exp in experiments:
            name = exp.get("name")
            if not name:
                continue
            if suite and name != suite:
                continue
            sweep = exp.get("sweep") or {}
            exp_defaults = {**defaults, **(exp.get("defaults", {}) or {})}
            results.append((name, _expand_sweep(exp_defaults, sweep)))
        if suite and not results:
            raise ValueError(f"Suite '{suite}' not found in {yaml_path}")
        return results

    sweep: Dict[str, object] = cfg.get("sweep", {}) or {}
    label = cfg.get("name") or Path(yaml_path).stem
    return [(label, _expand_sweep(defaults, sweep))]


def get_config_by_index(yaml_path: str | Path, index: int) -> GenerationConfig:
    """Get a specific config by index from sweep."""
    configs = load_sweep_configs(yaml_path)
    if index < 0 or index >= len(configs):
        raise ValueError(f"Config index {index} out of range [0, {len(configs) - 1}]")
    return configs[index]


def _expand_sweep(defaults: Dict[str, object], sweep: Dict[str, object]) -> List[GenerationConfig]:
    unknown = set(sweep) - set(SWEEP_KEYS)
    if unknown:
        raise ValueError(f"Unsupported sweep keys: {sorted(unknown)}")

    keys = list(sweep.keys())
    values = [_as_list(sweep[k]) for k in keys]
    configs: List[GenerationConfig] = []
    for combo in product(*values):
        data = {**defaults, **dict(zip(keys, combo))}
        configs.append(_build_config(data))
    return configs


def _build_config(raw_data: Dict[str, object]) -> GenerationConfig:
    unknown = set(raw_data) - set(SWEEP_KEYS)
    if unknown:
        raise ValueError(f"Unsupported config keys: {sorted(unknown)}")
    missing = [k for k in ("height", "max_iterations") if k not in raw_data]
    if missing:
        raise ValueError(f"Config is missing required keys: {missing}")
    return GenerationConfig(**_coerce_types(raw_data))  # type: ignore[arg-type]


def _coerce_types(data: Dict[str, object]) -> Dict[str, object]:
    result = dict(data)
    if "height" in result:
        result["height"] = int(result["height"])
    if "max_iterations" in result:
        result["max_iterations"] = int(result["max_iterations"])
    if "scale_factor" in result:
        result["scale_factor"] = float(result["scale_factor"])
    return result


def _as_list(entry: object) -> List[object]:
    if isinstance(entry, (list, tuple)):
        return list(entry)
    return [entry]
