"""Parallel Mandelbrot escape-time generator with MLflow tracking."""

__version__ = "1.0.0"

# Core computation and config - no tracking or plotting imports
from .coloring import COLOR_RAMP, lookup_color
from .config import ConfigurationRangeError, GenerationConfig, default_generation_config
from .generator import MandelbrotGenerator
from .image import FieldNotGeneratedError
from .report import GenerationReport
from .scheduling import Section, horizontal_sections


# Conditional imports - only loaded when needed
def __getattr__(name):
    """Lazy loading of heavy modules."""
    if name == "log_to_mlflow":
        from .tracking import log_to_mlflow

        return log_to_mlflow
    elif name == "load_sweep_configs":
        from .config import load_sweep_configs

        return load_sweep_configs
    elif name == "run_sweep":
        from .execution import run_sweep

        return run_sweep
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "COLOR_RAMP",
    "ConfigurationRangeError",
    "FieldNotGeneratedError",
    "GenerationConfig",
    "GenerationReport",
    "MandelbrotGenerator",
    "Section",
    "default_generation_config",
    "horizontal_sections",
    "load_sweep_configs",
    "log_to_mlflow",
    "lookup_color",
    "run_sweep",
]
