"""MLflow tracking for Mandelbrot generation runs."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Sequence

import mlflow
import numpy as np
import pandas as pd
from matplotlib import pyplot as plt

from .config import GenerationConfig
from .report import GenerationReport

DEFAULT_TRACKING_URI = "mlruns"
EXPERIMENT_NAME = "brotgen"


def log_to_mlflow(
    config: GenerationConfig,
    report: GenerationReport,
    raster: Optional[np.ndarray] = None,
    suite_name: str = "default",
) -> Optional[str]:
    """Log a generation run to MLflow and return its run id.

    Args:
        config: Generation configuration
        report: Field, timing stats and section table from ``generate``
        raster: Rendered RGBA image, logged as an artifact when given
        suite_name: Name of the sweep suite for tagging/filtering
    """
    if os.environ.get("SKIP_MLFLOW"):
        print("[MLflow] SKIP_MLFLOW set - skipping MLflow logging.", flush=True)
        return None

    mlflow.set_tracking_uri(_resolve_tracking_uri())
    mlflow.set_experiment(EXPERIMENT_NAME)

    with mlflow.start_run(run_name=config.run_name) as run:
        mlflow.set_tags({"node_name": os.uname().nodename, "suite": suite_name})
        mlflow.log_params(config.to_dict())

        section_records = report.copy_sections()
        if section_records:
            mlflow.log_table(_records_to_table(section_records), "sections.json")

        timing = report.timing or {}
        for key in ("wall_time", "comp_total", "max_section_time", "total_sections"):
            mlflow.log_metric(key, float(timing.get(key, 0.0)))

        if raster is not None:
            mlflow.log_image(raster, "images/mandelbrot.png")

        fig, ax = plt.subplots(figsize=(8, 4))
        ax.imshow(report.field, cmap="magma")
        ax.set_axis_off()
        mlflow.log_figure(fig, "figures/iterations.png")
        plt.close(fig)

        print(f"[MLflow] Logged run: {config.run_name} (suite: {suite_name})", flush=True)
        print(f"[MLflow] Run ID: {run.info.run_id}", flush=True)
        return run.info.run_id


def _records_to_table(records: Sequence[Dict[str, Any]]) -> Dict[str, List[Any]]:
    """Convert row-wise section records into MLflow table format."""
    frame = pd.DataFrame.from_records(records)
    return frame.to_dict(orient="list")


def _resolve_tracking_uri() -> str:
    return os.environ.get("MLFLOW_TRACKING_URI") or DEFAULT_TRACKING_URI
