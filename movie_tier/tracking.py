"""
MLflow tracking for comparison runs.

Each model family is logged as a nested run under one parent run so the
families can be compared side by side in the MLflow UI.
"""

import math
import time

import mlflow

from .config import MLFLOW_EXPERIMENT_NAME, MLFLOW_TRACKING_URI
from .metrics import METRIC_NAMES
from .schemas import ComparisonReport


def _log_metrics(prefix, metrics):
    for name in METRIC_NAMES:
        value = getattr(metrics, name)
        # undefined ratios are not logged
        if not math.isnan(value):
            mlflow.log_metric(f"{prefix}_{name}", value)


def log_comparison(report: ComparisonReport, run_params=None,
                   tracking_uri=MLFLOW_TRACKING_URI, experiment_name=MLFLOW_EXPERIMENT_NAME):
    """
    Log a comparison report to MLflow.

    Args:
        report: Completed comparison report
        run_params: Run-level parameters (data paths, split fraction, folds)
        tracking_uri: MLflow tracking server or local store URI
        experiment_name: Experiment to log under

    Returns:
        Parent run id
    """
    mlflow.set_tracking_uri(tracking_uri)
    mlflow.set_experiment(experiment_name)

    with mlflow.start_run(run_name=f"comparison_{int(time.time())}") as parent:
        mlflow.log_param("seed", report.seed)
        mlflow.log_param("train_size", report.train_size)
        mlflow.log_param("test_size", report.test_size)
        mlflow.log_param("n_features", len(report.features))
        mlflow.log_param("recommended", report.recommended or "none")
        for param, value in (run_params or {}).items():
            mlflow.log_param(param, value)
        for kind, count in report.diagnostics.items():
            mlflow.log_metric(f"diagnostics_{kind}", count)

        for result in report.results:
            with mlflow.start_run(run_name=result.family, nested=True):
                mlflow.log_param("family", result.family)
                for param, value in result.params.items():
                    mlflow.log_param(param, value)
                _log_metrics("cv", result.cv_metrics)
                _log_metrics("train", result.train.metrics)
                _log_metrics("test", result.test.metrics)
                mlflow.log_metric("fit_time", result.fit_time)

        run_id = parent.info.run_id

    print(f"v Run logged to MLflow")
    print(f"  Run ID: {run_id}")
    print(f"  Experiment: {experiment_name}")
    return run_id
