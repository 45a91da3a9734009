"""Confusion matrix and derived classification metrics."""

import numpy as np
from sklearn.metrics import confusion_matrix

from .schemas import ConfusionMatrix, Evaluation, Metrics

METRIC_NAMES = ("accuracy", "sensitivity", "specificity", "ppv", "npv")


def safe_ratio(numerator, denominator):
    """numerator / denominator, NaN when the denominator is zero."""
    if denominator == 0:
        return float("nan")
    return numerator / denominator


def confusion(y_true, y_pred) -> ConfusionMatrix:
    """Count true/false positives/negatives for binary 0/1 labels."""
    tn, fp, fn, tp = confusion_matrix(
        np.asarray(y_true, dtype=int), np.asarray(y_pred, dtype=int), labels=[0, 1]
    ).ravel()
    return ConfusionMatrix(tp=int(tp), fp=int(fp), tn=int(tn), fn=int(fn))


def derive_metrics(cm: ConfusionMatrix) -> Metrics:
    return Metrics(
        accuracy=safe_ratio(cm.tp + cm.tn, cm.total),
        sensitivity=safe_ratio(cm.tp, cm.tp + cm.fn),
        specificity=safe_ratio(cm.tn, cm.tn + cm.fp),
        ppv=safe_ratio(cm.tp, cm.tp + cm.fp),
        npv=safe_ratio(cm.tn, cm.tn + cm.fn),
    )


def evaluate_predictions(y_true, y_pred) -> Evaluation:
    cm = confusion(y_true, y_pred)
    return Evaluation(confusion=cm, metrics=derive_metrics(cm))


def mean_metrics(metrics_list) -> Metrics:
    """Average fold metrics; a metric undefined in some folds is averaged over the rest."""
    values = {}
    for name in METRIC_NAMES:
        column = np.array([getattr(m, name) for m in metrics_list], dtype=float)
        values[name] = float(np.nanmean(column)) if np.isfinite(column).any() else float("nan")
    return Metrics(**values)
