"""Human-readable rendering of a ComparisonReport."""

import pandas as pd

from .metrics import METRIC_NAMES
from .schemas import ComparisonReport, Evaluation


def comparison_table(report: ComparisonReport) -> pd.DataFrame:
    """One row per family: CV accuracy plus train/test metrics."""
    rows = []
    for result in report.results:
        row = {"family": result.family, "cv_accuracy": result.cv_metrics.accuracy}
        for split, evaluation in (("train", result.train), ("test", result.test)):
            for name in METRIC_NAMES:
                row[f"{split}_{name}"] = getattr(evaluation.metrics, name)
        rows.append(row)
    return pd.DataFrame(rows).set_index("family") if rows else pd.DataFrame()


def _confusion_lines(title, evaluation: Evaluation):
    cm = evaluation.confusion
    m = evaluation.metrics
    return [
        f"  {title}",
        f"    TP={cm.tp}  FP={cm.fp}  TN={cm.tn}  FN={cm.fn}",
        f"    accuracy={m.accuracy:.4f}  sensitivity={m.sensitivity:.4f}  "
        f"specificity={m.specificity:.4f}  PPV={m.ppv:.4f}  NPV={m.npv:.4f}",
    ]


def format_report(report: ComparisonReport) -> str:
    lines = [
        f"{'='*70}",
        "MODEL COMPARISON",
        f"{'='*70}",
        f"Seed: {report.seed}  Train: {report.train_size}  Test: {report.test_size}  "
        f"Features: {len(report.features)}",
    ]
    for result in report.results:
        lines.append("")
        lines.append(f"{result.family}  params={result.params}")
        lines.append(f"  CV accuracy ({result.cv_folds} folds): {result.cv_metrics.accuracy:.4f}")
        lines.extend(_confusion_lines("Train", result.train))
        lines.extend(_confusion_lines("Test", result.test))

    table = comparison_table(report)
    if not table.empty:
        lines.append("")
        lines.append(table[["cv_accuracy", "test_accuracy", "test_ppv", "test_npv"]].round(4).to_string())

    for family, message in report.failed_families.items():
        lines.append(f"\nExcluded {family}: {message}")

    lines.append("")
    lines.append("Diagnostics:")
    if report.diagnostics:
        for kind, count in report.diagnostics.items():
            lines.append(f"  {kind}: {count}")
    else:
        lines.append("  none")

    lines.append("")
    lines.append(f"Recommended model: {report.recommended or 'none'}")
    lines.append(f"{'='*70}")
    return "\n".join(lines)
