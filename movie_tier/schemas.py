"""
Pydantic schemas for evaluation results and the comparison report.
Defines the structure of the report written by the training CLI.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ConfusionMatrix(BaseModel):
    """Counts of predicted vs. actual top-tier labels."""
    tp: int = Field(0, ge=0, description="Predicted top tier, actually top tier")
    fp: int = Field(0, ge=0, description="Predicted top tier, actually not")
    tn: int = Field(0, ge=0, description="Predicted not top tier, actually not")
    fn: int = Field(0, ge=0, description="Predicted not top tier, actually top tier")

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.tn + self.fn


class Metrics(BaseModel):
    """Confusion-matrix derived metrics. Undefined ratios are NaN."""
    accuracy: float
    sensitivity: float
    specificity: float
    ppv: float
    npv: float


class Evaluation(BaseModel):
    """A confusion matrix and its derived metrics for one prediction set."""
    confusion: ConfusionMatrix
    metrics: Metrics


class CandidateScore(BaseModel):
    """Mean cross-validated metrics for one hyperparameter setting."""
    params: Dict[str, Any]
    metrics: Metrics


class EvaluationResult(BaseModel):
    """Everything recorded for one model family."""
    family: str
    params: Dict[str, Any] = Field(..., description="Hyperparameters chosen by cross-validation")
    n_features: int
    cv_folds: int
    cv_candidates: List[CandidateScore]
    cv_metrics: Metrics
    train: Evaluation
    test: Evaluation
    fit_time: float = Field(..., description="Seconds spent on cross-validation and refit")


class ComparisonReport(BaseModel):
    """Per-family results plus run-level diagnostics."""
    seed: int
    train_size: int
    test_size: int
    features: List[str]
    results: List[EvaluationResult]
    failed_families: Dict[str, str] = Field(default_factory=dict)
    recommended: Optional[str] = None
    diagnostics: Dict[str, int] = Field(default_factory=dict)

    def result_for(self, family: str) -> Optional[EvaluationResult]:
        for result in self.results:
            if result.family == family:
                return result
        return None
