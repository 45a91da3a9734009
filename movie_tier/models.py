"""
Model family descriptors.

A family pairs an estimator factory with its hyperparameter grid and says
whether it learns the binary label directly or regresses the audience rating
and thresholds the fitted value.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List

import lightgbm as lgb
import numpy as np
from sklearn.ensemble import BaggingClassifier, RandomForestClassifier
from sklearn.linear_model import LinearRegression, LogisticRegression
from sklearn.pipeline import Pipeline as SklearnPipeline
from sklearn.preprocessing import StandardScaler

from .config import DEFAULT_FAMILIES, MODEL_GRIDS, RANDOM_STATE, RATING_THRESHOLD

LABEL_TARGET = "label"
RATING_TARGET = "rating"


@dataclass(frozen=True)
class ModelFamily:
    name: str
    factory: Callable[..., object]
    grid: List[Dict] = field(default_factory=lambda: [{}])
    target: str = LABEL_TARGET
    threshold: float = RATING_THRESHOLD

    def build(self, params):
        return self.factory(**params)

    def to_labels(self, predictions):
        """Map raw predictions to 0/1 top-tier labels."""
        predictions = np.asarray(predictions)
        if self.target == RATING_TARGET:
            return (predictions > self.threshold).astype(int)
        return predictions.astype(int)


def _linear_regression():
    return LinearRegression()


def _logistic_regression(C=1.0):
    return SklearnPipeline([
        ('scale_features', StandardScaler()),
        ('model', LogisticRegression(C=C, max_iter=1000, random_state=RANDOM_STATE)),
    ])


def _bagging(n_estimators=100):
    return BaggingClassifier(n_estimators=n_estimators, random_state=RANDOM_STATE)


def _random_forest(n_estimators=200, max_features="sqrt"):
    return RandomForestClassifier(
        n_estimators=n_estimators, max_features=max_features, random_state=RANDOM_STATE
    )


def _gradient_boosting(n_estimators=100, max_depth=4, learning_rate=0.05):
    return lgb.LGBMClassifier(
        n_estimators=n_estimators,
        max_depth=max_depth,
        learning_rate=learning_rate,
        num_leaves=min(31, 2 ** max_depth),
        min_child_samples=5,
        random_state=RANDOM_STATE,
        verbose=-1,
    )


FACTORIES = {
    "linear_regression": (_linear_regression, RATING_TARGET),
    "logistic_regression": (_logistic_regression, LABEL_TARGET),
    "bagging": (_bagging, LABEL_TARGET),
    "random_forest": (_random_forest, LABEL_TARGET),
    "gradient_boosting": (_gradient_boosting, LABEL_TARGET),
}


def get_family(name, grid=None):
    if name not in FACTORIES:
        raise ValueError(f"Unknown model family '{name}'. Choose from: {', '.join(FACTORIES)}")
    factory, target = FACTORIES[name]
    return ModelFamily(name=name, factory=factory, grid=list(grid or MODEL_GRIDS[name]), target=target)


def default_families(names=DEFAULT_FAMILIES):
    return [get_family(name) for name in names]
