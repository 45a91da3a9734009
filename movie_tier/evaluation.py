"""
Model evaluation harness.

For each model family: pick hyperparameters by k-fold cross-validated
accuracy on the training set, refit on the full training set, then report
confusion-matrix metrics on the training set (fit quality) and on the
untouched test set (generalization).
"""

import math
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from .config import CV_FOLDS, LABEL_COLUMN, N_JOBS, NON_FEATURE_COLUMNS, RANDOM_STATE
from .errors import Diagnostics, ModelFitError, SchemaError
from .metrics import evaluate_predictions, mean_metrics
from .models import RATING_TARGET, ModelFamily
from .schemas import CandidateScore, ComparisonReport, EvaluationResult
from .splitting import kfold_indices


@dataclass(frozen=True)
class FeatureSchema:
    """
    Explicit feature selection.

    ``include=None`` means every column not excluded. Identifier, free-text,
    raw rating and label columns are always excluded so the target cannot
    leak into the features.
    """

    include: Optional[Sequence[str]] = None
    exclude: Sequence[str] = ()

    @property
    def excluded(self):
        return set(NON_FEATURE_COLUMNS) | set(self.exclude)

    def resolve(self, df: pd.DataFrame) -> List[str]:
        if self.include is None:
            return [col for col in df.columns if col not in self.excluded]
        missing = [col for col in self.include if col not in df.columns]
        if missing:
            raise SchemaError(missing, source="feature table")
        return [col for col in self.include if col not in self.excluded]

    def without(self, columns):
        return FeatureSchema(include=self.include, exclude=tuple(self.exclude) + tuple(columns))


def constant_columns(df: pd.DataFrame, features) -> List[str]:
    return [col for col in features if df[col].nunique(dropna=False) <= 1]


def check_fit_preconditions(family: ModelFamily, train: pd.DataFrame, features, k=CV_FOLDS):
    """Raise ModelFitError for training data the family cannot be fit on."""
    if len(train) < k:
        raise ModelFitError(family.name, f"{len(train)} training rows is fewer than {k} folds")
    if not features:
        raise ModelFitError(family.name, "no feature columns")
    constant = constant_columns(train, features)
    if constant:
        raise ModelFitError(family.name, f"zero-variance feature column(s): {', '.join(constant)}")
    if family.target != RATING_TARGET and train[LABEL_COLUMN].nunique() < 2:
        raise ModelFitError(family.name, "training labels contain a single class")


def _targets(family, df):
    if family.target == RATING_TARGET:
        return df["rating"].to_numpy(dtype=float)
    return df[LABEL_COLUMN].to_numpy(dtype=int)


def _score_fold(family, params, X, y_fit, y_label, train_idx, val_idx):
    model = family.build(params)
    model.fit(X[train_idx], y_fit[train_idx])
    predicted = family.to_labels(model.predict(X[val_idx]))
    return evaluate_predictions(y_label[val_idx], predicted).metrics


def cross_validate_family(family: ModelFamily, train: pd.DataFrame, features, k=CV_FOLDS,
                          seed=RANDOM_STATE, n_jobs=N_JOBS):
    """
    Score every grid point of ``family`` with k-fold cross-validation.

    Returns:
        Tuple of (best params, list of CandidateScore in grid order)
    """
    X = train[features].to_numpy(dtype=float)
    y_fit = _targets(family, train)
    y_label = train[LABEL_COLUMN].to_numpy(dtype=int)
    folds = kfold_indices(len(train), k=k, seed=seed)
    if family.target != RATING_TARGET:
        for i, (train_idx, _) in enumerate(folds, 1):
            if len(np.unique(y_label[train_idx])) < 2:
                raise ModelFitError(
                    family.name, f"training labels of fold {i}/{k} contain a single class"
                )

    candidates = []
    for params in family.grid:
        fold_metrics = Parallel(n_jobs=n_jobs)(
            delayed(_score_fold)(family, params, X, y_fit, y_label, train_idx, val_idx)
            for train_idx, val_idx in folds
        )
        candidates.append(CandidateScore(params=dict(params), metrics=mean_metrics(fold_metrics)))

    best = max(
        range(len(candidates)),
        key=lambda i: (_rank_value(candidates[i].metrics.accuracy), -i),
    )
    return dict(family.grid[best]), candidates


def evaluate_family(family: ModelFamily, train: pd.DataFrame, test: pd.DataFrame, features,
                    k=CV_FOLDS, seed=RANDOM_STATE, n_jobs=N_JOBS):
    """Cross-validate, refit on all of ``train`` and evaluate on train and test."""
    check_fit_preconditions(family, train, features, k=k)

    start = time.time()
    params, candidates = cross_validate_family(family, train, features, k=k, seed=seed, n_jobs=n_jobs)
    model = family.build(params)
    model.fit(train[features].to_numpy(dtype=float), _targets(family, train))
    fit_time = time.time() - start

    train_pred = family.to_labels(model.predict(train[features].to_numpy(dtype=float)))
    test_pred = family.to_labels(model.predict(test[features].to_numpy(dtype=float)))
    chosen = next(c for c in candidates if c.params == params)

    result = EvaluationResult(
        family=family.name,
        params=params,
        n_features=len(features),
        cv_folds=k,
        cv_candidates=candidates,
        cv_metrics=chosen.metrics,
        train=evaluate_predictions(train[LABEL_COLUMN], train_pred),
        test=evaluate_predictions(test[LABEL_COLUMN], test_pred),
        fit_time=fit_time,
    )
    return result, model


def _rank_value(value):
    return -math.inf if value is None or np.isnan(value) else value


def recommend(results: Sequence[EvaluationResult]) -> Optional[str]:
    """Family with the best test accuracy; ties go to higher PPV, then to the earlier family."""
    best, best_key = None, None
    for result in results:
        key = (_rank_value(result.test.metrics.accuracy), _rank_value(result.test.metrics.ppv))
        if best_key is None or key > best_key:
            best, best_key = result.family, key
    return best


def run_harness(train: pd.DataFrame, test: pd.DataFrame, schema: FeatureSchema,
                families: Sequence[ModelFamily], k=CV_FOLDS, seed=RANDOM_STATE, n_jobs=N_JOBS,
                diagnostics: Optional[Diagnostics] = None, verbose: bool = False):
    """
    Evaluate every model family on the same split.

    A family whose preconditions fail is excluded and counted; the others
    still run.

    Returns:
        Tuple of (ComparisonReport, dict of family name -> refit model)
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    features = schema.resolve(train)

    results, models, failed = [], {}, {}
    for family in families:
        if verbose:
            print(f"\n[{family.name}] {len(family.grid)} candidate(s) x {k} folds")
        try:
            result, model = evaluate_family(family, train, test, features, k=k, seed=seed, n_jobs=n_jobs)
        except ModelFitError as e:
            diagnostics.record_error(e)
            failed[family.name] = str(e)
            if verbose:
                print(f"  Skipped: {e}")
            continue
        results.append(result)
        models[family.name] = model
        if verbose:
            print(f"  Params: {result.params}")
            print(f"  CV accuracy: {result.cv_metrics.accuracy:.4f}")
            print(f"  Test accuracy: {result.test.metrics.accuracy:.4f}")
            print(f"  Time: {result.fit_time:.2f}s")

    report = ComparisonReport(
        seed=seed,
        train_size=len(train),
        test_size=len(test),
        features=features,
        results=results,
        failed_families=failed,
        recommended=recommend(results),
        diagnostics=diagnostics.as_dict(),
    )
    return report, models
