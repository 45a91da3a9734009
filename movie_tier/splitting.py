"""Seeded train/test partitioning and k-fold index generation."""

import math

import numpy as np
from sklearn.model_selection import KFold

from .config import CV_FOLDS, RANDOM_STATE, TRAIN_FRACTION
from .errors import SplitError


def train_size_for(n, train_fraction):
    """
    round(n * p), with halves rounded up.

    Python's round() and R's round() send halves to the even neighbour
    (2.5 -> 2); this rounds 2.5 to 3.
    """
    return int(math.floor(n * train_fraction + 0.5))


def split_dataset(df, train_fraction=TRAIN_FRACTION, seed=RANDOM_STATE):
    """
    Randomly partition ``df`` into train and test sets.

    The first round(n * p) rows of a seeded permutation go to train, the rest
    to test. The same seed and input order always give the same partition.
    """
    if not 0 < train_fraction < 1:
        raise SplitError(f"train fraction must be between 0 and 1, got {train_fraction}")
    n = len(df)
    n_train = train_size_for(n, train_fraction)
    if n_train == 0 or n_train == n:
        raise SplitError(
            f"train fraction {train_fraction} leaves an empty partition for {n} records"
        )
    order = np.random.RandomState(seed).permutation(n)
    return df.iloc[order[:n_train]].copy(), df.iloc[order[n_train:]].copy()


def kfold_indices(n, k=CV_FOLDS, seed=RANDOM_STATE):
    """Positional (train_idx, val_idx) pairs for simple shuffled k-fold cross-validation."""
    if k < 2:
        raise SplitError(f"need at least 2 folds, got {k}")
    if k > n:
        raise SplitError(f"{k} folds requested for only {n} records")
    folds = KFold(n_splits=k, shuffle=True, random_state=seed)
    return list(folds.split(np.arange(n)))
