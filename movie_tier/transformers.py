"""
Custom transformers for the top-tier movie feature table.

Each transformer takes a pandas DataFrame of parsed records and returns a new
DataFrame; none of them modifies its input.
"""

import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin

from .config import CONTENT_RATINGS, GENRE_PREFIX, GENRES, RATING_PREFIX
from .errors import SchemaError


def _require_frame(X, name):
    if not isinstance(X, pd.DataFrame):
        raise ValueError(f"{name} requires pandas DataFrame")


class ColumnSelector(BaseEstimator, TransformerMixin):
    """Select specific columns from DataFrame"""

    def __init__(self, columns):
        self.columns = columns

    def fit(self, X, y=None):
        return self

    def transform(self, X):
        _require_frame(X, "ColumnSelector")
        missing = [col for col in self.columns if col not in X.columns]
        if missing:
            raise SchemaError(missing)
        return X[list(self.columns)].copy()


class GenreFlagEncoder(BaseEstimator, TransformerMixin):
    """
    One 0/1 column per known genre.

    A flag is set when the label is one of the record's genre tokens (exact,
    case-sensitive). Tokens outside the vocabulary are ignored.
    """

    def __init__(self, vocabulary=GENRES, column="genres", prefix=GENRE_PREFIX):
        self.vocabulary = vocabulary
        self.column = column
        self.prefix = prefix

    def fit(self, X, y=None):
        return self

    def transform(self, X):
        _require_frame(X, "GenreFlagEncoder")
        X = X.copy()
        token_sets = X[self.column].apply(frozenset)
        flags = pd.DataFrame(
            {f"{self.prefix}{genre}": token_sets.apply(lambda tokens, g=genre: int(g in tokens))
             for genre in self.vocabulary},
            index=X.index,
        )
        X = X.drop(self.column, axis=1)
        return pd.concat([X, flags], axis=1)


class ContentRatingEncoder(BaseEstimator, TransformerMixin):
    """One-hot encoding of the content rating into a fixed vocabulary"""

    def __init__(self, vocabulary=CONTENT_RATINGS, column="content_rating", prefix=RATING_PREFIX):
        self.vocabulary = vocabulary
        self.column = column
        self.prefix = prefix

    def fit(self, X, y=None):
        return self

    def transform(self, X):
        _require_frame(X, "ContentRatingEncoder")
        X = X.copy()
        ratings = X[self.column]
        flags = pd.DataFrame(
            {f"{self.prefix}{label}": (ratings == label).astype(int) for label in self.vocabulary},
            index=X.index,
        )
        X = X.drop(self.column, axis=1)
        return pd.concat([X, flags], axis=1)


class CrewFlagger(BaseEstimator, TransformerMixin):
    """Flag records whose director or any listed actor is a distinguished entity."""

    def __init__(self, lookup):
        self.lookup = lookup

    def fit(self, X, y=None):
        return self

    def transform(self, X):
        _require_frame(X, "CrewFlagger")
        X = X.copy()
        X["top_director"] = X["director"].apply(self.lookup.is_distinguished_director).astype(int)
        X["top_actor"] = X["actors"].apply(self.lookup.any_distinguished_actor).astype(int)
        return X


class ZeroColumnPruner(BaseEstimator, TransformerMixin):
    """
    Drop indicator columns that are 0 for every row.

    The decision is made once in ``fit`` over the complete dataset, so it must
    be fit on the full feature table, never on a single record or a split.
    """

    def __init__(self, prefixes=(GENRE_PREFIX, RATING_PREFIX)):
        self.prefixes = prefixes

    def fit(self, X, y=None):
        _require_frame(X, "ZeroColumnPruner")
        flag_cols = [col for col in X.columns if str(col).startswith(tuple(self.prefixes))]
        self.dropped_columns_ = [col for col in flag_cols if not X[col].fillna(0).astype(bool).any()]
        return self

    def transform(self, X):
        _require_frame(X, "ZeroColumnPruner")
        return X.drop(columns=[col for col in self.dropped_columns_ if col in X.columns])
