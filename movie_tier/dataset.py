"""
Dataset normalization: raw scraped rows -> cleaned, labeled feature table.

Each stage takes a DataFrame and returns a new one. prepare_dataset composes
them in order:

    validate_schema -> deduplicate -> parse_records -> drop_unrated
    -> build_features -> prune_empty_flags -> drop_incomplete -> add_label
"""

from dataclasses import fields
from pathlib import Path
from typing import Optional, Tuple

import pandas as pd
from sklearn.pipeline import Pipeline as SklearnPipeline

from .config import LABEL_COLUMN, MAX_ACTORS, RATING_THRESHOLD, RAW_COLUMNS
from .errors import Diagnostics, ParseError, SchemaError
from .parsing import ParsedRecord, parse_record
from .reference import ReferenceLookup
from .transformers import (
    ColumnSelector,
    ContentRatingEncoder,
    CrewFlagger,
    GenreFlagEncoder,
    ZeroColumnPruner,
)

PARSED_COLUMNS = [f.name for f in fields(ParsedRecord)]


def load_raw_data(path, columns=RAW_COLUMNS) -> pd.DataFrame:
    """Read the primary CSV as strings and check that every configured column is present."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Movie data file not found: {path}")
    df = pd.read_csv(path, dtype=str, keep_default_na=True)
    return validate_schema(df, columns)


def validate_schema(df: pd.DataFrame, columns=RAW_COLUMNS) -> pd.DataFrame:
    missing = [col for col in columns.values() if col not in df.columns]
    if missing:
        raise SchemaError(missing, source="movie dataset")
    return df


def deduplicate(df: pd.DataFrame, columns=RAW_COLUMNS,
                diagnostics: Optional[Diagnostics] = None) -> pd.DataFrame:
    """Collapse duplicate ids, keeping the first occurrence in file order."""
    duplicated = df[columns["id"]].astype(str).duplicated(keep="first")
    if diagnostics is not None and duplicated.any():
        diagnostics.record("duplicate", n=int(duplicated.sum()))
    return df.loc[~duplicated].copy()


def parse_records(df: pd.DataFrame, columns=RAW_COLUMNS, max_actors: int = MAX_ACTORS,
                  diagnostics: Optional[Diagnostics] = None) -> pd.DataFrame:
    """Run the record parser over every row; rows raising ParseError are excluded and counted."""
    records, index = [], []
    for idx, row in df.iterrows():
        try:
            records.append(parse_record(row, columns=columns, max_actors=max_actors))
        except ParseError as e:
            if diagnostics is not None:
                diagnostics.record_error(e)
            continue
        index.append(idx)
    return pd.DataFrame([vars(r) for r in records], index=index, columns=PARSED_COLUMNS)


def drop_unrated(df: pd.DataFrame, diagnostics: Optional[Diagnostics] = None) -> pd.DataFrame:
    """Remove records whose content rating is missing, 'Not Rated' or 'Unrated'."""
    unrated = df["content_rating"].isna()
    if diagnostics is not None and unrated.any():
        diagnostics.record("unrated", n=int(unrated.sum()))
    return df.loc[~unrated].copy()


def build_feature_pipeline(lookup: ReferenceLookup) -> SklearnPipeline:
    """Row-wise feature construction. Column pruning is a separate dataset-level pass."""
    return SklearnPipeline([
        ('select_columns', ColumnSelector(columns=PARSED_COLUMNS)),
        ('encode_genres', GenreFlagEncoder()),
        ('encode_ratings', ContentRatingEncoder()),
        ('flag_crew', CrewFlagger(lookup)),
    ])


def build_features(df: pd.DataFrame, lookup: ReferenceLookup) -> pd.DataFrame:
    return build_feature_pipeline(lookup).fit_transform(df)


def prune_empty_flags(df: pd.DataFrame) -> Tuple[pd.DataFrame, list]:
    """Drop genre/rating flags that are zero across the whole dataset."""
    pruner = ZeroColumnPruner().fit(df)
    return pruner.transform(df), list(pruner.dropped_columns_)


def drop_incomplete(df: pd.DataFrame, diagnostics: Optional[Diagnostics] = None) -> pd.DataFrame:
    """Drop any record with a missing value in a retained column (no imputation)."""
    incomplete = df.isna().any(axis=1)
    if diagnostics is not None and incomplete.any():
        diagnostics.record("incomplete", n=int(incomplete.sum()))
    return df.loc[~incomplete].copy()


def add_label(df: pd.DataFrame, threshold: float = RATING_THRESHOLD) -> pd.DataFrame:
    """Add the binary target: 1 when the audience rating is strictly above the threshold."""
    df = df.copy()
    df[LABEL_COLUMN] = (df["rating"] > threshold).astype(int)
    return df


def prepare_dataset(raw: pd.DataFrame, lookup: ReferenceLookup, columns=RAW_COLUMNS,
                    diagnostics: Optional[Diagnostics] = None, verbose: bool = False) -> pd.DataFrame:
    """
    Convert raw scraped rows into the cleaned, labeled feature table.

    Args:
        raw: Raw rows as read from the primary CSV
        lookup: Reference lookup for the distinguished director/actor flags
        columns: Mapping of internal field names to file column names
        diagnostics: Accumulator for excluded-record counts
        verbose: Print per-stage row counts

    Returns:
        DataFrame indexed by the original row index, one row per unique id
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    df = validate_schema(raw, columns)
    df = deduplicate(df, columns, diagnostics=diagnostics)
    n_unique = len(df)
    df = parse_records(df, columns, diagnostics=diagnostics)
    n_parsed = len(df)
    df = drop_unrated(df, diagnostics=diagnostics)
    n_rated = len(df)
    df = build_features(df, lookup)
    df, dropped = prune_empty_flags(df)
    df = drop_incomplete(df, diagnostics=diagnostics)
    df = add_label(df)

    if verbose:
        print(f"  Raw rows: {len(raw)}")
        print(f"  Unique ids: {n_unique}")
        print(f"  Parsed: {n_parsed} ({n_unique - n_parsed} excluded)")
        print(f"  Rated: {n_rated}")
        print(f"  Complete: {len(df)}")
        print(f"  Dropped all-zero flags: {', '.join(dropped) if dropped else 'none'}")
        print(f"  Top-tier share: {df[LABEL_COLUMN].mean():.3f}" if len(df) else "  Top-tier share: n/a")

    return df
