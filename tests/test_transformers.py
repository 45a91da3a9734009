"""Tests for the feature transformers."""

import pandas as pd
import pytest

from movie_tier.config import GENRES
from movie_tier.errors import SchemaError
from movie_tier.parsing import parse_genres
from movie_tier.reference import ReferenceLookup
from movie_tier.transformers import (
    ColumnSelector,
    ContentRatingEncoder,
    CrewFlagger,
    GenreFlagEncoder,
    ZeroColumnPruner,
)


@pytest.mark.parametrize("genre_string", [
    "Drama",
    "Action, Sci-Fi, Thriller",
    "Music, Musical",
    "Comedy|Romance|Unknown Genre",
    "drama, Horror",
    "",
])
def test_genre_flag_count_matches_known_tokens(genre_string):
    tokens = parse_genres(genre_string)
    df = pd.DataFrame({"id": ["a"], "genres": [tokens]})
    encoded = GenreFlagEncoder().fit_transform(df)
    flag_cols = [f"genre_{g}" for g in GENRES]
    expected = len(set(tokens) & set(GENRES))
    assert encoded[flag_cols].iloc[0].sum() == expected


def test_genre_flags_match_exact_tokens():
    df = pd.DataFrame({"genres": [("Musical",), ("Music",)]})
    encoded = GenreFlagEncoder().fit_transform(df)
    assert encoded["genre_Musical"].tolist() == [1, 0]
    assert encoded["genre_Music"].tolist() == [0, 1]
    assert "genres" not in encoded.columns


def test_genre_encoder_does_not_mutate_input():
    df = pd.DataFrame({"genres": [("Drama",)]})
    GenreFlagEncoder().fit_transform(df)
    assert list(df.columns) == ["genres"]


def test_content_rating_one_hot():
    df = pd.DataFrame({"content_rating": ["PG-13", "M/PG", "X"]})
    encoded = ContentRatingEncoder().fit_transform(df)
    assert encoded["rating_PG-13"].tolist() == [1, 0, 0]
    assert encoded["rating_M/PG"].tolist() == [0, 1, 0]
    rating_cols = [c for c in encoded.columns if c.startswith("rating_")]
    assert encoded[rating_cols].sum(axis=1).tolist() == [1, 1, 0]


def test_crew_flagger():
    lookup = ReferenceLookup(frozenset({"Sergio Leone"}), frozenset({"Clint Eastwood"}))
    df = pd.DataFrame({
        "director": ["Sergio Leone", "sergio leone", "Someone"],
        "actors": [("Eli Wallach",), ("Clint Eastwood",), ()],
    })
    flagged = CrewFlagger(lookup).fit_transform(df)
    assert flagged["top_director"].tolist() == [1, 0, 0]
    assert flagged["top_actor"].tolist() == [0, 1, 0]


def test_zero_column_pruner_drops_only_empty_flags():
    df = pd.DataFrame({
        "runtime": [0, 0],
        "genre_Drama": [1, 0],
        "genre_War": [0, 0],
        "rating_G": [0, 0],
        "rating_R": [0, 1],
    })
    pruner = ZeroColumnPruner().fit(df)
    assert pruner.dropped_columns_ == ["genre_War", "rating_G"]
    assert list(pruner.transform(df).columns) == ["runtime", "genre_Drama", "rating_R"]


def test_zero_column_pruner_is_idempotent():
    df = pd.DataFrame({"genre_Drama": [1, 0], "genre_War": [0, 0], "rating_R": [0, 1]})
    once = ZeroColumnPruner().fit_transform(df)
    twice = ZeroColumnPruner().fit_transform(once)
    assert list(once.columns) == list(twice.columns)


def test_column_selector_missing_column():
    with pytest.raises(SchemaError):
        ColumnSelector(["id", "stars"]).fit_transform(pd.DataFrame({"id": [1]}))
