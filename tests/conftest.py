"""Shared synthetic data for the test suite."""

import numpy as np
import pandas as pd
import pytest

from movie_tier.config import LABEL_COLUMN, RAW_COLUMNS, RATING_THRESHOLD


def raw_row(movie_id, genres="Drama", content_rating="R", rating="7.0", votes="1000",
            critic_score="60", runtime="120 min", description="(2010)",
            stars="Some Director, Actor A, Actor B"):
    values = {
        "id": movie_id,
        "genres": genres,
        "content_rating": content_rating,
        "rating": rating,
        "votes": votes,
        "critic_score": critic_score,
        "runtime": runtime,
        "description": description,
        "cast": stars,
    }
    return {RAW_COLUMNS[key]: value for key, value in values.items()}


@pytest.fixture
def scenario_raw():
    """
    11 rows over 10 distinct ids: tt03 appears twice and tt07 has an
    unparsable runtime. Five genres, two content ratings.
    """
    rows = [
        raw_row("tt01", "Action, Sci-Fi", "PG-13", "8.8", stars="Christopher Nolan, Leonardo DiCaprio, Elliot Page"),
        raw_row("tt02", "Comedy", "R", "6.1", stars="Director Two, Actor C"),
        raw_row("tt03", "Drama", "R", "7.9", stars="Director Three, Actor D"),
        raw_row("tt04", "Horror", "R", "5.4", stars="Director Four, Actor E"),
        raw_row("tt05", "Comedy, Drama", "PG-13", "7.6", stars="Director Five, Actor F"),
        raw_row("tt03", "Drama", "R", "7.9", stars="Director Three, Actor D"),
        raw_row("tt06", "Action", "PG-13", "6.8", stars="Director Six, Actor G"),
        raw_row("tt07", "Sci-Fi", "R", "7.2", runtime="unknown", stars="Director Seven, Actor H"),
        raw_row("tt08", "Horror, Drama", "R", "6.3", stars="Director Eight, Actor I"),
        raw_row("tt09", "Action, Comedy", "PG-13", "8.1", stars="Director Nine, Actor J"),
        raw_row("tt10", "Sci-Fi, Drama", "PG-13", "7.7", stars="Director Ten, Actor K"),
    ]
    return pd.DataFrame(rows)


@pytest.fixture
def scenario_reference():
    return pd.DataFrame({
        "id": ["tt9999"],
        "crew": ["Christopher Nolan (dir.), Christian Bale, Heath Ledger"],
    })


def make_feature_frame(n=80, seed=0, separable=False):
    """
    A cleaned, labeled feature table. ``signal`` drives the rating; with
    ``separable`` the label is exactly signal > 0 and signal sits near +/-1.
    """
    rng = np.random.RandomState(seed)
    if separable:
        signal = np.where(rng.rand(n) < 0.5, -1.0, 1.0) + 0.05 * rng.normal(size=n)
    else:
        signal = rng.normal(size=n)
    noise = 0.1 if separable else 0.6
    rating = 7.0 + signal + noise * rng.normal(size=n)
    if separable:
        rating = np.where(signal > 0, np.maximum(rating, RATING_THRESHOLD + 0.1),
                          np.minimum(rating, RATING_THRESHOLD - 0.1))
    df = pd.DataFrame({
        "id": [f"tt{i:04d}" for i in range(n)],
        "director": [f"Director {i}" for i in range(n)],
        "actors": [(f"Actor {i}",) for i in range(n)],
        "rating": rating,
        "signal": signal,
        "runtime": rng.randint(80, 180, size=n),
        "genre_Drama": rng.randint(0, 2, size=n),
        "genre_Comedy": rng.randint(0, 2, size=n),
        "top_director": rng.randint(0, 2, size=n),
    })
    df[LABEL_COLUMN] = (df["rating"] > RATING_THRESHOLD).astype(int)
    return df


@pytest.fixture
def feature_frame():
    return make_feature_frame()


@pytest.fixture
def separable_frame():
    return make_feature_frame(separable=True)


def write_raw_csv(path, n=40):
    rows = []
    genres = ["Drama", "Comedy, Drama", "Action, Thriller", "Horror"]
    ratings = ["R", "PG-13", "PG"]
    for i in range(n):
        rows.append(raw_row(
            f"tt{i:04d}",
            genres=genres[i % len(genres)],
            content_rating=ratings[i % len(ratings)],
            rating=f"{6.0 + (i % 4) * 0.7:.1f}",
            votes=f"{1000 + 37 * i}",
            critic_score=f"{40 + (i * 7) % 55}",
            runtime=f"{85 + (i * 3) % 70} min",
            description=f"({1980 + i % 40})",
            stars=f"Director {i % 9}, Actor {i % 13}, Actor {(i + 5) % 17}",
        ))
    pd.DataFrame(rows).to_csv(path, index=False)
    return path
