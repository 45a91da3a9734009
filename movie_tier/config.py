"""
Configuration file for the top-tier movie classification project.
Centralized configuration for data cleaning, splitting, model families and MLflow.
"""

from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
MODELS_DIR = PROJECT_ROOT / "models"
REPORTS_DIR = PROJECT_ROOT / "reports"

# Data paths
RAW_DATA_PATH = DATA_DIR / "raw" / "movies.csv"
REFERENCE_DATA_PATH = DATA_DIR / "raw" / "top250.csv"

# MLflow configuration (local file store unless overridden on the command line)
MLFLOW_TRACKING_URI = (PROJECT_ROOT / "mlruns").as_uri()
MLFLOW_EXPERIMENT_NAME = "movie-top-tier-experiments"

# Run configuration
RANDOM_STATE = 42
TRAIN_FRACTION = 0.8
CV_FOLDS = 5
N_JOBS = 1

# Label
RATING_THRESHOLD = 7.6
LABEL_COLUMN = "is_top_tier"

# Raw column names in the scraped export, keyed by the name used internally
RAW_COLUMNS = {
    "id": "id",
    "genres": "genres",
    "content_rating": "contentRating",
    "rating": "imDbRating",
    "votes": "imDbRatingVotes",
    "critic_score": "metacriticRating",
    "runtime": "runtimeStr",
    "description": "description",
    "cast": "stars",
}

REFERENCE_COLUMNS = {
    "id": "id",
    "crew": "crew",
}

# Feature engineering constants
MAX_ACTORS = 15
UNRATED_LABELS = ("Not Rated", "Unrated")
DIRECTOR_MARKER = "(dir.)"

GENRES = (
    "Action", "Adventure", "Animation", "Biography", "Comedy",
    "Crime", "Documentary", "Drama", "Family", "Fantasy",
    "Film-Noir", "History", "Horror", "Music", "Musical",
    "Mystery", "News", "Reality-TV", "Romance", "Sci-Fi",
    "Short", "Sport", "Thriller", "War", "Western",
)

CONTENT_RATINGS = (
    "PG-13", "R", "PG", "Passed", "G", "TV-MA", "TV-14",
    "Approved", "TV-PG", "GP", "NC-17", "12", "M/PG", "M",
)

GENRE_PREFIX = "genre_"
RATING_PREFIX = "rating_"

NUMERIC_COLUMNS = ["runtime", "year", "votes", "critic_score"]

# Columns that never enter the classifier (identifiers, free text, the raw target)
NON_FEATURE_COLUMNS = ["id", "director", "actors", "rating", LABEL_COLUMN]

# Model family hyperparameter grids, searched by cross-validated accuracy
MODEL_GRIDS = {
    "linear_regression": [{}],
    "logistic_regression": [{"C": 1.0}],
    "bagging": [{"n_estimators": 100}],
    "random_forest": [
        {"n_estimators": 200, "max_features": "sqrt"},
        {"n_estimators": 200, "max_features": 0.5},
    ],
    "gradient_boosting": [
        {"n_estimators": n_estimators, "max_depth": max_depth, "learning_rate": 0.05}
        for max_depth in (2, 4, 6)
        for n_estimators in (100, 300)
    ],
}

DEFAULT_FAMILIES = list(MODEL_GRIDS)
