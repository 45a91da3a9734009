"""
Top-Tier Movie Classification - Feature Pipeline and Evaluation Harness

This package cleans a scraped movie metadata dataset into a model-ready
feature table and compares classifiers that predict whether a movie's
audience rating is above 7.6.
"""

from .transformers import (
    ColumnSelector,
    GenreFlagEncoder,
    ContentRatingEncoder,
    CrewFlagger,
    ZeroColumnPruner,
)

__all__ = [
    'ColumnSelector',
    'GenreFlagEncoder',
    'ContentRatingEncoder',
    'CrewFlagger',
    'ZeroColumnPruner',
]

__version__ = '0.1.0'
