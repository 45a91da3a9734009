"""
Reference lookup over the curated "top 250" list.

Directors and actors are extracted from each crew string with the same
split_cast rule used for the primary dataset, so a name spelled identically
in both files always matches.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Optional

import pandas as pd

from .config import REFERENCE_COLUMNS
from .errors import Diagnostics, ParseError, SchemaError
from .parsing import split_cast


@dataclass(frozen=True)
class ReferenceLookup:
    """Immutable sets of distinguished directors and actors."""

    distinguished_directors: FrozenSet[str] = field(default_factory=frozenset)
    distinguished_actors: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_crews(cls, crews: Iterable, diagnostics: Optional[Diagnostics] = None):
        directors, actors = set(), set()
        for crew in crews:
            try:
                director, cast = split_cast(crew, max_actors=None)
            except ParseError as e:
                if diagnostics is not None:
                    diagnostics.record("reference_ParseError", str(e))
                continue
            directors.add(director)
            actors.update(cast)
        return cls(frozenset(directors), frozenset(actors))

    @classmethod
    def from_frame(cls, df: pd.DataFrame, columns=REFERENCE_COLUMNS,
                   diagnostics: Optional[Diagnostics] = None):
        missing = [col for col in columns.values() if col not in df.columns]
        if missing:
            raise SchemaError(missing, source="reference table")
        return cls.from_crews(df[columns["crew"]], diagnostics=diagnostics)

    def is_distinguished_director(self, name) -> bool:
        return name in self.distinguished_directors

    def is_distinguished_actor(self, name) -> bool:
        return name in self.distinguished_actors

    def any_distinguished_actor(self, names: Iterable) -> bool:
        return any(name in self.distinguished_actors for name in names)


def load_reference(path, columns=REFERENCE_COLUMNS,
                   diagnostics: Optional[Diagnostics] = None) -> ReferenceLookup:
    """Read the reference CSV once and build the lookup."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Reference data file not found: {path}")
    df = pd.read_csv(path, dtype=str)
    return ReferenceLookup.from_frame(df, columns=columns, diagnostics=diagnostics)
