"""
Record parser: turns the raw text fields of a scraped movie row into typed values.

Every function here is pure. A field that cannot be extracted raises
ParseError naming the field, so the caller can exclude and count the record.
"""

import re
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from .config import DIRECTOR_MARKER, MAX_ACTORS, RAW_COLUMNS, UNRATED_LABELS
from .errors import ParseError

RE_DIGITS = re.compile(r"\d+")
RE_PARENS = re.compile(r"\(([^()]*)\)")
RE_YEAR = re.compile(r"(?<!\d)(\d{4})(?!\d)")
RE_GENRE_SEP = re.compile(r"[,|]")


@dataclass(frozen=True)
class ParsedRecord:
    id: str
    genres: Tuple[str, ...]
    content_rating: Optional[str]
    rating: float
    votes: float
    critic_score: float
    runtime: int
    year: int
    director: str
    actors: Tuple[str, ...]


def _is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_runtime(text) -> int:
    """Parse a runtime such as '142 min' into integer minutes."""
    if _is_missing(text):
        raise ParseError("runtime", text, "missing")
    match = RE_DIGITS.search(str(text))
    if match is None:
        raise ParseError("runtime", text, "no digits found")
    return int(match.group())


def parse_year(description) -> int:
    """Extract the release year from the parenthesised part of a description, e.g. '(2019)'."""
    if _is_missing(description):
        raise ParseError("description", description, "missing")
    for group in RE_PARENS.findall(str(description)):
        match = RE_YEAR.search(group)
        if match:
            return int(match.group(1))
    raise ParseError("description", description, "no parenthesised year")


def _clean_name(name: str) -> str:
    name = name.strip()
    if name.endswith(DIRECTOR_MARKER):
        name = name[: -len(DIRECTOR_MARKER)].strip()
    return name


def split_cast(text, max_actors: int = MAX_ACTORS) -> Tuple[str, Tuple[str, ...]]:
    """
    Split a crew string into its director and ordered actor list.

    The first comma-separated name is the director; the remaining names are
    the actors, of which at most ``max_actors`` are kept.

    Args:
        text: Crew string, e.g. "Frank Darabont (dir.), Tim Robbins, Morgan Freeman"
        max_actors: Maximum number of actor names to keep

    Returns:
        Tuple of (director, actors)
    """
    if _is_missing(text) or not str(text).strip():
        raise ParseError("cast", text, "empty cast string")
    names = [_clean_name(part) for part in str(text).split(",")]
    names = [name for name in names if name]
    if not names:
        raise ParseError("cast", text, "no names found")
    director, actors = names[0], names[1:]
    return director, tuple(actors[:max_actors])


def parse_genres(text) -> Tuple[str, ...]:
    """Parse a comma- or pipe-separated genre string into a tuple of tokens."""
    if _is_missing(text):
        return ()
    return tuple(token.strip() for token in RE_GENRE_SEP.split(str(text)) if token.strip())


def parse_content_rating(value) -> Optional[str]:
    """Return the rating token, or None when it is missing or an unrated label."""
    if _is_missing(value):
        return None
    token = str(value).strip()
    if not token or token in UNRATED_LABELS:
        return None
    return token


def to_number(value) -> float:
    """Coerce a scraped numeric field ('1,234', '7.9', '') to float, NaN when unparsable."""
    if _is_missing(value):
        return np.nan
    if isinstance(value, str):
        value = value.replace(",", "").strip()
    number = pd.to_numeric(value, errors="coerce")
    return np.nan if _is_missing(number) else float(number)


def parse_record(raw: Mapping, columns: Mapping[str, str] = RAW_COLUMNS,
                 max_actors: int = MAX_ACTORS) -> ParsedRecord:
    """Parse one raw row (dict or pandas Series) keyed by the file's column names."""
    director, actors = split_cast(raw[columns["cast"]], max_actors=max_actors)
    return ParsedRecord(
        id=str(raw[columns["id"]]),
        genres=parse_genres(raw[columns["genres"]]),
        content_rating=parse_content_rating(raw[columns["content_rating"]]),
        rating=to_number(raw[columns["rating"]]),
        votes=to_number(raw[columns["votes"]]),
        critic_score=to_number(raw[columns["critic_score"]]),
        runtime=parse_runtime(raw[columns["runtime"]]),
        year=parse_year(raw[columns["description"]]),
        director=director,
        actors=actors,
    )
