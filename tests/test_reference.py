"""Tests for the reference lookup."""

import pandas as pd
import pytest

from movie_tier.errors import Diagnostics, SchemaError
from movie_tier.parsing import split_cast
from movie_tier.reference import ReferenceLookup, load_reference


def test_from_frame_collects_directors_and_actors(scenario_reference):
    lookup = ReferenceLookup.from_frame(scenario_reference)
    assert lookup.distinguished_directors == frozenset({"Christopher Nolan"})
    assert lookup.distinguished_actors == frozenset({"Christian Bale", "Heath Ledger"})


def test_membership_is_exact():
    lookup = ReferenceLookup.from_crews(["Akira Kurosawa, Toshiro Mifune"])
    assert lookup.is_distinguished_director("Akira Kurosawa")
    assert not lookup.is_distinguished_director("akira kurosawa")
    assert not lookup.is_distinguished_director("Akira Kurosawa ")
    assert lookup.is_distinguished_actor("Toshiro Mifune")
    assert not lookup.is_distinguished_actor("Akira Kurosawa")


def test_extraction_is_symmetric_with_primary_cast():
    crew = "Sidney Lumet (dir.), Henry Fonda, Lee J. Cobb"
    lookup = ReferenceLookup.from_crews([crew])
    _, actors = split_cast("Somebody Else, Jack Klugman, Lee J. Cobb")
    assert lookup.any_distinguished_actor(actors)


def test_reference_keeps_all_actors():
    names = ", ".join(f"Actor {i}" for i in range(20))
    lookup = ReferenceLookup.from_crews([f"Director, {names}"])
    assert "Actor 19" in lookup.distinguished_actors


def test_unsplittable_crew_is_counted():
    diagnostics = Diagnostics()
    lookup = ReferenceLookup.from_crews(["", None, "Billy Wilder, Jack Lemmon"], diagnostics=diagnostics)
    assert lookup.distinguished_directors == frozenset({"Billy Wilder"})
    assert diagnostics["reference_ParseError"] == 2


def test_lookup_is_immutable(scenario_reference):
    lookup = ReferenceLookup.from_frame(scenario_reference)
    with pytest.raises(AttributeError):
        lookup.distinguished_directors.add("Someone")
    with pytest.raises(Exception):
        lookup.distinguished_actors = frozenset()


def test_missing_crew_column():
    with pytest.raises(SchemaError):
        ReferenceLookup.from_frame(pd.DataFrame({"id": ["tt1"], "stars": ["A, B"]}))


def test_load_reference(tmp_path, scenario_reference):
    path = tmp_path / "top250.csv"
    scenario_reference.to_csv(path, index=False)
    lookup = load_reference(path)
    assert lookup.is_distinguished_director("Christopher Nolan")


def test_load_reference_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_reference(tmp_path / "nope.csv")
