from __future__ import annotations

import pytest
from Levenshtein import distance

from docprune.redundancy.heuristic import (
    EditDistanceHeuristic,
    is_description_useful,
    is_dummy_description,
    levenshtein,
)
from docprune.redundancy.rules import RedundancyRules


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        ("", "", 0),
        ("abc", "", 3),
        ("", "abc", 3),
        ("kitten", "sitting", 3),
        ("Foo", "Fo", 1),
        ("Foo", "foo", 1),
        ("flaw", "lawn", 2),
    ],
)
def test_levenshtein(left: str, right: str, expected: int) -> None:
    assert levenshtein(left, right) == expected
    assert levenshtein(right, left) == expected


def test_edit_distance_comes_from_the_levenshtein_package() -> None:
    assert levenshtein is distance


def test_empty_description_is_never_useful() -> None:
    assert not is_description_useful("", "Foo", "bar")
    assert not is_description_useful(None, "Foo", "bar")


def test_missing_type_means_not_useful() -> None:
    assert not is_description_useful("The number of widgets", None, "count")


@pytest.mark.parametrize(
    "description",
    [
        "A Foo instance",
        "An Foo",
        "The Foo",
        "the Foo instance",
        "the .Foo instance",
        "a foo",
        "The FooInterface instance",
    ],
)
def test_stock_phrasings_of_the_type_are_not_useful(description: str) -> None:
    assert not is_description_useful(description, "Foo", "bar")


def test_interface_suffix_is_ignored_when_comparing() -> None:
    assert not is_description_useful("The Logger", "LoggerInterface", "logger")
    assert not is_description_useful("A LoggerInterface instance", "LoggerInterface", "x")


def test_near_restatement_of_type_is_not_useful() -> None:
    assert not is_description_useful("Fooo", "Foo", "bar")
    assert is_dummy_description("Foo", "Foo")


def test_restating_parameter_name_is_not_useful() -> None:
    assert not is_description_useful("counts", "int", "count")


def test_real_descriptions_are_useful() -> None:
    assert is_description_useful("The number of active widgets", "int", "count")
    assert is_description_useful("Number of retries before giving up", "int", "retries")


def test_collection_types_always_keep_their_description() -> None:
    assert is_description_useful("anything", "Foo[]", "items")
    assert is_description_useful("items", "Foo[]", "items")
    assert is_description_useful("The Foo[]", "FooInterface[]", "items")


def test_name_check_is_skipped_without_a_name() -> None:
    assert is_description_useful("count", "int", None)


def test_type_is_matched_literally_not_as_a_pattern() -> None:
    assert is_description_useful("A xxint", "x.int", "value")
    assert not is_description_useful("A x.int", "x.int", "value")


def test_heuristic_object_uses_its_rules() -> None:
    rules = RedundancyRules(namespace_separator="\\")
    heuristic = EditDistanceHeuristic(rules)
    assert not heuristic.is_useful("the \\Foo instance", "Foo", "bar")
    assert heuristic.is_useful("the .Foo instance", "Foo", "bar")
