"""Tests for greeting, farewell, question and topic classification."""

from __future__ import annotations

from wildchat.catalog import Catalogs, build_catalogs
from wildchat.routing.classifier import MessageClassifier


def test_greeting_and_farewell_detection(catalogs: Catalogs) -> None:
    classifier = MessageClassifier(catalogs)

    assert classifier.is_greeting("Hi Steve!")
    assert classifier.is_greeting("G'day mate")
    assert not classifier.is_greeting("this is great")
    assert classifier.is_farewell("ok, see ya later")
    assert not classifier.is_farewell("hello")


def test_reserved_groups_missing_from_catalog_never_match() -> None:
    classifier = MessageClassifier(build_catalogs({"topics": {}}, {}))

    assert not classifier.is_greeting("hello")
    assert not classifier.is_farewell("bye")


def test_specific_question_uses_plain_substrings(catalogs: Catalogs) -> None:
    classifier = MessageClassifier(catalogs)

    assert classifier.is_specific_question("What do crocs eat?")
    assert classifier.is_specific_question("somewhat do")
    assert not classifier.is_specific_question("crocs rule")
    assert not classifier.is_specific_question("")


def test_find_topic_returns_matches_in_catalog_order(catalogs: Catalogs) -> None:
    classifier = MessageClassifier(catalogs)

    matches = classifier.find_topic("a roo and a croc and another croc")

    assert [match.name for match in matches] == ["crocodiles", "kangaroos"]
    assert matches[0].response_key == "animals.crocodiles"


def test_find_topic_skips_default_and_unmatched(catalogs: Catalogs) -> None:
    classifier = MessageClassifier(catalogs)

    assert classifier.find_topic("tell me about platypus") == []
    assert classifier.find_topic("") == []
    assert classifier.find_topic("default") == []


def test_find_topic_matches_phrase_keywords() -> None:
    catalogs = build_catalogs(
        {
            "topics": {
                "zoo": {"keywords": ["australia zoo"], "responseKey": "zoo"},
            }
        },
        {"zoo": [{"text": "Come visit!", "probability": 1.0}]},
    )

    matches = MessageClassifier(catalogs).find_topic("Have you been to Australia Zoo?")

    assert [match.name for match in matches] == ["zoo"]


def test_find_topic_lists_each_topic_once() -> None:
    catalogs = build_catalogs(
        {
            "topics": {
                "crocodiles": {"keywords": ["crocodiles", "croc"], "responseKey": "c"},
                "lions": {"keywords": ["lions", "lion"], "responseKey": "l"},
            }
        },
        {},
    )

    matches = MessageClassifier(catalogs).find_topic(
        "Tell me about lions and crocodiles, one lion and one croc"
    )

    assert [match.name for match in matches] == ["crocodiles", "lions"]
