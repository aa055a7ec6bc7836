"""Tests for dialogue tree navigation."""

from __future__ import annotations

from wildchat.catalog import Catalogs, build_catalogs
from wildchat.routing.dialogue import DialogueTreeNavigator


def test_current_tree_takes_priority(catalogs: Catalogs) -> None:
    navigator = DialogueTreeNavigator(catalogs)

    match = navigator.find_dialogue_tree_node("tell me about a baby", "snakes")

    assert match is not None
    assert (match.tree, match.node) == ("snakes", "babies")
    assert match.response_key == "dialogues.snakes.babies"


def test_without_current_tree_all_trees_are_scanned_in_order(catalogs: Catalogs) -> None:
    navigator = DialogueTreeNavigator(catalogs)

    match = navigator.find_dialogue_tree_node("tell me about a baby")

    assert match is not None
    assert (match.tree, match.node) == ("crocodiles", "babies")


def test_falls_back_to_other_trees_when_current_has_no_match(catalogs: Catalogs) -> None:
    navigator = DialogueTreeNavigator(catalogs)

    match = navigator.find_dialogue_tree_node("is that venom?", "crocodiles")

    assert match is not None
    assert (match.tree, match.node) == ("snakes", "venom")


def test_unknown_current_tree_is_ignored(catalogs: Catalogs) -> None:
    navigator = DialogueTreeNavigator(catalogs)

    match = navigator.find_dialogue_tree_node("what do they eat", "penguins")

    assert match is not None
    assert (match.tree, match.node) == ("crocodiles", "feeding")


def test_no_match_returns_none(catalogs: Catalogs) -> None:
    navigator = DialogueTreeNavigator(catalogs)

    assert navigator.find_dialogue_tree_node("nothing relevant here") is None
    assert navigator.find_dialogue_tree_node("") is None


def test_tree_start_lookup(catalogs: Catalogs) -> None:
    navigator = DialogueTreeNavigator(catalogs)

    assert navigator.has_dialogue_tree("crocodiles")
    assert not navigator.has_dialogue_tree("kangaroos")
    start = navigator.get_dialogue_tree_start("crocodiles")
    assert start is not None
    assert start.response_key == "dialogues.crocodiles.start"
    assert navigator.get_dialogue_tree_start("kangaroos") is None


def test_tree_without_start_node_is_not_startable() -> None:
    catalogs = build_catalogs(
        {
            "dialogueTrees": {
                "lions": {"roar": {"keywords": ["roar"], "responseKey": "lions.roar"}}
            }
        },
        {},
    )
    navigator = DialogueTreeNavigator(catalogs)

    assert not navigator.has_dialogue_tree("lions")
    assert navigator.get_dialogue_tree_start("lions") is None
    match = navigator.find_dialogue_tree_node("hear them roar")
    assert match is not None and match.node == "roar"
