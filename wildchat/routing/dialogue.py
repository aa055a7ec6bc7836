"""Navigation across scripted dialogue trees."""

from __future__ import annotations

from typing import Iterable

import logfire
from pydantic import BaseModel, ConfigDict

from ..catalog.schemas import DIALOGUE_START_NODE, Catalogs, DialogueNode, DialogueTree
from .matching import matches_whole_word


class DialogueMatch(BaseModel):
    """Location of the dialogue node selected for the current message."""

    model_config = ConfigDict(frozen=True)

    tree: str
    node: str
    response_key: str


class DialogueTreeNavigator:
    """Finds the next dialogue node, preferring the user's current tree."""

    def __init__(self, catalogs: Catalogs) -> None:
        self._catalogs = catalogs

    def find_dialogue_tree_node(
        self, message: str, current_tree: str | None = None
    ) -> DialogueMatch | None:
        """Return the first node whose keywords match ``message``.

        The current tree is searched first so a conversation keeps following
        its own branch; only when it has no matching continuation are all trees
        scanned in catalog order, which lets the user jump to another tree.
        """

        if not message:
            return None

        if current_tree:
            tree = self._catalogs.dialogue_tree(current_tree)
            if tree is not None:
                match = _search_tree(message, tree)
                if match is not None:
                    logfire.debug(
                        "dialogue.continue", tree=match.tree, node=match.node
                    )
                    return match

        for tree in self._catalogs.dialogue_trees:
            match = _search_tree(message, tree)
            if match is not None:
                logfire.debug("dialogue.enter", tree=match.tree, node=match.node)
                return match

        return None

    def has_dialogue_tree(self, topic_name: str) -> bool:
        tree = self._catalogs.dialogue_tree(topic_name)
        return tree is not None and tree.is_startable

    def get_dialogue_tree_start(self, topic_name: str) -> DialogueNode | None:
        tree = self._catalogs.dialogue_tree(topic_name)
        if tree is None:
            return None
        return tree.node(DIALOGUE_START_NODE)


def _search_tree(message: str, tree: DialogueTree) -> DialogueMatch | None:
    for node in tree.nodes:
        if _any_keyword(message, node.keywords):
            return DialogueMatch(tree=tree.name, node=node.name, response_key=node.response_key)
    return None


def _any_keyword(message: str, keywords: Iterable[str]) -> bool:
    return any(matches_whole_word(message, keyword) for keyword in keywords)


__all__ = ["DialogueMatch", "DialogueTreeNavigator"]
