"""Typed catalog structures consumed by the routing core."""

from __future__ import annotations

from typing import Iterator, Union

from pydantic import BaseModel, ConfigDict, Field


RESERVED_DEFAULT_TOPIC = "default"
DIALOGUE_START_NODE = "start"


class ResponseEntry(BaseModel):
    """A single candidate reply with its selection weight."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(..., description="Reply text shown to the user.")
    probability: float = Field(0.0, description="Selection weight within the group.")
    follow_up: str | None = Field(
        None,
        alias="followUp",
        description="Optional suggestion for what the user could ask next.",
    )


ResponseGroup = tuple[ResponseEntry, ...]


class ResponseTree(BaseModel):
    """Nested response catalog whose leaves are response groups."""

    model_config = ConfigDict(frozen=True)

    children: dict[str, Union[ResponseGroup, "ResponseTree"]] = Field(
        default_factory=dict
    )

    def child(self, key: str) -> ResponseGroup | ResponseTree | None:
        """Return the direct child stored under ``key`` if present."""

        return self.children.get(key)

    def iter_groups(self, prefix: str = "") -> Iterator[tuple[str, ResponseGroup]]:
        """Yield ``(dotted_path, group)`` for every leaf in catalog order."""

        for key, node in self.children.items():
            path = f"{prefix}.{key}" if prefix else key
            if isinstance(node, ResponseTree):
                yield from node.iter_groups(path)
            else:
                yield path, node


ResponseTree.model_rebuild()


class Topic(BaseModel):
    """Named keyword set pointing at a response location."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    keywords: tuple[str, ...] = ()
    response_key: str = Field(..., alias="responseKey")


class DialogueNode(BaseModel):
    """One step of a scripted multi-turn conversation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    keywords: tuple[str, ...] = ()
    response_key: str = Field(..., alias="responseKey")


class DialogueTree(BaseModel):
    """Ordered collection of dialogue nodes sharing a subject."""

    model_config = ConfigDict(frozen=True)

    name: str
    nodes: tuple[DialogueNode, ...] = ()

    def node(self, name: str) -> DialogueNode | None:
        for candidate in self.nodes:
            if candidate.name == name:
                return candidate
        return None

    @property
    def is_startable(self) -> bool:
        return self.node(DIALOGUE_START_NODE) is not None


class Catalogs(BaseModel):
    """Everything the router needs, in explicit catalog order."""

    model_config = ConfigDict(frozen=True)

    topics: tuple[Topic, ...] = ()
    question_patterns: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    dialogue_trees: tuple[DialogueTree, ...] = ()
    responses: ResponseTree = Field(default_factory=ResponseTree)

    def topic(self, name: str) -> Topic | None:
        for topic in self.topics:
            if topic.name == name:
                return topic
        return None

    def dialogue_tree(self, name: str) -> DialogueTree | None:
        for tree in self.dialogue_trees:
            if tree.name == name:
                return tree
        return None


__all__ = [
    "Catalogs",
    "DIALOGUE_START_NODE",
    "DialogueNode",
    "DialogueTree",
    "RESERVED_DEFAULT_TOPIC",
    "ResponseEntry",
    "ResponseGroup",
    "ResponseTree",
    "Topic",
]
