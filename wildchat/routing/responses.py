"""Response lookup and probability-weighted selection."""

from __future__ import annotations

import random
from typing import Any, Protocol

from pydantic import BaseModel, Field

from ..catalog.schemas import ResponseEntry, ResponseGroup, ResponseTree


class RandomSource(Protocol):
    """Anything exposing ``random()`` returning a float in ``[0, 1)``."""

    def random(self) -> float: ...


class CatalogStats(BaseModel):
    """Summary of the response catalog exposed by the health endpoint."""

    topic_count: int = Field(..., ge=0, description="Number of response groups.")
    topics: list[str] = Field(
        default_factory=list, description="Dotted path of every response group."
    )


def get_responses_by_path(catalog: ResponseTree, path: str) -> ResponseGroup | None:
    """Descend ``catalog`` along the dot-separated ``path``.

    Returns ``None`` when a key is missing, when the path runs through a
    group, or when it stops on a subtree. No fallback group is substituted.
    """

    if not path:
        return None

    node: ResponseGroup | ResponseTree = catalog
    for key in path.split("."):
        if not isinstance(node, ResponseTree):
            return None
        child = node.child(key)
        if child is None:
            return None
        node = child

    if isinstance(node, ResponseTree):
        return None
    return node


def select_response_by_probability(
    group: Any, rng: RandomSource | None = None
) -> str | None:
    """Pick one entry's text by cumulative probability.

    A single draw ``r`` in ``[0, 1)`` selects the first entry whose running
    probability total reaches ``r``. If the totals never reach ``r`` (weights
    summing below one) the first entry is used, so a non-empty group always
    yields text.
    """

    if not isinstance(group, (list, tuple)) or not group:
        return None

    draw = (rng or random).random()
    cumulative = 0.0
    for entry in group:
        cumulative += _probability(entry)
        if draw <= cumulative:
            return _text(entry)

    return _text(group[0])


def get_follow_up_hint(group: Any, selected_text: str | None) -> str | None:
    """Return the follow-up of the first entry whose text equals ``selected_text``."""

    if not isinstance(group, (list, tuple)) or selected_text is None:
        return None
    for entry in group:
        if _text(entry) == selected_text:
            return entry.follow_up if isinstance(entry, ResponseEntry) else None
    return None


def get_stats(catalog: ResponseTree) -> CatalogStats:
    """Count the response groups available in ``catalog``."""

    topics = [path for path, _ in catalog.iter_groups()]
    return CatalogStats(topic_count=len(topics), topics=topics)


def _probability(entry: Any) -> float:
    if isinstance(entry, ResponseEntry):
        return entry.probability
    return 0.0


def _text(entry: Any) -> str | None:
    if isinstance(entry, ResponseEntry):
        return entry.text
    return None


__all__ = [
    "CatalogStats",
    "RandomSource",
    "get_follow_up_hint",
    "get_responses_by_path",
    "get_stats",
    "select_response_by_probability",
]
