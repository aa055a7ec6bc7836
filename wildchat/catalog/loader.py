"""Utilities for loading the chat catalogs from JSON files."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from ..config import settings
from .schemas import (
    Catalogs,
    DialogueNode,
    DialogueTree,
    ResponseEntry,
    ResponseGroup,
    ResponseTree,
    Topic,
)

logger = logging.getLogger(__name__)

_PROBABILITY_TOLERANCE = 1e-6

Raw = Dict[str, Any]


class CatalogLoadError(RuntimeError):
    """Raised when a catalog file is missing or does not match the schema."""


def _read_json(path: Path) -> Raw:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogLoadError(f"Unable to read catalog file '{path}'") from exc
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(f"Catalog file '{path}' is not valid JSON") from exc

    if not isinstance(data, dict):
        raise CatalogLoadError(f"Catalog file '{path}' must contain a JSON object")
    return data


def _as_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise CatalogLoadError(f"'{label}' must be a JSON object")
    return value


def _build_group(raw_entries: list[Any], path: str) -> ResponseGroup:
    entries = []
    for index, raw_entry in enumerate(raw_entries):
        try:
            entries.append(ResponseEntry.model_validate(raw_entry))
        except ValidationError as exc:
            raise CatalogLoadError(
                f"Invalid response entry {index} at '{path}': {exc}"
            ) from exc
    return tuple(entries)


def build_response_tree(raw: Mapping[str, Any], prefix: str = "") -> ResponseTree:
    """Convert the nested JSON response mapping into a typed tree."""

    children: dict[str, ResponseGroup | ResponseTree] = {}
    for key, value in raw.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, list):
            children[key] = _build_group(value, path)
        elif isinstance(value, Mapping):
            children[key] = build_response_tree(value, path)
        else:
            logger.warning("Ignoring non-group response value at '%s'", path)
    return ResponseTree(children=children)


def _build_topics(raw: Mapping[str, Any]) -> tuple[Topic, ...]:
    topics = []
    for name, payload in raw.items():
        try:
            topics.append(Topic.model_validate({**_as_mapping(payload, name), "name": name}))
        except ValidationError as exc:
            raise CatalogLoadError(f"Invalid topic '{name}': {exc}") from exc
    return tuple(topics)


def _build_dialogue_trees(raw: Mapping[str, Any]) -> tuple[DialogueTree, ...]:
    trees = []
    for tree_name, raw_nodes in raw.items():
        nodes = []
        for node_name, payload in _as_mapping(raw_nodes, tree_name).items():
            label = f"{tree_name}.{node_name}"
            try:
                nodes.append(
                    DialogueNode.model_validate(
                        {**_as_mapping(payload, label), "name": node_name}
                    )
                )
            except ValidationError as exc:
                raise CatalogLoadError(f"Invalid dialogue node '{label}': {exc}") from exc
        trees.append(DialogueTree(name=tree_name, nodes=tuple(nodes)))
    return tuple(trees)


def _build_question_patterns(raw: Mapping[str, Any]) -> dict[str, tuple[str, ...]]:
    patterns: dict[str, tuple[str, ...]] = {}
    for category, values in raw.items():
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise CatalogLoadError(
                f"Question patterns for '{category}' must be a list of strings"
            )
        patterns[category] = tuple(values)
    return patterns


def warn_on_probability_sums(tree: ResponseTree) -> list[str]:
    """Log and return the paths whose group probabilities look wrong.

    A group is flagged when an entry weight falls outside ``[0, 1]`` or when
    the weights do not sum to one. Neither stops the catalog from loading.
    """

    suspicious = []
    for path, group in tree.iter_groups():
        if not group:
            continue
        out_of_range = [
            index
            for index, entry in enumerate(group)
            if not 0.0 <= entry.probability <= 1.0
        ]
        if out_of_range:
            logger.warning(
                "Response group '%s' has weights outside [0, 1] at entries %s",
                path,
                out_of_range,
            )
        total = math.fsum(entry.probability for entry in group)
        off_sum = abs(total - 1.0) > _PROBABILITY_TOLERANCE
        if off_sum:
            logger.warning(
                "Response group '%s' probabilities sum to %.4f instead of 1.0",
                path,
                total,
            )
        if out_of_range or off_sum:
            suspicious.append(path)
    return suspicious


def build_catalogs(
    conversations: Mapping[str, Any], responses: Mapping[str, Any]
) -> Catalogs:
    """Assemble catalogs from already-parsed JSON payloads."""

    tree = build_response_tree(responses)
    warn_on_probability_sums(tree)
    return Catalogs(
        topics=_build_topics(_as_mapping(conversations.get("topics"), "topics")),
        question_patterns=_build_question_patterns(
            _as_mapping(conversations.get("questionPatterns"), "questionPatterns")
        ),
        dialogue_trees=_build_dialogue_trees(
            _as_mapping(conversations.get("dialogueTrees"), "dialogueTrees")
        ),
        responses=tree,
    )


def load_catalogs(data_dir: Path | None = None) -> Catalogs:
    """Read the conversations and responses catalogs.

    ``data_dir`` overrides the configured data directory.
    """

    config = settings if data_dir is None else replace(settings, data_directory=data_dir)
    conversations = _read_json(config.conversations_path)
    responses = _read_json(config.responses_path)
    catalogs = build_catalogs(conversations, responses)
    logger.info(
        "Loaded %d topics, %d dialogue trees and %d response groups from %s",
        len(catalogs.topics),
        len(catalogs.dialogue_trees),
        sum(1 for _ in catalogs.responses.iter_groups()),
        config.data_directory,
    )
    return catalogs


@lru_cache(maxsize=1)
def get_catalogs() -> Catalogs:
    """Return the process-wide catalogs loaded from the configured directory."""

    return load_catalogs()


__all__ = [
    "CatalogLoadError",
    "build_catalogs",
    "build_response_tree",
    "get_catalogs",
    "load_catalogs",
    "warn_on_probability_sums",
]
