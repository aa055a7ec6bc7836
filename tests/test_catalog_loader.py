"""Tests for reading the catalog files from disk."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path

import pytest

from wildchat.catalog import (
    CatalogLoadError,
    ResponseTree,
    build_catalogs,
    load_catalogs,
    warn_on_probability_sums,
)
from wildchat.catalog import loader as loader_module
from wildchat.config import settings
from wildchat.routing.responses import get_responses_by_path


def _write(directory: Path, conversations: object, responses: object) -> None:
    (directory / "conversations.json").write_text(json.dumps(conversations), encoding="utf-8")
    (directory / "responses.json").write_text(json.dumps(responses), encoding="utf-8")


def test_load_catalogs_reads_both_files(tmp_path: Path, catalog_payloads) -> None:
    _write(tmp_path, *catalog_payloads)

    catalogs = load_catalogs(tmp_path)

    assert [topic.name for topic in catalogs.topics][:3] == [
        "greetings",
        "farewells",
        "crocodiles",
    ]
    assert catalogs.topic("crocodiles").keywords == ("crocodile", "croc")
    assert catalogs.question_patterns["how"] == ("how big", "how long")
    tree = catalogs.dialogue_tree("crocodiles")
    assert tree is not None and tree.is_startable
    assert [node.name for node in tree.nodes] == ["start", "feeding", "babies"]


def test_missing_file_raises(tmp_path: Path) -> None:
    (tmp_path / "conversations.json").write_text("{}", encoding="utf-8")

    with pytest.raises(CatalogLoadError, match="responses.json"):
        load_catalogs(tmp_path)


def test_malformed_json_raises(tmp_path: Path) -> None:
    (tmp_path / "conversations.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "responses.json").write_text("{}", encoding="utf-8")

    with pytest.raises(CatalogLoadError, match="not valid JSON"):
        load_catalogs(tmp_path)


def test_top_level_must_be_an_object(tmp_path: Path) -> None:
    _write(tmp_path, [], {})

    with pytest.raises(CatalogLoadError, match="JSON object"):
        load_catalogs(tmp_path)


def test_topic_without_response_key_is_rejected() -> None:
    with pytest.raises(CatalogLoadError, match="Invalid topic 'crocodiles'"):
        build_catalogs({"topics": {"crocodiles": {"keywords": ["croc"]}}}, {})


def test_invalid_response_entry_is_rejected() -> None:
    with pytest.raises(CatalogLoadError, match="animals.crocodiles"):
        build_catalogs({}, {"animals": {"crocodiles": [{"probability": 0.5}]}})


def test_scalar_response_values_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        catalogs = build_catalogs({}, {"note": "ignore me", "default": []})

    assert get_responses_by_path(catalogs.responses, "note") is None
    assert get_responses_by_path(catalogs.responses, "default") == ()
    assert "Ignoring non-group response value at 'note'" in caplog.text


def test_probability_sums_are_checked(caplog: pytest.LogCaptureFixture) -> None:
    tree = build_catalogs(
        {},
        {
            "good": [{"text": "a", "probability": 0.25}, {"text": "b", "probability": 0.75}],
            "nested": {"short": [{"text": "c", "probability": 0.5}]},
        },
    ).responses

    with caplog.at_level(logging.WARNING):
        suspicious = warn_on_probability_sums(tree)

    assert suspicious == ["nested.short"]
    assert "nested.short" in caplog.text
    assert warn_on_probability_sums(ResponseTree()) == []


def test_bundled_catalog_references_resolve() -> None:
    catalogs = load_catalogs(settings.data_directory)

    for topic in catalogs.topics:
        assert get_responses_by_path(catalogs.responses, topic.response_key), topic.name
    for tree in catalogs.dialogue_trees:
        assert tree.is_startable, tree.name
        for node in tree.nodes:
            assert get_responses_by_path(catalogs.responses, node.response_key), node.name
    assert warn_on_probability_sums(catalogs.responses) == []


def test_load_catalogs_defaults_to_configured_paths(
    tmp_path: Path, catalog_payloads, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write(tmp_path, *catalog_payloads)
    monkeypatch.setattr(
        loader_module, "settings", replace(settings, data_directory=tmp_path)
    )

    catalogs = load_catalogs()

    assert loader_module.settings.conversations_path == tmp_path / "conversations.json"
    assert catalogs.topic("koalas") is not None
    assert get_responses_by_path(catalogs.responses, "animals.koalas") is None


def test_out_of_range_weights_load_with_a_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        catalogs = build_catalogs(
            {},
            {
                "heavy": [{"text": "a", "probability": 1.5}],
                "balanced": [
                    {"text": "b", "probability": 1.5},
                    {"text": "c", "probability": -0.5},
                ],
            },
        )

    heavy = get_responses_by_path(catalogs.responses, "heavy")
    assert heavy is not None and heavy[0].probability == 1.5
    assert warn_on_probability_sums(catalogs.responses) == ["heavy", "balanced"]
    assert "Response group 'balanced' has weights outside [0, 1] at entries [0, 1]" in caplog.text
