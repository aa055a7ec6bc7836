"""Shared fixtures describing a small, deterministic chat catalog."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from wildchat.catalog import Catalogs, build_catalogs


CONVERSATIONS: dict[str, Any] = {
    "topics": {
        "greetings": {"keywords": ["hello", "hi", "g'day"], "responseKey": "greetings"},
        "farewells": {"keywords": ["bye", "see ya"], "responseKey": "farewells"},
        "crocodiles": {
            "keywords": ["crocodile", "croc"],
            "responseKey": "animals.crocodiles",
        },
        "snakes": {"keywords": ["snake", "python"], "responseKey": "animals.snakes"},
        "kangaroos": {"keywords": ["kangaroo", "roo"], "responseKey": "animals.kangaroos"},
        "koalas": {"keywords": ["koala"], "responseKey": "animals.koalas"},
        "default": {"keywords": [], "responseKey": "default"},
    },
    "questionPatterns": {
        "what": ["what do", "what is"],
        "how": ["how big", "how long"],
    },
    "dialogueTrees": {
        "crocodiles": {
            "start": {"keywords": ["croc tour"], "responseKey": "dialogues.crocodiles.start"},
            "feeding": {"keywords": ["feed", "eat"], "responseKey": "dialogues.crocodiles.feeding"},
            "babies": {"keywords": ["baby", "eggs"], "responseKey": "dialogues.crocodiles.babies"},
        },
        "snakes": {
            "start": {"keywords": ["snake tour"], "responseKey": "dialogues.snakes.start"},
            "venom": {"keywords": ["venom"], "responseKey": "dialogues.snakes.venom"},
            "babies": {"keywords": ["baby"], "responseKey": "dialogues.snakes.babies"},
        },
    },
}

RESPONSES: dict[str, Any] = {
    "greetings": [
        {"text": "G'day mate!", "probability": 0.5},
        {"text": "Crikey, hello there!", "probability": 0.5},
    ],
    "farewells": [{"text": "Hooroo!", "probability": 1.0}],
    "default": [{"text": "Ask me about crocs!", "probability": 1.0}],
    "animals": {
        "crocodiles": [
            {"text": "Crocs are living dinosaurs!", "probability": 0.3, "followUp": "Ask what they eat!"},
            {"text": "Salties are huge!", "probability": 0.4},
            {"text": "Crocs hold their breath for an hour!", "probability": 0.3},
        ],
        "snakes": [{"text": "Snakes are shy!", "probability": 1.0}],
        "kangaroos": [{"text": "Roos can jump nine metres!", "probability": 1.0}],
    },
    "dialogues": {
        "crocodiles": {
            "start": [{"text": "Welcome to croc country!", "probability": 1.0, "followUp": "Ask about feeding!"}],
            "feeding": [{"text": "Crocs ambush their prey!", "probability": 1.0, "followUp": "Ask about babies!"}],
            "babies": [{"text": "Mum carries hatchlings in her mouth!", "probability": 1.0}],
        },
        "snakes": {
            "start": [{"text": "Snakes, beauty!", "probability": 1.0}],
            "venom": [{"text": "Taipans are the most venomous!", "probability": 1.0}],
            "babies": [{"text": "Baby snakes hatch ready to hunt!", "probability": 1.0}],
        },
    },
}


@pytest.fixture
def catalogs() -> Catalogs:
    """Return catalogs built from the in-memory fixture payloads."""

    return build_catalogs(CONVERSATIONS, RESPONSES)


@pytest.fixture
def catalog_payloads() -> tuple[dict[str, Any], dict[str, Any]]:
    """Return fresh copies of the raw conversations and responses payloads."""

    return copy.deepcopy(CONVERSATIONS), copy.deepcopy(RESPONSES)
