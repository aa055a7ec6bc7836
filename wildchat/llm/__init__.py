"""Generative responder used when no scripted reply applies."""

from __future__ import annotations

from .factory import get_persona_agent, get_validator_agent
from .responder import GenerativeResponder, PersonaResponder, contains_non_english

__all__ = [
    "GenerativeResponder",
    "PersonaResponder",
    "contains_non_english",
    "get_persona_agent",
    "get_validator_agent",
]
