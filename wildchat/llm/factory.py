"""Factories for the persona and validator agents."""

from __future__ import annotations

from functools import lru_cache

from pydantic_ai import Agent, InstrumentationSettings
from pydantic_ai.models.openai import OpenAIChatModel, OpenAIChatModelSettings
from pydantic_ai.providers.openai import OpenAIProvider

from ..config import settings
from ..logging import _ensure_logfire
from .prompts import PERSONA_PROMPT, VALIDATOR_PROMPT


def _build_model(model_settings: OpenAIChatModelSettings) -> OpenAIChatModel:
    return OpenAIChatModel(
        settings.llm_model,
        provider=OpenAIProvider(
            base_url=settings.llm_base_url,
            api_key=settings.llm_api_key,
        ),
        settings=model_settings,
    )


@lru_cache(maxsize=1)
def get_persona_agent() -> Agent[None, str]:
    """Return the agent that answers in the wildlife-expert persona."""

    _ensure_logfire()

    model = _build_model(
        OpenAIChatModelSettings(temperature=0.8, top_p=0.9, max_tokens=200)
    )
    return Agent(
        model=model,
        output_type=str,
        instructions=PERSONA_PROMPT,
        instrument=InstrumentationSettings(),
        name="persona-responder",
    )


@lru_cache(maxsize=1)
def get_validator_agent() -> Agent[None, str]:
    """Return the agent that judges whether a reply stays in character."""

    _ensure_logfire()

    model = _build_model(OpenAIChatModelSettings(temperature=0, max_tokens=10))
    return Agent(
        model=model,
        output_type=str,
        instructions=VALIDATOR_PROMPT,
        instrument=InstrumentationSettings(),
        name="persona-validator",
    )


__all__ = ["get_persona_agent", "get_validator_agent"]
