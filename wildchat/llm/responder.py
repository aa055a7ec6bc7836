"""Generative fallback that answers when no scripted reply applies."""

from __future__ import annotations

import re
from typing import Any, Protocol

import logfire
from tenacity import AsyncRetrying, stop_after_attempt, wait_fixed

from ..config import settings
from ..logging import _ensure_logfire
from .factory import get_persona_agent, get_validator_agent
from .prompts import (
    ERROR_REPLY,
    EXHAUSTED_REPLY,
    MISSING_KEY_REPLY,
    VALIDATION_REQUEST_TEMPLATE,
)


_NON_ENGLISH_PATTERN = re.compile(r"[^\x00-\x7F\u00C0-\u00FF]")


class GenerativeResponder(Protocol):
    """Callable turning a prompt into reply text without raising."""

    async def __call__(self, prompt: str) -> str: ...


class TextAgent(Protocol):
    """Subset of the Pydantic-AI agent interface used by the responder."""

    async def run(self, user_prompt: str, **kwargs: Any) -> Any: ...


async def _run_agent_with_retry(agent: TextAgent, prompt: str) -> str:
    """Execute the agent while retrying once after a short delay on failure."""

    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(2), wait=wait_fixed(0.25), reraise=True
    ):
        with attempt:
            result = await agent.run(prompt)
            output = result.output
            return output.strip() if isinstance(output, str) else ""
    return ""


def contains_non_english(text: str) -> bool:
    """Return ``True`` when ``text`` has characters outside ASCII and Latin-1."""

    return bool(_NON_ENGLISH_PATTERN.search(text))


class PersonaResponder:
    """Generates in-character replies, regenerating off-persona output.

    Each attempt asks the persona agent for a reply. Replies containing
    non-Latin characters are discarded; the rest are checked by the validator
    agent. A reply that fails validation on the final attempt is still
    returned. Failures never propagate: the caller always receives text.
    """

    def __init__(
        self,
        *,
        persona_agent: TextAgent | None = None,
        validator_agent: TextAgent | None = None,
        api_key: str | None = None,
        max_attempts: int | None = None,
    ) -> None:
        _ensure_logfire()
        self._persona_agent = persona_agent
        self._validator_agent = validator_agent
        self._api_key = api_key if api_key is not None else settings.llm_api_key
        self._max_attempts = max_attempts or settings.llm_max_attempts

    async def __call__(self, prompt: str) -> str:
        if not self._api_key:
            logfire.error("responder.missing_api_key")
            return MISSING_KEY_REPLY

        try:
            return await self._generate(prompt)
        except Exception as exc:
            logfire.exception("responder.error", error=str(exc))
            return ERROR_REPLY

    async def _generate(self, prompt: str) -> str:
        agent = self._persona_agent or get_persona_agent()

        for attempt in range(1, self._max_attempts + 1):
            with logfire.span(
                "responder.attempt", attempt=attempt, max_attempts=self._max_attempts
            ):
                reply = await _run_agent_with_retry(agent, prompt)

            if not reply:
                logfire.warning("responder.empty_reply", attempt=attempt)
                continue

            if contains_non_english(reply):
                logfire.warning("responder.non_english_reply", attempt=attempt)
                continue

            if await self._is_in_character(reply):
                return reply

            logfire.info("responder.validation_failed", attempt=attempt)
            if attempt >= self._max_attempts:
                return reply

        return EXHAUSTED_REPLY

    async def _is_in_character(self, reply: str) -> bool:
        validator = self._validator_agent or get_validator_agent()
        try:
            verdict = await _run_agent_with_retry(
                validator, VALIDATION_REQUEST_TEMPLATE.format(reply=reply)
            )
        except Exception as exc:
            # Validator failures accept the reply.
            logfire.warning("responder.validator_error", error=str(exc))
            return True
        return "YES" in verdict.upper()


__all__ = [
    "GenerativeResponder",
    "PersonaResponder",
    "TextAgent",
    "contains_non_english",
]
