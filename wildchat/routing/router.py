"""Decision policy that routes each message to a response strategy."""

from __future__ import annotations

from functools import lru_cache

import logfire
from pydantic import BaseModel, Field

from ..catalog import Catalogs, get_catalogs
from ..llm import GenerativeResponder, PersonaResponder
from ..llm.prompts import TOPIC_QUESTION_TEMPLATE
from ..logging import _ensure_logfire
from .classifier import FAREWELLS_TOPIC, GREETINGS_TOPIC, MessageClassifier, TopicMatch
from .dialogue import DialogueTreeNavigator
from .responses import (
    RandomSource,
    get_follow_up_hint,
    get_responses_by_path,
    select_response_by_probability,
)
from .session import DEFAULT_USER_ID, SessionStore, UserSession, get_session_store


_HISTORY_CONTEXT_COUNT = 4
_CONTEXT_RESPONSES_PER_TOPIC = 2
_FALLBACK_TOPIC = "default"


class RouteResult(BaseModel):
    """Outcome of routing a single user message."""

    response: str = Field(..., description="Reply text for the user.")
    topics: list[str] = Field(
        default_factory=list, description="Topics or tree/node that produced the reply."
    )
    is_llm: bool = Field(False, description="Whether the generative responder was used.")
    in_dialogue_tree: bool = Field(
        False, description="Whether the reply came from a dialogue tree node."
    )
    follow_up: str | None = Field(
        None, description="Suggested next question attached to a scripted reply."
    )


class MessageRouter:
    """Routes messages through dialogue trees, scripted replies and the LLM.

    Branch order per message (first match wins):

    1. continue or enter a dialogue tree when a node keyword matches
    2. greeting, leaving any dialogue tree
    3. farewell, leaving any dialogue tree
    4. no topic match: generative reply seeded with recent history
    5. question about matched topics: generative reply with topic context
    6. topic mention: start the topic's dialogue tree or reply from its group

    Requests for the same user are serialised by the session store's per-user
    lock, so session updates never interleave across the generative call.
    """

    def __init__(
        self,
        catalogs: Catalogs,
        sessions: SessionStore,
        responder: GenerativeResponder,
        *,
        rng: RandomSource | None = None,
    ) -> None:
        _ensure_logfire()
        self._catalogs = catalogs
        self._sessions = sessions
        self._responder = responder
        self._rng = rng
        self._classifier = MessageClassifier(catalogs)
        self._navigator = DialogueTreeNavigator(catalogs)

    @property
    def catalogs(self) -> Catalogs:
        return self._catalogs

    @property
    def sessions(self) -> SessionStore:
        return self._sessions

    async def process_message(
        self, message: str, user_id: str = DEFAULT_USER_ID
    ) -> RouteResult:
        """Produce the reply for ``message`` and update the user's session."""

        async with self._sessions.lock(user_id):
            with logfire.span("router.process_message", user_id=user_id):
                session = self._sessions.get_or_create(user_id)
                self._sessions.add_to_history(user_id, "user", message)

                result = await self._route(message, session)

                self._sessions.add_to_history(user_id, "assistant", result.response)
                logfire.info(
                    "router.reply",
                    user_id=user_id,
                    topics=result.topics,
                    is_llm=result.is_llm,
                    in_dialogue_tree=result.in_dialogue_tree,
                )
                return result

    async def _route(self, message: str, session: UserSession) -> RouteResult:
        dialogue_result = self._continue_dialogue(message, session)
        if dialogue_result is not None:
            return dialogue_result

        if self._classifier.is_greeting(message):
            session.exit_tree()
            return await self._reply_from_group(GREETINGS_TOPIC, message)

        if self._classifier.is_farewell(message):
            session.exit_tree()
            return await self._reply_from_group(FAREWELLS_TOPIC, message)

        topics = self._classifier.find_topic(message)
        if not topics:
            session.exit_tree()
            return await self._reply_without_topic(message, session)

        if self._classifier.is_specific_question(message):
            return await self._answer_topic_question(message, topics, session)

        return await self._reply_to_topic(message, topics[0], session)

    def _continue_dialogue(self, message: str, session: UserSession) -> RouteResult | None:
        match = self._navigator.find_dialogue_tree_node(message, session.current_tree)
        if match is None:
            return None

        session.enter_tree(match.tree, match.node)
        logfire.info("router.branch", branch="dialogue", tree=match.tree, node=match.node)
        return self._scripted(
            match.response_key, [match.tree, match.node], in_dialogue_tree=True
        )

    async def _reply_from_group(self, path: str, message: str) -> RouteResult:
        logfire.info("router.branch", branch=path)
        result = self._scripted(path, [path])
        if result is not None:
            return result
        return await self._generated(message, [path])

    async def _reply_without_topic(self, message: str, session: UserSession) -> RouteResult:
        logfire.info("router.branch", branch="no_topic")
        history = self._sessions.get_history_context(
            session.user_id, _HISTORY_CONTEXT_COUNT
        )
        prompt = f"{history}\nCurrent question: {message}" if history else message
        return await self._generated(prompt, [_FALLBACK_TOPIC])

    async def _answer_topic_question(
        self, message: str, topics: list[TopicMatch], session: UserSession
    ) -> RouteResult:
        logfire.info(
            "router.branch", branch="topic_question", topics=[t.name for t in topics]
        )
        context_parts: list[str] = []
        for topic in topics:
            group = get_responses_by_path(self._catalogs.responses, topic.response_key)
            if group:
                context_parts.extend(
                    entry.text for entry in group[:_CONTEXT_RESPONSES_PER_TOPIC]
                )

        history = self._sessions.get_history_context(
            session.user_id, _HISTORY_CONTEXT_COUNT
        )
        prompt = TOPIC_QUESTION_TEMPLATE.format(
            context=" ".join(context_parts), message=message
        )
        if history:
            prompt = f"{history}\n\n{prompt}"
        return await self._generated(prompt, [topic.name for topic in topics])

    async def _reply_to_topic(
        self, message: str, topic: TopicMatch, session: UserSession
    ) -> RouteResult:
        if self._navigator.has_dialogue_tree(topic.name):
            start = self._navigator.get_dialogue_tree_start(topic.name)
            session.enter_tree(topic.name, start.name)
            logfire.info("router.branch", branch="dialogue_start", tree=topic.name)
            result = self._scripted(
                start.response_key, [topic.name, start.name], in_dialogue_tree=True
            )
            if result is not None:
                return result

        logfire.info("router.branch", branch="topic", topic=topic.name)
        result = self._scripted(topic.response_key, [topic.name])
        if result is not None:
            return result

        logfire.warning("router.missing_responses", topic=topic.name, path=topic.response_key)
        return await self._generated(message, [topic.name])

    def _scripted(
        self, path: str, topics: list[str], *, in_dialogue_tree: bool = False
    ) -> RouteResult | None:
        group = get_responses_by_path(self._catalogs.responses, path)
        text = select_response_by_probability(group, self._rng)
        if text is None:
            return None
        return RouteResult(
            response=text,
            topics=topics,
            is_llm=False,
            in_dialogue_tree=in_dialogue_tree,
            follow_up=get_follow_up_hint(group, text),
        )

    async def _generated(self, prompt: str, topics: list[str]) -> RouteResult:
        reply = await self._responder(prompt)
        return RouteResult(response=reply, topics=topics, is_llm=True)


@lru_cache(maxsize=1)
def get_message_router() -> MessageRouter:
    """Return the process-wide router wired to the configured collaborators."""

    return MessageRouter(
        catalogs=get_catalogs(),
        sessions=get_session_store(),
        responder=PersonaResponder(),
    )


__all__ = ["MessageRouter", "RouteResult", "get_message_router"]
