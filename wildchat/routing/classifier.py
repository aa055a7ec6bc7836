"""Keyword-based message classification."""

from __future__ import annotations

import logfire
from pydantic import BaseModel, ConfigDict

from ..catalog.schemas import RESERVED_DEFAULT_TOPIC, Catalogs, Topic
from .matching import matches_whole_word


GREETINGS_TOPIC = "greetings"
FAREWELLS_TOPIC = "farewells"


class TopicMatch(BaseModel):
    """A topic whose keywords appear in the user message."""

    model_config = ConfigDict(frozen=True)

    name: str
    response_key: str


class MessageClassifier:
    """Detects greetings, farewells, questions and topics in user messages."""

    def __init__(self, catalogs: Catalogs) -> None:
        self._catalogs = catalogs

    def _matches_reserved(self, message: str, topic_name: str) -> bool:
        topic = self._catalogs.topic(topic_name)
        if topic is None:
            return False
        for keyword in topic.keywords:
            if matches_whole_word(message, keyword):
                logfire.debug(
                    "classifier.reserved_match", topic=topic_name, keyword=keyword
                )
                return True
        return False

    def is_greeting(self, message: str) -> bool:
        return self._matches_reserved(message, GREETINGS_TOPIC)

    def is_farewell(self, message: str) -> bool:
        return self._matches_reserved(message, FAREWELLS_TOPIC)

    def is_specific_question(self, message: str) -> bool:
        """Return ``True`` when any question pattern is a substring of the message.

        Unlike topic detection this check does not require word boundaries.
        """

        if not message:
            return False
        message_lower = message.lower()
        for category, patterns in self._catalogs.question_patterns.items():
            for pattern in patterns:
                if pattern and pattern.lower() in message_lower:
                    logfire.debug(
                        "classifier.question_pattern", category=category, pattern=pattern
                    )
                    return True
        return False

    def find_topic(self, message: str) -> list[TopicMatch]:
        """Return the topics mentioned in ``message`` in catalog order.

        The reserved ``default`` topic is never returned; an empty list means
        nothing matched and the caller picks the fallback.
        """

        if not message:
            return []

        matches: list[TopicMatch] = []
        for topic in self._catalogs.topics:
            if topic.name == RESERVED_DEFAULT_TOPIC:
                continue
            keyword = _first_matching_keyword(message, topic)
            if keyword is not None:
                logfire.debug("classifier.topic_match", topic=topic.name, keyword=keyword)
                matches.append(TopicMatch(name=topic.name, response_key=topic.response_key))
        return matches


def _first_matching_keyword(message: str, topic: Topic) -> str | None:
    for keyword in topic.keywords:
        if matches_whole_word(message, keyword):
            return keyword
    return None


__all__ = ["FAREWELLS_TOPIC", "GREETINGS_TOPIC", "MessageClassifier", "TopicMatch"]
