"""Message routing core: matching, classification, dialogue trees and replies."""

from __future__ import annotations

from .classifier import MessageClassifier, TopicMatch
from .dialogue import DialogueMatch, DialogueTreeNavigator
from .matching import matches_whole_word
from .responses import (
    CatalogStats,
    get_follow_up_hint,
    get_responses_by_path,
    get_stats,
    select_response_by_probability,
)
from .router import MessageRouter, RouteResult, get_message_router
from .session import HistoryEntry, SessionStore, UserSession, get_session_store

__all__ = [
    "CatalogStats",
    "DialogueMatch",
    "DialogueTreeNavigator",
    "HistoryEntry",
    "MessageClassifier",
    "MessageRouter",
    "RouteResult",
    "SessionStore",
    "TopicMatch",
    "UserSession",
    "get_follow_up_hint",
    "get_message_router",
    "get_responses_by_path",
    "get_session_store",
    "get_stats",
    "matches_whole_word",
    "select_response_by_probability",
]
