"""In-memory per-user session state for the chat router."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable, Dict, List, Literal

from cachetools import TTLCache

from ..config import settings


DEFAULT_USER_ID = "default"
HISTORY_HEADER = "Previous conversation:\n"

Role = Literal["user", "assistant"]


@dataclass(slots=True)
class HistoryEntry:
    """Represents a single utterance in the conversation history."""

    role: Role
    content: str
    timestamp: str = field(
        default_factory=lambda: datetime.now(tz=timezone.utc).isoformat()
    )


@dataclass(slots=True)
class UserSession:
    """Tracks dialogue-tree position and recent history for one user."""

    user_id: str
    in_dialogue_tree: bool = False
    current_tree: str | None = None
    last_topic: str | None = None
    conversation_history: List[HistoryEntry] = field(default_factory=list)

    def enter_tree(self, tree: str, node: str) -> None:
        self.in_dialogue_tree = True
        self.current_tree = tree
        self.last_topic = node

    def exit_tree(self) -> None:
        self.in_dialogue_tree = False
        self.current_tree = None


class SessionStore:
    """Tracks sessions by user id with LRU and idle-time eviction.

    Sessions are created lazily on first contact. Once ``max_users`` sessions
    exist the least recently used one is dropped, and a session untouched for
    ``ttl_seconds`` expires. Every access refreshes the TTL.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float,
        max_users: int,
        history_limit: int = 6,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sessions: TTLCache[str, UserSession] = TTLCache(
            maxsize=max_users, ttl=ttl_seconds, timer=timer
        )
        self._locks: Dict[str, asyncio.Lock] = {}
        self._max_users = max_users
        self._history_limit = history_limit

    def get_or_create(self, user_id: str = DEFAULT_USER_ID) -> UserSession:
        """Return the session for ``user_id``, initialising it when necessary."""

        session = self._sessions.get(user_id)
        if session is None:
            session = UserSession(user_id=user_id)
        # Re-assigning refreshes the TTL so active conversations stay warm.
        self._sessions[user_id] = session
        return session

    def add_to_history(self, user_id: str, role: Role, content: str) -> None:
        """Append a message and keep only the most recent entries."""

        session = self.get_or_create(user_id)
        session.conversation_history.append(HistoryEntry(role=role, content=content))
        if len(session.conversation_history) > self._history_limit:
            session.conversation_history = session.conversation_history[
                -self._history_limit :
            ]

    def get_history_context(self, user_id: str, count: int = 4) -> str:
        """Render recent history as ``role: content`` lines for a prompt.

        Returns an empty string while the history holds at most one entry, so
        the opening user message produces no context.
        """

        history = self.get_or_create(user_id).conversation_history
        if len(history) <= 1 or count <= 0:
            return ""

        lines = [f"{entry.role}: {entry.content}\n" for entry in history[-count:]]
        return HISTORY_HEADER + "".join(lines) + "\n"

    def lock(self, user_id: str) -> asyncio.Lock:
        """Return the lock that serialises requests for ``user_id``."""

        lock = self._locks.get(user_id)
        if lock is None:
            if len(self._locks) >= self._max_users:
                self._prune_locks()
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    def clear(self, user_id: str) -> None:
        """Forget the session for ``user_id``."""

        self._sessions.pop(user_id, None)
        lock = self._locks.get(user_id)
        if lock is not None and not lock.locked():
            del self._locks[user_id]

    def active_count(self) -> int:
        """Return the number of sessions that have not expired."""

        self._sessions.expire()
        return len(self._sessions)

    def reset(self) -> None:
        """Remove every session (useful for tests)."""

        self._sessions.clear()
        self._locks.clear()

    def _prune_locks(self) -> None:
        stale = [
            user_id
            for user_id, lock in self._locks.items()
            if not lock.locked() and user_id not in self._sessions
        ]
        for user_id in stale:
            del self._locks[user_id]


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """Return the process-wide session store."""

    return SessionStore(
        ttl_seconds=settings.session_ttl_seconds,
        max_users=settings.session_max_users,
        history_limit=settings.history_limit,
    )


__all__ = [
    "DEFAULT_USER_ID",
    "HISTORY_HEADER",
    "HistoryEntry",
    "SessionStore",
    "UserSession",
    "get_session_store",
]
