"""Pydantic schemas for HTTP API payloads."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChatRequest(BaseModel):
    """Payload accepted by the /chat endpoint.

    ``message`` is left loosely typed so the handler can answer malformed
    input with the documented 400 payload instead of a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: Any = None
    user_id: Optional[str] = Field(None, alias="userId")

    @model_validator(mode="before")
    @classmethod
    def _coerce_user_id(cls, value: Any) -> Any:
        """Accept numeric or other JSON user ids by turning them into strings."""

        if not isinstance(value, Mapping):
            return value

        coerced = dict(value)
        for key in ("userId", "user_id"):
            user_id = coerced.get(key)
            if user_id is not None and not isinstance(user_id, str):
                coerced[key] = str(user_id)
        return coerced


class ChatData(BaseModel):
    """Routing outcome returned to the client."""

    model_config = ConfigDict(populate_by_name=True)

    response: str
    topics: list[str]
    is_llm: bool = Field(..., alias="isLLM")
    in_dialogue_tree: bool = Field(..., alias="inDialogueTree")
    follow_up: Optional[str] = Field(None, alias="followUp")
    user_id: str = Field(..., alias="userId")


class ChatResponse(BaseModel):
    """Response contract for the /chat endpoint."""

    success: bool = True
    data: ChatData


class HealthData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    topics: list[str]
    topic_count: int = Field(..., alias="topicCount")
    uptime: float
    active_sessions: int = Field(..., alias="activeSessions")


class HealthResponse(BaseModel):
    success: bool = True
    status: str
    data: HealthData


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: Optional[str] = None
