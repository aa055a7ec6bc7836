"""HTTP payload schemas."""

from __future__ import annotations

from .models import (
    ChatData,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HealthData,
    HealthResponse,
)

__all__ = [
    "ChatData",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthData",
    "HealthResponse",
]
