"""Main FastAPI application for the wildlife chat backend."""

from __future__ import annotations

import logging
from time import monotonic

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.models import (
    ChatData,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HealthData,
    HealthResponse,
)
from .config import settings
from .routing import get_message_router, get_stats
from .routing.session import DEFAULT_USER_ID


app = FastAPI(title="Wildlife Chat API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


logger = logging.getLogger(__name__)

_STARTED_AT = monotonic()

_CHAT_FAILURE_MESSAGE = (
    "Crikey! I'm just out wrestling a crocodile at the moment mate. "
    "I'll be back soon!"
)


def _error(status_code: int, error: str, message: str | None = None) -> JSONResponse:
    payload = ErrorResponse(error=error, message=message)
    return JSONResponse(
        status_code=status_code, content=payload.model_dump(exclude_none=True)
    )


@app.post("/api/chat", response_model=ChatResponse, response_model_by_alias=True)
async def chat_endpoint(request: ChatRequest) -> ChatResponse | JSONResponse:
    """Route a user message and return the chosen reply with its metadata."""

    message = request.message
    if not isinstance(message, str) or not message.strip():
        return _error(status.HTTP_400_BAD_REQUEST, "Message is required")

    user_id = request.user_id or DEFAULT_USER_ID

    try:
        result = await get_message_router().process_message(message, user_id)
    except Exception:
        logger.exception("Unhandled error while processing chat request")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, _CHAT_FAILURE_MESSAGE)

    return ChatResponse(
        data=ChatData(
            response=result.response,
            topics=result.topics,
            is_llm=result.is_llm,
            in_dialogue_tree=result.in_dialogue_tree,
            follow_up=result.follow_up,
            user_id=user_id,
        )
    )


@app.get("/api/health", response_model=HealthResponse, response_model_by_alias=True)
async def healthcheck() -> HealthResponse | JSONResponse:
    """Report server status along with the available response groups."""

    try:
        router = get_message_router()
        stats = get_stats(router.catalogs.responses)
        active_sessions = router.sessions.active_count()
    except Exception:
        logger.exception("Health check failed")
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Service Unavailable")

    return HealthResponse(
        status="Crikey! Server is running beautifully!",
        data=HealthData(
            topics=stats.topics,
            topic_count=stats.topic_count,
            uptime=round(monotonic() - _STARTED_AT, 3),
            active_sessions=active_sessions,
        ),
    )


@app.exception_handler(StarletteHTTPException)
async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error(
            status.HTTP_404_NOT_FOUND,
            "Not Found",
            "Crikey! That endpoint doesn't exist, mate!",
        )
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Rejected malformed request on %s", request.url.path)
    return _error(status.HTTP_400_BAD_REQUEST, "Message is required")


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        "Something went terribly wrong!",
    )


__all__ = ["app", "chat_endpoint", "healthcheck"]
