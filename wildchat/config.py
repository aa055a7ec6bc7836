"""Configuration helpers for the wildlife chat backend."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env if present to simplify local development.
load_dotenv()


_PACKAGE_DATA_DIR = Path(__file__).resolve().parent / "data"
_GROQ_BASE_URL = "https://api.groq.com/openai/v1"


@dataclass(frozen=True)
class Settings:
    """Holds configuration derived from environment variables."""

    data_directory: Path
    session_ttl_seconds: float
    session_max_users: int
    history_limit: int
    llm_base_url: str
    llm_api_key: str | None
    llm_model: str
    llm_max_attempts: int
    frontend_url: str
    app_host: str
    app_port: int
    log_level: str

    @property
    def conversations_path(self) -> Path:
        """Location of the topics, question patterns and dialogue trees."""

        return self.data_directory / "conversations.json"

    @property
    def responses_path(self) -> Path:
        """Location of the nested response catalog."""

        return self.data_directory / "responses.json"


def _int_from_env(key: str, default: int) -> int:
    """Parse a positive integer from the environment."""

    raw_value = os.getenv(key)
    if raw_value is None:
        return default

    try:
        value = int(raw_value)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable '{key}' must be an integer") from exc

    if value <= 0:
        raise RuntimeError(f"Environment variable '{key}' must be greater than zero")

    return value


def _positive_float_from_env(key: str, default: float) -> float:
    """Parse a strictly positive floating-point value from the environment."""

    raw_value = os.getenv(key)
    if raw_value is None:
        return default

    try:
        value = float(raw_value)
    except ValueError as exc:
        raise RuntimeError(
            f"Environment variable '{key}' must be a floating-point number"
        ) from exc

    if value <= 0:
        raise RuntimeError(f"Environment variable '{key}' must be greater than zero")

    return value


def get_settings() -> Settings:
    """Create settings populated from the environment."""

    data_dir_raw = os.getenv("WILDCHAT_DATA_DIR")
    if data_dir_raw is None:
        data_dir = _PACKAGE_DATA_DIR
    else:
        data_dir = Path(data_dir_raw).expanduser().resolve()

    return Settings(
        data_directory=data_dir,
        session_ttl_seconds=_positive_float_from_env(
            "WILDCHAT_SESSION_TTL_SECONDS", 1800.0
        ),
        session_max_users=_int_from_env("WILDCHAT_SESSION_MAX_USERS", 1024),
        history_limit=_int_from_env("WILDCHAT_HISTORY_LIMIT", 6),
        llm_base_url=os.getenv("OPENAI_BASE_URL", _GROQ_BASE_URL),
        llm_api_key=os.getenv("OPENAI_API_KEY") or os.getenv("GROQ_API_KEY"),
        llm_model=os.getenv("WILDCHAT_LLM_MODEL", "llama-3.1-8b-instant"),
        llm_max_attempts=_int_from_env("WILDCHAT_LLM_MAX_ATTEMPTS", 2),
        frontend_url=os.getenv("WILDCHAT_FRONTEND_URL", "*"),
        app_host=os.getenv("APP_HOST", "0.0.0.0"),
        app_port=_int_from_env("APP_PORT", 3001),
        log_level=os.getenv("LOG_LEVEL", "info"),
    )


settings = get_settings()


__all__ = ["Settings", "get_settings", "settings"]
