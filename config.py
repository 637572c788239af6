from __future__ import annotations

import logging
import os
from typing import List, Optional

from pydantic import BaseModel

DEFAULT_QUESTIONS_URL = "https://v7574x625rfp77q6wjzpyk6s7i0cdrho.lambda-url.us-east-1.on.aws/"
DEFAULT_TUTOR_URL = "https://hack-backend-gwys.onrender.com/ai-tutor/"
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

_TRUTHY = {"1", "true", "yes", "on"}

logger = logging.getLogger("quiz-tutor.config")


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name, "")
    items = [s.strip() for s in raw.split(",") if s.strip()]
    return items or list(default)


def _env_float(name: str) -> Optional[float]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return None


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default


class Settings(BaseModel):
    questions_url: str = DEFAULT_QUESTIONS_URL
    tutor_url: str = DEFAULT_TUTOR_URL
    # None = wait forever, like the browser client did
    http_timeout_s: Optional[float] = None
    cors_origins: List[str] = DEFAULT_CORS_ORIGINS
    await_initial_load: bool = False
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            questions_url=os.getenv("QUESTIONS_URL") or DEFAULT_QUESTIONS_URL,
            tutor_url=os.getenv("TUTOR_URL") or DEFAULT_TUTOR_URL,
            http_timeout_s=_env_float("HTTP_TIMEOUT_S"),
            cors_origins=_env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
            await_initial_load=os.getenv("AWAIT_INITIAL_LOAD", "").lower() in _TRUTHY,
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
            host=os.getenv("HOST") or "127.0.0.1",
            port=_env_int("PORT", 8000),
        )
