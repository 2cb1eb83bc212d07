"""Environment-driven settings and logging setup."""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from .llm import DEFAULT_MODEL, DEFAULT_TEMPERATURE


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class QuizSettings:
    """Tunable configuration read once at application startup."""

    openai_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    db_path: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "QuizSettings":
        env = os.environ if environ is None else environ
        return cls(
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            model=env.get("NOTEQUIZ_MODEL", DEFAULT_MODEL),
            temperature=float(env.get("NOTEQUIZ_TEMPERATURE", str(DEFAULT_TEMPERATURE))),
            db_path=env.get("NOTEQUIZ_DB_PATH") or None,
            log_level=env.get("NOTEQUIZ_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: int | str = "INFO") -> logging.Logger:
    """Route the root logger to stdout with a single handler."""

    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
    return root


__all__ = ["LOG_FORMAT", "QuizSettings", "configure_logging"]
