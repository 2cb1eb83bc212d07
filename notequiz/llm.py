"""Completion model capability and the invoker used by the quiz pipeline."""
from __future__ import annotations

import logging
import time
from typing import Optional, Protocol

from openai import OpenAI

from .errors import ModelCallFailed


logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.9


class CompletionModel(Protocol):
    """Anything that turns a prompt into completion text."""

    def complete(self, prompt: str, temperature: float) -> str:
        ...


class OpenAICompletionModel:
    """Single-prompt chat completion against the OpenAI API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        client: Optional[OpenAI] = None,
    ) -> None:
        if client is None:
            if not api_key:
                raise RuntimeError("OPENAI_API_KEY is not set")
            client = OpenAI(api_key=api_key)
        self._client = client
        self.model = model

    def complete(self, prompt: str, temperature: float) -> str:
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
        )
        return response.choices[0].message.content or ""


class ModelInvoker:
    """Calls the completion model once with a fixed temperature."""

    def __init__(self, model: CompletionModel, temperature: float = DEFAULT_TEMPERATURE) -> None:
        self._model = model
        self.temperature = temperature

    def invoke(self, prompt: str) -> str:
        logger.info(
            "Calling completion model with temperature %s, prompt length %d",
            self.temperature,
            len(prompt),
        )
        started = time.perf_counter()
        try:
            completion = self._model.complete(prompt, self.temperature)
        except Exception as exc:
            elapsed = time.perf_counter() - started
            logger.error("Completion model call failed after %.3fs: %s", elapsed, exc)
            raise ModelCallFailed(f"LLM generation failed: {exc}") from exc
        logger.info(
            "Completion model returned %d characters in %.3fs",
            len(completion),
            time.perf_counter() - started,
        )
        return completion


__all__ = [
    "DEFAULT_MODEL",
    "DEFAULT_TEMPERATURE",
    "CompletionModel",
    "OpenAICompletionModel",
    "ModelInvoker",
]
