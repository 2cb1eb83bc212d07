"""Simple in-process metrics registry for service instrumentation."""
from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Deque


PROCESSING_TIME_WINDOW = 500


@dataclass
class MetricsRegistry:
    """Holds counters and histograms exposed by the application."""

    generation_attempts: int = 0
    generation_successes: int = 0
    generation_failures: int = 0
    generation_failure_reasons: Counter = field(default_factory=Counter)
    inferred_parameters: Counter = field(default_factory=Counter)
    skipped_notes: int = 0
    processing_times_ms: Deque[int] = field(
        default_factory=lambda: deque(maxlen=PROCESSING_TIME_WINDOW)
    )

    def record_generation_attempt(self) -> None:
        self.generation_attempts += 1

    def record_generation_success(self, processing_time_ms: int) -> None:
        self.generation_successes += 1
        self.processing_times_ms.append(processing_time_ms)

    def record_generation_failure(self, reason: str) -> None:
        self.generation_failures += 1
        self.generation_failure_reasons[reason] += 1

    def record_parameters(self, difficulty: str, question_type: str) -> None:
        self.inferred_parameters[(difficulty, question_type)] += 1

    def record_skipped_notes(self, count: int) -> None:
        self.skipped_notes += count

    @property
    def generation_success_rate(self) -> float:
        if self.generation_attempts == 0:
            return 0.0
        return self.generation_successes / self.generation_attempts


METRICS = MetricsRegistry()

__all__ = ["METRICS", "PROCESSING_TIME_WINDOW", "MetricsRegistry"]
