from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Literal, Mapping

from record_classifier.steps.predicates import DEFAULT_HIGH_VALUE_THRESHOLD

ExecutorKind = Literal["thread", "process"]

ENV_HIGH_VALUE_THRESHOLD = "RECORD_CLASSIFIER_HIGH_VALUE_THRESHOLD"
ENV_CHUNK_SIZE = "RECORD_CLASSIFIER_CHUNK_SIZE"
ENV_MAX_WORKERS = "RECORD_CLASSIFIER_MAX_WORKERS"
ENV_EXECUTOR = "RECORD_CLASSIFIER_EXECUTOR"

DEFAULT_CHUNK_SIZE = 100_000


@dataclass(frozen=True)
class ClassifierSettings:
    high_value_threshold: Decimal = DEFAULT_HIGH_VALUE_THRESHOLD
    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_workers: int | None = None
    executor: ExecutorKind = "process"


def build_settings(env: Mapping[str, str] | None = None) -> ClassifierSettings:
    """Read settings from ``env`` (defaults to ``os.environ``); unset or blank keys keep defaults."""
    env = os.environ if env is None else env

    threshold = DEFAULT_HIGH_VALUE_THRESHOLD
    raw = env.get(ENV_HIGH_VALUE_THRESHOLD, "").strip()
    if raw:
        try:
            threshold = Decimal(raw)
        except InvalidOperation:
            raise ValueError(f"{ENV_HIGH_VALUE_THRESHOLD} must be a decimal number, got {raw!r}") from None
        if not threshold.is_finite():
            raise ValueError(f"{ENV_HIGH_VALUE_THRESHOLD} must be finite, got {raw!r}")

    chunk_size = _positive_int(env, ENV_CHUNK_SIZE) or DEFAULT_CHUNK_SIZE
    max_workers = _positive_int(env, ENV_MAX_WORKERS)

    executor = env.get(ENV_EXECUTOR, "").strip().lower() or "process"
    if executor not in ("thread", "process"):
        raise ValueError(f"{ENV_EXECUTOR} must be 'thread' or 'process', got {executor!r}")

    return ClassifierSettings(
        high_value_threshold=threshold,
        chunk_size=chunk_size,
        max_workers=max_workers,
        executor=executor,
    )


def _positive_int(env: Mapping[str, str], key: str) -> int | None:
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{key} must be >= 1, got {value}")
    return value
