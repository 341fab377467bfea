from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional

logger = logging.getLogger("strategy_board.profile")

DEFAULT_SLOW_MS = 100.0


def profiling_enabled() -> bool:
    return os.environ.get("BOARD_PROFILE", "").strip().lower() in {"1", "true", "yes", "on"}


def slow_threshold_ms() -> float:
    try:
        ms = float(os.environ.get("BOARD_SLOW_MS", DEFAULT_SLOW_MS))
    except ValueError:
        ms = DEFAULT_SLOW_MS
    return max(0.0, ms)


def format_meta(meta: Optional[Mapping[str, int]]) -> str:
    return " ".join(f"{k}={v}" for k, v in (meta or {}).items())


@dataclass
class SpanTiming:
    name: str
    elapsed_ms: float = 0.0


@contextmanager
def profile_span(
    name: str,
    *,
    meta: Optional[Mapping[str, int]] = None,
    slow_ms: Optional[float] = None,
) -> Iterator[SpanTiming]:
    """Time a block; the yielded SpanTiming is filled in when the block exits.

    A slow-span log line is emitted only with `BOARD_PROFILE=1`, for blocks at or
    above `BOARD_SLOW_MS` (default 100ms). `meta` holds load counters such as the
    sequence number and record count.
    """

    timing = SpanTiming(name=name)
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.elapsed_ms = (time.perf_counter() - start) * 1000.0
        threshold = slow_threshold_ms() if slow_ms is None else float(slow_ms)
        if profiling_enabled() and timing.elapsed_ms >= threshold:
            logger.info("SLOW span=%s ms=%.2f %s", name, timing.elapsed_ms, format_meta(meta))
