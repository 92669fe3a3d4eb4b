"""Synthetic event streams for exercising counters.

Generates arrival timestamps (evenly spaced or Poisson) and feeds them into a
:class:`~activity.counter.Counter`.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from activity.counter import Counter

logger = logging.getLogger(__name__)


def _check(rate_hz: float, count: int) -> None:
    if not rate_hz > 0:
        raise ValueError(f"rate_hz must be positive, got: {rate_hz}")
    if count < 0:
        raise ValueError(f"count must be non-negative, got: {count}")


def periodic_arrivals(rate_hz: float, count: int, start: float = 0.0) -> list[float]:
    """Return *count* timestamps spaced ``1 / rate_hz`` apart from *start*."""
    _check(rate_hz, count)
    return [start + i / rate_hz for i in range(count)]


def poisson_arrivals(
    rate_hz: float, count: int, start: float = 0.0, seed: int | None = None,
) -> list[float]:
    """Return *count* timestamps of a Poisson process with rate *rate_hz*.

    The first arrival is at *start*; later ones follow exponentially
    distributed gaps.
    """
    _check(rate_hz, count)
    if count == 0:
        return []
    rng = np.random.default_rng(seed)
    gaps = rng.exponential(1.0 / rate_hz, size=count - 1)
    offsets = np.concatenate(([0.0], np.cumsum(gaps)))
    return (start + offsets).tolist()


def feed(counter: Counter, timestamps: Iterable[float], count: int = 1) -> Counter:
    """Increment *counter* by *count* for every timestamp, in iteration order."""
    n = 0
    late = 0
    for ts in timestamps:
        if ts < counter.timestamp:
            late += 1
        counter.increment(ts, count)
        n += 1
    logger.debug("Fed %d events (%d out of order), now %s", n, late, counter)
    return counter
