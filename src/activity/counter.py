"""Decaying activity counter.

A decaying counter estimates the recent event rate of a stream that behaves
roughly like a Poisson process.  It is a good basis for picking the least
active entry to evict from a cache, or for guessing when the next event is due.

Timestamps and durations are plain ``float`` seconds.  Arithmetic is done in
``numpy.float64`` with floating-point errors silenced, so a zero ``tau`` or a
huge exponent yields ``inf``/``nan`` instead of raising.

The out-of-order and merge correction factors are approximations, not exact
re-derivations of the decayed value.  Instances are not thread-safe.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Any

import numpy as np

from activity.durations import format_duration

INFINITE_LABEL = "∞ (0 Hz)"


def _as_float64(x: float) -> np.float64:
    return np.float64(x)


@dataclass(slots=True)
class Counter:
    """Decayed event count ``value`` as of ``timestamp``.

    Only ``tau`` needs to be supplied::

        c = Counter(tau=3600.0)

    Pick ``tau`` larger than the expected interval between events and small
    enough that the estimate follows changing conditions.  With several events
    per second and eviction decisions every few minutes, a tau of a few
    minutes is reasonable.
    """

    tau: float  # characteristic (decay) time, seconds
    value: float = 0.0
    timestamp: float = 0.0  # time of last update

    def increment(self, ts: float, count: int = 1) -> None:
        """Add *count* events observed at *ts*."""
        with np.errstate(all="ignore"):
            delta = (_as_float64(ts) - _as_float64(self.timestamp)) / _as_float64(self.tau)
            if delta >= 0:
                self.value = float(_as_float64(self.value) * np.exp(-delta) + count)
                self.timestamp = ts
            else:
                # out of order: discount and add, keep the reference time
                self.value = float(_as_float64(self.value) + np.exp(delta) * count)

    def tick(self, now: float | None = None) -> None:
        """Record a single event at *now* (defaults to ``time.time()``)."""
        self.increment(time.time() if now is None else now, 1)

    def hz(self) -> float:
        """Estimated frequency in events per second.

        Not decayed to the current time; use :meth:`hz_at` for that.
        """
        with np.errstate(all="ignore"):
            return float(_as_float64(self.value) / _as_float64(self.tau))

    def value_at(self, now: float) -> float:
        """Return ``value`` decayed forward to *now* without mutating."""
        with np.errstate(all="ignore"):
            delta = (_as_float64(now) - _as_float64(self.timestamp)) / _as_float64(self.tau)
            if delta <= 0:
                return self.value
            return float(_as_float64(self.value) * np.exp(-delta))

    def hz_at(self, now: float) -> float:
        """Estimated frequency at *now*, assuming no events since ``timestamp``."""
        with np.errstate(all="ignore"):
            return float(_as_float64(self.value_at(now)) / _as_float64(self.tau))

    def next_expected(self, now: float) -> float:
        """Seconds from *now* until the next event is expected.

        Assumes nothing happened between ``timestamp`` and *now* and that the
        mean interval between events is much smaller than ``tau``.  Returns
        ``math.inf`` when ``value <= 0``.
        """
        if self.value <= 0:
            return float(np.inf)
        with np.errstate(all="ignore"):
            delta = (_as_float64(now) - _as_float64(self.timestamp)) / _as_float64(self.tau)
            # tau / (value * exp(-delta))
            return float(np.exp(delta) * _as_float64(self.tau) / _as_float64(self.value))

    def copy(self) -> Counter:
        return replace(self)

    def __str__(self) -> str:
        if self.value == 0:
            return INFINITE_LABEL
        with np.errstate(all="ignore"):
            n, d = _as_float64(self.value), _as_float64(self.tau)
            period = format_duration(float(d / n))
            if n > d:
                return f"{period} ({float(n / d):.2g} Hz)"
        return period

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Counter:
        return cls(
            tau=float(data["tau"]),
            value=float(data.get("value", 0.0)),
            timestamp=float(data.get("timestamp", 0.0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"tau": self.tau, "value": self.value, "timestamp": self.timestamp}


def add(a: Counter, b: Counter) -> Counter:
    """Combine the counters of two independent event streams.

    Only exact when ``a.tau == b.tau``.  Otherwise the result takes the
    smaller tau and *b*'s value is rescaled by the tau ratio.  Neither input
    is modified.
    """
    if a.tau > b.tau:
        a, b = b, a
    result = a.copy()
    with np.errstate(all="ignore"):
        scaled = _as_float64(a.tau) * _as_float64(b.value) / _as_float64(b.tau)
        delta = (_as_float64(b.timestamp) - _as_float64(a.timestamp)) / _as_float64(a.tau)
        if delta >= 0:
            result.value = float(_as_float64(a.value) * np.exp(-delta) + scaled)
            result.timestamp = b.timestamp
        else:
            result.value = float(_as_float64(a.value) + np.exp(delta) * scaled)
    return result
