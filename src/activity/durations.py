"""Human-readable rendering of durations given in seconds."""

from __future__ import annotations

import math

_NS_PER_S = 1_000_000_000


def _fixed(v: int, scale: int) -> str:
    """Render ``v / scale`` with trailing fractional zeros removed."""
    whole, part = divmod(v, scale)
    if part == 0:
        return str(whole)
    digits = len(str(scale)) - 1
    return f"{whole}." + str(part).rjust(digits, "0").rstrip("0")


def format_duration(seconds: float) -> str:
    """Format *seconds* like ``1h2m3.5s``, ``250ms`` or ``0s``.

    The value is truncated to whole nanoseconds.  Non-finite input gives
    ``"∞"``, ``"-∞"`` or ``"NaN"``.
    """
    if math.isnan(seconds):
        return "NaN"
    if math.isinf(seconds):
        return "∞" if seconds > 0 else "-∞"

    scaled = seconds * _NS_PER_S
    # finite seconds past ~1.8e299 overflow once scaled to nanoseconds
    if math.isinf(scaled):
        return "∞" if scaled > 0 else "-∞"
    ns = int(scaled)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)

    if u < _NS_PER_S:
        if u < 1_000:
            return f"{sign}{u}ns"
        if u < 1_000_000:
            return sign + _fixed(u, 1_000) + "µs"
        return sign + _fixed(u, 1_000_000) + "ms"

    secs, frac = divmod(u, _NS_PER_S)
    hours, rem = divmod(secs, 3600)
    minutes, s = divmod(rem, 60)
    out = _fixed(s * _NS_PER_S + frac, _NS_PER_S) + "s"
    if hours:
        out = f"{hours}h{minutes}m{out}"
    elif minutes:
        out = f"{minutes}m{out}"
    return sign + out
