"""Duration helpers for numeric literals found in runner output.

Both helpers are tolerant: an empty or unparseable literal yields a zero
duration instead of raising, so callers must not use them for validation.
Only plain decimal literals with an optional sign are accepted.
"""

from __future__ import annotations

import re
from datetime import timedelta

_DECIMAL_RE = re.compile(r"([+-]?)(\d*)(?:\.(\d*))?", re.ASCII)

# Largest value a signed 64-bit nanosecond count can hold.
_MAX_NANOSECONDS = (1 << 63) - 1

_NS_PER_SECOND = 1_000_000_000


def _to_nanoseconds(text: str, ns_per_unit: int) -> int:
    """Convert a decimal literal in some unit to whole nanoseconds.

    Fractions below one nanosecond are truncated.  Returns ``0`` for
    anything that is not a decimal literal or does not fit in 64 bits.
    """
    m = _DECIMAL_RE.fullmatch(text)
    if m is None:
        return 0
    sign, whole, frac = m.group(1), m.group(2), m.group(3) or ""
    if not whole and not frac:
        return 0
    # Digits past 1e-18 cannot move the result by a nanosecond.
    frac = frac[:18]
    try:
        ns = int(whole or "0") * ns_per_unit
        if frac:
            ns += int(frac) * ns_per_unit // 10 ** len(frac)
    except ValueError:
        return 0
    if ns > _MAX_NANOSECONDS:
        return 0
    return -ns if sign == "-" else ns


def nanoseconds_to_timedelta(ns: int) -> timedelta:
    """Truncate a nanosecond count toward zero to a ``timedelta``."""
    us = abs(ns) // 1000
    return timedelta(microseconds=-us if ns < 0 else us)


def parse_seconds(text: str) -> timedelta:
    """Interpret *text* as a number of seconds, e.g. ``"0.013"``."""
    return nanoseconds_to_timedelta(_to_nanoseconds(text, _NS_PER_SECOND))


def parse_nanoseconds(text: str) -> int:
    """Interpret *text* as a number of nanoseconds, e.g. ``"2873"``.

    Returns whole nanoseconds; a decimal fraction is dropped.
    """
    return _to_nanoseconds(text, 1)
