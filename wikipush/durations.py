"""
Duration parsing and formatting for the -pause flag.

Accepts Go-style duration notation ("500ms", "1.5s", "1m30s") plus bare
numbers of seconds.
"""

import math
import re

UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")

NS_PER_US = 1_000
NS_PER_MS = 1_000_000
NS_PER_S = 1_000_000_000


def parse_duration(text: str) -> float:
    """
    Parse a duration string into seconds.

    A bare number is read as seconds. Raises ValueError for anything else
    that is not a sequence of <number><unit> components, and for negative values.
    """
    value = text.strip()
    if not value:
        raise ValueError("empty duration")

    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds) or seconds < 0:
            raise ValueError(f"invalid duration: {text!r}")
        return seconds

    total = 0.0
    pos = 0
    for match in _COMPONENT.finditer(value):
        if match.start() != pos:
            break
        total += float(match.group(1)) * UNITS[match.group(2)]
        pos = match.end()

    if pos != len(value):
        raise ValueError(f"invalid duration: {text!r}")
    return total


def _with_fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(frac).zfill(width).rstrip('0')}"


def format_duration(seconds: float) -> str:
    """Format seconds the way Go prints a time.Duration (e.g. "1m15s", "500ms")."""
    ns = round(seconds * NS_PER_S)
    if ns == 0:
        return "0s"

    sign = "-" if ns < 0 else ""
    ns = abs(ns)

    if ns < NS_PER_US:
        return f"{sign}{ns}ns"
    if ns < NS_PER_MS:
        return f"{sign}{_with_fraction(ns, NS_PER_US)}µs"
    if ns < NS_PER_S:
        return f"{sign}{_with_fraction(ns, NS_PER_MS)}ms"

    hours, rest = divmod(ns, 3600 * NS_PER_S)
    minutes, rest = divmod(rest, 60 * NS_PER_S)

    text = sign
    if hours:
        text += f"{hours}h"
    if hours or minutes:
        text += f"{minutes}m"
    return text + _with_fraction(rest, NS_PER_S) + "s"
