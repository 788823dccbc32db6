"""Retry interval between poll attempts."""

import re
import threading
from dataclasses import dataclass
from typing import Optional


class IntervalError(ValueError):
    """Raised when a duration string cannot be parsed."""
    pass


# Seconds per unit, humantime spellings
UNIT_SECONDS = {
    "nsec": 1e-9, "ns": 1e-9,
    "usec": 1e-6, "us": 1e-6,
    "msec": 1e-3, "ms": 1e-3,
    "seconds": 1.0, "second": 1.0, "secs": 1.0, "sec": 1.0, "s": 1.0,
    "minutes": 60.0, "minute": 60.0, "mins": 60.0, "min": 60.0, "m": 60.0,
    "hours": 3600.0, "hour": 3600.0, "hrs": 3600.0, "hr": 3600.0, "h": 3600.0,
    "days": 86400.0, "day": 86400.0, "d": 86400.0,
    "weeks": 604800.0, "week": 604800.0, "w": 604800.0,
    "months": 2630016.0, "month": 2630016.0, "M": 2630016.0,
    "years": 31557600.0, "year": 31557600.0, "y": 31557600.0,
}

_PIECE_RE = re.compile(r"\s*(\d+(?:\.\d+)?)\s*([A-Za-z]+)")

# Longest timeout the interpreter accepts for blocking calls
MAX_DELAY = threading.TIMEOUT_MAX


def parse_duration(text: str) -> float:
    """
    Parse a human-readable duration into seconds.

    Accepts one or more <number><unit> pieces, e.g. "5s", "500ms",
    "1m 30s", "1h30m".

    Raises:
        IntervalError: If the string is empty, has no unit, or uses an
            unknown unit.
    """
    stripped = text.strip() if text else ""
    if not stripped:
        raise IntervalError("Duration must not be empty")

    total = 0.0
    pos = 0
    while pos < len(stripped):
        match = _PIECE_RE.match(stripped, pos)
        if not match:
            raise IntervalError(f"Invalid duration: {text!r}")
        number, unit = match.groups()
        if unit not in UNIT_SECONDS:
            raise IntervalError(f"Unknown time unit {unit!r} in duration {text!r}")
        total += float(number) * UNIT_SECONDS[unit]
        pos = match.end()

    return total


@dataclass(frozen=True)
class Interval:
    """
    Delay policy between attempts.

    delay is None for an immediate retry, otherwise the number of
    seconds to sleep before retrying.
    """

    delay: Optional[float] = None

    @property
    def immediate(self) -> bool:
        return self.delay is None

    @classmethod
    def from_duration(cls, seconds: float) -> "Interval":
        if seconds < 0:
            raise IntervalError(f"Duration must not be negative: {seconds}")
        if seconds > MAX_DELAY:
            raise IntervalError(f"Duration too long: {seconds:g}s (maximum {MAX_DELAY:g}s)")
        if seconds == 0:
            return IMMEDIATE
        return cls(delay=seconds)

    @classmethod
    def parse(cls, text: str) -> "Interval":
        return cls.from_duration(parse_duration(text))

    def __str__(self) -> str:
        if self.immediate:
            return "immediate"
        return f"{self.delay:g}s"


IMMEDIATE = Interval()
