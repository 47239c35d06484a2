"""System uptime from ``/proc/uptime``."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta

from procinfo.errors import IncompleteError, InternalError


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise InternalError(f"failed to parse {text!r} as a number")
    try:
        return float(text)
    except ValueError:
        raise InternalError(f"failed to parse {text!r} as a number") from None


def _to_duration(seconds: float) -> timedelta:
    """Convert to a duration with centisecond precision, clamping negatives to zero."""
    fract, whole = math.modf(seconds)
    secs = max(int(whole), 0)
    csecs = max(math.floor(fract * 100.0 + 0.5), 0)
    return timedelta(seconds=secs, microseconds=csecs * 10_000)


@dataclass(frozen=True)
class Uptime:
    """Seconds since boot (including suspend) and summed idle time of all cores."""

    uptime: float
    idle: float

    @classmethod
    def parse(cls, text: str | bytes) -> Uptime:
        """Parse the contents of ``/proc/uptime``."""
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        tokens = iter(text.strip().split(" "))
        values = []
        for name in ("uptime", "idle"):
            token = next(tokens, None)
            if token is None:
                raise IncompleteError(f"missing {name} value")
            values.append(_parse_float(token))
        return cls(*values)

    def uptime_duration(self) -> timedelta:
        """The uptime as a duration."""
        return _to_duration(self.uptime)

    def idle_duration(self) -> timedelta:
        """The summed idle time as a duration."""
        return _to_duration(self.idle)