"""Scheduler statistics from ``/proc/<pid>/schedstat``."""

from __future__ import annotations

import re
from dataclasses import dataclass

from procinfo.errors import IncompleteError, InternalError

_UINT_RE = re.compile(r"\+?[0-9]+")


def _parse_u64(text: str) -> int:
    if not _UINT_RE.fullmatch(text):
        raise InternalError(f"failed to parse {text!r} as an unsigned integer")
    value = int(text)
    if value >= 1 << 64:
        raise InternalError(f"{text!r} is out of range")
    return value


@dataclass(frozen=True)
class Schedstat:
    """Time on the CPU and waiting on a runqueue (nanoseconds), and timeslices run."""

    sum_exec_runtime: int
    run_delay: int
    pcount: int

    @classmethod
    def parse(cls, text: str | bytes) -> Schedstat:
        """Parse the three whitespace-separated values."""
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        tokens = text.split()
        if len(tokens) < 3:
            raise IncompleteError(f"expected 3 values in schedstat, found {len(tokens)}")
        return cls(*(_parse_u64(token) for token in tokens[:3]))