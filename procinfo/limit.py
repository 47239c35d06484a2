"""Resource limits of a process, from ``/proc/<pid>/limits``."""

from __future__ import annotations

import re
from dataclasses import dataclass

from procinfo.errors import IncompleteError, InternalError

_UINT_RE = re.compile(r"\+?[0-9]+")

_UNITLESS = ("Max nice priority", "Max realtime priority")

_LABELS = {
    "max_cpu_time": "Max cpu time",
    "max_file_size": "Max file size",
    "max_data_size": "Max data size",
    "max_stack_size": "Max stack size",
    "max_core_file_size": "Max core file size",
    "max_resident_set": "Max resident set",
    "max_processes": "Max processes",
    "max_open_files": "Max open files",
    "max_locked_memory": "Max locked memory",
    "max_address_space": "Max address space",
    "max_file_locks": "Max file locks",
    "max_pending_signals": "Max pending signals",
    "max_msgqueue_size": "Max msgqueue size",
    "max_nice_priority": "Max nice priority",
    "max_realtime_priority": "Max realtime priority",
    "max_realtime_timeout": "Max realtime timeout",
}


def parse_limit_value(text: str) -> int | None:
    """Parse a limit value; ``unlimited`` gives ``None``."""
    if text == "unlimited":
        return None
    if not _UINT_RE.fullmatch(text):
        raise InternalError(f"failed to parse {text!r} as an unsigned integer")
    value = int(text)
    if value >= 1 << 64:
        raise InternalError(f"{text!r} is out of range")
    return value


@dataclass(frozen=True)
class Limit:
    """A soft and hard limit; ``None`` means unlimited."""

    soft_limit: int | None
    hard_limit: int | None


@dataclass(frozen=True)
class Limits:
    """All resource limits of a process; see ``getrlimit(2)`` for their meaning."""

    max_cpu_time: Limit
    max_file_size: Limit
    max_data_size: Limit
    max_stack_size: Limit
    max_core_file_size: Limit
    max_resident_set: Limit
    max_processes: Limit
    max_open_files: Limit
    max_locked_memory: Limit
    max_address_space: Limit
    max_file_locks: Limit
    max_pending_signals: Limit
    max_msgqueue_size: Limit
    max_nice_priority: Limit
    max_realtime_priority: Limit
    max_realtime_timeout: Limit

    @classmethod
    def parse(cls, text: str) -> Limits:
        """Parse the contents of a ``limits`` file."""
        raw: dict[str, tuple[str, str]] = {}
        for line in text.splitlines():
            line = line.strip()
            if line.startswith("Limit"):
                continue
            tokens = line.split()
            if line.startswith(_UNITLESS):
                if len(tokens) < 2:
                    raise IncompleteError(f"malformed limit line: {line!r}")
                *name, soft, hard = tokens
            else:
                if len(tokens) < 3:
                    raise IncompleteError(f"malformed limit line: {line!r}")
                *name, soft, hard, _units = tokens
            raw[" ".join(name)] = (soft, hard)

        values = {}
        for attr, label in _LABELS.items():
            try:
                soft, hard = raw[label]
            except KeyError:
                raise IncompleteError(f"missing limit {label!r}") from None
            values[attr] = Limit(parse_limit_value(soft), parse_limit_value(hard))
        return cls(**values)