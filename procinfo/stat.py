"""Process status from ``/proc/<pid>/stat``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterator

from procinfo.errors import IncompleteError, InternalError
from procinfo.flags import ProcState, StatFlags

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")

_ALL_STAT_FLAGS = 0
for _flag in StatFlags:
    _ALL_STAT_FLAGS |= int(_flag)

# (name, bits, signed) for the fields after the state letter, in file order.
_REQUIRED = (
    ("ppid", 32, True),
    ("pgrp", 32, True),
    ("session", 32, True),
    ("tty_nr", 32, True),
    ("tpgid", 32, True),
    ("flags", 32, False),
    ("minflt", 64, False),
    ("cminflt", 64, False),
    ("majflt", 64, False),
    ("cmajflt", 64, False),
    ("utime", 64, False),
    ("stime", 64, False),
    ("cutime", 64, True),
    ("cstime", 64, True),
    ("priority", 64, True),
    ("nice", 64, True),
    ("num_threads", 64, True),
    ("itrealvalue", 64, True),
    ("starttime", 64, False),
    ("vsize", 64, False),
    ("rss", 64, False),
    ("rsslim", 64, False),
    ("startcode", 64, False),
    ("endcode", 64, False),
    ("startstack", 64, False),
    ("kstkesp", 64, False),
    ("kstkeip", 64, False),
    ("signal", 64, False),
    ("blocked", 64, False),
    ("sigignore", 64, False),
    ("sigcatch", 64, False),
    ("wchan", 64, False),
    ("nswap", 64, False),
    ("cnswap", 64, False),
)

# Fields added by later kernels; absent ones are None.
_OPTIONAL = (
    ("exit_signal", 32, True),
    ("processor", 32, True),
    ("rt_priority", 32, False),
    ("policy", 32, False),
    ("delayacct_blkio_ticks", 64, False),
    ("guest_time", 64, False),
    ("cguest_time", 64, True),
    ("start_data", 64, False),
    ("end_data", 64, False),
    ("start_brk", 64, False),
    ("arg_start", 64, False),
    ("arg_end", 64, False),
    ("env_start", 64, False),
    ("env_end", 64, False),
    ("exit_code", 32, True),
)


def _parse_int(text: str, bits: int, signed: bool) -> int:
    pattern = _SIGNED_RE if signed else _UNSIGNED_RE
    if not pattern.fullmatch(text):
        raise InternalError(f"failed to parse {text!r} as an integer")
    value = int(text)
    low, high = (-(1 << (bits - 1)), 1 << (bits - 1)) if signed else (0, 1 << bits)
    if not low <= value < high:
        raise InternalError(f"{text!r} is out of range")
    return value


@dataclass(frozen=True)
class Stat:
    """Status information about a process; optional fields are ``None`` on older kernels."""

    pid: int
    comm: str
    state: str
    ppid: int
    pgrp: int
    session: int
    tty_nr: int
    tpgid: int
    flags: int
    minflt: int
    cminflt: int
    majflt: int
    cmajflt: int
    utime: int
    stime: int
    cutime: int
    cstime: int
    priority: int
    nice: int
    num_threads: int
    itrealvalue: int
    starttime: int
    vsize: int
    rss: int
    rsslim: int
    startcode: int
    endcode: int
    startstack: int
    kstkesp: int
    kstkeip: int
    signal: int
    blocked: int
    sigignore: int
    sigcatch: int
    wchan: int
    nswap: int
    cnswap: int
    exit_signal: int | None = None
    processor: int | None = None
    rt_priority: int | None = None
    policy: int | None = None
    delayacct_blkio_ticks: int | None = None
    guest_time: int | None = None
    cguest_time: int | None = None
    start_data: int | None = None
    end_data: int | None = None
    start_brk: int | None = None
    arg_start: int | None = None
    arg_end: int | None = None
    env_start: int | None = None
    env_end: int | None = None
    exit_code: int | None = None

    @classmethod
    def parse(cls, text: str | bytes) -> Stat:
        """Parse the single line of a ``stat`` file."""
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        buf = text.strip()

        start_paren = buf.find("(")
        end_paren = buf.rfind(")")
        if start_paren < 1 or end_paren < start_paren:
            raise IncompleteError(f"missing command name in stat line {buf!r}")
        pid = _parse_int(buf[: start_paren - 1], 32, True)
        comm = buf[start_paren + 1 : end_paren]
        rest = buf[end_paren + 2 :]
        if not rest:
            raise IncompleteError("missing process state")

        tokens: Iterator[str] = iter(rest.split(" "))
        state_token = next(tokens)
        if not state_token:
            raise IncompleteError("missing process state")

        values: dict[str, int | None] = {}
        for name, bits, signed in _REQUIRED:
            token = next(tokens, None)
            if token is None:
                raise IncompleteError(f"missing stat field {name!r}")
            values[name] = _parse_int(token, bits, signed)
        for name, bits, signed in _OPTIONAL:
            token = next(tokens, None)
            values[name] = None if token is None else _parse_int(token, bits, signed)

        return cls(pid=pid, comm=comm, state=state_token[0], **values)

    def proc_state(self) -> ProcState:
        """The process state as an enum member."""
        state = ProcState.from_char(self.state)
        if state is None:
            raise InternalError(f"{self.state!r} is not a recognized process state")
        return state

    def tty_device(self) -> tuple[int, int]:
        """The controlling terminal decoded into ``(major, minor)``."""
        major = (self.tty_nr & 0xFFF00) >> 8
        minor = (self.tty_nr & 0x000FF) | ((self.tty_nr >> 12) & 0xFFF00)
        return major, minor

    def stat_flags(self) -> StatFlags:
        """The kernel flags word as a bit field."""
        if self.flags & ~_ALL_STAT_FLAGS:
            raise InternalError(f"Can't construct flags bitfield from {self.flags!r}")
        return StatFlags(self.flags)

    def start_datetime(self, boot_time: datetime, ticks_per_second: int) -> datetime:
        """The time the process started, given the boot time and clock tick rate."""
        seconds_since_boot = self.starttime / ticks_per_second
        return boot_time + timedelta(milliseconds=int(seconds_since_boot * 1000.0))

    def rss_bytes(self, page_size: int) -> int:
        """The resident set size in bytes."""
        return self.rss * page_size