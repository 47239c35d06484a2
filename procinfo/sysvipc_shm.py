"""System V shared memory segments from ``/proc/sysvipc/shm``."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator

from procinfo.errors import IncompleteError, InternalError

# (name, bits, signed) for each column, in file order.
_COLUMNS = (
    ("key", 32, True),
    ("shmid", 64, False),
    ("perms", 16, False),
    ("size", 64, False),
    ("cpid", 32, True),
    ("lpid", 32, True),
    ("nattch", 32, False),
    ("uid", 16, False),
    ("gid", 16, False),
    ("cuid", 16, False),
    ("cgid", 16, False),
    ("atime", 64, False),
    ("dtime", 64, False),
    ("ctime", 64, False),
    ("rss", 64, False),
    ("swap", 64, False),
)


def _parse_int(text: str, bits: int, signed: bool) -> int:
    pattern = r"[+-]?[0-9]+" if signed else r"\+?[0-9]+"
    if not re.fullmatch(pattern, text):
        raise InternalError(f"failed to parse {text!r} as an integer")
    value = int(text)
    low, high = (-(1 << (bits - 1)), 1 << (bits - 1)) if signed else (0, 1 << bits)
    if not low <= value < high:
        raise InternalError(f"{text!r} is out of range")
    return value


@dataclass(frozen=True)
class Shm:
    """A shared memory segment.

    ``key`` matches the key of a ``VSYS`` memory mapping path, and ``shmid``
    the inode of that mapping.  Times are seconds since the epoch.
    """

    key: int
    shmid: int
    perms: int
    size: int
    cpid: int
    lpid: int
    nattch: int
    uid: int
    gid: int
    cuid: int
    cgid: int
    atime: int
    dtime: int
    ctime: int
    rss: int
    swap: int


@dataclass
class SharedMemorySegments:
    """All shared memory segments listed in ``/proc/sysvipc/shm``."""

    segments: list[Shm] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> SharedMemorySegments:
        """Parse the file contents; the first line is a header and is skipped."""
        segments = []
        for line in text.splitlines()[1:]:
            tokens = iter(line.split())
            values = {}
            for name, bits, signed in _COLUMNS:
                token = next(tokens, None)
                if token is None:
                    raise IncompleteError(f"missing {name!r} in shm line {line!r}")
                values[name] = _parse_int(token, bits, signed)
            segments.append(Shm(**values))
        return cls(segments)

    def __iter__(self) -> Iterator[Shm]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int) -> Shm:
        return self.segments[index]