"""NFS statistics blocks from ``/proc/<pid>/mountstats``."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable

from procinfo.errors import IncompleteError, InternalError
from procinfo.nfscounters import NFSByteCounter, NFSEventCounter, NFSOperationStat


class NFSServerCaps(enum.IntFlag):
    """NFS server capabilities, as found in the ``caps=`` value."""

    NFS_CAP_READDIRPLUS = 1
    NFS_CAP_HARDLINKS = 1 << 1
    NFS_CAP_SYMLINKS = 1 << 2
    NFS_CAP_ACLS = 1 << 3
    NFS_CAP_ATOMIC_OPEN = 1 << 4
    NFS_CAP_LGOPEN = 1 << 5
    NFS_CAP_FILEID = 1 << 6
    NFS_CAP_MODE = 1 << 7
    NFS_CAP_NLINK = 1 << 8
    NFS_CAP_OWNER = 1 << 9
    NFS_CAP_OWNER_GROUP = 1 << 10
    NFS_CAP_ATIME = 1 << 11
    NFS_CAP_CTIME = 1 << 12
    NFS_CAP_MTIME = 1 << 13
    NFS_CAP_POSIX_LOCK = 1 << 14
    NFS_CAP_UIDGID_NOMAP = 1 << 15
    NFS_CAP_STATEID_NFSV41 = 1 << 16
    NFS_CAP_ATOMIC_OPEN_V1 = 1 << 17
    NFS_CAP_SECURITY_LABEL = 1 << 18
    NFS_CAP_SEEK = 1 << 19
    NFS_CAP_ALLOCATE = 1 << 20
    NFS_CAP_DEALLOCATE = 1 << 21
    NFS_CAP_LAYOUTSTATS = 1 << 22
    NFS_CAP_CLONE = 1 << 23
    NFS_CAP_COPY = 1 << 24
    NFS_CAP_OFFLOAD_CANCEL = 1 << 25


_ALL_CAPS = 0
for _cap in NFSServerCaps:
    _ALL_CAPS |= int(_cap)


def _parse_uint(text: str, *, radix: int, bits: int) -> int:
    pattern = r"\+?[0-9a-fA-F]+" if radix == 16 else r"\+?[0-9]+"
    if not re.fullmatch(pattern, text):
        raise InternalError(f"failed to parse {text!r} as an unsigned integer")
    value = int(text, radix)
    if value >= 1 << bits:
        raise InternalError(f"{text!r} is out of range")
    return value


def _split_list(text: str) -> list[str]:
    return text.strip().split(",")


@dataclass
class MountNFSStatistics:
    """Statistics that NFS mounts add to a ``mountstats`` entry."""

    version: str
    opts: list[str]
    age: timedelta
    caps: list[str]
    sec: list[str]
    events: NFSEventCounter
    bytes: NFSByteCounter
    per_op_stats: dict[str, NFSOperationStat] = field(default_factory=dict)

    @classmethod
    def from_lines(cls, lines: Iterable[str], version: str) -> MountNFSStatistics:
        """Read a statistics block from ``lines`` up to and including a blank line."""
        parsing_per_op = False
        opts = age = caps = sec = byte_counter = events = None
        per_op: dict[str, NFSOperationStat] = {}

        for raw in lines:
            line = raw.strip()
            if not line:
                break
            if parsing_per_op:
                parts = line.split(":")
                if len(parts) < 2:
                    raise IncompleteError(f"malformed per-op statistics line: {line!r}")
                per_op[parts[0]] = NFSOperationStat.parse(parts[1])
                continue
            if line.startswith("opts:"):
                opts = _split_list(line[len("opts:"):])
            elif line.startswith("age:"):
                seconds = _parse_uint(line[len("age:"):].strip(), radix=10, bits=64)
                try:
                    age = timedelta(seconds=seconds)
                except OverflowError:
                    raise InternalError(f"age of {seconds} s is out of range") from None
            elif line.startswith("caps:"):
                caps = _split_list(line[len("caps:"):])
            elif line.startswith("sec:"):
                sec = _split_list(line[len("sec:"):])
            elif line.startswith("bytes:"):
                byte_counter = NFSByteCounter.parse(line[len("bytes:"):].strip())
            elif line.startswith("events:"):
                events = NFSEventCounter.parse(line[len("events:"):].strip())
            if line == "per-op statistics":
                parsing_per_op = True

        found = {
            "opts field": opts,
            "age field": age,
            "caps field": caps,
            "sec field": sec,
            "events section": events,
            "bytes section": byte_counter,
        }
        for what, value in found.items():
            if value is None:
                raise IncompleteError(f"Failed to find {what} in nfs stats")

        return cls(
            version=version,
            opts=opts,
            age=age,
            caps=caps,
            sec=sec,
            events=events,
            bytes=byte_counter,
            per_op_stats=per_op,
        )

    def server_caps(self) -> NFSServerCaps | None:
        """The server capabilities from the ``caps=`` entry, if present and all known."""
        for data in self.caps:
            if data.startswith("caps=0x"):
                value = _parse_uint(data[len("caps=0x"):], radix=16, bits=32)
                if value & ~_ALL_CAPS:
                    return None
                return NFSServerCaps(value)
        return None