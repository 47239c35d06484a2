"""I/O counters, file descriptor targets and memory use of a process."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from procinfo.errors import IncompleteError, InternalError

_UINT_RE = re.compile(r"\+?[0-9]+")


def _parse_u64(text: str) -> int:
    if not _UINT_RE.fullmatch(text):
        raise InternalError(f"failed to parse {text!r} as an unsigned integer")
    value = int(text)
    if value >= 1 << 64:
        raise InternalError(f"{text!r} is out of range")
    return value


_IO_FIELDS = (
    "rchar",
    "wchar",
    "syscr",
    "syscw",
    "read_bytes",
    "write_bytes",
    "cancelled_write_bytes",
)


@dataclass(frozen=True)
class Io:
    """I/O statistics of a process, from ``/proc/<pid>/io``."""

    rchar: int
    wchar: int
    syscr: int
    syscw: int
    read_bytes: int
    write_bytes: int
    cancelled_write_bytes: int

    @classmethod
    def parse(cls, text: str) -> Io:
        """Parse the contents of an ``io`` file."""
        values: dict[str, int] = {}
        for line in text.splitlines():
            if not line or " " not in line:
                continue
            tokens = line.split()
            if len(tokens) < 2:
                raise IncompleteError(f"malformed io line: {line!r}")
            name, value = tokens[0], tokens[1]
            values[name[:-1]] = _parse_u64(value)
        try:
            return cls(**{name: values[name] for name in _IO_FIELDS})
        except KeyError as exc:
            raise IncompleteError(f"missing io field {exc.args[0]!r}") from None


class FDKind(enum.Enum):
    """What an open file descriptor refers to."""

    PATH = "path"
    SOCKET = "socket"
    NET = "net"
    PIPE = "pipe"
    ANON_INODE = "anon_inode"
    MEMFD = "memfd"
    OTHER = "other"


_INODE_KINDS = {"socket": FDKind.SOCKET, "net": FDKind.NET, "pipe": FDKind.PIPE}


def _strip_brackets(text: str) -> str:
    if len(text) <= 2:
        raise IncompleteError(f"malformed inode field {text!r}")
    return text[1:-1]


@dataclass(frozen=True)
class FDTarget:
    """The target of a file descriptor link in ``/proc/<pid>/fd``.

    ``path`` is set for ``PATH``; ``inode`` for ``SOCKET``, ``NET``, ``PIPE``
    and ``OTHER``; ``name`` for ``ANON_INODE``, ``MEMFD`` and the type name of
    ``OTHER``.
    """

    kind: FDKind
    path: PurePosixPath | None = None
    inode: int | None = None
    name: str | None = None

    @classmethod
    def parse(cls, text: str) -> FDTarget:
        """Parse the text a descriptor link points to."""
        if not text.startswith("/") and ":" in text:
            parts = text.split(":")
            fd_type, rest = parts[0], parts[1]
            if fd_type == "anon_inode":
                return cls(FDKind.ANON_INODE, name=rest)
            if fd_type == "":
                raise IncompleteError(f"missing descriptor type in {text!r}")
            inode = _parse_u64(_strip_brackets(rest))
            kind = _INODE_KINDS.get(fd_type)
            if kind is not None:
                return cls(kind, inode=inode)
            return cls(FDKind.OTHER, inode=inode, name=fd_type)
        if text.startswith("/memfd:"):
            return cls(FDKind.MEMFD, name=text[len("/memfd:"):])
        return cls(FDKind.PATH, path=PurePosixPath(text))


@dataclass(frozen=True)
class StatM:
    """Memory usage in pages, from ``/proc/<pid>/statm``."""

    size: int
    resident: int
    shared: int
    text: int
    lib: int
    data: int
    dt: int

    @classmethod
    def parse(cls, text: str) -> StatM:
        """Parse the seven whitespace-separated page counts."""
        tokens = text.split()
        if len(tokens) < 7:
            raise IncompleteError(f"expected 7 values in statm, found {len(tokens)}")
        return cls(*(_parse_u64(token) for token in tokens[:7]))