"""Memory mappings from ``/proc/<pid>/maps``, ``smaps`` and ``smaps_rollup``."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from functools import reduce
from operator import or_
from pathlib import PurePosixPath
from typing import Iterator

from procinfo.errors import IncompleteError, InternalError, ProcError
from procinfo.flags import MMPermissions, VmFlags

_DIGITS = {8: "0-7", 10: "0-9", 16: "0-9a-fA-F"}


def _parse_int(text: str, *, radix: int = 10, bits: int = 64, signed: bool = False) -> int:
    """Parse an integer strictly, within the range of a fixed-width type."""
    sign = "[+-]?" if signed else r"\+?"
    if not re.fullmatch(f"{sign}[{_DIGITS[radix]}]+", text):
        raise InternalError(f"failed to parse {text!r} as an integer")
    value = int(text, radix)
    if signed:
        low, high = -(1 << (bits - 1)), 1 << (bits - 1)
    else:
        low, high = 0, 1 << bits
    if not low <= value < high:
        raise InternalError(f"{text!r} is out of range")
    return value


def _parse_pair(text: str, sep: str, *, radix: int, bits: int, signed: bool) -> tuple[int, int]:
    first, found, second = text.partition(sep)
    if not found:
        raise IncompleteError(f"expected two values separated by {sep!r} in {text!r}")
    return (
        _parse_int(first, radix=radix, bits=bits, signed=signed),
        _parse_int(second, radix=radix, bits=bits, signed=signed),
    )


class MMapKind(enum.Enum):
    """What backs a memory mapping."""

    PATH = "path"
    HEAP = "heap"
    STACK = "stack"
    TSTACK = "tstack"
    VDSO = "vdso"
    VVAR = "vvar"
    VSYSCALL = "vsyscall"
    ROLLUP = "rollup"
    ANONYMOUS = "anonymous"
    VSYS = "vsys"
    OTHER = "other"


_PSEUDO_PATHS = {
    "": MMapKind.ANONYMOUS,
    "[heap]": MMapKind.HEAP,
    "[stack]": MMapKind.STACK,
    "[vdso]": MMapKind.VDSO,
    "[vvar]": MMapKind.VVAR,
    "[vsyscall]": MMapKind.VSYSCALL,
    "[rollup]": MMapKind.ROLLUP,
}


@dataclass(frozen=True)
class MMapPath:
    """The pathname column of a mapping.

    ``value`` holds the backing file for ``PATH``, the thread ID for ``TSTACK``,
    the shared memory key for ``VSYS``, the pseudo-path name for ``OTHER``, and
    ``None`` otherwise.
    """

    kind: MMapKind
    value: PurePosixPath | int | str | None = None

    @classmethod
    def parse(cls, text: str) -> MMapPath:
        """Parse the pathname column of a maps line."""
        x = text.strip()
        kind = _PSEUDO_PATHS.get(x)
        if kind is not None:
            return cls(kind)
        if x.startswith("[stack:"):
            parts = x[1:-1].split(":")
            if len(parts) < 2:
                raise IncompleteError(f"missing thread id in {x!r}")
            return cls(MMapKind.TSTACK, _parse_int(parts[1], bits=32))
        if x.startswith("[") and x.endswith("]"):
            return cls(MMapKind.OTHER, x[1:-1])
        if x.startswith("/SYSV"):
            digits = x[5:13]
            if len(digits) != 8:
                raise InternalError(f"malformed System V segment name {x!r}")
            key = _parse_int(digits, radix=16, bits=32)
            if key >= 1 << 31:
                key -= 1 << 32
            return cls(MMapKind.VSYS, key)
        return cls(MMapKind.PATH, PurePosixPath(x))


@dataclass
class MMapExtension:
    """Extra per-mapping information found in ``smaps``.

    Values in ``map`` that carry a size suffix are converted to bytes.
    """

    map: dict[str, int] = field(default_factory=dict)
    vm_flags: VmFlags = VmFlags.NONE

    def is_empty(self) -> bool:
        """Whether no extension information is present."""
        return not self.map and self.vm_flags == VmFlags.NONE


@dataclass
class MemoryMap:
    """One mapping from a ``maps`` or ``smaps`` file."""

    address: tuple[int, int]
    perms: MMPermissions
    offset: int
    dev: tuple[int, int]
    inode: int
    pathname: MMapPath
    extension: MMapExtension = field(default_factory=MMapExtension)

    @classmethod
    def parse_line(cls, line: str) -> MemoryMap:
        """Parse the header line of a mapping."""
        parts = line.split(" ", 5)
        if len(parts) < 6:
            raise IncompleteError(f"incomplete memory map line: {line!r}")
        address, perms, offset, dev, inode, path = parts
        return cls(
            address=_parse_pair(address, "-", radix=16, bits=64, signed=False),
            perms=MMPermissions.parse(perms),
            offset=_parse_int(offset, radix=16),
            dev=_parse_pair(dev, ":", radix=16, bits=32, signed=True),
            inode=_parse_int(inode),
            pathname=MMapPath.parse(path),
        )

    def _add_attribute(self, line: str) -> None:
        if line.startswith("VmFlags"):
            self.extension.vm_flags = reduce(
                or_, (VmFlags.from_flag(f) for f in line.split()[1:]), VmFlags.NONE
            )
            return
        parts = line.split()
        if len(parts) < 2:
            return
        key, value = parts[0], parts[1]
        multiplier = 1024 if len(parts) > 2 else 1
        if not re.fullmatch(r"\+?[0-9]+", value) or int(value) >= 1 << 64:
            raise ProcError("Value in `Key: Value` pair was not actually a number")
        self.extension.map[key.rstrip(":")] = int(value) * multiplier


@dataclass
class MemoryMaps:
    """All mappings of a ``maps``, ``smaps`` or ``smaps_rollup`` file."""

    maps: list[MemoryMap] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> MemoryMaps:
        """Parse the whole file contents."""
        maps: list[MemoryMap] = []
        for line in text.splitlines():
            if line[:1].isascii() and line[:1].isupper():
                if not maps:
                    raise IncompleteError("attribute line before any mapping")
                maps[-1]._add_attribute(line)
            else:
                maps.append(MemoryMap.parse_line(line))
        return cls(maps)

    def __iter__(self) -> Iterator[MemoryMap]:
        return iter(self.maps)

    def __len__(self) -> int:
        return len(self.maps)

    def __getitem__(self, index: int) -> MemoryMap:
        return self.maps[index]


@dataclass
class SmapsRollup:
    """Summed memory statistics from ``/proc/<pid>/smaps_rollup``."""

    memory_map_rollup: MemoryMaps

    @classmethod
    def parse(cls, text: str) -> SmapsRollup:
        """Parse the whole file contents."""
        return cls(MemoryMaps.parse(text))