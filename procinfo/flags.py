"""Bit flags and states found in per-process ``/proc`` files."""

from __future__ import annotations

import enum
from functools import reduce
from operator import or_

from procinfo.errors import IncompleteError, InternalError


class StatFlags(enum.IntFlag):
    """Kernel flags word of a process, as found in ``/proc/<pid>/stat``."""

    PF_IDLE = 0x0000_0002
    PF_EXITING = 0x0000_0004
    PF_EXITPIDONE = 0x0000_0008
    PF_VCPU = 0x0000_0010
    PF_WQ_WORKER = 0x0000_0020
    PF_FORKNOEXEC = 0x0000_0040
    PF_MCE_PROCESS = 0x0000_0080
    PF_SUPERPRIV = 0x0000_0100
    PF_DUMPCORE = 0x0000_0200
    PF_SIGNALED = 0x0000_0400
    PF_MEMALLOC = 0x0000_0800
    PF_NPROC_EXCEEDED = 0x0000_1000
    PF_USED_MATH = 0x0000_2000
    PF_USED_ASYNC = 0x0000_4000
    PF_NOFREEZE = 0x0000_8000
    PF_FROZEN = 0x0001_0000
    PF_KSWAPD = 0x0002_0000
    PF_MEMALLOC_NOFS = 0x0004_0000
    PF_MEMALLOC_NOIO = 0x0008_0000
    PF_LESS_THROTTLE = 0x0010_0000
    PF_KTHREAD = 0x0020_0000
    PF_RANDOMIZE = 0x0040_0000
    PF_SWAPWRITE = 0x0080_0000
    PF_MEMSTALL = 0x0100_0000
    PF_UMH = 0x0200_0000
    PF_NO_SETAFFINITY = 0x0400_0000
    PF_MCE_EARLY = 0x0800_0000
    PF_MEMALLOC_NOCMA = 0x1000_0000
    PF_MUTEX_TESTER = 0x2000_0000
    PF_FREEZER_SKIP = 0x4000_0000
    PF_SUSPEND_TASK = 0x8000_0000


class CoredumpFlags(enum.IntFlag):
    """Mapping types written to a core dump (``/proc/<pid>/coredump_filter``)."""

    ANONYMOUS_PRIVATE_MAPPINGS = 0x01
    ANONYMOUS_SHARED_MAPPINGS = 0x02
    FILEBACKED_PRIVATE_MAPPINGS = 0x04
    FILEBACKED_SHARED_MAPPINGS = 0x08
    ELF_HEADERS = 0x10
    PROVATE_HUGEPAGES = 0x20
    SHARED_HUGEPAGES = 0x40
    PRIVATE_DAX_PAGES = 0x80
    SHARED_DAX_PAGES = 0x100


class MMPermissions(enum.IntFlag):
    """Permissions a process has on a memory mapping.

    ``SHARED`` and ``PRIVATE`` are mutually exclusive in what the kernel reports.
    """

    NONE = 0
    READ = 1 << 0
    WRITE = 1 << 1
    EXECUTE = 1 << 2
    SHARED = 1 << 3
    PRIVATE = 1 << 4

    @classmethod
    def parse(cls, text: str) -> MMPermissions:
        """Parse a permission string such as ``rw-p``; unknown characters are ignored."""
        return reduce(
            or_,
            (_PERMISSION_CHARS.get(c, cls.NONE) for c in text),
            cls.NONE,
        )

    def as_str(self) -> str:
        """Render as the four-character form used in ``/proc/<pid>/maps``."""
        read = "r" if MMPermissions.READ in self else "-"
        write = "w" if MMPermissions.WRITE in self else "-"
        execute = "x" if MMPermissions.EXECUTE in self else "-"
        if MMPermissions.SHARED in self:
            sharing = "s"
        elif MMPermissions.PRIVATE in self:
            sharing = "p"
        else:
            sharing = "-"
        return read + write + execute + sharing


_PERMISSION_CHARS = {
    "r": MMPermissions.READ,
    "w": MMPermissions.WRITE,
    "x": MMPermissions.EXECUTE,
    "s": MMPermissions.SHARED,
    "p": MMPermissions.PRIVATE,
}


class VmFlags(enum.IntFlag):
    """Kernel flags of a virtual memory area, as listed in ``/proc/<pid>/smaps``."""

    NONE = 0
    RD = 1 << 0
    WR = 1 << 1
    EX = 1 << 2
    SH = 1 << 3
    MR = 1 << 4
    MW = 1 << 5
    ME = 1 << 6
    MS = 1 << 7
    GD = 1 << 8
    PF = 1 << 9
    DW = 1 << 10
    LO = 1 << 11
    IO = 1 << 12
    SR = 1 << 13
    RR = 1 << 14
    DC = 1 << 15
    DE = 1 << 16
    AC = 1 << 17
    NR = 1 << 18
    HT = 1 << 19
    SF = 1 << 20
    NL = 1 << 21
    AR = 1 << 22
    WF = 1 << 23
    DD = 1 << 24
    SD = 1 << 25
    MM = 1 << 26
    HG = 1 << 27
    NH = 1 << 28
    MG = 1 << 29
    UM = 1 << 30
    UW = 1 << 31

    @classmethod
    def from_flag(cls, flag: str) -> VmFlags:
        """Map a two-letter lower-case code to its flag; unknown codes give ``NONE``."""
        if len(flag) != 2:
            return cls.NONE
        return _VM_FLAG_CODES.get(flag, cls.NONE)


_VM_FLAG_CODES = {
    name.lower(): member
    for name, member in VmFlags.__members__.items()
    if name != "NONE"
}


class ProcState(enum.Enum):
    """The scheduling state of a process."""

    RUNNING = "R"
    SLEEPING = "S"
    WAITING = "D"
    ZOMBIE = "Z"
    STOPPED = "T"
    TRACING = "t"
    DEAD = "X"
    WAKEKILL = "K"
    WAKING = "W"
    PARKED = "P"
    IDLE = "I"

    @classmethod
    def from_char(cls, c: str) -> ProcState | None:
        """The state for a state letter, or ``None`` if it is not recognised."""
        if c == "x":
            return cls.DEAD
        try:
            return cls(c)
        except ValueError:
            return None

    @classmethod
    def parse(cls, text: str) -> ProcState:
        """Parse the state from the first character of ``text``."""
        if not text:
            raise IncompleteError("empty string")
        state = cls.from_char(text[0])
        if state is None:
            raise InternalError("failed to convert")
        return state