"""Page table entries from ``/proc/<pid>/pagemap``."""

from __future__ import annotations

from dataclasses import dataclass

_U64_MASK = (1 << 64) - 1

MAX_SWAPFILES_SHIFT = 5


def genmask(high: int, low: int) -> int:
    """A 64-bit mask with bits ``low`` through ``high`` (inclusive) set."""
    return ((_U64_MASK - (1 << low) + 1) & (_U64_MASK >> (63 - high))) & _U64_MASK


class _PageEntryFlags(int):
    """A page table entry reduced to the bits its type knows about."""

    _ALL = 0

    def __new__(cls, value: int = 0):
        return super().__new__(cls, int(value) & cls._ALL)

    def __contains__(self, flags: int) -> bool:
        flags = int(flags)
        return int(self) & flags == flags

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self):#x})"


class SwapPageFlags(_PageEntryFlags):
    """Fields and flags of a page table entry for a swapped page."""

    SWAP_TYPE = genmask(MAX_SWAPFILES_SHIFT - 1, 0)
    SWAP_OFFSET = genmask(54, MAX_SWAPFILES_SHIFT)
    SOFT_DIRTY = 1 << 55
    MMAP_EXCLUSIVE = 1 << 56
    FILE = 1 << 61
    SWAP = 1 << 62
    PRESENT = 1 << 63
    _ALL = SWAP_TYPE | SWAP_OFFSET | SOFT_DIRTY | MMAP_EXCLUSIVE | FILE | SWAP | PRESENT

    def swap_type(self) -> int:
        """The swap type recorded in this entry."""
        return int(self) & self.SWAP_TYPE

    def swap_offset(self) -> int:
        """The swap offset recorded in this entry."""
        return (int(self) & self.SWAP_OFFSET) >> MAX_SWAPFILES_SHIFT


@dataclass(frozen=True, order=True)
class Pfn:
    """A page frame number, identifying a physical memory page."""

    value: int

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)


class MemoryPageFlags(_PageEntryFlags):
    """Fields and flags of a page table entry for a page in memory."""

    PFN = genmask(54, 0)
    SOFT_DIRTY = 1 << 55
    MMAP_EXCLUSIVE = 1 << 56
    FILE = 1 << 61
    SWAP = 1 << 62
    PRESENT = 1 << 63
    _ALL = PFN | SOFT_DIRTY | MMAP_EXCLUSIVE | FILE | SWAP | PRESENT

    def page_frame_number(self) -> Pfn:
        """The page frame number recorded in this entry."""
        return Pfn(int(self) & self.PFN)


def parse_page_info(info: int) -> MemoryPageFlags | SwapPageFlags:
    """Decode a raw 64-bit pagemap entry into memory or swap page flags."""
    flags = MemoryPageFlags(info)
    if MemoryPageFlags.SWAP in flags:
        return SwapPageFlags(info)
    return flags