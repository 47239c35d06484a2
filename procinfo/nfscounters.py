"""Counters from the NFS sections of ``/proc/<pid>/mountstats``."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from datetime import timedelta

from procinfo.errors import IncompleteError, InternalError

_UINT_RE = re.compile(r"\+?[0-9]+")


def _parse_u64(text: str) -> int:
    if not _UINT_RE.fullmatch(text):
        raise InternalError(f"failed to parse {text!r} as an unsigned integer")
    value = int(text)
    if value >= 1 << 64:
        raise InternalError(f"{text!r} is out of range")
    return value


def _parse_counters(text: str, count: int, what: str) -> list[int]:
    tokens = text.split()
    if len(tokens) < count:
        raise IncompleteError(f"expected {count} values in {what}, found {len(tokens)}")
    return [_parse_u64(token) for token in tokens[:count]]


def _millis(value: int) -> timedelta:
    try:
        return timedelta(milliseconds=value)
    except OverflowError:
        raise InternalError(f"duration of {value} ms is out of range") from None


@dataclass(frozen=True)
class NFSEventCounter:
    """The ``events`` section of NFS mount statistics."""

    inode_revalidate: int
    deny_try_revalidate: int
    data_invalidate: int
    attr_invalidate: int
    vfs_open: int
    vfs_lookup: int
    vfs_access: int
    vfs_update_page: int
    vfs_read_page: int
    vfs_read_pages: int
    vfs_write_page: int
    vfs_write_pages: int
    vfs_get_dents: int
    vfs_set_attr: int
    vfs_flush: int
    vfs_fs_sync: int
    vfs_lock: int
    vfs_release: int
    congestion_wait: int
    set_attr_trunc: int
    extend_write: int
    silly_rename: int
    short_read: int
    short_write: int
    delay: int
    pnfs_read: int
    pnfs_write: int

    @classmethod
    def parse(cls, text: str) -> NFSEventCounter:
        """Parse the whitespace-separated event counters."""
        return cls(*_parse_counters(text, len(fields(cls)), "events"))


@dataclass(frozen=True)
class NFSByteCounter:
    """The ``bytes`` section of NFS mount statistics."""

    normal_read: int
    normal_write: int
    direct_read: int
    direct_write: int
    server_read: int
    server_write: int
    pages_read: int
    pages_write: int

    @classmethod
    def parse(cls, text: str) -> NFSByteCounter:
        """Parse the whitespace-separated byte counters."""
        return cls(*_parse_counters(text, len(fields(cls)), "bytes"))


@dataclass(frozen=True)
class NFSOperationStat:
    """Statistics for one RPC procedure in the ``per-op statistics`` section."""

    operations: int
    transmissions: int
    major_timeouts: int
    bytes_sent: int
    bytes_recv: int
    cum_queue_time: timedelta
    cum_resp_time: timedelta
    cum_total_req_time: timedelta

    @classmethod
    def parse(cls, text: str) -> NFSOperationStat:
        """Parse the eight values following the procedure name."""
        (
            operations,
            transmissions,
            major_timeouts,
            bytes_sent,
            bytes_recv,
            queue_ms,
            resp_ms,
            total_ms,
        ) = _parse_counters(text, 8, "per-op statistics")
        return cls(
            operations=operations,
            transmissions=transmissions,
            major_timeouts=major_timeouts,
            bytes_sent=bytes_sent,
            bytes_recv=bytes_recv,
            cum_queue_time=_millis(queue_ms),
            cum_resp_time=_millis(resp_ms),
            cum_total_req_time=_millis(total_ms),
        )