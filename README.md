# procinfo

Parsers for files the Linux kernel exposes under `/proc`. Each parser takes
text you have already read (or, for `pagemap`, one raw 64-bit entry) and
returns plain Python objects: dataclasses, enums and flag sets. Nothing here
opens files, so the parsers work just as well on captured samples, test
fixtures or data copied from another machine.

Malformed input raises `procinfo.errors.ProcError` or one of its
subclasses, `IncompleteError` (something expected is missing) and
`InternalError` (a value has the wrong shape or is out of range).

## What is covered

| Data                                  | Module                  | Entry point                                   |
|---------------------------------------|-------------------------|-----------------------------------------------|
| `/proc/<pid>/stat`                    | `procinfo.stat`         | `Stat.parse`                                  |
| `/proc/<pid>/status`                  | `procinfo.status`       | `Status.parse`, `parse_uid_gid`               |
| `/proc/<pid>/statm`, `io`, `fd/*`     | `procinfo.procio`       | `StatM.parse`, `Io.parse`, `FDTarget.parse`   |
| `/proc/<pid>/limits`                  | `procinfo.limit`        | `Limits.parse`, `parse_limit_value`           |
| `/proc/<pid>/maps`, `smaps`           | `procinfo.maps`         | `MemoryMaps.parse`, `MemoryMap.parse_line`    |
| `/proc/<pid>/smaps_rollup`            | `procinfo.maps`         | `SmapsRollup.parse`                           |
| `/proc/<pid>/mountinfo`               | `procinfo.mountinfo`    | `MountInfos.parse`, `MountInfo.parse_line`    |
| NFS blocks of `/proc/<pid>/mountstats`| `procinfo.nfsstats`     | `MountNFSStatistics.from_lines`               |
| NFS counters                          | `procinfo.nfscounters`  | `NFSEventCounter`, `NFSByteCounter`, `NFSOperationStat` |
| `/proc/<pid>/schedstat`               | `procinfo.schedstat`    | `Schedstat.parse`                             |
| `/proc/<pid>/pagemap` entries         | `procinfo.pagemap`      | `parse_page_info`, `genmask`                  |
| `/proc/<pid>/ns/*`                    | `procinfo.namespaces`   | `Namespace`, `Namespaces`                     |
| `/proc/uptime`                        | `procinfo.uptime`       | `Uptime.parse`                                |
| `/proc/sysvipc/shm`                   | `procinfo.sysvipc_shm`  | `SharedMemorySegments.parse`                  |
| Flags and states                      | `procinfo.flags`        | `StatFlags`, `CoredumpFlags`, `MMPermissions`, `VmFlags`, `ProcState` |

## Examples

### Process status

```python
from pathlib import Path

from procinfo.stat import Stat

stat = Stat.parse(Path("/proc/self/stat").read_text())
print(stat.pid, stat.comm, stat.proc_state())
print("rss:", stat.rss_bytes(4096), "bytes")
major, minor = stat.tty_device()
```

`Stat.parse` also accepts `bytes`, decoding invalid UTF-8 with replacement
characters. Fields added by later kernels (`exit_signal`, `processor`, ...,
`exit_code`) are `None` when absent. `stat_flags()` returns the flags word
as a `StatFlags` value, and `start_datetime(boot_time, ticks_per_second)`
turns `starttime` into a `datetime`.

### Memory maps

```python
from pathlib import Path

from procinfo.maps import MemoryMaps

maps = MemoryMaps.parse(Path("/proc/self/smaps").read_text())
print(len(maps), "mappings")
for mapping in maps:
    print(hex(mapping.address[0]), mapping.perms.as_str(), mapping.pathname.kind)
    print(mapping.extension.map.get("Rss"), mapping.extension.vm_flags)
```

In `smaps` data, values with a size suffix (such as `kB`) are stored in
bytes. The pathname is an `MMapPath` whose `kind` is an `MMapKind`
(`PATH`, `HEAP`, `STACK`, `TSTACK`, `VDSO`, `VVAR`, `VSYSCALL`, `ROLLUP`,
`ANONYMOUS`, `VSYS`, `OTHER`) and whose `value` holds the file path, thread
ID, shared memory key or pseudo-path name where there is one.

Permissions round-trip through their four-character form:

```python
from procinfo.flags import MMPermissions

perms = MMPermissions.parse("r-xs")
assert perms == MMPermissions.READ | MMPermissions.EXECUTE | MMPermissions.SHARED
assert perms.as_str() == "r-xs"
```

### File descriptors

```python
from procinfo.procio import FDKind, FDTarget

target = FDTarget.parse("socket:[12345]")
assert target.kind is FDKind.SOCKET and target.inode == 12345
```

### Mounts

```python
from pathlib import Path

from procinfo.mountinfo import MountInfos

for mount in MountInfos.parse(Path("/proc/self/mountinfo").read_text()):
    print(mount.mount_point, mount.fs_type, mount.mount_source, mount.opt_fields)
```

### NFS statistics

`MountNFSStatistics.from_lines` reads the statistics block that follows an
NFS `device ...` line, stopping at the first blank line:

```python
from datetime import timedelta

from procinfo.nfsstats import MountNFSStatistics, NFSServerCaps

block = [
    "opts: rw,vers=4.1,hard,proto=tcp",
    "age: 3542",
    "caps: caps=0x3ffdf,wtmult=512,dtsize=32768,bsize=0,namlen=255",
    "sec: flavor=6,pseudoflavor=390003",
    "events: " + " ".join(["0"] * 27),
    "bytes: 1 2 3 4 5 6 7 8",
    "per-op statistics",
    "READ: 1 2 3 4 5 6 7 8",
    "",
]
stats = MountNFSStatistics.from_lines(block, "1.1")
assert stats.age == timedelta(seconds=3542)
assert stats.bytes.normal_read == 1
assert NFSServerCaps.NFS_CAP_READDIRPLUS in stats.server_caps()
assert stats.per_op_stats["READ"].cum_queue_time == timedelta(milliseconds=6)
```

### Resource limits

```python
from pathlib import Path

from procinfo.limit import Limits

limits = Limits.parse(Path("/proc/self/limits").read_text())
print(limits.max_open_files.soft_limit, limits.max_open_files.hard_limit)
```

A limit of `unlimited` is `None`.

### Page table entries

```python
from procinfo.pagemap import MemoryPageFlags, Pfn, parse_page_info

info = parse_page_info(0x8180000000000003)
assert isinstance(info, MemoryPageFlags)
assert info.page_frame_number() == Pfn(3)
```

A present page gives `MemoryPageFlags`; an entry with the swap bit set gives
`SwapPageFlags`, with `swap_type()` and `swap_offset()`. `Pfn` formats like
an integer, so `f"{pfn:x}"` works.

### Uptime

```python
from procinfo.uptime import Uptime

uptime = Uptime.parse("2578790.61 1999230.98\n")
print(uptime.uptime_duration(), uptime.idle_duration())
```

Durations are `timedelta` values with centisecond precision.

## What this package does not do

- It does not read `/proc` itself or enumerate processes; you pass in the
  text you have read.
- It has no parser for a whole `/proc/<pid>/mountstats` file: split out the
  NFS blocks yourself and hand them to `MountNFSStatistics.from_lines`.
- It has no parsers for `/proc/sys/kernel` values such as the kernel
  version, build information, semaphore limits or the SysRq setting.
- It has no command-line tool.

## Requirements

Python 3.10 or later. The package has no third-party dependencies; the tests
use pytest (`pip install procinfo[test]`).