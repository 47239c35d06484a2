"""Process status from ``/proc/<pid>/status``."""

from __future__ import annotations

import re
from dataclasses import dataclass

from procinfo.errors import IncompleteError, InternalError

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


def parse_uid_gid(text: str, index: int) -> int:
    """The ``index``-th whitespace-separated ID of a ``Uid`` or ``Gid`` value."""
    tokens = text.split()
    if index >= len(tokens):
        raise IncompleteError(f"missing id {index} in {text!r}")
    return _parse_int(tokens[index], bits=32)


def _parse_with_kb(text: str | None) -> int | None:
    if text is None:
        return None
    return _parse_int(text.replace(" kB", ""))


def _parse_sigq(text: str) -> tuple[int, int]:
    parts = text.split("/")
    if len(parts) < 2:
        raise IncompleteError(f"malformed SigQ value {text!r}")
    return _parse_int(parts[0]), _parse_int(parts[1])


def _parse_list(text: str) -> list[int]:
    return [_parse_int(token, bits=32, signed=True) for token in text.split()]


def _parse_allowed(text: str) -> list[int]:
    return [_parse_int(part, radix=16, bits=32) for part in text.split(",")]


def _parse_allowed_list(text: str) -> list[tuple[int, int]]:
    ranges = []
    for part in text.split(","):
        if "-" in part:
            begin, end = part.split("-")[:2]
            ranges.append((_parse_int(begin, bits=32), _parse_int(end, bits=32)))
        else:
            value = _parse_int(part, bits=32)
            ranges.append((value, value))
    return ranges


def _optional(raw: dict[str, str], key: str, **kwargs) -> int | None:
    value = raw.pop(key, None)
    return None if value is None else _parse_int(value, **kwargs)


@dataclass(frozen=True)
class Status:
    """Status information about a process; fields missing on older kernels are ``None``.

    Memory sizes are in kibibytes; signal and capability fields are bit masks.
    """

    name: str
    umask: int | None
    state: str
    tgid: int
    ngid: int | None
    pid: int
    ppid: int
    tracerpid: int
    ruid: int
    euid: int
    suid: int
    fuid: int
    rgid: int
    egid: int
    sgid: int
    fgid: int
    fdsize: int
    groups: list[int]
    nstgid: list[int] | None
    nspid: list[int] | None
    nspgid: list[int] | None
    nssid: list[int] | None
    vmpeak: int | None
    vmsize: int | None
    vmlck: int | None
    vmpin: int | None
    vmhwm: int | None
    vmrss: int | None
    rssanon: int | None
    rssfile: int | None
    rssshmem: int | None
    vmdata: int | None
    vmstk: int | None
    vmexe: int | None
    vmlib: int | None
    vmpte: int | None
    vmswap: int | None
    hugetlbpages: int | None
    threads: int
    sigq: tuple[int, int]
    sigpnd: int
    shdpnd: int
    sigblk: int
    sigign: int
    sigcgt: int
    capinh: int
    capprm: int
    capeff: int
    capbnd: int | None
    capamb: int | None
    nonewprivs: int | None
    seccomp: int | None
    speculation_store_bypass: str | None
    cpus_allowed: list[int] | None
    cpus_allowed_list: list[tuple[int, int]] | None
    mems_allowed: list[int] | None
    mems_allowed_list: list[tuple[int, int]] | None
    voluntary_ctxt_switches: int | None
    nonvoluntary_ctxt_switches: int | None
    core_dumping: bool | None
    thp_enabled: bool | None

    @classmethod
    def parse(cls, text: str) -> Status:
        """Parse the contents of a ``status`` file."""
        raw: dict[str, str] = {}
        for line in text.splitlines():
            if not line:
                continue
            parts = line.split(":")
            if len(parts) < 2:
                raise IncompleteError(f"malformed status line: {line!r}")
            raw[parts[0]] = parts[1].strip()

        def required(key: str) -> str:
            try:
                return raw.pop(key)
            except KeyError:
                raise IncompleteError(f"missing status field {key!r}") from None

        def optional_list(key: str, parse) -> list | None:
            value = raw.pop(key, None)
            return None if value is None else parse(value)

        def optional_ranges(key: str) -> list[tuple[int, int]] | None:
            value = raw.pop(key, None)
            if value is None:
                return None
            try:
                return _parse_allowed_list(value)
            except (IncompleteError, InternalError):
                return None

        def optional_bool(key: str) -> bool | None:
            value = raw.pop(key, None)
            return None if value is None else value == "1"

        name = required("Name")
        umask = _optional(raw, "Umask", radix=8, bits=32)
        state = required("State")
        tgid = _parse_int(required("Tgid"), bits=32, signed=True)
        ngid = _optional(raw, "Ngid", bits=32, signed=True)
        pid = _parse_int(required("Pid"), bits=32, signed=True)
        ppid = _parse_int(required("PPid"), bits=32, signed=True)
        tracerpid = _parse_int(required("TracerPid"), bits=32, signed=True)
        uids = required("Uid")
        ruid, euid, suid, fuid = (parse_uid_gid(uids, i) for i in range(4))
        gids = required("Gid")
        rgid, egid, sgid, fgid = (parse_uid_gid(gids, i) for i in range(4))
        fdsize = _parse_int(required("FDSize"), bits=32)
        groups = _parse_list(required("Groups"))

        kb = {
            attr: _parse_with_kb(raw.pop(key, None))
            for attr, key in (
                ("vmpeak", "VmPeak"),
                ("vmsize", "VmSize"),
                ("vmlck", "VmLck"),
                ("vmpin", "VmPin"),
                ("vmhwm", "VmHWM"),
                ("vmrss", "VmRSS"),
                ("rssanon", "RssAnon"),
                ("rssfile", "RssFile"),
                ("rssshmem", "RssShmem"),
                ("vmdata", "VmData"),
                ("vmstk", "VmStk"),
                ("vmexe", "VmExe"),
                ("vmlib", "VmLib"),
                ("vmpte", "VmPTE"),
                ("vmswap", "VmSwap"),
                ("hugetlbpages", "HugetlbPages"),
            )
        }

        masks = {
            attr: _parse_int(required(key), radix=16)
            for attr, key in (
                ("sigpnd", "SigPnd"),
                ("shdpnd", "ShdPnd"),
                ("sigblk", "SigBlk"),
                ("sigign", "SigIgn"),
                ("sigcgt", "SigCgt"),
                ("capinh", "CapInh"),
                ("capprm", "CapPrm"),
                ("capeff", "CapEff"),
            )
        }

        return cls(
            name=name,
            umask=umask,
            state=state,
            tgid=tgid,
            ngid=ngid,
            pid=pid,
            ppid=ppid,
            tracerpid=tracerpid,
            ruid=ruid,
            euid=euid,
            suid=suid,
            fuid=fuid,
            rgid=rgid,
            egid=egid,
            sgid=sgid,
            fgid=fgid,
            fdsize=fdsize,
            groups=groups,
            nstgid=optional_list("NStgid", _parse_list),
            nspid=optional_list("NSpid", _parse_list),
            nspgid=optional_list("NSpgid", _parse_list),
            nssid=optional_list("NSsid", _parse_list),
            threads=_parse_int(required("Threads")),
            sigq=_parse_sigq(required("SigQ")),
            capbnd=_optional(raw, "CapBnd", radix=16),
            capamb=_optional(raw, "CapAmb", radix=16),
            nonewprivs=_optional(raw, "NoNewPrivs"),
            seccomp=_optional(raw, "Seccomp", bits=32),
            speculation_store_bypass=raw.pop("Speculation_Store_Bypass", None),
            cpus_allowed=optional_list("Cpus_allowed", _parse_allowed),
            cpus_allowed_list=optional_ranges("Cpus_allowed_list"),
            mems_allowed=optional_list("Mems_allowed", _parse_allowed),
            mems_allowed_list=optional_ranges("Mems_allowed_list"),
            voluntary_ctxt_switches=_optional(raw, "voluntary_ctxt_switches"),
            nonvoluntary_ctxt_switches=_optional(raw, "nonvoluntary_ctxt_switches"),
            core_dumping=optional_bool("CoreDumping"),
            thp_enabled=optional_bool("THP_enabled"),
            **kb,
            **masks,
        )