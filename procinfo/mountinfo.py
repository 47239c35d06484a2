"""Mount information from ``/proc/<pid>/mountinfo``."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Iterator

from procinfo.errors import IncompleteError, InternalError


def _parse_int(text: str, *, bits: int, signed: bool) -> int:
    pattern = r"[+-]?[0-9]+" if signed else r"\+?[0-9]+"
    if not re.fullmatch(pattern, text):
        raise InternalError(f"failed to parse {text!r} as an integer")
    value = int(text)
    low, high = (-(1 << (bits - 1)), 1 << (bits - 1)) if signed else (0, 1 << bits)
    if not low <= value < high:
        raise InternalError(f"{text!r} is out of range")
    return value


def _parse_options(text: str) -> dict[str, str | None]:
    options: dict[str, str | None] = {}
    for opt in text.split(","):
        name, found, value = opt.partition("=")
        options[name] = value if found else None
    return options


class MountOptKind(enum.Enum):
    """The kind of an optional mountinfo field."""

    SHARED = "shared"
    MASTER = "master"
    PROPAGATE_FROM = "propagate_from"
    UNBINDABLE = "unbindable"


@dataclass(frozen=True)
class MountOptField:
    """An optional mountinfo field; ``peer_group`` is unset for ``UNBINDABLE``."""

    kind: MountOptKind
    peer_group: int | None = None


@dataclass
class MountInfo:
    """A single mount in a process's mount namespace."""

    mnt_id: int
    pid: int
    majmin: str
    root: str
    mount_point: PurePosixPath
    mount_options: dict[str, str | None]
    opt_fields: list[MountOptField]
    fs_type: str
    mount_source: str | None
    super_options: dict[str, str | None]

    @classmethod
    def parse_line(cls, line: str) -> MountInfo:
        """Parse one line of a ``mountinfo`` file."""
        tokens = iter(line.split())

        def take(what: str) -> str:
            token = next(tokens, None)
            if token is None:
                raise IncompleteError(f"missing {what} in mountinfo line {line!r}")
            return token

        mnt_id = _parse_int(take("mount id"), bits=32, signed=True)
        pid = _parse_int(take("parent id"), bits=32, signed=True)
        majmin = take("major:minor")
        root = take("root")
        mount_point = PurePosixPath(take("mount point"))
        mount_options = _parse_options(take("mount options"))

        opt_fields: list[MountOptField] = []
        while (token := take("separator")) != "-":
            name, _, rest = token.partition(":")
            if name == "unbindable":
                opt_fields.append(MountOptField(MountOptKind.UNBINDABLE))
                continue
            if name not in ("shared", "master", "propagate_from"):
                continue
            value = rest.split(":")[0] if ":" in token else None
            if value is None:
                raise IncompleteError(f"missing peer group in {token!r}")
            opt_fields.append(
                MountOptField(MountOptKind(name), _parse_int(value, bits=32, signed=False))
            )

        fs_type = take("filesystem type")
        source = take("mount source")
        super_options = _parse_options(take("super options"))

        return cls(
            mnt_id=mnt_id,
            pid=pid,
            majmin=majmin,
            root=root,
            mount_point=mount_point,
            mount_options=mount_options,
            opt_fields=opt_fields,
            fs_type=fs_type,
            mount_source=None if source == "none" else source,
            super_options=super_options,
        )


@dataclass
class MountInfos:
    """All mounts in a process's mount namespace."""

    mounts: list[MountInfo] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> MountInfos:
        """Parse the contents of a ``mountinfo`` file."""
        return cls([MountInfo.parse_line(line) for line in text.splitlines()])

    def __iter__(self) -> Iterator[MountInfo]:
        return iter(self.mounts)

    def __len__(self) -> int:
        return len(self.mounts)

    def __getitem__(self, index: int) -> MountInfo:
        return self.mounts[index]