from pathlib import PurePosixPath

import pytest

from procinfo.errors import IncompleteError, InternalError
from procinfo.mountinfo import MountInfo, MountInfos, MountOptField, MountOptKind

LINE = "25 0 8:1 / / rw,relatime shared:1 - ext4 /dev/sda1 rw,errors=remount-ro"


def test_mountinfo():
    info = MountInfo.parse_line(LINE)
    assert info.mnt_id == 25
    assert info.pid == 0
    assert info.majmin == "8:1"
    assert info.root == "/"
    assert info.mount_point == PurePosixPath("/")
    assert info.mount_options == {"rw": None, "relatime": None}
    assert info.opt_fields == [MountOptField(MountOptKind.SHARED, 1)]
    assert info.fs_type == "ext4"
    assert info.mount_source == "/dev/sda1"
    assert info.super_options == {"rw": None, "errors": "remount-ro"}


def test_none_source_and_no_optional_fields():
    info = MountInfo.parse_line("22 1 0:21 / /proc rw,nosuid - proc none rw")
    assert info.mount_source is None
    assert info.opt_fields == []
    assert info.mount_point == PurePosixPath("/proc")


def test_all_optional_field_kinds():
    info = MountInfo.parse_line(
        "30 25 0:5 / /mnt rw master:2 propagate_from:3 unbindable foo:9 shared:4 - tmpfs tmpfs rw"
    )
    assert info.opt_fields == [
        MountOptField(MountOptKind.MASTER, 2),
        MountOptField(MountOptKind.PROPAGATE_FROM, 3),
        MountOptField(MountOptKind.UNBINDABLE),
        MountOptField(MountOptKind.SHARED, 4),
    ]


def test_missing_separator():
    with pytest.raises(IncompleteError):
        MountInfo.parse_line("25 0 8:1 / / rw shared:1 ext4")


def test_missing_super_options():
    with pytest.raises(IncompleteError):
        MountInfo.parse_line("25 0 8:1 / / rw - ext4 /dev/sda1")


def test_bad_mount_id():
    with pytest.raises(InternalError):
        MountInfo.parse_line(LINE.replace("25", "x", 1))


def test_bad_peer_group():
    with pytest.raises(InternalError):
        MountInfo.parse_line(LINE.replace("shared:1", "shared:abc"))


def test_mountinfos_parse_and_iterate():
    text = LINE + "\n22 25 0:21 / /proc rw - proc proc rw\n"
    infos = MountInfos.parse(text)
    assert len(infos) == 2
    assert [m.mnt_id for m in infos] == [25, 22]
    assert infos[1].mount_source == "proc"