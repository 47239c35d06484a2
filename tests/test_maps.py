import pytest

from procinfo.errors import IncompleteError, InternalError, ProcError
from procinfo.flags import MMPermissions, VmFlags
from procinfo.maps import (
    MemoryMap,
    MemoryMaps,
    MMapExtension,
    MMapKind,
    MMapPath,
    SmapsRollup,
)

SMAPS = """00400000-0040b000 r-xp 00000000 08:01 1234                       /bin/cat
Size:                 44 kB
Rss:                  40 kB
ProtectionKey:         0
VmFlags: rd ex mr mw me dw
7f1c3a000000-7f1c3a021000 rw-p 00000000 00:00 0 
Size:                132 kB
"""

ROLLUP = """00400000-7ffc0000 ---p 00000000 00:00 0                          [rollup]
Rss:                 884 kB
Pss:                 385 kB
"""


@pytest.mark.parametrize(
    "text, kind",
    [
        ("", MMapKind.ANONYMOUS),
        ("   ", MMapKind.ANONYMOUS),
        ("[heap]", MMapKind.HEAP),
        ("[stack]", MMapKind.STACK),
        ("[vdso]", MMapKind.VDSO),
        ("[vvar]", MMapKind.VVAR),
        ("[vsyscall]", MMapKind.VSYSCALL),
        ("[rollup]", MMapKind.ROLLUP),
    ],
)
def test_pseudo_paths(text, kind):
    assert MMapPath.parse(text) == MMapPath(kind)


def test_thread_stack():
    assert MMapPath.parse("[stack:1234]") == MMapPath(MMapKind.TSTACK, 1234)


def test_thread_stack_without_id():
    with pytest.raises(IncompleteError):
        MMapPath.parse("[stack:")


def test_other_pseudo_path():
    assert MMapPath.parse("[anon:foo]") == MMapPath(MMapKind.OTHER, "anon:foo")


def test_sysv_key_is_signed():
    assert MMapPath.parse("/SYSV00000000 (deleted)") == MMapPath(MMapKind.VSYS, 0)
    assert MMapPath.parse("/SYSVffffffff (deleted)") == MMapPath(MMapKind.VSYS, -1)


def test_sysv_bad_key():
    with pytest.raises(InternalError):
        MMapPath.parse("/SYSVzz")


def test_file_path():
    path = MMapPath.parse("  /usr/lib/libc.so.6")
    assert path.kind is MMapKind.PATH
    assert str(path.value) == "/usr/lib/libc.so.6"


def test_parse_line():
    mm = MemoryMap.parse_line("00400000-0040b000 r-xp 00001000 08:01 1234    /bin/cat")
    assert mm.address == (0x00400000, 0x0040B000)
    assert mm.perms == MMPermissions.READ | MMPermissions.EXECUTE | MMPermissions.PRIVATE
    assert mm.offset == 0x1000
    assert mm.dev == (8, 1)
    assert mm.inode == 1234
    assert str(mm.pathname.value) == "/bin/cat"
    assert mm.extension.is_empty()


def test_parse_line_incomplete():
    with pytest.raises(IncompleteError):
        MemoryMap.parse_line("00400000-0040b000 r-xp 00000000")


def test_parse_line_bad_address():
    with pytest.raises(InternalError):
        MemoryMap.parse_line("zz-0040b000 r-xp 00000000 08:01 0 ")


def test_parse_smaps():
    maps = MemoryMaps.parse(SMAPS)
    assert len(maps) == 2
    first, second = list(maps)
    assert first.extension.map["Size"] == 44 * 1024
    assert first.extension.map["Rss"] == 40 * 1024
    assert first.extension.map["ProtectionKey"] == 0
    assert first.extension.vm_flags == (
        VmFlags.RD | VmFlags.EX | VmFlags.MR | VmFlags.MW | VmFlags.ME | VmFlags.DW
    )
    assert second.pathname == MMapPath(MMapKind.ANONYMOUS)
    assert second.extension.map == {"Size": 132 * 1024}
    assert second.extension.vm_flags == VmFlags.NONE


def test_attribute_before_mapping():
    with pytest.raises(IncompleteError):
        MemoryMaps.parse("Size: 4 kB\n")


def test_attribute_not_a_number():
    with pytest.raises(ProcError):
        MemoryMaps.parse("00400000-0040b000 r-xp 00000000 08:01 0 \nSize: abc kB\n")


def test_extension_is_empty():
    assert MMapExtension().is_empty()
    assert not MMapExtension(vm_flags=VmFlags.RD).is_empty()
    assert not MMapExtension(map={"Rss": 0}).is_empty()


def test_rollup():
    rollup = SmapsRollup.parse(ROLLUP)
    maps = rollup.memory_map_rollup
    assert len(maps) == 1
    assert maps[0].pathname == MMapPath(MMapKind.ROLLUP)
    assert maps[0].extension.map["Pss"] == 385 * 1024


def test_empty_input():
    assert len(MemoryMaps.parse("")) == 0