from procinfo.pagemap import (
    MemoryPageFlags,
    Pfn,
    SwapPageFlags,
    genmask,
    parse_page_info,
)


def test_genmask():
    assert genmask(3, 1) == 0b1110
    assert genmask(3, 0) == 0b1111
    assert genmask(63, 62) == 0b11 << 62


def test_memory_page_info():
    entry = 0b1000000110000000000000000000000000000000000000000000000000000011
    info = parse_page_info(entry)
    assert isinstance(info, MemoryPageFlags)
    wanted = (
        MemoryPageFlags.PRESENT
        | MemoryPageFlags.MMAP_EXCLUSIVE
        | MemoryPageFlags.SOFT_DIRTY
    )
    assert wanted in info
    assert info.page_frame_number() == Pfn(0b11)


def test_swap_page_info():
    entry = 0b1100000110000000000000000000000000000000000000000000000001100010
    info = parse_page_info(entry)
    assert isinstance(info, SwapPageFlags)
    wanted = (
        SwapPageFlags.PRESENT
        | SwapPageFlags.MMAP_EXCLUSIVE
        | SwapPageFlags.SOFT_DIRTY
    )
    assert wanted in info
    assert info.swap_type() == 0b10
    assert info.swap_offset() == 0b11


def test_memory_flags_not_swap():
    entry = 0b1000000110000000000000000000000000000000000000000000000000000011
    info = parse_page_info(entry)
    assert MemoryPageFlags.SWAP not in info
    assert MemoryPageFlags.FILE not in info


def test_pfn_formatting():
    pfn = Pfn(0b11)
    assert f"{pfn:x}" == "3"
    assert f"{pfn:X}" == format(3, "X")
    assert int(pfn) == 3


def test_pfn_ordering():
    assert Pfn(1) < Pfn(0b11)
    assert max([Pfn(1), Pfn(0b11)]) == Pfn(0b11)