from datetime import timedelta

import pytest

from procinfo.errors import IncompleteError, InternalError
from procinfo.nfsstats import MountNFSStatistics, NFSServerCaps

BLOCK = """\
       opts:   rw,vers=4.1,rsize=131072,wsize=131072,namlen=255,hard,proto=tcp,sec=krb5,local_lock=none 
       age:    3542 
       impl_id:        name='',domain='',date='0,0' 
       caps:   caps=0x3ffdf,wtmult=512,dtsize=32768,bsize=0,namlen=255 
       nfsv4:  bm0=0xfdffbfff,bm1=0x40f9be3e,bm2=0x803,acl=0x3,sessions,pnfs=not configured 
       sec:    flavor=6,pseudoflavor=390003 
       events: 114 1579 5 3 132 20 3019 1 2 3 4 5 115 1 4 1 2 4 3 4 5 6 7 8 9 0 1  
       bytes:  1 2 3 4 5 6 7 8  
       RPC iostats version: 1.0  p/v: 100003/4 (nfs) 
       xprt:   tcp 909 0 1 0 2 294 294 0 294 0 2 0 0 
       per-op statistics 
               NULL: 0 0 0 0 0 0 0 0 
               READ: 1 2 3 4 5 6 7 8 
               OPEN: 1 1 0 320 420 0 124 124 

after the block
"""


def _parse(text=BLOCK, version="1.1"):
    lines = iter(text.splitlines())
    return MountNFSStatistics.from_lines(lines, version), lines


def test_block_fields():
    stats, _ = _parse()
    assert stats.version == "1.1"
    assert stats.age == timedelta(seconds=3542)
    assert stats.opts[0] == "rw"
    assert stats.opts[-1] == "local_lock=none"
    assert stats.sec == ["flavor=6", "pseudoflavor=390003"]
    assert stats.caps[0] == "caps=0x3ffdf"
    assert stats.bytes.normal_read == 1
    assert stats.events.inode_revalidate == 114


def test_per_op_statistics():
    stats, _ = _parse()
    assert set(stats.per_op_stats) == {"NULL", "READ", "OPEN"}
    assert stats.per_op_stats["READ"].operations == 1
    assert stats.per_op_stats["OPEN"].cum_resp_time == timedelta(milliseconds=124)


def test_stops_at_blank_line():
    _, lines = _parse()
    assert next(lines) == "after the block"


def test_server_caps():
    stats, _ = _parse()
    caps = stats.server_caps()
    assert caps == NFSServerCaps(0x3FFDF)
    assert NFSServerCaps.NFS_CAP_READDIRPLUS in caps
    assert NFSServerCaps.NFS_CAP_LGOPEN not in caps


def test_server_caps_unknown_bits_gives_none():
    stats, _ = _parse(BLOCK.replace("caps=0x3ffdf", "caps=0x80000000"))
    assert stats.server_caps() is None


def test_server_caps_missing_gives_none():
    stats, _ = _parse(BLOCK.replace("caps=0x3ffdf,", ""))
    assert stats.server_caps() is None
    assert stats.caps[0] == "wtmult=512"


def test_server_caps_bad_hex():
    stats, _ = _parse(BLOCK.replace("caps=0x3ffdf", "caps=0xzz"))
    with pytest.raises(InternalError):
        stats.server_caps()


@pytest.mark.parametrize("prefix", ["opts:", "age:", "caps:", "sec:", "events:", "bytes:"])
def test_missing_section(prefix):
    text = "\n".join(line for line in BLOCK.splitlines() if not line.strip().startswith(prefix))
    with pytest.raises(IncompleteError):
        _parse(text)


def test_bad_age():
    with pytest.raises(InternalError):
        _parse(BLOCK.replace("3542", "soon"))