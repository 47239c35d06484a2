from dataclasses import astuple
from datetime import timedelta

import pytest

from procinfo.errors import IncompleteError, InternalError
from procinfo.nfscounters import NFSByteCounter, NFSEventCounter, NFSOperationStat


def test_byte_counter_from_mountstats_sample():
    counter = NFSByteCounter.parse("1 2 3 4 5 6 7 8  ")
    assert counter.normal_read == 1
    assert counter.pages_write == 8
    assert astuple(counter) == (1, 2, 3, 4, 5, 6, 7, 8)


def test_event_counter_from_mountstats_sample():
    text = "114 1579 5 3 132 20 3019 1 2 3 4 5 115 1 4 1 2 4 3 4 5 6 7 8 9 0 1  "
    counter = NFSEventCounter.parse(text)
    assert counter.inode_revalidate == 114
    assert counter.vfs_lookup == 20
    assert astuple(counter) == tuple(int(t) for t in text.split())


def test_event_counter_ignores_extra_values():
    values = list(range(30))
    counter = NFSEventCounter.parse(" ".join(map(str, values)))
    assert astuple(counter) == tuple(values[:27])


def test_operation_stat_durations():
    stat = NFSOperationStat.parse(" 1 1 0 320 420 0 124 124 ")
    assert stat.operations == 1
    assert stat.bytes_sent == 320
    assert stat.bytes_recv == 420
    assert stat.cum_queue_time == timedelta(0)
    assert stat.cum_resp_time == timedelta(milliseconds=124)
    assert stat.cum_total_req_time == timedelta(milliseconds=124)


@pytest.mark.parametrize(
    "parser",
    [NFSEventCounter.parse, NFSByteCounter.parse, NFSOperationStat.parse],
)
def test_too_few_values(parser):
    with pytest.raises(IncompleteError):
        parser("1 2 3")


@pytest.mark.parametrize(
    "parser,count",
    [(NFSEventCounter.parse, 27), (NFSByteCounter.parse, 8), (NFSOperationStat.parse, 8)],
)
def test_non_numeric_value(parser, count):
    tokens = ["1"] * count
    tokens[2] = "x"
    with pytest.raises(InternalError):
        parser(" ".join(tokens))


def test_negative_value_rejected():
    with pytest.raises(InternalError):
        NFSByteCounter.parse("1 2 3 -4 5 6 7 8")