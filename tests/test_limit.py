import pytest

from procinfo.errors import IncompleteError, InternalError
from procinfo.limit import Limit, Limits, parse_limit_value

SAMPLE = """\
Limit                     Soft Limit           Hard Limit           Units     
Max cpu time              unlimited            unlimited            seconds   
Max file size             unlimited            unlimited            bytes     
Max data size             unlimited            unlimited            bytes     
Max stack size            8388608              unlimited            bytes     
Max core file size        0                    unlimited            bytes     
Max resident set          unlimited            unlimited            bytes     
Max processes             63632                63632                processes 
Max open files            1024                 1048576              files     
Max locked memory         65536                65536                bytes     
Max address space         unlimited            unlimited            bytes     
Max file locks            unlimited            unlimited            locks     
Max pending signals       63632                63632                signals   
Max msgqueue size         819200               819200               bytes     
Max nice priority         0                    0                    
Max realtime priority     0                    0                    
Max realtime timeout      unlimited            unlimited            us        
"""


def test_parse_sample():
    limits = Limits.parse(SAMPLE)
    assert limits.max_cpu_time == Limit(None, None)
    assert limits.max_stack_size == Limit(8388608, None)
    assert limits.max_core_file_size == Limit(0, None)
    assert limits.max_open_files == Limit(1024, 1048576)
    assert limits.max_msgqueue_size == Limit(819200, 819200)
    assert limits.max_realtime_timeout == Limit(None, None)


def test_unitless_priority_lines():
    limits = Limits.parse(SAMPLE)
    assert limits.max_nice_priority == Limit(0, 0)
    assert limits.max_realtime_priority == Limit(0, 0)


def test_parse_limit_value():
    assert parse_limit_value("unlimited") is None
    assert parse_limit_value("65536") == 65536


@pytest.mark.parametrize("text", ["", "-1", "12x", "Unlimited", str(1 << 64)])
def test_parse_limit_value_rejects(text):
    with pytest.raises(InternalError):
        parse_limit_value(text)


def test_missing_limit():
    text = "\n".join(
        line for line in SAMPLE.splitlines() if not line.startswith("Max file locks")
    )
    with pytest.raises(IncompleteError):
        Limits.parse(text)


def test_bad_value():
    text = SAMPLE.replace("8388608", "lots")
    with pytest.raises(InternalError):
        Limits.parse(text)


def test_short_line():
    with pytest.raises(IncompleteError):
        Limits.parse("Max\n")