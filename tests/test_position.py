import pytest

from strictjson.position import LineColIterator


def _failing_source():
    yield ord("a")
    raise OSError("read failed")


def test_initial_state():
    it = LineColIterator(b"abc")
    assert (it.line, it.col, it.byte_offset()) == (1, 0, 0)


def test_yields_same_bytes():
    data = b'{"a":\n 1}\r\n'
    assert bytes(LineColIterator(data)) == data


@pytest.mark.parametrize(
    "data", [b"", b"abc", b"\n", b"a\nb", b"ab\n\ncd\n", b"\n\n\nxyz"]
)
def test_offset_and_line_track_consumed_bytes(data):
    it = LineColIterator(data)
    for consumed in range(1, len(data) + 1):
        next(it)
        prefix = data[:consumed]
        assert it.byte_offset() == consumed
        assert it.line == 1 + prefix.count(b"\n")
        assert it.col == len(prefix) - (prefix.rfind(b"\n") + 1)


def test_column_resets_after_newline():
    it = LineColIterator(b"ab\nc")
    next(it)
    next(it)
    assert it.col == 2
    next(it)
    assert (it.line, it.col) == (2, 0)
    next(it)
    assert it.col == 1


def test_stops_at_end():
    it = LineColIterator(b"x")
    assert next(it) == ord("x")
    with pytest.raises(StopIteration):
        next(it)
    assert it.byte_offset() == 1


def test_errors_from_source_propagate():
    it = LineColIterator(_failing_source())
    assert next(it) == ord("a")
    with pytest.raises(OSError, match="read failed"):
        next(it)
    assert it.byte_offset() == 1


def test_iter_returns_self():
    it = LineColIterator(b"ab")
    assert iter(it) is it
    assert list(it) == [ord("a"), ord("b")]