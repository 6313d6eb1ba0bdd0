"""Tests for the line buffer editing primitives."""

import pytest
from lineedit.buffer import LineBuffer
from lineedit.errors import LoadError, OutOfRange


def lines_of(buf):
    return buf.serialize()


def test_load_empty_gives_single_empty_line():
    buf = LineBuffer.load([])
    assert buf.line_count == 1
    assert buf.serialize() == [""]


def test_new_buffer_has_one_empty_line():
    buf = LineBuffer()
    assert len(buf) == 1
    assert buf.line(0) == b""


def test_load_strips_newline_but_keeps_carriage_return():
    """Only the \\n separator is removed on load."""
    buf = LineBuffer.load(["one\n", "two\r\n", "three"])
    assert buf.serialize() == ["one", "two\r", "three"]
    assert buf.line_length(1) == 4


@pytest.mark.parametrize("text", [
    ["hello"],
    ["hello", "world"],
    ["", "", ""],
    ["tabs\tand spaces  ", "café"],
])
def test_serialize_load_round_trip(text):
    assert LineBuffer.load(text).serialize() == text


def test_load_rejects_unencodable_text():
    with pytest.raises(LoadError):
        LineBuffer.load(["ok", "€"], encoding="latin-1")


def test_insert_char_shifts_right():
    buf = LineBuffer.load(["abc"])
    buf.insert_char(0, 1, "x")
    assert lines_of(buf) == ["axbc"]


def test_insert_char_at_end_of_line():
    buf = LineBuffer.load(["abc"])
    buf.insert_char(0, 3, "d")
    assert lines_of(buf) == ["abcd"]


def test_insert_char_accepts_byte_value():
    buf = LineBuffer.load([""])
    buf.insert_char(0, 0, ord("z"))
    assert buf.line(0) == b"z"


def test_insert_char_rejects_multi_byte_character():
    buf = LineBuffer.load(["abc"])
    with pytest.raises(ValueError):
        buf.insert_char(0, 0, "é")
    assert lines_of(buf) == ["abc"]


def test_insert_char_out_of_range_does_not_mutate():
    buf = LineBuffer.load(["abc"])
    with pytest.raises(OutOfRange):
        buf.insert_char(0, 4, "x")
    with pytest.raises(OutOfRange):
        buf.insert_char(1, 0, "x")
    with pytest.raises(OutOfRange):
        buf.insert_char(0, -1, "x")
    assert lines_of(buf) == ["abc"]


def test_out_of_range_is_an_index_error():
    buf = LineBuffer()
    with pytest.raises(IndexError):
        buf.line(5)


def test_delete_char_before_inside_line():
    buf = LineBuffer.load(["abc"])
    assert buf.delete_char_before(0, 2) == (0, 1)
    assert lines_of(buf) == ["ac"]


def test_delete_char_before_at_document_start_is_noop():
    buf = LineBuffer.load(["ab"])
    assert buf.delete_char_before(0, 0) == (0, 0)
    assert lines_of(buf) == ["ab"]


def test_delete_char_before_merges_with_previous_line():
    buf = LineBuffer.load(["ab", "cd"])
    assert buf.delete_char_before(1, 0) == (0, 2)
    assert lines_of(buf) == ["abcd"]
    assert buf.line_count == 1


def test_delete_char_before_merge_keeps_following_lines():
    buf = LineBuffer.load(["a", "b", "c", "d"])
    assert buf.delete_char_before(2, 0) == (1, 1)
    assert lines_of(buf) == ["a", "bc", "d"]


def test_delete_char_at_inside_line():
    buf = LineBuffer.load(["hello world"])
    buf.delete_char_at(0, 5)
    assert lines_of(buf) == ["helloworld"]


def test_delete_char_at_line_end_joins_next_line():
    buf = LineBuffer.load(["first", "second"])
    buf.delete_char_at(0, 5)
    assert lines_of(buf) == ["firstsecond"]


def test_delete_char_at_document_end_is_noop():
    buf = LineBuffer.load(["hello"])
    buf.delete_char_at(0, 5)
    assert lines_of(buf) == ["hello"]


def test_delete_char_at_empty_line_removes_it():
    buf = LineBuffer.load(["first", "", "third"])
    buf.delete_char_at(1, 0)
    assert lines_of(buf) == ["first", "third"]


def test_delete_char_at_out_of_range():
    buf = LineBuffer.load(["ab"])
    with pytest.raises(OutOfRange):
        buf.delete_char_at(0, 3)
    assert lines_of(buf) == ["ab"]


def test_split_line_in_middle():
    buf = LineBuffer.load(["abcdef"])
    assert buf.split_line(0, 3) == 1
    assert lines_of(buf) == ["abc", "def"]


def test_split_line_at_end_inserts_empty_line():
    buf = LineBuffer.load(["hello", "world"])
    assert buf.split_line(0, 5) == 1
    assert lines_of(buf) == ["hello", "", "world"]


def test_split_line_at_start():
    buf = LineBuffer.load(["abc"])
    buf.split_line(0, 0)
    assert lines_of(buf) == ["", "abc"]


def test_split_then_backspace_restores_line():
    buf = LineBuffer.load(["abcdef"])
    new_row = buf.split_line(0, 3)
    assert buf.delete_char_before(new_row, 0) == (0, 3)
    assert lines_of(buf) == ["abcdef"]


@pytest.mark.parametrize("column", [0, 2, 5])
def test_insert_then_backspace_restores_line(column):
    buf = LineBuffer.load(["hello"])
    buf.insert_char(0, column, "x")
    assert buf.delete_char_before(0, column + 1) == (0, column)
    assert lines_of(buf) == ["hello"]


def test_remove_line_shifts_up():
    buf = LineBuffer.load(["a", "b", "c"])
    buf.remove_line(1)
    assert lines_of(buf) == ["a", "c"]


def test_remove_only_line_leaves_empty_line():
    buf = LineBuffer.load(["only"])
    buf.remove_line(0)
    assert buf.line_count == 1
    assert lines_of(buf) == [""]


def test_remove_line_out_of_range():
    buf = LineBuffer.load(["a"])
    with pytest.raises(OutOfRange):
        buf.remove_line(1)


def test_line_returns_copy():
    buf = LineBuffer.load(["abc"])
    data = buf.line(0)
    assert isinstance(data, bytes)
    buf.insert_char(0, 0, "x")
    assert data == b"abc"


def test_iteration_yields_bytes():
    buf = LineBuffer.load(["a", "b"])
    assert list(buf) == [b"a", b"b"]


def test_capacity_doubles_on_split():
    buf = LineBuffer.load(["x"] * 4, capacity=4)
    assert buf.capacity == 4
    buf.split_line(0, 0)
    assert buf.capacity == 8
    assert buf.reallocations == 1


def test_growth_reallocates_logarithmically():
    buf = LineBuffer.load(["line"] * 1000, capacity=1)
    # 1 -> 2 -> 4 -> ... -> 1024
    assert buf.capacity == 1024
    assert buf.reallocations == 10
    for _ in range(1000):
        buf.split_line(0, 0)
    assert buf.line_count == 2000
    assert buf.capacity == 2048
    assert buf.reallocations == 11


def test_invalid_capacity():
    with pytest.raises(ValueError):
        LineBuffer(capacity=0)


def test_line_count_never_drops_below_one():
    buf = LineBuffer.load(["ab", "cd"])
    buf.delete_char_before(1, 0)
    for _ in range(4):
        buf.delete_char_before(0, buf.line_length(0))
    buf.delete_char_at(0, 0)
    assert buf.line_count == 1
    assert lines_of(buf) == [""]
