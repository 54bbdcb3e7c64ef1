import pytest

from htmlkit.cursor import Cursor


def test_input_positions_track_utf8_bytes():
    cursor = Cursor("tあ\nz")
    cursor.advance()
    assert cursor.pos == 1
    assert cursor.remaining() == "あ\nz"

    cursor.advance()
    assert cursor.pos == 4
    assert cursor.remaining() == "\nz"

    cursor.advance()
    assert cursor.pos == 5
    assert cursor.remaining() == "z"

    cursor.advance()
    assert cursor.pos == 6
    assert cursor.remaining() == ""

    cursor.advance()
    assert cursor.pos == 6
    assert cursor.remaining() == ""


def test_advance_reports_end_of_input():
    cursor = Cursor("ab")
    assert cursor.advance() is True
    assert cursor.advance() is True
    assert cursor.advance() is False
    assert cursor.pos == 2


def test_peek_does_not_consume():
    cursor = Cursor("xy")
    assert cursor.peek() == "x"
    assert cursor.peek() == "x"
    cursor.advance()
    assert cursor.peek() == "y"
    cursor.advance()
    assert cursor.peek() is None


def test_peek_on_empty_input():
    cursor = Cursor("")
    assert cursor.peek() is None
    assert cursor.remaining() == ""
    assert cursor.pos == 0


def test_starts_with():
    cursor = Cursor("<!-- x -->")
    cursor.advance()
    cursor.advance()
    assert cursor.starts_with("--")
    assert cursor.starts_with("-")
    assert not cursor.starts_with("--!")
    assert cursor.starts_with("")


def test_starts_with_ignore_case_matches_ascii_letters():
    cursor = Cursor("<!doctyPe html>")
    cursor.advance()
    cursor.advance()
    assert cursor.starts_with_ignore_case("DOCTYPE")
    assert cursor.starts_with_ignore_case("doctype")
    assert not cursor.starts_with("DOCTYPE")


def test_starts_with_ignore_case_rejects_mismatch_and_short_input():
    cursor = Cursor("doct")
    assert not cursor.starts_with_ignore_case("DOCTYPE")
    assert not Cursor(" doctype").starts_with_ignore_case("DOCTYPE")


def test_starts_with_ignore_case_non_ascii_is_exact():
    assert Cursor("Äb").starts_with_ignore_case("Äb")
    assert not Cursor("äb").starts_with_ignore_case("Äb")


def test_read_uses_byte_offsets():
    cursor = Cursor("<!--コメント-->")
    assert cursor.read(4, 16) == "コメント"
    assert cursor.read(0, 4) == "<!--"
    assert cursor.read(16) == "-->"
    assert cursor.read() == "<!--コメント-->"


def test_read_is_independent_of_position():
    cursor = Cursor("before<tag>")
    for _ in range(7):
        cursor.advance()
    assert cursor.read(0, 6) == "before"
    assert cursor.read(cursor.pos) == "tag>"


def test_read_empty_range():
    assert Cursor("abc").read(2, 2) == ""


def test_read_inside_multibyte_character_raises():
    cursor = Cursor("あ")
    with pytest.raises(ValueError):
        cursor.read(0, 1)


def test_read_out_of_bounds_raises():
    cursor = Cursor("abc")
    with pytest.raises(ValueError):
        cursor.read(0, 10)
    with pytest.raises(ValueError):
        cursor.read(2, 1)


def test_len_is_byte_length():
    assert len(Cursor("tあ\nz")) == 6
    assert Cursor("tあ").source == "tあ"