import io

import pytest

from cubraycaster.textutil import (
    collapse_whitespace,
    format_error,
    has_content,
    has_suffix,
    iter_lines,
    rtrim_map_line,
    split_words,
    trim,
)


def test_iter_lines_keeps_newlines():
    assert list(iter_lines(io.StringIO("NO a\nSO b\n"))) == ["NO a\n", "SO b\n"]


def test_iter_lines_last_line_without_newline():
    assert list(iter_lines(io.StringIO("one\ntwo"))) == ["one\n", "two"]


def test_iter_lines_empty_stream():
    assert list(iter_lines(io.StringIO(""))) == []


def test_iter_lines_keeps_blank_lines():
    assert list(iter_lines(io.StringIO("a\n\nb\n"))) == ["a\n", "\n", "b\n"]


def test_iter_lines_round_trip_over_long_lines():
    text = "x" * 10000 + "\n" + "1" * 5000 + "\n\n" + "tail"
    lines = list(iter_lines(io.StringIO(text)))
    assert "".join(lines) == text
    assert all(line.endswith("\n") for line in lines[:-1])
    assert len(lines) == text.count("\n") + 1


def test_split_words_skips_empty_fields():
    assert split_words(",,255,,0,", ",") == ["255", "0"]


def test_split_words_on_space():
    assert split_words("NO ./path.xpm", " ") == ["NO", "./path.xpm"]


def test_split_words_empty_text():
    assert split_words("", ",") == []


def test_split_words_rejects_long_separator():
    with pytest.raises(ValueError):
        split_words("a,b", ",,")


def test_trim_both_ends():
    assert trim("\t  NO ./a.xpm \r\n", "\n \t\r\v\f") == "NO ./a.xpm"


def test_trim_everything():
    assert trim(" \n\t", "\n \t\r\v\f") == ""


def test_rtrim_map_line_keeps_leading_spaces():
    assert rtrim_map_line("   1111 \n", "\n \t\r\v\f") == "   1111"


def test_rtrim_map_line_drops_leading_newlines():
    assert rtrim_map_line("\n\n101\n", "\n \t\r\v\f") == "101"


def test_has_suffix_matches_extension():
    assert has_suffix("maps/level.cub", ".cub", 4)


@pytest.mark.parametrize("name", ["maps/level.cup", "level.cubx", "cub", ""])
def test_has_suffix_rejects(name):
    assert not has_suffix(name, ".cub", 4)


def test_has_suffix_zero_length_always_matches():
    assert has_suffix("abc", "xyz", 0)


def test_has_suffix_negative_length():
    with pytest.raises(ValueError):
        has_suffix("abc", "abc", -1)


@pytest.mark.parametrize("text, expected", [("  1 ", True), (" \t\n", False), ("", False)])
def test_has_content(text, expected):
    assert has_content(text) is expected


def test_has_content_none():
    assert has_content(None) is False


def test_collapse_whitespace_runs_become_one_space():
    assert collapse_whitespace("F \t 220,100,0") == "F 220,100,0"


def test_collapse_whitespace_leaves_single_spaces():
    text = "NO ./north.xpm"
    assert collapse_whitespace(text) == text


def test_collapse_whitespace_has_no_double_spaces():
    result = collapse_whitespace("a\t\t\v b  \r c")
    assert "  " not in result
    assert result.split(" ") == ["a", "b", "c"]


def test_format_error_wraps_message():
    message = "Empty map"
    formatted = format_error(message)
    assert formatted == "\033[0;31mError:\033[0m \033[0;33m" + message + "\033[0m\n"