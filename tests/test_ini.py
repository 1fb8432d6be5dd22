import io

import pytest

from gpumon.ini import (
    INI_MAX_LINE,
    MAX_SECTION,
    IniParseError,
    parse,
    parse_file,
    parse_stream,
    parse_string,
)


def collect(text):
    entries = []
    parse_string(text, lambda s, n, v: entries.append((s, n, v)))
    return entries


def test_sections_and_pairs():
    text = "[general]\n  name = value  \n[other]\nkey=val\n"
    assert collect(text) == [
        ("general", "name", "value"),
        ("other", "key", "val"),
    ]


def test_pair_before_any_section_has_empty_section():
    assert collect("top=1\n[s]\nx=2") == [("", "top", "1"), ("s", "x", "2")]


def test_colon_separator():
    assert collect("[s]\nname: value\n") == [("s", "name", "value")]


def test_start_of_line_comments_and_blank_lines():
    text = "; comment\n# other comment\n\n[s]\na=b\n"
    assert collect(text) == [("s", "a", "b")]


def test_inline_comment_needs_preceding_space():
    text = "[s]\na=b ; comment\nc=d;kept\n"
    assert collect(text) == [("s", "a", "b"), ("s", "c", "d;kept")]


def test_multiline_continuation():
    text = "[s]\nname=first\n  second\n  third\nother=x\n"
    assert collect(text) == [
        ("s", "name", "first"),
        ("s", "name", "second"),
        ("s", "name", "third"),
        ("s", "other", "x"),
    ]


def test_continuation_not_after_section_heading():
    with pytest.raises(IniParseError) as excinfo:
        collect("[s]\n  indented\n")
    assert excinfo.value.lineno == 2


def test_missing_separator_reports_line_and_continues():
    entries = []
    with pytest.raises(IniParseError) as excinfo:
        parse_string("[s]\na=1\nbroken\nb=2\n", lambda s, n, v: entries.append((s, n, v)))
    assert excinfo.value.lineno == 3
    assert entries == [("s", "a", "1"), ("s", "b", "2")]


def test_first_error_is_reported():
    with pytest.raises(IniParseError) as excinfo:
        collect("bad1\n[unterminated\nbad2\n")
    assert excinfo.value.lineno == 1


def test_section_without_closing_bracket():
    with pytest.raises(IniParseError) as excinfo:
        collect("a=1\n[sec\n")
    assert excinfo.value.lineno == 2


def test_handler_returning_false_is_an_error():
    seen = []

    def handler(section, name, value):
        seen.append(name)
        return name != "bad"

    with pytest.raises(IniParseError) as excinfo:
        parse_string("ok=1\nbad=2\nalso=3\n", handler)
    assert excinfo.value.lineno == 2
    assert seen == ["ok", "bad", "also"]


def test_bom_is_skipped():
    assert collect("\ufeff[s]\na=b\n") == [("s", "a", "b")]


def test_long_section_name_is_truncated():
    long_name = "x" * 80
    entries = collect(f"[{long_name}]\na=b\n")
    assert entries == [(long_name[: MAX_SECTION - 1], "a", "b")]


def test_overlong_line_is_split():
    entries = []
    with pytest.raises(IniParseError) as excinfo:
        parse_string("a=" + "x" * 300 + "\n", lambda s, n, v: entries.append(v))
    assert excinfo.value.lineno == 2
    assert entries == ["x" * (INI_MAX_LINE - 3)]


def test_parse_stream_accepts_lines():
    entries = []
    parse_stream(["[s]\n", "k = v\n"], lambda s, n, v: entries.append((s, n, v)))
    assert entries == [("s", "k", "v")]


def test_parse_file_reads_open_file():
    entries = []
    buffer = io.StringIO("[s]\nk=v\n")
    parse_file(buffer, lambda s, n, v: entries.append((s, n, v)))
    assert entries == [("s", "k", "v")]
    assert not buffer.closed


def test_parse_reads_named_file(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[gpu]\nname = main\n", encoding="utf-8")
    entries = []
    parse(path, lambda s, n, v: entries.append((s, n, v)))
    assert entries == [("gpu", "name", "main")]


def test_parse_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse(tmp_path / "absent.ini", lambda s, n, v: True)