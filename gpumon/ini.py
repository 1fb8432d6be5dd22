"""A small parser for INI-style configuration data.

Lines may hold ``[section]`` headings, ``name=value`` or ``name:value``
pairs, and comments starting with ``;`` or ``#``. Values may continue on
indented lines that follow them. Each pair is handed to a callback as
``handler(section, name, value)``. A handler that returns ``False``
marks its line as an error; any other return value counts as success.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional, TextIO, Union
import os

# Longest line read at once, counting room for "\r", "\n" and a terminator.
INI_MAX_LINE = 200
# Longest section name kept, terminator included.
MAX_SECTION = 50
# Longest name remembered for continuation lines, terminator included.
MAX_NAME = 50

START_COMMENT_PREFIXES = ";#"
INLINE_COMMENT_PREFIXES = ";"

_WHITESPACE = " \t\n\v\f\r"
_BOM = "\ufeff"

Handler = Callable[[str, str, str], object]


class IniParseError(Exception):
    """Raised when a line could not be parsed or its handler failed.

    Parsing goes on past a bad line; ``lineno`` is the first bad line.
    """

    def __init__(self, lineno: int) -> None:
        super().__init__(f"INI parse error on line {lineno}")
        self.lineno = lineno


def _find_chars_or_comment(text: str, chars: Optional[str]) -> int:
    """Index of the first char of ``chars`` or of an inline comment.

    An inline comment must follow a whitespace character. Returns
    ``len(text)`` when neither is found.
    """
    was_space = False
    for index, char in enumerate(text):
        if chars and char in chars:
            return index
        if was_space and char in INLINE_COMMENT_PREFIXES:
            return index
        was_space = char in _WHITESPACE
    return len(text)


def _chunks(lines: Iterable[str]) -> Iterator[str]:
    """Split lines into the pieces a fixed-size line reader would return."""
    limit = INI_MAX_LINE - 1
    for line in lines:
        if not line:
            continue
        for offset in range(0, len(line), limit):
            yield line[offset : offset + limit]


def parse_stream(lines: Iterable[str], handler: Handler) -> None:
    """Parse INI data given as an iterable of lines.

    Raises :class:`IniParseError` carrying the first bad line number once
    every line has been read.
    """
    section = ""
    prev_name = ""
    error = 0

    def fail(lineno: int) -> None:
        nonlocal error
        if not error:
            error = lineno

    for lineno, raw in enumerate(_chunks(lines), start=1):
        line = raw
        if lineno == 1 and line.startswith(_BOM):
            line = line[len(_BOM) :]
            offset_from_start = True
        else:
            offset_from_start = False
        trimmed = line.rstrip(_WHITESPACE)
        start = trimmed.lstrip(_WHITESPACE)
        indented = offset_from_start or len(start) < len(trimmed)

        if not start or start[0] in START_COMMENT_PREFIXES:
            continue
        if prev_name and indented:
            if handler(section, prev_name, start) is False:
                fail(lineno)
        elif start[0] == "[":
            body = start[1:]
            end = _find_chars_or_comment(body, "]")
            if end < len(body) and body[end] == "]":
                section = body[:end][: MAX_SECTION - 1]
                prev_name = ""
            else:
                fail(lineno)
        else:
            end = _find_chars_or_comment(start, "=:")
            if end < len(start) and start[end] in "=:":
                name = start[:end].rstrip(_WHITESPACE)
                value = start[end + 1 :]
                value = value[: _find_chars_or_comment(value, None)]
                value = value.strip(_WHITESPACE)
                prev_name = name[: MAX_NAME - 1]
                if handler(section, name, value) is False:
                    fail(lineno)
            else:
                fail(lineno)

    if error:
        raise IniParseError(error)


def _string_lines(text: str) -> Iterator[str]:
    text = text.split("\0", 1)[0]
    pieces = text.split("\n")
    for piece in pieces[:-1]:
        yield piece + "\n"
    if pieces[-1]:
        yield pieces[-1]


def parse_string(text: str, handler: Handler) -> None:
    """Parse INI data held in a string."""
    parse_stream(_string_lines(text), handler)


def parse_file(file: TextIO, handler: Handler) -> None:
    """Parse INI data from an open text file; the file is left open."""
    parse_stream(file, handler)


def parse(filename: Union[str, "os.PathLike[str]"], handler: Handler) -> None:
    """Parse the INI file at ``filename``.

    Raises :class:`OSError` when the file cannot be opened.
    """
    with open(filename, "r", encoding="utf-8") as file:
        parse_file(file, handler)