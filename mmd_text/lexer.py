"""Lexical building blocks shared by the VPD and BVH text parsers.

Every parser here is a plain function ``(text, pos) -> (value, new_pos)``.
Failure raises :class:`ParseError`; since the cursor is just an integer the
caller can rewind by retrying from the position it already holds.
Skippers (``skip_*``) return only the new position.
"""

from __future__ import annotations

import math
import re
import struct
from typing import Callable, TypeVar

T = TypeVar("T")

Parser = Callable[[str, int], tuple[T, int]]

COMMENT_MARKER = "//"

_COMMENT = re.compile(r"//[^\r\n]*")
_DECIMAL = re.compile(r"[0-9]+(?:\.[0-9]+)?|\.[0-9]+")
_DIGITS = re.compile(r"[0-9]+")
_NON_WHITESPACE = re.compile(r"\S+")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def _describe(text: str, offset: int) -> str:
    if offset >= len(text):
        return "end of input"
    snippet = text[offset : offset + 16].split("\n", 1)[0]
    return repr(snippet or text[offset])


class ParseError(ValueError):
    """Input does not match the grammar at ``offset``.

    ``line`` and ``column`` (1-based) are computed on access.
    """

    def __init__(
        self, text: str, offset: int, expected: str, found: str | None = None
    ) -> None:
        self._text = text
        self.offset = offset
        self.expected = expected
        self.found = found if found is not None else _describe(text, offset)
        super().__init__(expected, self.found, offset)

    @property
    def line(self) -> int:
        return self._text.count("\n", 0, self.offset) + 1

    @property
    def column(self) -> int:
        return self.offset - (self._text.rfind("\n", 0, self.offset) + 1) + 1

    def __str__(self) -> str:
        return (
            f"Parsing failure: expected {self.expected}, found {self.found} "
            f"(line {self.line}, column {self.column})"
        )


class ArityError(ParseError):
    """A declared count (records, channels) is not met by the input."""

    def __init__(
        self, text: str, offset: int, what: str, declared: int, actual: int
    ) -> None:
        self.declared = declared
        self.actual = actual
        super().__init__(text, offset, f"{declared} {what}", f"{actual}")


# ---------------------------------------------------------------------------
# Numeric conversion
# ---------------------------------------------------------------------------

def to_single(value: float) -> float:
    """Round a Python float to IEEE single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


# ---------------------------------------------------------------------------
# Skippers
# ---------------------------------------------------------------------------

def skip_comment(text: str, pos: int) -> int:
    """Consume a ``//`` comment up to, not including, the line break."""
    m = _COMMENT.match(text, pos)
    if m is None:
        raise ParseError(text, pos, repr(COMMENT_MARKER))
    return m.end()


def skip_whitespace_or_comment(text: str, pos: int) -> int:
    end = len(text)
    while pos < end:
        if text[pos].isspace():
            pos += 1
        elif text.startswith(COMMENT_MARKER, pos):
            pos = skip_comment(text, pos)
        else:
            break
    return pos


def token(parser: Parser[T]) -> Parser[T]:
    """Wrap ``parser`` so whitespace and comments around it are skipped."""

    def parse_token(text: str, pos: int) -> tuple[T, int]:
        pos = skip_whitespace_or_comment(text, pos)
        value, pos = parser(text, pos)
        return value, skip_whitespace_or_comment(text, pos)

    return parse_token


# ---------------------------------------------------------------------------
# Terminals
# ---------------------------------------------------------------------------

def string(expected: str) -> Parser[str]:
    """Parser matching ``expected`` exactly."""

    def parse_string(text: str, pos: int) -> tuple[str, int]:
        if not text.startswith(expected, pos):
            raise ParseError(text, pos, repr(expected))
        return expected, pos + len(expected)

    return parse_string


def unsigned_integer(text: str, pos: int) -> tuple[int, int]:
    m = _DIGITS.match(text, pos)
    if m is None:
        raise ParseError(text, pos, "digits")
    return int(m.group()), m.end()


def signed_decimal(text: str, pos: int) -> tuple[float, int]:
    """Optional ``-`` then ``123``, ``0.071834`` or ``.5``, as single precision."""
    start = pos
    if text.startswith("-", pos):
        pos += 1
    m = _DECIMAL.match(text, pos)
    if m is None:
        raise ParseError(text, pos, "decimal number")
    literal = text[start : m.end()]
    try:
        value = to_single(float(literal))
    except OverflowError:
        raise ParseError(
            text, start, "single-precision number", repr(literal)
        ) from None
    if math.isinf(value):
        raise ParseError(text, start, "single-precision number", repr(literal))
    return value, m.end()


def non_whitespace_token(text: str, pos: int) -> tuple[str, int]:
    m = _NON_WHITESPACE.match(text, pos)
    if m is None:
        raise ParseError(text, pos, "non-whitespace characters")
    return m.group(), m.end()


def keyword(expected: str) -> Parser[str]:
    """Parser matching ``expected`` as a whole whitespace-delimited word."""

    def parse_keyword(text: str, pos: int) -> tuple[str, int]:
        m = _NON_WHITESPACE.match(text, pos)
        if m is None or m.group() != expected:
            raise ParseError(text, pos, repr(expected))
        return expected, m.end()

    return parse_keyword
