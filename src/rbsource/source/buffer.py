# topmark:header:start
#
#   project      : RbSource
#   file         : buffer.py
#   file_relpath : src/rbsource/source/buffer.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Encoding-safe source buffer construction.

A `SourceBuffer` is the immutable unit of text handed to the parser. It is built
with `build_buffer`, which never raises for undecodable input: conversion
failures come back as an `EncodingFailure` value so the caller can skip parsing
and report the source as invalid.

``bytes`` input is decoded with the encoding named by a Ruby magic comment
(``# encoding: ...`` or ``# -*- coding: ... -*-``) on the first line, or on the
second line when the first one is a shebang, falling back to the requested
default. Ruby-only encoding names such as ``ASCII-8BIT`` are mapped to the
matching Python codec. ``str`` input must be representable in UTF-8, the
encoding the parser consumes.
"""

from __future__ import annotations

import codecs
import re
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rbsource.config.logging import get_logger
from rbsource.constants import (
    ANONYMOUS_BUFFER_NAME,
    MAGIC_COMMENT_MAX_LINES,
    PROCESSING_ENCODING,
)
from rbsource.source.lines import trim_terminator
from rbsource.source.range import SourceRange

if TYPE_CHECKING:
    from rbsource.config.logging import RbsourceLogger

logger: RbsourceLogger = get_logger(__name__)

_MAGIC_COMMENT_RE = re.compile(rb"^#.*?(?:en)?coding\s*[:=]\s*([A-Za-z0-9_.-]+)")

# Ruby encoding names unknown to Python's codec registry.
_RUBY_ENCODING_ALIASES: dict[str, str] = {
    "ascii-8bit": "latin-1",
    "binary": "latin-1",
    "utf8-mac": "utf-8",
    "utf-8-mac": "utf-8",
    "windows-31j": "cp932",
    "eucjp-ms": "euc-jp",
    "euc-jp-ms": "euc-jp",
}


@dataclass(frozen=True, slots=True)
class SourceBuffer:
    """Immutable in-memory source text plus an identifying name.

    Line numbers are 1-based (starting at ``first_line``); columns and offsets are
    0-based character positions into ``source``.

    Attributes:
        name (str): Identifying name (a path, or ``"(string)"`` when anonymous).
        source (str): The decoded source text.
        first_line (int): Line number of the first line of ``source``.
    """

    name: str
    source: str
    first_line: int = 1
    _line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts: list[int] = [0]
        starts.extend(m.end() for m in re.finditer("\n", self.source))
        object.__setattr__(self, "_line_starts", tuple(starts))

    @property
    def line_count(self) -> int:
        """Return the number of lines, counting a trailing partial line."""
        n = len(self._line_starts)
        # A trailing "\n" opens no new line of text.
        if not self.source or self.source.endswith("\n"):
            n -= 1
        return n

    @property
    def last_line(self) -> int:
        """Return the number of the last line of the buffer."""
        return self.first_line + max(self.line_count, 1) - 1

    def _line_index(self, offset: int) -> int:
        if offset < 0 or offset > len(self.source):
            raise IndexError(f"Offset {offset} is outside of buffer {self.name!r}")
        return bisect_right(self._line_starts, offset) - 1

    def decompose_position(self, offset: int) -> tuple[int, int]:
        """Convert a character offset into a ``(line, column)`` pair.

        Args:
            offset (int): 0-based character offset; ``len(source)`` is allowed and
                addresses the end of the buffer.

        Returns:
            tuple[int, int]: 1-based line number and 0-based column.

        Raises:
            IndexError: If ``offset`` lies outside the buffer.
        """
        index = self._line_index(offset)
        return self.first_line + index, offset - self._line_starts[index]

    def line_for_offset(self, offset: int) -> int:
        """Return the line number containing ``offset``."""
        return self.decompose_position(offset)[0]

    def column_for_offset(self, offset: int) -> int:
        """Return the column of ``offset`` within its line."""
        return self.decompose_position(offset)[1]

    def source_lines(self) -> list[str]:
        """Return all lines of the buffer without their terminators."""
        return [self.source_line(lineno) for lineno in range(self.first_line, self.last_line + 1)]

    def source_line(self, lineno: int) -> str:
        """Return line ``lineno`` without its terminator.

        Raises:
            IndexError: If the buffer has no such line.
        """
        begin, end = self._line_bounds(lineno)
        return trim_terminator(self.source[begin:end])

    def line_range(self, lineno: int) -> SourceRange:
        """Return the range covering line ``lineno``, terminator excluded."""
        begin, _ = self._line_bounds(lineno)
        return SourceRange(self, begin, begin + len(self.source_line(lineno)))

    def _line_bounds(self, lineno: int) -> tuple[int, int]:
        index = lineno - self.first_line
        if index < 0 or index >= max(self.line_count, 1):
            raise IndexError(f"Line {lineno} is outside of buffer {self.name!r}")
        begin = self._line_starts[index]
        end = (
            self._line_starts[index + 1]
            if index + 1 < len(self._line_starts)
            else len(self.source)
        )
        return begin, end


@dataclass(frozen=True, slots=True)
class EncodingFailure:
    """Terminal outcome of a buffer that could not be built.

    Attributes:
        name (str): Identifying name of the rejected source.
        cause (Exception): The underlying conversion error.
    """

    name: str
    cause: Exception

    @property
    def message(self) -> str:
        """Return a human-readable description of the failure."""
        return f"{self.name}: cannot decode source: {self.cause}"


def detect_magic_encoding(data: bytes) -> str | None:
    """Return the encoding named by a magic comment, if any.

    Like Ruby, only the first line is inspected, plus the second one when the
    first line is a shebang (``#!``).
    """
    lines = data.splitlines()[:MAGIC_COMMENT_MAX_LINES]
    if lines and not lines[0].startswith(b"#!"):
        lines = lines[:1]
    for line in lines:
        match = _MAGIC_COMMENT_RE.match(line)
        if match:
            return match.group(1).decode("ascii")
    return None


def resolve_encoding(name: str) -> str:
    """Return the Python codec name for a Ruby encoding name."""
    return _RUBY_ENCODING_ALIASES.get(name.lower(), name)


def _decode(data: bytes, default_encoding: str) -> str:
    if data.startswith(codecs.BOM_UTF8):
        return data[len(codecs.BOM_UTF8) :].decode("utf-8")
    encoding = detect_magic_encoding(data) or default_encoding
    return data.decode(resolve_encoding(encoding))


def build_buffer(
    name: str | None,
    source: str | bytes,
    *,
    encoding: str | None = None,
) -> SourceBuffer | EncodingFailure:
    """Build a buffer from raw source text.

    Args:
        name (str | None): Identifying name; ``None`` selects the anonymous placeholder.
        source (str | bytes): The raw source. ``bytes`` are decoded (see module docs).
        encoding (str | None): Fallback encoding for ``bytes`` without a magic comment.

    Returns:
        SourceBuffer | EncodingFailure: The buffer, or the failure that prevented it.
    """
    buffer_name = name if name is not None else ANONYMOUS_BUFFER_NAME
    try:
        if isinstance(source, bytes):
            text = _decode(source, encoding or PROCESSING_ENCODING)
        else:
            text = source
        # The parser consumes the buffer in the processing encoding.
        text.encode(PROCESSING_ENCODING)
    except (UnicodeError, LookupError) as exc:
        logger.warning("Cannot build buffer for %s: %s", buffer_name, exc)
        return EncodingFailure(name=buffer_name, cause=exc)

    logger.trace("Built buffer %s (%d chars)", buffer_name, len(text))
    return SourceBuffer(name=buffer_name, source=text)
