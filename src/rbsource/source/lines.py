# topmark:header:start
#
#   project      : RbSource
#   file         : lines.py
#   file_relpath : src/rbsource/source/lines.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

r"""Line views over a source text.

`materialize_lines` splits a text after every ``"\n"`` and returns two aligned
views: the raw lines (terminators kept, so ``"".join(raw) == text``) and the
trimmed lines (exactly one trailing ``"\r\n"``, ``"\n"`` or ``"\r"`` removed).

A lone ``"\r"`` is not a line boundary; only ``"\n"`` is, which keeps CRLF
sources aligned with the parser's line numbering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

_TERMINATORS: Final[tuple[str, ...]] = ("\r\n", "\n", "\r")


@dataclass(frozen=True, slots=True)
class LineViews:
    """Aligned raw and trimmed line sequences.

    Attributes:
        raw (tuple[str, ...]): Lines with their original terminators.
        trimmed (tuple[str, ...]): The same lines with their terminator stripped.
    """

    raw: tuple[str, ...]
    trimmed: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.raw) != len(self.trimmed):
            raise ValueError("raw and trimmed line views must have equal length")

    def __len__(self) -> int:
        return len(self.raw)


def trim_terminator(line: str) -> str:
    """Strip exactly one trailing line terminator from ``line``."""
    for terminator in _TERMINATORS:
        if line.endswith(terminator):
            return line[: -len(terminator)]
    return line


def split_raw_lines(text: str) -> list[str]:
    r"""Split ``text`` after every ``"\n"``, keeping terminators.

    An empty text has no lines; a text without a final newline ends with a
    partial line.
    """
    lines: list[str] = []
    start = 0
    while True:
        end = text.find("\n", start)
        if end < 0:
            break
        lines.append(text[start : end + 1])
        start = end + 1
    if start < len(text):
        lines.append(text[start:])
    return lines


def materialize_lines(text: str) -> LineViews:
    """Compute the raw and trimmed line views of ``text``."""
    raw = tuple(split_raw_lines(text))
    return LineViews(raw=raw, trimmed=tuple(trim_terminator(line) for line in raw))
