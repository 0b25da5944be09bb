# topmark:header:start
#
#   project      : RbSource
#   file         : range.py
#   file_relpath : src/rbsource/source/range.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Character ranges within a `SourceBuffer`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rbsource.source.buffer import SourceBuffer


@dataclass(frozen=True, slots=True)
class SourceRange:
    """Half-open ``[begin_pos, end_pos)`` character range within a buffer.

    Attributes:
        buffer (SourceBuffer): The buffer the range points into.
        begin_pos (int): 0-based offset of the first character.
        end_pos (int): 0-based offset one past the last character.
    """

    buffer: SourceBuffer = field(repr=False)
    begin_pos: int
    end_pos: int

    def __post_init__(self) -> None:
        if self.end_pos < self.begin_pos:
            raise ValueError(f"Range end {self.end_pos} precedes its begin {self.begin_pos}")

    @property
    def line(self) -> int:
        """Return the line number of the range start."""
        return self.buffer.line_for_offset(self.begin_pos)

    @property
    def column(self) -> int:
        """Return the column of the range start."""
        return self.buffer.column_for_offset(self.begin_pos)

    @property
    def last_line(self) -> int:
        """Return the line number of the range end."""
        return self.buffer.line_for_offset(self.end_pos)

    @property
    def last_column(self) -> int:
        """Return the column of the range end."""
        return self.buffer.column_for_offset(self.end_pos)

    @property
    def size(self) -> int:
        """Return the number of characters covered."""
        return self.end_pos - self.begin_pos

    @property
    def source(self) -> str:
        """Return the text covered by the range."""
        return self.buffer.source[self.begin_pos : self.end_pos]

    def join(self, other: SourceRange) -> SourceRange:
        """Return the smallest range covering both ``self`` and ``other``."""
        return SourceRange(
            self.buffer,
            min(self.begin_pos, other.begin_pos),
            max(self.end_pos, other.end_pos),
        )

    def __str__(self) -> str:
        return f"{self.buffer.name}:{self.line}:{self.column + 1}"
