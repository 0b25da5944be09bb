# topmark:header:start
#
#   project      : RbSource
#   file         : tokens.py
#   file_relpath : src/rbsource/source/tokens.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Normalized tokens and comments.

The parser adapter hands back raw tokens as ``(type, (text, range))`` tuples.
`Token.from_parser_token` maps each one onto the normalized `Token` view used by
the rest of RbSource; the mapping is one-to-one and order-preserving.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from rbsource.source.range import SourceRange

# Raw token as produced by the parser adapter: (type, (text, range)).
RawToken = tuple[str, tuple[str, "SourceRange"]]

COMMENT_TYPE: Final[str] = "comment"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token with its type tag, text and location.

    Attributes:
        pos (SourceRange): Location of the token in its buffer.
        type (str): Grammar type tag (e.g. ``"identifier"``, ``"="``, ``"comment"``).
        text (str): Token text exactly as it appears in the source.
    """

    pos: SourceRange
    type: str
    text: str

    @classmethod
    def from_parser_token(cls, raw: RawToken) -> Token:
        """Translate a raw parser token into a `Token`."""
        type_, (text, pos) = raw
        return cls(pos=pos, type=type_, text=text)

    @property
    def line(self) -> int:
        """Return the line the token starts on."""
        return self.pos.line

    @property
    def column(self) -> int:
        """Return the column the token starts at."""
        return self.pos.column

    @property
    def is_comment(self) -> bool:
        """Return True for comment tokens."""
        return self.type == COMMENT_TYPE

    def __str__(self) -> str:
        return f"[[{self.line}, {self.column}], {self.type}, {self.text!r}]"


@dataclass(frozen=True, slots=True)
class Comment:
    """A source comment.

    Attributes:
        text (str): Comment text including its ``#`` (or ``=begin``/``=end``) markers.
        location (SourceRange): Where the comment is.
    """

    text: str
    location: SourceRange

    @property
    def is_document(self) -> bool:
        """Return True for ``=begin``/``=end`` block comments."""
        return self.text.startswith("=begin")

    @property
    def is_inline(self) -> bool:
        """Return True when code precedes the comment on its line."""
        line = self.location.buffer.source_line(self.location.line)
        return bool(line[: self.location.column].strip())
