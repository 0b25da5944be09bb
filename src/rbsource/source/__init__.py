# topmark:header:start
#
#   project      : RbSource
#   file         : __init__.py
#   file_relpath : src/rbsource/source/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Source text primitives: buffers, ranges, tokens, comments and line views."""

from __future__ import annotations

from rbsource.source.buffer import EncodingFailure, SourceBuffer, build_buffer
from rbsource.source.lines import LineViews, materialize_lines
from rbsource.source.range import SourceRange
from rbsource.source.tokens import Comment, Token

__all__ = [
    "Comment",
    "EncodingFailure",
    "LineViews",
    "SourceBuffer",
    "SourceRange",
    "Token",
    "build_buffer",
    "materialize_lines",
]
