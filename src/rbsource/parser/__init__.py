# topmark:header:start
#
#   project      : RbSource
#   file         : __init__.py
#   file_relpath : src/rbsource/parser/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Parser integration: diagnostic routing, the tree-sitter Ruby adapter and the invoker."""

from __future__ import annotations

from rbsource.parser.engine import DiagnosticEngine
from rbsource.parser.invoker import ParseResult, ParseStatus, SourceParser, parse_buffer
from rbsource.parser.ruby import RubyParser

__all__ = [
    "DiagnosticEngine",
    "ParseResult",
    "ParseStatus",
    "RubyParser",
    "SourceParser",
    "parse_buffer",
]
