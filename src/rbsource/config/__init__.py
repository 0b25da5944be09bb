# topmark:header:start
#
#   project      : RbSource
#   file         : __init__.py
#   file_relpath : src/rbsource/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Runtime configuration for RbSource: logging setup and parser options."""

from __future__ import annotations

from rbsource.config.options import ParserOptions, load_parser_options

__all__ = ["ParserOptions", "load_parser_options"]
