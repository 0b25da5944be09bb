# topmark:header:start
#
#   project      : RbSource
#   file         : __init__.py
#   file_relpath : src/rbsource/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Command-line interface for RbSource."""

from __future__ import annotations
