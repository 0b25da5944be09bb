# topmark:header:start
#
#   project      : RbSource
#   file         : __init__.py
#   file_relpath : src/rbsource/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""RbSource package.

RbSource turns raw Ruby source text into a processed source: a parsed syntax
tree, a normalized token stream, the attached comments, and the diagnostics the
parser reported, together with line-indexed views of the text for reporting.
"""

from __future__ import annotations

from rbsource.processed_source import ProcessedSource

__all__ = ["ProcessedSource"]
