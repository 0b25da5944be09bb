# topmark:header:start
#
#   project      : RbSource
#   file         : suppression.py
#   file_relpath : src/rbsource/suppression.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Seam for the suppression-comment collaborator.

Interpreting comments such as ``# rubocop:disable Style/Foo`` is not done here.
A processed source only builds the collaborator (from itself) on first use and
asks it for the disabled line ranges.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


class CommentConfigLike(Protocol):
    """Structural interface of the suppression-range resolver."""

    def cop_disabled_line_ranges(self) -> Mapping[str, Sequence[range]]:
        """Return ordered disabled line ranges, keyed by suppression key."""
        ...

