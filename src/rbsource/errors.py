# topmark:header:start
#
#   project      : RbSource
#   file         : errors.py
#   file_relpath : src/rbsource/errors.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Exception types raised by RbSource.

Only a handful of failures are modelled as exceptions. Routine outcomes such as
an undecodable buffer or a source with syntax errors are reported as values
(see `rbsource.source.buffer.EncodingFailure` and
`rbsource.parser.invoker.ParseStatus`), so callers get a uniform
`ProcessedSource.valid_syntax` signal instead of having to catch anything.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rbsource.diagnostic.model import Diagnostic


class RbsourceError(Exception):
    """Base class for all RbSource errors."""


class SourceSyntaxError(RbsourceError):
    """Raised by the parser when a diagnostic aborts parsing.

    The diagnostic has already been delivered to the diagnostic consumer by the
    time this is raised, so handlers do not need to record it again.

    Attributes:
        diagnostic (Diagnostic): The diagnostic that aborted parsing.
    """

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.render())
        self.diagnostic: Diagnostic = diagnostic


class CollaboratorMissingError(RbsourceError):
    """Raised when a processed source needs a collaborator nobody configured."""


class ConfigError(RbsourceError):
    """Raised when a configuration source cannot be read or is malformed."""
