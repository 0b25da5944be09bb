# topmark:header:start
#
#   project      : RbSource
#   file         : exit_codes.py
#   file_relpath : src/rbsource/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Exit codes used by the RbSource CLI."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the RbSource CLI.

    Attributes:
        SUCCESS (int): Every processed source has valid syntax.
        FAILURE (int): At least one source is invalid or could not be read.
        USAGE_ERROR (int): Bad configuration or command-line usage.
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 2
