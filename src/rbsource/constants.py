# topmark:header:start
#
#   project      : RbSource
#   file         : constants.py
#   file_relpath : src/rbsource/constants.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""RbSource Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    RBSOURCE_VERSION: str = get_version("rbsource")
except PackageNotFoundError:  # running from a source checkout
    RBSOURCE_VERSION = "0.0.0"

# Buffer name used when the source does not come from a file.
ANONYMOUS_BUFFER_NAME: str = "(string)"

# Encoding used to hand the buffer to the parser.
PROCESSING_ENCODING: str = "utf-8"

# Ruby looks for a magic encoding comment on the first two lines only.
MAGIC_COMMENT_MAX_LINES: int = 2

# Configuration sources.
PYPROJECT_TOML_NAME: str = "pyproject.toml"
RBSOURCE_TOML_NAME: str = "rbsource.toml"
TOOL_TABLE_NAME: str = "rbsource"

# Environment variable consulted for the runtime log level.
LOG_LEVEL_ENV_VAR: str = "RBSOURCE_LOG_LEVEL"
