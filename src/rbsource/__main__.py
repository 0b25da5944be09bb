# topmark:header:start
#
#   project      : RbSource
#   file         : __main__.py
#   file_relpath : src/rbsource/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Module entry point for running RbSource via ``python -m rbsource``."""

from __future__ import annotations

from rbsource.cli.main import cli

if __name__ == "__main__":
    cli()
