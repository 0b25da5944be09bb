# topmark:header:start
#
#   project      : RbSource
#   file         : __init__.py
#   file_relpath : src/rbsource/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Diagnostic primitives.

Design:
    - Diagnostics are immutable `Diagnostic` instances.
    - While a source is parsed, diagnostics accumulate in a `DiagnosticLog`.
    - A processed source exposes them as an immutable `FrozenDiagnosticLog`.
"""

from __future__ import annotations

from rbsource.diagnostic.model import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    DiagnosticStats,
    FrozenDiagnosticLog,
    compute_diagnostic_stats,
)

__all__ = [
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticLog",
    "DiagnosticStats",
    "FrozenDiagnosticLog",
    "compute_diagnostic_stats",
]
