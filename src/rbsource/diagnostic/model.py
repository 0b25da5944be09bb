# topmark:header:start
#
#   project      : RbSource
#   file         : model.py
#   file_relpath : src/rbsource/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Core diagnostic types for RbSource.

Sections:
    * DiagnosticLevel: ordered severity levels with associated terminal colors.
    * Diagnostic: immutable structured diagnostic (level, reason, message, location).
    * DiagnosticStats: aggregated per-level counts.
    * DiagnosticLog: the append-only sink the parser reports into.
    * FrozenDiagnosticLog: immutable snapshot exposed once parsing is done.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from rbsource.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from rbsource.config.logging import RbsourceLogger
    from rbsource.source.range import SourceRange


logger: RbsourceLogger = get_logger(__name__)


@total_ordering
class DiagnosticLevel(Enum):
    """Severity levels for parser diagnostics, ordered NOTE < WARNING < ERROR < FATAL."""

    NOTE = "note"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def rank(self) -> int:
        """Return the position of this level in the severity order."""
        return _LEVEL_ORDER.index(self)

    @property
    def is_error(self) -> bool:
        """Return True for levels that make a source syntactically invalid."""
        return self.rank >= DiagnosticLevel.ERROR.rank

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DiagnosticLevel):
            return NotImplemented
        return self.rank < other.rank

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.NOTE: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
                DiagnosticLevel.FATAL: chalk.red.bold,
            }[self],
        )


_LEVEL_ORDER: tuple[DiagnosticLevel, ...] = tuple(DiagnosticLevel)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic reported by the parser.

    Attributes:
        level (DiagnosticLevel): Severity.
        reason (str): Stable machine-readable identifier (e.g. ``"unexpected_token"``).
        message (str): Human-readable message.
        location (SourceRange | None): Where the problem was found, if known.
    """

    level: DiagnosticLevel
    reason: str
    message: str
    location: SourceRange | None = None

    def render(self) -> str:
        """Return ``name:line:col: level: message`` (location omitted when unknown)."""
        text = f"{self.level.value}: {self.message}"
        if self.location is None:
            return text
        return f"{self.location}: {text}"


@dataclass(frozen=True, slots=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_note: int
    n_warning: int
    n_error: int
    n_fatal: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_note + self.n_warning + self.n_error + self.n_fatal


@dataclass
class DiagnosticLog:
    """Append-only, per-source collection of diagnostics.

    The parser reports into `record`, which is handed to it as a plain callable.
    The log performs no deduplication and no filtering by severity; once parsing
    is done the owner exposes a `freeze`-d snapshot instead of the log itself.
    """

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def record(self, diagnostic: Diagnostic) -> None:
        """Append a diagnostic to the end of the log.

        Args:
            diagnostic: The diagnostic reported by the parser.
        """
        self.items.append(diagnostic)
        logger.trace("Recording [%s]: %s", diagnostic.level.value, diagnostic.render())

    def freeze(self) -> FrozenDiagnosticLog:
        """Return an immutable snapshot of this log's diagnostics."""
        return FrozenDiagnosticLog(items=tuple(self.items))

    def has_error(self) -> bool:
        """Return True if the log contains error or fatal diagnostics."""
        return any(d.level.is_error for d in self.items)

    def stats(self) -> DiagnosticStats:
        """Return per-level counts for diagnostics in this log."""
        return compute_diagnostic_stats(self.items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class FrozenDiagnosticLog:
    """Immutable counterpart to `DiagnosticLog`, in recording order."""

    items: tuple[Diagnostic, ...] = ()

    def has_error(self) -> bool:
        """Return True if the snapshot contains error or fatal diagnostics."""
        return any(d.level.is_error for d in self.items)

    def stats(self) -> DiagnosticStats:
        """Return aggregated per-level counts for the contained diagnostics."""
        return compute_diagnostic_stats(self.items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity."""
        stats = self.stats()
        return {
            "note": stats.n_note,
            "warning": stats.n_warning,
            "error": stats.n_error,
            "fatal": stats.n_fatal,
        }

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Diagnostic:
        return self.items[index]


def compute_diagnostic_stats(diagnostics: Iterable[Diagnostic]) -> DiagnosticStats:
    """Return per-level counts for a sequence of diagnostics.

    Args:
        diagnostics: the diagnostics to count.

    Returns:
        Per-level counts.
    """
    counts: dict[DiagnosticLevel, int] = dict.fromkeys(DiagnosticLevel, 0)
    for d in diagnostics:
        counts[d.level] += 1
    return DiagnosticStats(
        n_note=counts[DiagnosticLevel.NOTE],
        n_warning=counts[DiagnosticLevel.WARNING],
        n_error=counts[DiagnosticLevel.ERROR],
        n_fatal=counts[DiagnosticLevel.FATAL],
    )
