# topmark:header:start
#
#   project      : RbSource
#   file         : fakes.py
#   file_relpath : tests/fakes.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Scripted stand-ins for the external parser and the suppression collaborator."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from rbsource.diagnostic.model import Diagnostic, DiagnosticLevel
from rbsource.parser.engine import DiagnosticEngine
from rbsource.source.range import SourceRange

if TYPE_CHECKING:
    from rbsource.processed_source import ProcessedSource
    from rbsource.source.buffer import SourceBuffer
    from rbsource.source.tokens import Comment, RawToken


def diag(level: DiagnosticLevel, message: str = "boom") -> Diagnostic:
    """Return a location-less diagnostic."""
    return Diagnostic(level=level, reason=message.replace(" ", "_"), message=message)


@dataclass
class FakeParser:
    """Parser that reports scripted diagnostics and returns one token per word.

    Attributes:
        script (Sequence[Diagnostic]): Diagnostics reported, in order, before returning.
        crash (Exception | None): Raised after the script when set.
        calls (int): Number of `tokenize` calls.
    """

    script: Sequence[Diagnostic] = ()
    crash: Exception | None = None
    diagnostics: DiagnosticEngine = field(default_factory=DiagnosticEngine)
    calls: int = 0

    def tokenize(self, buffer: SourceBuffer) -> tuple[Any, list[Comment], list[RawToken]]:
        self.calls += 1
        for d in self.script:
            self.diagnostics.process(d)
        if self.crash is not None:
            raise self.crash
        tokens: list[RawToken] = []
        offset = 0
        for word in buffer.source.split():
            begin = buffer.source.index(word, offset)
            offset = begin + len(word)
            tokens.append(("word", (word, SourceRange(buffer, begin, offset))))
        return {"root": buffer.name}, [], tokens


class FakeCommentConfig:
    """Suppression collaborator returning fixed ranges and counting its builds."""

    builds: int = 0

    def __init__(self, processed_source: ProcessedSource) -> None:
        FakeCommentConfig.builds += 1
        self.processed_source = processed_source

    def cop_disabled_line_ranges(self) -> Mapping[str, Sequence[range]]:
        return {"Style/Foo": [range(1, 3)]}
