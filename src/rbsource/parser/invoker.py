# topmark:header:start
#
#   project      : RbSource
#   file         : invoker.py
#   file_relpath : src/rbsource/parser/invoker.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Configure and invoke the external parser for one buffer.

`parse_buffer` wires a diagnostic-append callable into a freshly created parser,
runs it, and turns the outcome into a tagged `ParseResult`:

  * `ParseStatus.OK`: tree, comments and normalized tokens are all present;
  * `ParseStatus.SYNTAX_FAILED`: the parser gave up; the reason is already in the
    diagnostics, so nothing is raised and no partial result is exposed;
  * `ParseStatus.ENCODING_FAILED`: the buffer could not be built and the parser
    was never invoked (see `ParseResult.encoding_failed`).

Only `SourceSyntaxError` is absorbed; anything else the parser raises propagates.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

from rbsource.config.logging import get_logger
from rbsource.config.options import ParserOptions
from rbsource.errors import SourceSyntaxError
from rbsource.parser.engine import DiagnosticEngine
from rbsource.parser.ruby import RubyParser
from rbsource.source.tokens import Token

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from rbsource.config.logging import RbsourceLogger
    from rbsource.diagnostic.model import Diagnostic
    from rbsource.source.buffer import EncodingFailure, SourceBuffer
    from rbsource.source.tokens import Comment, RawToken

logger: RbsourceLogger = get_logger(__name__)


class SourceParser(Protocol):
    """Structural interface of the external parser."""

    diagnostics: DiagnosticEngine

    def tokenize(
        self, buffer: SourceBuffer
    ) -> tuple[Any, Sequence[Comment], Sequence[RawToken]]:
        """Parse ``buffer`` into ``(tree_root, comments, raw_tokens)``."""
        ...


class ParseStatus(Enum):
    """Outcome of parsing one source."""

    OK = "ok"
    SYNTAX_FAILED = "syntax_failed"
    ENCODING_FAILED = "encoding_failed"


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Tagged parse outcome.

    ``ast``, ``comments`` and ``tokens`` are either all set (`ParseStatus.OK`) or
    all ``None``.

    Attributes:
        status (ParseStatus): What happened.
        ast (Any | None): Root of the syntax tree.
        comments (tuple[Comment, ...] | None): Comments in source order.
        tokens (tuple[Token, ...] | None): Normalized tokens in source order.
        error (Exception | None): The encoding failure cause, for `ENCODING_FAILED`.
    """

    status: ParseStatus
    ast: Any | None = None
    comments: tuple[Comment, ...] | None = None
    tokens: tuple[Token, ...] | None = None
    error: Exception | None = None

    @classmethod
    def encoding_failed(cls, failure: EncodingFailure) -> ParseResult:
        """Return the result for a buffer that could not be built."""
        return cls(status=ParseStatus.ENCODING_FAILED, error=failure.cause)

    @property
    def ok(self) -> bool:
        """Return True when tree, comments and tokens are available."""
        return self.status == ParseStatus.OK


def create_parser(
    record: Callable[[Diagnostic], None],
    options: ParserOptions,
    parser_factory: Callable[[], SourceParser] = RubyParser,
) -> SourceParser:
    """Create a parser that reports its diagnostics through ``record``.

    Args:
        record (Callable[[Diagnostic], None]): Called once per diagnostic, in order.
        options (ParserOptions): Fatality and warning handling.
        parser_factory (Callable[[], SourceParser]): Builds the bare parser.

    Returns:
        SourceParser: The configured parser.
    """
    parser = parser_factory()
    parser.diagnostics = DiagnosticEngine(
        record,
        all_errors_are_fatal=options.all_errors_are_fatal,
        ignore_warnings=options.ignore_warnings,
    )
    return parser


def parse_buffer(
    buffer: SourceBuffer,
    record: Callable[[Diagnostic], None],
    *,
    options: ParserOptions | None = None,
    parser_factory: Callable[[], SourceParser] = RubyParser,
) -> ParseResult:
    """Parse ``buffer``, reporting diagnostics through ``record``.

    Args:
        buffer (SourceBuffer): The buffer to parse.
        record (Callable[[Diagnostic], None]): Diagnostic sink callback.
        options (ParserOptions | None): Parser options; defaults when omitted.
        parser_factory (Callable[[], SourceParser]): Builds the bare parser.

    Returns:
        ParseResult: `ParseStatus.OK` with tree, comments and tokens, or
        `ParseStatus.SYNTAX_FAILED` with nothing.
    """
    parser = create_parser(record, options or ParserOptions(), parser_factory)

    try:
        ast, comments, raw_tokens = parser.tokenize(buffer)
    except SourceSyntaxError as exc:
        # Already delivered to ``record`` by the diagnostic engine.
        logger.debug("Parsing %s failed: %s", buffer.name, exc)
        return ParseResult(status=ParseStatus.SYNTAX_FAILED)

    tokens = tuple(Token.from_parser_token(raw) for raw in raw_tokens)
    logger.debug("Parsed %s: %d tokens", buffer.name, len(tokens))
    return ParseResult(
        status=ParseStatus.OK,
        ast=ast,
        comments=tuple(comments),
        tokens=tokens,
    )
