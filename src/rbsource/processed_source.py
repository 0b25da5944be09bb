# topmark:header:start
#
#   project      : RbSource
#   file         : processed_source.py
#   file_relpath : src/rbsource/processed_source.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""The processed source façade.

A `ProcessedSource` is built once per source text. Construction builds the
buffer, runs the parser and freezes the diagnostics; everything else (line
views, the suppression collaborator) is derived lazily on first access and
cached for the lifetime of the instance.

Examples:
    Check a snippet and look at its lines::

        ps = ProcessedSource("def foo\\n  1\\nend\\n")
        assert ps.valid_syntax
        assert ps.lines == ("def foo", "  1", "end")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, overload

from rbsource.config.logging import get_logger
from rbsource.config.options import ParserOptions
from rbsource.constants import ANONYMOUS_BUFFER_NAME
from rbsource.diagnostic.model import DiagnosticLog, FrozenDiagnosticLog
from rbsource.errors import CollaboratorMissingError
from rbsource.parser.invoker import ParseResult, ParseStatus, parse_buffer
from rbsource.parser.ruby import RubyParser
from rbsource.source.buffer import EncodingFailure, build_buffer
from rbsource.source.lines import LineViews, materialize_lines

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from rbsource.config.logging import RbsourceLogger
    from rbsource.parser.invoker import SourceParser
    from rbsource.source.buffer import SourceBuffer
    from rbsource.source.tokens import Comment, Token
    from rbsource.suppression import CommentConfigLike

logger: RbsourceLogger = get_logger(__name__)


class ProcessedSource:
    """Parsed source with its tokens, comments, diagnostics and line views.

    Args:
        source (str | bytes): Source text; ``bytes`` are decoded honouring a magic
            encoding comment.
        path (str | Path | None): Where the source came from. Also used as the buffer
            name; anonymous sources are named ``"(string)"``.
        options (ParserOptions | None): Parser options; defaults when omitted.
        parser_factory (Callable[[], SourceParser] | None): Builds the external parser;
            defaults to `RubyParser`.
        comment_config_factory (Callable[[ProcessedSource], CommentConfigLike] | None):
            Builds the suppression-range collaborator on first use.
    """

    def __init__(
        self,
        source: str | bytes,
        path: str | Path | None = None,
        *,
        options: ParserOptions | None = None,
        parser_factory: Callable[[], SourceParser] | None = None,
        comment_config_factory: Callable[[ProcessedSource], CommentConfigLike] | None = None,
    ) -> None:
        self._path: str | None = str(path) if path is not None else None
        self._options: ParserOptions = options or ParserOptions()
        self._comment_config_factory = comment_config_factory
        self._comment_config: CommentConfigLike | None = None
        self._line_views: LineViews | None = None
        self._buffer: SourceBuffer | None = None
        self._fallback_text: str = source if isinstance(source, str) else ""

        sink = DiagnosticLog()
        built = build_buffer(self._path, source, encoding=self._options.default_encoding)
        if isinstance(built, EncodingFailure):
            self._result: ParseResult = ParseResult.encoding_failed(built)
        else:
            self._buffer = built
            self._result = parse_buffer(
                built,
                sink.record,
                options=self._options,
                parser_factory=parser_factory or RubyParser,
            )
        self._diagnostics: FrozenDiagnosticLog = sink.freeze()
        logger.debug(
            "Processed %s: %s, %d diagnostic(s)",
            self.name,
            self._result.status.value,
            len(self._diagnostics),
        )

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: Any) -> ProcessedSource:
        """Read the whole file at ``path`` and process it.

        The file is read as bytes so that a magic encoding comment is honoured.

        Raises:
            OSError: If the file cannot be read.
        """
        data = Path(path).read_bytes()
        return cls(data, path, **kwargs)

    # --- read accessors ---

    @property
    def path(self) -> str | None:
        """Return the source path, or None for anonymous sources."""
        return self._path

    @property
    def name(self) -> str:
        """Return the buffer name (the path, or ``"(string)"``)."""
        return self._path if self._path is not None else ANONYMOUS_BUFFER_NAME

    @property
    def buffer(self) -> SourceBuffer | None:
        """Return the buffer, or None when it could not be built."""
        return self._buffer

    @property
    def parse_result(self) -> ParseResult:
        """Return the tagged parse outcome."""
        return self._result

    @property
    def ast(self) -> Any | None:
        """Return the syntax tree root, or None when parsing failed."""
        return self._result.ast

    @property
    def comments(self) -> tuple[Comment, ...] | None:
        """Return the comments, or None when parsing failed."""
        return self._result.comments

    @property
    def tokens(self) -> tuple[Token, ...] | None:
        """Return the normalized tokens, or None when parsing failed."""
        return self._result.tokens

    @property
    def diagnostics(self) -> FrozenDiagnosticLog:
        """Return the diagnostics in the order the parser reported them."""
        return self._diagnostics

    @property
    def parser_error(self) -> Exception | None:
        """Return the encoding failure cause, if the buffer could not be built."""
        return self._result.error

    # --- validity ---

    @property
    def valid_syntax(self) -> bool:
        """Return True unless the buffer failed or an error/fatal diagnostic exists."""
        if self._result.status == ParseStatus.ENCODING_FAILED:
            return False
        return not self._diagnostics.has_error()

    def is_valid_syntax(self) -> bool:
        """Return `valid_syntax`."""
        return self.valid_syntax

    # --- line views ---

    def _views(self) -> LineViews:
        if self._line_views is None:
            text = self._buffer.source if self._buffer is not None else self._fallback_text
            self._line_views = materialize_lines(text)
        return self._line_views

    @property
    def lines(self) -> tuple[str, ...]:
        """Return the lines without their terminators."""
        return self._views().trimmed

    @property
    def raw_lines(self) -> tuple[str, ...]:
        """Return the lines with their original terminators."""
        return self._views().raw

    @overload
    def __getitem__(self, key: int) -> str | None: ...

    @overload
    def __getitem__(self, key: slice | tuple[int, int]) -> tuple[str, ...] | None: ...

    def __getitem__(self, key: int | slice | tuple[int, int]) -> str | tuple[str, ...] | None:
        """Index the trimmed lines.

        ``ps[i]`` returns a line or None when out of range (negative indices count
        from the end), ``ps[a:b]`` slices as any sequence, and ``ps[start, length]``
        returns up to ``length`` lines from ``start`` (None when ``start`` is past
        the end or ``length`` is negative).
        """
        lines = self.lines
        if isinstance(key, slice):
            return lines[key]
        if isinstance(key, tuple):
            start, length = key
            return _take(lines, start, length)
        if -len(lines) <= key < len(lines):
            return lines[key]
        return None

    # --- suppression collaborator ---

    @property
    def comment_config(self) -> CommentConfigLike:
        """Return the suppression-range collaborator, building it on first use.

        Raises:
            CollaboratorMissingError: If no collaborator factory was configured.
        """
        if self._comment_config is None:
            if self._comment_config_factory is None:
                raise CollaboratorMissingError(
                    f"No comment config collaborator configured for {self.name}"
                )
            self._comment_config = self._comment_config_factory(self)
        return self._comment_config

    @property
    def disabled_line_ranges(self) -> Mapping[str, Sequence[range]]:
        """Return the disabled line ranges reported by the collaborator."""
        return self.comment_config.cop_disabled_line_ranges()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self.name!r}, "
            f"status={self._result.status.value}, diagnostics={len(self._diagnostics)})"
        )


def _take(lines: tuple[str, ...], start: int, length: int) -> tuple[str, ...] | None:
    if start < 0:
        start += len(lines)
    if start < 0 or start > len(lines) or length < 0:
        return None
    return lines[start : start + length]
