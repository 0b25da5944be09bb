# topmark:header:start
#
#   project      : RbSource
#   file         : ruby.py
#   file_relpath : src/rbsource/parser/ruby.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Tree-sitter backed Ruby parser adapter.

`RubyParser.tokenize` parses a `SourceBuffer` with the tree-sitter Ruby grammar
and returns ``(root, comments, raw_tokens)``:

  * ``root`` is the tree-sitter root node of the syntax tree;
  * ``comments`` are `Comment` values for every comment node, in source order;
  * ``raw_tokens`` are ``(type, (text, range))`` tuples for every non-empty leaf,
    comments included, in source order.

While walking the tree the adapter reports diagnostics through its
`DiagnosticEngine`: a warning for a literal assigned in a condition, and an error
for every error or missing node. Errors abort the walk by raising
`SourceSyntaxError`, so a tree with syntax errors is never returned.

Tree-sitter works on UTF-8 bytes; offsets are converted back to character
offsets before they reach a `SourceRange`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

import tree_sitter_ruby
from tree_sitter import Language, Node, Parser

from rbsource.config.logging import get_logger
from rbsource.constants import PROCESSING_ENCODING
from rbsource.diagnostic.model import Diagnostic, DiagnosticLevel
from rbsource.parser.engine import DiagnosticEngine
from rbsource.source.range import SourceRange
from rbsource.source.tokens import COMMENT_TYPE, Comment

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from rbsource.config.logging import RbsourceLogger
    from rbsource.source.buffer import SourceBuffer
    from rbsource.source.tokens import RawToken

logger: RbsourceLogger = get_logger(__name__)

# Build the tree-sitter Language once at module level.
RUBY_LANGUAGE: Final[Language] = Language(tree_sitter_ruby.language())

_CONDITIONAL_TYPES: Final[frozenset[str]] = frozenset(
    {
        "if",
        "unless",
        "while",
        "until",
        "if_modifier",
        "unless_modifier",
        "while_modifier",
        "until_modifier",
    }
)
_LITERAL_TYPES: Final[frozenset[str]] = frozenset(
    {"integer", "float", "rational", "complex", "string", "simple_symbol", "true", "false", "nil"}
)
_SNIPPET_LIMIT: Final[int] = 20


class _OffsetMap:
    """Translate UTF-8 byte offsets into character offsets."""

    def __init__(self, text: str, data: bytes) -> None:
        self._identity: bool = len(text) == len(data)
        self._chars: list[int] = []
        if not self._identity:
            for index, char in enumerate(text):
                self._chars.extend([index] * len(char.encode(PROCESSING_ENCODING)))
            self._chars.append(len(text))

    def __call__(self, byte_offset: int) -> int:
        if self._identity:
            return byte_offset
        return self._chars[byte_offset]


def _walk(root: Node) -> Iterator[Node]:
    """Yield ``root`` and its descendants in pre-order (source order)."""
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


class RubyParser:
    """Parse Ruby source with tree-sitter and report diagnostics.

    Args:
        diagnostics (DiagnosticEngine | None): Engine receiving the diagnostics; a
            fresh engine without consumer is used when omitted.
    """

    def __init__(self, diagnostics: DiagnosticEngine | None = None) -> None:
        self.diagnostics: DiagnosticEngine = diagnostics or DiagnosticEngine()
        self._parser: Parser = Parser(RUBY_LANGUAGE)

    def tokenize(self, buffer: SourceBuffer) -> tuple[Node, list[Comment], list[RawToken]]:
        """Parse ``buffer`` into its tree, comments and raw tokens.

        Args:
            buffer (SourceBuffer): The buffer to parse.

        Returns:
            tuple[Node, list[Comment], list[RawToken]]: Root node, comments and raw tokens.

        Raises:
            SourceSyntaxError: If a reported diagnostic aborts parsing.
        """
        data = buffer.source.encode(PROCESSING_ENCODING)
        tree = self._parser.parse(data)
        to_char = _OffsetMap(buffer.source, data)

        def span(node: Node) -> SourceRange:
            return SourceRange(buffer, to_char(node.start_byte), to_char(node.end_byte))

        comments: list[Comment] = []
        tokens: list[RawToken] = []
        reported_error = False

        for node in _walk(tree.root_node):
            if node.is_error or node.is_missing:
                reported_error = True
                self._report_syntax_error(node, span(node))
            elif node.type in _CONDITIONAL_TYPES:
                self._check_condition(node, span)

            if node.child_count or node.end_byte == node.start_byte:
                continue
            pos = span(node)
            tokens.append((node.type, (pos.source, pos)))
            if node.type == COMMENT_TYPE:
                comments.append(Comment(text=pos.source, location=pos))

        if tree.root_node.has_error and not reported_error:
            self._emit(DiagnosticLevel.ERROR, "syntax_error", "syntax error", span(tree.root_node))

        # Heredoc bodies hang off the tree after the line that opens them.
        tokens.sort(key=lambda raw: raw[1][1].begin_pos)
        comments.sort(key=lambda comment: comment.location.begin_pos)

        logger.debug(
            "Tokenized %s: %d tokens, %d comments", buffer.name, len(tokens), len(comments)
        )
        return tree.root_node, comments, tokens

    def _report_syntax_error(self, node: Node, pos: SourceRange) -> None:
        if node.is_missing:
            self._emit(DiagnosticLevel.ERROR, "missing_token", f"expected `{node.type}'", pos)
            return
        snippet = pos.source.strip().splitlines()[0] if pos.source.strip() else ""
        if len(snippet) > _SNIPPET_LIMIT:
            snippet = snippet[:_SNIPPET_LIMIT] + "..."
        message = f"unexpected token `{snippet}'" if snippet else "unexpected end-of-input"
        self._emit(DiagnosticLevel.ERROR, "unexpected_token", message, pos)

    def _check_condition(self, node: Node, span: Callable[[Node], SourceRange]) -> None:
        condition = node.child_by_field_name("condition")
        if condition is None or condition.type != "assignment":
            return
        value = condition.child_by_field_name("right")
        if value is not None and value.type in _LITERAL_TYPES:
            self._emit(
                DiagnosticLevel.WARNING,
                "literal_assignment_in_condition",
                "found `= literal' in conditional, should be ==",
                span(condition),
            )

    def _emit(self, level: DiagnosticLevel, reason: str, message: str, pos: SourceRange) -> None:
        diagnostic = Diagnostic(level=level, reason=reason, message=message, location=pos)
        self.diagnostics.process(diagnostic)
