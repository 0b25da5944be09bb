# topmark:header:start
#
#   project      : RbSource
#   file         : test_processed_source.py
#   file_relpath : tests/test_processed_source.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Tests for the `ProcessedSource` façade.

The scenario tests run the real tree-sitter Ruby parser; the remaining tests use
the scripted parser from `tests.fakes` to pin down caching and failure handling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from rbsource import ProcessedSource
from rbsource.config.options import ParserOptions
from rbsource.diagnostic.model import DiagnosticLevel, FrozenDiagnosticLog
from rbsource.errors import CollaboratorMissingError
from rbsource.parser.invoker import ParseStatus
from tests.conftest import mark_parser, parametrize
from tests.fakes import FakeCommentConfig, FakeParser, diag

if TYPE_CHECKING:
    from pathlib import Path


# --- scenarios with the real parser ---


@mark_parser
def test_valid_method_definition() -> None:
    ps = ProcessedSource("def foo\n  1\nend\n")
    assert ps.valid_syntax
    assert ps.is_valid_syntax()
    assert ps.lines == ("def foo", "  1", "end")
    assert len(ps.diagnostics) == 0
    assert ps.ast is not None
    assert ps.parse_result.status == ParseStatus.OK


@mark_parser
def test_unterminated_construct_is_invalid() -> None:
    ps = ProcessedSource("def foo(\n")
    assert not ps.valid_syntax
    assert (ps.ast, ps.comments, ps.tokens) == (None, None, None)
    assert any(d.level >= DiagnosticLevel.ERROR for d in ps.diagnostics)
    assert ps.parse_result.status == ParseStatus.SYNTAX_FAILED
    assert ps.parser_error is None
    assert ps.lines == ("def foo(",)


@mark_parser
def test_invalid_bytes_fail_before_parsing() -> None:
    ps = ProcessedSource(b"x = '\xff'\n")
    assert not ps.valid_syntax
    assert isinstance(ps.parser_error, UnicodeDecodeError)
    assert len(ps.diagnostics) == 0
    assert ps.buffer is None
    assert (ps.ast, ps.comments, ps.tokens) == (None, None, None)
    assert ps.parse_result.status == ParseStatus.ENCODING_FAILED
    assert ps.lines == ()


@mark_parser
@parametrize("name", ["ascii-8bit", "binary"])
def test_binary_magic_encoding_is_valid_syntax(name: str) -> None:
    ps = ProcessedSource(f"# encoding: {name}\nx = 1\n".encode("ascii"))
    assert ps.valid_syntax
    assert ps.parser_error is None
    assert ps.parse_result.status == ParseStatus.OK


@mark_parser
def test_comment_and_tokens() -> None:
    ps = ProcessedSource("x = 1 # comment\n")
    assert ps.valid_syntax
    assert ps.comments is not None
    assert len(ps.comments) == 1
    assert ps.tokens is not None
    assert [t.text for t in ps.tokens][:3] == ["x", "=", "1"]


@mark_parser
def test_warning_keeps_source_valid() -> None:
    ps = ProcessedSource("if x = 1\n  y\nend\n")
    assert ps.valid_syntax
    assert [d.level for d in ps.diagnostics] == [DiagnosticLevel.WARNING]


@mark_parser
def test_fatal_warning_aborts_parse_without_invalidating_syntax() -> None:
    """A warning that aborts parsing leaves no tree, yet only errors decide validity."""
    ps = ProcessedSource(
        "if x = 1\n  y\nend\n", options=ParserOptions(all_errors_are_fatal=True)
    )
    assert ps.ast is None
    assert ps.parse_result.status == ParseStatus.SYNTAX_FAILED
    assert ps.valid_syntax


@mark_parser
def test_from_file_reads_whole_file(tmp_path: Path) -> None:
    path = tmp_path / "foo.rb"
    path.write_bytes(b"# encoding: iso-8859-1\ns = '\xe9'\n")
    ps = ProcessedSource.from_file(path)
    assert ps.path == str(path)
    assert ps.buffer is not None
    assert ps.buffer.name == str(path)
    assert ps.valid_syntax
    assert ps.lines[1] == "s = 'é'"


@mark_parser
def test_crlf_source_lines() -> None:
    ps = ProcessedSource("x = 1\r\ny = 2\r\n")
    assert ps.valid_syntax
    assert ps.raw_lines == ("x = 1\r\n", "y = 2\r\n")
    assert ps.lines == ("x = 1", "y = 2")


# --- façade behaviour with a scripted parser ---


def _fake(source: str = "a b\nc\n\nd", **kwargs: object) -> ProcessedSource:
    factory = lambda: FakeParser(**kwargs)  # type: ignore[arg-type]  # noqa: E731
    return ProcessedSource(source, parser_factory=factory)


def test_anonymous_source_name() -> None:
    ps = _fake()
    assert ps.path is None
    assert ps.name == "(string)"
    assert ps.buffer is not None
    assert ps.buffer.name == "(string)"


def test_diagnostics_are_frozen_in_recording_order() -> None:
    script = [diag(DiagnosticLevel.NOTE, "one"), diag(DiagnosticLevel.WARNING, "two")]
    ps = _fake(script=script)
    assert isinstance(ps.diagnostics, FrozenDiagnosticLog)
    assert list(ps.diagnostics) == script
    assert ps.valid_syntax


@parametrize(
    "level, valid",
    [
        (DiagnosticLevel.NOTE, True),
        (DiagnosticLevel.WARNING, True),
        (DiagnosticLevel.ERROR, False),
        (DiagnosticLevel.FATAL, False),
    ],
)
def test_valid_syntax_follows_diagnostic_levels(level: DiagnosticLevel, valid: bool) -> None:
    assert _fake(script=[diag(level)]).valid_syntax is valid


def test_surrogate_text_is_an_encoding_failure_with_lines() -> None:
    """Undecodable text still yields line views of the text given."""
    parser = FakeParser()
    ps = ProcessedSource("a\n\ud800\n", parser_factory=lambda: parser)
    assert not ps.valid_syntax
    assert parser.calls == 0
    assert ps.raw_lines == ("a\n", "\ud800\n")


def test_line_views_are_cached() -> None:
    ps = _fake()
    assert ps.lines is ps.lines
    assert ps.raw_lines is ps.raw_lines
    assert "".join(ps.raw_lines) == "a b\nc\n\nd"
    assert len(ps.lines) == len(ps.raw_lines) == 4


def test_line_access_never_reparses() -> None:
    parser = FakeParser()
    ps = ProcessedSource("x\ny\n", parser_factory=lambda: parser)
    _ = ps.lines, ps.raw_lines, ps[0], ps.valid_syntax, ps.valid_syntax
    assert parser.calls == 1


@parametrize(
    "key, expected",
    [
        (0, "a b"),
        (3, "d"),
        (-1, "d"),
        (-4, "a b"),
        (4, None),
        (-5, None),
        (slice(1, 3), ("c", "")),
        (slice(None, None, -1), ("d", "", "c", "a b")),
        (slice(10, 20), ()),
        ((1, 2), ("c", "")),
        ((-2, 5), ("", "d")),
        ((4, 1), ()),
        ((5, 1), None),
        ((0, -1), None),
    ],
)
def test_indexing_trimmed_lines(key: object, expected: object) -> None:
    ps = _fake()
    assert ps[key] == expected  # type: ignore[index]


def test_comment_config_is_built_once_from_self() -> None:
    FakeCommentConfig.builds = 0
    ps = ProcessedSource("x\n", parser_factory=FakeParser, comment_config_factory=FakeCommentConfig)
    assert FakeCommentConfig.builds == 0
    assert ps.disabled_line_ranges == {"Style/Foo": [range(1, 3)]}
    config = ps.comment_config
    assert ps.disabled_line_ranges == {"Style/Foo": [range(1, 3)]}
    assert ps.comment_config is config
    assert FakeCommentConfig.builds == 1
    assert isinstance(config, FakeCommentConfig)
    assert config.processed_source is ps


def test_missing_comment_config_collaborator() -> None:
    ps = _fake()
    with pytest.raises(CollaboratorMissingError):
        _ = ps.disabled_line_ranges


def test_unexpected_parser_failure_propagates() -> None:
    with pytest.raises(RuntimeError):
        _fake(crash=RuntimeError("boom"))


def test_repr_mentions_status() -> None:
    assert "status=ok" in repr(_fake())
