# topmark:header:start
#
#   project      : RbSource
#   file         : test_lines.py
#   file_relpath : tests/source/test_lines.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Tests for the raw/trimmed line views, including round-trip properties."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from rbsource.source.lines import LineViews, materialize_lines, split_raw_lines, trim_terminator
from tests.conftest import parametrize

# Text made of Ruby-ish fragments and every terminator flavour.
_FRAGMENTS = st.sampled_from(["def foo", "  1", "end", "", " ", "# c", "\n", "\r\n", "\r", "é"])
_TEXTS = st.lists(_FRAGMENTS, max_size=30).map("".join) | st.text(
    alphabet=st.characters(exclude_categories=("Cs",)), max_size=60
)


def test_scenario_lines() -> None:
    views = materialize_lines("def foo\n  1\nend\n")
    assert views.raw == ("def foo\n", "  1\n", "end\n")
    assert views.trimmed == ("def foo", "  1", "end")


def test_empty_text_has_no_lines() -> None:
    views = materialize_lines("")
    assert views.raw == ()
    assert views.trimmed == ()
    assert len(views) == 0


def test_last_line_without_newline_is_kept() -> None:
    assert split_raw_lines("a\nb") == ["a\n", "b"]


def test_lone_cr_is_not_a_line_boundary() -> None:
    views = materialize_lines("a\rb\nc\r\n")
    assert views.raw == ("a\rb\n", "c\r\n")
    assert views.trimmed == ("a\rb", "c")


@parametrize(
    "line, expected",
    [
        ("abc\n", "abc"),
        ("abc\r\n", "abc"),
        ("abc\r", "abc"),
        ("abc", "abc"),
        ("abc  \n", "abc  "),
        ("\n", ""),
        ("abc\n\n", "abc\n"),
    ],
)
def test_trim_terminator_strips_exactly_one_terminator(line: str, expected: str) -> None:
    assert trim_terminator(line) == expected


def test_misaligned_views_are_rejected() -> None:
    with pytest.raises(ValueError):
        LineViews(raw=("a\n",), trimmed=())


@given(text=_TEXTS)
def test_raw_lines_round_trip(text: str) -> None:
    """Joining the raw lines reproduces the text exactly."""
    assert "".join(materialize_lines(text).raw) == text


@given(text=_TEXTS)
def test_trimmed_lines_align_with_raw_lines(text: str) -> None:
    """Both views have equal length and differ only by the trailing terminator."""
    views = materialize_lines(text)
    assert len(views.raw) == len(views.trimmed)
    for raw, trimmed in zip(views.raw, views.trimmed):
        assert raw.startswith(trimmed)
        assert raw[len(trimmed) :] in ("", "\n", "\r\n", "\r")
        assert "\n" not in trimmed
