# topmark:header:start
#
#   project      : RbSource
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Pytest configuration for the RbSource test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, cast

import pytest

from rbsource.constants import LOG_LEVEL_ENV_VAR

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.parser`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_parser: DecoratorType[Any] = as_typed_mark(pytest.mark.parser)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


@pytest.fixture(autouse=True)
def silence_rbsource_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to remove the variable for the test.
    """
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
