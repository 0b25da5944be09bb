# topmark:header:start
#
#   project      : RbSource
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""RbSource project automation via Nox.

Sessions:
  - `lint`: Ruff lint on the package and tests.
  - `format_check`: Verify formatting with Ruff.
  - `qa`: Per-Python session that runs pytest and pyright.
  - `property_test`: Long-running property tests (opt-in).

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
"""

from __future__ import annotations

import pathlib
import sys
from typing import Any, cast

import nox
import tomlkit

CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"

nox.options.sessions = ["lint", "qa"]


def get_supported_pythons() -> list[str]:
    """Resolve supported Python versions from `pyproject.toml` classifiers.

    Returns:
        list[str]: Supported versions like ["3.10", "3.11", ...], sorted.
    """
    path: pathlib.Path = pathlib.Path(__file__).parent / "pyproject.toml"
    doc: dict[str, Any] = tomlkit.parse(path.read_text(encoding="utf-8")).unwrap()
    project: dict[str, Any] = cast("dict[str, Any]", doc.get("project", {}))
    prefix = "Programming Language :: Python :: "
    versions: list[str] = []
    for c in cast("list[str]", project.get("classifiers", [])):
        if not c.startswith(prefix):
            continue
        v: str = c.removeprefix(prefix).strip()
        parts: list[str] = v.split(".")
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            versions.append(v)
    if not versions:
        return [CURRENT_PYTHON_VERSION]
    return sorted(versions, key=lambda s: tuple(int(p) for p in s.split(".")))


PYTHONS: list[str] = get_supported_pythons()


@nox.session
def lint(session: nox.Session) -> None:
    """Run Ruff lint."""
    session.install("ruff")
    session.run("ruff", "check", "src", "tests", "noxfile.py")


@nox.session
def format_check(session: nox.Session) -> None:
    """Verify formatting with Ruff."""
    session.install("ruff")
    session.run("ruff", "format", "--check", "src", "tests", "noxfile.py")


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run the test suite and pyright for one Python version."""
    session.install("-e", ".[dev]")
    session.run("pytest", "-q", "tests", "-m", "not hypothesis_slow", *session.posargs)
    session.run("pyright", "--pythonversion", str(session.python or CURRENT_PYTHON_VERSION))


@nox.session
def property_test(session: nox.Session) -> None:
    """Run long-running property tests."""
    session.install("-e", ".[test]")
    session.run("pytest", "-q", "tests", "-m", "hypothesis_slow", *session.posargs)
