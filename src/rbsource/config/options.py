# topmark:header:start
#
#   project      : RbSource
#   file         : options.py
#   file_relpath : src/rbsource/config/options.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Parser options and their TOML configuration source.

Options are read with `tomlkit` from either the ``[tool.rbsource]`` table of a
``pyproject.toml`` or the root table of an ``rbsource.toml``. Unknown keys are
logged and ignored; values of the wrong type are rejected with `ConfigError`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from rbsource.config.logging import get_logger
from rbsource.constants import PROCESSING_ENCODING, PYPROJECT_TOML_NAME, TOOL_TABLE_NAME
from rbsource.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from rbsource.config.logging import RbsourceLogger

logger: RbsourceLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Immutable options controlling how a source is parsed.

    Attributes:
        all_errors_are_fatal (bool): Treat every diagnostic, warnings included, as
            parse-aborting.
        ignore_warnings (bool): Drop warning diagnostics instead of recording them.
        default_encoding (str): Encoding used to decode ``bytes`` sources that carry
            no magic encoding comment.
    """

    all_errors_are_fatal: bool = False
    ignore_warnings: bool = False
    default_encoding: str = PROCESSING_ENCODING

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> ParserOptions:
        """Build options from a plain mapping (e.g. a TOML table).

        Args:
            data (dict[str, Any]): Mapping of option names to values. Dashes in keys
                are accepted in place of underscores.

        Returns:
            ParserOptions: The resulting options; missing keys keep their defaults.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        known: dict[str, type] = {
            f.name: bool if f.name != "default_encoding" else str for f in fields(cls)
        }
        values: dict[str, Any] = {}
        for raw_key, value in data.items():
            key = str(raw_key).replace("-", "_")
            expected = known.get(key)
            if expected is None:
                logger.warning("Ignoring unknown parser option: %s", raw_key)
                continue
            if not isinstance(value, expected):
                raise ConfigError(
                    f"Option '{raw_key}' must be of type {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
            values[key] = expected(value)
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> ParserOptions:
        """Return a copy with the given non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)


def load_parser_options(path: Path) -> ParserOptions:
    """Load parser options from a TOML file.

    For ``pyproject.toml`` the ``[tool.rbsource]`` table is used (absent table means
    defaults); any other file is read from its root table.

    Args:
        path (Path): Path to ``pyproject.toml`` or ``rbsource.toml``.

    Returns:
        ParserOptions: Options read from the file.

    Raises:
        ConfigError: If the file cannot be read or parsed, or holds invalid values.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc

    try:
        doc: dict[str, Any] = tomlkit.parse(text).unwrap()
    except TomlkitParseError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if path.name == PYPROJECT_TOML_NAME:
        table: Any = doc.get("tool", {}).get(TOOL_TABLE_NAME, {})
    else:
        table = doc

    if not isinstance(table, dict):
        raise ConfigError(f"Expected a table for rbsource options in {path}")

    options = ParserOptions.from_mapping(table)
    logger.debug("Loaded parser options from %s: %s", path, options)
    return options
