# topmark:header:start
#
#   project      : RbSource
#   file         : engine.py
#   file_relpath : src/rbsource/parser/engine.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Diagnostic routing on the parser side.

The `DiagnosticEngine` sits between the parser and whoever collects its
diagnostics. It decides, per diagnostic, whether to drop it (ignored warnings),
forward it to the consumer, and whether it aborts the parse.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rbsource.config.logging import get_logger
from rbsource.diagnostic.model import DiagnosticLevel
from rbsource.errors import SourceSyntaxError

if TYPE_CHECKING:
    from collections.abc import Callable

    from rbsource.config.logging import RbsourceLogger
    from rbsource.diagnostic.model import Diagnostic

logger: RbsourceLogger = get_logger(__name__)


class DiagnosticEngine:
    """Forward parser diagnostics to a consumer and enforce fatality.

    Args:
        consumer (Callable[[Diagnostic], None] | None): Receives every diagnostic that
            is not dropped. ``None`` discards them.
        all_errors_are_fatal (bool): Abort on any diagnostic, warnings included.
        ignore_warnings (bool): Drop warnings before they reach the consumer.
    """

    def __init__(
        self,
        consumer: Callable[[Diagnostic], None] | None = None,
        *,
        all_errors_are_fatal: bool = False,
        ignore_warnings: bool = False,
    ) -> None:
        self.consumer: Callable[[Diagnostic], None] | None = consumer
        self.all_errors_are_fatal: bool = all_errors_are_fatal
        self.ignore_warnings: bool = ignore_warnings

    def process(self, diagnostic: Diagnostic) -> None:
        """Deliver ``diagnostic`` and abort the parse if it is fatal.

        Args:
            diagnostic (Diagnostic): The diagnostic emitted by the parser.

        Raises:
            SourceSyntaxError: After delivery, when the diagnostic aborts parsing.
        """
        if self.ignore_warnings and diagnostic.level == DiagnosticLevel.WARNING:
            logger.trace("Ignoring warning: %s", diagnostic.render())
            return

        if self.consumer is not None:
            self.consumer(diagnostic)

        if self._raise_on(diagnostic):
            raise SourceSyntaxError(diagnostic)

    def _raise_on(self, diagnostic: Diagnostic) -> bool:
        if diagnostic.level.is_error:
            return True
        return self.all_errors_are_fatal and diagnostic.level == DiagnosticLevel.WARNING
