"""Diagnostic sinks — where the pipeline reports non-fatal problems."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class DiagnosticSink(Protocol):
    """Protocol for receiving pipeline diagnostics."""

    def debug(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


class LoggingSink:
    """Forwards diagnostics to the standard logging module."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def debug(self, message: str) -> None:
        self._log.debug("%s", message)

    def warning(self, message: str) -> None:
        self._log.warning("%s", message)
