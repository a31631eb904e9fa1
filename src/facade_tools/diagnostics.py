"""Diagnostics sinks that receive severity-tagged messages from solvers."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Protocol


class Severity(enum.Enum):
    """Diagnostic level surfaced to the host."""

    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """A single reported message."""

    severity: Severity
    message: str


class DiagnosticsSink(Protocol):
    """Anything that can receive diagnostics from a solve pass."""

    def report(self, severity: Severity, message: str) -> None: ...


class LoggingSink:
    """Forward diagnostics to a standard logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("facade_tools.host")

    def report(self, severity: Severity, message: str) -> None:
        if severity is Severity.ERROR:
            self.logger.error(message)
        else:
            self.logger.warning(message)


@dataclass
class CollectingSink:
    """Keep diagnostics in memory, in the order they were reported."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, severity: Severity, message: str) -> None:
        self.diagnostics.append(Diagnostic(severity, message))

    @property
    def errors(self) -> list[str]:
        return [d.message for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[str]:
        return [d.message for d in self.diagnostics if d.severity is Severity.WARNING]

    def clear(self) -> None:
        self.diagnostics.clear()
