"""Custom exception hierarchy for facade tools.

Every error carries the severity a host should report it with.
"""

from facade_tools.diagnostics import Severity


class FacadeToolsError(Exception):
    """Base exception for all facade tools errors."""

    severity = Severity.ERROR

    def __init__(self, message: str, severity: Severity | None = None) -> None:
        super().__init__(message)
        if severity is not None:
            self.severity = severity


class GeometryError(FacadeToolsError):
    """Invalid input geometry or a failed geometric construction."""


class RangeError(FacadeToolsError):
    """A parameter lies outside its allowed domain."""


class ValidationError(FacadeToolsError):
    """Inputs are inconsistent or invalid (mismatched lists, bad curves)."""


class WarningReport(FacadeToolsError):
    """Recoverable sizing or fit problem; no output is produced."""

    severity = Severity.WARNING
