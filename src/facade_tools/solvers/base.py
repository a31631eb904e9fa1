"""Abstract solver base class and solver registry.

A solver is the host-facing shim around one component: it coerces raw
inputs, builds the parameter bag, runs the geometry, and turns failures
into diagnostics instead of exceptions.
"""

from __future__ import annotations

import abc
import logging
from typing import Any

import pydantic

from facade_tools.diagnostics import DiagnosticsSink, LoggingSink, Severity
from facade_tools.errors import FacadeToolsError
from facade_tools.settings import Settings

logger = logging.getLogger(__name__)

# Global solver registry
SOLVER_REGISTRY: dict[str, Solver] = {}


def register_solver(cls: type[Solver]) -> type[Solver]:
    """Decorator to register a solver class in SOLVER_REGISTRY."""
    instance = cls()
    SOLVER_REGISTRY[instance.name] = instance
    return cls


class Solver(abc.ABC):
    """Abstract base class for host-facing component solvers."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Machine name (e.g., 'create_window')."""

    @property
    @abc.abstractmethod
    def nickname(self) -> str:
        """Short label shown on the host canvas."""

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """What the solver produces."""

    @property
    def category(self) -> str:
        return "Facade"

    @abc.abstractmethod
    def run(self, inputs: dict[str, Any], settings: Settings) -> dict[str, Any]:
        """Compute the outputs; raise FacadeToolsError on failure."""

    def solve(
        self,
        inputs: dict[str, Any],
        sink: DiagnosticsSink | None = None,
        settings: Settings | None = None,
    ) -> dict[str, Any] | None:
        """Run one solve pass.

        Returns the outputs, or None after reporting a diagnostic to sink.
        """
        sink = sink or LoggingSink()
        settings = settings or Settings()
        try:
            return self.run(inputs, settings)
        except FacadeToolsError as exc:
            logger.debug("%s failed: %s", self.name, exc)
            sink.report(exc.severity, str(exc))
        except pydantic.ValidationError as exc:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            sink.report(Severity.ERROR, f"Invalid parameters: {errors}")
        return None

    def info(self) -> dict[str, str]:
        return {
            "name": self.name,
            "nickname": self.nickname,
            "description": self.description,
            "category": self.category,
        }


def get_solver(name: str) -> Solver:
    """Look up a registered solver by name."""
    if name not in SOLVER_REGISTRY:
        from facade_tools.errors import ValidationError
        available = sorted(SOLVER_REGISTRY.keys())
        raise ValidationError(
            f"Unknown solver '{name}'. Available: {', '.join(available)}"
        )
    return SOLVER_REGISTRY[name]


def list_solvers() -> list[dict[str, str]]:
    """Metadata for all registered solvers."""
    return [SOLVER_REGISTRY[name].info() for name in sorted(SOLVER_REGISTRY)]


def pick(inputs: dict[str, Any], *names: str) -> dict[str, Any]:
    """Subset of inputs for a parameter bag; absent keys fall back to defaults."""
    return {name: inputs[name] for name in names if name in inputs}
