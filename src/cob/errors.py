"""Centralised exception hierarchy for cob."""

from __future__ import annotations


class CobError(Exception):
    """Base class for all custom cob exceptions."""


class ConfigError(CobError):
    """The ``[tool.cob]`` configuration table is malformed."""


class RevisionResolutionError(CobError):
    """A symbolic revision (``HEAD``, ``HEAD~1``) could not be resolved."""


class CheckoutError(CobError):
    """The working tree could not be reset to the requested revision."""


class DirtyWorktreeError(CheckoutError):
    """The working tree has uncommitted changes that a reset would discard."""


class HarnessExecutionError(CobError):
    """The benchmark harness could not be started or exited non-zero."""

    def __init__(self, message: str, *, returncode: int | None = None, diagnostic: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.diagnostic = diagnostic


class ParseError(CobError):
    """Harness output could not be read."""


class BenchmarkExecutionError(CobError):
    """A benchmark run against one revision failed."""

    def __init__(self, message: str, *, revision: str) -> None:
        super().__init__(message)
        self.revision = revision


__all__ = [
    "BenchmarkExecutionError",
    "CheckoutError",
    "CobError",
    "ConfigError",
    "DirtyWorktreeError",
    "HarnessExecutionError",
    "ParseError",
    "RevisionResolutionError",
]
