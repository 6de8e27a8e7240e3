"""Public exception types for calltracer."""

from __future__ import annotations


class CalltracerError(Exception):
    """Base class for all calltracer exceptions."""


class CalltracerLoadError(CalltracerError):
    """Raised when a trace or analysis file cannot be loaded or parsed."""


class InvalidTraceError(CalltracerError):
    """Raised when a call trace root is malformed, cyclic or too deep to walk."""
