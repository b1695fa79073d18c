from __future__ import annotations

"""Controlled errors for phrase resolution.

Resolution intent:
- Failures are ordinary outcomes, never fatal to the caller.
- The engine raises these internally; `parse()` turns them into result values.
- Nothing is retried: resolution is a pure computation.
"""


class ResolutionError(RuntimeError):
    """Base error for the resolution engine; should be caught by the entry point."""


class UnknownFormatError(ResolutionError):
    """Raised when no fast path and no grammar pattern matched the phrase."""


class CalendarInvalidError(ResolutionError):
    """Raised when resolved fields describe an impossible date or time (e.g. feb 30)."""


class Iso8601Error(ValueError):
    """Raised when a string is not strict ISO-8601; signals fallback to the grammar path."""
