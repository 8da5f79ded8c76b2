from __future__ import annotations


class WaypathError(Exception):
    """Base class for errors raised by the path engine."""


class InvalidOperation(WaypathError, ArithmeticError):
    """Arithmetic on a degenerate value, e.g. dividing by a zero scalar."""


class MalformedInput(WaypathError, ValueError):
    """Persisted or imported path data that cannot be decoded."""
