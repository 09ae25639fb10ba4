"""Exception types raised by ngrejig.

Only lookups that promise a value (``get_*`` and ``*_or_throw``) raise
:class:`NotFoundError`. Their non-throwing counterparts return ``None``.
"""
from __future__ import annotations

__all__ = [
    "NgRejigError",
    "NotFoundError",
    "InvalidOperationError",
    "ParseError",
]


class NgRejigError(Exception):
    """Base class for all ngrejig errors."""


class NotFoundError(NgRejigError, LookupError):
    """A required import declaration, class or decorator is absent.

    Attributes
    ----------
    key : str
        The module name, class name or decorator name that was looked up.
    """

    def __init__(self, message: str, key: str = "") -> None:
        super().__init__(message)
        self.key = key


class InvalidOperationError(NgRejigError):
    """An AST operation cannot be applied to the node in its current state."""


class ParseError(NgRejigError):
    """The TypeScript parser reported syntax errors in strict mode."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number
