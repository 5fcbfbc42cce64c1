"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from LqsUserError.

Programming errors and bugs should NOT inherit from LqsUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations


class LqsUserError(Exception):
    """
    Base class for all user-facing errors.

    These errors indicate problems that the template author or operator can fix:
    configuration issues, illegal template names, missing files, etc.
    """
    pass


class NotFoundError(LqsUserError):
    """Missing root, missing template file or a path escaping the sandbox."""
    pass


class ParseError(LqsUserError):
    """Malformed template name or malformed tag syntax."""
    pass


class MissingCollaboratorError(LqsUserError):
    """A tag needs a collaborator (file system) that is not attached."""
    pass


class TemplateIOError(LqsUserError):
    """Template was resolved but could not be read."""

    def __init__(self, message: str, path: str = "", cause: Exception | None = None):
        super().__init__(message)
        self.path = path
        self.cause = cause


class RecursionLimitError(LqsUserError):
    """Include nesting is cyclic or deeper than allowed."""

    def __init__(self, message: str, stack: tuple[str, ...] = ()):
        super().__init__(message)
        self.stack = stack


class ConfigError(LqsUserError):
    """Invalid configuration file."""
    pass


__all__ = [
    "LqsUserError",
    "NotFoundError",
    "ParseError",
    "MissingCollaboratorError",
    "TemplateIOError",
    "RecursionLimitError",
    "ConfigError",
]
