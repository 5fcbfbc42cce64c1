"""
Liquid sections: безопасное кэшируемое включение секций и частичных шаблонов.
"""

from __future__ import annotations

from .errors import (
    ConfigError,
    LqsUserError,
    MissingCollaboratorError,
    NotFoundError,
    ParseError,
    RecursionLimitError,
    TemplateIOError,
)
from .filesystem import LocalFileSystem, RootSet
from .template import Environment, RenderContext

__all__ = [
    "Environment",
    "RenderContext",
    "LocalFileSystem",
    "RootSet",
    "LqsUserError",
    "NotFoundError",
    "ParseError",
    "MissingCollaboratorError",
    "TemplateIOError",
    "RecursionLimitError",
    "ConfigError",
]
