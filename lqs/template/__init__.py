"""
Шаблонизатор: лексер, контекст рендеринга, построение документа и окружение.
"""

from __future__ import annotations

from .context import RenderContext
from .document import Document, DocumentBuilder, ParseState, TokenStream
from .environment import Environment
from .lexer import LexerError, TemplateLexer, tokenize_template
from .registry import TagRegistry, create_default_registry

__all__ = [
    "Environment",
    "RenderContext",
    "Document",
    "DocumentBuilder",
    "ParseState",
    "TokenStream",
    "TemplateLexer",
    "LexerError",
    "tokenize_template",
    "TagRegistry",
    "create_default_registry",
]
