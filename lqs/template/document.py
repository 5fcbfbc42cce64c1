"""
Построение документа из исходного текста.

DocumentBuilder токенизирует исходник и собирает список узлов,
передавая разметку тегов зарегистрированным классам тегов.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from .context import RenderContext
from .expressions import split_tag
from .lexer import tokenize_template
from .nodes import TextNode, VariableNode
from .tokens import Token, TokenType
from ..errors import ParseError, RecursionLimitError

if TYPE_CHECKING:
    from .environment import Environment
    from .registry import TagRegistry

logger = logging.getLogger(__name__)


class TokenStream:
    """
    Навигация по токенам в процессе разбора.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.position = 0

    def current(self) -> Token:
        if self.position >= len(self.tokens):
            last = self.tokens[-1] if self.tokens else None
            return Token(TokenType.EOF, "", last.position if last else 0, last.line if last else 1, last.column if last else 1)
        return self.tokens[self.position]

    def advance(self) -> Token:
        """Продвигается к следующему токену и возвращает предыдущий."""
        token = self.current()
        if self.position < len(self.tokens):
            self.position += 1
        return token

    def is_at_end(self) -> bool:
        return self.current().type == TokenType.EOF


@dataclass(frozen=True)
class ParseState:
    """
    Состояние разбора, передаваемое тегам явно.

    context: контекст рендеринга, доступный во время разбора
    (нужен для подстановки переопределений настроек);
    include_stack: цепочка включений от корневого документа.
    """
    environment: Environment
    context: RenderContext
    include_stack: Tuple[str, ...] = ()

    def descend(self, key: str) -> ParseState:
        """
        Состояние для разбора вложенного шаблона.

        Raises:
            RecursionLimitError: Цикл включений или превышена глубина
        """
        if key in self.include_stack:
            chain = " -> ".join(self.include_stack + (key,))
            raise RecursionLimitError(f"Cyclic include detected: {chain}", self.include_stack + (key,))
        limit = self.environment.config.max_include_depth
        if len(self.include_stack) >= limit:
            raise RecursionLimitError(
                f"Include depth limit ({limit}) exceeded at '{key}'", self.include_stack + (key,)
            )
        return replace(self, include_stack=self.include_stack + (key,))


class Document:
    """Распарсенный документ: список узлов."""

    def __init__(self, nodelist: List[Any]):
        self.nodelist = nodelist

    def render(self, context: RenderContext) -> str:
        return "".join(node.render(context) for node in self.nodelist)

    def has_includes(self, environment: Environment) -> bool:
        """True, если вложенные включения требуют повторного разбора."""
        for node in self.nodelist:
            check = getattr(node, "has_includes", None)
            if check is not None and check(environment):
                return True
        return False

    def __repr__(self) -> str:
        return f"Document({len(self.nodelist)} nodes)"


class DocumentBuilder:
    """Токенизация и сборка Document через реестр тегов."""

    def __init__(self, registry: TagRegistry):
        self.registry = registry

    def build(self, source: str, state: ParseState) -> Document:
        stream = TokenStream(tokenize_template(source))
        nodes = self.parse_nodes(stream, state)
        logger.debug("Built document (%d nodes, depth %d)", len(nodes), len(state.include_stack))
        return Document(nodes)

    def parse_nodes(self, stream: TokenStream, state: ParseState, end_tag: Optional[str] = None) -> List[Any]:
        """
        Разбирает узлы до конца потока или до закрывающего тега end_tag.

        Raises:
            ParseError: Неизвестный тег, пустая переменная или незакрытый блок
        """
        nodes: List[Any] = []
        while True:
            token = stream.advance()
            if token.type == TokenType.EOF:
                if end_tag is not None:
                    raise ParseError(f"'{end_tag}' was never found (block opened before {token.line}:{token.column})")
                return nodes
            if token.type == TokenType.TEXT:
                nodes.append(TextNode(token.value))
            elif token.type == TokenType.VARIABLE:
                if not token.value:
                    raise ParseError(f"Empty variable at {token.line}:{token.column}")
                nodes.append(VariableNode(token.value))
            else:
                name, markup = split_tag(token.value)
                if end_tag is not None and name == end_tag:
                    return nodes
                tag_cls = self.registry.get(name)
                if tag_cls is None:
                    raise ParseError(f"Unknown tag '{name}' at {token.line}:{token.column}")
                nodes.append(tag_cls(markup, stream, state))

    def collect_raw(self, stream: TokenStream, end_tag: str) -> str:
        """Исходный текст до закрывающего тега без разбора."""
        parts: List[str] = []
        while True:
            token = stream.advance()
            if token.type == TokenType.EOF:
                raise ParseError(f"'{end_tag}' was never found")
            if token.type == TokenType.TAG and split_tag(token.value)[0] == end_tag:
                return "".join(parts)
            parts.append(token.raw)


__all__ = ["Document", "DocumentBuilder", "ParseState", "TokenStream"]
