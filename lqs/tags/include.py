"""
Включение другого, частичного, шаблона.

Пример:

    {% include 'foo' %}

    Включит шаблон 'foo'.

    {% include 'foo' with 'bar' %}

    Включит шаблон 'foo' с переменной foo, равной 'bar'.

    {% include 'foo' for products %}

    Включит шаблон 'foo' для каждого элемента products,
    передавая элемент в переменной foo.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Optional, Pattern, Tuple

from .base import AbstractTag
from ..cache import content_hash
from ..errors import MissingCollaboratorError, NotFoundError, ParseError, TemplateIOError
from ..template.context import RenderContext
from ..template.document import Document, ParseState, TokenStream
from ..template.expressions import QUOTED_FRAGMENT, TAG_ATTRIBUTES_RE, is_quoted, unquote

if TYPE_CHECKING:
    from ..template.environment import Environment

logger = logging.getLogger(__name__)


def directive_re(singular: str, collection: str) -> Pattern[str]:
    """'<name>' [(singular|collection) <expr>]"""
    return re.compile(
        rf"^(\"[^\"]+\"|'[^']+'|[^'\"\s]+)(\s+({singular}|{collection})\s+({QUOTED_FRAGMENT}))?"
    )


def iter_collection(value: Any) -> List[Any]:
    """Элементы для итерации; строка и словарь считаются одним элементом."""
    if value is None:
        return []
    if isinstance(value, (str, bytes, Mapping)):
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    return [value]


class AbstractInclude(AbstractTag):
    """
    Общая часть тегов, включающих другой файл: разбор директивы,
    получение документа (свежего или из кэша) и рендеринг с дочерней областью.
    """

    kind: ClassVar[str] = "include"
    singular_keyword: ClassVar[str] = "with"
    collection_keyword: ClassVar[str] = "for"
    syntax_help: ClassVar[str] = "include '[template]' (with|for) [object|collection]"

    def __init__(self, markup: str, stream: TokenStream, state: ParseState):
        m = directive_re(self.singular_keyword, self.collection_keyword).match(markup.strip())
        if not m:
            raise ParseError(f"Error in tag '{self.name}' - Valid syntax: {self.syntax_help}")

        self._directive_end = m.end()
        rest = markup.strip()[m.end():]
        if TAG_ATTRIBUTES_RE.sub("", rest).strip(" \t\r\n,"):
            raise ParseError(
                f"Error in tag '{self.name}' - unexpected '{rest.strip()}'. Valid syntax: {self.syntax_help}"
            )

        self.template_name: str = unquote(m.group(1))
        self.collection: bool = m.group(3) == self.collection_keyword
        self.variable: Optional[str] = m.group(4)
        self.document: Optional[Document] = None
        self.hash: Optional[str] = None
        super().__init__(markup, stream, state)

    def extract_attributes(self, markup: str) -> Dict[str, str]:
        rest = markup.strip()[self._directive_end:]
        return {k.group(1): k.group(2) for k in TAG_ATTRIBUTES_RE.finditer(rest)}

    # ------------------------ Parsing ------------------------ #

    def parse(self, stream: TokenStream, state: ParseState) -> None:
        """
        Читает исходник включаемого шаблона и получает документ.

        Raises:
            MissingCollaboratorError: Файловая система не подключена
        """
        fs = state.environment.file_system
        if fs is None:
            raise MissingCollaboratorError("No file system")

        raw = fs.read_template_file(self.template_name, self.kind)
        source = self.prepare_source(raw, state.context)
        child = state.descend(f"{self.kind}:{self.template_name}")
        self.document, self.hash = self._load_document(source, child)

    def prepare_source(self, raw: str, context: RenderContext) -> str:
        """Исходник перед хешированием и разбором."""
        return raw

    def _load_document(self, source: str, state: ParseState) -> Tuple[Document, Optional[str]]:
        env = state.environment
        cache = env.cache
        if cache is None:
            return env.builder.build(source, state), None

        key = content_hash(source)
        document = cache.read(key)
        if document is not None and not isinstance(document, Document):
            logger.warning("Ignoring cache entry %s of type %s", key, type(document).__name__)
            document = None
        if document is None or document.has_includes(env):
            logger.debug("Cache miss for %s '%s' (%s)", self.kind, self.template_name, key)
            document = env.builder.build(source, state)
            cache.write(key, document)
        else:
            logger.debug("Cache hit for %s '%s' (%s)", self.kind, self.template_name, key)
        return document, key

    def has_includes(self, environment: Environment) -> bool:
        """
        True, если закэшированный документ родителя использовать нельзя:
        вложенный документ сам содержит включения, либо кэш больше
        не хранит текущее содержимое исходника.
        """
        if self.document is None or self.document.has_includes(environment):
            return True

        cache = environment.cache
        if cache is None or self.hash is None or environment.file_system is None:
            return True

        try:
            raw = environment.file_system.read_template_file(self.template_name, self.kind)
        except (NotFoundError, TemplateIOError) as e:
            logger.debug("Cannot re-read %s '%s': %s", self.kind, self.template_name, e)
            return True

        fresh = content_hash(self.refresh_source(raw))
        return not (cache.exists(fresh) and self.hash == fresh)

    def refresh_source(self, raw: str) -> str:
        """Исходник для проверки актуальности (без контекста)."""
        return raw

    # ------------------------ Rendering ------------------------ #

    def bound_value(self, context: RenderContext) -> Any:
        """
        Значение выражения после with/as/for.

        Для коллекции выражение в кавычках задаёт имя переменной с коллекцией.
        """
        if self.variable is None:
            return None
        if self.collection and is_quoted(self.variable):
            return context.lookup(unquote(self.variable))
        return context.get(self.variable)

    def render_body(self, context: RenderContext, value: Any, bindings: Optional[Dict[str, Any]] = None) -> str:
        """Рендерит документ в дочерней области видимости."""
        if self.document is None:
            raise MissingCollaboratorError(f"Tag '{self.name}' for '{self.template_name}' was not parsed")

        chunks: List[str] = []
        with context.scope(bindings):
            for key, expression in self.attributes.items():
                context.set(key, context.get(expression))

            if self.collection:
                for item in iter_collection(value):
                    context.set(self.template_name, item)
                    chunks.append(self.document.render(context))
            else:
                if self.variable is not None:
                    context.set(self.template_name, value)
                chunks.append(self.document.render(context))
        return "".join(chunks)

    def render(self, context: RenderContext) -> str:
        return self.render_body(context, self.bound_value(context))


class IncludeTag(AbstractInclude):
    name = "include"


__all__ = ["AbstractInclude", "IncludeTag", "directive_re", "iter_collection"]
