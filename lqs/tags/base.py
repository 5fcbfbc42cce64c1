"""
Базовые классы тегов.

Тег получает разметку (всё после имени тега), поток токенов и состояние
разбора. Блок дополнительно разбирает вложенные узлы до end<имя>.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Protocol, runtime_checkable

from ..template.context import RenderContext
from ..template.document import ParseState, TokenStream
from ..template.expressions import extract_attributes

if TYPE_CHECKING:
    from ..template.environment import Environment


@runtime_checkable
class Taggable(Protocol):
    """Возможности тега: разбор своей разметки и рендеринг."""

    def parse(self, stream: TokenStream, state: ParseState) -> None:
        ...

    def render(self, context: RenderContext) -> str:
        ...


class AbstractTag:
    """Тег без тела."""

    name: ClassVar[str] = ""

    def __init__(self, markup: str, stream: TokenStream, state: ParseState):
        self.markup = markup
        self.attributes: Dict[str, str] = self.extract_attributes(markup)
        self.parse(stream, state)

    def extract_attributes(self, markup: str) -> Dict[str, str]:
        return extract_attributes(markup)

    def parse(self, stream: TokenStream, state: ParseState) -> None:
        pass

    def render(self, context: RenderContext) -> str:
        return ""

    def has_includes(self, environment: Environment) -> bool:
        return False


class AbstractBlock(AbstractTag):
    """Тег с телом {% name %}...{% endname %}."""

    def parse(self, stream: TokenStream, state: ParseState) -> None:
        self.nodelist: List[Any] = state.environment.builder.parse_nodes(
            stream, state, end_tag=self.block_delimiter()
        )

    def block_delimiter(self) -> str:
        return f"end{self.name}"

    def render(self, context: RenderContext) -> str:
        return "".join(node.render(context) for node in self.nodelist)

    def has_includes(self, environment: Environment) -> bool:
        for node in self.nodelist:
            check = getattr(node, "has_includes", None)
            if check is not None and check(environment):
                return True
        return False


__all__ = ["Taggable", "AbstractTag", "AbstractBlock"]
