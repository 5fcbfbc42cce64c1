"""
Блок схемы секции: {% schema %} <JSON> {% endschema %}.

Содержимое не рендерится; из JSON читается только поле class.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass

from .base import AbstractBlock
from ..template.context import RenderContext
from ..template.document import ParseState, TokenStream

logger = logging.getLogger(__name__)

SCHEMA_RE = re.compile(r"\{%-?\s*schema\s*-?%\}(.*?)\{%-?\s*endschema\s*-?%\}", re.DOTALL)


@dataclass(frozen=True)
class SchemaMetadata:
    css_class: str = ""


def extract_schema(source: str) -> SchemaMetadata:
    """
    Метаданные схемы из исходника секции.
    Отсутствующая или некорректная схема даёт пустой класс, а не ошибку.
    """
    m = SCHEMA_RE.search(source)
    if not m:
        return SchemaMetadata()
    try:
        schema = json.loads(m.group(1))
    except ValueError as e:
        logger.debug("Ignoring malformed schema JSON: %s", e)
        return SchemaMetadata()
    if not isinstance(schema, dict):
        return SchemaMetadata()
    css_class = schema.get("class")
    if not isinstance(css_class, str):
        return SchemaMetadata()
    return SchemaMetadata(css_class=css_class.strip())


class SchemaBlock(AbstractBlock):
    name = "schema"

    def parse(self, stream: TokenStream, state: ParseState) -> None:
        self.nodelist = []
        self.body = state.environment.builder.collect_raw(stream, self.block_delimiter())

    def render(self, context: RenderContext) -> str:
        return ""


__all__ = ["SchemaBlock", "SchemaMetadata", "extract_schema", "SCHEMA_RE"]
