"""
Включение секции.

Пример:

    {% section 'hero' %}

    Включит секцию 'hero' (файл sections/_hero.liquid) в обёртке
    <div id="section-hero" class="section-marker ...">.

    {% section 'hero' with banner %}

    Включит секцию с переменной hero, равной значению banner;
    id обёртки строится из значения banner.

    {% section 'card' as products %}

    Отрендерит секцию для каждого элемента products
    (переменная card) и обернёт результат один раз.

Настройки секции берутся из settings.sections.<имя>.settings
и доступны внутри под именем section.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Mapping
from typing import Any, ClassVar, Optional

from .include import AbstractInclude
from .schema import extract_schema
from ..errors import MissingCollaboratorError
from ..slug import slugify_id
from ..template.context import RenderContext
from ..template.nodes import to_output

logger = logging.getLogger(__name__)

# Вложенное включение внутри исходника секции: {% include <expr> %}
EMBEDDED_INCLUDE_RE = re.compile(r"\{%-?\s*include\s+(.*?)\s*-?%\}", re.DOTALL)

SECTION_PREFIX = "section."


def settings_key(owner: str, expression: str) -> str:
    """
    Путь переопределения: settings.sections["<owner>"].settings.<expr без "section.">
    """
    if expression.startswith(SECTION_PREFIX):
        expression = expression[len(SECTION_PREFIX):]
    return f'settings.sections["{owner}"].settings.{expression}'


def _is_scalar(value: Any) -> bool:
    return value is not None and not isinstance(value, (Mapping, list, tuple))


def substitute_embedded(source: str, value: str) -> str:
    """Заменяет выражение первого вложенного {% include %} на value."""
    m = EMBEDDED_INCLUDE_RE.search(source)
    if not m:
        return source
    return source[:m.start(1)] + value + source[m.end(1):]


class SectionTag(AbstractInclude):
    name = "section"
    kind: ClassVar[str] = "section"
    singular_keyword: ClassVar[str] = "with"
    collection_keyword: ClassVar[str] = "as"
    syntax_help: ClassVar[str] = "section '[template]' (with|as) [object|collection]"

    # Значение, подставленное во вложенный include при разборе
    override: Optional[str] = None
    # В исходнике есть вложенный include, зависящий от настроек
    has_embedded_include: bool = False

    # ------------------------ Parsing ------------------------ #

    def prepare_source(self, raw: str, context: RenderContext) -> str:
        m = EMBEDDED_INCLUDE_RE.search(raw)
        if not m:
            return raw
        self.has_embedded_include = True

        owner = self.settings_owner(context)
        expression = m.group(1).strip()
        if '"' in owner or "]" in owner:
            return raw

        value = context.get(settings_key(owner, expression))
        if value is None:
            return raw

        self.override = to_output(value)
        logger.debug(
            "Section '%s': nested include '%s' overridden with '%s'",
            self.template_name, expression, self.override,
        )
        return substitute_embedded(raw, self.override)

    def refresh_source(self, raw: str) -> str:
        if self.override is None:
            return raw
        return substitute_embedded(raw, self.override)

    def settings_owner(self, context: RenderContext) -> str:
        """Ключ в settings.sections: значение with-выражения или имя шаблона."""
        if self.variable is not None and not self.collection:
            value = context.get(self.variable)
            if _is_scalar(value):
                return to_output(value)
        return self.template_name

    def has_includes(self, environment) -> bool:
        # Вложенный include зависит от настроек окружающего контекста
        if self.has_embedded_include:
            return True
        return super().has_includes(environment)

    # ------------------------ Rendering ------------------------ #

    def section_settings(self, context: RenderContext, value: Any) -> Any:
        """settings.sections[<значение или имя>].settings либо None."""
        settings = context.get("settings")
        if not isinstance(settings, Mapping):
            return None
        sections = settings.get("sections")
        if not isinstance(sections, Mapping):
            return None

        if value is not None and not self.collection:
            entry = sections.get(to_output(value)) if _is_scalar(value) else None
        else:
            entry = sections.get(self.template_name)

        if isinstance(entry, Mapping):
            return entry.get("settings")
        return None

    def render(self, context: RenderContext) -> str:
        env = context.environment
        if env is None or env.file_system is None:
            raise MissingCollaboratorError("No file system")

        value = self.bound_value(context)
        bindings = {}
        section = self.section_settings(context, value)
        if section is not None:
            bindings["section"] = section

        body = self.render_body(context, value, bindings)

        schema = extract_schema(env.file_system.read_template_file(self.template_name, self.kind))
        return self.wrap(body, self.wrapper_id(value), schema.css_class, env.config)

    def wrapper_id(self, value: Any) -> str:
        slug = ""
        if _is_scalar(value) and not self.collection:
            slug = slugify_id(to_output(value))
        return slug or slugify_id(self.template_name)

    @staticmethod
    def wrap(body: str, slug: str, css_class: str, config) -> str:
        classes = " ".join(c for c in (config.section_class, css_class) if c)
        return (
            f'<div id="{html.escape(config.section_id_prefix + slug)}" '
            f'class="{html.escape(classes)}">{body}</div>'
        )


__all__ = ["SectionTag", "EMBEDDED_INCLUDE_RE", "settings_key", "substitute_embedded"]
