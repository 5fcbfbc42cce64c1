"""
Реестр тегов.

Имя тега → класс тега. Реестр создаётся на окружение,
глобального реестра нет.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Type

logger = logging.getLogger(__name__)


class TagRegistry:
    """Реестр классов тегов по имени."""

    def __init__(self) -> None:
        self._tags: Dict[str, Type] = {}

    def register(self, name: str, tag_cls: Type) -> None:
        """
        Raises:
            ValueError: Тег с таким именем уже зарегистрирован
        """
        if name in self._tags:
            raise ValueError(f"Tag '{name}' already registered")
        self._tags[name] = tag_cls
        logger.debug("Registered tag '%s' -> %s", name, tag_cls.__name__)

    def get(self, name: str) -> Optional[Type]:
        return self._tags.get(name)

    def names(self) -> List[str]:
        return sorted(self._tags)


def create_default_registry() -> TagRegistry:
    """Реестр со всеми встроенными тегами."""
    from ..tags import FormBlock, IncludeTag, SchemaBlock, SectionTag

    registry = TagRegistry()
    registry.register("section", SectionTag)
    registry.register("include", IncludeTag)
    registry.register("schema", SchemaBlock)
    registry.register("form", FormBlock)
    return registry


__all__ = ["TagRegistry", "create_default_registry"]
