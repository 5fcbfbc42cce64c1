"""
Базовые узлы документа: текст и вывод переменной.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .context import RenderContext


@dataclass(frozen=True)
class TextNode:
    """Статический текст, выводится как есть."""
    text: str

    def render(self, context: RenderContext) -> str:
        return self.text


@dataclass(frozen=True)
class VariableNode:
    """Вывод {{ expression }}."""
    expression: str

    def render(self, context: RenderContext) -> str:
        return to_output(context.get(self.expression))


def to_output(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "".join(to_output(v) for v in value)
    if isinstance(value, Mapping):
        return ""
    return str(value)


__all__ = ["TextNode", "VariableNode", "to_output"]
