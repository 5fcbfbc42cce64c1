"""
Контекст рендеринга.

Стек областей видимости имя → значение и вычисление простых выражений
(литералы и пути переменных). Ссылка на окружение передаётся явно,
глобального состояния нет.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

from .expressions import NOT_LITERAL, parse_literal, split_variable

if TYPE_CHECKING:
    from .environment import Environment

_MISSING = object()


class RenderContext:
    """
    Контекст одного прохода рендеринга.

    Не потокобезопасен: для параллельного рендеринга независимых документов
    нужны независимые экземпляры.
    """

    def __init__(self, assigns: Optional[Mapping[str, Any]] = None, environment: Optional[Environment] = None):
        self.environment = environment
        self.scopes: List[Dict[str, Any]] = [dict(assigns or {})]

    # ------------------------ Scopes ------------------------ #

    def push(self, bindings: Optional[Mapping[str, Any]] = None) -> None:
        self.scopes.append(dict(bindings or {}))

    def pop(self) -> Dict[str, Any]:
        if len(self.scopes) == 1:
            raise RuntimeError("Cannot pop the root scope (scope stack is empty)")
        return self.scopes.pop()

    @contextmanager
    def scope(self, bindings: Optional[Mapping[str, Any]] = None) -> Iterator[RenderContext]:
        """push/pop парами, в том числе при исключении."""
        depth = len(self.scopes)
        self.push(bindings)
        try:
            yield self
        finally:
            del self.scopes[depth:]

    @property
    def depth(self) -> int:
        return len(self.scopes)

    def set(self, name: str, value: Any) -> None:
        """Связывает имя во внутренней области."""
        self.scopes[-1][name] = value

    def visible(self) -> Dict[str, Any]:
        """Все видимые связи (внутренние области перекрывают внешние)."""
        merged: Dict[str, Any] = {}
        for scope in self.scopes:
            merged.update(scope)
        return merged

    # ------------------------ Lookup ------------------------ #

    def get(self, expression: Optional[str]) -> Any:
        """
        Вычисляет выражение: литерал ('x', 1, true, nil) или путь переменной
        (a.b[0]["c"]). Отсутствующие значения: None.
        """
        if expression is None:
            return None
        expression = expression.strip()
        if not expression:
            return None
        literal = parse_literal(expression)
        if literal is not NOT_LITERAL:
            return literal
        return self.lookup(expression)

    def lookup(self, path: str) -> Any:
        parts = split_variable(path)
        if not parts:
            return None

        head = parts[0]
        if isinstance(head, tuple):
            head = self.get(head[1])
        value = self._find(head)
        for part in parts[1:]:
            if isinstance(part, tuple):
                part = self.get(part[1])
            value = _step(value, part)
            if value is _MISSING:
                return None
        return None if value is _MISSING else value

    def _find(self, name: Any) -> Any:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return _MISSING


def _step(value: Any, part: Any) -> Any:
    """Один шаг по пути: ключ словаря, индекс списка, size/first/last или атрибут."""
    if value is _MISSING or value is None:
        return _MISSING
    if isinstance(value, Mapping):
        if part in value:
            return value[part]
        if part == "size":
            return len(value)
        return _MISSING
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        if isinstance(part, str) and part.isdigit():
            part = int(part)
        if isinstance(part, int):
            return value[part] if -len(value) <= part < len(value) else _MISSING
        if part == "size":
            return len(value)
        if part == "first":
            return value[0] if value else _MISSING
        if part == "last":
            return value[-1] if value else _MISSING
        return _MISSING
    if isinstance(value, str) and part == "size":
        return len(value)
    if isinstance(part, str) and not part.startswith("_"):
        return getattr(value, part, _MISSING)
    return _MISSING


__all__ = ["RenderContext"]
