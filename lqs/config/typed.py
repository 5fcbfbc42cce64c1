"""
Типизированная загрузка конфигурации: сырой YAML (mapping и скаляры) → dataclass.

Ошибки содержат путь к полю в виде "lqs.yaml.cache.backend".
"""

from __future__ import annotations

import dataclasses
import logging
import sys
import typing as t
from types import UnionType
from typing import Any, Callable, Dict, get_args, get_origin

from ..errors import ConfigError

logger = logging.getLogger(__name__)


class ConfigLoadError(ConfigError):
    """Значение не соответствует аннотации поля конфигурации."""
    pass


def _fail(path: str, message: str) -> ConfigLoadError:
    logger.debug("Config value rejected at %s: %s", path, message)
    return ConfigLoadError(f"{path}: {message}")


def _kind(val: Any) -> str:
    return type(val).__name__


def _hints(cls: type) -> Dict[str, Any]:
    # С `from __future__ import annotations` аннотации хранятся строками
    module = sys.modules.get(cls.__module__)
    return t.get_type_hints(cls, globalns=dict(vars(module)) if module else {})


def _load_dataclass(cls: type, val: Any, path: str) -> Any:
    if val is None:
        val = {}
    if not isinstance(val, dict):
        raise _fail(path, f"expected mapping for {cls.__name__}, got {_kind(val)}")

    init_fields = [f for f in dataclasses.fields(cls) if f.init]
    known = {f.name for f in init_fields}
    unknown = sorted(k for k in val if k not in known)
    if unknown:
        raise _fail(path, f"unknown key(s): {unknown}")

    hints = _hints(cls)
    kwargs: Dict[str, Any] = {}
    for f in init_fields:
        if f.name in val:
            kwargs[f.name] = load_typed(hints.get(f.name, f.type), val[f.name], path=f"{path}.{f.name}")
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            raise _fail(f"{path}.{f.name}", "required field missing")
    return cls(**kwargs)


def _load_union(tp: Any, val: Any, path: str) -> Any:
    options = get_args(tp)
    if val is None and type(None) in options:
        return None
    problems = []
    for option in options:
        if option is type(None):
            continue
        try:
            return load_typed(option, val, path=path)
        except ConfigLoadError as e:
            problems.append(str(e))
    raise _fail(path, " | ".join(problems))


def _load_literal(tp: Any, val: Any, path: str) -> Any:
    choices = get_args(tp)
    if val not in choices:
        raise _fail(path, f"expected one of {list(choices)}, got {val!r}")
    return val


def _load_scalar(tp: type, val: Any, path: str) -> Any:
    # True/False не считаются числами
    if isinstance(val, bool) and tp is not bool:
        raise _fail(path, f"expected {tp.__name__}, got bool")
    if tp is float and isinstance(val, int):
        return float(val)
    if not isinstance(val, tp):
        raise _fail(path, f"expected {tp.__name__}, got {_kind(val)}")
    return val


_BY_ORIGIN: Dict[Any, Callable[[Any, Any, str], Any]] = {
    t.Literal: _load_literal,
    t.Union: _load_union,
    UnionType: _load_union,
}

_SCALARS = (str, int, float, bool)


def load_typed(tp: Any, val: Any, *, path: str = "$") -> Any:
    """
    Приводит сырое значение val к аннотации tp.

    Поддерживаются dataclass, Literal, Optional/Union и str/int/float/bool:
    ровно то, из чего состоит EngineConfig. Лишние ключи в dataclass
    считаются ошибкой.

    Raises:
        ConfigLoadError: значение не подходит под аннотацию
    """
    if tp is Any:
        return val
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _load_dataclass(tp, val, path)

    loader = _BY_ORIGIN.get(get_origin(tp))
    if loader is not None:
        return loader(tp, val, path)

    if tp in _SCALARS:
        return _load_scalar(tp, val, path)
    raise _fail(path, f"unsupported annotation {tp!r}")


__all__ = ["load_typed", "ConfigLoadError"]
