"""
Контракт кэша распарсенных документов.

Ключ: хеш содержимого исходника (после подстановки переопределений),
значение: распарсенный Document.
"""

from __future__ import annotations

import hashlib
from typing import Any, Optional, Protocol, runtime_checkable


def content_hash(source: str) -> str:
    """Стабильный хеш исходного текста шаблона."""
    return hashlib.sha1(source.encode("utf-8")).hexdigest()


@runtime_checkable
class ParseCache(Protocol):
    """
    Кэш должен сам обеспечивать атомарность операций:
    он разделяется между проходами рендеринга (и, возможно, потоками).
    """

    def exists(self, key: str) -> bool:
        ...

    def read(self, key: str) -> Optional[Any]:
        ...

    def write(self, key: str, document: Any) -> None:
        ...


__all__ = ["ParseCache", "content_hash"]
