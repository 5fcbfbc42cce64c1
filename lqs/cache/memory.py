from __future__ import annotations

import threading
from typing import Any, Dict, Optional


class MemoryCache:
    """Кэш документов в памяти процесса."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[str, Any] = {}

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def read(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._entries.get(key)

    def write(self, key: str, document: Any) -> None:
        with self._lock:
            self._entries[key] = document

    def evict(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["MemoryCache"]
