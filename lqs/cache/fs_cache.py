"""
Файловый кэш распарсенных документов.

Раскладка: <dir>/documents/<h[:2]>/<h[2:4]>/<h>.pickle, где h = content_hash(source).
Запись атомарна (временный файл + replace), так что параллельные процессы
видят либо старую запись, либо новую целиком.
"""

from __future__ import annotations

import logging
import os
import pickle
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional

logger = logging.getLogger(__name__)

# Меняется при несовместимом изменении формата записи
CACHE_VERSION = 1

_ENTRY_SUFFIX = ".pickle"
_READ_ERRORS = (OSError, pickle.UnpicklingError, EOFError, AttributeError, ImportError, ValueError)


@dataclass(frozen=True)
class CacheStats:
    path: Path
    enabled: bool
    present: bool
    documents: int
    total_bytes: int


class FileCache:
    """
    Кэш документов на диске, общий для окружений и процессов.

    Ошибки ввода-вывода не прерывают рендеринг: неудачная запись пропускается,
    неудачное чтение считается промахом.
    """

    def __init__(self, directory: Path, *, enabled: bool = True):
        self.dir = Path(directory)
        self.enabled = enabled
        if enabled:
            try:
                self.documents_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.warning("File cache at %s is unusable, caching disabled: %s", self.dir, e)
                self.enabled = False

    @property
    def documents_dir(self) -> Path:
        return self.dir / "documents"

    def _entry_path(self, key: str) -> Path:
        return self.documents_dir / key[:2] / key[2:4] / f"{key}{_ENTRY_SUFFIX}"

    # ------------------------ ParseCache ------------------------ #

    def exists(self, key: str) -> bool:
        return self.enabled and self._entry_path(key).is_file()

    def read(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        path = self._entry_path(key)
        if not path.is_file():
            return None
        try:
            payload = pickle.loads(path.read_bytes())
        except _READ_ERRORS as e:
            logger.warning("Dropping unreadable cache entry %s: %s", path, e)
            return None
        if not isinstance(payload, dict) or payload.get("v") != CACHE_VERSION:
            logger.debug("Ignoring cache entry %s with foreign format", path)
            return None
        return payload.get("document")

    def write(self, key: str, document: Any) -> None:
        if self.enabled:
            self._store(self._entry_path(key), {"v": CACHE_VERSION, "document": document})

    def _store(self, path: Path, payload: dict) -> None:
        tmp = path.parent / f".{path.name}.{os.getpid()}.tmp"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(pickle.dumps(payload, protocol=pickle.HIGHEST_PROTOCOL))
            os.replace(tmp, path)
        except (OSError, pickle.PicklingError, TypeError, AttributeError) as e:
            logger.warning("Cache entry %s not written: %s", path, e)
            tmp.unlink(missing_ok=True)

    # ------------------------ Maintenance ------------------------ #

    def _entries(self) -> Iterator[Path]:
        if self.documents_dir.is_dir():
            yield from self.documents_dir.rglob(f"*{_ENTRY_SUFFIX}")

    def purge(self) -> bool:
        """Удаляет все записи; каталог кэша остаётся."""
        try:
            shutil.rmtree(self.dir, ignore_errors=True)
            self.documents_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Failed to purge cache %s: %s", self.dir, e)
            return False
        return True

    def stats(self) -> CacheStats:
        documents = 0
        total = 0
        for entry in self._entries():
            try:
                total += entry.stat().st_size
            except OSError:
                # запись удалена параллельно
                continue
            documents += 1
        return CacheStats(
            path=self.dir,
            enabled=self.enabled,
            present=self.dir.is_dir(),
            documents=documents,
            total_bytes=total,
        )


__all__ = ["FileCache", "CacheStats", "CACHE_VERSION"]
