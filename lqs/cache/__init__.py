from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Optional

from .base import ParseCache, content_hash
from .fs_cache import FileCache, CacheStats
from .memory import MemoryCache
from ..config.model import CacheConfig
from ..errors import ConfigError
from ..filesystem import is_within


def default_cache_dir(root: Path) -> Path:
    """<XDG_CACHE_HOME или ~/.cache>/lqs/<хеш пути корня>"""
    base = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    digest = hashlib.sha1(str(root).encode("utf-8")).hexdigest()[:12]
    return Path(base) / "lqs" / digest


def cache_dir(cfg: CacheConfig, root: Path) -> Path:
    """
    Каталог файлового кэша для корня шаблонов.

    Относительный cache.dir отсчитывается от текущего каталога.
    Записи кэша загружаются через pickle, поэтому каталог не может
    лежать внутри корня шаблонов, доступного авторам шаблонов.

    Raises:
        ConfigError: каталог кэша внутри корня шаблонов
    """
    root = root.resolve()
    directory = Path(cfg.dir).expanduser() if cfg.dir else default_cache_dir(root)
    directory = directory.absolute()
    if is_within(directory.resolve(), root):
        raise ConfigError(f"cache.dir must be outside the template root: {directory} is under {root}")
    return directory


def create_cache(cfg: CacheConfig, root: Path) -> Optional[ParseCache]:
    """Кэш по настройкам; None, если кэширование выключено."""
    if not cfg.enabled:
        return None
    if cfg.backend == "file":
        return FileCache(cache_dir(cfg, root))
    return MemoryCache()


__all__ = [
    "ParseCache",
    "content_hash",
    "MemoryCache",
    "FileCache",
    "CacheStats",
    "cache_dir",
    "default_cache_dir",
    "create_cache",
]
