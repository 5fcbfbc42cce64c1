from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

# Расширение файлов шаблонов (без точки)
DEFAULT_SUFFIX = "liquid"
# Префикс имени файла (partials в стиле Rails: _hero.liquid)
DEFAULT_PREFIX = "_"


@dataclass
class CacheConfig:
    enabled: bool = True
    backend: Literal["memory", "file"] = "memory"
    # None: <XDG_CACHE_HOME>/lqs/<хеш корня>
    dir: Optional[str] = None


@dataclass
class EngineConfig:
    """
    Настройки движка.

    Пути поддиректорий задаются относительно корня шаблонов;
    пустое значение означает сам корень.
    """
    include_root: Optional[str] = None
    section_root: Optional[str] = None
    template_root: Optional[str] = None
    include_suffix: str = DEFAULT_SUFFIX
    include_prefix: str = DEFAULT_PREFIX
    include_allow_ext: bool = False
    max_include_depth: int = 32
    section_id_prefix: str = "section-"
    section_class: str = "section-marker"
    cache: CacheConfig = field(default_factory=CacheConfig)

    def sub_root(self, root: Path, value: Optional[str]) -> Optional[Path]:
        """Абсолютный путь поддиректории или None (→ корень)."""
        if not value:
            return None
        p = Path(value)
        return p if p.is_absolute() else root / p


__all__ = ["EngineConfig", "CacheConfig", "DEFAULT_SUFFIX", "DEFAULT_PREFIX"]
