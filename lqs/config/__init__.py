from __future__ import annotations

from .load import load_config, CONFIG_FILE
from .model import EngineConfig, CacheConfig
from .typed import load_typed, ConfigLoadError

__all__ = [
    "EngineConfig",
    "CacheConfig",
    "load_config",
    "load_typed",
    "ConfigLoadError",
    "CONFIG_FILE",
]
