from __future__ import annotations

import logging
import os
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import EngineConfig
from .typed import load_typed
from ..errors import ConfigError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

# Имя файла конфигурации в корне шаблонов
CONFIG_FILE = "lqs.yaml"


def _env_cache_flag() -> bool | None:
    env = os.environ.get("LQS_CACHE", None)
    if env is None:
        return None
    return env.strip().lower() not in {"0", "false", "no", "off", ""}


def load_config(root: Path) -> EngineConfig:
    """
    Читает <root>/lqs.yaml (если есть) и возвращает EngineConfig.

    Переменная окружения LQS_CACHE переопределяет cache.enabled.

    Raises:
        ConfigError: файл не парсится или содержит неизвестные/неверные ключи
    """
    path = root / CONFIG_FILE
    raw: object = {}
    if path.is_file():
        try:
            with path.open("r", encoding="utf-8") as f:
                raw = _yaml.load(f) or {}
        except YAMLError as e:
            raise ConfigError(f"Failed to parse {path}: {e}") from e
        logger.debug("Loaded config from %s", path)

    cfg = load_typed(EngineConfig, raw, path=CONFIG_FILE)
    if cfg.max_include_depth < 1:
        raise ConfigError(f"{CONFIG_FILE}.max_include_depth: must be positive, got {cfg.max_include_depth}")

    flag = _env_cache_flag()
    if flag is not None:
        cfg.cache.enabled = flag
    return cfg


__all__ = ["load_config", "CONFIG_FILE"]
