"""
Общая тестовая инфраструктура.

Modules:
- file_utils: создание файлов шаблонов
- env_builders: сборка окружения над временным каталогом шаблонов
"""

from .file_utils import write, write_section, write_snippet, write_template
from .env_builders import make_config, make_env, count_builds

__all__ = [
    "write",
    "write_section",
    "write_snippet",
    "write_template",
    "make_config",
    "make_env",
    "count_builds",
]
