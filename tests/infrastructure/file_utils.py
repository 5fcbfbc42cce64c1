"""
Утилиты для создания файлов шаблонов в тестах.
"""

from __future__ import annotations

from pathlib import Path


def write(p: Path, text: str) -> Path:
    """
    Записывает текст в файл, создавая родительские директории при необходимости.

    Args:
        p: Путь к файлу
        text: Содержимое для записи

    Returns:
        Путь к созданному файлу
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def _partial(root: Path, subdir: str, name: str, text: str) -> Path:
    *dirs, base = name.split("/")
    return write(root.joinpath(subdir, *dirs, f"_{base}.liquid"), text)


def write_section(root: Path, name: str, text: str) -> Path:
    """sections/<dir>/_<name>.liquid"""
    return _partial(root, "sections", name, text)


def write_snippet(root: Path, name: str, text: str) -> Path:
    """snippets/<dir>/_<name>.liquid"""
    return _partial(root, "snippets", name, text)


def write_template(root: Path, name: str, text: str) -> Path:
    """templates/<dir>/_<name>.liquid"""
    return _partial(root, "templates", name, text)
