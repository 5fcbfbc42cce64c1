"""
Локальная файловая система шаблонов.

Находит файлы шаблонов по именам в стиле Rails partials
(к имени добавляются префикс "_" и расширение ".liquid"),
строго внутри заданного корня.

В целях безопасности имена шаблонов могут содержать только буквы,
цифры, подчёркивание, дефис и слеш (точку: только в режиме include_allow_ext).
"""

from __future__ import annotations

import logging
import os
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config.model import DEFAULT_PREFIX, DEFAULT_SUFFIX
from .errors import NotFoundError, ParseError, TemplateIOError

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^(?![./])[A-Za-z0-9_/\-]+$")
_NAME_WITH_EXT_RE = re.compile(r"^(?![./])[A-Za-z0-9_./\-]+$")
# Сегменты пути, которые нельзя использовать в имени даже при include_allow_ext
_DOT_SEGMENTS = frozenset({".", ".."})

# Виды шаблонов, для которых есть отдельные корни
KINDS = ("include", "section", "template")


@dataclass(frozen=True)
class RootSet:
    """Канонические корни, вычисленные один раз при создании файловой системы."""
    root: Path
    include_root: Path
    section_root: Path
    template_root: Path

    def for_kind(self, kind: str) -> Path:
        if kind == "include":
            return self.include_root
        if kind == "section":
            return self.section_root
        if kind == "template":
            return self.template_root
        return self.root


def _canonical_dir(path: Optional[Path | str], what: str) -> Path:
    if path is None or str(path) == "":
        raise NotFoundError(f"{what} path could not be found: ''")
    try:
        real = Path(path).resolve(strict=True)
    except (OSError, RuntimeError):
        raise NotFoundError(f"{what} path could not be found: '{path}'")
    if not real.is_dir():
        raise NotFoundError(f"{what} path is not a directory: '{real}'")
    return real


def is_within(path: Path, root: Path) -> bool:
    """
    Проверяет, что path лежит внутри root по границам сегментов пути.

    Сравнение без учёта регистра там, где его не учитывает ФС (os.path.normcase).
    """
    p = os.path.normcase(str(path))
    r = os.path.normcase(str(root))
    try:
        return os.path.commonpath([p, r]) == r
    except ValueError:
        # разные диски в Windows
        return False


class LocalFileSystem:
    """
    Резолвер имён шаблонов в канонические пути внутри песочницы.

    Корни канонизируются в конструкторе и дальше не меняются.
    """

    def __init__(
        self,
        root: Path | str,
        include_root: Optional[Path | str] = None,
        section_root: Optional[Path | str] = None,
        template_root: Optional[Path | str] = None,
        *,
        suffix: str = DEFAULT_SUFFIX,
        prefix: str = DEFAULT_PREFIX,
        allow_ext: bool = False,
    ):
        real_root = _canonical_dir(root, "Root")

        def sub(value: Optional[Path | str], what: str) -> Path:
            if value is None or str(value) == "":
                return real_root
            return _canonical_dir(value, what)

        self.roots = RootSet(
            root=real_root,
            include_root=sub(include_root, "Include root"),
            section_root=sub(section_root, "Section root"),
            template_root=sub(template_root, "Template root"),
        )
        self.suffix = suffix
        self.prefix = prefix
        self.allow_ext = allow_ext

    @property
    def root(self) -> Path:
        return self.roots.root

    def full_path(self, template_path: str, kind: str = "") -> Path:
        """
        Резолвит имя шаблона в канонический путь к файлу.

        Args:
            template_path: Имя шаблона (например, "hero" или "blocks/card")
            kind: "include" | "section" | "template" | "" (корень)

        Returns:
            Канонический абсолютный путь внутри корня

        Raises:
            ParseError: Пустое или недопустимое имя
            NotFoundError: Файл не найден или путь выходит за пределы корня
        """
        if not template_path:
            raise ParseError("Empty template name")

        name_re = _NAME_WITH_EXT_RE if self.allow_ext else _NAME_RE
        if not name_re.match(template_path):
            raise ParseError(f"Illegal template name '{template_path}'")

        if any(part in _DOT_SEGMENTS for part in template_path.split("/")):
            raise ParseError(f"Illegal template name '{template_path}': '.' and '..' segments are not allowed")

        template_dir, template_file = posixpath.split(template_path)
        if not template_file:
            raise ParseError(f"Illegal template name '{template_path}'")

        if not self.allow_ext:
            template_file = f"{self.prefix}{template_file}.{self.suffix}"

        base = self.roots.for_kind(kind)
        joined = base.joinpath(*[p for p in template_dir.split("/") if p], template_file)

        # Канонизация только после склейки: симлинки внутри имени
        # раскрываются до проверки вхождения в корень.
        try:
            real = joined.resolve(strict=True)
        except (OSError, RuntimeError):
            raise NotFoundError(f"File not found: {joined} (kind: {kind or 'default'})")

        if not is_within(real, self.roots.root):
            raise NotFoundError(f"Illegal template full path: {real} not under {self.roots.root}")
        if not real.is_file():
            raise NotFoundError(f"Not a template file: {real} (kind: {kind or 'default'})")

        logger.debug("Resolved '%s' (%s) -> %s", template_path, kind or "default", real)
        return real

    def read_bytes(self, template_path: str, kind: str = "") -> bytes:
        """Резолвит и читает содержимое файла шаблона."""
        path = self.full_path(template_path, kind)
        try:
            return path.read_bytes()
        except OSError as e:
            raise TemplateIOError(f"Failed to read template {path}: {e}", str(path), e) from e

    def read_template_file(self, template_path: str, kind: str = "") -> str:
        """Текст шаблона в UTF-8."""
        data = self.read_bytes(template_path, kind)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TemplateIOError(
                f"Template '{template_path}' is not valid UTF-8: {e}", template_path, e
            ) from e


__all__ = ["LocalFileSystem", "RootSet", "is_within", "KINDS"]
