"""
Окружение движка шаблонов.

Держит конфигурацию и коллабораторов (файловая система, кэш, реестр тегов)
и передаёт их в разбор и рендеринг явно, через ParseState и RenderContext.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from .context import RenderContext
from .document import Document, DocumentBuilder, ParseState
from .registry import TagRegistry, create_default_registry
from ..cache import ParseCache, create_cache
from ..config import EngineConfig, load_config
from ..errors import MissingCollaboratorError
from ..filesystem import LocalFileSystem

logger = logging.getLogger(__name__)

_DEFAULT = object()


class Environment:
    """
    Точка входа для разбора и рендеринга шаблонов.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        file_system: Optional[LocalFileSystem] = None,
        cache: Optional[ParseCache] = None,
        registry: Optional[TagRegistry] = None,
    ):
        self.config = config or EngineConfig()
        self.file_system = file_system
        self.cache = cache
        self.registry = registry or create_default_registry()
        self.builder = DocumentBuilder(self.registry)

    @classmethod
    def from_root(cls, root: Path | str, config: Optional[EngineConfig] = None, *, cache: Any = _DEFAULT) -> Environment:
        """
        Окружение для каталога шаблонов.

        Args:
            root: Корень шаблонов (песочница)
            config: Настройки; по умолчанию читаются из <root>/lqs.yaml
            cache: Явный кэш (None: без кэша); по умолчанию создаётся по настройкам
        """
        root = Path(root)
        cfg = config if config is not None else load_config(root)
        fs = LocalFileSystem(
            root,
            cfg.sub_root(root, cfg.include_root),
            cfg.sub_root(root, cfg.section_root),
            cfg.sub_root(root, cfg.template_root),
            suffix=cfg.include_suffix,
            prefix=cfg.include_prefix,
            allow_ext=cfg.include_allow_ext,
        )
        if cache is _DEFAULT:
            cache = create_cache(cfg.cache, fs.root)
        return cls(cfg, fs, cache)

    def new_context(self, assigns: Optional[Mapping[str, Any]] = None) -> RenderContext:
        return RenderContext(assigns, environment=self)

    def parse(self, source: str, context: Optional[RenderContext] = None, *, origin: Optional[str] = None) -> Document:
        """
        Разбирает исходный текст в документ.

        Args:
            source: Текст шаблона
            context: Контекст, доступный тегам при разборе
            origin: Ключ шаблона для защиты от циклических включений
        """
        ctx = context if context is not None else self.new_context()
        state = ParseState(self, ctx)
        if origin is not None:
            state = state.descend(origin)
        return self.builder.build(source, state)

    def render(self, source: str, assigns: Optional[Mapping[str, Any]] = None) -> str:
        context = self.new_context(assigns)
        return self.parse(source, context).render(context)

    def render_file(self, name: str, assigns: Optional[Mapping[str, Any]] = None, kind: str = "template") -> str:
        """
        Рендерит шаблон из файловой системы.

        Raises:
            MissingCollaboratorError: Файловая система не подключена
        """
        if self.file_system is None:
            raise MissingCollaboratorError("No file system")
        source = self.file_system.read_template_file(name, kind)
        context = self.new_context(assigns)
        document = self.parse(source, context, origin=f"{kind}:{name}")
        logger.debug("Rendering %s '%s'", kind, name)
        return document.render(context)


__all__ = ["Environment"]
