from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .cache import FileCache, cache_dir
from .config import load_config
from .errors import LqsUserError
from .filesystem import KINDS
from .template import Environment
from .version import tool_version

logger = logging.getLogger("lqs")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("LQS_DEBUG") else logging.INFO
    logger.setLevel(level)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lqs",
        description="Liquid sections: render templates with sandboxed, cached section includes",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--root", default=".", help="корень шаблонов (песочница)")
        sp.add_argument("--verbose", action="store_true", help="отладочный вывод в stderr")

    def add_kind(sp: argparse.ArgumentParser, default: str) -> None:
        sp.add_argument(
            "--kind",
            default=default,
            choices=[*KINDS, "default"],
            help="вид шаблона: определяет каталог поиска",
        )

    sp_render = sub.add_parser("render", help="Отрендерить шаблон в stdout")
    sp_render.add_argument("name", help="имя шаблона (без префикса и расширения)")
    add_common(sp_render)
    add_kind(sp_render, "template")
    sp_render.add_argument("--data", metavar="FILE", help="переменные контекста (JSON или YAML)")
    sp_render.add_argument("--no-cache", action="store_true", help="не использовать кэш документов")

    sp_resolve = sub.add_parser("resolve", help="Показать канонический путь шаблона")
    sp_resolve.add_argument("name")
    add_common(sp_resolve)
    add_kind(sp_resolve, "default")

    sp_cache = sub.add_parser("cache", help="Файловый кэш документов (JSON)")
    sp_cache.add_argument("action", choices=["info", "purge"])
    add_common(sp_cache)

    return p


def _load_data(path: Optional[str]) -> Dict[str, Any]:
    """Читает переменные контекста из JSON или YAML файла."""
    if not path:
        return {}
    file_path = Path(path)
    if not file_path.is_file():
        raise ValueError(f"Data file not found: {file_path}")
    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = YAML(typ="safe").load(text)
    except (ValueError, YAMLError) as e:
        raise ValueError(f"Failed to parse data file {file_path}: {e}")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Data file {file_path} must contain a mapping")
    return data


def _kind(ns: argparse.Namespace) -> str:
    return "" if ns.kind == "default" else ns.kind


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(getattr(ns, "verbose", False)))
    root = Path(ns.root)

    try:
        if ns.cmd == "render":
            kwargs = {"cache": None} if ns.no_cache else {}
            env = Environment.from_root(root, **kwargs)
            sys.stdout.write(env.render_file(ns.name, _load_data(ns.data), kind=_kind(ns)))
            return 0

        if ns.cmd == "resolve":
            env = Environment.from_root(root, cache=None)
            sys.stdout.write(str(env.file_system.full_path(ns.name, _kind(ns))) + "\n")
            return 0

        if ns.cmd == "cache":
            cfg = load_config(root)
            cache = FileCache(cache_dir(cfg.cache, root))
            if ns.action == "purge":
                cache.purge()
            data = asdict(cache.stats())
            data["path"] = str(data["path"])
            sys.stdout.write(json.dumps(data, ensure_ascii=False, indent=2) + "\n")
            return 0

    except LqsUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
