from pathlib import Path

import pytest

from lqs.cache import MemoryCache

from tests.infrastructure import make_env


@pytest.fixture(autouse=True)
def _no_cache_env_override(monkeypatch, tmp_path_factory):
    # LQS_CACHE из окружения разработчика не должен влиять на тесты
    monkeypatch.delenv("LQS_CACHE", raising=False)
    monkeypatch.delenv("LQS_DEBUG", raising=False)
    # Файловый кэш по умолчанию пишет в XDG_CACHE_HOME, а не в ~/.cache
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path_factory.mktemp("xdg-cache")))


@pytest.fixture
def tpl_root(tmp_path: Path) -> Path:
    """Корень шаблонов: sections/, snippets/, templates/."""
    root = tmp_path / "templates-root"
    for sub in ("sections", "snippets", "templates"):
        (root / sub).mkdir(parents=True)
    return root


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def env(tpl_root: Path, cache: MemoryCache):
    return make_env(tpl_root, cache=cache)
