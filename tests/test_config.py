"""
Загрузка lqs.yaml и типизированная коэрция конфигурации.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional

import pytest

from lqs.cache import FileCache, MemoryCache, default_cache_dir
from lqs.config import CacheConfig, ConfigLoadError, EngineConfig, load_config, load_typed
from lqs.errors import ConfigError, NotFoundError
from lqs.template import Environment

from tests.infrastructure import write, write_section


def test_defaults_without_file(tmp_path: Path):
    cfg = load_config(tmp_path)
    assert cfg == EngineConfig()
    assert cfg.include_prefix == "_"
    assert cfg.include_suffix == "liquid"
    assert cfg.max_include_depth == 32
    assert cfg.cache.backend == "memory"


def test_values_from_yaml(tmp_path: Path):
    write(tmp_path / "lqs.yaml", """
section_root: sections
include_root: snippets
include_prefix: ""
include_suffix: html
max_include_depth: 4
cache:
  backend: file
  dir: .cache
""")
    cfg = load_config(tmp_path)
    assert cfg.section_root == "sections"
    assert cfg.include_prefix == ""
    assert cfg.include_suffix == "html"
    assert cfg.max_include_depth == 4
    assert cfg.cache == CacheConfig(enabled=True, backend="file", dir=".cache")


def test_empty_file(tmp_path: Path):
    write(tmp_path / "lqs.yaml", "")
    assert load_config(tmp_path) == EngineConfig()


@pytest.mark.parametrize("text, fragment", [
    ("unknown: 1\n", "unknown key(s): ['unknown']"),
    ("max_include_depth: deep\n", "lqs.yaml.max_include_depth: expected int"),
    ("max_include_depth: 0\n", "must be positive"),
    ("include_allow_ext: 1\n", "expected bool"),
    ("cache:\n  backend: redis\n", "lqs.yaml.cache.backend: expected one of"),
    ("cache: [1]\n", "expected mapping for CacheConfig"),
    ("section_root: [a]\n", "lqs.yaml.section_root"),
])
def test_invalid_values(tmp_path: Path, text: str, fragment: str):
    write(tmp_path / "lqs.yaml", text)
    with pytest.raises(ConfigError) as exc:
        load_config(tmp_path)
    assert fragment in str(exc.value)


def test_broken_yaml(tmp_path: Path):
    write(tmp_path / "lqs.yaml", "a: [1, 2\n")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


@pytest.mark.parametrize("value, enabled", [("0", False), ("off", False), ("1", True), ("yes", True)])
def test_env_overrides_cache_flag(tmp_path: Path, monkeypatch, value: str, enabled: bool):
    write(tmp_path / "lqs.yaml", "cache:\n  enabled: true\n")
    monkeypatch.setenv("LQS_CACHE", value)
    assert load_config(tmp_path).cache.enabled is enabled


class TestFromRoot:

    def test_uses_config_file(self, tmp_path: Path):
        write(tmp_path / "lqs.yaml", "section_root: sections\ncache:\n  backend: file\n")
        write_section(tmp_path, "hero", "h")
        env = Environment.from_root(tmp_path)
        assert isinstance(env.cache, FileCache)
        assert env.cache.dir == default_cache_dir(tmp_path.resolve())
        assert not (tmp_path / ".lqs-cache").exists()
        assert env.render("{% section 'hero' %}") == '<div id="section-hero" class="section-marker">h</div>'

    def test_default_memory_cache(self, tmp_path: Path):
        assert isinstance(Environment.from_root(tmp_path).cache, MemoryCache)

    def test_cache_disabled_by_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("LQS_CACHE", "0")
        assert Environment.from_root(tmp_path).cache is None

    def test_missing_sub_root(self, tmp_path: Path):
        write(tmp_path / "lqs.yaml", "section_root: nowhere\n")
        with pytest.raises(NotFoundError, match="Section root"):
            Environment.from_root(tmp_path)


@dataclass
class _Inner:
    name: str = ""
    depth: int = 0


@dataclass
class _Outer:
    ratio: float = 1.0
    mode: Literal["a", "b"] = "a"
    label: Optional[str] = None
    inner: _Inner = field(default_factory=_Inner)


@dataclass
class _WithList:
    names: List[str] = field(default_factory=list)


class TestLoadTyped:

    def test_nested(self):
        out = load_typed(_Outer, {
            "ratio": 2,
            "mode": "b",
            "label": "x",
            "inner": {"name": "n", "depth": 3},
        })
        assert out == _Outer(ratio=2.0, mode="b", label="x", inner=_Inner("n", 3))
        assert isinstance(out.ratio, float)

    def test_none_dataclass_uses_defaults(self):
        assert load_typed(_Outer, None) == _Outer()

    def test_optional_accepts_null(self):
        assert load_typed(_Outer, {"label": None}).label is None

    def test_bool_is_not_a_number(self):
        with pytest.raises(ConfigLoadError, match=r"\$.ratio: expected float, got bool"):
            load_typed(_Outer, {"ratio": True})

    def test_path_in_message(self):
        with pytest.raises(ConfigLoadError, match=r"\$.inner.depth: expected int, got str"):
            load_typed(_Outer, {"inner": {"depth": "deep"}})

    def test_unknown_key(self):
        with pytest.raises(ConfigLoadError, match=r"\$.inner: unknown key\(s\): \['size'\]"):
            load_typed(_Outer, {"inner": {"size": 1}})

    def test_container_annotations_unsupported(self):
        with pytest.raises(ConfigLoadError, match="unsupported annotation"):
            load_typed(_WithList, {"names": ["a"]})
