"""Tests for environment driven settings."""

import flower_tree
from flower_tree.core import Settings
from flower_tree.dtree import TreeConfig
import flower_tree.dtree._tree as tree_module


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("FLOWER_TREE_DEFAULT_MAX_DEPTH", "7")
    monkeypatch.setenv("FLOWER_TREE_RANDOM_SEED", "42")
    s = Settings()
    assert s.DEFAULT_MAX_DEPTH == 7
    assert s.RANDOM_SEED == 42


def test_settings_defaults(monkeypatch):
    for name in ("LOG_LEVEL", "RANDOM_SEED", "DEFAULT_MAX_DEPTH"):
        monkeypatch.delenv(f"FLOWER_TREE_{name}", raising=False)
    s = Settings(_env_file=None)  # type: ignore
    assert s.LOG_LEVEL == "WARNING"
    assert s.RANDOM_SEED is None
    assert s.DEFAULT_MAX_DEPTH == 5


def test_tree_config_uses_default_depth(monkeypatch):
    monkeypatch.setattr(tree_module, "settings", Settings(DEFAULT_MAX_DEPTH=3))
    assert TreeConfig().max_depth == 3


def test_package_version_is_set():
    assert isinstance(flower_tree.__version__, str)
    assert flower_tree.__version__
