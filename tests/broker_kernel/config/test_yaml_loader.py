from __future__ import annotations

from pathlib import Path

import pytest

from broker_kernel.config.loader import ConfigError, load_yaml_config


def test_load_yaml_config_returns_mapping(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yml"
    path.write_text("version: 1\nlogging:\n  level: debug\n", encoding="utf-8")
    assert load_yaml_config(path) == {"version": 1, "logging": {"level": "debug"}}


def test_load_yaml_config_empty_file_is_empty_mapping(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yml"
    path.write_text("", encoding="utf-8")
    assert load_yaml_config(path) == {}


def test_load_yaml_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_yaml_config(path)


def test_load_yaml_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yml"
    path.write_text("a: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_yaml_config(path)
