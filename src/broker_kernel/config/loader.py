from __future__ import annotations

from pathlib import Path

import yaml


class ConfigError(ValueError):
    # Raised for invalid configuration; configuration problems fail fast.
    pass


def load_yaml_config(path: Path) -> dict[str, object]:
    # Framework-level YAML loader; returns a raw mapping for validation.
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return raw
