from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from broker_kernel.config.loader import ConfigError, load_yaml_config
from text_stats.usecases.config_models import AppConfig

# Shipped with the package; used whenever no config path is given.
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "default_config.yml"


def load_config(path: Path | None = None) -> AppConfig:
    # A given path must exist and validate; no path means the packaged defaults.
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    raw = load_yaml_config(path)
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc
