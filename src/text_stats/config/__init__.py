from broker_kernel.config.loader import ConfigError

from .loader import load_config

# Config exports are intentionally small.
__all__ = ["ConfigError", "load_config"]
