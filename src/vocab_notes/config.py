"""Configuration entrypoint (re-exported from split modules)."""

from .config_loader import load_config
from .config_settings import Config

__all__ = [
    "Config",
    "load_config",
]
