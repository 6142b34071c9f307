"""Configuration loading and validation."""

from prdiff.config.loader import load_config
from prdiff.config.schema import Config, DisplayConfig, GitHubConfig, LoggingConfig

__all__ = [
    "Config",
    "DisplayConfig",
    "GitHubConfig",
    "LoggingConfig",
    "load_config",
]
