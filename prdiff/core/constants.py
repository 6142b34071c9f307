"""Core constants and paths for prdiff.

Single source of truth for config locations. Modules import from here
instead of hardcoding paths like `Path.home() / ".prdiff"`.
"""

from pathlib import Path

PRDIFF_DIR_NAME = ".prdiff"
CONFIG_FILE_NAME = "config.json"


def get_prdiff_dir() -> Path:
    """Get ~/.prdiff (global config directory)."""
    return Path.home() / PRDIFF_DIR_NAME


def get_default_config_path() -> Path:
    """Get global config file path."""
    return get_prdiff_dir() / CONFIG_FILE_NAME


def get_local_config_path(cwd: Path) -> Path:
    """Get project-local config file path under cwd."""
    return cwd / PRDIFF_DIR_NAME / CONFIG_FILE_NAME
