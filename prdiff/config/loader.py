"""Configuration loading with layered merging.

Layers, later overriding earlier:
1. Global user config (~/.prdiff/config.json)
2. Project local config (cwd/.prdiff/config.json)

Missing layers are skipped; with no files at all, model defaults apply.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from prdiff.config.schema import Config
from prdiff.core.constants import get_default_config_path, get_local_config_path
from prdiff.core.errors import ConfigError

logger = logging.getLogger(__name__)


def load_config(path: Path | None = None, cwd: Path | None = None) -> Config:
    """Load configuration from file with layered merging.

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for local lookup. Defaults to Path.cwd().

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If a config file is unreadable or invalid, or the merged
            config fails validation.
    """
    if path is not None:
        return _validate(read_config_layer(path, required=True), [path])

    effective_cwd = cwd or Path.cwd()
    merged: dict[str, Any] = {}
    loaded_from: list[Path] = []

    for layer_path in (get_default_config_path(), get_local_config_path(effective_cwd)):
        layer = read_config_layer(layer_path)
        if layer:
            merged = overlay_config(merged, layer)
            loaded_from.append(layer_path)

    logger.debug("Config layers loaded: %s", [str(p) for p in loaded_from])
    return _validate(merged, loaded_from)


def read_config_layer(path: Path, required: bool = False) -> dict[str, Any]:
    """Read one JSON config layer.

    An empty file is an empty layer. A missing file is an empty layer too,
    unless required is set.

    Raises:
        ConfigError: If the file is missing but required, unreadable, not
            JSON, or not a JSON object.
    """
    if not path.is_file():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("No config layer at %s", path)
        return {}

    try:
        # utf-8-sig tolerates a BOM left by Windows editors
        content = path.read_text(encoding="utf-8-sig").strip()
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if not content:
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must hold a JSON object, got {type(data).__name__}")

    logger.debug("Read config layer %s", path)
    return data


def overlay_config(base: dict[str, Any], layer: dict[str, Any]) -> dict[str, Any]:
    """Lay one config layer over another.

    Sections (github, display, logging) are merged key by key, so a local
    file can change one GitHub setting and keep the rest of the global
    section. Everything else, lists included, is replaced outright.
    Neither input is modified.
    """
    result = dict(base)
    for key, value in layer.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = overlay_config(current, value)
        else:
            result[key] = value
    return result


def _validate(data: dict[str, Any], sources: list[Path]) -> Config:
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        origin = ", ".join(str(p) for p in sources) or "defaults"
        raise ConfigError(f"Config validation failed ({origin}): {e}") from e
