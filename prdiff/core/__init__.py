"""Core errors, constants and helpers shared across prdiff."""

from prdiff.core.errors import (
    ConfigError,
    ContentSourceError,
    GitHubAPIError,
    HunkOrderError,
    LoadError,
    PrdiffError,
)

__all__ = [
    "ConfigError",
    "ContentSourceError",
    "GitHubAPIError",
    "HunkOrderError",
    "LoadError",
    "PrdiffError",
]
