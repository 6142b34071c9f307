"""Pydantic models for prdiff configuration validation."""

import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class GitHubConfig(BaseModel):
    """Configuration for the GitHub content source.

    Example in config.json:
        "github": {
            "repository": "octo-org/octo-repo",
            "token_env": "GITHUB_TOKEN"
        }
    """

    model_config = ConfigDict(extra="forbid")

    api_url: str = "https://api.github.com"
    """Base URL of the REST API (GitHub Enterprise: https://host/api/v3)."""

    repository: str | None = None
    """Default repository as 'owner/name'."""

    token: str | None = None
    """Direct token value. Prefer token_env."""

    token_env: str = "GITHUB_TOKEN"
    """Environment variable containing the token."""

    timeout: float = Field(default=30.0, gt=0)
    """Timeout in seconds for API requests."""

    max_retries: int = Field(default=3, ge=0, le=10)
    """Maximum number of retry attempts for rate-limited or failed requests."""

    retry_backoff: float = Field(default=1.5, ge=1.0, le=5.0)
    """Exponential backoff base between retries."""

    max_files: int = Field(default=3000, gt=0)
    """Upper bound on files fetched for one pull request."""

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an http(s) URL and drop the trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"api_url must be an http(s) URL, got {v!r}")
        return v.rstrip("/")

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str | None) -> str | None:
        """Require 'owner/name' form."""
        if v is None:
            return v
        owner, sep, name = v.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"repository must be 'owner/name', got {v!r}")
        return v

    def get_token(self) -> str | None:
        """
        Resolve token from config or environment.

        Resolution order:
        1. Direct token value (if set)
        2. Environment variable from token_env
        3. None (unauthenticated requests)
        """
        if self.token:
            return self.token
        return os.environ.get(self.token_env) or None


class DisplayConfig(BaseModel):
    """Terminal rendering options."""

    model_config = ConfigDict(extra="forbid")

    show_positions: bool = True
    """Show the patch position column when rendering hunks."""

    color: bool = True
    """Colorize added/deleted lines."""


class LoggingConfig(BaseModel):
    """Logging options."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = "WARNING"


class Config(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    github: GitHubConfig = GitHubConfig()
    display: DisplayConfig = DisplayConfig()
    logging: LoggingConfig = LoggingConfig()

    strict_hunk_order: bool = False
    """Reject out-of-order or overlapping hunks instead of splicing best-effort."""
