"""Typed exception hierarchy for prdiff."""

from __future__ import annotations

from typing import Any


class PrdiffError(Exception):
    """Base class for all prdiff errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(PrdiffError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class LoadError(PrdiffError):
    """Raised when an input or output file cannot be read or written."""


class ContentSourceError(PrdiffError):
    """Raised when a content source cannot answer (network, storage, auth)."""


class GitHubAPIError(ContentSourceError):
    """GitHub API error with status code and message."""

    def __init__(self, status_code: int, message: str, response_body: Any = None) -> None:
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(f"GitHub API error {status_code}: {message}")
        # Keep the bare message; str(e) carries the status prefix
        self.message = message


class HunkOrderError(PrdiffError):
    """Raised in strict mode when hunks are out of order or overlap."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Invalid hunk order: " + "; ".join(problems))
