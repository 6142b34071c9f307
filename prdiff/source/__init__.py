"""Content sources: repository access for building file changes."""

from prdiff.source.base import ContentSource
from prdiff.source.github import GitHubContentSource

__all__ = ["ContentSource", "GitHubContentSource"]
