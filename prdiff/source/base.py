"""Content source protocol.

A content source answers questions about a repository at a revision. It is
the only place in prdiff where I/O happens; failures surface as
ContentSourceError and propagate to the caller untouched.
"""

from typing import Protocol, runtime_checkable

from prdiff.changes.types import FileEntry


@runtime_checkable
class ContentSource(Protocol):
    """Repository access used to build and reconstruct file changes."""

    async def file_exists(self, commit: str, path: str) -> bool:
        """Return True if path existed at commit."""
        ...

    async def get_file_content(self, commit: str, path: str) -> str:
        """Return the text content of path at commit."""
        ...

    async def list_pull_request_files(self, number: int) -> list[FileEntry]:
        """Return the changed-file entries of a pull request."""
        ...
