"""Mapping from API status labels to change types."""

from prdiff.changes.types import GitChangeType

_STATUS_TABLE = {
    "removed": GitChangeType.DELETE,
    "added": GitChangeType.ADD,
    "renamed": GitChangeType.RENAME,
    "modified": GitChangeType.MODIFY,
}


def get_git_change_type(status: str) -> GitChangeType:
    """Map a status label such as "added" to its GitChangeType (UNKNOWN if unmapped)."""
    return _STATUS_TABLE.get(status, GitChangeType.UNKNOWN)
