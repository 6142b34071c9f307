"""Changed-file model and orchestration around the patch parser."""

from prdiff.changes.builder import (
    find_line_by_position,
    parse_comment_hunks,
    parse_file_changes,
    reconstruct_file_change,
)
from prdiff.changes.status import get_git_change_type
from prdiff.changes.types import (
    FileChange,
    FileChangeReference,
    FileChangeWithPatch,
    FileEntry,
    GitChangeType,
)

__all__ = [
    "FileChange",
    "FileChangeReference",
    "FileChangeWithPatch",
    "FileEntry",
    "GitChangeType",
    "find_line_by_position",
    "get_git_change_type",
    "parse_comment_hunks",
    "parse_file_changes",
    "reconstruct_file_change",
]
