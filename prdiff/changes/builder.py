"""Build file changes from changed-file entries.

This is the orchestration layer around the patch parser: it decides per
entry whether a patch is available, asks the content source whether the
base file exists, and attaches parsed hunks. It also parses the diff hunk
snippets attached to review comments.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from prdiff.changes.status import get_git_change_type
from prdiff.changes.types import (
    FileChange,
    FileChangeReference,
    FileChangeWithPatch,
    FileEntry,
    GitChangeType,
)
from prdiff.patch.parser import parse_patch
from prdiff.patch.reconstruct import get_modified_content
from prdiff.patch.types import DiffHunk, DiffLine

if TYPE_CHECKING:
    from prdiff.source.base import ContentSource

logger = logging.getLogger(__name__)


async def parse_file_changes(
    entries: Iterable[FileEntry | Mapping[str, Any]],
    source: ContentSource,
    base_commit: str,
) -> list[FileChange]:
    """Turn changed-file entries into FileChange variants.

    Entries without a patch become FileChangeReference. For the rest the
    source is asked whether the file existed at base_commit; a missing base
    file on anything but an ADD marks the change as partial.

    Args:
        entries: FileEntry models or raw API dicts, in order
        source: Content source used for the existence check
        base_commit: Revision the patches apply to

    Returns:
        File changes in entry order.

    Raises:
        ContentSourceError: If the source fails; nothing is retried here.
    """
    changes: list[FileChange] = []

    for raw_entry in entries:
        entry = raw_entry if isinstance(raw_entry, FileEntry) else FileEntry.model_validate(raw_entry)
        change_type = get_git_change_type(entry.status)

        if not entry.patch:
            logger.debug("No patch for %s (%s), keeping reference", entry.filename, entry.status)
            changes.append(FileChangeReference(entry.blob_url, change_type, entry.filename))
            continue

        exists = await source.file_exists(base_commit, entry.filename)
        hunks = parse_patch(entry.patch)
        is_partial = not exists and change_type is not GitChangeType.ADD
        if is_partial:
            logger.info("Base file missing for %s at %s; change is partial", entry.filename, base_commit)

        changes.append(FileChangeWithPatch(
            base_commit=base_commit,
            change_type=change_type,
            file_name=entry.filename,
            patch=entry.patch,
            hunks=hunks,
            is_partial=is_partial,
            blob_url=entry.blob_url,
            previous_file_name=entry.previous_filename if change_type is GitChangeType.RENAME else None,
        ))

    return changes


def parse_comment_hunks(comments: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Attach parsed hunks to review comments.

    Sets comment["diff_hunks"] from comment["diff_hunk"] on each comment,
    in place. A missing or empty snippet gives an empty list.

    Returns:
        The same list, for chaining.
    """
    for comment in comments:
        comment["diff_hunks"] = parse_patch(comment.get("diff_hunk") or "")
    return comments


def find_line_by_position(hunks: Iterable[DiffHunk], position: int) -> DiffLine | None:
    """Find the diff line at a patch position.

    A "\\ No newline" marker occupies a position but has no DiffLine, so
    that position resolves to None.
    """
    for hunk in hunks:
        for line in hunk.lines:
            if line.position == position:
                return line
            if line.position > position:
                return None
    return None


def reconstruct_file_change(
    change: FileChangeWithPatch,
    original: str,
    strict: bool = False,
) -> str:
    """Reconstruct the new content of a changed file from its original content."""
    if change.change_type is GitChangeType.ADD:
        # Nothing to splice into; the patch holds the whole file
        original = ""
    return get_modified_content(original, change.hunks, strict=strict)
