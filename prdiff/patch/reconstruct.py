"""Reconstruct a file's new content from its original content and a patch.

The splice trusts the hunk headers: unchanged lines between hunks are
copied from the original by line number, and each hunk replaces exactly
the original range its header declares (old_start .. old_start+old_length-1),
even if the hunk body has a different number of context/delete lines.

Hunks are expected in ascending, non-overlapping order. Violations are
reported through check_hunk_order(); by default they are logged and the
splice proceeds best-effort, in strict mode they raise HunkOrderError.
"""

import logging
import re
from collections.abc import Sequence

from prdiff.core.errors import HunkOrderError
from prdiff.patch.parser import parse_patch
from prdiff.patch.types import DiffHunk, DiffLineKind

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r?\n")


def split_content_lines(content: str) -> list[str]:
    """Split file content on "\\r\\n" or "\\n".

    Unlike str.splitlines(), a trailing terminator yields a trailing empty
    element and empty content yields [""], so joining with "\\n" restores
    the content with normalized line endings.
    """
    return _LINE_BREAK_RE.split(content)


def check_hunk_order(hunks: Sequence[DiffHunk]) -> list[str]:
    """Describe ordering problems between consecutive hunks.

    Args:
        hunks: Hunks in the order they would be spliced

    Returns:
        Human-readable problems; empty if hunks ascend without overlap.
    """
    problems: list[str] = []

    for index in range(1, len(hunks)):
        prev = hunks[index - 1]
        cur = hunks[index]
        prev_end = prev.old_start + prev.old_length - 1

        if cur.old_start < prev.old_start:
            problems.append(
                f"hunk {index + 1} starts at line {cur.old_start}, "
                f"before hunk {index} at line {prev.old_start}"
            )
        elif cur.old_start <= prev_end:
            problems.append(
                f"hunk {index + 1} starts at line {cur.old_start}, "
                f"inside hunk {index} (lines {prev.old_start}-{prev_end})"
            )

    return problems


def get_modified_content(
    original: str,
    patch: str | Sequence[DiffHunk],
    strict: bool = False,
) -> str:
    """Apply hunks to original content and return the new content.

    Args:
        original: Full original file content
        patch: Patch text for the file, or already parsed hunks
        strict: Raise HunkOrderError instead of splicing out-of-order hunks

    Returns:
        New content, lines joined with "\\n".

    Raises:
        HunkOrderError: If strict and the hunks are out of order or overlap.

    Example:
        >>> get_modified_content("a\\nb\\nc", "@@ -1,3 +1,3 @@\\n a\\n-b\\n+B\\n c\\n")
        'a\\nB\\nc'
    """
    hunks = parse_patch(patch) if isinstance(patch, str) else patch

    problems = check_hunk_order(hunks)
    if problems:
        if strict:
            raise HunkOrderError(problems)
        for problem in problems:
            logger.warning("Splicing despite bad hunk order: %s", problem)

    left = split_content_lines(original)
    right: list[str] = []
    last_common_line = 0

    for hunk in hunks:
        right.extend(_original_range(left, last_common_line + 1, hunk.old_start))
        last_common_line = hunk.old_start + hunk.old_length - 1

        for line in hunk.lines:
            if line.kind in (DiffLineKind.CONTEXT, DiffLineKind.ADD):
                right.append(line.text)

    right.extend(_original_range(left, last_common_line + 1, len(left) + 1))

    return "\n".join(right)


def _original_range(left: list[str], first: int, stop: int) -> list[str]:
    """Original lines numbered first..stop-1 (1-indexed), clipped to the file."""
    first = max(first, 1)
    stop = min(stop, len(left) + 1)
    if first >= stop:
        return []
    return left[first - 1 : stop - 1]
