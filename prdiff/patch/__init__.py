"""Patch module for parsing unified diff hunks and reconstructing content.

Main components:
- Types: DiffLineKind, DiffLine, DiffHunk - positioned, numbered diff lines
- Scanner: iter_lines() - line-ending agnostic line splitting
- Parser: parse_patch() / iter_diff_hunks() - hunk text to DiffHunk records
- Reconstruct: get_modified_content() - original content + hunks -> new content

Example usage:
    >>> from prdiff.patch import parse_patch, get_modified_content
    >>> patch = "@@ -1,3 +1,3 @@\\n a\\n-b\\n+B\\n c\\n"
    >>> hunks = parse_patch(patch)
    >>> hunks[0].old_start, hunks[0].old_length
    (1, 3)
    >>> get_modified_content("a\\nb\\nc", hunks)
    'a\\nB\\nc'
"""

from prdiff.patch.parser import (
    get_diff_line_kind,
    iter_diff_hunks,
    parse_hunk_header,
    parse_patch,
)
from prdiff.patch.reconstruct import (
    check_hunk_order,
    get_modified_content,
    split_content_lines,
)
from prdiff.patch.scanner import count_carriage_returns, iter_lines
from prdiff.patch.types import DiffHunk, DiffLine, DiffLineKind, HunkHeader

__all__ = [
    # Types
    "DiffHunk",
    "DiffLine",
    "DiffLineKind",
    "HunkHeader",
    # Scanner
    "count_carriage_returns",
    "iter_lines",
    # Parser
    "get_diff_line_kind",
    "iter_diff_hunks",
    "parse_hunk_header",
    "parse_patch",
    # Reconstruct
    "check_hunk_order",
    "get_modified_content",
    "split_content_lines",
]
