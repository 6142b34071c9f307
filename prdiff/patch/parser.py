"""Parser for unified diff hunks.

This module turns the hunk section of a single file's patch into DiffHunk
records. Every line from the first hunk header onward gets a position that
keeps counting across hunk boundaries, so a line can be addressed by its
offset in the whole patch (as review comment anchors do).

Parsing never raises: lines before the first header are ignored, and
text without any header yields no hunks.
"""

import logging
import re
from collections.abc import Iterator

from prdiff.patch.scanner import count_carriage_returns, iter_lines
from prdiff.patch.types import DiffHunk, DiffLine, DiffLineKind, HunkHeader

logger = logging.getLogger(__name__)

# Pattern for hunk header: @@ -old_start[,old_length] +new_start[,new_length] @@ [context]
HUNK_HEADER_RE = re.compile(r"@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")

_KIND_BY_PREFIX = {
    " ": DiffLineKind.CONTEXT,
    "+": DiffLineKind.ADD,
    "-": DiffLineKind.DELETE,
}


def parse_hunk_header(line: str) -> HunkHeader | None:
    """Decode a hunk header line.

    Args:
        line: Any scanned line

    Returns:
        HunkHeader with the four fields, or None if the line is not a header.
        Omitted lengths default to 0.
    """
    match = HUNK_HEADER_RE.search(line)
    if not match:
        return None

    return HunkHeader(
        old_start=int(match.group(1)),
        old_length=int(match.group(2) or 0),
        new_start=int(match.group(3)),
        new_length=int(match.group(4) or 0),
    )


def get_diff_line_kind(line: str) -> DiffLineKind:
    """Classify a hunk body line by its first character."""
    return _KIND_BY_PREFIX.get(line[:1], DiffLineKind.CONTROL)


def iter_diff_hunks(patch: str) -> Iterator[DiffHunk]:
    """Yield the hunks of a patch in order.

    Each hunk is yielded once the next header or the end of input closes it.

    Args:
        patch: Patch text for one file

    Yields:
        DiffHunk records whose first line is the header's CONTROL line.
    """
    hunk: DiffHunk | None = None
    position = -1
    old_line = -1
    new_line = -1

    for line in iter_lines(patch):
        header = parse_hunk_header(line)
        if header is not None:
            if hunk is not None:
                yield hunk

            if position == -1:
                position = 0

            old_line = header.old_start
            new_line = header.new_start
            hunk = DiffHunk(
                old_start=header.old_start,
                old_length=header.old_length,
                new_start=header.new_start,
                new_length=header.new_length,
                position=position,
            )
            hunk.lines.append(DiffLine(DiffLineKind.CONTROL, -1, -1, position, line))
        elif hunk is not None:
            kind = get_diff_line_kind(line)

            if kind is DiffLineKind.CONTROL:
                # "\ No newline at end of file" applies to the line before it
                if hunk.lines:
                    hunk.lines[-1].ends_with_line_break = False
            else:
                hunk.lines.append(DiffLine(
                    kind,
                    old_line if kind is not DiffLineKind.ADD else -1,
                    new_line if kind is not DiffLineKind.DELETE else -1,
                    position,
                    line,
                ))

                # Embedded "\r" means one scanned line spans several source lines
                line_count = 1 + count_carriage_returns(line)
                if kind is not DiffLineKind.ADD:
                    old_line += line_count
                if kind is not DiffLineKind.DELETE:
                    new_line += line_count

        if position != -1:
            position += 1

    if hunk is not None:
        yield hunk


def parse_patch(patch: str) -> list[DiffHunk]:
    """Parse a patch into a list of hunks.

    Args:
        patch: Patch text for one file

    Returns:
        Hunks in patch order. Empty if the text has no valid header.

    Example:
        >>> hunks = parse_patch("@@ -1,2 +1,2 @@\\n a\\n-b\\n+B\\n")
        >>> [line.kind.value for line in hunks[0].lines]
        ['control', 'context', 'delete', 'add']
        >>> hunks[0].lines[3].position
        3
    """
    hunks = list(iter_diff_hunks(patch))

    for hunk in hunks:
        logger.debug(
            "Hunk at position %d: -%d,%d +%d,%d with %d line(s)",
            hunk.position, hunk.old_start, hunk.old_length,
            hunk.new_start, hunk.new_length, len(hunk.lines),
        )
        actual = hunk.compute_lengths()
        if actual != (hunk.old_length, hunk.new_length):
            logger.debug(
                "Hunk at position %d declares %d/%d lines but has %d/%d",
                hunk.position, hunk.old_length, hunk.new_length, actual[0], actual[1],
            )

    logger.debug("Parsed %d hunk(s)", len(hunks))
    return hunks
