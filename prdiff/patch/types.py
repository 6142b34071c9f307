"""Types for parsed unified diff hunks.

This module provides the records produced by a single parse pass over
one file's patch: classified diff lines carrying both line numbers and a
position that runs across the whole patch, grouped into hunks.
"""

from dataclasses import dataclass, field
from enum import Enum


class DiffLineKind(Enum):
    """Classification of a scanned diff line."""

    CONTEXT = "context"  # ' ' prefix, present on both sides
    ADD = "add"  # '+' prefix, new side only
    DELETE = "delete"  # '-' prefix, original side only
    CONTROL = "control"  # hunk header or "\ No newline" marker


@dataclass
class DiffLine:
    """A single line of a hunk.

    Attributes:
        kind: Line classification
        old_line_number: 1-indexed line in the original file, -1 for ADD/CONTROL
        new_line_number: 1-indexed line in the new file, -1 for DELETE/CONTROL
        position: 0-indexed position within the whole patch (not the hunk)
        raw: The scanned line including its one-character prefix
        ends_with_line_break: False when followed by a "no newline" marker
    """

    kind: DiffLineKind
    old_line_number: int
    new_line_number: int
    position: int
    raw: str
    ends_with_line_break: bool = True

    @property
    def text(self) -> str:
        """Line content without the classification prefix."""
        return self.raw[1:]


@dataclass(frozen=True)
class HunkHeader:
    """Decoded fields of an `@@ -a,b +c,d @@` line."""

    old_start: int
    old_length: int
    new_start: int
    new_length: int


@dataclass
class DiffHunk:
    """A hunk with its declared ranges and positioned lines.

    Attributes:
        old_start: Declared start line in the original file
        old_length: Declared line count on the original side (0 if omitted)
        new_start: Declared start line in the new file
        new_length: Declared line count on the new side (0 if omitted)
        position: Patch position of the header line
        lines: Diff lines; lines[0] is the CONTROL line for the header itself
    """

    old_start: int
    old_length: int
    new_start: int
    new_length: int
    position: int
    lines: list[DiffLine] = field(default_factory=list)

    @property
    def header(self) -> str:
        """Raw text of the header line."""
        return self.lines[0].raw if self.lines else ""

    def count_context(self) -> int:
        """Count context lines."""
        return sum(1 for line in self.lines if line.kind is DiffLineKind.CONTEXT)

    def count_additions(self) -> int:
        """Count added lines."""
        return sum(1 for line in self.lines if line.kind is DiffLineKind.ADD)

    def count_deletions(self) -> int:
        """Count deleted lines."""
        return sum(1 for line in self.lines if line.kind is DiffLineKind.DELETE)

    def compute_lengths(self) -> tuple[int, int]:
        """Compute actual (old_length, new_length) from the line kinds.

        old_length = context + deletions
        new_length = context + additions
        """
        context = self.count_context()
        return (context + self.count_deletions(), context + self.count_additions())
