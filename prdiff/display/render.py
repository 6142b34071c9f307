"""Rich renderables for hunks and file changes."""

from collections.abc import Sequence
from typing import Any

from rich.table import Table
from rich.text import Text

from prdiff.changes.types import FileChange, FileChangeWithPatch
from prdiff.patch.types import DiffHunk, DiffLine, DiffLineKind

_KIND_STYLES = {
    DiffLineKind.CONTEXT: "",
    DiffLineKind.ADD: "green",
    DiffLineKind.DELETE: "red",
    DiffLineKind.CONTROL: "cyan",
}


def _number(value: int) -> str:
    return str(value) if value >= 0 else ""


def render_hunk(hunk: DiffHunk, show_positions: bool = True, color: bool = True) -> Table:
    """Build a table of one hunk's lines with both line numbers."""
    table = Table(
        title=Text(hunk.header),
        title_justify="left",
        show_edge=False,
        pad_edge=False,
    )
    table.add_column("old", justify="right", style="dim")
    table.add_column("new", justify="right", style="dim")
    if show_positions:
        table.add_column("pos", justify="right", style="dim")
    table.add_column("line", no_wrap=True)

    for line in hunk.lines:
        style = _KIND_STYLES[line.kind] if color else ""
        raw = Text(line.raw.replace("\r", "\\r"), style=style)
        if not line.ends_with_line_break:
            raw.append("  (no newline)", style="yellow")
        row = [_number(line.old_line_number), _number(line.new_line_number)]
        if show_positions:
            row.append(str(line.position))
        table.add_row(*row, raw)

    return table


def render_file_changes(changes: Sequence[FileChange]) -> Table:
    """Build a summary table of changed files."""
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("file")
    table.add_column("change")
    table.add_column("hunks", justify="right")
    table.add_column("+/-", justify="right")
    table.add_column("notes", style="yellow")

    for change in changes:
        if isinstance(change, FileChangeWithPatch):
            added = sum(h.count_additions() for h in change.hunks)
            deleted = sum(h.count_deletions() for h in change.hunks)
            notes = []
            if change.previous_file_name:
                notes.append(f"from {change.previous_file_name}")
            if change.is_partial:
                notes.append("partial")
            table.add_row(
                Text(change.file_name),
                change.change_type.value,
                str(len(change.hunks)),
                f"[green]+{added}[/] [red]-{deleted}[/]",
                Text(", ".join(notes)),
            )
        else:
            table.add_row(Text(change.file_name), change.change_type.value, "", "", "no patch")

    return table


def line_to_dict(line: DiffLine) -> dict[str, Any]:
    """Plain-data form of a diff line for JSON output."""
    return {
        "kind": line.kind.value,
        "old_line_number": line.old_line_number,
        "new_line_number": line.new_line_number,
        "position": line.position,
        "raw": line.raw,
        "ends_with_line_break": line.ends_with_line_break,
    }


def hunk_to_dict(hunk: DiffHunk) -> dict[str, Any]:
    """Plain-data form of a hunk for JSON output."""
    return {
        "old_start": hunk.old_start,
        "old_length": hunk.old_length,
        "new_start": hunk.new_start,
        "new_length": hunk.new_length,
        "position": hunk.position,
        "lines": [line_to_dict(line) for line in hunk.lines],
    }
