"""Terminal display for prdiff."""

from prdiff.display.console import get_console, set_console
from prdiff.display.render import (
    hunk_to_dict,
    line_to_dict,
    render_file_changes,
    render_hunk,
)

__all__ = [
    "get_console",
    "hunk_to_dict",
    "line_to_dict",
    "render_file_changes",
    "render_hunk",
    "set_console",
]
