"""Implementations of the prdiff subcommands.

Each command returns an exit code. Errors from the prdiff hierarchy are
left to propagate; main() turns them into an error line and exit code 1.
"""

import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from prdiff.changes.builder import parse_file_changes, reconstruct_file_change
from prdiff.changes.types import FileChange, FileChangeWithPatch, GitChangeType
from prdiff.config.schema import Config, GitHubConfig
from prdiff.core.errors import ConfigError, ContentSourceError, LoadError, PrdiffError
from prdiff.display.console import get_console
from prdiff.display.render import hunk_to_dict, render_file_changes, render_hunk
from prdiff.patch.parser import parse_patch
from prdiff.patch.reconstruct import get_modified_content
from prdiff.source.github import GitHubContentSource

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read a text file, with '-' meaning stdin. Line endings are kept as-is."""
    if str(path) == "-":
        return sys.stdin.read()
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as e:
        raise LoadError(f"Failed to read {path}: {e}") from e


def cmd_hunks(patch_file: Path, config: Config, as_json: bool = False) -> int:
    """Print the hunks of a patch."""
    hunks = parse_patch(read_text(patch_file))

    if as_json:
        print(json.dumps([hunk_to_dict(h) for h in hunks], indent=2))
        return 0

    console = get_console()
    if not hunks:
        console.print("[dim]No hunks found.[/]")
        return 0

    for hunk in hunks:
        console.print(render_hunk(
            hunk,
            show_positions=config.display.show_positions,
            color=config.display.color,
        ))
        console.print("")
    return 0


def cmd_apply(
    original: Path,
    patch_file: Path,
    config: Config,
    output: Path | None = None,
    strict: bool | None = None,
) -> int:
    """Reconstruct new content and write it to output or stdout."""
    effective_strict = config.strict_hunk_order if strict is None else strict
    content = get_modified_content(
        read_text(original),
        read_text(patch_file),
        strict=effective_strict,
    )

    if output is None:
        sys.stdout.write(content)
        return 0

    try:
        with output.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise LoadError(f"Failed to write {output}: {e}") from e
    logger.info("Wrote %d characters to %s", len(content), output)
    return 0


def override_repository(github: GitHubConfig, repository: str) -> GitHubConfig:
    """Return a copy of github with repository replaced, validated like a config value."""
    try:
        return GitHubConfig.model_validate({**github.model_dump(), "repository": repository})
    except ValidationError as e:
        raise ConfigError(f"Invalid repository {repository!r}: {e.errors()[0]['msg']}") from e


async def cmd_pr(
    number: int,
    config: Config,
    repository: str | None = None,
    base: str | None = None,
    show: str | None = None,
) -> int:
    """Summarize the file changes of a pull request.

    With show, print the reconstructed new content of that one file instead
    of the summary table.
    """
    github = config.github if repository is None else override_repository(config.github, repository)

    async with GitHubContentSource(github) as source:
        if base is None:
            pull = await source.get_pull_request(number)
            base = pull["base"]["sha"]
            logger.debug("Using base commit %s of PR #%d", base, number)

        entries = await source.list_pull_request_files(number)
        changes = await parse_file_changes(entries, source, base)

        if show is not None:
            label = f"{source.repository}#{number}"
            content = await _reconstruct_from_source(source, changes, show, label, config)
            sys.stdout.write(content)
            return 0

    console = get_console()
    console.print(f"[bold]{source.repository}#{number}[/] against [dim]{base}[/]")
    console.print(render_file_changes(changes))
    return 0


async def _reconstruct_from_source(
    source: GitHubContentSource,
    changes: list[FileChange],
    path: str,
    label: str,
    config: Config,
) -> str:
    change = next((c for c in changes if c.file_name == path), None)
    if change is None:
        raise PrdiffError(f"{path} is not changed in {label}")
    if not isinstance(change, FileChangeWithPatch):
        raise PrdiffError(f"{path} has no patch in {label} (binary or too large)")
    if change.is_partial:
        raise ContentSourceError(f"Base file of {path} is missing at {change.base_commit}")

    if change.change_type is GitChangeType.ADD:
        original = ""
    else:
        original = await source.get_file_content(change.base_commit, change.file_name)
    return reconstruct_file_change(change, original, strict=config.strict_hunk_order)
