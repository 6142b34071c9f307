"""Tests for the prdiff command-line interface."""

import json
import logging
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from rich.console import Console

from prdiff.changes.types import FileEntry
from prdiff.cli.arg_parser import parse_args
from prdiff.cli.main import configure_logging, main

PATCH = "@@ -1,3 +1,3 @@\n a\n-b\n+B\n c\n"


def _mock_source(mock_class, entries: list[FileEntry], exists: bool):
    """Wire a patched GitHubContentSource class to serve entries."""
    source = mock_class.return_value
    source.__aenter__ = AsyncMock(return_value=source)
    source.__aexit__ = AsyncMock(return_value=None)
    source.repository = "octo/repo"
    source.list_pull_request_files = AsyncMock(return_value=entries)
    source.file_exists = AsyncMock(return_value=exists)
    return source


@pytest.fixture
def workdir(tmp_path: Path, isolated_home: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the CLI from an empty project dir with no config files."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


class TestArgParser:
    """Tests for argument parsing."""

    def test_apply_args(self) -> None:
        args = parse_args(["apply", "orig.txt", "p.diff", "-o", "out.txt", "--strict"])
        assert args.command == "apply"
        assert args.original == Path("orig.txt")
        assert args.output == Path("out.txt")
        assert args.strict is True

    def test_strict_defaults_to_none(self) -> None:
        """Unset --strict defers to config."""
        assert parse_args(["apply", "a", "b"]).strict is None

    def test_global_flags(self) -> None:
        args = parse_args(["--verbose", "--config", "c.json", "pr", "12", "--repo", "o/r"])
        assert args.verbose is True
        assert args.config == Path("c.json")
        assert args.number == 12
        assert args.repo == "o/r"


class TestMain:
    """Tests for main()."""

    def test_no_command_prints_help(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        assert main([]) == 1
        assert "usage: prdiff" in capsys.readouterr().out

    def test_apply_to_stdout(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        (workdir / "orig.txt").write_text("a\nb\nc")
        (workdir / "change.diff").write_text(PATCH)

        assert main(["apply", "orig.txt", "change.diff"]) == 0
        assert capsys.readouterr().out == "a\nB\nc"

    def test_apply_to_file(self, workdir: Path) -> None:
        (workdir / "orig.txt").write_text("a\nb\nc\n")
        (workdir / "change.diff").write_text(PATCH)

        assert main(["apply", "orig.txt", "change.diff", "-o", "new.txt"]) == 0
        assert (workdir / "new.txt").read_text() == "a\nB\nc\n"

    def test_apply_strict_reports_error(self, workdir: Path, record_console: Console) -> None:
        (workdir / "orig.txt").write_text("a\nb\nc\n")
        (workdir / "bad.diff").write_text("@@ -2,1 +2,1 @@\n-b\n+B\n@@ -1,1 +1,1 @@\n-a\n+A\n")

        assert main(["apply", "orig.txt", "bad.diff", "--strict"]) == 1
        assert "Invalid hunk order" in record_console.export_text()

    def test_missing_file_reports_error(self, workdir: Path, record_console: Console) -> None:
        assert main(["apply", "nope.txt", "nope.diff"]) == 1
        assert "Error:" in record_console.export_text()

    def test_hunks_json(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        (workdir / "change.diff").write_text(PATCH)

        assert main(["hunks", "change.diff", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)

        assert len(data) == 1
        assert data[0]["old_start"] == 1
        assert [line["kind"] for line in data[0]["lines"]] == [
            "control", "context", "delete", "add", "context",
        ]
        assert data[0]["lines"][3]["position"] == 3

    def test_hunks_table(self, workdir: Path, record_console: Console) -> None:
        (workdir / "change.diff").write_text(PATCH)

        assert main(["hunks", "change.diff"]) == 0
        text = record_console.export_text()
        assert "@@ -1,3 +1,3 @@" in text
        assert "+B" in text

    def test_hunks_empty_patch(self, workdir: Path, record_console: Console) -> None:
        (workdir / "empty.diff").write_text("not a patch\n")

        assert main(["hunks", "empty.diff"]) == 0
        assert "No hunks found" in record_console.export_text()

    def test_pr_summary(self, workdir: Path, record_console: Console) -> None:
        entries = [
            FileEntry(filename="src/app.py", status="modified", patch=PATCH),
            FileEntry(filename="logo.png", status="added", blob_url="https://b"),
        ]

        with patch("prdiff.cli.commands.GitHubContentSource") as mock_class:
            source = _mock_source(mock_class, entries, exists=False)

            assert main(["pr", "7", "--repo", "octo/repo", "--base", "abc"]) == 0

        text = record_console.export_text()
        assert "octo/repo#7" in text
        assert "src/app.py" in text
        assert "partial" in text
        assert "no patch" in text
        source.file_exists.assert_awaited_once_with("abc", "src/app.py")

    def test_pr_show_prints_reconstructed_file(self, workdir: Path, capsys: pytest.CaptureFixture) -> None:
        entries = [FileEntry(filename="src/app.py", status="modified", patch=PATCH)]

        with patch("prdiff.cli.commands.GitHubContentSource") as mock_class:
            source = _mock_source(mock_class, entries, exists=True)
            source.get_file_content = AsyncMock(return_value="a\nb\nc\n")

            assert main(["pr", "7", "--repo", "octo/repo", "--base", "abc", "--show", "src/app.py"]) == 0

        assert capsys.readouterr().out == "a\nB\nc\n"
        source.get_file_content.assert_awaited_once_with("abc", "src/app.py")

    def test_pr_show_unknown_path_fails(self, workdir: Path, record_console: Console) -> None:
        entries = [FileEntry(filename="src/app.py", status="modified", patch=PATCH)]

        with patch("prdiff.cli.commands.GitHubContentSource") as mock_class:
            _mock_source(mock_class, entries, exists=True)

            assert main(["pr", "7", "--repo", "octo/repo", "--base", "abc", "--show", "other.py"]) == 1

        assert "other.py is not changed in octo/repo#7" in record_console.export_text()

    def test_pr_show_partial_change_fails(self, workdir: Path, record_console: Console) -> None:
        entries = [FileEntry(filename="src/app.py", status="modified", patch=PATCH)]

        with patch("prdiff.cli.commands.GitHubContentSource") as mock_class:
            _mock_source(mock_class, entries, exists=False)

            assert main(["pr", "7", "--repo", "octo/repo", "--base", "abc", "--show", "src/app.py"]) == 1

        assert "Base file of src/app.py is missing" in record_console.export_text()

    def test_pr_rejects_malformed_repo(self, workdir: Path, record_console: Console) -> None:
        """A bad --repo is caught before any request is made."""
        with patch("prdiff.cli.commands.GitHubContentSource") as mock_class:
            assert main(["pr", "7", "--repo", "foo"]) == 1
            mock_class.assert_not_called()

        assert "Invalid repository 'foo'" in record_console.export_text()

    def test_pr_repo_flag_is_passed_as_config(self, workdir: Path, record_console: Console) -> None:
        with patch("prdiff.cli.commands.GitHubContentSource") as mock_class:
            _mock_source(mock_class, [], exists=True)

            assert main(["pr", "7", "--repo", "octo/repo", "--base", "abc"]) == 0

        (github,), _ = mock_class.call_args
        assert github.repository == "octo/repo"

    def test_pr_without_repository_fails(self, workdir: Path, record_console: Console) -> None:
        assert main(["pr", "7"]) == 1
        assert "No GitHub repository configured" in record_console.export_text()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_single_handler_without_propagation(self) -> None:
        configure_logging("DEBUG")
        configure_logging(logging.INFO)

        prdiff_logger = logging.getLogger("prdiff")
        assert len(prdiff_logger.handlers) == 1
        assert prdiff_logger.level == logging.INFO
        assert prdiff_logger.propagate is False
