"""Unit tests for prdiff.changes.builder module."""

import pytest

from prdiff.changes import (
    FileChangeReference,
    FileChangeWithPatch,
    FileEntry,
    GitChangeType,
    find_line_by_position,
    parse_comment_hunks,
    parse_file_changes,
    reconstruct_file_change,
)
from prdiff.core.errors import ContentSourceError
from prdiff.patch import DiffLineKind, parse_patch
from prdiff.source.base import ContentSource

PATCH = "@@ -1,3 +1,3 @@\n a\n-b\n+B\n c\n"


class FakeSource:
    """In-memory content source keyed by (commit, path)."""

    def __init__(self, files: dict[tuple[str, str], str] | None = None, fail: bool = False):
        self.files = files or {}
        self.fail = fail
        self.exists_calls: list[tuple[str, str]] = []

    async def file_exists(self, commit: str, path: str) -> bool:
        self.exists_calls.append((commit, path))
        if self.fail:
            raise ContentSourceError("storage unavailable")
        return (commit, path) in self.files

    async def get_file_content(self, commit: str, path: str) -> str:
        return self.files[(commit, path)]

    async def list_pull_request_files(self, number: int) -> list[FileEntry]:
        return []


class TestParseFileChanges:
    """Tests for parse_file_changes function."""

    def test_fake_source_satisfies_protocol(self) -> None:
        assert isinstance(FakeSource(), ContentSource)

    @pytest.mark.asyncio
    async def test_entry_without_patch_is_reference(self) -> None:
        """No patch means a reference-only change and no existence check."""
        source = FakeSource()
        entries = [{"filename": "logo.png", "status": "added", "blob_url": "https://x/blob/logo.png"}]

        changes = await parse_file_changes(entries, source, "base")

        assert len(changes) == 1
        change = changes[0]
        assert isinstance(change, FileChangeReference)
        assert change.has_patch is False
        assert change.change_type is GitChangeType.ADD
        assert change.blob_url == "https://x/blob/logo.png"
        assert source.exists_calls == []

    @pytest.mark.asyncio
    async def test_entry_with_patch_has_parsed_hunks(self) -> None:
        source = FakeSource({("base", "f.txt"): "a\nb\nc"})
        entries = [FileEntry(filename="f.txt", status="modified", patch=PATCH)]

        changes = await parse_file_changes(entries, source, "base")

        change = changes[0]
        assert isinstance(change, FileChangeWithPatch)
        assert change.has_patch is True
        assert change.base_commit == "base"
        assert change.change_type is GitChangeType.MODIFY
        assert change.patch == PATCH
        assert len(change.hunks) == 1
        assert change.is_partial is False
        assert source.exists_calls == [("base", "f.txt")]

    @pytest.mark.asyncio
    async def test_missing_base_file_marks_partial(self) -> None:
        """A modification whose base file is missing cannot be reconstructed fully."""
        entries = [{"filename": "gone.txt", "status": "modified", "patch": PATCH}]

        changes = await parse_file_changes(entries, FakeSource(), "base")

        assert changes[0].is_partial is True

    @pytest.mark.asyncio
    async def test_missing_base_file_on_add_is_not_partial(self) -> None:
        entries = [{"filename": "new.txt", "status": "added", "patch": "@@ -0,0 +1 @@\n+x\n"}]

        changes = await parse_file_changes(entries, FakeSource(), "base")

        assert changes[0].is_partial is False

    @pytest.mark.asyncio
    async def test_order_is_preserved(self) -> None:
        entries = [
            {"filename": "b.txt", "status": "removed"},
            {"filename": "a.txt", "status": "renamed", "patch": PATCH},
            {"filename": "c.txt", "status": "weird"},
        ]

        changes = await parse_file_changes(entries, FakeSource(), "base")

        assert [c.file_name for c in changes] == ["b.txt", "a.txt", "c.txt"]
        assert [c.change_type for c in changes] == [
            GitChangeType.DELETE,
            GitChangeType.RENAME,
            GitChangeType.UNKNOWN,
        ]

    @pytest.mark.asyncio
    async def test_rename_keeps_previous_file_name(self) -> None:
        entries = [
            {"filename": "new.py", "status": "renamed", "previous_filename": "old.py", "patch": PATCH},
            {"filename": "f.py", "status": "modified", "previous_filename": "ignored.py", "patch": PATCH},
        ]

        changes = await parse_file_changes(entries, FakeSource(), "base")

        assert changes[0].previous_file_name == "old.py"
        assert changes[1].previous_file_name is None

    @pytest.mark.asyncio
    async def test_source_errors_propagate(self) -> None:
        entries = [{"filename": "f.txt", "status": "modified", "patch": PATCH}]

        with pytest.raises(ContentSourceError):
            await parse_file_changes(entries, FakeSource(fail=True), "base")


class TestParseCommentHunks:
    """Tests for parse_comment_hunks function."""

    def test_attaches_hunks_in_place(self) -> None:
        comments = [
            {"id": 1, "diff_hunk": "@@ -1,2 +1,2 @@\n a\n-b\n+B"},
            {"id": 2, "diff_hunk": ""},
            {"id": 3},
        ]

        result = parse_comment_hunks(comments)

        assert result is comments
        assert len(comments[0]["diff_hunks"]) == 1
        assert comments[0]["diff_hunks"][0].lines[-1].kind is DiffLineKind.ADD
        assert comments[1]["diff_hunks"] == []
        assert comments[2]["diff_hunks"] == []


class TestFindLineByPosition:
    """Tests for find_line_by_position function."""

    def test_finds_line_in_second_hunk(self) -> None:
        hunks = parse_patch("@@ -1 +1 @@\n-a\n+b\n@@ -9,1 +9,1 @@\n-x\n+y\n")

        line = find_line_by_position(hunks, 5)

        assert line is not None
        assert line.raw == "+y"
        assert line.new_line_number == 9

    def test_marker_position_has_no_line(self) -> None:
        hunks = parse_patch("@@ -1 +1 @@\n-a\n\\ No newline at end of file\n+b\n")
        assert find_line_by_position(hunks, 2) is None
        assert find_line_by_position(hunks, 3).raw == "+b"

    def test_position_past_end(self) -> None:
        assert find_line_by_position(parse_patch(PATCH), 99) is None


class TestReconstructFileChange:
    """Tests for reconstruct_file_change function."""

    def test_modified_file(self) -> None:
        change = FileChangeWithPatch("base", GitChangeType.MODIFY, "f.txt", PATCH, parse_patch(PATCH))
        assert reconstruct_file_change(change, "a\nb\nc") == "a\nB\nc"

    def test_added_file_ignores_original(self) -> None:
        patch = "@@ -0,0 +1,2 @@\n+x\n+y\n"
        change = FileChangeWithPatch("base", GitChangeType.ADD, "n.txt", patch, parse_patch(patch))
        assert reconstruct_file_change(change, "stale") == "x\ny\n"
