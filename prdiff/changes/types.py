"""Types for changed files in a pull request or commit.

A changed file is one of two shapes, told apart by `has_patch`:
FileChangeWithPatch carries the patch text and its parsed hunks, while
FileChangeReference only points at the blob (binary or oversized files
for which the API returns no patch).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from prdiff.patch.types import DiffHunk


class GitChangeType(Enum):
    """Kind of change applied to a file."""

    ADD = "add"
    DELETE = "delete"
    RENAME = "rename"
    MODIFY = "modify"
    UNKNOWN = "unknown"


class FileEntry(BaseModel):
    """One file item as returned by the pull request files API."""

    model_config = ConfigDict(extra="ignore")

    filename: str
    status: str
    patch: str | None = None
    blob_url: str | None = None
    previous_filename: str | None = None


@dataclass
class FileChangeWithPatch:
    """A changed file whose textual patch is available.

    Attributes:
        base_commit: Commit the patch applies on top of
        change_type: Classified change status
        file_name: Path of the file in the new revision
        patch: Raw patch text (hunks only, no file headers)
        hunks: Parsed hunks of the patch
        is_partial: True when the base file is missing and the change is not an ADD,
            so the original content cannot be fetched to reconstruct the file
        blob_url: Reference URL of the new blob, if known
        previous_file_name: Path before the change, set for RENAME only
    """

    base_commit: str
    change_type: GitChangeType
    file_name: str
    patch: str
    hunks: list[DiffHunk] = field(default_factory=list)
    is_partial: bool = False
    blob_url: str | None = None
    previous_file_name: str | None = None
    has_patch: Literal[True] = True


@dataclass
class FileChangeReference:
    """A changed file known only by reference (no patch text)."""

    blob_url: str | None
    change_type: GitChangeType
    file_name: str
    has_patch: Literal[False] = False


FileChange = FileChangeWithPatch | FileChangeReference
