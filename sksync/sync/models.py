# SKSYNC Sync Models
# Skill files, remote snapshots, version entries and diff entries

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional, Union

from sksync.utils.hashing import content_hash


class VersionSource(str, Enum):
    """Where a version was pushed from."""

    CLI = "cli"
    WEB = "web"
    API = "api"
    DESKTOP = "desktop"


@dataclass(frozen=True)
class SkillFile:
    """
    A single file of a skill.

    Immutable: a changed file is a new SkillFile with a recomputed hash.
    """

    filepath: str
    content: str | bytes
    content_hash: str
    file_size: int = 0

    @classmethod
    def from_content(cls, filepath: str, content: str | bytes) -> SkillFile:
        """Build a SkillFile and fingerprint its content."""
        raw = content.encode("utf-8") if isinstance(content, str) else content
        return cls(
            filepath=filepath,
            content=content,
            content_hash=content_hash(raw),
            file_size=len(raw),
        )

    @property
    def text(self) -> str:
        """Content as text (UTF-8 decoded if stored as bytes)."""
        if isinstance(self.content, bytes):
            return self.content.decode("utf-8")
        return self.content

    def to_dict(self) -> dict[str, Any]:
        """Wire representation used for push."""
        return {
            "filepath": self.filepath,
            "content": self.text,
            "content_hash": self.content_hash,
        }


@dataclass(frozen=True)
class RemoteFile:
    """Fingerprint of a file as the server knows it."""

    filepath: str
    content_hash: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RemoteFile:
        return cls(filepath=data["filepath"], content_hash=data["content_hash"])


@dataclass(frozen=True)
class RemoteStatus:
    """Server-authoritative snapshot of a skill's current version."""

    version: int
    files: list[RemoteFile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RemoteStatus:
        """Create from a status payload (accepts `version` or `current_version`)."""
        version = data.get("version", data.get("current_version"))
        if version is None:
            raise KeyError("version")
        return cls(
            version=int(version),
            files=[RemoteFile.from_dict(f) for f in data.get("files", [])],
        )


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


@dataclass(frozen=True)
class VersionEntry:
    """An immutable, numbered snapshot in a skill's history."""

    version: int
    source: VersionSource
    created_at: Optional[datetime] = None
    change_summary: Optional[str] = None
    file_count: int = 0
    total_size: int = 0
    git_commit_oid: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VersionEntry:
        return cls(
            version=int(data["version"]),
            source=VersionSource(data.get("source", VersionSource.API.value)),
            created_at=_parse_timestamp(data.get("created_at")),
            change_summary=data.get("change_summary") or None,
            file_count=int(data.get("file_count", 0)),
            total_size=int(data.get("total_size", 0)),
            git_commit_oid=data.get("git_commit_oid"),
        )


# Diff entries are a tagged union: consumers dispatch with `match` on the
# class and close with `assert_never`.


@dataclass(frozen=True)
class AddedFile:
    """File present in the target version only."""

    filepath: str
    new_content: Optional[str] = None
    old_content: None = None
    status: Literal["added"] = "added"


@dataclass(frozen=True)
class ModifiedFile:
    """File present in both versions with different content."""

    filepath: str
    old_content: Optional[str] = None
    new_content: Optional[str] = None
    status: Literal["modified"] = "modified"


@dataclass(frozen=True)
class DeletedFile:
    """File present in the source version only."""

    filepath: str
    old_content: Optional[str] = None
    new_content: None = None
    status: Literal["deleted"] = "deleted"


DiffEntry = Union[AddedFile, ModifiedFile, DeletedFile]


def diff_entry_from_dict(data: dict[str, Any]) -> DiffEntry:
    """
    Build the right DiffEntry variant from a wire payload.

    Accepts both `old_content`/`new_content` and the camelCase
    `oldContent`/`newContent` keys.

    Raises:
        ValueError: If the status is not one of added, modified, deleted.
    """
    filepath = data["filepath"]
    old = data.get("old_content", data.get("oldContent"))
    new = data.get("new_content", data.get("newContent"))
    status = data.get("status")

    if status == "added":
        return AddedFile(filepath=filepath, new_content=new)
    if status == "modified":
        return ModifiedFile(filepath=filepath, old_content=old, new_content=new)
    if status == "deleted":
        return DeletedFile(filepath=filepath, old_content=old)
    raise ValueError(f"Unknown diff status for {filepath!r}: {status!r}")


@dataclass(frozen=True)
class DiffSummary:
    """Per-status file counts of a version diff."""

    added: int = 0
    modified: int = 0
    deleted: int = 0

    @property
    def total(self) -> int:
        return self.added + self.modified + self.deleted

    @classmethod
    def from_changes(cls, changes: list[DiffEntry]) -> DiffSummary:
        return cls(
            added=sum(1 for c in changes if isinstance(c, AddedFile)),
            modified=sum(1 for c in changes if isinstance(c, ModifiedFile)),
            deleted=sum(1 for c in changes if isinstance(c, DeletedFile)),
        )


@dataclass(frozen=True)
class VersionDiff:
    """Per-file changes between two versions."""

    from_version: int
    to_version: int
    changes: list[DiffEntry] = field(default_factory=list)
    summary: DiffSummary = field(default_factory=DiffSummary)

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any], from_version: int, to_version: int) -> VersionDiff:
        changes = [diff_entry_from_dict(c) for c in data.get("changes", [])]
        summary_data = data.get("summary")
        if summary_data:
            summary = DiffSummary(
                added=int(summary_data.get("added", 0)),
                modified=int(summary_data.get("modified", 0)),
                deleted=int(summary_data.get("deleted", 0)),
            )
        else:
            summary = DiffSummary.from_changes(changes)
        return cls(from_version=from_version, to_version=to_version, changes=changes, summary=summary)


@dataclass(frozen=True)
class HistoryEntry:
    """A version in a history page, optionally with its diff to the previous version."""

    entry: VersionEntry
    changes: Optional[list[DiffEntry]] = None

    @property
    def version(self) -> int:
        return self.entry.version

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        raw_changes = data.get("changes", data.get("diff"))
        changes = None
        if raw_changes is not None:
            changes = [diff_entry_from_dict(c) for c in raw_changes]
        return cls(entry=VersionEntry.from_dict(data), changes=changes)


@dataclass(frozen=True)
class HistoryPage:
    """One page of a skill's version history."""

    versions: list[HistoryEntry]
    total_versions: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryPage:
        versions = [HistoryEntry.from_dict(v) for v in data.get("versions", [])]
        return cls(versions=versions, total_versions=int(data.get("total_versions", len(versions))))


@dataclass(frozen=True)
class PullResult:
    """File set of a pulled version."""

    version: int
    files: list[SkillFile]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PullResult:
        files = [SkillFile.from_content(f["filepath"], f.get("content", "")) for f in data.get("files", [])]
        return cls(version=int(data["version"]), files=files)


@dataclass(frozen=True)
class PushResult:
    """Version number assigned by the server to a push."""

    version: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PushResult:
        return cls(version=int(data["version"]))


@dataclass(frozen=True)
class CompareResult:
    """
    Classification of a local file set against a remote snapshot.

    `has_changes` is derived from the three lists on every access.
    """

    added: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.modified or self.deleted)

    @property
    def total(self) -> int:
        return len(self.added) + len(self.modified) + len(self.deleted)
