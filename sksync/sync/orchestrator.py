# SKSYNC Sync Orchestrator
# Sequences change detection, push/pull, rollback and version comparison

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional, assert_never

from sksync.sync.compare import compare_local_remote, find_duplicate_paths
from sksync.sync.files import collect_skill_files, write_skill_files
from sksync.sync.line_diff import DiffLine, LineKind, diff_lines, split_lines
from sksync.sync.meta import SyncMeta, SyncStatus, classify_sync_status, read_meta, write_meta
from sksync.sync.models import (
    AddedFile,
    CompareResult,
    DeletedFile,
    DiffEntry,
    HistoryPage,
    ModifiedFile,
    PullResult,
    PushResult,
    RemoteStatus,
    SkillFile,
)
from sksync.utils.paths import DEFAULT_MAX_DEPTH, ensure_dir

if TYPE_CHECKING:
    from sksync.output.history_log import SyncHistoryLog
    from sksync.remote.client import VersionHistoryClient


@dataclass
class SkillSyncState:
    """Result of checking a local skill copy against the server."""

    skill_dir: Path
    status: SyncStatus
    skill_id: Optional[str] = None
    meta: Optional[SyncMeta] = None
    remote: Optional[RemoteStatus] = None
    compare: Optional[CompareResult] = None
    local_files: list[SkillFile] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def can_push(self) -> bool:
        """Pushing is offered only when something changed locally."""
        return self.compare is not None and self.compare.has_changes


@dataclass
class FileDiff:
    """A changed file between two versions with its rendered line diff."""

    entry: DiffEntry
    lines: list[DiffLine] = field(default_factory=list)

    @property
    def filepath(self) -> str:
        return self.entry.filepath

    @property
    def status(self) -> str:
        return self.entry.status


def line_diff_for(entry: DiffEntry) -> list[DiffLine]:
    """
    Line diff for one DiffEntry.

    Added files render as all-added, deleted files as all-removed and
    modified files through the LCS diff. Entries without content give an
    empty diff.
    """
    match entry:
        case AddedFile(new_content=new):
            return [DiffLine(LineKind.ADDED, line) for line in split_lines(new or "")]
        case DeletedFile(old_content=old):
            return [DiffLine(LineKind.REMOVED, line) for line in split_lines(old or "")]
        case ModifiedFile(old_content=old, new_content=new):
            if old is None and new is None:
                return []
            return diff_lines(old or "", new or "")
        case _:
            assert_never(entry)


class SyncOrchestrator:
    """
    Coordinates local skill copies with the remote version history.

    Owns no algorithm of its own: change detection, line diffs and the
    remote calls are delegated. Rollback is pull-then-push, so history
    stays append-only.
    """

    def __init__(
        self,
        client: VersionHistoryClient,
        *,
        exclude: Optional[list[str]] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        platform_url: str = "",
        history_log: Optional[SyncHistoryLog] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            client: Remote version history client.
            exclude: Extra glob patterns excluded from local collection.
            max_depth: Directory depth bound for local collection.
            platform_url: Server base URL recorded in sync metadata.
            history_log: Optional log receiving an entry per push/pull.
        """
        self.client = client
        self.exclude = exclude or []
        self.max_depth = max_depth
        self.platform_url = platform_url.rstrip("/")
        self.history_log = history_log

    def _collect(self, skill_dir: Path) -> list[SkillFile]:
        return collect_skill_files(skill_dir, exclude=self.exclude, max_depth=self.max_depth)

    def _skill_url(self, slug: str) -> str:
        return f"{self.platform_url}/skills/{slug}" if self.platform_url else ""

    def _record(self, action: str, skill: str, version: int, detail: str = "") -> None:
        if self.history_log is not None:
            self.history_log.append(action, skill, version, detail)

    def check(self, skill_dir: Path, skill_id: Optional[str] = None) -> SkillSyncState:
        """
        Compare a local skill directory with the current remote version.

        The remote status is fetched fresh on every call. A directory with
        no sync metadata and no explicit skill id is NOT_SYNCED. Without
        metadata the local copy is assumed to be based on the current
        remote version.

        Raises:
            RemoteError: If the status request fails.
            FileNotFoundError: If skill_dir doesn't exist.
        """
        meta = read_meta(skill_dir)
        resolved_id = skill_id or (meta.skill_id if meta else None)
        if resolved_id is None:
            return SkillSyncState(skill_dir=skill_dir, status=SyncStatus.NOT_SYNCED)

        local_files = self._collect(skill_dir)
        remote = self.client.status(resolved_id)
        compare = compare_local_remote(local_files, remote)

        base_version = meta.version if meta and meta.skill_id == resolved_id else remote.version
        state = SkillSyncState(
            skill_dir=skill_dir,
            status=classify_sync_status(compare, base_version, remote.version),
            skill_id=resolved_id,
            meta=meta,
            remote=remote,
            compare=compare,
            local_files=local_files,
        )

        for path in find_duplicate_paths(remote.files):
            state.warnings.append(f"Remote status lists {path} more than once; using the last entry")
        return state

    def push(
        self,
        skill_dir: Path,
        change_summary: Optional[str] = None,
        *,
        skill_id: Optional[str] = None,
        confirm: Optional[Callable[[SkillSyncState], bool]] = None,
    ) -> Optional[PushResult]:
        """
        Push the local copy as a new version if anything changed.

        Args:
            skill_dir: Skill root directory.
            change_summary: Optional description of the change.
            skill_id: Skill id, if the directory has no sync metadata yet.
            confirm: Optional callback; returning False cancels the push.

        Returns:
            PushResult, or None if there was nothing to push or it was cancelled.

        Raises:
            ValueError: If the skill id cannot be determined.
        """
        state = self.check(skill_dir, skill_id)
        if state.skill_id is None:
            raise ValueError(f"{skill_dir} is not linked to a remote skill; pass a skill id")
        if not state.can_push:
            return None
        if confirm is not None and not confirm(state):
            return None

        result = self.client.push(state.skill_id, state.local_files, change_summary)

        slug = state.meta.skill_slug if state.meta else skill_dir.name
        write_meta(skill_dir, SyncMeta.create(state.skill_id, slug, result.version, self._skill_url(slug)))
        self._record("push", slug, result.version, change_summary or "")
        return result

    def pull(
        self,
        skill_dir: Path,
        skill_id: str,
        version: Optional[int] = None,
        *,
        slug: Optional[str] = None,
    ) -> PullResult:
        """
        Pull a version (latest if None) into a local directory.

        Local files not in the pulled version are removed.
        """
        result = self.client.pull(skill_id, version)
        ensure_dir(skill_dir)
        write_skill_files(skill_dir, result.files, exclude=self.exclude, max_depth=self.max_depth)

        slug = slug or skill_dir.name
        write_meta(skill_dir, SyncMeta.create(skill_id, slug, result.version, self._skill_url(slug)))
        self._record("pull", slug, result.version)
        return result

    def rollback(
        self,
        skill_dir: Path,
        skill_id: str,
        version: int,
        *,
        confirm: Callable[[int], bool],
    ) -> Optional[PushResult]:
        """
        Restore an old version by copying it forward.

        Pulls `version` into skill_dir, then, if `confirm(version)` agrees,
        pushes those files as a brand-new version. Nothing on the server is
        rewritten or deleted.

        Returns:
            PushResult of the new version, or None if the push was declined
            (the local copy then holds the old version).
        """
        pulled = self.pull(skill_dir, skill_id, version)
        if not confirm(version):
            return None

        result = self.client.push(skill_id, pulled.files, f"Rollback to version {version}")
        meta = read_meta(skill_dir)
        slug = meta.skill_slug if meta else skill_dir.name
        write_meta(skill_dir, SyncMeta.create(skill_id, slug, result.version, self._skill_url(slug)))
        self._record("rollback", slug, result.version, f"from version {version}")
        return result

    def compare_versions(self, skill_id: str, from_version: int, to_version: int) -> list[FileDiff]:
        """Fetch the diff between two versions with content and render each file."""
        version_diff = self.client.diff(skill_id, from_version, to_version, include_content=True)
        return [FileDiff(entry=entry, lines=line_diff_for(entry)) for entry in version_diff.changes]

    def compare_with_previous(self, skill_id: str, version: int) -> list[FileDiff]:
        """Compare a version against the one immediately before it."""
        return self.compare_versions(skill_id, max(version - 1, 1), version)

    def history(
        self,
        skill_id: str,
        *,
        limit: int = 50,
        offset: int = 0,
        include_diff: bool = False,
    ) -> HistoryPage:
        return self.client.history(skill_id, limit=limit, offset=offset, include_diff=include_diff)

    def export(self, skill_id: str, dest: Path) -> Path:
        """Save the skill's Git ZIP export to dest."""
        data = self.client.export(skill_id)
        ensure_dir(dest.parent)
        dest.write_bytes(data)
        return dest
