# SKSYNC Sync Module
# Change detection, line diffs and orchestration of push/pull

from sksync.sync.compare import compare_local_remote, find_duplicate_paths
from sksync.sync.files import collect_skill_files, write_skill_files
from sksync.sync.line_diff import DiffLine, LineKind, diff_lines
from sksync.sync.meta import SyncMeta, SyncStatus, classify_sync_status, read_meta, write_meta
from sksync.sync.models import (
    AddedFile,
    CompareResult,
    DeletedFile,
    DiffEntry,
    ModifiedFile,
    RemoteStatus,
    SkillFile,
    VersionEntry,
)
from sksync.sync.orchestrator import FileDiff, SkillSyncState, SyncOrchestrator

__all__ = [
    # Models
    "SkillFile",
    "RemoteStatus",
    "VersionEntry",
    "CompareResult",
    "DiffEntry",
    "AddedFile",
    "ModifiedFile",
    "DeletedFile",
    # Files
    "collect_skill_files",
    "write_skill_files",
    # Compare
    "compare_local_remote",
    "find_duplicate_paths",
    # Line diff
    "DiffLine",
    "LineKind",
    "diff_lines",
    # Metadata
    "SyncMeta",
    "SyncStatus",
    "classify_sync_status",
    "read_meta",
    "write_meta",
    # Orchestrator
    "FileDiff",
    "SkillSyncState",
    "SyncOrchestrator",
]
