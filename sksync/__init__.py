"""SKSYNC - Skill Sync for Claude Code.

Keeps a local copy of a skill in sync with its server-held version history:
detects local edits, pushes new versions, pulls or rolls back to earlier
versions and shows line diffs between any two versions.
"""

__version__ = "1.0.0"
__author__ = "Equitania Software GmbH"
__email__ = "info@equitania.de"

__all__ = [
    "__version__",
    "SkillFile",
    "RemoteStatus",
    "CompareResult",
    "compare_local_remote",
    "diff_lines",
    "SyncOrchestrator",
    "VersionHistoryClient",
    "RemoteError",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("SkillFile", "RemoteStatus", "CompareResult"):
        from sksync.sync import models

        return getattr(models, name)
    if name == "compare_local_remote":
        from sksync.sync.compare import compare_local_remote

        return compare_local_remote
    if name == "diff_lines":
        from sksync.sync.line_diff import diff_lines

        return diff_lines
    if name == "SyncOrchestrator":
        from sksync.sync.orchestrator import SyncOrchestrator

        return SyncOrchestrator
    if name in ("VersionHistoryClient", "RemoteError"):
        from sksync import remote

        return getattr(remote, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
