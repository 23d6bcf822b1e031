# SKSYNC Sync Metadata
# .skillhub.json marker linking a local skill directory to its remote history

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from sksync.sync.models import CompareResult
from sksync.utils.paths import atomic_write

META_FILENAME = ".skillhub.json"


class SyncStatus(str, Enum):
    """Sync state of a local skill copy relative to the server."""

    NOT_SYNCED = "not_synced"
    IN_SYNC = "in_sync"
    LOCAL_CHANGES = "local_changes"
    REMOTE_CHANGES = "remote_changes"
    CONFLICT = "conflict"


@dataclass
class SyncMeta:
    """Metadata stored next to a synced skill."""

    skill_id: str
    skill_slug: str
    version: int
    synced_at: str  # ISO format datetime
    platform_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncMeta":
        """Create from dictionary."""
        return cls(
            skill_id=data["skill_id"],
            skill_slug=data.get("skill_slug", ""),
            version=int(data.get("version", 0)),
            synced_at=data.get("synced_at", ""),
            platform_url=data.get("platform_url", ""),
        )

    @classmethod
    def create(cls, skill_id: str, skill_slug: str, version: int, platform_url: str = "") -> "SyncMeta":
        """Create metadata stamped with the current time."""
        return cls(
            skill_id=skill_id,
            skill_slug=skill_slug,
            version=version,
            synced_at=datetime.now(timezone.utc).isoformat(),
            platform_url=platform_url,
        )


def read_meta(skill_dir: Path) -> Optional[SyncMeta]:
    """
    Read sync metadata from a skill directory.

    Args:
        skill_dir: Skill root directory.

    Returns:
        SyncMeta, or None if the directory has never been synced.

    Raises:
        ValueError: If the metadata file exists but cannot be parsed.
    """
    meta_path = skill_dir / META_FILENAME
    if not meta_path.exists():
        return None

    try:
        data = json.loads(meta_path.read_text(encoding="utf-8"))
        return SyncMeta.from_dict(data)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Failed to parse sync metadata {meta_path}: {e}") from e


def write_meta(skill_dir: Path, meta: SyncMeta) -> Path:
    """
    Write sync metadata into a skill directory.

    Args:
        skill_dir: Skill root directory.
        meta: Metadata to write.

    Returns:
        Path of the metadata file.
    """
    meta_path = skill_dir / META_FILENAME
    atomic_write(meta_path, json.dumps(meta.to_dict(), indent=2) + "\n")
    return meta_path


def classify_sync_status(compare: CompareResult, local_version: int, remote_version: int) -> SyncStatus:
    """
    Derive the sync status of a local copy.

    Local edits on top of an outdated base are reported as a conflict.
    A push still succeeds in that case and creates a new version.

    Args:
        compare: Local vs remote classification.
        local_version: Version the local copy was last synced at.
        remote_version: Current remote version.

    Returns:
        SyncStatus.
    """
    behind = local_version < remote_version
    if compare.has_changes:
        return SyncStatus.CONFLICT if behind else SyncStatus.LOCAL_CHANGES
    if behind:
        return SyncStatus.REMOTE_CHANGES
    return SyncStatus.IN_SYNC
