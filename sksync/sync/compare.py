# SKSYNC Change Detection
# Classify a local file set against a remote status snapshot

from collections import Counter
from collections.abc import Iterable
from typing import Protocol

from sksync.sync.models import CompareResult, RemoteStatus


class Fingerprinted(Protocol):
    """Anything carrying a filepath and a content hash."""

    filepath: str
    content_hash: str


def _hash_map(files: Iterable[Fingerprinted]) -> dict[str, str]:
    # Later entries for the same path replace earlier ones
    return {f.filepath: f.content_hash for f in files}


def find_duplicate_paths(files: Iterable[Fingerprinted]) -> list[str]:
    """Return filepaths that occur more than once, in first-seen order."""
    counts = Counter(f.filepath for f in files)
    return [path for path, count in counts.items() if count > 1]


def compare_local_remote(local: Iterable[Fingerprinted], remote: RemoteStatus) -> CompareResult:
    """
    Compare local files against a remote status snapshot.

    Paths are matched by exact, case-sensitive string equality. A path in
    local only is added, a path in both with a different hash is modified,
    a path in remote only is deleted. Unchanged paths are omitted.

    Output lists follow input iteration order; callers should treat each
    list as a set.

    Args:
        local: Local files (SkillFile or anything with filepath/content_hash).
        remote: Remote status snapshot.

    Returns:
        CompareResult.
    """
    local_map = _hash_map(local)
    remote_map = _hash_map(remote.files)

    added: list[str] = []
    modified: list[str] = []
    deleted: list[str] = []

    for filepath, local_hash in local_map.items():
        remote_hash = remote_map.get(filepath)
        if remote_hash is None:
            added.append(filepath)
        elif remote_hash != local_hash:
            modified.append(filepath)

    for filepath in remote_map:
        if filepath not in local_map:
            deleted.append(filepath)

    return CompareResult(added=added, modified=modified, deleted=deleted)
