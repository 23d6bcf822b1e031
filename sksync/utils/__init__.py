# SKSYNC Utilities Module
# Helper functions for path handling and content hashing

from sksync.utils.hashing import content_hash, file_hash
from sksync.utils.paths import (
    SKIP_NAMES,
    atomic_write,
    ensure_dir,
    iter_skill_paths,
    matches_any_pattern,
    matches_pattern,
    resolve_skill_path,
)

__all__ = [
    # Paths
    "SKIP_NAMES",
    "ensure_dir",
    "atomic_write",
    "iter_skill_paths",
    "resolve_skill_path",
    "matches_pattern",
    "matches_any_pattern",
    # Hashing
    "content_hash",
    "file_hash",
]
