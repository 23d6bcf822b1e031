# SKSYNC Path Utilities
# Skill directory walking, safe writes and pattern matching

import fnmatch
import os
import tempfile
from collections import deque
from pathlib import Path, PurePosixPath

# Names never collected from or removed from a skill directory
SKIP_NAMES = frozenset(
    {
        ".git",
        ".DS_Store",
        ".skillhub.json",
        ".gitignore",
        "Thumbs.db",
    }
)

DEFAULT_MAX_DEPTH = 16


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, content: str | bytes, *, encoding: str = "utf-8") -> None:
    """
    Atomically write content to file.

    Uses a temporary file and atomic rename.

    Args:
        path: Target file path.
        content: Content to write (str or bytes).
        encoding: Encoding for string content (default utf-8).
    """
    ensure_dir(path.parent)

    # Create temp file in same directory for atomic rename
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        if isinstance(content, str):
            with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
                f.write(content)
        else:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
        os.replace(temp_path, path)
    except Exception:
        # Cleanup on failure
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def matches_pattern(path: str | Path, pattern: str) -> bool:
    """
    Check if path matches a glob pattern.

    Supports:
    - * for any characters within path component
    - ** for any path components
    - ? for single character

    Args:
        path: Path to check.
        pattern: Glob pattern.

    Returns:
        True if path matches pattern.
    """
    path_str = str(path)

    if "**" in pattern:
        parts = pattern.split("**")
        if len(parts) == 2:
            prefix, suffix = parts
            if prefix and not fnmatch.fnmatch(path_str, f"{prefix}*"):
                return False
            if suffix:
                suffix = suffix.lstrip("/")
                if not fnmatch.fnmatch(path_str, f"*{suffix}"):
                    return False
            return True

    return fnmatch.fnmatch(path_str, pattern)


def matches_any_pattern(path: str | Path, patterns: list[str]) -> bool:
    """
    Check if path matches any of the given patterns.

    Args:
        path: Path to check.
        patterns: List of glob patterns.

    Returns:
        True if path matches any pattern.
    """
    return any(matches_pattern(path, p) for p in patterns)


def _is_skipped(rel_path: str, name: str, exclude: list[str]) -> bool:
    if name in SKIP_NAMES:
        return True
    return bool(exclude) and (matches_any_pattern(rel_path, exclude) or matches_any_pattern(name, exclude))


def iter_skill_paths(
    root: Path,
    *,
    exclude: list[str] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[tuple[str, Path]]:
    """
    List the files of a skill directory.

    Walks the tree breadth-first with an explicit worklist. Directories
    deeper than `max_depth` below the root are not entered.

    Args:
        root: Skill root directory.
        exclude: Glob patterns matched against relative path and name.
        max_depth: Maximum directory depth to descend into.

    Returns:
        Sorted list of (POSIX relative path, absolute path).
    """
    exclude = exclude or []
    found: list[tuple[str, Path]] = []
    worklist: deque[tuple[Path, int]] = deque([(root, 0)])

    while worklist:
        current, depth = worklist.popleft()
        for entry in current.iterdir():
            rel_path = entry.relative_to(root).as_posix()
            if _is_skipped(rel_path, entry.name, exclude):
                continue
            if entry.is_dir():
                if depth < max_depth:
                    worklist.append((entry, depth + 1))
            elif entry.is_file():
                found.append((rel_path, entry))

    return sorted(found, key=lambda x: x[0])


def resolve_skill_path(root: Path, filepath: str) -> Path:
    """
    Resolve a skill-relative POSIX path below root.

    Raises:
        ValueError: If the path is absolute or escapes the root.
    """
    rel = PurePosixPath(filepath)
    if not filepath or rel.is_absolute() or ".." in rel.parts:
        raise ValueError(f"Unsafe file path in skill: {filepath!r}")
    return root.joinpath(*rel.parts)
