# SKSYNC Skill Files
# Collect a local skill directory and write pulled versions back

from pathlib import Path

from sksync.sync.models import SkillFile
from sksync.utils.paths import (
    DEFAULT_MAX_DEPTH,
    atomic_write,
    ensure_dir,
    iter_skill_paths,
    resolve_skill_path,
)


def collect_skill_files(
    root: Path,
    *,
    exclude: list[str] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[SkillFile]:
    """
    Collect and fingerprint all text files of a skill directory.

    Files that are not valid UTF-8 are skipped; the version store only
    carries text content.

    Args:
        root: Skill root directory.
        exclude: Glob patterns to exclude.
        max_depth: Maximum directory depth to descend into.

    Returns:
        SkillFiles sorted by filepath.

    Raises:
        FileNotFoundError: If root doesn't exist or is not a directory.
    """
    if not root.is_dir():
        raise FileNotFoundError(f"Skill directory not found: {root}")

    files: list[SkillFile] = []
    for rel_path, path in iter_skill_paths(root, exclude=exclude, max_depth=max_depth):
        raw = path.read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            continue
        files.append(SkillFile.from_content(rel_path, text))

    return files


def write_skill_files(
    root: Path,
    files: list[SkillFile],
    *,
    exclude: list[str] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[str]:
    """
    Write a pulled file set into a skill directory.

    Every incoming file is written atomically. Local files that are not part
    of the incoming set are removed, except the skip-listed names (sync
    metadata, VCS files) and paths matching `exclude`.

    Args:
        root: Skill root directory (created if missing).
        files: Incoming files.
        exclude: Glob patterns of local files that are never removed.
        max_depth: Depth bound used when scanning for stale files.

    Returns:
        Relative paths of the removed stale files.

    Raises:
        ValueError: If any incoming path is unsafe. Nothing is written then.
    """
    targets = [(f, resolve_skill_path(root, f.filepath)) for f in files]
    ensure_dir(root)

    for skill_file, target in targets:
        atomic_write(target, skill_file.content)

    incoming = {target.relative_to(root).as_posix() for _, target in targets}
    removed: list[str] = []
    for rel_path, path in iter_skill_paths(root, exclude=exclude, max_depth=max_depth):
        if rel_path not in incoming:
            path.unlink()
            removed.append(rel_path)

    return removed
