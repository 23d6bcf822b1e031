# SKSYNC Sync History Log
# Markdown log of push, pull and rollback operations (newest first)

from datetime import datetime, timezone
from pathlib import Path

from sksync.utils.paths import atomic_write

LOG_HEADER = "# Skill Synchronization Log\n\n"


class SyncHistoryLog:
    """Append-only markdown log of sync operations."""

    def __init__(self, path: Path):
        self.path = path

    def append(self, action: str, skill: str, version: int, detail: str = "") -> str:
        """
        Record an operation. Entries are inserted right after the header.

        Args:
            action: Operation name (push, pull, rollback).
            skill: Skill slug.
            version: Version produced or fetched.
            detail: Optional free text (change summary).

        Returns:
            The markdown entry written.
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        entry = f"- {timestamp} **{action}** `{skill}` v{version}"
        if detail:
            entry += f" - {detail}"
        entry += "\n"

        if self.path.exists():
            existing = self.path.read_text(encoding="utf-8")
            if existing.startswith("# ") and "\n\n" in existing:
                header_end = existing.find("\n\n") + 2
                new_content = existing[:header_end] + entry + existing[header_end:]
            else:
                new_content = entry + existing
        else:
            new_content = LOG_HEADER + entry

        atomic_write(self.path, new_content)
        return entry

    def tail(self, lines: int = 50) -> list[str]:
        """Return the first `lines` lines of the log (the most recent entries)."""
        if not self.path.exists():
            return []
        return self.path.read_text(encoding="utf-8").splitlines()[:lines]
