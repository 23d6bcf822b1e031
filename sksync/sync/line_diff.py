# SKSYNC Line Diff
# Longest-common-subsequence line diff between two texts

"""
Line-level diff used to render a single modified file.

The table is O(m*n) in time and memory for m old and n new lines. Skill
files are small text documents, so this is fine in practice, but it is not
suitable for very large files: there is no chunking and no Myers-style
optimisation.
"""

from dataclasses import dataclass
from enum import Enum


class LineKind(str, Enum):
    """Classification of a diff line."""

    SAME = "same"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class DiffLine:
    """One line of a line diff."""

    kind: LineKind
    line: str


def split_lines(text: str) -> list[str]:
    """Split on newlines; the empty text has no lines."""
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")
    return text.split("\n") if text else []


def _lcs_table(old: list[str], new: list[str]) -> list[list[int]]:
    m, n = len(old), len(new)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row, prev = dp[i], dp[i - 1]
        old_line = old[i - 1]
        for j in range(1, n + 1):
            if old_line == new[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                row[j] = max(prev[j], row[j - 1])
    return dp


def diff_lines(old_text: str, new_text: str) -> list[DiffLine]:
    """
    Compute a line diff from old_text to new_text.

    Backtracks the LCS table from the end. When the current lines match a
    SAME line is emitted; otherwise the step goes through the new text
    (ADDED) if that keeps at least as long a common subsequence, else
    through the old text (REMOVED). Ties therefore favour insertions.

    Filtering the result to SAME and REMOVED lines and joining with "\\n"
    gives back old_text; SAME and ADDED gives back new_text.

    Raises:
        TypeError: If either argument is not a str.
    """
    old = split_lines(old_text)
    new = split_lines(new_text)
    dp = _lcs_table(old, new)

    result: list[DiffLine] = []
    i, j = len(old), len(new)
    while i > 0 or j > 0:
        if i > 0 and j > 0 and old[i - 1] == new[j - 1]:
            result.append(DiffLine(LineKind.SAME, old[i - 1]))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            result.append(DiffLine(LineKind.ADDED, new[j - 1]))
            j -= 1
        else:
            result.append(DiffLine(LineKind.REMOVED, old[i - 1]))
            i -= 1

    result.reverse()
    return result


def reconstruct_old(lines: list[DiffLine]) -> str:
    """Rebuild the old text from a diff."""
    return "\n".join(d.line for d in lines if d.kind is not LineKind.ADDED)


def reconstruct_new(lines: list[DiffLine]) -> str:
    """Rebuild the new text from a diff."""
    return "\n".join(d.line for d in lines if d.kind is not LineKind.REMOVED)


def count_changes(lines: list[DiffLine]) -> tuple[int, int]:
    """Return (added, removed) line counts."""
    added = sum(1 for d in lines if d.kind is LineKind.ADDED)
    removed = sum(1 for d in lines if d.kind is LineKind.REMOVED)
    return added, removed
