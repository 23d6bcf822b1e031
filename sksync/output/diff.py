# SKSYNC Diff Display
# Render line diffs of changed skill files

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from sksync.sync.line_diff import DiffLine, LineKind, count_changes
from sksync.sync.orchestrator import FileDiff

LINE_STYLES = {
    LineKind.SAME: ("  ", "dim"),
    LineKind.ADDED: ("+ ", "green"),
    LineKind.REMOVED: ("- ", "red"),
}

BORDER_STYLES = {
    "added": "green",
    "modified": "yellow",
    "deleted": "red",
}


def render_lines(lines: list[DiffLine], *, context: int | None = 3) -> Text:
    """
    Render diff lines as styled text.

    Args:
        lines: Diff lines.
        context: Unchanged lines kept around each change; None keeps all.

    Returns:
        Rich Text with one row per kept line.
    """
    keep = _visible_indexes(lines, context)
    text = Text()
    previous = -1
    for index in keep:
        if previous >= 0 and index != previous + 1:
            text.append("  ...\n", style="dim")
        prefix, style = LINE_STYLES[lines[index].kind]
        text.append(f"{prefix}{lines[index].line}\n", style=style)
        previous = index
    return text


def _visible_indexes(lines: list[DiffLine], context: int | None) -> list[int]:
    if context is None:
        return list(range(len(lines)))

    changed = [i for i, d in enumerate(lines) if d.kind is not LineKind.SAME]
    visible: set[int] = set()
    for i in changed:
        visible.update(range(max(i - context, 0), min(i + context + 1, len(lines))))
    return sorted(visible)


def format_diff_summary(lines: list[DiffLine]) -> str:
    """
    Format a brief diff summary such as "+3, -1".

    Args:
        lines: Diff lines.

    Returns:
        Summary string.
    """
    added, removed = count_changes(lines)

    parts = []
    if added > 0:
        parts.append(f"+{added}")
    if removed > 0:
        parts.append(f"-{removed}")

    return ", ".join(parts) if parts else "No line changes"


def render_file_diff(file_diff: FileDiff, *, verbose: bool = False) -> Panel:
    """
    Render one changed file as a panel.

    Args:
        file_diff: File diff from SyncOrchestrator.compare_versions.
        verbose: Show every unchanged line instead of 3 lines of context.

    Returns:
        Rich Panel.
    """
    title = Text(f"{file_diff.status}: {file_diff.filepath}")
    summary = Text(format_diff_summary(file_diff.lines), style="bold")

    if file_diff.lines:
        body = Group(summary, Text(), render_lines(file_diff.lines, context=None if verbose else 3))
    else:
        body = Group(summary, Text("[content not available]", style="dim"))

    return Panel(body, title=title, title_align="left", border_style=BORDER_STYLES.get(file_diff.status, "white"))
