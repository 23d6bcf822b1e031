# SKSYNC Console Output
# Rich-based console output for user-friendly display

from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sksync.output.diff import render_file_diff
from sksync.sync.meta import SyncStatus
from sksync.sync.models import HistoryPage, VersionEntry
from sksync.sync.orchestrator import FileDiff, SkillSyncState

STATUS_STYLES = {
    SyncStatus.NOT_SYNCED: ("dim", "○", "not synced"),
    SyncStatus.IN_SYNC: ("green", "✓", "in sync"),
    SyncStatus.LOCAL_CHANGES: ("yellow", "↑", "local changes"),
    SyncStatus.REMOTE_CHANGES: ("cyan", "↓", "remote changes"),
    SyncStatus.CONFLICT: ("red", "!", "conflict"),
}


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for sync operations.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(force_terminal=colored, no_color=not colored)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    def print_sync_state(self, state: SkillSyncState) -> None:
        """
        Print the sync status of a local skill and its pending changes.

        Args:
            state: Result of SyncOrchestrator.check.
        """
        color, icon, label = STATUS_STYLES[state.status]
        self._console.print(f"\n[{color}]{icon}[/{color}] [bold]{escape(str(state.skill_dir))}[/bold] - {label}")

        if state.status is SyncStatus.NOT_SYNCED:
            self._console.print("  [dim]No sync metadata; pull the skill or pass --skill-id[/dim]")
            return

        if state.remote is not None:
            local_version = state.meta.version if state.meta else "?"
            self._console.print(f"  Local version: {local_version}  Remote version: {state.remote.version}")

        for warning in state.warnings:
            self.print_warning(warning)

        compare = state.compare
        if compare is None or not compare.has_changes:
            self._console.print("  [dim]No local changes[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Change", justify="center")
        table.add_column("File", style="cyan")

        for path in compare.added:
            table.add_row("[green]+ added[/green]", escape(path))
        for path in compare.modified:
            table.add_row("[yellow]~ modified[/yellow]", escape(path))
        for path in compare.deleted:
            table.add_row("[red]- deleted[/red]", escape(path))

        self._console.print(table)
        self._console.print(
            f"  {len(compare.added)} added, {len(compare.modified)} modified, {len(compare.deleted)} deleted"
        )

    def print_versions(self, versions: list[VersionEntry], *, current: Optional[int] = None) -> None:
        """Print a version list as a table."""
        if not versions:
            self._console.print("[dim]No versions found[/dim]")
            return

        table = Table(title="Versions", show_header=True, header_style="bold")
        table.add_column("Version", justify="right")
        table.add_column("Created")
        table.add_column("Source", style="magenta")
        table.add_column("Files", justify="right")
        table.add_column("Size", justify="right", style="dim")
        table.add_column("Summary")

        for entry in versions:
            marker = " [green]●[/green]" if current is not None and entry.version == current else ""
            created = entry.created_at.strftime("%Y-%m-%d %H:%M") if entry.created_at else ""
            table.add_row(
                f"v{entry.version}{marker}",
                created,
                entry.source.value,
                str(entry.file_count),
                _format_size(entry.total_size),
                escape(entry.change_summary or "") or "[dim]no summary[/dim]",
            )

        self._console.print(table)

    def print_history(self, page: HistoryPage) -> None:
        """Print a history page, with per-version file changes when present."""
        self.print_versions([h.entry for h in page.versions])
        self._console.print(f"[dim]{len(page.versions)} of {page.total_versions} versions[/dim]")

        for item in page.versions:
            if not item.changes:
                continue
            self._console.print(f"\n[bold]v{item.version}[/bold]")
            for change in item.changes:
                self._console.print(f"  {_status_marker(change.status)} {escape(change.filepath)}")

    def print_file_diffs(self, diffs: list[FileDiff], from_version: int, to_version: int) -> None:
        """Print rendered diffs of every changed file between two versions."""
        if not diffs:
            self._console.print(f"[green]No differences[/green] between v{from_version} and v{to_version}")
            return

        for file_diff in diffs:
            self._console.print(render_file_diff(file_diff, verbose=self.verbose))

    def print_config_summary(self, config_path: str, server_url: str) -> None:
        """Print configuration summary."""
        self._console.print(
            Panel(
                f"Config: {config_path}\n" f"Server: {server_url}",
                title="SKSYNC Configuration",
                border_style="blue",
            )
        )

    def confirm(self, message: str, default: bool = False) -> bool:
        """
        Ask for confirmation.

        Args:
            message: Confirmation message.
            default: Default value if user just presses enter.

        Returns:
            True if confirmed.
        """
        suffix = " [Y/n]" if default else " [y/N]"
        response = self._console.input(f"{message}{escape(suffix)}: ").strip().lower()

        if not response:
            return default

        return response in ("y", "yes", "j", "ja")


def _status_marker(status: str) -> str:
    return {
        "added": "[green]+[/green]",
        "modified": "[yellow]~[/yellow]",
        "deleted": "[red]-[/red]",
    }.get(status, "?")


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
