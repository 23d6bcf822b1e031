"""Click-based CLI for SKSYNC - Skill Sync."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click
import yaml

from sksync import __version__
from sksync.config import (
    SksyncConfig,
    ensure_config_exists,
    get_config_path,
    load_config_or_defaults,
    validate_config_file,
)
from sksync.output.console import Console
from sksync.output.history_log import SyncHistoryLog
from sksync.remote import EnvTokenProvider, RemoteError, TTLCache, VersionHistoryClient
from sksync.sync.orchestrator import SkillSyncState, SyncOrchestrator


@dataclass
class AppContext:
    """Objects shared by all commands."""

    config: SksyncConfig
    config_path: Path
    console: Console


def create_client(config: SksyncConfig) -> VersionHistoryClient:
    """Build the version history client from configuration."""
    return VersionHistoryClient(
        config.server.url,
        EnvTokenProvider(config.server.token_env),
        timeout=config.server.timeout,
        cache=TTLCache(config.server.cache_ttl),
    )


def create_orchestrator(config: SksyncConfig, client: VersionHistoryClient) -> SyncOrchestrator:
    """Build the orchestrator from configuration."""
    history_log = SyncHistoryLog(Path(config.output.sync_history)) if config.output.sync_history else None
    return SyncOrchestrator(
        client,
        exclude=config.local.exclude,
        max_depth=config.local.max_depth,
        platform_url=config.server.url,
        history_log=history_log,
    )


def handle_errors(func):
    """Report expected failures on the console and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        app: AppContext = click.get_current_context().obj
        try:
            return func(*args, **kwargs)
        except (RemoteError, FileNotFoundError, ValueError) as e:
            app.console.print_error(str(e))
            raise SystemExit(1)

    return wrapper


def _resolve_skill_dir(app: AppContext, skill_dir: Optional[Path], slug: str) -> Path:
    return skill_dir if skill_dir is not None else app.config.skill_dir(slug)


@click.group()
@click.version_option(version=__version__, prog_name="sksync")
@click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Configuration file (default: ~/.config/sksync/config.yaml or $SKSYNC_CONFIG)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[Path], verbose: bool, no_color: bool) -> None:
    """SKSYNC - Skill Sync for Claude Code.

    Keep a local skill directory in sync with its versioned history on the
    server: check for local edits, push new versions, pull or roll back to
    earlier versions and compare any two versions line by line.

    \b
    Workflows:
      sksync status ~/.claude/skills/my-skill
      sksync push ~/.claude/skills/my-skill -m "Tighten instructions"
      sksync diff <skill-id> 3 4
      sksync rollback <skill-id> 2 ~/.claude/skills/my-skill
    """
    if ctx.resilient_parsing:
        return
    config_path = config_file or get_config_path()
    try:
        config = load_config_or_defaults(config_path)
    except (yaml.YAMLError, ValueError) as e:
        console = Console(verbose=verbose, colored=not no_color)
        console.print_error(f"Invalid configuration {config_path}: {e}")
        if ctx.invoked_subcommand != "config":
            raise SystemExit(1)
        console.print_warning("Using default configuration")
        config = SksyncConfig()

    console = Console(
        verbose=verbose or config.output.verbose,
        colored=config.output.colored and not no_color,
    )
    ctx.obj = AppContext(config=config, config_path=config_path, console=console)


@cli.command()
@click.argument("skill_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--skill-id", default=None, help="Remote skill id (if the directory has no sync metadata)")
@click.pass_obj
@handle_errors
def status(app: AppContext, skill_dir: Path, skill_id: Optional[str]) -> None:
    """Show local changes of SKILL_DIR against the current remote version."""
    with create_client(app.config) as client:
        state = create_orchestrator(app.config, client).check(skill_dir, skill_id)
    app.console.print_sync_state(state)


@cli.command()
@click.argument("skill_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--message", "-m", "change_summary", default=None, help="Change summary for the new version")
@click.option("--skill-id", default=None, help="Remote skill id (if the directory has no sync metadata)")
@click.option("--yes", "-y", is_flag=True, help="Push without confirmation")
@click.pass_obj
@handle_errors
def push(app: AppContext, skill_dir: Path, change_summary: Optional[str], skill_id: Optional[str], yes: bool) -> None:
    """Push local changes of SKILL_DIR as a new version."""

    def confirm(state: SkillSyncState) -> bool:
        app.console.print_sync_state(state)
        return yes or app.console.confirm("Push these changes as a new version?", default=True)

    with create_client(app.config) as client:
        result = create_orchestrator(app.config, client).push(
            skill_dir, change_summary, skill_id=skill_id, confirm=confirm
        )

    if result is None:
        app.console.print_info("Nothing pushed")
    else:
        app.console.print_success(f"Pushed version {result.version}")


@cli.command()
@click.argument("skill_id")
@click.argument("skill_dir", type=click.Path(file_okay=False, path_type=Path), required=False)
@click.option("--version", "-V", "version", type=int, default=None, help="Version to pull (default: latest)")
@click.option("--slug", default=None, help="Skill slug (default: directory name)")
@click.pass_obj
@handle_errors
def pull(app: AppContext, skill_id: str, skill_dir: Optional[Path], version: Optional[int], slug: Optional[str]) -> None:
    """Pull SKILL_ID into SKILL_DIR (default: <skills_dir>/<slug>)."""
    if skill_dir is None and slug is None:
        raise ValueError("Pass SKILL_DIR or --slug")
    target = _resolve_skill_dir(app, skill_dir, slug or "")

    with create_client(app.config) as client:
        result = create_orchestrator(app.config, client).pull(target, skill_id, version, slug=slug)

    app.console.print_success(f"Pulled version {result.version} ({len(result.files)} files) into {target}")


@cli.command()
@click.argument("skill_id")
@click.pass_obj
@handle_errors
def versions(app: AppContext, skill_id: str) -> None:
    """List all versions of SKILL_ID."""
    with create_client(app.config) as client:
        entries = client.list_versions(skill_id)
    current = max((e.version for e in entries), default=None)
    app.console.print_versions(entries, current=current)


@cli.command()
@click.argument("skill_id")
@click.option("--limit", "-n", default=50, help="Number of versions per page")
@click.option("--offset", default=0, help="Number of versions to skip")
@click.option("--with-diff", is_flag=True, help="Include changed files per version")
@click.pass_obj
@handle_errors
def history(app: AppContext, skill_id: str, limit: int, offset: int, with_diff: bool) -> None:
    """Show the version history of SKILL_ID."""
    with create_client(app.config) as client:
        page = create_orchestrator(app.config, client).history(
            skill_id, limit=limit, offset=offset, include_diff=with_diff
        )
    app.console.print_history(page)


@cli.command("diff")
@click.argument("skill_id")
@click.argument("from_version", type=int)
@click.argument("to_version", type=int, required=False)
@click.pass_obj
@handle_errors
def show_diff(app: AppContext, skill_id: str, from_version: int, to_version: Optional[int]) -> None:
    """Show line diffs between two versions of SKILL_ID.

    With a single version, compares it with the version before it.
    """
    with create_client(app.config) as client:
        orchestrator = create_orchestrator(app.config, client)
        if to_version is None:
            to_version = from_version
            from_version = max(to_version - 1, 1)
        diffs = orchestrator.compare_versions(skill_id, from_version, to_version)

    app.console.print(f"[bold]v{from_version} → v{to_version}[/bold]")
    app.console.print_file_diffs(diffs, from_version, to_version)


@cli.command()
@click.argument("skill_id")
@click.argument("version", type=int)
@click.argument("skill_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--yes", "-y", is_flag=True, help="Push the restored version without confirmation")
@click.pass_obj
@handle_errors
def rollback(app: AppContext, skill_id: str, version: int, skill_dir: Path, yes: bool) -> None:
    """Restore VERSION of SKILL_ID into SKILL_DIR and push it as a new version.

    History is never rewritten: the old content becomes the newest version.
    """

    def confirm(v: int) -> bool:
        return yes or app.console.confirm(f"Push version {v} as a new version?", default=False)

    with create_client(app.config) as client:
        result = create_orchestrator(app.config, client).rollback(skill_dir, skill_id, version, confirm=confirm)

    if result is None:
        app.console.print_info(f"Version {version} restored locally; not pushed")
    else:
        app.console.print_success(f"Version {version} restored as version {result.version}")


@cli.command()
@click.argument("skill_id")
@click.argument("dest", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
@handle_errors
def export(app: AppContext, skill_id: str, dest: Path) -> None:
    """Save the Git ZIP export of SKILL_ID to DEST."""
    with create_client(app.config) as client:
        path = create_orchestrator(app.config, client).export(skill_id, dest)
    app.console.print_success(f"Exported to {path}")


@cli.command()
@click.option("--lines", "-n", default=50, help="Number of lines to show")
@click.pass_obj
def log(app: AppContext, lines: int) -> None:
    """Show recent sync operations from the sync history log."""
    if not app.config.output.sync_history:
        app.console.print_info("Sync history log is disabled")
        return

    entries = SyncHistoryLog(Path(app.config.output.sync_history)).tail(lines)
    if not entries:
        app.console.print_info("No sync log found. Run 'push' or 'pull' first.")
        return

    app.console.print("\n".join(entries), markup=False)


@cli.group()
def config() -> None:
    """Configuration management commands."""


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing configuration")
@click.pass_obj
def config_init(app: AppContext, force: bool) -> None:
    """Create a default configuration file."""
    existed = app.config_path.exists()
    path, written = ensure_config_exists(app.config_path, overwrite=force)
    if written:
        app.console.print_success(f"Configuration {'reset' if existed else 'created'}: {path}")
    else:
        app.console.print_info(f"Configuration already exists: {path}")


@config.command("show")
@click.pass_obj
def config_show(app: AppContext) -> None:
    """Show the effective configuration."""
    app.console.print_config_summary(str(app.config_path), app.config.server.url)
    app.console.print(f"Skills dir:   {app.config.local.skills_dir}", markup=False)
    app.console.print(f"Token env:    {app.config.server.token_env}", markup=False)
    app.console.print(f"Cache TTL:    {app.config.server.cache_ttl:g}s", markup=False)
    app.console.print(f"Sync history: {app.config.output.sync_history or 'disabled'}", markup=False)


@config.command("check")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.pass_obj
def config_check(app: AppContext, file: Path) -> None:
    """Validate a configuration FILE."""
    ok, errors = validate_config_file(file)
    if ok:
        app.console.print_success(f"Configuration is valid: {file}")
        return

    app.console.print_error(f"Configuration is invalid: {file}")
    for error in errors:
        app.console.print(f"  • {error}", markup=False)
    raise SystemExit(1)


if __name__ == "__main__":
    cli()
