"""Command-line interface for snipsync."""

import sys
from pathlib import Path

import click
from rich.text import Text

from snipsync.config import CONFIG_FILE, SyncConfig
from snipsync.core.diagnostics import Diagnostics
from snipsync.core.errors import SnipsyncError
from snipsync.sync import Sync, SyncResult
from snipsync.utils.console import (
    _create_files_table,
    _get_console,
    _rich_echo,
    _rich_error,
    _rich_info,
    _rich_panel,
    _rich_success,
    _rich_warning,
)
from snipsync.version import get_version


def print_version(ctx, param, value):
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return

    console = _get_console()
    if console:
        version_text = Text()
        version_text.append("snipsync", style="bold cyan")
        version_text.append(f" version {get_version()}", style="white")
        console.print(version_text)
    else:
        click.echo(f"snipsync version {get_version()}")
    ctx.exit()


@click.group(invoke_without_command=True,
             help="Sync code snippets from source repositories into documentation files")
@click.option('--version', is_flag=True, callback=print_version,
              expose_value=False, is_eager=True, help="Show version and exit.")
@click.option('--config', '-c', 'config_path', default=CONFIG_FILE, show_default=True,
              type=click.Path(dir_okay=False), help="Path to the snipsync configuration file")
@click.option('--verbose', '-v', is_flag=True, help="List every changed file")
@click.option('--no-progress', is_flag=True, help="Hide progress bars")
@click.pass_context
def cli(ctx, config_path, verbose, no_progress):
    """Main entry point for the snipsync CLI."""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    ctx.obj['verbose'] = verbose
    ctx.obj['show_progress'] = not no_progress
    if ctx.invoked_subcommand is None:
        ctx.invoke(sync)


@cli.command(help="Extract snippets from the origins and splice them into the targets (default)")
@click.pass_context
def sync(ctx):
    """Run a full sync: download, extract, splice, write, clean up."""
    synchronizer = _build_sync(ctx)
    try:
        _rich_info(f"Syncing {len(synchronizer.config.origins)} origin(s)...", symbol="running")
        result = synchronizer.run()
    except (SnipsyncError, OSError) as e:
        _rich_error(f"Sync failed: {e}", symbol="error")
        sys.exit(1)

    _report(result, ctx.obj['verbose'])
    _rich_success(
        f"Snippet sync complete: {result.snippets} snippet(s) from {result.source_files} file(s), "
        f"{result.targets_changed} of {result.targets_scanned} target file(s) updated",
        symbol="sparkles",
    )


@cli.command(help="Remove spliced snippets from the targets, keeping the placeholders")
@click.pass_context
def clear(ctx):
    """Strip every placeholder body from the target files."""
    synchronizer = _build_sync(ctx)
    try:
        result = synchronizer.clear()
    except (SnipsyncError, OSError) as e:
        _rich_error(f"Clear failed: {e}", symbol="error")
        sys.exit(1)

    _report(result, ctx.obj['verbose'])
    _rich_success(
        f"Snippets cleared from {result.targets_changed} of {result.targets_scanned} target file(s)",
        symbol="broom",
    )


def _build_sync(ctx) -> Sync:
    config_path = Path(ctx.obj['config_path'])
    try:
        config = SyncConfig.from_yaml(config_path)
    except FileNotFoundError as e:
        _rich_error(str(e), symbol="error")
        _rich_echo(f"Create {CONFIG_FILE} with 'origins' and 'targets' or pass --config", style="dim")
        sys.exit(1)
    except SnipsyncError as e:
        _rich_error(f"Invalid configuration: {e}", symbol="error")
        sys.exit(1)

    if not config.targets:
        _rich_error(f"No targets configured in {config_path}", symbol="error")
        sys.exit(1)

    return Sync(config, diagnostics=Diagnostics(), show_progress=ctx.obj['show_progress'])


def _report(result: SyncResult, verbose: bool) -> None:
    """Print warnings and, in verbose mode, the changed files."""
    diagnostics = result.diagnostics.items
    if diagnostics:
        lines = [f"[{d.kind.value}] {d}" for d in diagnostics]
        _rich_panel("\n".join(lines), title=f"{len(diagnostics)} warning(s)", style="yellow")

    if verbose and result.changed_files:
        table = _create_files_table([(name, "updated") for name in result.changed_files], title="Changed files")
        console = _get_console()
        if table is not None and console is not None:
            console.print(table)
        else:
            for name in result.changed_files:
                _rich_echo(f"  - {name}", style="muted")
    elif verbose:
        _rich_warning("No target files changed")


def main():
    """Console script entry point."""
    cli(obj={})


if __name__ == '__main__':
    main()
