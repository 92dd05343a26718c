"""Command line interface for uuidify."""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn
from rich.syntax import Syntax

from uuidify.config import ConfigError, ConfigManager, settable_keys
from uuidify.engine import BatchResult, ProgressEvent, RenameEngine
from uuidify.ingestion import PathDropHandle
from uuidify.log import configure_logging

console = Console()


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command appropriately.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    if isinstance(original, click.ClickException):
        raise original

    raise click.ClickException(message) from original


def _emit_message(message: Any, *, mode: str, quiet: bool, summary_only: bool) -> None:
    """Conditionally print CLI output according to quiet/summary settings.

    Args:
        message: Renderable or string to emit.
        mode: Output mode identifier (`detail`, `summary`, `warning`, or `error`).
        quiet: Whether quiet mode is active.
        summary_only: Whether only summary lines should be emitted.
    """

    if quiet and mode != "error":
        return

    if summary_only and mode not in {"summary", "warning", "error"}:
        return

    console.print(message)


def _run_engine(
    engine: RenameEngine,
    paths: Sequence[str],
    *,
    dry_run: bool,
    show_progress: bool,
) -> BatchResult:
    """Run one batch over ``paths``, optionally drawing a progress bar."""

    handles = [PathDropHandle(path) for path in paths]
    if not show_progress:
        return asyncio.run(engine.run_batch(handles, dry_run=dry_run))

    columns = (
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("{task.fields[current]}"),
    )
    with Progress(*columns, console=console, transient=True) as progress:
        task_id = progress.add_task("Renaming", total=None, current="")

        def _on_progress(event: ProgressEvent) -> None:
            progress.update(
                task_id,
                total=event.total,
                completed=event.completed,
                current=escape(event.current_name),
            )

        return asyncio.run(engine.run_batch(handles, progress=_on_progress, dry_run=dry_run))


def _emit_batch(
    result: BatchResult,
    *,
    recent_limit: int,
    quiet: bool,
    summary_only: bool,
) -> None:
    """Render a finished batch as text."""

    if result.renamed and recent_limit > 0:
        heading = "Would rename:" if result.dry_run else "Last renamed:"
        _emit_message(
            f"[bold]{heading}[/bold]", mode="detail", quiet=quiet, summary_only=summary_only
        )
        for plan in result.renamed[:recent_limit]:
            _emit_message(
                f"  {escape(plan.source_name)} -> {escape(plan.destination_name)}",
                mode="detail",
                quiet=quiet,
                summary_only=summary_only,
            )
        remaining = len(result.renamed) - recent_limit
        if remaining > 0:
            _emit_message(
                f"  … and {remaining} more",
                mode="detail",
                quiet=quiet,
                summary_only=summary_only,
            )

    if result.skipped:
        _emit_message(
            f"[yellow]{len(result.skipped)} unreadable entry(ies) skipped.[/yellow]",
            mode="warning",
            quiet=quiet,
            summary_only=summary_only,
        )

    if result.errors:
        _emit_message(
            "[red]Errors encountered:[/red]", mode="error", quiet=quiet, summary_only=summary_only
        )
        for entry in result.errors:
            _emit_message(
                f"  - {escape(entry)}", mode="error", quiet=quiet, summary_only=summary_only
            )

    colour = "red" if result.failed else ("yellow" if result.outcome == "empty" else "green")
    _emit_message(
        f"[{colour}]{escape(result.message)}.[/{colour}]",
        mode="summary",
        quiet=quiet,
        summary_only=summary_only,
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="uuidify")
def cli() -> None:
    """uuidify renames files to random UUIDs, keeping extensions and folders."""


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=str))
@click.option("--dry-run", is_flag=True, help="Show generated names without renaming.")
@click.option("--json", "json_output", is_flag=True, help="Emit JSON describing the batch.")
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit summary lines.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.option("--no-hidden", is_flag=True, help="Leave dot-files inside folders untouched.")
@click.option("--follow-symlinks", is_flag=True, help="Descend into symlinked folders.")
@click.pass_context
def rename(
    ctx: click.Context,
    paths: tuple[str, ...],
    dry_run: bool,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
    no_hidden: bool,
    follow_symlinks: bool,
) -> None:
    """Rename every file in PATHS to a random UUID.

    Folders are kept; files inside them are renamed recursively. Each file
    keeps its extension and stays in its directory.

    Args:
        ctx: Click context used for parameter source inspection.
        paths: Files and folders to rename.
        dry_run: If True, only show the names that would be used.
        json_output: If True, emit JSON describing the batch.
        summary_mode: When True, limit output to summary lines and warnings.
        quiet: When True, suppress non-error CLI output entirely.
        no_hidden: When True, skip dot-files found inside folders.
        follow_symlinks: When True, descend into symlinked folders.

    Raises:
        click.ClickException: If configuration loading or validation fails.
    """

    if not paths:
        raise click.ClickException("Provide at least one PATH to rename.")

    overrides: dict[str, Any] = {}
    if no_hidden:
        overrides["traversal.include_hidden"] = False
    if follow_symlinks:
        overrides["traversal.follow_symlinks"] = True

    result: BatchResult | None = None
    try:
        manager = ConfigManager()
        config = manager.load(cli_overrides=overrides)
        configure_logging(config.logging)

        explicit_quiet = ctx.get_parameter_source("quiet") == ParameterSource.COMMANDLINE
        explicit_summary = ctx.get_parameter_source("summary_mode") == ParameterSource.COMMANDLINE

        quiet_enabled = quiet if explicit_quiet else config.cli.quiet_default
        summary_only = summary_mode if explicit_summary else config.cli.summary_default

        if json_output:
            if explicit_quiet and quiet_enabled:
                raise click.ClickException("--json cannot be combined with --quiet.")
            if explicit_summary and summary_only:
                raise click.ClickException("--json cannot be combined with --summary.")
            quiet_enabled = False
            summary_only = False

        if quiet_enabled and summary_only:
            raise click.ClickException(
                "Quiet and summary modes cannot both be enabled. Adjust CLI defaults or flags."
            )

        engine = RenameEngine.from_config(config)
        result = _run_engine(
            engine,
            paths,
            dry_run=dry_run,
            show_progress=not (json_output or quiet_enabled or summary_only),
        )

        if json_output:
            console.print_json(data=result.to_payload())
        else:
            _emit_batch(
                result,
                recent_limit=config.cli.recent_limit,
                quiet=quiet_enabled,
                summary_only=summary_only,
            )
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
    except click.ClickException as exc:
        _handle_cli_error(str(exc), code="cli_error", json_output=json_output, original=exc)
    except Exception as exc:
        _handle_cli_error(
            f"Unexpected error while renaming files: {exc}",
            code="internal_error",
            json_output=json_output,
            details={"exception": type(exc).__name__},
            original=exc,
        )

    if result is not None and result.failed:
        ctx.exit(1)


@cli.group()
def config() -> None:
    """Inspect and change uuidify settings."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore UUIDIFY__ environment overrides.")
@click.option("--keys", "list_keys", is_flag=True, help="List every settable key and its value.")
def config_view(no_env: bool, list_keys: bool) -> None:
    """Show the effective settings.

    Raises:
        click.ClickException: If the settings cannot be loaded.
    """
    manager = ConfigManager()
    try:
        loaded = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if list_keys:
        for section, options in settable_keys().items():
            values = getattr(loaded, section)
            for option in options:
                console.print(f"{section}.{option} = {escape(repr(getattr(values, option)))}")
        return

    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Store VALUE for KEY (``section.option``) in the settings file.

    VALUE is read as YAML, so ``false``, ``8`` and ``null`` keep their types.

    Raises:
        click.ClickException: If KEY is unknown or VALUE is rejected.
    """
    manager = ConfigManager()
    try:
        canonical, before, after = manager.set_value(key, value)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if before == after:
        console.print(f"[yellow]{canonical} is already {escape(repr(after))}.[/yellow]")
        return
    console.print(f"[green]{canonical}: {escape(repr(before))} -> {escape(repr(after))}[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the settings file in $EDITOR and keep the result if it validates.

    Raises:
        click.ClickException: If the edited file is not valid.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")
    if edited is None or edited == original:
        console.print("[yellow]No changes applied.[/yellow]")
        return

    try:
        manager.replace_text(edited)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(f"[green]Saved {escape(str(manager.config_path))}.[/green]")


def main() -> None:
    """Console-script entry point."""
    cli()


__all__ = ["cli", "main"]
