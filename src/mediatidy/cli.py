"""Command line interface for the mediatidy project."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from mediatidy.config import ConfigError, ConfigManager
from mediatidy.ingestion import DirectorySnapshotter
from mediatidy.logging_utils import configure_logging
from mediatidy.tasks import TaskRegistry, default_registry, parse_flag_args
from mediatidy.walker import IgnoreFilter, TreeWalker, WalkReport, normalize_path

console = Console()
REGISTRY: TaskRegistry = default_registry()


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


def _format_summary_line(command: str, roots: list[Path], metrics: dict[str, Any]) -> str:
    """Return a consistent summary line for CLI commands."""

    formatted_roots = ", ".join(str(root) for root in roots)
    parts = ", ".join(f"{key}={value}" for key, value in metrics.items())
    color = "green" if not metrics.get("errors") else "red"
    return f"[{color}]{command} summary for {formatted_roots}: {parts}.[/{color}]"


def _emit_report(
    report: WalkReport,
    roots: list[Path],
    *,
    dry_run: bool,
    quiet: bool,
    summary_only: bool,
) -> None:
    """Render the outcome of a walk as text."""

    for skipped in report.skipped_roots:
        _emit_message(
            f"[yellow]Skipped {skipped}: not a directory.[/yellow]",
            mode="warning",
            quiet=quiet,
            summary_only=summary_only,
        )

    if report.errors:
        _emit_message(
            "[red]Errors encountered:[/red]", mode="error", quiet=quiet, summary_only=summary_only
        )
        for error in sorted(report.errors, key=lambda item: item.path):
            _emit_message(f"  - {error}", mode="error", quiet=quiet, summary_only=summary_only)

    metrics: dict[str, Any] = dict(report.counts())
    if dry_run:
        metrics["dry_run"] = True
    _emit_message(
        _format_summary_line("Run", roots, metrics),
        mode="summary",
        quiet=quiet,
        summary_only=summary_only,
    )


def _available_flags() -> str:
    return ", ".join(f"-{spec.flag} ({spec.name})" for spec in REGISTRY.specs())


def _task_flag_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add one ``-x/--name`` flag per registered task."""
    for spec in reversed(REGISTRY.specs()):
        func = click.option(
            f"-{spec.flag}",
            f"--{spec.name}",
            f"task_{spec.name}",
            is_flag=True,
            help=spec.description,
        )(func)
    return func


def _config_manager(ctx: click.Context) -> ConfigManager:
    obj = ctx.find_root().obj or {}
    return ConfigManager(obj.get("config_path"))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="mediatidy")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings file to read instead of ~/.mediatidy/config.yaml or $MEDIATIDY_CONFIG.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """mediatidy walks media libraries and tidies every directory it visits."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, file_okay=False, path_type=str))
@_task_flag_options
@click.option("--dry-run", is_flag=True, help="Log planned changes without modifying files.")
@click.option("--workers", type=int, help="Maximum number of directories processed concurrently.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override the configured log level.",
)
@click.option("--json", "json_output", is_flag=True, help="Emit a JSON report.")
@click.option("--summary", "summary_mode", is_flag=True, help="Only emit summary lines.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def run(
    ctx: click.Context,
    paths: tuple[str, ...],
    dry_run: bool,
    workers: int | None,
    log_level: str | None,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
    **task_flags: bool,
) -> None:
    """Run the selected tasks in every directory below PATHS.

    PATHS default to the configured target_dirs. Without task flags the
    configured default_args decide which tasks run. Exits with status 1 when
    any directory reported an error.
    """

    overrides: dict[str, Any] = {}
    if workers is not None:
        overrides["walker"] = {"max_workers": workers}
    if log_level is not None:
        overrides["logging"] = {"level": log_level}

    try:
        config = _config_manager(ctx).load(overrides=overrides)
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
        return

    try:
        configure_logging(config.logging)
    except OSError as exc:
        _handle_cli_error(
            f"Cannot open log file {config.logging.file}: {exc}",
            code="logging_error",
            json_output=json_output,
            original=exc,
        )
        return

    explicit_quiet = ctx.get_parameter_source("quiet") == ParameterSource.COMMANDLINE
    explicit_summary = ctx.get_parameter_source("summary_mode") == ParameterSource.COMMANDLINE
    if json_output and (explicit_quiet or explicit_summary):
        _handle_cli_error(
            "--json cannot be combined with --quiet or --summary.",
            code="invalid_options",
            json_output=True,
        )
        return

    # JSON output ignores the configured presentation defaults.
    quiet_enabled = quiet if explicit_quiet or json_output else config.cli.quiet_default
    summary_only = summary_mode if explicit_summary or json_output else config.cli.summary_default
    if quiet_enabled and summary_only:
        _handle_cli_error(
            "Quiet and summary modes cannot both be enabled. Adjust CLI defaults or flags.",
            code="invalid_options",
            json_output=False,
        )
        return

    flags = [spec.flag for spec in REGISTRY.specs() if task_flags.get(f"task_{spec.name}")]
    if not flags:
        flags = parse_flag_args(config.default_args)
        if not json_output:
            _emit_message(
                "[cyan]No task flags given; running configured default_args.[/cyan]",
                mode="detail",
                quiet=quiet_enabled,
                summary_only=summary_only,
            )

    tasks = REGISTRY.build(flags, config, dry_run=dry_run)
    if not tasks and not json_output:
        _emit_message(
            f"[yellow]No valid tasks selected. Available flags: {_available_flags()}.[/yellow]",
            mode="warning",
            quiet=quiet_enabled,
            summary_only=summary_only,
        )

    roots = [normalize_path(root) for root in (paths or config.target_dirs)]
    if not roots:
        _handle_cli_error(
            "No directories to walk. Pass PATHS or set target_dirs in the configuration.",
            code="no_targets",
            json_output=json_output,
        )
        return

    try:
        ignore_filter = IgnoreFilter.from_config(config.ignored_directories, roots)
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
        return

    walker = TreeWalker(
        tasks,
        snapshotter=DirectorySnapshotter.from_config(config),
        ignore_filter=ignore_filter,
        max_workers=config.walker.max_workers,
        follow_symlinks=config.walker.follow_symlinks,
    )
    report = walker.walk(roots)

    if json_output:
        payload = {
            "context": {
                "roots": [root.as_posix() for root in roots],
                "tasks": [task.name for task in tasks],
                "dry_run": dry_run,
            },
            **report.to_payload(),
        }
        console.print_json(data=payload)
    else:
        _emit_report(
            report, roots, dry_run=dry_run, quiet=quiet_enabled, summary_only=summary_only
        )

    if not report.ok:
        ctx.exit(1)


@cli.command("tasks")
def list_tasks() -> None:
    """List the registered tasks and the flags that select them."""

    table = Table(title="Registered tasks")
    table.add_column("Flag", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Description")
    for spec in REGISTRY.specs():
        table.add_row(f"-{spec.flag}", spec.name, spec.description)
    console.print(table)


@cli.group()
def config() -> None:
    """Inspect the settings mediatidy runs with."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore MEDIATIDY_* environment variables.")
@click.pass_context
def config_view(ctx: click.Context, no_env: bool) -> None:
    """Show the settings a run would use and where they were read from.

    Raises:
        click.ClickException: If the settings cannot be loaded.
    """
    manager = _config_manager(ctx)
    try:
        loaded = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if manager.config_path.exists():
        console.print(f"Settings file: {manager.config_path}", markup=False, soft_wrap=True)
    else:
        console.print(
            f"No settings file at {manager.config_path}; showing defaults.",
            markup=False,
            soft_wrap=True,
        )
    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
