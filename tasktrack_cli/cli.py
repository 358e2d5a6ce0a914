#!/usr/bin/env python3
"""tasktrack — keep a personal task list in a JSON file."""

from __future__ import annotations

import contextlib
import logging
import sys
from pathlib import Path
from typing import Iterator

import click
from rich.console import Console
from rich.table import Table

from tasktrack import (
    ImportReport,
    TaskTrackError,
    Task,
    create_task,
    delete_all_tasks,
    delete_task,
    download_tasks,
    export_tasks,
    get_all_tasks,
    get_settings,
    get_task_by_id,
    import_tasks,
    update_task,
)
from tasktrack.fileio import dump_json
from tasktrack.logging_setup import setup_logging
from tasktrack.transfer import FORMATS
from tasktrack_cli.form import prompt_task

logger = logging.getLogger("tasktrack.cli")

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

ERROR = "bold bright_red"
WARNING = "bold bright_yellow"
SUCCESS = "bold bright_green"

COMMANDS = [
    "list",
    "add",
    "delete",
    "delete-all",
    "edit",
    "export",
    "import",
    "download",
]

TASK_ID = click.IntRange(min=1)


def _db(ctx: click.Context) -> Path | None:
    return ctx.obj.get("db_file") if ctx.obj else None


@contextlib.contextmanager
def _reporting_errors() -> Iterator[None]:
    """Print tasktrack errors in red and exit with status 1."""
    try:
        yield
    except TaskTrackError as e:
        logger.debug("Command failed", exc_info=True)
        err_console.print(str(e), style=ERROR, markup=False, highlight=False)
        sys.exit(1)


def _print_report(report: ImportReport, source: str) -> None:
    if report.added:
        console.print(f"{len(report.added)} task(s) imported from {source}", style=SUCCESS, markup=False)
    else:
        console.print(f"no new task imported from {source}", style=WARNING, markup=False)
    for title, reason in report.skipped:
        console.print(f"  skipped {title!r}: {reason}", style=WARNING, markup=False, highlight=False)


def _task_table(tasks: list[Task]) -> Table:
    table = Table(show_lines=False)
    table.add_column("id", justify="right", style="bright_yellow")
    table.add_column("title")
    table.add_column("completed", style="bright_blue")
    for t in tasks:
        table.add_row(str(t.id), t.title, "true" if t.completed else "false")
    return table


# ── Command group ──────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.option(
    "--db-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="DB_FILE",
    help="JSON file holding the tasks (default: $DB_FILE).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write a full debug log to this file.",
)
@click.version_option(package_name="tasktrack")
@click.pass_context
def cli(ctx: click.Context, db_file: Path | None, verbose: bool, log_file: Path | None) -> None:
    """Add, list, edit, delete, import, export and download tasks."""
    settings = get_settings()
    setup_logging(
        console_level=logging.DEBUG if verbose else settings.log_level,
        log_file=log_file or settings.log_file,
    )
    ctx.ensure_object(dict)
    ctx.obj["db_file"] = db_file

    if ctx.invoked_subcommand is None:
        console.print("you must enter a command", style=ERROR)
        console.print("available command are:")
        console.print("\n".join(COMMANDS), style=WARNING)
        ctx.exit(1)


# ── Commands ───────────────────────────────────────────────────


@cli.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON array.")
@click.pass_context
def list_cmd(ctx: click.Context, as_json: bool) -> None:
    """Show every task."""
    with _reporting_errors():
        tasks = get_all_tasks(_db(ctx))
    if as_json:
        click.echo(dump_json([t.to_dict() for t in tasks]), nl=False)
        return
    if tasks:
        console.print(_task_table(tasks))
    else:
        console.print("there is not any task", style=WARNING)


@cli.command("add")
@click.argument("title", nargs=-1)
@click.option("--completed", is_flag=True, help="Mark the new task as completed.")
@click.pass_context
def add_cmd(ctx: click.Context, title: tuple[str, ...], completed: bool) -> None:
    """Add a task. Without TITLE, an interactive form opens."""
    text = " ".join(title).strip()
    if not text:
        answer = prompt_task("New task", completed=completed)
        if answer is None:
            console.print("cancelled", style=WARNING)
            return
        text, completed = answer.title, answer.completed
    with _reporting_errors():
        task = create_task(text, completed, _db(ctx))
    console.print(f"new task saved successfully (id {task.id})", style=SUCCESS)


@cli.command("delete")
@click.argument("task_id", type=TASK_ID)
@click.pass_context
def delete_cmd(ctx: click.Context, task_id: int) -> None:
    """Delete the task with TASK_ID."""
    with _reporting_errors():
        removed = delete_task(task_id, _db(ctx))
    if not removed:
        err_console.print(f"task {task_id} not found", style=WARNING)
        sys.exit(1)
    console.print(f"task {task_id} deleted", style=SUCCESS)


@cli.command("delete-all")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def delete_all_cmd(ctx: click.Context, yes: bool) -> None:
    """Delete every task."""
    if not yes:
        click.confirm("Delete all tasks?", abort=True)
    with _reporting_errors():
        count = delete_all_tasks(_db(ctx))
    console.print(f"{count} task(s) deleted", style=SUCCESS)


@cli.command("edit")
@click.argument("task_id", type=TASK_ID)
@click.option("--title", default=None, help="New title.")
@click.option("--completed/--pending", default=None, help="New completion state.")
@click.pass_context
def edit_cmd(ctx: click.Context, task_id: int, title: str | None, completed: bool | None) -> None:
    """Edit a task. Without options, an interactive form opens."""
    db = _db(ctx)
    if title is not None:
        title = title.strip()
    with _reporting_errors():
        if title is None and completed is None:
            current = get_task_by_id(task_id, db)
            if current is None:
                err_console.print(f"task {task_id} not found", style=WARNING)
                sys.exit(1)
            answer = prompt_task(f"Edit task {task_id}", current.title, current.completed)
            if answer is None:
                console.print("cancelled", style=WARNING)
                return
            title, completed = answer.title, answer.completed
        task = update_task(task_id, title=title, completed=completed, path=db)
    console.print(f"task {task.id} updated", style=SUCCESS)


@cli.command("export")
@click.argument("dest", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--format", "fmt", type=click.Choice(FORMATS), default=None,
              help="Output format (default: from the file suffix).")
@click.pass_context
def export_cmd(ctx: click.Context, dest: Path, fmt: str | None) -> None:
    """Export all tasks to DEST."""
    with _reporting_errors():
        count = export_tasks(dest, fmt, _db(ctx))
    console.print(f"{count} task(s) exported to {dest}", style=SUCCESS, markup=False)


@cli.command("import")
@click.argument("src", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--format", "fmt", type=click.Choice(FORMATS), default=None,
              help="Input format (default: from the file suffix).")
@click.pass_context
def import_cmd(ctx: click.Context, src: Path, fmt: str | None) -> None:
    """Import tasks from SRC as new tasks."""
    with _reporting_errors():
        report = import_tasks(src, fmt, _db(ctx))
    _print_report(report, str(src))


@cli.command("download")
@click.argument("url", required=False)
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Import at most N tasks.")
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds.")
@click.pass_context
def download_cmd(ctx: click.Context, url: str | None, limit: int | None, timeout: float | None) -> None:
    """Download tasks from URL (default: $TASKTRACK_DOWNLOAD_URL) and import them."""
    url = url or get_settings().download_url
    with _reporting_errors():
        report = download_tasks(url, limit=limit, timeout=timeout, path=_db(ctx))
    _print_report(report, url)


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
