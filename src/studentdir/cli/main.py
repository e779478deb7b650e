"""CLI entry point for the student directory.

Each command builds a DirectoryController against the configured record
store, runs one directory command, and prints the resulting table.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import click

from studentdir.cli.render import ClickConfirmer, ClickNotifier, ClickViewer, render_state
from studentdir.collaborators import NoticeKind
from studentdir.config import ConfigError, DirectoryConfig, find_config, load_config
from studentdir.directory import DirectoryController
from studentdir.gateway import GatewayError, RecordGateway
from studentdir.logging import get_logger, setup_logging
from studentdir.pagination import PAGE_SIZE_OPTIONS

logger = get_logger("cli")


def make_gateway(config: DirectoryConfig) -> RecordGateway:
    """Create the Record Gateway for a command."""
    return RecordGateway(base_url=config.api.base_url, timeout=config.api.timeout)


def _load(config_path: Path | None) -> DirectoryConfig:
    if config_path is not None:
        return load_config(config_path)
    found = find_config()
    if found is not None:
        return load_config(found)
    return DirectoryConfig.default()


Command = Callable[[DirectoryController, ClickNotifier], Awaitable[bool]]


def _run(
    ctx: click.Context,
    command: Command,
    *,
    page_size: int | None = None,
    confirmer: ClickConfirmer | None = None,
) -> None:
    """Run one async directory command and exit non-zero if it failed."""
    config: DirectoryConfig = ctx.obj["config"]
    notifier = ClickNotifier()

    async def runner() -> bool:
        async with make_gateway(config) as gateway:
            controller = DirectoryController(
                gateway,
                notifier,
                confirmer or ClickConfirmer(),
                viewer=ClickViewer(),
                page_size=page_size or config.display.page_size,
                bulk_search_size=config.display.bulk_search_size,
            )
            return await command(controller, notifier)

    ok = asyncio.run(runner())
    if not ok:
        sys.exit(1)


@click.group()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="Path to studentdir.yaml (default: search upward from cwd)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.version_option(package_name="studentdir")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Browse and manage the student directory."""
    setup_logging(level="DEBUG" if verbose else None, console=verbose)
    try:
        config = _load(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    logger.debug("Using record store at %s", config.api.base_url)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command("list")
@click.option("-p", "--page", type=click.IntRange(min=1), default=1, show_default=True)
@click.option(
    "-l",
    "--limit",
    type=click.Choice([str(n) for n in PAGE_SIZE_OPTIONS]),
    default=None,
    help="Entries per page",
)
@click.pass_context
def list_students(ctx: click.Context, page: int, limit: str | None) -> None:
    """Show one page of students."""

    async def command(controller: DirectoryController, notifier: ClickNotifier) -> bool:
        await controller.refresh()
        if page != 1 and not notifier.had_error:
            await controller.change_page(page)
        render_state(controller.state)
        return not notifier.had_error

    _run(ctx, command, page_size=int(limit) if limit else None)


@main.command("show")
@click.argument("student_id", type=int)
@click.pass_context
def show_student(ctx: click.Context, student_id: int) -> None:
    """Show one student's details."""

    async def command(controller: DirectoryController, notifier: ClickNotifier) -> bool:
        return await controller.view_record(student_id) is not None

    _run(ctx, command)


@main.command("search")
@click.argument("query")
@click.pass_context
def search_students(ctx: click.Context, query: str) -> None:
    """Search by ID (a number) or by part of a name."""

    async def command(controller: DirectoryController, notifier: ClickNotifier) -> bool:
        await controller.search(query)
        render_state(controller.state)
        return not notifier.had_error

    _run(ctx, command)


def _form_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option("--marks", "average_marks", default=None, help="Average marks")(func)
    func = click.option("--age", default=None, help="Age")(func)
    func = click.option("--email", default=None, help="Email")(func)
    func = click.option("--name", default=None, help="Student name")(func)
    return func


def _given(**values: str | None) -> dict[str, str]:
    return {key: value for key, value in values.items() if value is not None}


@main.command("add")
@_form_options
@click.pass_context
def add_student(
    ctx: click.Context,
    name: str | None,
    email: str | None,
    age: str | None,
    average_marks: str | None,
) -> None:
    """Add a new student. Missing fields are prompted for."""
    values = {
        "name": name if name is not None else click.prompt("Student Name", default=""),
        "email": email if email is not None else click.prompt("Email", default=""),
        "age": age if age is not None else click.prompt("Age", default=""),
        "average_marks": (
            average_marks
            if average_marks is not None
            else click.prompt("Average Marks", default="")
        ),
    }

    async def command(controller: DirectoryController, notifier: ClickNotifier) -> bool:
        dialog = controller.request_create()
        dialog.form.update(**values)
        saved = await dialog.submit()
        if saved:
            render_state(controller.state)
        return saved

    _run(ctx, command)


@main.command("edit")
@click.argument("student_id", type=int)
@_form_options
@click.pass_context
def edit_student(
    ctx: click.Context,
    student_id: int,
    name: str | None,
    email: str | None,
    age: str | None,
    average_marks: str | None,
) -> None:
    """Update a student. Only the given fields change."""
    changes = _given(name=name, email=email, age=age, average_marks=average_marks)

    async def command(controller: DirectoryController, notifier: ClickNotifier) -> bool:
        try:
            student = await controller.gateway.get_by_id(student_id)
        except GatewayError as e:
            notifier.notify(NoticeKind.ERROR, f"Failed to fetch student details: {e}")
            return False
        dialog = controller.request_edit(student)
        dialog.form.update(**changes)
        saved = await dialog.submit()
        if saved:
            render_state(controller.state)
        return saved

    _run(ctx, command)


@main.command("delete")
@click.argument("student_id", type=int)
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_student(ctx: click.Context, student_id: int, yes: bool) -> None:
    """Delete a student."""

    async def command(controller: DirectoryController, notifier: ClickNotifier) -> bool:
        deleted = await controller.delete_record(student_id)
        if deleted:
            render_state(controller.state)
        return deleted or not notifier.had_error

    _run(ctx, command, confirmer=ClickConfirmer(assume_yes=yes))


if __name__ == "__main__":
    main()
