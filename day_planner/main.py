"""
Main CLI entry point using Typer.

LEARNING NOTES:
- Typer turns type hints into CLI arguments and options
- The Annotated[] syntax adds metadata (help text, short flags)
- Rich draws the week strip and the day view
- Every command runs one short asyncio event loop (asyncio.run) because
  the controller, session and storage APIs are async

This module defines the command-line interface:
- `day-planner show [DATE]`      - week strip + schedule + checklist
- `day-planner week [DATE]`      - which weekdays have a planner file
- `day-planner create [DATE]`    - create the planner file for a day
- `day-planner add-event ...`    - and the other edit commands
- `day-planner folder [PATH]`    - change the working directory
- `day-planner config` / `version`
"""

import asyncio
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Annotated, Awaitable, Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from . import __version__
from .config import get_settings
from .controller import PlannerController
from .dates import date_key, format_date_full, format_weekday, parse_date_argument
from .formatters import format_as_json
from .logging_setup import configure_logging
from .models import SessionStatus
from .session import SessionError
from .storage import WORKING_DIRECTORY_KEY, FileSystemStorage, SettingsStore


# ============================================================================
# Create the Typer App
# ============================================================================

app = typer.Typer(
    name="day-planner",
    help="A day planner backed by one plain-text file per day.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


class OutputFormat(str, Enum):
    """Output formats for `show`."""
    TEXT = "text"
    JSON = "json"


@dataclass
class CliState:
    """Options given before the command name."""
    working_directory: Optional[str] = None


# ============================================================================
# Helpers
# ============================================================================

def _prompt_for_folder() -> Optional[str]:
    """Terminal stand-in for a folder picker. Empty answer = cancel."""
    answer = Prompt.ask("[bold cyan]Folder for planner files[/bold cyan] (empty to cancel)", default="")
    return answer.strip() or None


def build_controller(folder_chooser: Callable[[], Optional[str]] | None = None) -> PlannerController:
    settings = get_settings()
    settings_store = SettingsStore(settings.settings_file)
    storage = FileSystemStorage(settings_store, folder_chooser=folder_chooser)
    return PlannerController(storage, settings_store, settings)


def _resolve_date(text: Optional[str]) -> date:
    if text is None:
        return date.today()
    try:
        return parse_date_argument(text)
    except (ValueError, OverflowError) as e:
        raise typer.BadParameter(str(e))


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


def _run(coro: Awaitable) -> object:
    return asyncio.run(coro)


async def _open_day(ctx: typer.Context, day: date) -> PlannerController:
    controller = build_controller()
    await controller.startup(day, _state(ctx).working_directory)
    return controller


def _require_loaded(controller: PlannerController) -> None:
    """Exit with a helpful message unless the selected day is loaded."""
    session = controller.session
    if session.status == SessionStatus.NOT_FOUND:
        console.print(f"[yellow]No planner file for {format_date_full(session.date)}.[/yellow]")
        console.print("[dim]Create one with: day-planner create "
                      f"{date_key(session.date)}[/dim]")
        raise typer.Exit(1)
    if session.status == SessionStatus.LOAD_ERROR:
        console.print(f"[red]Error loading planner file:[/red] {escape(session.error or '')}")
        raise typer.Exit(1)


def _edit(ctx: typer.Context, day_text: Optional[str], action: Callable[[PlannerController], Awaitable[str]]) -> None:
    """
    Load a day, apply one edit, and report the outcome.

    The edit is applied in memory first. If writing the file fails, the
    error is shown and the command exits with status 1.
    """
    day = _resolve_date(day_text)

    async def go() -> tuple[PlannerController, str]:
        controller = await _open_day(ctx, day)
        _require_loaded(controller)
        message = await action(controller)
        return controller, message

    try:
        controller, message = _run(go())
    except SessionError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if controller.session.error:
        console.print(f"[red]Failed to save planner file:[/red] {escape(controller.session.error)}")
        raise typer.Exit(1)

    console.print(escape(message), style="green")


# ============================================================================
# Rendering
# ============================================================================

def render_week(controller: PlannerController) -> Table:
    """Five-column strip: weekday, day number, and a dot if a file exists."""
    table = Table(title=controller.week_header(), show_lines=False)

    for day in controller.week:
        style = "bold blue" if day == controller.selected_date else "white"
        table.add_column(format_weekday(day), justify="center", header_style=style)

    cells = []
    for day in controller.week:
        marker = " [green]●[/green]" if controller.cache.has_file(day) else ""
        number = f"[bold blue]{day.day}[/bold blue]" if day == controller.selected_date else str(day.day)
        cells.append(f"{number}{marker}")
    table.add_row(*cells)
    return table


def render_day(controller: PlannerController) -> Panel:
    """Schedule and checklist for the selected day, with item ids."""
    session = controller.session
    lines: list[str] = []

    lines.append("[bold]Schedule[/bold]")
    if session.schedule:
        for item in session.schedule:
            lines.append(f"  [dim]{item.id:>3}[/dim]  [blue]{item.time:>8}[/blue]  {escape(item.description)}")
    else:
        lines.append("  [dim](nothing scheduled)[/dim]")

    lines.append("")
    lines.append("[bold]Checklist[/bold]")
    if session.checklist:
        for item in session.checklist:
            if item.completed:
                lines.append(f"  [dim]{item.id:>3}[/dim]  [green]\\[x][/green] [strike dim]{escape(item.text)}[/strike dim]")
            else:
                lines.append(f"  [dim]{item.id:>3}[/dim]  \\[ ] {escape(item.text)}")
    else:
        lines.append("  [dim](no tasks)[/dim]")

    title = format_date_full(session.date) if session.date else ""
    return Panel("\n".join(lines), title=title, border_style="blue")


# ============================================================================
# Global Options
# ============================================================================

@app.callback()
def main(
    ctx: typer.Context,
    working_directory: Annotated[
        Optional[str],
        typer.Option(
            "--dir", "-d",
            help="Use this folder for this command instead of the saved one."
        )
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging.")
    ] = False,
) -> None:
    """A day planner backed by one plain-text file per day."""
    level = "DEBUG" if verbose else get_settings().log_level
    configure_logging(level)
    ctx.obj = CliState(working_directory=working_directory)


# ============================================================================
# Viewing Commands
# ============================================================================

@app.command()
def show(
    ctx: typer.Context,
    day: Annotated[
        Optional[str],
        typer.Argument(help="Date to show (YYYY-MM-DD, M/D/YYYY, today, tomorrow). Defaults to today.")
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.")
    ] = OutputFormat.TEXT,
) -> None:
    """
    Show the week strip and the selected day's schedule and checklist.

    \b
    Examples:
        day-planner show
        day-planner show 2025-11-10
        day-planner show 11/10/2025 -f json
    """
    selected = _resolve_date(day)
    controller = _run(_open_day(ctx, selected))
    session = controller.session

    if output_format == OutputFormat.JSON:
        _require_loaded(controller)
        # Raw JSON: no markup, no highlighting, no wrapping inside strings
        console.print(format_as_json(session.to_planner_day()), markup=False, highlight=False, soft_wrap=True)
        return

    console.print(f"[dim]Folder:[/dim] {escape(controller.working_directory)}")
    console.print(render_week(controller))

    if session.status == SessionStatus.LOAD_ERROR:
        console.print(f"[red]Error loading planner file:[/red] {escape(session.error or '')}")
        raise typer.Exit(1)

    if session.status == SessionStatus.NOT_FOUND:
        console.print(Panel(
            f"No planner file for {format_date_full(selected)}.\n\n"
            f"[dim]Create one with: day-planner create {date_key(selected)}[/dim]",
            title=format_date_full(selected),
            border_style="yellow"
        ))
        return

    console.print(render_day(controller))


@app.command()
def week(
    ctx: typer.Context,
    day: Annotated[
        Optional[str],
        typer.Argument(help="Any date in the week to show. Defaults to today.")
    ] = None,
) -> None:
    """Show which weekdays have a planner file."""
    controller = _run(_open_day(ctx, _resolve_date(day)))

    table = Table(title=controller.week_header())
    table.add_column("Day", style="cyan")
    table.add_column("Date")
    table.add_column("File", style="dim")

    for weekday in controller.week:
        exists = controller.cache.has_file(weekday)
        table.add_row(
            format_weekday(weekday),
            format_date_full(weekday),
            f"[green]{date_key(weekday)}.txt[/green]" if exists else "-",
        )

    console.print(table)


# ============================================================================
# Editing Commands
# ============================================================================

DateOption = Annotated[
    Optional[str],
    typer.Option("--date", "-D", help="Day to edit. Defaults to today.")
]


@app.command()
def create(
    ctx: typer.Context,
    day: Annotated[
        Optional[str],
        typer.Argument(help="Date to create a planner file for. Defaults to today.")
    ] = None,
) -> None:
    """Create an empty planner file for a day."""
    selected = _resolve_date(day)

    async def go() -> PlannerController:
        controller = await _open_day(ctx, selected)
        if controller.session.status == SessionStatus.NOT_FOUND:
            await controller.create_day()
        return controller

    controller = _run(go())
    session = controller.session

    if session.status == SessionStatus.LOAD_ERROR:
        console.print(f"[red]Error loading planner file:[/red] {escape(session.error or '')}")
        raise typer.Exit(1)
    if session.status == SessionStatus.NOT_FOUND:
        console.print(f"[red]Failed to create planner file:[/red] {escape(session.error or '')}")
        raise typer.Exit(1)

    console.print(f"[green]Planner file ready:[/green] {escape(session.path)}")
    console.print(render_week(controller))


@app.command("add-event")
def add_event(
    ctx: typer.Context,
    time: Annotated[str, typer.Argument(help="Time such as 9:00am or 2:30pm")],
    description: Annotated[str, typer.Argument(help="What's happening")],
    day: DateOption = None,
) -> None:
    """Add an event to a day's schedule."""
    async def action(controller: PlannerController) -> str:
        item = await controller.session.add_event(time, description)
        return f"Added event {item.id}: {item.time} {item.description}"

    _edit(ctx, day, action)


@app.command("add-task")
def add_task(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Task text")],
    day: DateOption = None,
) -> None:
    """Add a task to a day's checklist."""
    async def action(controller: PlannerController) -> str:
        item = await controller.session.add_task(text)
        return f"Added task {item.id}: {item.text}"

    _edit(ctx, day, action)


@app.command()
def toggle(
    ctx: typer.Context,
    item_id: Annotated[int, typer.Argument(help="Task id as shown by `show`")],
    day: DateOption = None,
) -> None:
    """Check or uncheck a task."""
    async def action(controller: PlannerController) -> str:
        item = await controller.session.toggle_task(item_id)
        state = "done" if item.completed else "not done"
        return f"Task {item.id} marked {state}: {item.text}"

    _edit(ctx, day, action)


@app.command("edit-event")
def edit_event(
    ctx: typer.Context,
    item_id: Annotated[int, typer.Argument(help="Event id as shown by `show`")],
    time: Annotated[str, typer.Argument(help="New time")],
    description: Annotated[str, typer.Argument(help="New description")],
    day: DateOption = None,
) -> None:
    """Change an event's time and description."""
    async def action(controller: PlannerController) -> str:
        item = await controller.session.edit_event(item_id, time, description)
        return f"Updated event {item.id}: {item.time} {item.description}"

    _edit(ctx, day, action)


@app.command("edit-task")
def edit_task(
    ctx: typer.Context,
    item_id: Annotated[int, typer.Argument(help="Task id as shown by `show`")],
    text: Annotated[str, typer.Argument(help="New task text")],
    day: DateOption = None,
) -> None:
    """Change a task's text."""
    async def action(controller: PlannerController) -> str:
        item = await controller.session.edit_task(item_id, text)
        return f"Updated task {item.id}: {item.text}"

    _edit(ctx, day, action)


@app.command("delete-event")
def delete_event(
    ctx: typer.Context,
    item_id: Annotated[int, typer.Argument(help="Event id as shown by `show`")],
    day: DateOption = None,
) -> None:
    """Remove an event from the schedule."""
    async def action(controller: PlannerController) -> str:
        item = await controller.session.delete_event(item_id)
        return f"Deleted event {item.id}: {item.time} {item.description}"

    _edit(ctx, day, action)


@app.command("delete-task")
def delete_task(
    ctx: typer.Context,
    item_id: Annotated[int, typer.Argument(help="Task id as shown by `show`")],
    day: DateOption = None,
) -> None:
    """Remove a task from the checklist."""
    async def action(controller: PlannerController) -> str:
        item = await controller.session.delete_task(item_id)
        return f"Deleted task {item.id}: {item.text}"

    _edit(ctx, day, action)


# ============================================================================
# Utility Commands
# ============================================================================

@app.command()
def folder(
    path: Annotated[
        Optional[str],
        typer.Argument(help="New working directory. Omit to be prompted.")
    ] = None,
) -> None:
    """Change the folder planner files are kept in."""
    async def go() -> Optional[str]:
        controller = build_controller(folder_chooser=_prompt_for_folder)
        await controller.startup(date.today())
        if path is not None:
            return await controller.set_working_directory(path)
        return await controller.change_working_directory()

    selected = _run(go())
    if selected is None:
        console.print("[yellow]Folder unchanged.[/yellow]")
        return
    console.print(f"[green]Working directory:[/green] {escape(selected)}")


@app.command()
def config() -> None:
    """Show current configuration."""
    settings = get_settings()
    saved = SettingsStore(settings.settings_file).load()
    console.print(Panel(
        f"[bold]Settings File:[/bold] {settings.settings_file}\n"
        f"[bold]Working Directory:[/bold] {escape(str(saved.get(WORKING_DIRECTORY_KEY) or settings.default_working_directory))}\n"
        f"[bold]Log Level:[/bold] {settings.log_level}",
        title="Current Configuration",
        border_style="green"
    ))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]day-planner[/bold] version {__version__}")


if __name__ == "__main__":
    app()
