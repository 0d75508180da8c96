"""CLI interface for todo-console.

Commands:
- list: Show all tasks
- add: Create a task
- edit: Change a task's title
- toggle: Flip a task's completed flag
- delete: Delete a task (asks first)
- shell: Interactive task list
- config: Show or change settings
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import questionary
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .api_client import TodoApiClient
from .config import load_config, set_config_value, config_path
from .controller import TodoListController, confirmation_prompt
from .models import Task
from .render import render_view


console = Console()

ACTION_CREATE = "Create task"
ACTION_EDIT = "Edit task"
ACTION_TOGGLE = "Toggle completion"
ACTION_DELETE = "Delete task"
ACTION_REFRESH = "Refresh"
ACTION_QUIT = "Quit"


def _configure_logging(verbose: bool):
    """Send package logs to stderr through rich."""
    logger = logging.getLogger("todo_console")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False)
        )
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _build_controller(ctx, confirm=None) -> TodoListController:
    config = load_config(ctx.obj["project_path"], api_url=ctx.obj.get("api_url"))
    client = TodoApiClient(config)
    return TodoListController(
        client, confirm=confirm, toast_seconds=config.toast_seconds
    )


def _find_task(controller: TodoListController, task_id: int) -> Task:
    """Refresh and look up a task, exiting when it cannot be found."""
    result = controller.refresh()
    if not result.ok:
        console.print(f"[red]Error: {escape(result.message)}[/red]")
        sys.exit(1)

    task = controller.state.find_task(task_id)
    if task is None:
        console.print(f"[red]Task not found: {task_id}[/red]")
        sys.exit(1)
    return task


def _finish(controller: TodoListController, ok: bool):
    render_view(console, controller.state)
    if not ok:
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="todo-console")
@click.option(
    "--api-url",
    help="Backend base URL (default: from config or TODO_CONSOLE_API_URL)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx, api_url: Optional[str], verbose: bool):
    """todo-console - manage a TODO list on a REST backend.

    Every change is sent to the backend and the list is fetched again
    afterwards, so what you see is always the server's copy.
    """
    ctx.ensure_object(dict)
    ctx.obj["project_path"] = str(Path.cwd())
    ctx.obj["api_url"] = api_url
    _configure_logging(verbose)


# --- Task Commands ---


@main.command("list")
@click.pass_context
def list_tasks(ctx):
    """Show all tasks."""
    controller = _build_controller(ctx)
    result = controller.refresh()
    _finish(controller, result.ok)


@main.command()
@click.argument("title")
@click.pass_context
def add(ctx, title: str):
    """Create a task.

    Examples:
        todo-console add "Buy milk"
    """
    controller = _build_controller(ctx)
    controller.open_create_form()
    result = controller.submit_form(title)
    _finish(controller, result.ok)


@main.command()
@click.argument("task_id", type=int)
@click.argument("title")
@click.pass_context
def edit(ctx, task_id: int, title: str):
    """Change the title of a task."""
    controller = _build_controller(ctx)
    task = _find_task(controller, task_id)

    controller.open_edit_form(task)
    result = controller.submit_form(title)
    _finish(controller, result.ok)


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def toggle(ctx, task_id: int):
    """Mark a task done, or not done if it already is."""
    controller = _build_controller(ctx)
    task = _find_task(controller, task_id)

    result = controller.toggle_completion(task)
    _finish(controller, result.ok)


@main.command()
@click.argument("task_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete(ctx, task_id: int, yes: bool):
    """Delete a task."""
    if yes:
        confirm = lambda task: True
    else:
        confirm = lambda task: click.confirm(confirmation_prompt(task), default=False)

    controller = _build_controller(ctx, confirm=confirm)
    task = _find_task(controller, task_id)

    result = controller.remove(task)
    if result is None:
        console.print("[yellow]Aborted.[/yellow]")
        return
    _finish(controller, result.ok)


# --- Interactive Shell ---


@main.command()
@click.pass_context
def shell(ctx):
    """Interactive task list.

    Shows the list, then asks what to do next until you quit.
    """
    controller = _build_controller(ctx, confirm=_ask_delete)
    run_shell(controller)


def _ask_delete(task: Task) -> bool:
    return bool(questionary.confirm(confirmation_prompt(task), default=False).ask())


def _pick_task(controller: TodoListController, message: str) -> Optional[Task]:
    tasks = controller.state.tasks
    if not tasks:
        console.print("[yellow]No tasks[/yellow]")
        return None

    choices = [
        questionary.Choice(title=f"{t.id}: {t.title}", value=t.id) for t in tasks
    ]
    task_id = questionary.select(message, choices=choices).ask()
    if task_id is None:
        return None
    return controller.state.find_task(task_id)


def _run_form(controller: TodoListController, default: str = ""):
    """Prompt for a title until the form closes or the user cancels."""
    while controller.state.form is not None:
        title = questionary.text("Title:", default=default).ask()
        if title is None:
            controller.close_form()
            return
        controller.submit_form(title)

        form = controller.state.form
        if form is not None and form.error:
            console.print(f"[red]{escape(form.error)}[/red]")
            default = title


def run_shell(controller: TodoListController):
    """Main loop of the interactive shell."""
    controller.refresh()

    while True:
        console.print()
        render_view(console, controller.state)

        action = questionary.select(
            "What next?",
            choices=[
                ACTION_CREATE,
                ACTION_EDIT,
                ACTION_TOGGLE,
                ACTION_DELETE,
                ACTION_REFRESH,
                ACTION_QUIT,
            ],
        ).ask()

        if action is None or action == ACTION_QUIT:
            break

        if action == ACTION_CREATE:
            controller.open_create_form()
            _run_form(controller)
        elif action == ACTION_EDIT:
            task = _pick_task(controller, "Edit which task?")
            if task:
                controller.open_edit_form(task)
                _run_form(controller, default=task.title)
        elif action == ACTION_TOGGLE:
            task = _pick_task(controller, "Toggle which task?")
            if task:
                controller.toggle_completion(task)
        elif action == ACTION_DELETE:
            task = _pick_task(controller, "Delete which task?")
            if task:
                controller.remove(task)
        elif action == ACTION_REFRESH:
            controller.refresh()


# --- Config Commands ---


@main.group()
@click.pass_context
def config(ctx):
    """Show or change settings."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show the effective configuration."""
    project_path = ctx.obj["project_path"]
    settings = load_config(project_path, api_url=ctx.obj.get("api_url"))

    table = Table(title="todo-console configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    for key, value in settings.to_dict().items():
        table.add_row(key, str(value))

    console.print(table)
    console.print(f"[dim]Config file: {config_path(project_path)}[/dim]")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx, key: str, value: str):
    """Change a setting in .todo-console/config.json.

    Examples:
        todo-console config set api_url http://localhost:3000
        todo-console config set toast_seconds 5
    """
    try:
        set_config_value(key, value, ctx.obj["project_path"])
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    console.print(f"[green]Set {key} = {value}[/green]")


if __name__ == "__main__":
    main()
