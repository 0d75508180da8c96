"""Rich rendering of the view state."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .models import Task, TOAST_ERROR
from .state import FormMode, FormState, ListStatus, ViewState


TOAST_STYLES = {
    "success": "green",
    TOAST_ERROR: "red",
}


def task_table(tasks) -> Table:
    """Build the task table."""
    table = Table(title="Tasks")
    table.add_column("ID", style="cyan", justify="right", width=6)
    table.add_column("Title", style="white")
    table.add_column("Done", justify="center")

    for task in tasks:
        table.add_row(str(task.id), escape(task.title), completed_mark(task))

    return table


def completed_mark(task: Task) -> str:
    return "[green]x[/green]" if task.completed else "[ ]"


def form_panel(form: FormState) -> Panel:
    """Build the panel for an open create/edit form."""
    if form.mode is FormMode.CREATE:
        heading = "New task"
    else:
        heading = f"Edit task {form.task_id}"

    lines = [f"Title: {escape(form.title) if form.title else '[dim](empty)[/dim]'}"]
    if form.submitting:
        lines.append("[yellow]Saving...[/yellow]")
    if form.error:
        lines.append(f"[red]{escape(form.error)}[/red]")

    return Panel.fit("\n".join(lines), title=heading, border_style="blue")


def render_view(console: Console, state: ViewState):
    """Print the whole screen for a view state."""
    task_list = state.task_list

    if task_list.status is ListStatus.LOADING:
        console.print("[dim]Loading...[/dim]")
    elif task_list.status is ListStatus.ERROR:
        console.print(f"[red]{escape(task_list.error)}[/red]")
    elif task_list.is_empty:
        console.print("[yellow]No tasks[/yellow]")
    elif task_list.status is ListStatus.LOADED:
        console.print(task_table(task_list.tasks))

    if state.form is not None:
        console.print(form_panel(state.form))

    if state.toast is not None:
        style = TOAST_STYLES.get(state.toast.kind, "white")
        console.print(f"[{style}]{escape(state.toast.message)}[/{style}]")
