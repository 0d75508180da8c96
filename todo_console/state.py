"""Immutable view state and the reducers that move it.

The whole screen is one ``ViewState``:
- task_list: idle / loading / loaded / error
- form: the open create or edit form (None when closed)
- toast: the current notification (None when nothing to show)

Reducers are pure functions taking a state and returning a new one.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Tuple

from .models import Task, Toast


class ListStatus(Enum):
    """Lifecycle of the task list."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class FormMode(Enum):
    """Which form is open."""

    CREATE = "create"
    EDIT = "edit"


@dataclass(frozen=True)
class ListState:
    """The task list as last confirmed by the backend.

    Build instances through the classmethods; they keep ``tasks`` empty
    whenever the list is loading or failed.
    """

    status: ListStatus = ListStatus.IDLE
    tasks: Tuple[Task, ...] = ()
    error: Optional[str] = None

    @classmethod
    def loading(cls) -> "ListState":
        return cls(status=ListStatus.LOADING)

    @classmethod
    def loaded(cls, tasks: Iterable[Task]) -> "ListState":
        return cls(status=ListStatus.LOADED, tasks=tuple(tasks))

    @classmethod
    def failed(cls, message: str) -> "ListState":
        return cls(status=ListStatus.ERROR, error=message)

    @property
    def is_loading(self) -> bool:
        return self.status is ListStatus.LOADING

    @property
    def is_empty(self) -> bool:
        return self.status is ListStatus.LOADED and not self.tasks


@dataclass(frozen=True)
class FormState:
    """An open create/edit form."""

    mode: FormMode
    title: str = ""
    task_id: Optional[int] = None
    submitting: bool = False
    error: Optional[str] = None

    @property
    def can_submit(self) -> bool:
        return bool(self.title.strip()) and not self.submitting


@dataclass(frozen=True)
class ViewState:
    """Everything the screen shows."""

    task_list: ListState = ListState()
    form: Optional[FormState] = None
    toast: Optional[Toast] = None

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return self.task_list.tasks

    def find_task(self, task_id: int) -> Optional[Task]:
        for task in self.task_list.tasks:
            if task.id == task_id:
                return task
        return None


# --- List reducers ---


def begin_loading(state: ViewState) -> ViewState:
    return replace(state, task_list=ListState.loading())


def list_loaded(state: ViewState, tasks: Iterable[Task]) -> ViewState:
    return replace(state, task_list=ListState.loaded(tasks))


def list_failed(state: ViewState, message: str) -> ViewState:
    return replace(state, task_list=ListState.failed(message))


# --- Form reducers ---


def open_create_form(state: ViewState) -> ViewState:
    return replace(state, form=FormState(mode=FormMode.CREATE))


def open_edit_form(state: ViewState, task: Task) -> ViewState:
    return replace(
        state,
        form=FormState(mode=FormMode.EDIT, title=task.title, task_id=task.id),
    )


def close_form(state: ViewState) -> ViewState:
    return replace(state, form=None)


def set_form_title(state: ViewState, title: str) -> ViewState:
    if state.form is None:
        return state
    return replace(state, form=replace(state.form, title=title))


def form_submitting(state: ViewState) -> ViewState:
    if state.form is None:
        return state
    return replace(state, form=replace(state.form, submitting=True, error=None))


def form_failed(state: ViewState, message: str) -> ViewState:
    """Keep the form open and show the message inline."""
    if state.form is None:
        return state
    return replace(state, form=replace(state.form, submitting=False, error=message))


# --- Toast reducers ---


def show_toast(
    state: ViewState, message: str, kind: str, now: float, duration: float
) -> ViewState:
    return replace(
        state, toast=Toast(message=message, kind=kind, expires_at=now + duration)
    )


def dismiss_toast(state: ViewState) -> ViewState:
    return replace(state, toast=None)


def expire_toast(state: ViewState, now: float) -> ViewState:
    if state.toast is not None and state.toast.is_expired(now):
        return dismiss_toast(state)
    return state
