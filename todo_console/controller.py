"""Task list controller for todo-console.

Keeps the local list in step with the backend:
- refresh() is the only operation that changes the list
- every successful create/update/delete is followed by refresh()
- nothing is patched locally, so a failed write never touches the list

UI state (loading, list error, open form, toast) lives in one immutable
ViewState moved by the reducers in ``state``.
"""

import logging
import time
from typing import Callable, Optional

from . import state as view
from .api_client import TodoApiClient
from .models import Task, Failure, Result, TOAST_SUCCESS, TOAST_ERROR, is_blank
from .state import FormMode, ViewState


logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Please enter a title"
TASK_CREATED = "Task created"
TASK_UPDATED = "Task updated"
TASK_DELETED = "Task deleted"

PATCH_FIELDS = ("title", "completed")


def confirmation_prompt(task: Task) -> str:
    """Question asked before deleting a task."""
    return f'Delete "{task.title}"?'


class TodoListController:
    """Synchronizes the displayed task list with the backend."""

    def __init__(
        self,
        client: TodoApiClient,
        confirm: Optional[Callable[[Task], bool]] = None,
        toast_seconds: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the controller.

        Args:
            client: Backend client.
            confirm: Asked before every delete; returns True to proceed.
                Without one, deletes are always declined.
            toast_seconds: How long a toast stays visible.
            clock: Monotonic time source used for toast expiry.
        """
        self.client = client
        self.confirm = confirm or (lambda task: False)
        self.toast_seconds = toast_seconds
        self.clock = clock
        self._state = ViewState()

    @property
    def state(self) -> ViewState:
        """Current view state, with an expired toast already dismissed."""
        self._state = view.expire_toast(self._state, self.clock())
        return self._state

    # --- List ---

    def refresh(self) -> Result:
        """Replace the list with the backend's current one."""
        self._state = view.begin_loading(self._state)
        result = self.client.list_todos()

        if result.ok:
            self._state = view.list_loaded(self._state, result.value)
            logger.debug("Loaded %d task(s)", len(self._state.tasks))
        else:
            self._state = view.list_failed(self._state, result.message)

        return result

    # --- Forms ---

    def open_create_form(self) -> ViewState:
        self._state = view.open_create_form(self._state)
        return self._state

    def open_edit_form(self, task: Task) -> ViewState:
        self._state = view.open_edit_form(self._state, task)
        return self._state

    def close_form(self) -> ViewState:
        self._state = view.close_form(self._state)
        return self._state

    def submit_form(self, title: str) -> Result:
        """Submit the open form with the given title."""
        form = self._state.form
        if form is None:
            raise RuntimeError("No form is open")

        if form.mode is FormMode.CREATE:
            return self.create(title)
        return self.update(form.task_id, {"title": title})

    # --- Mutations ---

    def create(self, title: str) -> Result:
        """Create a task from the create form."""
        if self._state.form is None or self._state.form.mode is not FormMode.CREATE:
            self._state = view.open_create_form(self._state)
        self._state = view.set_form_title(self._state, title)

        if is_blank(title):
            return self._reject_blank_title()

        self._state = view.form_submitting(self._state)
        result = self.client.create_todo(title.strip())
        return self._finish_write(result, TASK_CREATED)

    def update(self, task_id: int, fields: dict) -> Result:
        """Patch one task's title and/or completed flag.

        A title patch goes through the edit form (opened for ``task_id`` if
        needed) and reports failures inline; a completed-only patch reports
        failures as a toast.
        """
        fields = self._clean_patch(fields)
        in_form = "title" in fields

        if in_form:
            form = self._state.form
            if form is None or form.mode is not FormMode.EDIT or form.task_id != task_id:
                task = self._state.find_task(task_id) or Task(id=task_id, title="")
                self._state = view.open_edit_form(self._state, task)
            self._state = view.set_form_title(self._state, fields["title"])

            if is_blank(fields["title"]):
                return self._reject_blank_title()
            fields["title"] = fields["title"].strip()
            self._state = view.form_submitting(self._state)

        result = self.client.update_todo(task_id, fields)
        return self._finish_write(result, TASK_UPDATED, in_form=in_form)

    def toggle_completion(self, task: Task) -> Result:
        """Flip a task's completed flag on the backend.

        The list is not touched until the following refresh, so a failed
        toggle leaves the checkbox as the server last reported it.
        """
        result = self.client.update_todo(task.id, {"completed": not task.completed})

        if result.ok:
            self.refresh()
        else:
            self._toast(result.message, TOAST_ERROR)

        return result

    def remove(self, task: Task) -> Optional[Result]:
        """Delete a task after confirmation.

        Returns None when the user declines.
        """
        if not self.confirm(task):
            logger.debug("Delete of task %s declined", task.id)
            return None

        result = self.client.delete_todo(task.id)

        if result.ok:
            self._toast(TASK_DELETED, TOAST_SUCCESS)
            self.refresh()
        else:
            self._toast(result.message, TOAST_ERROR)

        return result

    def dismiss_toast(self) -> ViewState:
        self._state = view.dismiss_toast(self._state)
        return self._state

    # --- Helpers ---

    def _clean_patch(self, fields: dict) -> dict:
        unknown = set(fields) - set(PATCH_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
        if not fields:
            raise ValueError("Nothing to update")

        patch = dict(fields)
        if "completed" in patch:
            patch["completed"] = bool(patch["completed"])
        return patch

    def _reject_blank_title(self) -> Failure:
        self._state = view.form_failed(self._state, TITLE_REQUIRED)
        return Failure(TITLE_REQUIRED)

    def _finish_write(
        self, result: Result, success_message: str, in_form: bool = True
    ) -> Result:
        if result.ok:
            self._toast(success_message, TOAST_SUCCESS)
            if in_form:
                self._state = view.close_form(self._state)
            self.refresh()
        elif in_form:
            self._state = view.form_failed(self._state, result.message)
        else:
            self._toast(result.message, TOAST_ERROR)
        return result

    def _toast(self, message: str, kind: str):
        self._state = view.show_toast(
            self._state, message, kind, self.clock(), self.toast_seconds
        )
