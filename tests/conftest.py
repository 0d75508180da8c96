"""Shared fixtures: an in-memory backend and a controllable clock."""

import pytest

from todo_console.models import Task, Success


class FakeBackend:
    """In-memory stand-in for TodoApiClient that records every call."""

    def __init__(self, tasks=None):
        self.tasks = {t.id: t for t in (tasks or [])}
        self.calls = []
        self.fail = {}  # method name -> Failure
        self.controller = None
        self.seen = []  # controller view state at the moment of each call

    def watch(self, controller):
        """Record the controller's view state whenever a call arrives."""
        self.controller = controller

    def _record(self, call):
        self.calls.append(call)
        if self.controller is not None:
            self.seen.append((call[0], self.controller.state))

    def _next_id(self):
        return max(self.tasks, default=0) + 1

    def list_todos(self):
        self._record(("list",))
        if "list" in self.fail:
            return self.fail["list"]
        return Success([self.tasks[k] for k in sorted(self.tasks)])

    def create_todo(self, title):
        self._record(("create", title))
        if "create" in self.fail:
            return self.fail["create"]
        task = Task(self._next_id(), title)
        self.tasks[task.id] = task
        return Success(task)

    def update_todo(self, task_id, fields):
        self._record(("update", task_id, dict(fields)))
        if "update" in self.fail:
            return self.fail["update"]
        current = self.tasks[task_id]
        task = Task(
            task_id,
            fields.get("title", current.title),
            fields.get("completed", current.completed),
        )
        self.tasks[task_id] = task
        return Success(task)

    def delete_todo(self, task_id):
        self._record(("delete", task_id))
        if "delete" in self.fail:
            return self.fail["delete"]
        del self.tasks[task_id]
        return Success(None)

    def writes(self):
        return [c for c in self.calls if c[0] != "list"]


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def make_backend():
    """Factory for a FakeBackend seeded with tasks."""
    return FakeBackend


@pytest.fixture
def backend():
    return FakeBackend([Task(1, "A", False), Task(2, "B", True)])


@pytest.fixture
def clock():
    return FakeClock()
