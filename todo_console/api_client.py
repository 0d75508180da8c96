"""HTTP client for the TODO backend.

Endpoints:
    GET    /api/todos        -> list of {id, title, completed}
    POST   /api/todos        -> created task, body {title}
    PUT    /api/todos/{id}   -> updated task, body {title?, completed?}
    DELETE /api/todos/{id}   -> 200 / 204

Every method returns a Success or Failure; expected HTTP and transport
errors never raise.
"""

import logging
from typing import List, Optional

import requests

from .config import ClientConfig
from .models import Task, Success, Failure, Result


logger = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred"
FETCH_FAILED = "Failed to fetch tasks"
CREATE_FAILED = "Failed to create task"
UPDATE_FAILED = "Failed to update task"
DELETE_FAILED = "Failed to delete task"


def error_message(response: requests.Response, fallback: str) -> str:
    """Pull the ``error`` field out of a failed response.

    Any body that is not JSON, not an object, or has no string ``error``
    falls back to the generic message.
    """
    try:
        body = response.json()
    except ValueError:
        return fallback

    if isinstance(body, dict):
        message = body.get("error")
        if isinstance(message, str) and message:
            return message
    return fallback


class TodoApiClient:
    """Thin wrapper around a requests session for ``/api/todos``."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or ClientConfig()
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self.config.todos_url

    def _todo_url(self, task_id: int) -> str:
        return f"{self.base_url}/{task_id}"

    def _send(self, method: str, url: str, **kwargs) -> Result:
        """Issue a request, turning transport errors into a Failure."""
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method, url, timeout=self.config.timeout, **kwargs
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return Failure(GENERIC_ERROR)
        return Success(response)

    # --- Public Methods ---

    def list_todos(self) -> Result:
        """Fetch the full task list."""
        result = self._send("GET", self.base_url)
        if not result.ok:
            return result

        response = result.value
        if not _is_success(response):
            logger.info("Listing tasks returned HTTP %s", response.status_code)
            return Failure(FETCH_FAILED, status_code=response.status_code)

        try:
            body = response.json()
            if not isinstance(body, list):
                raise TypeError(f"expected a JSON array, got {type(body).__name__}")
            tasks: List[Task] = [Task.from_dict(item) for item in body]
        except (ValueError, TypeError, KeyError) as e:
            logger.warning("Malformed task list from backend: %s", e)
            return Failure(GENERIC_ERROR, status_code=response.status_code)

        return Success(tasks)

    def create_todo(self, title: str) -> Result:
        """Create a task with the given (already trimmed) title."""
        return self._write("POST", self.base_url, {"title": title}, CREATE_FAILED)

    def update_todo(self, task_id: int, fields: dict) -> Result:
        """Patch title and/or completed of one task."""
        return self._write("PUT", self._todo_url(task_id), fields, UPDATE_FAILED)

    def delete_todo(self, task_id: int) -> Result:
        """Delete one task."""
        return self._write("DELETE", self._todo_url(task_id), None, DELETE_FAILED)

    def _write(
        self, method: str, url: str, payload: Optional[dict], fallback: str
    ) -> Result:
        kwargs = {"json": payload} if payload is not None else {}
        result = self._send(method, url, **kwargs)
        if not result.ok:
            return result

        response = result.value
        if not _is_success(response):
            message = error_message(response, fallback)
            logger.info(
                "%s %s returned HTTP %s: %s",
                method, url, response.status_code, message,
            )
            return Failure(message, status_code=response.status_code)

        # The body is informational only; callers re-fetch the list.
        return Success(_task_or_none(response))


def _is_success(response: requests.Response) -> bool:
    """Only 2xx counts; an unfollowed redirect is a failure."""
    return 200 <= response.status_code < 300


def _task_or_none(response: requests.Response) -> Optional[Task]:
    """Decode a task from a write response, if it carries one."""
    if response.status_code == 204 or not response.content:
        return None
    try:
        return Task.from_dict(response.json())
    except (ValueError, TypeError, KeyError):
        return None
