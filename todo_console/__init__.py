"""todo-console - terminal client for a TODO REST backend.

Lists, creates, edits, toggles and deletes tasks through the backend's
``/api/todos`` endpoints. Every successful write is followed by a full
re-fetch, so the list on screen is always the last server answer.
"""

__version__ = "1.0.0"

from .models import (
    Task,
    Toast,
    Success,
    Failure,
)
from .api_client import TodoApiClient
from .controller import TodoListController
from .config import ClientConfig, load_config

__all__ = [
    # Models
    "Task",
    "Toast",
    "Success",
    "Failure",
    # Backend
    "TodoApiClient",
    "TodoListController",
    # Configuration
    "ClientConfig",
    "load_config",
]
