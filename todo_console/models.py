"""Data models for todo-console.

- Task: a single TODO item as returned by the backend
- Success / Failure: result of a backend call
- Toast: auto-dismissing notification
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union


T = TypeVar("T")


@dataclass(frozen=True)
class Task:
    """A task owned by the backend."""

    id: int
    title: str
    completed: bool = False

    def to_dict(self) -> dict:
        """Convert to the wire format (completed as 0/1)."""
        return {
            "id": self.id,
            "title": self.title,
            "completed": 1 if self.completed else 0,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            id=int(data["id"]),
            title=str(data["title"]),
            completed=parse_completed(data.get("completed", 0)),
        )


def parse_completed(value: Any) -> bool:
    """Read a wire ``completed`` flag: a JSON bool or the integers 0/1."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return value == 1
    raise ValueError(f"Invalid completed flag: {value!r}")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A backend call that succeeded."""

    value: T = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A backend call (or local validation) that failed."""

    message: str
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success, Failure]


TOAST_SUCCESS = "success"
TOAST_ERROR = "error"


@dataclass(frozen=True)
class Toast:
    """A transient notification."""

    message: str
    kind: str = TOAST_SUCCESS  # success, error
    expires_at: float = 0.0

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


def is_blank(title: Any) -> bool:
    """Return True if the title is missing or only whitespace."""
    return title is None or not str(title).strip()
