"""Tests for models.py - Task, result and toast types."""

import pytest

from todo_console.models import Task, Success, Failure, Toast, is_blank


class TestTask:
    """Tests for Task dataclass."""

    def test_from_dict_integer_completed(self):
        """Test 0/1 completed flags from the wire."""
        assert Task.from_dict({"id": 1, "title": "A", "completed": 0}).completed is False
        assert Task.from_dict({"id": 2, "title": "B", "completed": 1}).completed is True

    def test_from_dict_boolean_completed(self):
        """Test JSON booleans are accepted too."""
        task = Task.from_dict({"id": 3, "title": "C", "completed": True})
        assert task.completed is True

    def test_from_dict_missing_completed(self):
        """Test completed defaults to False."""
        task = Task.from_dict({"id": 4, "title": "D"})
        assert task.completed is False

    @pytest.mark.parametrize("flag", ["0", "false", "", 2, -1, 0.5, None])
    def test_from_dict_rejects_other_completed_values(self, flag):
        """Test completed must be 0/1 or a boolean."""
        with pytest.raises(ValueError):
            Task.from_dict({"id": 5, "title": "E", "completed": flag})

    def test_to_dict_uses_integers(self):
        """Test completed is written as 0/1."""
        assert Task(id=1, title="A", completed=True).to_dict() == {
            "id": 1,
            "title": "A",
            "completed": 1,
        }

    def test_task_is_immutable(self):
        """Test tasks cannot be edited in place."""
        task = Task(id=1, title="A")
        with pytest.raises(AttributeError):
            task.completed = True


class TestResults:
    """Tests for Success / Failure."""

    def test_success_is_ok(self):
        assert Success([1, 2]).ok is True
        assert Success([1, 2]).value == [1, 2]

    def test_failure_is_not_ok(self):
        failure = Failure("boom", status_code=404)
        assert failure.ok is False
        assert failure.message == "boom"
        assert failure.status_code == 404


class TestToast:
    """Tests for Toast expiry."""

    def test_expiry(self):
        toast = Toast(message="Saved", kind="success", expires_at=10.0)
        assert toast.is_expired(9.9) is False
        assert toast.is_expired(10.0) is True


class TestIsBlank:
    """Tests for title validation helper."""

    @pytest.mark.parametrize("title", ["", "   ", "\t\n", None])
    def test_blank_titles(self, title):
        assert is_blank(title) is True

    def test_non_blank_title(self):
        assert is_blank("  Buy milk ") is False
