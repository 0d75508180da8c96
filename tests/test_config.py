"""Tests for config.py - Client configuration."""

import json

import pytest

from todo_console.config import (
    API_URL_ENV,
    ClientConfig,
    config_path,
    load_config,
    save_config,
    set_config_value,
)


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    monkeypatch.delenv(API_URL_ENV, raising=False)


class TestClientConfig:
    """Tests for ClientConfig dataclass."""

    def test_defaults(self):
        """Test the default settings."""
        config = ClientConfig()
        assert config.api_url == "http://localhost:3000"
        assert config.todos_path == "/api/todos"
        assert config.toast_seconds == 3.0
        assert config.timeout is None

    def test_todos_url_joins_slashes(self):
        """Test the URL join tolerates extra slashes."""
        assert ClientConfig(api_url="http://x/").todos_url == "http://x/api/todos"
        assert ClientConfig(api_url="http://x", todos_path="todos").todos_url == "http://x/todos"

    def test_from_dict_partial(self):
        """Test missing keys keep their defaults."""
        config = ClientConfig.from_dict({"api_url": "http://api", "timeout": "2.5"})
        assert config.api_url == "http://api"
        assert config.timeout == 2.5
        assert config.toast_seconds == 3.0


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test defaults when no config file exists."""
        assert load_config(str(tmp_path)) == ClientConfig()

    def test_reads_config_file(self, tmp_path):
        """Test values are read from config.json."""
        save_config(ClientConfig(api_url="http://file", toast_seconds=5), str(tmp_path))

        config = load_config(str(tmp_path))

        assert config.api_url == "http://file"
        assert config.toast_seconds == 5.0

    def test_invalid_json_falls_back(self, tmp_path):
        """Test unparseable JSON is ignored."""
        path = config_path(str(tmp_path))
        path.parent.mkdir(parents=True)
        path.write_text("{not json")

        assert load_config(str(tmp_path)) == ClientConfig()

    @pytest.mark.parametrize("content", ['["x"]', "42", '"http://x"', "null"])
    def test_non_object_json_falls_back(self, tmp_path, content):
        """Test valid JSON that is not an object is ignored."""
        path = config_path(str(tmp_path))
        path.parent.mkdir(parents=True)
        path.write_text(content)

        assert load_config(str(tmp_path)) == ClientConfig()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test the environment beats the file."""
        save_config(ClientConfig(api_url="http://file"), str(tmp_path))
        monkeypatch.setenv(API_URL_ENV, "http://env")

        assert load_config(str(tmp_path)).api_url == "http://env"

    def test_explicit_url_wins(self, tmp_path, monkeypatch):
        """Test --api-url beats the environment."""
        monkeypatch.setenv(API_URL_ENV, "http://env")

        config = load_config(str(tmp_path), api_url="http://flag")

        assert config.api_url == "http://flag"


class TestSetConfigValue:
    """Tests for set_config_value."""

    def test_set_creates_file(self, tmp_path):
        """Test setting a key creates the file."""
        set_config_value("api_url", "http://new", str(tmp_path))

        data = json.loads(config_path(str(tmp_path)).read_text())
        assert data["api_url"] == "http://new"

    def test_set_keeps_other_keys(self, tmp_path):
        """Test setting one key keeps the rest."""
        set_config_value("api_url", "http://new", str(tmp_path))
        config = set_config_value("toast_seconds", "4", str(tmp_path))

        assert config.api_url == "http://new"
        assert config.toast_seconds == 4.0

    def test_set_timeout_none(self, tmp_path):
        """Test timeout can be reset to none."""
        set_config_value("timeout", "10", str(tmp_path))
        config = set_config_value("timeout", "none", str(tmp_path))
        assert config.timeout is None

    def test_set_replaces_non_object_file(self, tmp_path):
        """Test a file holding a JSON array is replaced by a fresh object."""
        path = config_path(str(tmp_path))
        path.parent.mkdir(parents=True)
        path.write_text('["x"]')

        config = set_config_value("api_url", "http://new", str(tmp_path))

        assert config.api_url == "http://new"
        assert json.loads(path.read_text())["api_url"] == "http://new"

    def test_unknown_key(self, tmp_path):
        """Test unknown keys raise ValueError."""
        with pytest.raises(ValueError):
            set_config_value("colour", "blue", str(tmp_path))

    def test_bad_number(self, tmp_path):
        """Test non-numeric values for numeric keys raise ValueError."""
        with pytest.raises(ValueError):
            set_config_value("toast_seconds", "soon", str(tmp_path))
