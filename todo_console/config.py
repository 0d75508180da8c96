"""Client configuration for todo-console.

Settings live in ``.todo-console/config.json`` under the working
directory. The backend URL can be overridden with the
``TODO_CONSOLE_API_URL`` environment variable or the ``--api-url`` option.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

CONFIG_DIR = ".todo-console"
CONFIG_FILE = "config.json"
API_URL_ENV = "TODO_CONSOLE_API_URL"


@dataclass
class ClientConfig:
    """Backend and UI settings."""

    api_url: str = "http://localhost:3000"
    todos_path: str = "/api/todos"
    toast_seconds: float = 3.0
    timeout: Optional[float] = None  # None = wait forever

    @property
    def todos_url(self) -> str:
        return self.api_url.rstrip("/") + "/" + self.todos_path.lstrip("/")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ClientConfig":
        defaults = cls()
        timeout = data.get("timeout", defaults.timeout)
        return cls(
            api_url=str(data.get("api_url", defaults.api_url)),
            todos_path=str(data.get("todos_path", defaults.todos_path)),
            toast_seconds=float(data.get("toast_seconds", defaults.toast_seconds)),
            timeout=float(timeout) if timeout is not None else None,
        )


def config_path(project_path: str = ".") -> Path:
    """Path of the config file for a project directory."""
    return Path(project_path) / CONFIG_DIR / CONFIG_FILE


def load_config(
    project_path: str = ".", api_url: Optional[str] = None
) -> ClientConfig:
    """Load configuration.

    Args:
        project_path: Directory holding ``.todo-console/``.
        api_url: Explicit backend URL, wins over everything else.

    Returns:
        ClientConfig from config.json, environment and overrides.
    """
    config = ClientConfig()
    config_file = config_path(project_path)

    if config_file.exists():
        try:
            with open(config_file) as f:
                data = json.load(f)
            if isinstance(data, dict):
                config = ClientConfig.from_dict(data)
            else:
                logger.warning("Ignoring config %s: not a JSON object", config_file)
        except (json.JSONDecodeError, IOError, TypeError, ValueError) as e:
            logger.warning("Ignoring unreadable config %s: %s", config_file, e)
            config = ClientConfig()

    env_url = os.getenv(API_URL_ENV)
    if env_url:
        config.api_url = env_url

    if api_url:
        config.api_url = api_url

    return config


def save_config(config: ClientConfig, project_path: str = ".") -> Path:
    """Write configuration to ``.todo-console/config.json``."""
    config_file = config_path(project_path)
    config_file.parent.mkdir(parents=True, exist_ok=True)

    with open(config_file, "w") as f:
        json.dump(config.to_dict(), f, indent=2)

    return config_file


def config_keys() -> list:
    """Names of the settable configuration keys."""
    return [f.name for f in fields(ClientConfig)]


def set_config_value(
    key: str, value: str, project_path: str = "."
) -> ClientConfig:
    """Update a single key in the stored config file."""
    if key not in config_keys():
        raise ValueError(f"Unknown config key: {key}")

    config_file = config_path(project_path)
    data = {}
    if config_file.exists():
        try:
            with open(config_file) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            data = {}
        if not isinstance(data, dict):
            logger.warning("Replacing config %s: not a JSON object", config_file)
            data = {}

    if key == "timeout" and value.strip().lower() in ("", "none"):
        data[key] = None
    else:
        data[key] = value

    config = ClientConfig.from_dict(data)
    save_config(config, project_path)
    return config
