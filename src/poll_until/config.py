"""Configuration loading for the poll-until CLI."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import load_dotenv

from poll_until.constants import (
    DEFAULT_INTERVAL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SHELL,
    DEFINITION_KEYS,
    ENV_INTERVAL,
    ENV_LOG_LEVEL,
    ENV_SHELL,
)


@dataclass
class Config:
    """Defaults loaded from environment."""

    interval: str = DEFAULT_INTERVAL
    shell: str = DEFAULT_SHELL
    log_level: str = DEFAULT_LOG_LEVEL


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


def load_config() -> Config:
    """
    Load defaults from environment variables (and a .env file, if any).

    Raises:
        ConfigError: If POLL_UNTIL_LOG_LEVEL is not a known level name,
                     or a variable is set but empty.
    """
    load_dotenv()

    values = {}
    for field_name, env_name in (
        ("interval", ENV_INTERVAL),
        ("shell", ENV_SHELL),
        ("log_level", ENV_LOG_LEVEL),
    ):
        value = os.environ.get(env_name)
        if value is None:
            continue
        if not value.strip():
            raise ConfigError(f"Environment variable {env_name} is set but empty")
        values[field_name] = value.strip()

    config = Config(**values)
    config.log_level = config.log_level.upper()
    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ConfigError(f"Unknown log level in {ENV_LOG_LEVEL}: {config.log_level}")

    return config


def load_poll_definition(definition_file: Path) -> dict:
    """
    Load a poll definition from YAML or JSON.

    Optional fields:
        - command: str (shell command to poll)
        - equals: str (expected output)
        - interval: str (e.g. "5s")
        - on_finish: str (command run after a match)
        - shell: str (shell binary)
    """
    try:
        content = definition_file.read_text()
    except OSError as e:
        raise ConfigError(f"Cannot read poll definition {definition_file}: {e}") from e

    try:
        if definition_file.suffix in (".yaml", ".yml"):
            # BaseLoader keeps every scalar as written: 1.10, true, 007
            data = yaml.load(content, Loader=yaml.BaseLoader)
        elif definition_file.suffix == ".json":
            data = json.loads(content)
        else:
            raise ConfigError(f"Unsupported file type: {definition_file.suffix}. Use .yaml, .yml, or .json")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot parse poll definition {definition_file}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Poll definition must be a mapping, got {type(data).__name__}")

    unknown = sorted(set(data) - set(DEFINITION_KEYS))
    if unknown:
        raise ConfigError(f"Unknown keys in poll definition: {', '.join(unknown)}")

    not_text = sorted(key for key, value in data.items() if value is not None and not isinstance(value, str))
    if not_text:
        raise ConfigError(f"Poll definition values must be strings: {', '.join(not_text)}")

    return {key: value for key, value in data.items() if value is not None}
