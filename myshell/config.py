from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


@dataclass
class ShellConfig:
    """Prompt text and per-line input bounds."""

    prompt: str = "myshell> "
    max_line_length: int = 99
    max_args: int = 10


@dataclass
class HistoryConfig:
    """Command history ring buffer settings."""

    size: int = 10


@dataclass
class DebugConfig:
    """Debug mode settings."""

    enabled: bool = False
    trace: bool = False
    verbose: bool = False


@dataclass
class AppConfig:
    """Top-level application configuration aggregating all subsections."""

    shell: ShellConfig = field(default_factory=ShellConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)


def _positive_int(section: dict, key: str, default: int, name: str) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return value


def load_config(path: str | None = None) -> AppConfig:
    """Load and validate interpreter configuration from a YAML file.

    Every section is optional. Without a path the built-in defaults are
    returned, which reproduce the classic interpreter: a ``myshell> ``
    prompt, 99-character lines, 10 arguments per command and 10 history
    entries.

    Args:
        path: Filesystem path to the YAML configuration file, or None.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        ConfigError: If an explicit path does not exist, the document is
            not a mapping, or a size field is not a positive integer.
    """
    if path is None:
        logger.debug("No config file given, using defaults")
        return AppConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f)

    # An empty file loads as None
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")

    # `or {}` fallback handles YAML null values for optional sections
    shell_raw = raw.get("shell", {}) or {}
    history_raw = raw.get("history", {}) or {}
    debug_raw = raw.get("debug", {}) or {}

    logger.debug("Loaded config from %s", path)

    return AppConfig(
        shell=ShellConfig(
            prompt=str(shell_raw.get("prompt", "myshell> ")),
            max_line_length=_positive_int(shell_raw, "max_line_length", 99, "shell.max_line_length"),
            max_args=_positive_int(shell_raw, "max_args", 10, "shell.max_args"),
        ),
        history=HistoryConfig(
            size=_positive_int(history_raw, "size", 10, "history.size"),
        ),
        debug=DebugConfig(
            enabled=bool(debug_raw.get("enabled", False)),
            trace=bool(debug_raw.get("trace", False)),
            verbose=bool(debug_raw.get("verbose", False)),
        ),
    )
