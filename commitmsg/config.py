"""Configuration module for commitmsg.

This module provides access to user configuration stored in one of these locations:
1. $COMMITMSG_CONFIG_DIR/commitmsgrc if $COMMITMSG_CONFIG_DIR is defined
2. $XDG_CONFIG_HOME/commitmsg/commitmsgrc if $XDG_CONFIG_HOME is defined
3. $HOME/.commitmsgrc

The configuration is stored in TOML format.
"""

import copy
import logging
import os
import subprocess
from pathlib import Path
from typing import Any, Optional

import tomli

from .classify import validate_comment_char
from .message import AUTO, DEFAULT_COMMENT_CHAR

__all__ = [
    "get_config_path",
    "load_config",
    "get_logger_verbosity",
    "get_logger_path",
    "get_comment_char_preference",
    "get_git_comment_char",
    "resolve_comment_char",
]

# Default configuration values
DEFAULT_CONFIG = {
    "logger": {
        "verbosity": "INFO",  # Default logging level
        "path": str(Path.home() / ".commitmsg"),  # Default logger path
    },
    "message": {
        "comment_char": None,  # Fall back to git's core.commentChar, then "#"
    },
}

# Values that switch comments off entirely
NO_COMMENT_CHAR_VALUES = ("", "none")


def get_config_path() -> Path:
    """Return the path to the user's config file.

    Checks the following locations in order:
    1. $COMMITMSG_CONFIG_DIR/commitmsgrc if $COMMITMSG_CONFIG_DIR is defined
    2. $XDG_CONFIG_HOME/commitmsg/commitmsgrc if $XDG_CONFIG_HOME is defined
    3. Fallback to $HOME/.commitmsgrc

    Returns:
        Path to the config file
    """
    if "COMMITMSG_CONFIG_DIR" in os.environ:
        path = Path(os.environ["COMMITMSG_CONFIG_DIR"]) / "commitmsgrc"
        if path.exists():
            return path

    if "XDG_CONFIG_HOME" in os.environ:
        path = Path(os.environ["XDG_CONFIG_HOME"]) / "commitmsg" / "commitmsgrc"
        if path.exists():
            return path

    return Path.home() / ".commitmsgrc"


def load_config() -> dict[str, Any]:
    """Load configuration from the config file.

    Returns:
        Dict containing the merged configuration (defaults + user config).
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = get_config_path()

    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                user_config = tomli.load(f)

            _merge_configs(config, user_config)
        except (OSError, tomli.TOMLDecodeError) as e:
            logging.warning(f"Error loading config from {config_path}: {e}")

    return config


def _merge_configs(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Recursively merge override dict into base dict.

    Args:
        base: The base configuration dictionary to merge into.
        override: The override configuration dictionary to merge from.

    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            nested_value: dict[str, Any] = value
            _merge_configs(base[key], nested_value)
        else:
            base[key] = value


def get_logger_verbosity() -> str:
    """Get the configured logger verbosity level.

    Returns:
        String representing the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    """
    config = load_config()
    return config["logger"]["verbosity"]


def get_logger_path() -> str:
    """Get the configured logger path, with ~ expanded."""
    config = load_config()
    return os.path.expanduser(config["logger"]["path"])


def _normalize_comment_char(value: str) -> Optional[str]:
    if value.lower() in NO_COMMENT_CHAR_VALUES:
        return None
    if value.lower() == AUTO:
        return AUTO
    return validate_comment_char(value)


def get_comment_char_preference() -> Optional[str]:
    """Get the comment character configured in the rc file.

    Returns:
        A single character, AUTO, "" when comments are switched off, or None if
        the rc file does not set one.

    Raises:
        ValueError: If the configured value is not a single character
    """
    config = load_config()
    value = config["message"]["comment_char"]
    if value is None:
        return None
    normalized = _normalize_comment_char(str(value))
    return "" if normalized is None else normalized


def get_git_comment_char(cwd: Optional[str] = None) -> Optional[str]:
    """Read core.commentChar from git's configuration.

    Returns:
        The configured value, or None if git is unavailable or the key is unset
    """
    try:
        result = subprocess.run(
            ["git", "config", "--get", "core.commentChar"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logging.debug(f"Could not run git to read core.commentChar: {e}")
        return None

    if result.returncode != 0:
        return None
    return result.stdout.rstrip("\n") or None


def resolve_comment_char(
    option: Optional[str] = None, cwd: Optional[str] = None
) -> Optional[str]:
    """Decide which comment character to parse with.

    Checks the following sources in order:
    1. The explicit option (e.g. from the command line)
    2. message.comment_char in the rc file
    3. git's core.commentChar
    4. Default to "#"

    Args:
        option: Explicit value: a character, "auto", or "none"
        cwd: Directory to run git in

    Returns:
        A single character, AUTO, or None when comments are switched off

    Raises:
        ValueError: If the chosen value is not a single character
    """
    if option is not None:
        return _normalize_comment_char(option)

    preference = get_comment_char_preference()
    if preference is not None:
        return preference or None

    git_value = get_git_comment_char(cwd)
    if git_value is not None:
        return _normalize_comment_char(git_value)

    return DEFAULT_COMMENT_CHAR
