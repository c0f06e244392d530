#!/usr/bin/env python3

import json
import logging
import os
from typing import Any, Dict, Optional

import click

from .message import AUTO, CommitMessage
from .trailers import Trailer


def configure_logging(log_file: str = "commitmsg.log") -> None:
    """Configure logging to write to both a file and stderr.

    The log level is determined from the configuration file.
    It can be overridden by setting the COMMITMSG_DEBUG_LEVEL environment variable,
    and COMMITMSG_DEBUG forces DEBUG.
    Example: COMMITMSG_DEBUG=1 commitmsg show .git/COMMIT_EDITMSG

    The log directory is read from the configuration file's logger.path setting.
    By default, logs are written to $HOME/.commitmsg.
    """
    from .config import get_logger_path, get_logger_verbosity

    log_dir = get_logger_path()
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, log_file)

    log_level_str = os.environ.get("COMMITMSG_DEBUG_LEVEL") or get_logger_verbosity()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    # Convert string to logging level, default to INFO if invalid
    log_level = log_level_map.get(log_level_str.upper(), logging.INFO)

    if os.environ.get("COMMITMSG_DEBUG"):
        log_level = logging.DEBUG

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    file_handler = logging.FileHandler(log_path)
    file_handler.setLevel(log_level)

    # StreamHandler writes to stderr, stdout is reserved for command output
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.debug(f"Logging configured. Log file: {log_path}")


def load_message(text: str, comment_char: Optional[str]) -> CommitMessage:
    """Parse text with the comment character resolved from option, config and git."""
    from .config import resolve_comment_char

    try:
        resolved = resolve_comment_char(comment_char)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    message = CommitMessage.parse(text, resolved)
    if resolved == AUTO:
        logging.info(f"Detected comment character: {message.get_comment_char()!r}")
    return message


def read_message(file: Any) -> str:
    # Decode the raw bytes ourselves, text mode would turn CRLF into LF
    return file.read().decode("utf-8")


def message_to_dict(message: CommitMessage) -> Dict[str, Any]:
    scissors = message.get_scissors()
    return {
        "subject": message.get_subject(),
        "bodies": message.get_body(),
        "comments": [
            {"text": comment.text, "position": comment.position}
            for comment in message.get_comments()
        ],
        "trailers": [
            {"key": trailer.key, "value": trailer.value}
            for trailer in message.get_trailers()
        ],
        "scissors": scissors.text if scissors is not None else None,
        "comment_char": message.get_comment_char(),
    }


comment_char_option = click.option(
    "--comment-char",
    default=None,
    help="Comment character, 'auto' to detect it, or 'none' (default: from config or git)",
)


@click.group()
@click.option("--log/--no-log", default=False, help="Write logs to the configured log file")
def cli(log: bool) -> None:
    """Parse and edit git commit messages."""
    if log:
        configure_logging()


@cli.command()
@click.argument("file", type=click.File("rb"), default="-")
@comment_char_option
def show(file: Any, comment_char: Optional[str]) -> None:
    """Print the subject, bodies, comments, trailers and scissors as JSON."""
    message = load_message(read_message(file), comment_char)
    click.echo(json.dumps(message_to_dict(message), indent=2, ensure_ascii=False))


@cli.command()
@click.argument("file", type=click.File("rb"), default="-")
@click.option("--key", default=None, help="Only print trailers with this key (any case)")
@comment_char_option
def trailers(file: Any, key: Optional[str], comment_char: Optional[str]) -> None:
    """Print the trailers of a commit message."""
    message = load_message(read_message(file), comment_char)
    for trailer in message.get_trailers():
        if key is None or trailer.has_key(key):
            click.echo(str(trailer))


@cli.command("add-trailer")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.argument("key")
@click.argument("value")
@click.option("--in-place", is_flag=True, help="Write the result back to the file")
@comment_char_option
def add_trailer(
    path: str, key: str, value: str, in_place: bool, comment_char: Optional[str]
) -> None:
    """Append a trailer to the trailer block of a commit message file."""
    # newline="" keeps CRLF line endings intact in both directions
    with open(path, "r", encoding="utf-8", newline="") as f:
        message = load_message(f.read(), comment_char)

    try:
        updated = message.replace_trailers(
            [*message.get_trailers(), Trailer(key, value.strip())]
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    logging.info(f"Added trailer {key}: {value} to {path}")

    if in_place:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(updated.to_text())
    else:
        click.echo(updated.to_text(), nl=False)
