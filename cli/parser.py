"""Command parser for CLI input."""

import shlex
from typing import Optional

from common.constants import ACCESS_LEVELS, EXPIRATION_OPTIONS
from cli.models import (
    ChangeDirCommand,
    CommandRequest,
    HistoryCommand,
    ListCommand,
    MakeDirCommand,
    PwdCommand,
    QueueCommand,
    RemoveDirCommand,
    RemoveFileCommand,
    ShareCommand,
    SharesCommand,
    UnqueueCommand,
    UnshareCommand,
    UploadCommand,
    UploadsCommand,
)

SHARE_OPTIONS = ("--access", "--expires", "--password", "--email")


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a command object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        One of the command dataclasses from cli.models

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]
    args = tokens[1:]

    if command_name == "ls":
        _expect_no_args(command_name, args)
        return ListCommand()
    elif command_name == "pwd":
        _expect_no_args(command_name, args)
        return PwdCommand()
    elif command_name == "cd":
        return ChangeDirCommand(target=_single_arg(command_name, args, "<folder|..|/>"))
    elif command_name == "mkdir":
        return MakeDirCommand(name=_single_arg(command_name, args, "<name>"))
    elif command_name == "rmdir":
        return RemoveDirCommand(name=_single_arg(command_name, args, "<name>"))
    elif command_name == "rm":
        return RemoveFileCommand(name=_single_arg(command_name, args, "<file>"))
    elif command_name == "queue":
        if not args:
            raise ParseError("queue requires at least one file path")
        return QueueCommand(paths=tuple(args))
    elif command_name == "unqueue":
        return UnqueueCommand(upload_id=_single_arg(command_name, args, "<upload-id>"))
    elif command_name == "uploads":
        _expect_no_args(command_name, args)
        return UploadsCommand()
    elif command_name == "upload":
        _expect_no_args(command_name, args)
        return UploadCommand()
    elif command_name == "share":
        return _parse_share(args)
    elif command_name == "unshare":
        return UnshareCommand(share_id=_single_arg(command_name, args, "<share-id>"))
    elif command_name == "shares":
        _expect_no_args(command_name, args)
        return SharesCommand()
    elif command_name == "history":
        return _parse_history(args)
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _expect_no_args(command_name: str, args: list[str]) -> None:
    if args:
        raise ParseError(f"{command_name} takes no arguments")


def _single_arg(command_name: str, args: list[str], usage: str) -> str:
    if len(args) != 1:
        raise ParseError(f"{command_name} requires exactly 1 argument: {usage}")
    return args[0]


def _parse_share(args: list[str]) -> ShareCommand:
    """Parse 'share file|folder <name> [--access A] [--expires E] [--password P] [--email a,b]'."""
    if len(args) < 2:
        raise ParseError("share requires an item type (file|folder) and a name")

    item_type, name = args[0], args[1]
    if item_type not in ("file", "folder"):
        raise ParseError(f"share item type must be 'file' or 'folder', got '{item_type}'")

    options: dict[str, str] = {}
    rest = args[2:]
    index = 0
    while index < len(rest):
        option = rest[index]
        if option not in SHARE_OPTIONS:
            raise ParseError(f"Unknown share option: {option}")
        if index + 1 >= len(rest):
            raise ParseError(f"{option} requires a value")
        options[option] = rest[index + 1]
        index += 2

    access = options.get("--access", "view")
    if access not in ACCESS_LEVELS:
        raise ParseError(f"--access must be one of: {', '.join(ACCESS_LEVELS)}")

    expiration, custom_expiration = _parse_expires(options.get("--expires"))
    emails = tuple(e.strip() for e in options.get("--email", "").split(",") if e.strip())

    return ShareCommand(
        item_type=item_type,
        name=name,
        access=access,
        expiration=expiration,
        custom_expiration=custom_expiration,
        password=options.get("--password"),
        emails=emails,
    )


def _parse_expires(value: Optional[str]) -> tuple[str, Optional[str]]:
    """'7days' -> ('7days', None); '2030-01-31' -> ('custom', '2030-01-31')."""
    if value is None:
        return "never", None
    if value == "custom":
        return "custom", None
    if value in EXPIRATION_OPTIONS:
        return value, None
    return "custom", value


def _parse_history(args: list[str]) -> HistoryCommand:
    if not args:
        return HistoryCommand()
    entry_type = _single_arg("history", args, "[upload|remove]")
    if entry_type == "all":
        return HistoryCommand()
    if entry_type not in ("upload", "remove"):
        raise ParseError("history filter must be 'upload', 'remove' or 'all'")
    return HistoryCommand(entry_type=entry_type)
