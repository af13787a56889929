"""REPL with prompt_toolkit for user interaction."""

import os
import sys
from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from cli.commands import (
    close_context,
    get_context,
    handle_cd,
    handle_history,
    handle_list,
    handle_mkdir,
    handle_pwd,
    handle_queue,
    handle_rm,
    handle_rmdir,
    handle_share,
    handle_shares,
    handle_unqueue,
    handle_unshare,
    handle_upload,
    handle_uploads,
)
from cli.completer import DropVaultCompleter
from cli.constants import (
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
    ChangeDirCommand,
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
from cli.parser import ParseError, parse_command

HANDLERS = {
    ListCommand: handle_list,
    ChangeDirCommand: handle_cd,
    PwdCommand: handle_pwd,
    MakeDirCommand: handle_mkdir,
    RemoveDirCommand: handle_rmdir,
    RemoveFileCommand: handle_rm,
    QueueCommand: handle_queue,
    UnqueueCommand: handle_unqueue,
    UploadsCommand: handle_uploads,
    UploadCommand: handle_upload,
    ShareCommand: handle_share,
    UnshareCommand: handle_unshare,
    SharesCommand: handle_shares,
    HistoryCommand: handle_history,
}


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    print(LOGO)
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def dispatch_command(cmd_obj, context=None) -> str:
    """Dispatch parsed command to appropriate handler."""
    handler = HANDLERS.get(type(cmd_obj))
    if handler is None:
        return f"Unknown command type: {type(cmd_obj)}"
    return handler(cmd_obj, context=context)


def prompt_message(context) -> list:
    path = "/".join(entry.name for entry in context.folder_path)
    return [("class:prompt", PROMPT_TEXT), ("", ":"), ("class:path", path), ("", "> ")]


def repl_loop() -> None:
    """Start interactive REPL with prompt_toolkit."""
    context = get_context()
    session: PromptSession = PromptSession(
        completer=DropVaultCompleter(lambda: context),
        history=InMemoryHistory(),
        style=STYLE,
    )

    clear_screen()
    show_welcome()

    try:
        while True:
            try:
                user_input = session.prompt(prompt_message(context))

                if not user_input.strip():
                    continue

                if user_input.strip() == "exit":
                    print("Goodbye!")
                    break

                if user_input.strip() == "help":
                    print(HELP_TEXT)
                    continue

                if user_input.strip() == "clear":
                    clear_screen()
                    show_welcome()
                    continue

                cmd_obj = parse_command(user_input)
                print(dispatch_command(cmd_obj, context=context))

            except ParseError as e:
                print(f"Error: {e}")
            except KeyboardInterrupt:
                continue
            except EOFError:
                print("\nGoodbye!")
                break
    finally:
        close_context()
