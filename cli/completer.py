"""Custom completer for DropVault CLI with folder and file name completion."""

from typing import Callable, Iterable, List

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS, FILE_ARG_COMMANDS, FOLDER_ARG_COMMANDS
from vault.context import VaultContext


class DropVaultCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Subfolder names of the current folder for 'cd' and 'rmdir'
    - File names of the current folder for 'rm'
    - Item names after 'share file' / 'share folder'
    """

    def __init__(self, context_provider: Callable[[], VaultContext]):
        self.context_provider = context_provider

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        current_word = "" if is_typing_new_token else tokens[-1]
        arg_index = len(tokens) - 1 if not is_typing_new_token else len(tokens)

        if command in FOLDER_ARG_COMMANDS and arg_index == 1:
            candidates = self._folder_names()
            if command == "cd":
                candidates = ["..", "/"] + candidates
            yield from self._complete_from(current_word, candidates)
        elif command in FILE_ARG_COMMANDS and arg_index == 1:
            yield from self._complete_from(current_word, self._file_names())
        elif command == "share":
            if arg_index == 1:
                yield from self._complete_from(current_word, ["file", "folder"])
            elif arg_index == 2:
                names = self._folder_names() if tokens[1] == "folder" else self._file_names()
                yield from self._complete_from(current_word, names)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_from(self, partial: str, candidates: List[str]) -> Iterable[Completion]:
        partial_lower = partial.lower()
        for candidate in candidates:
            if candidate.lower().startswith(partial_lower):
                yield Completion(candidate, start_position=-len(partial))

    def _folder_names(self) -> List[str]:
        return [folder.name for folder in self.context_provider().listing().folders]

    def _file_names(self) -> List[str]:
        return sorted(entry.name for entry in self.context_provider().listing().files)
