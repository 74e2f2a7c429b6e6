"""Custom completer for the chunkvault CLI with path and file id autocompletion."""

from pathlib import Path
from typing import Callable, Iterable, List, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS, FILE_ID_COMMANDS


class ChunkVaultCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - File path completion for 'ingest'
    - Directory completion for 'ingest-folder' and the restore output dir
    - Stored file id completion for restore/verify/show/delete
    """

    def __init__(self, file_ids_provider: Optional[Callable[[], List[str]]] = None):
        """
        Args:
            file_ids_provider: Callable returning the ids of stored files
        """
        self.file_ids_provider = file_ids_provider

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on cursor position and context.
        """
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        current_word = "" if is_typing_new_token else tokens[-1]
        arg_position = len(tokens) - 1 if is_typing_new_token else len(tokens) - 2

        if command == "ingest" and arg_position == 0:
            yield from self._complete_paths(current_word, directories_only=False)
        elif command == "ingest-folder" and arg_position == 0:
            yield from self._complete_paths(current_word, directories_only=True)
        elif command in FILE_ID_COMMANDS and arg_position == 0:
            yield from self._complete_file_ids(current_word)
        elif command == "restore" and arg_position == 1:
            yield from self._complete_paths(current_word, directories_only=True)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_paths(self, partial: str, directories_only: bool) -> Iterable[Completion]:
        """
        Complete filesystem paths relative to the current directory.

        Directories are offered with a trailing '/' so completion can continue
        into them.
        """
        head, sep, prefix = partial.rpartition("/")
        dir_part = head + sep

        search_dir = Path(dir_part or ".").expanduser()
        if not search_dir.is_dir():
            return

        for item in sorted(search_dir.iterdir(), key=lambda p: p.name):
            if not item.name.startswith(prefix):
                continue
            if item.name.startswith(".") and not prefix.startswith("."):
                continue
            is_dir = item.is_dir()
            if directories_only and not is_dir:
                continue
            candidate = item.name + ("/" if is_dir else "")
            yield Completion(dir_part + candidate, start_position=-len(partial))

    def _complete_file_ids(self, partial: str) -> Iterable[Completion]:
        """Complete ids of files in the catalog."""
        if self.file_ids_provider is None:
            return
        for file_id in self.file_ids_provider():
            if file_id.startswith(partial):
                yield Completion(file_id, start_position=-len(partial))
