"""REPL with prompt_toolkit for user interaction."""

import os
import sys
from typing import List

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from cli.commands import (
    get_processor,
    handle_delete,
    handle_ingest,
    handle_ingest_folder,
    handle_list,
    handle_restore,
    handle_show,
    handle_verify,
)
from cli.completer import ChunkVaultCompleter
from cli.constants import (
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
    DeleteCommand,
    IngestCommand,
    IngestFolderCommand,
    ListCommand,
    RestoreCommand,
    ShowCommand,
    VerifyCommand,
)
from cli.parser import ParseError, parse_command
from common.exceptions import ChunkVaultError
from common.logging_config import get_logger

logger = get_logger(__name__)


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_logo() -> None:
    """Display logo with ANSI colors."""
    print(LOGO)


def dispatch_command(cmd_obj) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, IngestCommand):
        return handle_ingest(cmd_obj)
    elif isinstance(cmd_obj, IngestFolderCommand):
        return handle_ingest_folder(cmd_obj)
    elif isinstance(cmd_obj, RestoreCommand):
        return handle_restore(cmd_obj)
    elif isinstance(cmd_obj, VerifyCommand):
        return handle_verify(cmd_obj)
    elif isinstance(cmd_obj, ListCommand):
        return handle_list(cmd_obj)
    elif isinstance(cmd_obj, ShowCommand):
        return handle_show(cmd_obj)
    elif isinstance(cmd_obj, DeleteCommand):
        return handle_delete(cmd_obj)
    else:
        return f"Unknown command type: {type(cmd_obj)}"


def _stored_file_ids() -> List[str]:
    try:
        return [f.file_id for f in get_processor().get_all_files()]
    except ChunkVaultError as e:
        logger.debug(f"File id completion unavailable: {e}")
        return []


def repl_loop() -> None:
    """Start interactive REPL with prompt_toolkit."""
    completer = ChunkVaultCompleter(file_ids_provider=_stored_file_ids)
    history = InMemoryHistory()
    session: PromptSession = PromptSession(
        completer=completer, history=history, style=STYLE
    )

    clear_screen()
    show_logo()
    print(WELCOME_TITLE)
    print(WELCOME_HELP)

    while True:
        try:
            user_input = session.prompt([("class:prompt", PROMPT_TEXT)])

            if not user_input.strip():
                continue

            if user_input.strip() == "exit":
                print("Exiting application...")
                break

            if user_input.strip() == "help":
                print(HELP_TEXT)
                continue

            if user_input.strip() == "clear":
                clear_screen()
                show_logo()
                print(WELCOME_TITLE)
                print(WELCOME_HELP)
                continue

            cmd_obj = parse_command(user_input)
            result = dispatch_command(cmd_obj)
            print(result)

        except ParseError as e:
            print(f"Error: {e}")
        except ChunkVaultError as e:
            logger.debug("Command failed", exc_info=True)
            print(f"Error: {e}")
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nExiting application...")
            break
