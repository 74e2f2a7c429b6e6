"""Command parser for CLI input."""

import shlex
import uuid
from typing import List

from cli.models import (
    CommandRequest,
    DeleteCommand,
    IngestCommand,
    IngestFolderCommand,
    ListCommand,
    RestoreCommand,
    ShowCommand,
    VerifyCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    return parse_tokens(tokens)


def parse_tokens(tokens: List[str]) -> CommandRequest:
    """Parse an already-split argument list (e.g. sys.argv[1:])."""
    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0].lower()
    args = tokens[1:]

    if command_name == "ingest":
        return _parse_ingest(args)
    elif command_name == "ingest-folder":
        return _parse_ingest_folder(args)
    elif command_name == "restore":
        return _parse_restore(args)
    elif command_name == "verify":
        return VerifyCommand(file_id=_parse_single_file_id("verify", args))
    elif command_name == "list":
        return _parse_list(args)
    elif command_name == "show":
        return ShowCommand(file_id=_parse_single_file_id("show", args))
    elif command_name == "delete":
        return DeleteCommand(file_id=_parse_single_file_id("delete", args))
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_ingest(args: list[str]) -> IngestCommand:
    """Parse 'ingest <file>' command."""
    if len(args) != 1:
        raise ParseError("ingest requires exactly 1 argument: <file>")
    return IngestCommand(file_path=args[0])


def _parse_ingest_folder(args: list[str]) -> IngestFolderCommand:
    """Parse 'ingest-folder <dir>' command."""
    if len(args) != 1:
        raise ParseError("ingest-folder requires exactly 1 argument: <dir>")
    return IngestFolderCommand(dir_path=args[0])


def _parse_restore(args: list[str]) -> RestoreCommand:
    """Parse 'restore <file_id> [output_dir] [--strict]' command."""
    strict = "--strict" in args
    positional = [arg for arg in args if arg != "--strict"]

    if not 1 <= len(positional) <= 2:
        raise ParseError("restore requires <file_id> and optionally [output_dir]")

    file_id = _validate_file_id(positional[0])
    output_dir = positional[1] if len(positional) > 1 else None

    return RestoreCommand(file_id=file_id, output_dir=output_dir, strict=strict)


def _parse_list(args: list[str]) -> ListCommand:
    """Parse 'list' command."""
    if args:
        raise ParseError("list takes no arguments")
    return ListCommand()


def _parse_single_file_id(command_name: str, args: list[str]) -> str:
    if len(args) != 1:
        raise ParseError(f"{command_name} requires exactly 1 argument: <file_id>")
    return _validate_file_id(args[0])


def _validate_file_id(value: str) -> str:
    """Check value is a UUID and return it in canonical form."""
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise ParseError(f"Invalid File ID format: {value}")
