"""Tests for CLI command parsing."""

import pytest

from cli.models import (
    DeleteCommand,
    IngestCommand,
    IngestFolderCommand,
    ListCommand,
    RestoreCommand,
    ShowCommand,
    VerifyCommand,
)
from cli.parser import ParseError, parse_command, parse_tokens

FILE_ID = "2f1c7d4e-8b0a-4c55-9d3e-6a7b8c9d0e1f"


def test_parse_ingest():
    assert parse_command("ingest report.pdf") == IngestCommand(file_path="report.pdf")


def test_parse_ingest_quoted_path():
    cmd = parse_command('ingest "my files/annual report.pdf"')
    assert cmd.file_path == "my files/annual report.pdf"


def test_parse_ingest_folder():
    assert parse_command("ingest-folder ./docs") == IngestFolderCommand(dir_path="./docs")


def test_command_name_case_insensitive():
    assert parse_command("LIST") == ListCommand()


@pytest.mark.parametrize("line", ["ingest", "ingest a b", "ingest-folder", "list extra"])
def test_wrong_argument_count(line):
    with pytest.raises(ParseError):
        parse_command(line)


def test_parse_restore_defaults():
    assert parse_command(f"restore {FILE_ID}") == RestoreCommand(file_id=FILE_ID)


def test_parse_restore_with_output_dir_and_strict():
    cmd = parse_command(f"restore --strict {FILE_ID} out")
    assert cmd == RestoreCommand(file_id=FILE_ID, output_dir="out", strict=True)


def test_parse_restore_too_many_arguments():
    with pytest.raises(ParseError):
        parse_command(f"restore {FILE_ID} out extra")


def test_file_id_is_canonicalized():
    cmd = parse_command(f"show {FILE_ID.upper()}")
    assert cmd == ShowCommand(file_id=FILE_ID)


@pytest.mark.parametrize("name, expected", [
    ("verify", VerifyCommand(file_id=FILE_ID)),
    ("show", ShowCommand(file_id=FILE_ID)),
    ("delete", DeleteCommand(file_id=FILE_ID)),
])
def test_file_id_commands(name, expected):
    assert parse_command(f"{name} {FILE_ID}") == expected


@pytest.mark.parametrize("name", ["restore", "verify", "show", "delete"])
def test_invalid_file_id(name):
    with pytest.raises(ParseError, match="Invalid File ID format"):
        parse_command(f"{name} not-a-uuid")


def test_unknown_command():
    with pytest.raises(ParseError, match="Unknown command"):
        parse_command("upload file.txt")


@pytest.mark.parametrize("line", ["", "   "])
def test_empty_command(line):
    with pytest.raises(ParseError):
        parse_command(line)


def test_unbalanced_quotes():
    with pytest.raises(ParseError, match="Invalid syntax"):
        parse_command('ingest "unterminated')


def test_parse_tokens_from_argv():
    assert parse_tokens(["ingest", "a b.txt"]) == IngestCommand(file_path="a b.txt")
    with pytest.raises(ParseError):
        parse_tokens([])
