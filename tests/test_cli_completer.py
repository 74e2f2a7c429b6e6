"""Tests for ChunkVaultCompleter."""

import pytest

from prompt_toolkit.document import Document

from cli.completer import ChunkVaultCompleter
from cli.constants import COMMANDS

STORED_IDS = [
    "2f1c7d4e-8b0a-4c55-9d3e-6a7b8c9d0e1f",
    "2f9a0000-1111-4222-8333-444455556666",
    "a0b1c2d3-e4f5-4a6b-8c7d-8e9f0a1b2c3d",
]


@pytest.fixture
def completer():
    """Create a ChunkVaultCompleter backed by a fixed id list."""
    return ChunkVaultCompleter(file_ids_provider=lambda: STORED_IDS)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """
    Create a working directory with files and folders, and chdir into it.

    Returns:
        Path to the working directory
    """
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "report.pdf").write_text("content")
    (tmp_path / "docs" / "raw.bin").write_text("content")
    (tmp_path / "data").mkdir()
    (tmp_path / "notes.txt").write_text("content")
    (tmp_path / ".hidden").write_text("content")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def get_completions_list(completer, text):
    """Helper to get list of completion texts from completer."""
    doc = Document(text, len(text))
    return [c.text for c in completer.get_completions(doc, None)]


class TestCommandCompletion:
    """Tests for command name completion."""

    def test_empty_input_shows_all_commands(self, completer):
        """Empty input should suggest all commands."""
        completions = get_completions_list(completer, "")
        for cmd in COMMANDS:
            assert cmd in completions

    def test_partial_command_filters(self, completer):
        """Partial command should filter to matching commands."""
        completions = get_completions_list(completer, "ing")
        assert completions == ["ingest", "ingest-folder"]

    def test_command_completion_case_insensitive(self, completer):
        """Command completion should be case insensitive."""
        completions = get_completions_list(completer, "RES")
        assert completions == ["restore"]


class TestPathCompletion:
    """Tests for path completion in ingest commands."""

    def test_ingest_shows_files_and_directories(self, completer, workdir):
        completions = get_completions_list(completer, "ingest ")
        assert "notes.txt" in completions
        assert "docs/" in completions
        assert "data/" in completions

    def test_hidden_entries_skipped(self, completer, workdir):
        assert ".hidden" not in get_completions_list(completer, "ingest ")
        assert ".hidden" in get_completions_list(completer, "ingest .h")

    def test_partial_path_into_directory(self, completer, workdir):
        completions = get_completions_list(completer, "ingest docs/r")
        assert completions == ["docs/raw.bin", "docs/report.pdf"]

    def test_ingest_folder_shows_directories_only(self, completer, workdir):
        completions = get_completions_list(completer, "ingest-folder ")
        assert completions == ["data/", "docs/"]

    def test_missing_directory_yields_nothing(self, completer, workdir):
        assert get_completions_list(completer, "ingest nowhere/") == []

    def test_restore_output_dir_completion(self, completer, workdir):
        completions = get_completions_list(completer, f"restore {STORED_IDS[0]} d")
        assert completions == ["data/", "docs/"]

    def test_no_completion_after_last_argument(self, completer, workdir):
        assert get_completions_list(completer, "ingest notes.txt ") == []


class TestFileIdCompletion:
    """Tests for stored file id completion."""

    @pytest.mark.parametrize("command", ["restore", "verify", "show", "delete"])
    def test_file_id_commands_complete_ids(self, completer, command):
        assert get_completions_list(completer, f"{command} ") == STORED_IDS

    def test_prefix_filters_ids(self, completer):
        completions = get_completions_list(completer, "show 2f")
        assert completions == STORED_IDS[:2]

    def test_list_takes_no_completion(self, completer):
        assert get_completions_list(completer, "list ") == []

    def test_without_provider(self):
        assert get_completions_list(ChunkVaultCompleter(), "show ") == []
