"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["ingest", "ingest-folder", "restore", "verify", "list", "show", "delete", "clear", "exit", "help"]

FILE_ID_COMMANDS = ("restore", "verify", "show", "delete")

STYLE = Style.from_dict(
    {
        "prompt": "#2E9AFE bold",
        "command": "#0088ff bold",
    }
)

BLUE = "\033[38;2;46;154;254m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"

LOGO = f"""{BLUE}
  ___ _              _     __   __         _ _
 / __| |_  _  _ _ _ | |__  \\ \\ / /_ _ _  _| | |_
| (__| ' \\| || | ' \\| / /   \\ V / _` | || | |  _|
 \\___|_||_|\\_,_|_||_|_\\_\\    \\_/\\__,_|\\_,_|_|\\__|
{RESET}"""

WELCOME_TITLE = "ChunkVault - Chunked File Storage"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "chunkvault> "

HELP_TEXT = """Available commands:
  ingest <file>                          Split a file into chunks and store it
  ingest-folder <dir>                    Ingest every file directly inside a directory
  restore <file_id> [output_dir] [--strict]
                                         Reassemble a file (default output: configured output dir)
  verify <file_id>                       Check a file's chunks against its checksum without restoring
  list                                   List all stored files
  show <file_id>                         Show a file's details and chunk layout
  delete <file_id>                       Remove a file from the catalog (chunk bytes are kept)
  clear                                  Clear screen and redisplay welcome message
  help                                   Show this help
  exit                                   Exit REPL

Restored files are written as Restored_<original name>; restoring again overwrites.
With --strict a checksum mismatch deletes the restored file instead of keeping it.
Examples:
  ingest ./reports/q3.pdf
  ingest-folder ./reports
  list
  show 1b4e28ba-2fa1-11d2-883f-0016d3cca427
  restore 1b4e28ba-2fa1-11d2-883f-0016d3cca427 ./out --strict"""

SEPARATOR_WIDTH = 110
