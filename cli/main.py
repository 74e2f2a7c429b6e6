"""CLI entry point."""

import sys
import os

from cli.commands import get_config
from cli.parser import ParseError, parse_tokens
from cli.repl import dispatch_command, repl_loop
from common.exceptions import ChunkVaultError
from common.logging_config import setup_logging


def main() -> None:
    """Entry point for CLI.

    Without arguments starts the interactive REPL; otherwise runs the single
    command given on the command line (e.g. ``chunkvault list``).
    """
    args = sys.argv[1:]
    debug = '--debug' in args
    if debug:
        args = [arg for arg in args if arg != '--debug']

    log_level = 'DEBUG' if debug else os.getenv('LOG_LEVEL', 'INFO')

    try:
        log_file = get_config().get_log_file()
    except ChunkVaultError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logger = setup_logging('cli', log_level=log_level, log_file=log_file)

    if debug:
        logger.info("Debug logging enabled")

    if not args:
        logger.info("CLI starting...")
        try:
            repl_loop()
        except Exception as e:
            logger.error(f"CLI error: {e}", exc_info=True)
            raise
        finally:
            logger.info("CLI exiting")
        return

    try:
        print(dispatch_command(parse_tokens(args)))
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except ChunkVaultError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
