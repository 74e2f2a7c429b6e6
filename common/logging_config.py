import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ComponentFilter(logging.Filter):
    """Tag every record with the component that configured logging."""

    def __init__(self, component_name: str):
        super().__init__()
        self.component_name = component_name

    def filter(self, record: logging.LogRecord) -> bool:
        """Attach the component name; never drops records."""
        if not hasattr(record, 'component'):
            record.component = self.component_name
        return True


def _resolve_level(log_level: Optional[str]) -> int:
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO')
    return getattr(logging, log_level.upper(), logging.INFO)


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Handlers are attached to the root logger so that module loggers created
    with get_logger(__name__) (catalog, providers, processor) share them.

    Args:
        component_name: Name of the component (e.g., 'cli')
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO
        log_file: Optional file that receives the same records as stdout

    Returns:
        Configured logger instance for the component
    """
    level = _resolve_level(log_level)

    root = logging.getLogger()
    root.setLevel(level)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if getattr(root, '_chunkvault_configured', False):
        for handler in root.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(ComponentFilter(component_name))
    root.addHandler(handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(ComponentFilter(component_name))
        root.addHandler(file_handler)

    root._chunkvault_configured = True

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
