"""Utility functions for CLI output."""

from datetime import datetime


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def truncate_string(value: str, max_length: int) -> str:
    """Shorten value to max_length characters, marking the cut with '...'."""
    if len(value) <= max_length:
        return value
    return value[:max_length - 3] + "..."


def format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M")


def format_elapsed(seconds: float) -> str:
    return f"{seconds * 1000:.0f} ms"
