"""Utility helper functions."""

import uuid
from datetime import datetime, timezone


def generate_uuid() -> str:
    """
    Generate a new UUID4 string.

    Returns:
        UUID4 string
    """
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
