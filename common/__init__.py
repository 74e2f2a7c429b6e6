"""Shared constants, exceptions, logging and checksum helpers."""
