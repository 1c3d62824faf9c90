"""Utility functions and helpers for photo-organizer."""

__all__ = [
    "setup_logging",
    "compute_content_hash",
    "format_mod_time",
]

from .logging import setup_logging
from .file_utils import compute_content_hash, format_mod_time
