"""
Utility package for yt-sync

Logging configuration and filename/formatting helpers shared by the
other packages.
"""

from .helpers import sanitize_filename, expected_filename, audio_extension, ensure_directory
from .logger import get_logger, setup_logging

__all__ = [
    'sanitize_filename',
    'expected_filename',
    'audio_extension',
    'ensure_directory',
    'get_logger',
    'setup_logging'
]
