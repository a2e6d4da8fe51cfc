"""
Configuration management package for yt-sync

Provides the TOML-backed settings: playlist entries plus download, sync and
logging sections. The usual entry point is:

    from yt_sync.config import load_settings

    settings = load_settings("/path/to/config.toml")
"""

from .settings import (
    load_settings,
    Settings,
    PlaylistRef,
    DEFAULT_CONFIG_PATH,
    MATCH_MODES
)

__all__ = [
    'load_settings',        # Build settings from a given path (default path if None)
    'Settings',
    'PlaylistRef',
    'DEFAULT_CONFIG_PATH',
    'MATCH_MODES'
]
