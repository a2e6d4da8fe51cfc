"""
Exception classes for yt-sync.

This module defines all custom exceptions used throughout the application.
Each exception is designed to provide clear, actionable error messages
and to distinguish between different failure modes.

Exception Hierarchy:
    YtSyncError (base)
        ConfigError - Configuration file issues
        ListingError - Remote playlist listing issues
            ListingServiceError - yt-dlp could not produce a listing
            ListingParseError - A listing record could not be parsed
        SyncError - Target directory issues during a sync pass

Fetch failures are intentionally absent: a failed download is reported
through a FetchResult and never raised.
"""

from typing import Any, Dict, Optional


class YtSyncError(Exception):
    """
    Base exception for all yt-sync errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch all yt-sync errors with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., playlist id, path).

    Example:
        try:
            synchronizer.sync_playlist(playlist)
        except YtSyncError as e:
            logger.error(f"Sync failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'playlist_id': Playlist involved in the error
                     - 'path': Filesystem path involved in the error
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(YtSyncError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that stops the run before any playlist
    is processed.

    Common causes:
        - config.toml cannot be read or written
        - config.toml has invalid TOML syntax
        - An [[items]] entry is missing 'id' or 'location'
        - Invalid field values (e.g., unknown match_mode)

    Example:
        raise ConfigError(
            "Entry 2 in 'items' is missing 'location'",
            details={'file_path': '/path/to/config.toml', 'index': 2}
        )
    """
    pass


class ListingError(YtSyncError):
    """
    Raised when the item list of a playlist cannot be obtained.

    Fatal to the current sync pass. Whether the rest of the run continues
    is decided by the caller (see PlaylistSynchronizer.sync_all).
    """

    def __init__(
        self,
        message: str,
        playlist_id: str = "",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Initialize listing error.

        Args:
            message: Human-readable error description.
            playlist_id: Playlist whose listing failed.
            details: Optional additional context.
        """
        details = dict(details or {})
        if playlist_id:
            details.setdefault('playlist_id', playlist_id)
        super().__init__(message, details)
        self.playlist_id = playlist_id


class ListingServiceError(ListingError):
    """
    Raised when yt-dlp fails to extract the playlist.

    Common causes:
        - Network connectivity issues
        - Playlist is private, deleted or the id is wrong
        - Extractor breakage in the installed yt-dlp version
    """
    pass


class ListingParseError(ListingError):
    """
    Raised when a record of the flat playlist listing is malformed.

    A single bad record aborts the whole listing; no partial list
    is ever returned.
    """
    pass


class SyncError(YtSyncError):
    """
    Raised when the target directory of a sync pass cannot be prepared.

    Common causes:
        - Permission denied when creating the directory
        - Location points to an existing regular file
    """
    pass
