"""
Flat playlist listing through yt-dlp

This module retrieves the current, ordered list of items of a remote playlist
without downloading anything. yt-dlp is asked for a flat extraction
("in_playlist"), which returns one lightweight entry per video containing at
least its id and, for YouTube, its title.

Listing Contract:
- One extraction per call; the remote service returns the whole flat list
- Entries are parsed independently, but a single malformed entry aborts the
  call: callers either get the complete list or an exception
- Order is preserved exactly as returned; no reordering, no deduplication

Error Mapping:
- Any yt-dlp extraction error, or an empty extraction result, becomes a
  ListingServiceError
- A malformed entry becomes a ListingParseError
"""

from typing import Any, Dict, List, Optional

import yt_dlp
from yt_dlp.utils import YoutubeDLError

from ..config.settings import Settings
from ..exceptions import ListingParseError, ListingServiceError
from ..utils.helpers import build_url
from ..utils.logger import get_logger
from .models import RemoteItem


class YtDlpLogCollector:
    """
    Logger object handed to yt-dlp to capture its output

    yt-dlp calls debug/info/warning/error on the object passed as the
    'logger' option. Messages are kept in order so the caller can attach
    them to a result, and forwarded to the module logger at DEBUG level
    (file only).
    """

    def __init__(self, logger):
        self.logger = logger
        self.messages: List[str] = []

    def _record(self, prefix: str, msg: str) -> None:
        line = f"{prefix}{msg}" if prefix else msg
        self.messages.append(line)
        self.logger.debug(f"yt-dlp: {line}")

    def debug(self, msg: str) -> None:
        # Regular screen output also arrives here when a logger is set
        self._record("", msg)

    def info(self, msg: str) -> None:
        self._record("", msg)

    def warning(self, msg: str) -> None:
        self._record("WARNING: ", msg)

    def error(self, msg: str) -> None:
        self._record("", msg)


class PlaylistLister:
    """
    Remote playlist lister backed by yt-dlp flat extraction

    Attributes:
        playlist_url_template: URL template with an {id} placeholder
        require_titles: Whether every entry must carry a title
    """

    def __init__(
        self,
        playlist_url_template: str = "https://www.youtube.com/playlist?list={id}",
        require_titles: bool = True
    ):
        """
        Initialize the lister

        Args:
            playlist_url_template: URL template with an {id} placeholder
            require_titles: Whether entries without a title are malformed
        """
        self.logger = get_logger(__name__)
        self.playlist_url_template = playlist_url_template
        self.require_titles = require_titles

    @classmethod
    def from_settings(cls, settings: Settings) -> "PlaylistLister":
        """
        Create a lister configured from application settings

        Titles are required only for the exact match mode.

        Args:
            settings: Loaded settings instance

        Returns:
            Configured PlaylistLister
        """
        return cls(
            playlist_url_template=settings.download.playlist_url_template,
            require_titles=settings.download.match_mode == 'exact'
        )

    def _get_ydl_options(self, collector: YtDlpLogCollector) -> Dict[str, Any]:
        """
        Build yt-dlp options for a flat, download-free extraction

        Args:
            collector: Logger object receiving yt-dlp output

        Returns:
            Dictionary of yt-dlp options
        """
        return {
            'extract_flat': 'in_playlist',  # One lightweight entry per video
            'skip_download': True,
            'quiet': True,
            'no_warnings': False,
            'noprogress': True,
            'ignoreerrors': False,           # A broken listing must fail loudly
            'logger': collector,
        }

    def list_items(self, playlist_id: str) -> List[RemoteItem]:
        """
        List the items of a playlist in remote order

        Args:
            playlist_id: Remote playlist identifier, passed through unvalidated

        Returns:
            List of RemoteItem in the order returned by the remote service

        Raises:
            ListingServiceError: If yt-dlp cannot extract the playlist
            ListingParseError: If any entry is malformed
        """
        url = build_url(self.playlist_url_template, playlist_id)
        collector = YtDlpLogCollector(self.logger)

        self.logger.debug(f"Listing playlist {playlist_id}: {url}")

        try:
            with yt_dlp.YoutubeDL(self._get_ydl_options(collector)) as ydl:
                info = ydl.extract_info(url, download=False)
                # Entries may be lazy; materialize them while the instance is open
                entries = self._get_entries(info, playlist_id)
        except YoutubeDLError as e:
            raise ListingServiceError(
                f"Failed to list playlist {playlist_id}: {e}",
                playlist_id=playlist_id,
                details={'url': url, 'output': collector.messages, 'original_error': e}
            ) from e

        items = []
        for position, entry in enumerate(entries, 1):
            try:
                items.append(RemoteItem.from_entry(entry, require_title=self.require_titles))
            except ValueError as e:
                raise ListingParseError(
                    f"Malformed entry {position} in playlist {playlist_id}: {e}",
                    playlist_id=playlist_id,
                    details={'url': url, 'position': position}
                ) from e

        self.logger.debug(f"Playlist {playlist_id} lists {len(items)} items")
        return items

    def _get_entries(self, info: Optional[Dict[str, Any]], playlist_id: str) -> List[Any]:
        """
        Extract the entry list from an extraction result

        Args:
            info: Result of YoutubeDL.extract_info
            playlist_id: Playlist identifier for error reporting

        Returns:
            List of raw entries

        Raises:
            ListingServiceError: If there is no result or it is not a playlist
        """
        if not info:
            raise ListingServiceError(
                f"yt-dlp returned no information for playlist {playlist_id}",
                playlist_id=playlist_id
            )

        entries = info.get('entries')
        if entries is None:
            raise ListingServiceError(
                f"Result for {playlist_id} is not a playlist",
                playlist_id=playlist_id,
                details={'type': info.get('_type')}
            )

        return list(entries)
