"""
YouTube integration package for yt-sync

- PlaylistLister: flat playlist listing through yt-dlp
- AudioDownloader: single-item audio download with embedded thumbnail
"""

from .models import RemoteItem
from .lister import PlaylistLister
from .downloader import AudioDownloader, FetchResult

__all__ = [
    'RemoteItem',
    'PlaylistLister',
    'AudioDownloader',
    'FetchResult'
]
