"""
Playlist synchronization package for yt-sync
"""

from .synchronizer import PlaylistSynchronizer, SyncReport, PlaylistStatus, RunSummary

__all__ = [
    'PlaylistSynchronizer',
    'SyncReport',
    'PlaylistStatus',
    'RunSummary'
]
