"""Test configuration and fixtures"""

import logging
import pytest
import tempfile
from pathlib import Path

from yt_sync.exceptions import ListingServiceError
from yt_sync.youtube.downloader import FetchResult
from yt_sync.youtube.models import RemoteItem


class FakeLister:
    """Lister returning canned items per playlist id"""

    def __init__(self, playlists=None, failing=()):
        self.playlists = playlists or {}
        self.failing = set(failing)
        self.calls = []

    def list_items(self, playlist_id):
        self.calls.append(playlist_id)
        if playlist_id in self.failing:
            raise ListingServiceError(f"yt-dlp failed for {playlist_id}", playlist_id=playlist_id)
        return list(self.playlists.get(playlist_id, []))


class FakeDownloader:
    """Downloader that writes an empty audio file instead of downloading"""

    def __init__(self, failing=(), extension="opus"):
        self.failing = set(failing)
        self.extension = extension
        self.calls = []

    def fetch(self, item_id, target_dir, filename_stem=None):
        self.calls.append((item_id, Path(target_dir), filename_stem))
        if item_id in self.failing:
            return FetchResult(
                item_id=item_id,
                success=False,
                output=["ERROR: Video unavailable"],
                error_message="Video unavailable"
            )

        stem = filename_stem or f"Downloaded [{item_id}]"
        (Path(target_dir) / f"{stem}.{self.extension}").write_bytes(b"")
        return FetchResult(item_id=item_id, success=True)


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers installed by setup_logging so tests don't share streams"""
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def sample_items():
    """Two-item playlist, one title containing a path separator"""
    return [
        RemoteItem(id="a1", title="Song One"),
        RemoteItem(id="a2", title="Song/Two"),
    ]


@pytest.fixture
def sample_entries():
    """Flat playlist entries as yt-dlp returns them"""
    return [
        {'_type': 'url', 'ie_key': 'Youtube', 'id': 'a1', 'title': 'Song One',
         'url': 'https://www.youtube.com/watch?v=a1'},
        {'_type': 'url', 'ie_key': 'Youtube', 'id': 'a2', 'title': 'Song/Two',
         'url': 'https://www.youtube.com/watch?v=a2'},
    ]


@pytest.fixture
def write_config(temp_dir):
    """Write a TOML config file and return its path"""
    def _write(content, name="config.toml"):
        path = temp_dir / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
