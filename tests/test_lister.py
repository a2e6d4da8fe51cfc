"""Test flat playlist listing"""

import pytest
from unittest.mock import patch
from yt_dlp.utils import DownloadError

from yt_sync.exceptions import ListingParseError, ListingServiceError, ListingError
from yt_sync.youtube.lister import PlaylistLister
from yt_sync.youtube.models import RemoteItem


@pytest.fixture
def mock_ydl():
    """Patch YoutubeDL and return (class mock, instance mock)"""
    with patch('yt_sync.youtube.lister.yt_dlp.YoutubeDL') as mock_cls:
        instance = mock_cls.return_value.__enter__.return_value
        yield mock_cls, instance


class TestPlaylistLister:
    """Test PlaylistLister against a mocked yt-dlp"""

    def test_lists_items_in_order(self, mock_ydl, sample_entries):
        mock_cls, instance = mock_ydl
        instance.extract_info.return_value = {'_type': 'playlist', 'entries': sample_entries}

        items = PlaylistLister().list_items("P1")

        assert items == [RemoteItem("a1", "Song One"), RemoteItem("a2", "Song/Two")]
        instance.extract_info.assert_called_once_with(
            "https://www.youtube.com/playlist?list=P1", download=False
        )

    def test_uses_flat_extraction(self, mock_ydl, sample_entries):
        mock_cls, instance = mock_ydl
        instance.extract_info.return_value = {'entries': sample_entries}

        PlaylistLister().list_items("P1")

        options = mock_cls.call_args[0][0]
        assert options['extract_flat'] == 'in_playlist'
        assert options['skip_download'] is True
        assert options['ignoreerrors'] is False

    def test_custom_url_template(self, mock_ydl):
        mock_cls, instance = mock_ydl
        instance.extract_info.return_value = {'entries': []}

        lister = PlaylistLister(playlist_url_template="https://music.youtube.com/playlist?list={id}")

        assert lister.list_items("P9") == []
        assert instance.extract_info.call_args[0][0] == "https://music.youtube.com/playlist?list=P9"

    def test_duplicates_pass_through(self, mock_ydl, sample_entries):
        _, instance = mock_ydl
        instance.extract_info.return_value = {'entries': iter(sample_entries + sample_entries[:1])}

        items = PlaylistLister().list_items("P1")

        assert [item.id for item in items] == ["a1", "a2", "a1"]

    def test_titles_optional_when_not_required(self, mock_ydl):
        _, instance = mock_ydl
        instance.extract_info.return_value = {'entries': [{'id': 'a1'}, {'id': 'a2', 'title': 'Two'}]}

        items = PlaylistLister(require_titles=False).list_items("P1")

        assert items == [RemoteItem("a1"), RemoteItem("a2")]

    def test_extraction_error_is_service_failure(self, mock_ydl):
        _, instance = mock_ydl
        instance.extract_info.side_effect = DownloadError("ERROR: The playlist does not exist.")

        with pytest.raises(ListingServiceError) as exc_info:
            PlaylistLister().list_items("missing")

        assert exc_info.value.playlist_id == "missing"
        assert isinstance(exc_info.value, ListingError)

    def test_empty_result_is_service_failure(self, mock_ydl):
        _, instance = mock_ydl
        instance.extract_info.return_value = None

        with pytest.raises(ListingServiceError):
            PlaylistLister().list_items("P1")

    def test_non_playlist_result_is_service_failure(self, mock_ydl):
        _, instance = mock_ydl
        instance.extract_info.return_value = {'_type': 'video', 'id': 'a1'}

        with pytest.raises(ListingServiceError, match="not a playlist"):
            PlaylistLister().list_items("P1")

    def test_entry_without_id_aborts(self, mock_ydl, sample_entries):
        _, instance = mock_ydl
        instance.extract_info.return_value = {'entries': [sample_entries[0], {'title': 'No id'}]}

        with pytest.raises(ListingParseError, match="entry 2"):
            PlaylistLister().list_items("P1")

    def test_entry_without_title_aborts_when_required(self, mock_ydl):
        _, instance = mock_ydl
        instance.extract_info.return_value = {'entries': [{'id': 'a1'}]}

        with pytest.raises(ListingParseError):
            PlaylistLister(require_titles=True).list_items("P1")

    def test_null_entry_aborts(self, mock_ydl, sample_entries):
        _, instance = mock_ydl
        instance.extract_info.return_value = {'entries': [None, sample_entries[0]]}

        with pytest.raises(ListingParseError):
            PlaylistLister().list_items("P1")


class TestRemoteItem:
    """Test RemoteItem parsing and naming"""

    def test_expected_filename(self):
        assert RemoteItem("a2", "Song/Two").expected_filename() == "Song_Two [a2].opus"
        assert RemoteItem("a2", "Song/Two").expected_stem() == "Song_Two [a2]"

    def test_expected_filename_without_title(self):
        assert RemoteItem("a2").expected_filename() is None
        assert RemoteItem("a2").expected_stem() is None

    def test_from_entry_rejects_non_string_title(self):
        with pytest.raises(ValueError):
            RemoteItem.from_entry({'id': 'a1', 'title': 42})
