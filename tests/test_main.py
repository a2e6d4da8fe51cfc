"""Test command-line entry point"""

import pytest
from unittest.mock import patch
from click.testing import CliRunner

from yt_sync.config.settings import PlaylistRef
from yt_sync.exceptions import ListingServiceError
from yt_sync.main import cli
from yt_sync.sync.synchronizer import PlaylistStatus, RunSummary, SyncReport


CONFIG = '[[items]]\nid = "P1"\nlocation = "/tmp/out"\n\n[[items]]\nid = "P2"\nlocation = "/tmp/out2"\n'


@pytest.fixture
def mock_from_settings():
    with patch('yt_sync.main.PlaylistSynchronizer.from_settings') as mock_factory:
        yield mock_factory


def run(*args):
    return CliRunner().invoke(cli, list(args))


class TestCli:
    """Test CLI behavior and exit codes"""

    def test_first_run_writes_default_config(self, temp_dir, mock_from_settings):
        path = temp_dir / "yt-sync" / "config.toml"

        result = run('--config', str(path), '--no-progress')

        assert result.exit_code == 0
        assert path.exists()
        mock_from_settings.assert_not_called()

    def test_syncs_all_playlists(self, write_config, mock_from_settings):
        synchronizer = mock_from_settings.return_value
        synchronizer.sync_all.return_value = RunSummary()

        result = run('--config', str(write_config(CONFIG)), '--no-progress')

        assert result.exit_code == 0
        playlists = synchronizer.sync_all.call_args[0][0]
        assert playlists == [PlaylistRef("P1", "/tmp/out"), PlaylistRef("P2", "/tmp/out2")]
        assert synchronizer.sync_all.call_args[1] == {'continue_on_error': False}
        assert mock_from_settings.call_args[1] == {'show_progress': False}

    def test_keep_going_flag(self, write_config, mock_from_settings):
        mock_from_settings.return_value.sync_all.return_value = RunSummary()

        result = run('--config', str(write_config(CONFIG)), '--keep-going')

        assert result.exit_code == 0
        assert mock_from_settings.return_value.sync_all.call_args[1] == {'continue_on_error': True}

    def test_continue_on_error_from_config(self, write_config, mock_from_settings):
        mock_from_settings.return_value.sync_all.return_value = RunSummary()
        path = write_config(CONFIG + '\n[sync]\ncontinue_on_error = true\n')

        run('--config', str(path))

        assert mock_from_settings.return_value.sync_all.call_args[1] == {'continue_on_error': True}

    def test_listing_failure_exits_nonzero(self, write_config, mock_from_settings):
        mock_from_settings.return_value.sync_all.side_effect = ListingServiceError(
            "Failed to list playlist P1", playlist_id="P1"
        )

        result = run('--config', str(write_config(CONFIG)))

        assert result.exit_code == 1

    def test_failed_playlist_with_keep_going_exits_nonzero(self, write_config, mock_from_settings, temp_dir):
        summary = RunSummary(statuses=[
            PlaylistStatus(playlist=PlaylistRef("P1", "/tmp/out"), error_message="listing failed"),
            PlaylistStatus(
                playlist=PlaylistRef("P2", "/tmp/out2"),
                report=SyncReport(playlist_id="P2", location=temp_dir, fetched_count=1)
            ),
        ])
        mock_from_settings.return_value.sync_all.return_value = summary

        result = run('--config', str(write_config(CONFIG)), '--keep-going')

        assert result.exit_code == 1

    def test_invalid_config_exits_nonzero(self, write_config, mock_from_settings):
        result = run('--config', str(write_config('[[items]]\nid = "P1"\n')))

        assert result.exit_code == 1
        mock_from_settings.assert_not_called()

    def test_empty_playlist_list(self, write_config, mock_from_settings):
        result = run('--config', str(write_config('items = []\n')))

        assert result.exit_code == 0
        mock_from_settings.assert_not_called()

    def test_interrupt_exit_code(self, write_config, mock_from_settings):
        mock_from_settings.return_value.sync_all.side_effect = KeyboardInterrupt

        result = run('--config', str(write_config(CONFIG)))

        assert result.exit_code == 130

    def test_version(self):
        result = run('--version')
        assert result.exit_code == 0
        assert "yt-sync" in result.output
