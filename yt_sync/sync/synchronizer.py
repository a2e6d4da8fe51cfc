"""
Playlist Synchronization Engine for Remote-to-Local Updates

This module implements the reconciliation between a remote playlist and the
directory it is mirrored into. The filesystem is the only record of what has
already been downloaded: every sync pass lists the playlist, snapshots the
directory, and fetches whatever is missing.

Architecture Overview:
    - **SyncReport**: Outcome of one sync pass (success tally plus failed ids)
    - **PlaylistStatus / RunSummary**: Per-playlist outcomes across a whole run
    - **PlaylistSynchronizer**: Orchestrator composing lister and downloader

Sync Pass:
    1. List the remote playlist (fatal on failure)
    2. Ensure the target directory exists (created recursively)
    3. Snapshot regular file names once, normalized with sanitize_filename
    4. Walk the remote items in listed order, fetching the missing ones
    5. Count successful fetches; a failed fetch is logged and skipped

The progress bar counts only the items that need fetching. Items already
on disk are filtered out before the bar starts and never advance it.

Membership Policies:
    - **exact**: an item is present when its expected filename
      "Title [id].ext" is in the snapshot
    - **contains**: an item is present when some local filename contains both
      its raw id and the audio extension text. One id being a substring of
      another can produce false positives, so the two policies are never
      mixed within a run.

Rerunning after an interruption resumes naturally: fetched items are found in
the snapshot and skipped.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set

from ..config.settings import PlaylistRef, Settings, MATCH_MODES
from ..exceptions import ListingError, SyncError
from ..utils.helpers import audio_extension, ensure_directory, sanitize_filename, truncate_string
from ..utils.logger import get_logger, create_operation_logger
from ..youtube.downloader import AudioDownloader
from ..youtube.lister import PlaylistLister
from ..youtube.models import RemoteItem


@dataclass
class SyncReport:
    """
    Result of one sync pass

    Attributes:
        playlist_id: Identifier of the synchronized playlist
        location: Directory the playlist was synchronized into
        fetched_count: Number of items fetched successfully in this pass
        failed_ids: Items whose fetch failed, in processing order
    """
    playlist_id: str
    location: Path
    fetched_count: int = 0
    failed_ids: List[str] = field(default_factory=list)

    @property
    def summary(self) -> str:
        """
        Generate a human-readable summary of the pass

        Returns:
            String like "3 new songs successfully synced to /music/x"
        """
        text = f"{self.fetched_count} new songs successfully synced to {self.location}"
        if self.failed_ids:
            text += f" ({len(self.failed_ids)} failed)"
        return text


@dataclass
class PlaylistStatus:
    """
    Outcome of one configured playlist within a run

    Attributes:
        playlist: Playlist reference from configuration
        report: Sync report when the pass completed
        error_message: Error description when the pass was aborted
    """
    playlist: PlaylistRef
    report: Optional[SyncReport] = None
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        """True if the sync pass ran to completion"""
        return self.error_message is None


@dataclass
class RunSummary:
    """
    Outcomes of every processed playlist in configuration order

    Attributes:
        statuses: One PlaylistStatus per processed playlist
    """
    statuses: List[PlaylistStatus] = field(default_factory=list)

    @property
    def fetched_count(self) -> int:
        """Total number of items fetched across all playlists"""
        return sum(s.report.fetched_count for s in self.statuses if s.report)

    @property
    def failed_playlists(self) -> List[PlaylistStatus]:
        """Playlists whose sync pass was aborted"""
        return [s for s in self.statuses if not s.success]

    @property
    def success(self) -> bool:
        """True if every processed playlist completed"""
        return not self.failed_playlists


class PlaylistSynchronizer:
    """
    Main orchestrator for playlist synchronization

    Processing is strictly sequential: one listing, one directory scan, then
    one fetch at a time in remote order. Playlists are processed one after
    another in configuration order.
    """

    def __init__(
        self,
        lister: PlaylistLister,
        downloader: AudioDownloader,
        match_mode: str = "exact",
        audio_format: str = "opus",
        show_progress: bool = True
    ):
        """
        Initialize the synchronizer with its collaborators

        Args:
            lister: Remote playlist lister
            downloader: Single-item fetcher
            match_mode: Membership policy, 'exact' or 'contains'
            audio_format: Codec of fetched files, its extension is used for membership tests
            show_progress: Whether to draw a progress bar while fetching

        Raises:
            ValueError: If match_mode or audio_format is unknown
        """
        if match_mode not in MATCH_MODES:
            raise ValueError(f"Unknown match mode: {match_mode}")

        self.logger = get_logger(__name__)
        self.lister = lister
        self.downloader = downloader
        self.match_mode = match_mode
        self.audio_format = audio_format
        self.extension = audio_extension(audio_format)
        self.show_progress = show_progress

    @classmethod
    def from_settings(cls, settings: Settings, show_progress: bool = True) -> "PlaylistSynchronizer":
        """
        Build a synchronizer and its collaborators from application settings

        Args:
            settings: Loaded settings instance
            show_progress: Whether to draw a progress bar while fetching

        Returns:
            Configured PlaylistSynchronizer
        """
        return cls(
            lister=PlaylistLister.from_settings(settings),
            downloader=AudioDownloader.from_settings(settings),
            match_mode=settings.download.match_mode,
            audio_format=settings.download.audio_format,
            show_progress=show_progress
        )

    def prepare_directory(self, location: Path) -> Path:
        """
        Ensure the target directory exists

        Args:
            location: Target directory

        Returns:
            The directory path

        Raises:
            SyncError: If the directory cannot be created
        """
        try:
            return ensure_directory(location)
        except OSError as e:
            raise SyncError(
                f"Failed to create directory {location}: {e}",
                details={'path': str(location), 'original_error': e}
            ) from e

    def snapshot_local_files(self, location: Path) -> Set[str]:
        """
        Capture the names of regular files in a directory

        Subdirectories and other non-regular entries are ignored. Names are
        normalized with sanitize_filename so they compare symmetrically with
        expected filenames.

        Args:
            location: Directory to scan

        Returns:
            Set of normalized file names

        Raises:
            SyncError: If the directory cannot be listed
        """
        try:
            return {
                sanitize_filename(entry.name)
                for entry in Path(location).iterdir()
                if entry.is_file()
            }
        except OSError as e:
            raise SyncError(
                f"Failed to scan directory {location}: {e}",
                details={'path': str(location), 'original_error': e}
            ) from e

    def is_present(self, item: RemoteItem, snapshot: Set[str]) -> bool:
        """
        Check whether an item is already downloaded

        Args:
            item: Remote item to look up
            snapshot: Normalized local file names

        Returns:
            True if the item should be skipped
        """
        if self.match_mode == 'exact':
            expected = item.expected_filename(self.extension)
            return expected is not None and expected in snapshot

        return any(item.id in name and self.extension in name for name in snapshot)

    def plan(self, remote_items: Iterable[RemoteItem], snapshot: Set[str]) -> List[RemoteItem]:
        """
        Compute the items that need fetching

        Args:
            remote_items: Items in remote order
            snapshot: Normalized local file names

        Returns:
            Missing items in remote order, duplicates included
        """
        return [item for item in remote_items if not self.is_present(item, snapshot)]

    def reconcile(self, playlist: PlaylistRef, remote_items: List[RemoteItem]) -> SyncReport:
        """
        Fetch every remote item missing from the playlist directory

        Args:
            playlist: Playlist reference with its target location
            remote_items: Items in remote order

        Returns:
            SyncReport with the number of successful fetches

        Raises:
            SyncError: If the directory cannot be created or scanned
        """
        location = self.prepare_directory(playlist.path)
        snapshot = self.snapshot_local_files(location)
        report = SyncReport(playlist_id=playlist.id, location=location)

        operation = create_operation_logger(
            __name__, f"Sync of {playlist.id}", show_progress=self.show_progress
        )
        operation.start(f"Checking {len(remote_items)} items against {location}")

        to_fetch = self.plan(remote_items, snapshot)
        self.logger.debug(
            f"{len(remote_items)} remote items, {len(snapshot)} local files, {len(to_fetch)} to fetch"
        )

        total = len(to_fetch)
        try:
            for position, item in enumerate(to_fetch, 1):
                result = self.downloader.fetch(item.id, location, item.expected_stem())
                if result.success:
                    report.fetched_count += 1
                else:
                    report.failed_ids.append(item.id)
                    self.logger.console_warning(
                        f"Failed to download {item.id}: {result.error_message}"
                    )
                    for line in result.output:
                        self.logger.debug(f"{item.id}: {line}")

                operation.progress(item.title or item.id, position, total)
        except KeyboardInterrupt:
            operation.error(f"interrupted after {report.fetched_count} new songs")
            raise

        operation.complete(report.summary)
        return report

    def sync_playlist(self, playlist: PlaylistRef) -> SyncReport:
        """
        Run one full sync pass for a configured playlist

        Args:
            playlist: Playlist reference

        Returns:
            SyncReport of the pass

        Raises:
            ListingError: If the playlist cannot be listed
            SyncError: If the target directory cannot be prepared
        """
        self.logger.console_info(f"Downloading playlist: {playlist.id}")
        self.logger.debug(f"Target directory: {playlist.path}")

        remote_items = self.lister.list_items(playlist.id)
        names = [item.title or item.id for item in remote_items]
        self.logger.console_info(
            f"Playlist contains {len(remote_items)} items: "
            f"{truncate_string(', '.join(names), 200)}"
        )
        self.logger.debug(f"Playlist {playlist.id} contents: {names}")

        return self.reconcile(playlist, remote_items)

    def sync_all(self, playlists: Iterable[PlaylistRef], continue_on_error: bool = False) -> RunSummary:
        """
        Sync every playlist in order

        Args:
            playlists: Playlists in configuration order
            continue_on_error: Keep going after a listing or directory failure

        Returns:
            RunSummary with one status per processed playlist

        Raises:
            ListingError: On the first listing failure unless continue_on_error
            SyncError: On the first directory failure unless continue_on_error
        """
        summary = RunSummary()

        for playlist in playlists:
            try:
                report = self.sync_playlist(playlist)
            except (ListingError, SyncError) as e:
                if not continue_on_error:
                    raise
                self.logger.console_error(f"Skipping playlist {playlist.id}: {e}")
                summary.statuses.append(PlaylistStatus(playlist=playlist, error_message=str(e)))
                continue

            summary.statuses.append(PlaylistStatus(playlist=playlist, report=report))

        return summary
