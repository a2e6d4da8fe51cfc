"""
Single-item audio fetcher using yt-dlp

This module downloads one remote item as an audio file with embedded cover
art. It is the only place where bytes are written into a playlist directory.

Download Configuration:
- Format selection: best available audio stream ("bestaudio")
- Extraction: FFmpegExtractAudio converts or remuxes into the configured codec
  (opus by default, which YouTube usually serves natively)
- Cover art: the thumbnail is written and embedded with EmbedThumbnail, then
  the separate image file is removed by yt-dlp
- Output: files land directly in the target directory; when a filename stem is
  supplied the output template is "<stem>.%(ext)s" so the final name is known
  in advance, otherwise yt-dlp's default "%(title)s [%(id)s].%(ext)s" is used
- Quiet operation: yt-dlp output is captured, never printed

Result Reporting:
Every call returns a FetchResult. Success comes from the structured return
code of YoutubeDL.download together with the absence of an exception; the
captured output is attached for diagnostics only. Failures are never raised
to the caller and are never retried.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yt_dlp

from ..config.settings import Settings
from ..utils.helpers import build_url
from ..utils.logger import get_logger
from .lister import YtDlpLogCollector


# yt-dlp's own default output template
DEFAULT_OUTTMPL = '%(title)s [%(id)s].%(ext)s'


@dataclass
class FetchResult:
    """
    Outcome of one fetch operation

    Attributes:
        item_id: Remote item identifier
        success: True if yt-dlp reported a clean download
        output: Messages captured from yt-dlp, in order
        error_message: Error description for failed fetches
        download_time: Time spent in seconds
    """
    item_id: str
    success: bool
    output: List[str] = field(default_factory=list)
    error_message: Optional[str] = None
    download_time: Optional[float] = None


class AudioDownloader:
    """
    Audio downloader backed by yt-dlp

    One YoutubeDL instance is created per fetch so that the output directory
    and template can differ between calls.
    """

    def __init__(
        self,
        format_selector: str = "bestaudio",
        audio_format: str = "opus",
        embed_thumbnail: bool = True,
        quiet: bool = True,
        video_url_template: str = "https://www.youtube.com/watch?v={id}"
    ):
        """
        Initialize the downloader

        Args:
            format_selector: yt-dlp format selector
            audio_format: Codec passed to FFmpegExtractAudio, also the file extension
            embed_thumbnail: Whether to embed the video thumbnail as cover art
            quiet: Whether to silence yt-dlp console output
            video_url_template: URL template with an {id} placeholder
        """
        self.logger = get_logger(__name__)
        self.format_selector = format_selector
        self.audio_format = audio_format
        self.embed_thumbnail = embed_thumbnail
        self.quiet = quiet
        self.video_url_template = video_url_template

    @classmethod
    def from_settings(cls, settings: Settings) -> "AudioDownloader":
        """
        Create a downloader configured from application settings

        Args:
            settings: Loaded settings instance

        Returns:
            Configured AudioDownloader
        """
        return cls(
            format_selector=settings.download.format,
            audio_format=settings.download.audio_format,
            embed_thumbnail=settings.download.embed_thumbnail,
            quiet=settings.download.quiet,
            video_url_template=settings.download.video_url_template
        )

    def _get_ydl_options(
        self,
        target_dir: Path,
        collector: YtDlpLogCollector,
        filename_stem: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build yt-dlp options for an audio-only download

        Args:
            target_dir: Directory receiving the final file
            collector: Logger object receiving yt-dlp output
            filename_stem: Fixed output name without extension, if known

        Returns:
            Dictionary of yt-dlp options
        """
        # '%' would be read as a template field
        outtmpl = f"{filename_stem.replace('%', '%%')}.%(ext)s" if filename_stem else DEFAULT_OUTTMPL

        postprocessors = [{
            'key': 'FFmpegExtractAudio',
            'preferredcodec': self.audio_format,
        }]

        options = {
            'format': self.format_selector,
            'paths': {'home': str(target_dir)},
            'outtmpl': {'default': outtmpl},
            'noplaylist': True,
            'quiet': self.quiet,
            'no_warnings': self.quiet,
            'noprogress': True,
            'ignoreerrors': False,
            'logger': collector,
        }

        if self.embed_thumbnail:
            options['writethumbnail'] = True
            postprocessors.append({
                'key': 'EmbedThumbnail',
                'already_have_thumbnail': False,
            })

        options['postprocessors'] = postprocessors
        return options

    def fetch(
        self,
        item_id: str,
        target_dir: Union[str, Path],
        filename_stem: Optional[str] = None
    ) -> FetchResult:
        """
        Download one item as audio into target_dir

        Args:
            item_id: Remote item identifier
            target_dir: Directory receiving the file
            filename_stem: Fixed output name without extension, if known

        Returns:
            FetchResult describing the outcome
        """
        start_time = time.time()
        collector = YtDlpLogCollector(self.logger)
        url = build_url(self.video_url_template, item_id)
        ydl_opts = self._get_ydl_options(Path(target_dir), collector, filename_stem)

        self.logger.debug(f"Starting download: {item_id} -> {target_dir}")

        try:
            with yt_dlp.YoutubeDL(ydl_opts) as ydl:
                retcode = ydl.download([url])
        except Exception as e:
            self.logger.error(f"Download failed: {item_id} - {e}")
            return FetchResult(
                item_id=item_id,
                success=False,
                output=collector.messages,
                error_message=str(e),
                download_time=time.time() - start_time
            )

        download_time = time.time() - start_time

        if retcode != 0:
            self.logger.error(f"Download failed: {item_id} - yt-dlp exited with code {retcode}")
            return FetchResult(
                item_id=item_id,
                success=False,
                output=collector.messages,
                error_message=f"yt-dlp exited with code {retcode}",
                download_time=download_time
            )

        self.logger.debug(f"Download completed: {item_id} ({download_time:.1f}s)")
        return FetchResult(
            item_id=item_id,
            success=True,
            output=collector.messages,
            download_time=download_time
        )
