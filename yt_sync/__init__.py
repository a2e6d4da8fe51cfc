"""
yt-sync: Keep local folders in sync with YouTube playlists

yt-sync mirrors a set of remote playlists into local directories. For every
configured playlist it lists the current items, compares them with the files
already present in the target directory and downloads only the missing ones
as audio files with embedded thumbnails.

## Core Architecture

**Configuration Management (`yt_sync/config/`)**
- TOML configuration with playlist entries and optional tuning sections
- Default configuration bootstrapping on first run

**YouTube Integration (`yt_sync/youtube/`)**
- Flat playlist listing through yt-dlp
- Audio-only downloads with thumbnail embedding

**Synchronization Engine (`yt_sync/sync/`)**
- Directory snapshot and membership tests against expected filenames
- Sequential fetch loop with progress reporting

**Utilities (`yt_sync/utils/`)**
- Console/file separated logging with colored output
- Filename sanitization and formatting helpers

## Usage

```bash
pip install -e .

# First run writes ~/.config/yt-sync/config.toml with placeholders
yt-sync

# Sync every configured playlist
yt-sync
```

The filesystem is the only state: rerunning the tool after an interruption
skips everything that was already downloaded.
"""

# Version information for the yt-sync package
__version__ = "0.3.0"

__author__ = "yt-sync contributors"

__description__ = "Sync YouTube playlists into local folders as audio files"

__all__ = [
    "__version__",
    "__author__",
    "__description__"
]
