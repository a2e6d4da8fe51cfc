"""
Utility functions and helpers for yt-sync
Common functions for filename handling, URL building and formatting
"""

from pathlib import Path
from typing import Union

from yt_dlp.postprocessor.ffmpeg import ACODECS


# Characters that are rejected by at least one common filesystem,
# plus the full-width question mark that some titles carry
UNSAFE_FILENAME_CHARS = '<>:"/\\|?*？'

# Translation table replacing every unsafe character with an underscore
_SANITIZE_TABLE = str.maketrans({char: '_' for char in UNSAFE_FILENAME_CHARS})


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename by replacing unsafe characters with underscores

    Only the characters in UNSAFE_FILENAME_CHARS are replaced; everything
    else (spaces, unicode, emoji) is kept as is. The function is total and
    idempotent, so it can be applied both to remote titles and to names
    already on disk.

    Args:
        filename: Original filename or title

    Returns:
        Sanitized filename
    """
    return filename.translate(_SANITIZE_TABLE)


def audio_extension(codec: str) -> str:
    """
    Get the file extension FFmpegExtractAudio gives a codec

    Args:
        codec: Codec name passed as preferredcodec (e.g. 'opus', 'vorbis')

    Returns:
        Extension without the leading dot ('vorbis' -> 'ogg')

    Raises:
        ValueError: If yt-dlp does not convert to that codec
    """
    try:
        return ACODECS[codec][0]
    except (KeyError, TypeError):
        raise ValueError(f"Unsupported audio codec: {codec}") from None


def expected_filename(item_id: str, title: str, extension: str = "opus") -> str:
    """
    Build the filename a fetched item ends up with on disk

    Args:
        item_id: Remote item identifier
        title: Remote item title
        extension: Audio file extension without the leading dot

    Returns:
        Filename in the form "Title [id].ext"
    """
    return f"{expected_stem(item_id, title)}.{extension}"


def expected_stem(item_id: str, title: str) -> str:
    """
    Build the extension-less part of an expected filename

    Args:
        item_id: Remote item identifier
        title: Remote item title

    Returns:
        Stem in the form "Title [id]"
    """
    return f"{sanitize_filename(title)} [{item_id}]"


def build_url(template: str, item_id: str) -> str:
    """
    Build a remote URL from a template containing an {id} placeholder

    Args:
        template: URL template, e.g. "https://www.youtube.com/playlist?list={id}"
        item_id: Identifier substituted into the template

    Returns:
        Complete URL
    """
    return template.format(id=item_id)


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure directory exists, create if necessary

    Args:
        path: Directory path

    Returns:
        Path object
    """
    path_obj = Path(path)
    path_obj.mkdir(parents=True, exist_ok=True)
    return path_obj


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate string to maximum length

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
