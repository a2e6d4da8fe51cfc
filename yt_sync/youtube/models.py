"""
Data models for items returned by a flat playlist listing
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..utils.helpers import expected_filename, expected_stem


@dataclass(frozen=True)
class RemoteItem:
    """
    One entry of a remote playlist

    Attributes:
        id: Remote item (video) identifier
        title: Display title, None when titles were not requested
    """
    id: str
    title: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: Any, require_title: bool = True) -> "RemoteItem":
        """
        Build a RemoteItem from one yt-dlp flat playlist entry

        Args:
            entry: Entry dictionary as produced by extract_info(extract_flat=...)
            require_title: Whether a missing or empty title is an error

        Returns:
            RemoteItem instance

        Raises:
            ValueError: If the entry is not a mapping or lacks required fields
        """
        if not isinstance(entry, dict):
            raise ValueError(f"expected an object, got {type(entry).__name__}")

        item_id = entry.get('id')
        if not isinstance(item_id, str) or not item_id:
            raise ValueError("missing 'id' field")

        title = entry.get('title')
        if title is not None and not isinstance(title, str):
            raise ValueError(f"'title' of {item_id} is not a string")
        if require_title and not title:
            raise ValueError(f"missing 'title' field for {item_id}")

        return cls(id=item_id, title=title if require_title else None)

    def expected_filename(self, extension: str = "opus") -> Optional[str]:
        """
        Filename this item would have on disk once fetched

        Args:
            extension: Audio file extension without the leading dot

        Returns:
            "Title [id].ext", or None when the item has no title
        """
        if self.title is None:
            return None
        return expected_filename(self.id, self.title, extension)

    def expected_stem(self) -> Optional[str]:
        """Extension-less expected filename, or None when the item has no title"""
        if self.title is None:
            return None
        return expected_stem(self.id, self.title)
