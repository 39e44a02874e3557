"""
Song domain models.

A Song is one playable item as seen by the client: an MPD queue id (or
none, when MPD has not been told about it yet) plus two tag mappings, one
for display and one holding normalized values used only for ordering.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

# Tags whose sort values are numbers and must order numerically
NUMERIC_SORT_TAGS = ("track", "disc")
NUMERIC_SORT_WIDTH = 5

_LEADING_NUMBER = re.compile(r"^\s*(\d+)")


def _numeric_sort_value(value: str) -> str:
    """Zero-pad the leading number of a value such as ``"3/12"``."""
    match = _LEADING_NUMBER.match(value)
    if not match:
        return value.lower()
    return match.group(1).zfill(NUMERIC_SORT_WIDTH)


@dataclass
class Song:
    """Represents a song record.

    ``id`` is the MPD queue id. ``None`` means the song exists only in the
    client's view (library or stored playlist) and has no queue id yet.
    """

    id: Optional[int] = None
    tags: Dict[str, str] = field(default_factory=dict)
    sort_tags: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_attrs(cls, attrs: Mapping[str, str]) -> "Song":
        """Build a Song from one attribute set returned by MPD.

        Args:
            attrs: Key/value pairs such as ``{"file": ..., "Title": ..., "Id": "12"}``

        Returns:
            New Song with all tags copied and sort tags filled in
        """
        song = cls()
        song.set_tags(attrs)
        return song

    def set_tags(self, attrs: Mapping[str, str]) -> None:
        """Replace all tags from an attribute set and rebuild sort tags."""
        self.tags = {str(key).lower(): str(value) for key, value in attrs.items()}
        raw_id = self.tags.get("id")
        self.id = int(raw_id) if raw_id not in (None, "") else None
        self.auto_fill()
        self.fill_sort_tags()

    def auto_fill(self) -> None:
        """Derive commonly missing tags from the ones MPD did send."""
        if "albumartist" not in self.tags and "artist" in self.tags:
            self.tags["albumartist"] = self.tags["artist"]
        if "year" not in self.tags and len(self.tags.get("date", "")) >= 4:
            self.tags["year"] = self.tags["date"][:4]
        for key in ("artist", "albumartist"):
            sort_key = f"{key}sort"
            if sort_key not in self.tags and key in self.tags:
                self.tags[sort_key] = self.tags[key]

    def fill_sort_tags(self) -> None:
        """Rebuild sort tags from display tags."""
        self.sort_tags = {}
        for key, value in self.tags.items():
            if key in NUMERIC_SORT_TAGS:
                self.sort_tags[key] = _numeric_sort_value(value)
            else:
                self.sort_tags[key] = value.lower()

    def null_id(self) -> bool:
        """True if MPD has not assigned this song a queue id."""
        return self.id is None

    @property
    def file(self) -> str:
        return self.tags.get("file", "")

    def matches(self, other: "Song") -> bool:
        """Check whether two records describe the same song.

        Songs that both carry a queue id match on it alone, so two queue
        entries of the same file stay distinct. Otherwise they match on an
        identical ``file`` tag.
        """
        if not self.null_id() and not other.null_id():
            return self.id == other.id
        return self.file == other.file

    def copy(self) -> "Song":
        """Return a value copy that shares no tag dictionaries with this song."""
        return Song(id=self.id, tags=dict(self.tags), sort_tags=dict(self.sort_tags))


def get_display_name(song: Song) -> str:
    """Get formatted display name for a song."""
    artist = song.tags.get("artist")
    title = song.tags.get("title")
    if artist and title:
        return f"{artist} - {title}"
    return title or song.file or "<unknown>"
