"""Songlist domain - the ordered song collection engine.

This domain handles:
- Ordered, lockable song sequences (queue, library, playlists)
- Multi-field sorting on normalized sort tags
- Lifecycle notification for daemon-backed playlists
"""

from .lifecycle import PlaylistStore, StoredPlaylistLifecycle, new_stored_playlist
from .songlist import Lifecycle, Songlist

__all__ = [
    "Lifecycle",
    "PlaylistStore",
    "Songlist",
    "StoredPlaylistLifecycle",
    "new_stored_playlist",
]
