"""
Lifecycle variants for songlists that mirror something on the MPD side.
"""

from typing import Iterable, Mapping, Optional, Protocol

from loguru import logger

from pms.domain.songlist.songlist import Songlist


class PlaylistStore(Protocol):
    """Daemon capability needed to drop a stored playlist."""

    def delete_playlist(self, name: str) -> None: ...


class StoredPlaylistLifecycle:
    """Removes the stored playlist of the same name when the songlist is deleted."""

    def __init__(self, store: PlaylistStore) -> None:
        self.store = store

    def on_delete(self, songlist: Songlist) -> None:
        logger.info(f"Deleting stored playlist '{songlist.name}'")
        self.store.delete_playlist(songlist.name)


def new_stored_playlist(
    name: str,
    store: PlaylistStore,
    attrlist: Optional[Iterable[Mapping[str, str]]] = None,
) -> Songlist:
    """Create a songlist backed by a stored playlist on the daemon.

    Args:
        name: Stored playlist name
        store: Daemon capability used when the songlist is deleted
        attrlist: Optional songs as returned by MPD ``listplaylistinfo``

    Returns:
        Songlist whose delete() removes the stored playlist
    """
    songlist = Songlist(name=name, lifecycle=StoredPlaylistLifecycle(store))
    if attrlist is not None:
        songlist.add_from_attrs(attrlist)
    return songlist
