"""
Songlist - a named, ordered, lockable sequence of songs.

The same engine backs every view the user opens: the MPD queue, the
library, search results and stored playlists. Variants that must tell MPD
about their lifecycle (stored playlists) get a lifecycle object instead of
a subclass, see ``lifecycle.py``.

Every mutation holds the songlist lock. The lock is re-entrant, so callers
that need several calls to be atomic can bracket them with ``lock()`` /
``unlock()`` (or ``with songlist:``) and still call the public methods.
"""

import threading
import time
from typing import Iterable, Iterator, List, Mapping, Optional, Protocol, Sequence

from loguru import logger

from pms.domain.song import Song
from pms.errors import NotFoundError, OutOfRangeError, PreconditionError


class Lifecycle(Protocol):
    """Notified when the owning context discards a songlist."""

    def on_delete(self, songlist: "Songlist") -> None: ...


class Songlist:
    """Ordered collection of songs owned by one named view."""

    def __init__(
        self,
        name: str = "",
        songs: Optional[Iterable[Song]] = None,
        lifecycle: Optional[Lifecycle] = None,
    ) -> None:
        self._name = name
        self._songs: List[Song] = list(songs) if songs is not None else []
        self._sort_key = ""
        self._lock = threading.RLock()
        self.lifecycle = lifecycle

    def __repr__(self) -> str:
        return f"Songlist(name={self._name!r}, len={len(self._songs)})"

    # -- locking -----------------------------------------------------------

    def lock(self) -> None:
        self._lock.acquire()

    def unlock(self) -> None:
        self._lock.release()

    def __enter__(self) -> "Songlist":
        self.lock()
        return self

    def __exit__(self, *exc_info) -> None:
        self.unlock()

    # -- accessors ---------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name

    @property
    def sort_key(self) -> str:
        """Tag most recently used for ordering."""
        return self._sort_key

    def __len__(self) -> int:
        return len(self._songs)

    def __iter__(self) -> Iterator[Song]:
        return iter(self._songs)

    def __getitem__(self, index: int) -> Song:
        if not self.in_range(index):
            raise OutOfRangeError(self._out_of_range(index))
        return self._songs[index]

    def in_range(self, index: int) -> bool:
        """True if index is a valid position, 0 <= index < len."""
        return 0 <= index < len(self._songs)

    def song(self, index: int) -> Optional[Song]:
        """Return the song at index, or None if index is out of range."""
        if not self.in_range(index):
            return None
        return self._songs[index]

    def songs(self) -> List[Song]:
        """Return the live song sequence for read access."""
        return self._songs

    # -- mutation ----------------------------------------------------------

    def add(self, song: Song) -> None:
        """Append a song."""
        with self._lock:
            self._songs.append(song)

    def add_list(self, other: "Songlist") -> None:
        """Append every song of another songlist, preserving its order."""
        songs = list(other.songs())
        with self._lock:
            for song in songs:
                self.add(song)

    def add_from_attrs(self, attrlist: Iterable[Mapping[str, str]]) -> None:
        """Append one Song per raw MPD attribute set, in order.

        Raises:
            ValueError: If an attribute set carries a malformed id. Songs
                built before the failing entry stay appended.
        """
        with self._lock:
            for attrs in attrlist:
                self.add(Song.from_attrs(attrs))

    def clear(self) -> None:
        """Reset to an empty sequence."""
        with self._lock:
            self._songs = []

    def delete(self) -> None:
        """Discard this songlist, notifying its lifecycle if it has one."""
        if self.lifecycle is not None:
            self.lifecycle.on_delete(self)

    def remove(self, index: int) -> None:
        """Remove the song at index, keeping the order of the rest.

        Raises:
            OutOfRangeError: If index is not a valid position
        """
        with self._lock:
            if not self.in_range(index):
                raise OutOfRangeError(self._out_of_range(index))
            logger.debug(f"Removing song number {index} from songlist '{self._name}'")
            del self._songs[index]

    def remove_indices(self, indices: Iterable[int]) -> None:
        """Remove several songs at once.

        Indices are removed in strictly descending order so that earlier
        removals never shift later positions. All indices are checked
        before anything is removed.

        Raises:
            OutOfRangeError: On the first invalid index
        """
        ordered = sorted(set(indices), reverse=True)
        with self._lock:
            for index in ordered:
                if not self.in_range(index):
                    raise OutOfRangeError(self._out_of_range(index))
            for index in ordered:
                self.remove(index)

    def replace(self, index: int, song: Song) -> None:
        """Swap the song at index for another one.

        Raises:
            OutOfRangeError: If index is not a valid position
        """
        with self._lock:
            if not self.in_range(index):
                raise OutOfRangeError(self._out_of_range(index))
            self._songs[index] = song

    def truncate(self, length: int) -> None:
        """Keep only the first ``length`` songs.

        Raises:
            OutOfRangeError: If length < 0 or length > len
        """
        with self._lock:
            if length < 0 or length > len(self._songs):
                raise OutOfRangeError(
                    f"Cannot truncate songlist '{self._name}' of length "
                    f"{len(self._songs)} to {length}"
                )
            del self._songs[length:]

    def duplicate(self, dest: "Songlist") -> None:
        """Clear dest and fill it with copies of this songlist's songs.

        Songs are value copies; changing a song in dest never changes the
        song it was copied from.
        """
        with self._lock:
            copies = [song.copy() for song in self._songs]
        dest.clear()
        for song in copies:
            dest.add(song)

    def locate(self, match: Song) -> int:
        """Return the index of the first song matching ``match``.

        Raises:
            NotFoundError: If no song matches
        """
        with self._lock:
            for index, song in enumerate(self._songs):
                if match.matches(song):
                    return index
        raise NotFoundError(f"Cannot find song in songlist '{self._name}'")

    def sort(self, fields: Sequence[str]) -> None:
        """Order the songlist by sort tags.

        The first field gets a full sort; every following field is a stable
        pass over the result. The last field is therefore the most
        significant key, and earlier fields only order songs it ties.
        Missing tags compare as the empty string.

        Raises:
            PreconditionError: If fields is empty
        """
        if not fields:
            raise PreconditionError("Cannot sort without sort criteria")
        with self._lock:
            self._sort_by(fields[0], stable=False)
            for field in fields[1:]:
                self._sort_by(field, stable=True)

    def _sort_by(self, field: str, stable: bool) -> None:
        self._sort_key = field
        start = time.perf_counter()
        # list.sort is always stable; the first pass simply has no order to keep
        self._songs.sort(key=self._sort_value)
        elapsed = time.perf_counter() - start
        kind = "Stable sorted" if stable else "Sorted"
        logger.debug(f"{kind} '{self._name}' by '{field}' in {elapsed:.4f}s")

    def _sort_value(self, song: Song) -> str:
        return song.sort_tags.get(self._sort_key, "")

    def _out_of_range(self, index: int) -> str:
        return (
            f"Index {index} out of bounds for songlist '{self._name}' "
            f"of length {len(self._songs)}"
        )
