"""Application context handed to every command.

Commands reach songlists, the cursor and the MPD client only through this
object; they never import the UI or open connections themselves.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional

from pms.core.config import Config
from pms.domain.daemon import DaemonClient
from pms.domain.song import Song
from pms.domain.songlist import Songlist


@dataclass
class AppContext:
    """Application state passed explicitly to commands.

    Attributes:
        config: Application configuration
        songlists: Open songlists, in the order the user opened them
        active: Index of the songlist shown to the user
        cursor: Cursor position within the active songlist
        client: MPD client, or None while disconnected
    """

    config: Config
    songlists: List[Songlist] = field(default_factory=list)
    active: int = 0
    cursor: int = 0
    client: Optional[DaemonClient] = None

    @classmethod
    def create(cls, config: Config, client: Optional[DaemonClient] = None) -> "AppContext":
        """Create initial application context with an empty queue songlist."""
        return cls(config=config, songlists=[Songlist(name="Queue")], client=client)

    def with_client(self, client: Optional[DaemonClient]) -> "AppContext":
        """Return new context with a different MPD client, other fields unchanged."""
        return replace(self, client=client)

    def active_songlist(self) -> Optional[Songlist]:
        if 0 <= self.active < len(self.songlists):
            return self.songlists[self.active]
        return None

    def cursor_song(self) -> Optional[Song]:
        """Song under the cursor, or None if the active songlist is empty."""
        songlist = self.active_songlist()
        if songlist is None:
            return None
        return songlist.song(self.cursor)

    def daemon_client(self) -> Optional[DaemonClient]:
        """MPD client, or None if there is none or its connection has dropped."""
        if self.client is None or not getattr(self.client, "connected", True):
            return None
        return self.client

    def set_cursor(self, index: int) -> None:
        """Move the cursor, clamped to the active songlist."""
        songlist = self.active_songlist()
        last = len(songlist) - 1 if songlist is not None else -1
        self.cursor = max(0, min(index, last))

    def add_songlist(self, songlist: Songlist, activate: bool = False) -> None:
        self.songlists.append(songlist)
        if activate:
            self.active = len(self.songlists) - 1
            self.cursor = 0

    def remove_songlist(self, songlist: Songlist) -> None:
        """Close a songlist and let it notify the daemon if it needs to."""
        songlist.delete()
        index = self.songlists.index(songlist)
        del self.songlists[index]
        if self.active >= index and self.active > 0:
            self.active -= 1
        self.set_cursor(self.cursor)
