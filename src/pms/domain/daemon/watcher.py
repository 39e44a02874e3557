"""Background refresh of the queue songlist.

MPD bumps the ``playlist`` field of ``status`` every time the queue changes.
The watcher polls it and reloads the queue songlist when it moves.
"""

import threading
from typing import Optional

from loguru import logger

from pms.domain.daemon.client import MpdClient
from pms.domain.songlist import Songlist
from pms.errors import DaemonError


def refresh_queue(songlist: Songlist, client: MpdClient) -> None:
    """Reload songlist from the MPD queue as one locked replacement."""
    attrlist = client.playlist_info()
    with songlist:
        songlist.clear()
        songlist.add_from_attrs(attrlist)
    logger.debug(f"Queue refreshed: {len(songlist)} songs")


class QueueWatcher:
    """Polls MPD in a daemon thread and keeps a queue songlist current."""

    def __init__(self, client: MpdClient, songlist: Songlist, interval: float = 1.0):
        self.client = client
        self.songlist = songlist
        self.interval = interval
        self.version: Optional[str] = None
        self._stop = threading.Event()
        self.thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start polling in a background thread."""
        if self.thread and self.thread.is_alive():
            return
        self._stop.clear()
        self.thread = threading.Thread(
            target=self._run, daemon=True, name="QueueWatcherThread"
        )
        self.thread.start()

    def stop(self) -> None:
        """Stop polling and wait briefly for the thread to exit."""
        self._stop.set()
        if self.thread and self.thread.is_alive():
            self.thread.join(timeout=2.0)

    def poll(self) -> bool:
        """Check the queue version once; return True if the songlist was reloaded."""
        version = self.client.status().get("playlist")
        if version == self.version:
            return False
        refresh_queue(self.songlist, self.client)
        self.version = version
        return True

    def _run(self) -> None:
        # Background refreshes must not print over the prompt
        threading.current_thread().silent_logging = True
        while not self._stop.is_set():
            try:
                self.poll()
            except (DaemonError, ValueError) as e:
                logger.error(f"Queue refresh failed: {e}")
                if not self.client.connected:
                    break
            self._stop.wait(self.interval)
        logger.debug("Queue watcher stopped")
