"""Daemon domain - MPD integration.

This domain handles:
- The playback capability commands use (play, play by id, add)
- The MPD text protocol over a socket
- Background refresh of the queue songlist
"""

from .client import DaemonClient, MpdClient, parse_pairs, quote, split_songs
from .watcher import QueueWatcher, refresh_queue

__all__ = [
    "DaemonClient",
    "MpdClient",
    "QueueWatcher",
    "parse_pairs",
    "quote",
    "refresh_queue",
    "split_songs",
]
