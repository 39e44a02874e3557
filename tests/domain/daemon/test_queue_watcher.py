"""Tests for background queue refresh."""

import time
from unittest.mock import MagicMock

from pms.domain.daemon import QueueWatcher, refresh_queue
from pms.domain.song import Song
from pms.domain.songlist import Songlist
from pms.errors import DaemonError


def make_client(version: str = "1", attrlist=None) -> MagicMock:
    client = MagicMock()
    client.connected = True
    client.status.return_value = {"playlist": version}
    client.playlist_info.return_value = attrlist or [
        {"file": "a.mp3", "Id": "1"},
        {"file": "b.mp3", "Id": "2"},
    ]
    return client


class TestRefreshQueue:
    """Tests for refresh_queue."""

    def test_replaces_contents(self):
        queue = Songlist(name="Queue", songs=[Song(tags={"file": "stale.mp3"})])
        refresh_queue(queue, make_client())
        assert [s.file for s in queue] == ["a.mp3", "b.mp3"]
        assert [s.id for s in queue] == [1, 2]


class TestQueueWatcher:
    """Tests for QueueWatcher polling."""

    def test_poll_reloads_on_new_version(self):
        client = make_client(version="5")
        queue = Songlist()
        watcher = QueueWatcher(client, queue)

        assert watcher.poll() is True
        assert watcher.version == "5"
        assert len(queue) == 2

    def test_poll_skips_unchanged_version(self):
        client = make_client(version="5")
        watcher = QueueWatcher(client, Songlist())
        watcher.version = "5"

        assert watcher.poll() is False
        client.playlist_info.assert_not_called()

    def test_thread_refreshes_and_stops(self):
        client = make_client(version="9")
        queue = Songlist()
        watcher = QueueWatcher(client, queue, interval=0.01)

        watcher.start()
        deadline = time.time() + 2.0
        while len(queue) == 0 and time.time() < deadline:
            time.sleep(0.01)
        watcher.stop()

        assert len(queue) == 2
        assert not watcher.thread.is_alive()

    def test_thread_survives_daemon_errors(self):
        client = make_client()
        calls = []

        def status():
            calls.append(1)
            if len(calls) == 1:
                raise DaemonError("busy")
            return {"playlist": "2"}

        client.status.side_effect = status
        queue = Songlist()
        watcher = QueueWatcher(client, queue, interval=0.01)

        watcher.start()
        deadline = time.time() + 2.0
        while len(queue) == 0 and time.time() < deadline:
            time.sleep(0.01)
        watcher.stop()

        assert len(queue) == 2

    def test_thread_exits_when_disconnected(self):
        client = make_client()
        client.connected = False
        client.status.side_effect = DaemonError("Connection to MPD closed by server")
        watcher = QueueWatcher(client, Songlist(), interval=0.01)

        watcher.start()
        watcher.thread.join(timeout=2.0)
        assert not watcher.thread.is_alive()
