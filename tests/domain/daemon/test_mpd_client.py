"""Tests for the MPD protocol client against a scripted local server."""

import socket
import threading
from typing import Dict, List

import pytest

from pms.domain.daemon import MpdClient, parse_pairs, quote, split_songs
from pms.errors import DaemonError


class FakeMpd:
    """Single-connection TCP server answering with canned replies."""

    def __init__(self, replies: Dict[str, str], greeting: str = "OK MPD 0.23.5\n"):
        self.replies = replies
        self.greeting = greeting
        self.received: List[str] = []
        self.server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.server.bind(("127.0.0.1", 0))
        self.server.listen(1)
        self.port = self.server.getsockname()[1]
        self.thread = threading.Thread(target=self._serve, daemon=True)
        self.thread.start()

    def _serve(self) -> None:
        conn, _ = self.server.accept()
        with conn, conn.makefile("r", encoding="utf-8", newline="\n") as reader:
            conn.sendall(self.greeting.encode("utf-8"))
            for line in reader:
                line = line.rstrip("\n")
                self.received.append(line)
                command = line.split(" ", 1)[0]
                reply = self.replies.get(line, self.replies.get(command, "OK\n"))
                conn.sendall(reply.encode("utf-8"))

    def close(self) -> None:
        self.server.close()


@pytest.fixture
def make_server():
    servers = []

    def factory(replies=None, **kwargs) -> FakeMpd:
        server = FakeMpd(replies or {}, **kwargs)
        servers.append(server)
        return server

    yield factory
    for server in servers:
        server.close()


def connect(server: FakeMpd, **kwargs) -> MpdClient:
    client = MpdClient(host="127.0.0.1", port=server.port, timeout=2.0, **kwargs)
    client.connect()
    return client


class TestHelpers:
    """Tests for protocol helpers."""

    def test_quote_escapes(self):
        assert quote('say "hi"') == '"say \\"hi\\""'
        assert quote("a\\b") == '"a\\\\b"'
        assert quote(5) == '"5"'

    def test_parse_pairs(self):
        assert parse_pairs(["Id: 3", "file: a: b.mp3"]) == [("Id", "3"), ("file", "a: b.mp3")]

    def test_parse_pairs_rejects_garbage(self):
        with pytest.raises(DaemonError):
            parse_pairs(["nonsense"])

    def test_split_songs(self):
        pairs = [("file", "a"), ("Id", "1"), ("file", "b"), ("Title", "B")]
        assert split_songs(pairs) == [{"file": "a", "Id": "1"}, {"file": "b", "Title": "B"}]


class TestConnection:
    """Tests for connecting and authenticating."""

    def test_connect_reads_version(self, make_server):
        client = connect(make_server())
        assert client.connected
        assert client.server_version == "0.23.5"
        client.close()
        assert not client.connected

    def test_password_is_sent(self, make_server):
        server = make_server()
        client = connect(server, password="secret")
        client.status()
        assert server.received[0] == 'password "secret"'
        client.close()

    def test_bad_greeting(self, make_server):
        with pytest.raises(DaemonError):
            connect(make_server(greeting="HELLO\n"))

    def test_unreachable(self):
        probe = socket.socket()
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
        probe.close()
        client = MpdClient(host="127.0.0.1", port=port, timeout=1.0)
        with pytest.raises(DaemonError):
            client.connect()

    def test_command_without_connection(self):
        with pytest.raises(DaemonError, match="Not connected"):
            MpdClient().play(-1)

    def test_close_while_waiting_for_lock(self, make_server):
        client = connect(make_server())
        errors = []

        def play():
            try:
                client.play_id(3)
            except Exception as e:
                errors.append(e)

        with client._lock:
            thread = threading.Thread(target=play)
            thread.start()
            client.close()
        thread.join(timeout=2.0)

        assert not thread.is_alive()
        assert len(errors) == 1
        assert isinstance(errors[0], DaemonError)
        assert "Not connected" in str(errors[0])


class TestPlayback:
    """Tests for the playback capability."""

    def test_play_resume_sends_bare_play(self, make_server):
        server = make_server()
        client = connect(server)
        client.play(-1)
        client.play(3)
        client.close()
        assert server.received == ["play", 'play "3"']

    def test_play_id(self, make_server):
        server = make_server()
        client = connect(server)
        client.play_id(17)
        client.close()
        assert server.received == ['playid "17"']

    def test_add_id_returns_id(self, make_server):
        server = make_server({"addid": "Id: 42\nOK\n"})
        client = connect(server)
        assert client.add_id("music/song.mp3") == 42
        assert client.add_id("music/song.mp3", 0) == 42
        client.close()
        assert server.received == ['addid "music/song.mp3"', 'addid "music/song.mp3" "0"']

    def test_ack_raises_with_message(self, make_server):
        server = make_server({"playid": "ACK [50@0] {playid} No such song\n"})
        client = connect(server)
        with pytest.raises(DaemonError, match="No such song"):
            client.play_id(1)
        # Connection stays usable after an ACK
        client.play(-1)
        client.close()


class TestQueries:
    """Tests for queries used to fill songlists."""

    def test_playlist_info(self, make_server):
        reply = "file: a.mp3\nTitle: A\nPos: 0\nId: 1\nfile: b.mp3\nPos: 1\nId: 2\nOK\n"
        client = connect(make_server({"playlistinfo": reply}))
        songs = client.playlist_info()
        client.close()
        assert songs == [
            {"file": "a.mp3", "Title": "A", "Pos": "0", "Id": "1"},
            {"file": "b.mp3", "Pos": "1", "Id": "2"},
        ]

    def test_status(self, make_server):
        client = connect(make_server({"status": "volume: 50\nplaylist: 7\nOK\n"}))
        assert client.status()["playlist"] == "7"
        client.close()

    def test_delete_playlist(self, make_server):
        server = make_server()
        client = connect(server)
        client.delete_playlist("My List")
        client.close()
        assert server.received == ['rm "My List"']

    def test_list_playlist_info(self, make_server):
        server = make_server({"listplaylistinfo": "file: x.mp3\nTitle: X\nfile: y.mp3\nOK\n"})
        client = connect(server)
        songs = client.list_playlist_info("Road Trip")
        client.close()
        assert server.received == ['listplaylistinfo "Road Trip"']
        assert songs == [{"file": "x.mp3", "Title": "X"}, {"file": "y.mp3"}]
