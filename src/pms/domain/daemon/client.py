"""
MPD client over the plain text protocol.

Requests are one line; replies are ``key: value`` lines terminated by
``OK`` or by a single ``ACK [error@line] {command} message`` line.
"""

import socket
import threading
from typing import Any, Dict, List, Optional, Protocol, Tuple

from loguru import logger

from pms.errors import DaemonError

ENCODING = "utf-8"


class DaemonClient(Protocol):
    """Playback operations commands may invoke on the daemon."""

    def play(self, pos: int) -> None: ...

    def play_id(self, song_id: int) -> None: ...

    def add_id(self, path: str, position: int = -1) -> int: ...


def quote(arg: Any) -> str:
    """Quote one command argument for the MPD protocol."""
    text = str(arg).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def parse_pairs(lines: List[str]) -> List[Tuple[str, str]]:
    """Split reply lines into (key, value) pairs."""
    pairs = []
    for line in lines:
        key, sep, value = line.partition(": ")
        if not sep:
            raise DaemonError(f"Malformed reply line from MPD: {line!r}")
        pairs.append((key, value))
    return pairs


def split_songs(pairs: List[Tuple[str, str]]) -> List[Dict[str, str]]:
    """Group pairs into one attribute dict per song; each song starts at ``file``."""
    songs: List[Dict[str, str]] = []
    for key, value in pairs:
        if key == "file":
            songs.append({})
        if songs:
            songs[-1][key] = value
    return songs


class MpdClient:
    """Blocking MPD connection shared by the foreground loop and watchers.

    A lock serializes each request/reply exchange, so threads never read
    each other's replies.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6600,
        password: Optional[str] = None,
        timeout: float = 5.0,
    ) -> None:
        self.host = host
        self.port = port
        self.password = password
        self.timeout = timeout
        self.server_version: Optional[str] = None
        self._sock: Optional[socket.socket] = None
        self._reader = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"MpdClient({self.host}:{self.port})"

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> None:
        """Open the connection and authenticate if a password is configured.

        Raises:
            DaemonError: If the server is unreachable or not an MPD server
        """
        logger.info(f"Connecting to MPD at {self.host}:{self.port}")
        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as e:
            raise DaemonError(f"Cannot connect to MPD at {self.host}:{self.port}: {e}") from e

        self._sock = sock
        self._reader = sock.makefile("r", encoding=ENCODING, newline="\n")
        try:
            greeting = self._read_line()
            if not greeting.startswith("OK MPD "):
                raise DaemonError(f"Unexpected greeting from {self.host}:{self.port}: {greeting!r}")
            self.server_version = greeting[len("OK MPD "):]
            logger.info(f"Connected to MPD {self.server_version}")

            if self.password:
                self._execute("password", self.password)
        except DaemonError:
            self.close()
            raise

    def close(self) -> None:
        """Close the connection; safe to call more than once."""
        if self._reader is not None:
            try:
                self._reader.close()
            except OSError:
                pass
            self._reader = None
        if self._sock is not None:
            try:
                self._sock.close()
            except OSError:
                pass
            self._sock = None
            logger.info("Disconnected from MPD")

    def _read_line(self) -> str:
        if self._reader is None:
            raise DaemonError("Not connected to MPD")
        try:
            line = self._reader.readline()
        except OSError as e:
            self.close()
            raise DaemonError(f"Lost connection to MPD: {e}") from e
        if not line:
            self.close()
            raise DaemonError("Connection to MPD closed by server")
        return line.rstrip("\n")

    def _execute(self, command: str, *args: Any) -> List[Tuple[str, str]]:
        """Send one command and return its reply pairs.

        Raises:
            DaemonError: On ACK replies or connection failures
        """
        line = " ".join([command] + [quote(arg) for arg in args])
        with self._lock:
            # Another thread may have closed the connection while we waited
            if self._sock is None:
                raise DaemonError("Not connected to MPD")
            logger.debug(f"MPD <- {command}")
            try:
                self._sock.sendall((line + "\n").encode(ENCODING))
            except OSError as e:
                self.close()
                raise DaemonError(f"Lost connection to MPD: {e}") from e

            lines = []
            while True:
                reply = self._read_line()
                if reply == "OK":
                    break
                if reply.startswith("ACK "):
                    logger.warning(f"MPD rejected '{command}': {reply}")
                    raise DaemonError(reply)
                lines.append(reply)

        return parse_pairs(lines)

    # -- playback ----------------------------------------------------------

    def play(self, pos: int) -> None:
        """Start playback at a queue position; a negative position resumes."""
        if pos < 0:
            self._execute("play")
        else:
            self._execute("play", pos)

    def play_id(self, song_id: int) -> None:
        """Start playback of the queue entry with the given id."""
        self._execute("playid", song_id)

    def add_id(self, path: str, position: int = -1) -> int:
        """Add a file to the queue and return its new queue id.

        A negative position appends at the end of the queue.
        """
        if position < 0:
            pairs = self._execute("addid", path)
        else:
            pairs = self._execute("addid", path, position)
        for key, value in pairs:
            if key == "Id":
                return int(value)
        raise DaemonError(f"MPD did not return an id for '{path}'")

    # -- queries -----------------------------------------------------------

    def status(self) -> Dict[str, str]:
        return dict(self._execute("status"))

    def playlist_info(self) -> List[Dict[str, str]]:
        """Return one attribute dict per song in the queue."""
        return split_songs(self._execute("playlistinfo"))

    def list_playlist_info(self, name: str) -> List[Dict[str, str]]:
        """Return one attribute dict per song in a stored playlist."""
        return split_songs(self._execute("listplaylistinfo", name))

    def delete_playlist(self, name: str) -> None:
        self._execute("rm", name)
