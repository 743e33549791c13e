"""Client side of the line-less text protocol spoken with the game server."""

from __future__ import annotations

import socket
from typing import Optional

__all__ = ["DEFAULT_HOST", "DEFAULT_PORT", "SocketHandler"]

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 10200
_RECV_SIZE = 4096


class SocketHandler:
    """A TCP connection to the server that sends and receives text messages."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: Optional[float] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self._sock: Optional[socket.socket] = None

    def connect(self) -> None:
        """Open the connection; raises ``OSError`` if the server cannot be reached."""
        if self._sock is not None:
            return
        self._sock = socket.create_connection((self.host, self.port), timeout=self.timeout)

    def is_connected(self) -> bool:
        return self._sock is not None

    def send_message(self, msg: str) -> None:
        """Send a message, connecting first if needed."""
        if self._sock is None:
            self.connect()
        try:
            self._sock.sendall(msg.encode("utf-8"))
        except OSError:
            self.close()
            raise

    def receive(self) -> Optional[str]:
        """Wait for the next chunk of text, trimmed; None once the server hangs up."""
        if self._sock is None:
            raise ConnectionError("not connected")
        try:
            data = self._sock.recv(_RECV_SIZE)
        except socket.timeout:
            raise
        except OSError:
            self.close()
            raise
        if not data:
            self.close()
            return None
        return data.decode("utf-8", errors="replace").strip()

    def close(self) -> None:
        if self._sock is None:
            return
        sock, self._sock = self._sock, None
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        sock.close()

    def __enter__(self) -> "SocketHandler":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()