"""TCP game server: account commands answered directly, game commands passed on."""

from __future__ import annotations

import argparse
import itertools
import logging
import socket
import sys
import threading
from typing import Optional

import psutil

from .accounts import UserStore
from .game import Game

__all__ = [
    "DEFAULT_PORT",
    "wifi_ipv4_address",
    "CommandDispatcher",
    "GameServer",
    "main",
]

log = logging.getLogger(__name__)

DEFAULT_PORT = 10200
_WIRELESS_HINTS = ("wlan", "wi-fi", "wireless")
_RECV_SIZE = 4096
_ACCEPT_POLL = 0.2


def wifi_ipv4_address() -> str:
    """IPv4 address of the first wireless interface that is up, or ''."""
    addresses = psutil.net_if_addrs()
    stats = psutil.net_if_stats()
    for name, entries in addresses.items():
        info = stats.get(name)
        if info is None or not info.isup:
            continue
        flags = [flag for flag in getattr(info, "flags", "").split(",") if flag]
        if "loopback" in flags:
            continue
        if flags and "running" not in flags:
            continue
        lowered = name.lower()
        if not any(hint in lowered for hint in _WIRELESS_HINTS):
            continue
        for entry in entries:
            if entry.family == socket.AF_INET:
                return entry.address
    return ""


def _command_code(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def _fields(parts: list[str], count: int) -> list[str]:
    if len(parts) <= count:
        raise ValueError(f"command needs {count} fields: {';'.join(parts)!r}")
    return parts[1:count + 1]


class CommandDispatcher:
    """Answers account commands and forwards game commands to the game."""

    def __init__(self, store: Optional[UserStore] = None, game: Optional[Game] = None) -> None:
        self.store = store if store is not None else UserStore()
        self.game = game if game is not None else Game()

    def handle(self, connection_id: int, command_str: str) -> Optional[str]:
        """Act on one command; return the reply to send back, if any.

        Raises ``ValueError`` when a command lacks the fields it needs.
        """
        parts = command_str.split(";")
        code = _command_code(parts[0])
        if code == 1:
            name, last_name, phone, email, username, password = _fields(parts, 6)
            try:
                added = self.store.register(name, last_name, phone, email, username, password)
            except OSError:
                return "-1"
            return "1" if added else "0"
        if code == 2:
            username, password = _fields(parts, 2)
            try:
                return "1" if self.store.sign_in(username, password) else "0"
            except OSError:
                return "-1"
        if code == 3:
            password, username, phone = _fields(parts, 3)
            try:
                self.store.change_password(password, username, phone)
            except OSError:
                log.exception("could not change password for %s", username)
            return None
        if code == -4:
            username, phone = _fields(parts, 2)
            try:
                return "1" if self.store.check_recovery(username, phone) else "0"
            except OSError:
                return "-1"
        if code == 4:
            (username,) = _fields(parts, 1)
            try:
                info = self.store.get_info(username)
            except OSError:
                return "-1;0"
            return ";".join(["2", info.name, info.last_name, info.email, info.phone_number])
        if code == 5:
            old, name, last_name, phone, email, username, password = _fields(parts, 7)
            try:
                self.store.update_info(old, name, last_name, phone, email, username, password)
            except OSError:
                return "-1;0"
            return "1;0"
        if code >= 6:
            self.game.handle_data(connection_id, command_str)
            return None
        log.warning("unexpected command: %s", command_str)
        return None


class GameServer:
    """Listens for clients and serves each one on its own thread."""

    def __init__(self, dispatcher: Optional[CommandDispatcher] = None, host: str = "") -> None:
        self.dispatcher = dispatcher if dispatcher is not None else CommandDispatcher()
        self.host = host
        self._listener: Optional[socket.socket] = None
        self._stopping = threading.Event()
        self._ids = itertools.count(1)
        self._clients: dict[int, socket.socket] = {}
        self._clients_lock = threading.Lock()

    @property
    def address(self) -> Optional[tuple]:
        """Address the server listens on, once started."""
        return self._listener.getsockname() if self._listener is not None else None

    def start(self, port: int) -> bool:
        """Begin listening on ``port``; False if that is not possible."""
        if self._listener is not None:
            return False
        try:
            listener = socket.create_server((self.host, port))
        except OSError as exc:
            log.error("could not start server: %s", exc)
            return False
        listener.settimeout(_ACCEPT_POLL)
        self._listener = listener
        self._stopping.clear()
        log.info("listening to port %s", listener.getsockname()[1])
        return True

    def serve_forever(self) -> None:
        """Accept clients until :meth:`shutdown` is called."""
        if self._listener is None:
            raise RuntimeError("server is not started")
        listener = self._listener
        while not self._stopping.is_set():
            try:
                conn, peer = listener.accept()
            except socket.timeout:
                continue
            except OSError:
                if self._stopping.is_set():
                    break
                raise
            conn.settimeout(None)
            connection_id = next(self._ids)
            with self._clients_lock:
                self._clients[connection_id] = conn
            log.debug("%s connecting from %s", connection_id, peer)
            threading.Thread(
                target=self._serve_client,
                args=(connection_id, conn),
                daemon=True,
            ).start()

    def shutdown(self) -> None:
        """Stop accepting and close every connection."""
        self._stopping.set()
        if self._listener is not None:
            self._listener.close()
            self._listener = None
        with self._clients_lock:
            clients = list(self._clients.values())
            self._clients.clear()
        for conn in clients:
            try:
                conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            conn.close()

    def _serve_client(self, connection_id: int, conn: socket.socket) -> None:
        write_lock = threading.Lock()

        def send(data: bytes) -> None:
            with write_lock:
                try:
                    conn.sendall(data)
                except OSError as exc:
                    log.warning("could not write to %s: %s", connection_id, exc)

        self.dispatcher.game.add_online_user(connection_id, send)
        try:
            while True:
                try:
                    data = conn.recv(_RECV_SIZE)
                except OSError:
                    break
                if not data:
                    break
                text = data.decode("utf-8", errors="replace")
                log.debug("%s sent %r", connection_id, text)
                try:
                    reply = self.dispatcher.handle(connection_id, text)
                except (ValueError, RuntimeError) as exc:
                    log.warning("bad command from %s: %s", connection_id, exc)
                    continue
                if reply is not None:
                    send(reply.encode("utf-8"))
        finally:
            log.debug("%s disconnected", connection_id)
            with self._clients_lock:
                self._clients.pop(connection_id, None)
            conn.close()


def _port(text: str) -> int:
    value = int(text)
    if not 0 <= value <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return value


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="cardhall-server", description="Run the card game server.")
    parser.add_argument("port", type=_port, nargs="?", default=DEFAULT_PORT)
    parser.add_argument("--host", default="")
    parser.add_argument("--users", default="users.json", help="accounts file")
    parser.add_argument("--history", default="gamehistiory.json", help="game history file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    print(f"IP : {wifi_ipv4_address()}")
    dispatcher = CommandDispatcher(UserStore(args.users), Game(history_path=args.history))
    server = GameServer(dispatcher, host=args.host)
    if not server.start(args.port):
        print("Could not start server !", file=sys.stderr)
        return 1
    print(f"Listening to port : {server.address[1]} ...")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())