"""Client waiting room: joins the game queue and waits until four players are in."""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional, Protocol

__all__ = ["MAX_PLAYERS", "WaitingRoom"]

MAX_PLAYERS = 4
_WAITING = "Waiting for players"
_JOIN_FAILED = "Could not join game queue"


class _Sender(Protocol):
    def send_message(self, msg: str) -> None: ...


class WaitingRoom:
    """Tracks the queue state shown while waiting for a game to start.

    ``start_new_game`` is called when the game begins and this client should
    report itself ready; without it, ``on_game_started`` receives the start message.
    """

    def __init__(
        self,
        handler: _Sender,
        username: str,
        *,
        start_new_game: Optional[Callable[[], None]] = None,
        on_game_started: Optional[Callable[[str], None]] = None,
        on_cancelled: Optional[Callable[[], None]] = None,
    ) -> None:
        self.handler = handler
        self.username = username
        self._start_new_game = start_new_game
        self._on_game_started = on_game_started
        self._on_cancelled = on_cancelled
        self.dots_count = 0
        self.waiting_text = _WAITING
        self.players_text = f"Players: 1/{MAX_PLAYERS}"
        self.animating = False
        self.closed = False
        self.error: Optional[str] = None

    def join(self) -> None:
        """Ask the server for a seat in the next game."""
        self.animating = True
        self.handler.send_message(f"6;{self.username}")

    def tick(self) -> str:
        """Advance the waiting animation and return its text."""
        self.dots_count = (self.dots_count + 1) % 4
        self.waiting_text = _WAITING + "." * self.dots_count
        return self.waiting_text

    def handle_message(self, msg: str) -> None:
        parts = msg.split(";")
        head = parts[0]
        if head == "count":
            if len(parts) >= 2:
                self.players_text = f"Players: {parts[1]}/{MAX_PLAYERS}"
        elif head == "start" and len(parts) >= 2 and parts[1] == "0":
            self.animating = False
            self._start_game(msg)
        elif head == "-1":
            self.error = _JOIN_FAILED
            self._leave()

    def cancel(self) -> None:
        """Leave the queue."""
        self.animating = False
        self.handler.send_message(f"19;{self.username}")
        self._leave()

    def _start_game(self, game_data: str) -> None:
        if self._start_new_game is not None:
            self._start_new_game()
            self.handler.send_message("20;0")
        elif self._on_game_started is not None:
            self._on_game_started(game_data)
        self.closed = True

    def _leave(self) -> None:
        self.animating = False
        self.closed = True
        if self._on_cancelled is not None:
            self._on_cancelled()