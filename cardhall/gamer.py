"""A player seated at the table: connection, picked cards and round results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .card import Card
from .patterns import HandPattern

__all__ = ["Gamer", "HAND_SIZE", "ROUNDS"]

HAND_SIZE = 5
ROUNDS = 3


@dataclass
class Gamer:
    """One player; ``round_status`` holds 1 for each round won, else 0."""

    connection_id: int
    username: str
    hand: list[Card] = field(default_factory=list)
    round_status: list[int] = field(default_factory=lambda: [0] * ROUNDS)
    hand_pattern: Optional[HandPattern] = None

    def num_of_wins(self) -> int:
        """Number of rounds this player has won."""
        return sum(self.round_status)

    def add_card(self, card: Card) -> None:
        self.hand.append(card)

    def clear_hand(self) -> None:
        """Drop the picked cards and the pattern they made."""
        self.hand.clear()
        self.hand_pattern = None

    def has_complete_hand(self) -> bool:
        return len(self.hand) == HAND_SIZE

    def add_round_win(self, round_index: int) -> None:
        """Mark a round as won; indexes outside the game are ignored."""
        if 0 <= round_index < ROUNDS:
            self.round_status[round_index] = 1