"""Playing cards: suits ("units"), ranks and their ordering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering

__all__ = ["Unit", "Rank", "Card"]


class Unit(IntEnum):
    """Card suit, numbered in deck order."""

    DIAMOND = 0
    COIN = 1
    DOLLAR = 2
    GOLD = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def value_points(self) -> int:
        """Suit strength used to break ties between equal ranks."""
        return _UNIT_POINTS[self]


_UNIT_POINTS = {Unit.DIAMOND: 4, Unit.GOLD: 3, Unit.DOLLAR: 2, Unit.COIN: 1}


class Rank(IntEnum):
    """Card rank, lowest first."""

    RANK2 = 0
    RANK3 = 1
    RANK4 = 2
    RANK5 = 3
    RANK6 = 4
    RANK7 = 5
    RANK8 = 6
    RANK9 = 7
    RANK10 = 8
    SOLDIER = 9
    QUEEN = 10
    KING = 11
    BITCOIN = 12

    @property
    def label(self) -> str:
        if self.name.startswith("RANK"):
            return self.name[len("RANK"):]
        return self.name.capitalize()


_UNITS_BY_LABEL = {unit.label: unit for unit in Unit}
_RANKS_BY_LABEL = {rank.label: rank for rank in Rank}


@total_ordering
@dataclass(frozen=True)
class Card:
    """A single card; ordered by rank, then by suit strength."""

    unit: Unit
    rank: Rank

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Parse ``"<Unit>-<Rank>"``; unknown parts fall back to Diamond and 2."""
        parts = text.split("-")
        if len(parts) < 2:
            raise ValueError(f"malformed card string: {text!r}")
        unit = _UNITS_BY_LABEL.get(parts[0], Unit.DIAMOND)
        rank = _RANKS_BY_LABEL.get(parts[1], Rank.RANK2)
        return cls(unit, rank)

    @classmethod
    def from_indices(cls, unit_index: int, rank_index: int) -> "Card":
        """Build a card from suit and rank positions in deck order."""
        return cls(Unit(unit_index), Rank(rank_index))

    @property
    def unit_value(self) -> int:
        return self.unit.value_points

    @property
    def rank_value(self) -> int:
        return int(self.rank)

    def _sort_key(self) -> tuple[int, int]:
        return (self.rank_value, self.unit_value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return f"{self.unit.label}-{self.rank.label}"