"""Hand patterns from the golden hand down to the plain series."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import ClassVar, Optional

from .card import Card, Rank
from .hands import is_flush, is_straight, rank_counts

__all__ = [
    "HandPattern",
    "GoldenHand",
    "OrderHand",
    "FourRank",
    "FourOfAKind",
    "Penthouse",
    "MscHand",
    "Series",
]

_GOLDEN_RANKS = (Rank.BITCOIN, Rank.KING, Rank.QUEEN, Rank.SOLDIER, Rank.RANK10)


def _sign(a: int, b: int) -> int:
    return (a > b) - (a < b)


def _is_golden_sequence(cards: Sequence[Card]) -> bool:
    return tuple(card.rank for card in cards) == _GOLDEN_RANKS


class HandPattern(ABC):
    """A recognised hand; an instance without cards serves as a prototype."""

    strength: ClassVar[int]
    name: ClassVar[str]

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards = tuple(cards)

    @property
    def cards(self) -> tuple[Card, ...]:
        return self._cards

    @abstractmethod
    def evaluate(self, sorted_hand: Sequence[Card]) -> Optional["HandPattern"]:
        """Return a matching pattern for the hand, or None."""

    @abstractmethod
    def compare(self, other: "HandPattern") -> int:
        """Return 1, 0 or -1 as this hand beats, ties or loses to ``other``."""

    def _check_same_kind(self, other: "HandPattern") -> None:
        if not isinstance(other, type(self)):
            raise TypeError(
                f"cannot compare {type(self).__name__} with {type(other).__name__}"
            )

    def __repr__(self) -> str:
        shown = ", ".join(str(card) for card in self._cards)
        return f"{type(self).__name__}([{shown}])"


class GoldenHand(HandPattern):
    strength = 10
    name = "Hand Golden"

    def evaluate(self, sorted_hand):
        if len(sorted_hand) == 5 and is_flush(sorted_hand) and _is_golden_sequence(sorted_hand):
            return GoldenHand(sorted_hand)
        return None

    def compare(self, other):
        self._check_same_kind(other)
        return _sign(self.cards[0].unit_value, other.cards[0].unit_value)


class OrderHand(HandPattern):
    strength = 9
    name = "Hand Order"

    def evaluate(self, sorted_hand):
        if len(sorted_hand) != 5 or not is_flush(sorted_hand):
            return None
        if not is_straight(sorted_hand) or _is_golden_sequence(sorted_hand):
            return None
        return OrderHand(sorted_hand)

    def compare(self, other):
        self._check_same_kind(other)
        mine, theirs = self.cards[0], other.cards[0]
        return _sign(mine.rank_value, theirs.rank_value) or _sign(
            mine.unit_value, theirs.unit_value
        )


class FourRank(HandPattern):
    strength = 8
    name = "Hand 4+1"

    def evaluate(self, sorted_hand):
        if len(sorted_hand) != 5:
            return None
        counts = rank_counts(sorted_hand)
        values = counts.values()
        if 4 in values and 1 in values and len(counts) == 2:
            return FourRank(sorted_hand)
        return None

    def compare(self, other):
        self._check_same_kind(other)
        return _sign(int(self.four_rank()), int(other.four_rank()))

    def four_rank(self) -> Rank:
        """Rank held four times; the lowest rank if there is none."""
        for rank, count in rank_counts(self.cards).items():
            if count == 4:
                return rank
        return Rank.RANK2


class FourOfAKind(HandPattern):
    strength = 8
    name = "Hand 4+1"

    def evaluate(self, sorted_hand):
        if len(sorted_hand) != 5:
            return None
        if 4 in rank_counts(sorted_hand).values():
            return FourOfAKind(sorted_hand)
        return None

    def compare(self, other):
        self._check_same_kind(other)
        return _sign(int(self.four_rank()), int(other.four_rank()))

    def four_rank(self) -> Rank:
        """Rank of the quartet, read from the first two cards of a sorted hand."""
        first, second = self.cards[0], self.cards[1]
        return first.rank if first.rank == second.rank else second.rank


class Penthouse(HandPattern):
    strength = 7
    name = "Penthouse"

    def evaluate(self, sorted_hand):
        if len(sorted_hand) != 5:
            return None
        counts = rank_counts(sorted_hand)
        values = counts.values()
        if 3 in values and 2 in values and len(counts) == 2:
            return Penthouse(sorted_hand)
        return None

    def compare(self, other):
        self._check_same_kind(other)
        return _sign(int(self.three_rank()), int(other.three_rank()))

    def three_rank(self) -> Rank:
        """Rank held three times; the lowest rank if there is none."""
        for rank, count in rank_counts(self.cards).items():
            if count == 3:
                return rank
        return Rank.RANK2


class MscHand(HandPattern):
    strength = 6
    name = "Hand MSC"

    def evaluate(self, sorted_hand):
        if is_flush(sorted_hand):
            return MscHand(sorted_hand)
        return None

    def compare(self, other):
        self._check_same_kind(other)
        for mine, theirs in zip(self.cards, other.cards):
            result = _sign(mine.rank_value, theirs.rank_value)
            if result:
                return result
        return 0


class Series(HandPattern):
    strength = 5
    name = "Series"

    def evaluate(self, sorted_hand):
        if is_straight(sorted_hand) and not is_flush(sorted_hand):
            return Series(sorted_hand)
        return None

    def compare(self, other):
        self._check_same_kind(other)
        return _sign(self.cards[0].rank_value, other.cards[0].rank_value)