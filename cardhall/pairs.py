"""Hand patterns built on repeated ranks, plus the catch-all messy hand."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Optional

from .card import Card, Rank
from .hands import rank_counts
from .patterns import HandPattern

__all__ = ["ThreeOfAKind", "DoublePair", "SinglePair", "MessyHand"]


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def _grouped(cards: Sequence[Card], leading: Iterable[Rank]) -> list[Card]:
    """Move the cards of each leading rank to the front, keeping hand order."""
    leading = list(leading)
    front = [card for rank in leading for card in cards if card.rank == rank]
    rest = [card for card in cards if card.rank not in leading]
    return front + rest


def _rank_values_at(cards: Sequence[Card], positions: Sequence[int]) -> tuple[int, ...]:
    if len(cards) != 5:
        return tuple(0 for _ in positions)
    return tuple(cards[index].rank_value for index in positions)


class ThreeOfAKind(HandPattern):
    strength = 4
    name = "Hand 3+2"

    def _key(self) -> tuple[int, ...]:
        return _rank_values_at(self.cards, (0,))

    def evaluate(self, sorted_hand) -> Optional[HandPattern]:
        counts = rank_counts(sorted_hand)
        triple = next((rank for rank, count in counts.items() if count == 3), None)
        if triple is None or len(counts) != 3:
            return None
        return ThreeOfAKind(_grouped(sorted_hand, [triple]))

    def compare(self, other) -> int:
        self._check_same_kind(other)
        return _sign(self._key(), other._key())


class DoublePair(HandPattern):
    strength = 3
    name = "Hand Pair Double"

    def _key(self) -> tuple[int, ...]:
        return _rank_values_at(self.cards, (0, 2, 4))

    def evaluate(self, sorted_hand) -> Optional[HandPattern]:
        counts = rank_counts(sorted_hand)
        if len(counts) != 3:
            return None
        pairs = sorted((rank for rank, count in counts.items() if count == 2), reverse=True)
        if len(pairs) != 2:
            return None
        return DoublePair(_grouped(sorted_hand, pairs))

    def compare(self, other) -> int:
        self._check_same_kind(other)
        return _sign(self._key(), other._key())


class SinglePair(HandPattern):
    strength = 2
    name = "Hand Pair Single"

    def _key(self) -> tuple[int, ...]:
        return _rank_values_at(self.cards, (0, 2, 3, 4))

    def evaluate(self, sorted_hand) -> Optional[HandPattern]:
        counts = rank_counts(sorted_hand)
        if len(counts) != 4:
            return None
        pair = next((rank for rank, count in counts.items() if count == 2), None)
        if pair is None:
            return None
        return SinglePair(_grouped(sorted_hand, [pair]))

    def compare(self, other) -> int:
        self._check_same_kind(other)
        return _sign(self._key(), other._key())


class MessyHand(HandPattern):
    strength = 1
    name = "Hand Messy"

    def evaluate(self, sorted_hand) -> Optional[HandPattern]:
        return MessyHand(sorted_hand)

    def compare(self, other) -> int:
        self._check_same_kind(other)
        pairs = list(zip(self.cards, other.cards))
        for mine, theirs in pairs:
            result = _sign(mine.rank_value, theirs.rank_value)
            if result:
                return result
        for mine, theirs in pairs:
            result = _sign(mine.unit_value, theirs.unit_value)
            if result:
                return result
        return 0