"""Helpers that inspect a hand of cards."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from .card import Card, Rank

__all__ = ["sort_descending", "rank_counts", "is_flush", "is_straight"]


def sort_descending(cards: Iterable[Card]) -> list[Card]:
    """Return the cards strongest first."""
    return sorted(cards, reverse=True)


def rank_counts(cards: Iterable[Card]) -> dict[Rank, int]:
    """Count cards per rank, keyed in ascending rank order."""
    counts = Counter(card.rank for card in cards)
    return {rank: counts[rank] for rank in sorted(counts)}


def is_flush(cards: Sequence[Card]) -> bool:
    """True if the hand is non-empty and every card shares one suit."""
    if not cards:
        return False
    first = cards[0].unit
    return all(card.unit == first for card in cards)


def is_straight(cards: Sequence[Card]) -> bool:
    """True for five cards whose ranks step down by one in order."""
    if len(cards) != 5:
        return False
    return all(
        high.rank_value == low.rank_value + 1
        for high, low in zip(cards, cards[1:])
    )