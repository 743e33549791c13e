"""Find the strongest pattern that a five-card hand makes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from .card import Card
from .pairs import DoublePair, MessyHand, SinglePair, ThreeOfAKind
from .patterns import (
    FourRank,
    GoldenHand,
    HandPattern,
    MscHand,
    OrderHand,
    Penthouse,
    Series,
)

__all__ = ["HandEvaluator"]


class HandEvaluator:
    """Tries each pattern, strongest first, against the hand as dealt."""

    def __init__(self) -> None:
        self._patterns: tuple[HandPattern, ...] = (
            GoldenHand(),
            OrderHand(),
            FourRank(),
            Penthouse(),
            MscHand(),
            Series(),
            ThreeOfAKind(),
            DoublePair(),
            SinglePair(),
            MessyHand(),
        )

    @property
    def patterns(self) -> tuple[HandPattern, ...]:
        return self._patterns

    def evaluate(self, hand: Iterable[Card]) -> Optional[HandPattern]:
        """Return the first matching pattern, or None unless there are five cards."""
        cards = list(hand)
        if len(cards) != 5:
            return None
        for prototype in self._patterns:
            result = prototype.evaluate(cards)
            if result is not None:
                return result
        return None