import pytest

from cardhall.card import Card, Rank
from cardhall.patterns import (
    FourOfAKind,
    FourRank,
    GoldenHand,
    MscHand,
    OrderHand,
    Penthouse,
    Series,
)


def hand(*texts):
    return [Card.parse(t) for t in texts]


GOLDEN = ("Gold-Bitcoin", "Gold-King", "Gold-Queen", "Gold-Soldier", "Gold-10")


@pytest.mark.parametrize(
    "pattern, cards, strength, name",
    [
        (GoldenHand, hand(*GOLDEN), 10, "Hand Golden"),
        (OrderHand, hand("Coin-9", "Coin-8", "Coin-7", "Coin-6", "Coin-5"), 9, "Hand Order"),
        (
            FourRank,
            hand("Diamond-King", "Gold-King", "Dollar-King", "Coin-King", "Coin-2"),
            8,
            "Hand 4+1",
        ),
        (
            FourOfAKind,
            hand("Diamond-King", "Gold-King", "Dollar-King", "Coin-King", "Coin-2"),
            8,
            "Hand 4+1",
        ),
        (
            Penthouse,
            hand("Diamond-Queen", "Gold-Queen", "Coin-Queen", "Gold-3", "Coin-3"),
            7,
            "Penthouse",
        ),
        (
            MscHand,
            hand("Dollar-King", "Dollar-9", "Dollar-7", "Dollar-4", "Dollar-2"),
            6,
            "Hand MSC",
        ),
        (Series, hand("Coin-9", "Gold-8", "Coin-7", "Dollar-6", "Coin-5"), 5, "Series"),
    ],
)
def test_evaluated_pattern_strength_and_name(pattern, cards, strength, name):
    result = pattern().evaluate(cards)
    assert (result.strength, result.name) == (strength, name)


def test_golden_hand_detected_and_keeps_cards():
    cards = hand(*GOLDEN)
    result = GoldenHand().evaluate(cards)
    assert isinstance(result, GoldenHand)
    assert list(result.cards) == cards


def test_golden_hand_rejects_mixed_units_and_order():
    assert GoldenHand().evaluate(hand("Coin-Bitcoin", *GOLDEN[1:])) is None
    assert GoldenHand().evaluate(hand(*reversed(GOLDEN))) is None


def test_golden_compare_by_unit():
    diamond = GoldenHand().evaluate(hand(*(t.replace("Gold", "Diamond") for t in GOLDEN)))
    gold = GoldenHand().evaluate(hand(*GOLDEN))
    assert diamond.compare(gold) == 1
    assert gold.compare(diamond) == -1
    assert gold.compare(gold) == 0


def test_order_hand_detects_flush_straight_but_not_golden():
    cards = hand("Coin-9", "Coin-8", "Coin-7", "Coin-6", "Coin-5")
    assert isinstance(OrderHand().evaluate(cards), OrderHand)
    assert OrderHand().evaluate(hand(*GOLDEN)) is None
    assert OrderHand().evaluate(hand("Coin-9", "Gold-8", "Coin-7", "Coin-6", "Coin-5")) is None


def test_order_hand_compare_rank_then_unit():
    low = OrderHand().evaluate(hand("Coin-9", "Coin-8", "Coin-7", "Coin-6", "Coin-5"))
    high = OrderHand().evaluate(hand("Coin-10", "Coin-9", "Coin-8", "Coin-7", "Coin-6"))
    diamond = OrderHand().evaluate(
        hand("Diamond-9", "Diamond-8", "Diamond-7", "Diamond-6", "Diamond-5")
    )
    assert high.compare(low) == 1
    assert low.compare(high) == -1
    assert diamond.compare(low) == 1


def test_four_rank_detection_and_rank():
    cards = hand("Diamond-King", "Gold-King", "Dollar-King", "Coin-King", "Coin-2")
    result = FourRank().evaluate(cards)
    assert isinstance(result, FourRank)
    assert result.four_rank() is Rank.KING
    assert FourRank().evaluate(hand("Diamond-King", "Gold-King", "Dollar-King", "Coin-2", "Gold-2")) is None


def test_four_rank_compare():
    kings = FourRank().evaluate(hand("Diamond-King", "Gold-King", "Dollar-King", "Coin-King", "Coin-2"))
    fives = FourRank().evaluate(hand("Gold-Bitcoin", "Diamond-5", "Gold-5", "Dollar-5", "Coin-5"))
    assert kings.compare(fives) == 1
    assert fives.compare(kings) == -1


def test_four_of_a_kind_rank_from_sorted_cards():
    low_kicker = FourOfAKind().evaluate(
        hand("Diamond-King", "Gold-King", "Dollar-King", "Coin-King", "Coin-2")
    )
    high_kicker = FourOfAKind().evaluate(
        hand("Gold-Bitcoin", "Diamond-5", "Gold-5", "Dollar-5", "Coin-5")
    )
    assert low_kicker.four_rank() is Rank.KING
    assert high_kicker.four_rank() is Rank.RANK5
    assert low_kicker.compare(high_kicker) == 1


def test_four_of_a_kind_requires_five_cards():
    assert FourOfAKind().evaluate(hand("Diamond-King", "Gold-King", "Dollar-King", "Coin-King")) is None


def test_penthouse_detection_and_compare():
    queens = Penthouse().evaluate(hand("Diamond-Queen", "Gold-Queen", "Coin-Queen", "Gold-3", "Coin-3"))
    threes = Penthouse().evaluate(hand("Diamond-Bitcoin", "Gold-Bitcoin", "Gold-3", "Coin-3", "Dollar-3"))
    assert queens.three_rank() is Rank.QUEEN
    assert threes.three_rank() is Rank.RANK3
    assert queens.compare(threes) == 1
    assert Penthouse().evaluate(hand("Diamond-Queen", "Gold-Queen", "Coin-Queen", "Gold-3", "Coin-4")) is None


def test_msc_hand_flush_and_compare():
    high = MscHand().evaluate(hand("Dollar-King", "Dollar-9", "Dollar-7", "Dollar-4", "Dollar-2"))
    low = MscHand().evaluate(hand("Coin-King", "Coin-9", "Coin-6", "Coin-4", "Coin-2"))
    assert isinstance(high, MscHand)
    assert high.compare(low) == 1
    assert low.compare(high) == -1
    assert MscHand().evaluate(hand("Coin-King", "Gold-9")) is None


def test_series_excludes_flush():
    straight = hand("Coin-9", "Gold-8", "Coin-7", "Dollar-6", "Coin-5")
    flush_straight = hand("Coin-9", "Coin-8", "Coin-7", "Coin-6", "Coin-5")
    assert isinstance(Series().evaluate(straight), Series)
    assert Series().evaluate(flush_straight) is None


def test_series_compare_top_card():
    low = Series().evaluate(hand("Coin-9", "Gold-8", "Coin-7", "Dollar-6", "Coin-5"))
    high = Series().evaluate(hand("Gold-10", "Coin-9", "Gold-8", "Coin-7", "Dollar-6"))
    assert high.compare(low) == 1
    assert low.compare(low) == 0


def test_compare_across_kinds_raises():
    series = Series().evaluate(hand("Coin-9", "Gold-8", "Coin-7", "Dollar-6", "Coin-5"))
    msc = MscHand().evaluate(hand("Coin-King", "Coin-9", "Coin-6", "Coin-4", "Coin-2"))
    with pytest.raises(TypeError):
        series.compare(msc)