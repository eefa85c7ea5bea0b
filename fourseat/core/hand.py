"""
Hand Evaluation for Texas Hold'em.

This module maps 5 or 7 cards to a single integer score where a higher
score is always a better poker hand and equal hands score equal.

Each category owns a disjoint band of one million points:

    score = category * 1_000_000 + tiebreak

where the tiebreak is a base-15 positional sum over the deciding ranks
(group rank first, then kickers by descending significance). With rank
values of at most 14 and at most five deciding ranks the tiebreak stays
below 760,000, so bands never overlap.

Hand Rankings (best to worst):
10. Royal Flush: A♠ K♠ Q♠ J♠ T♠
 9. Straight Flush: 5 consecutive cards of same suit
 8. Four of a Kind: 4 cards of same rank
 7. Full House: 3 of a kind + pair
 6. Flush: 5 cards of same suit
 5. Straight: 5 consecutive cards
 4. Three of a Kind: 3 cards of same rank
 3. Two Pair: 2 different pairs
 2. One Pair: 2 cards of same rank
 1. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel), whose high card is 5.
"""

from __future__ import annotations
from typing import List, Tuple, Optional, Sequence
from itertools import combinations
from dataclasses import dataclass
from enum import IntEnum
from collections import Counter

from fourseat.core.card import Card, Rank
from fourseat.core.errors import InvalidHandSize
from fourseat.core.player import Seat, SeatStatus


class HandRank(IntEnum):
    """Hand categories; a higher value is a better hand."""
    ROYAL_FLUSH = 10
    STRAIGHT_FLUSH = 9
    FOUR_OF_A_KIND = 8
    FULL_HOUSE = 7
    FLUSH = 6
    STRAIGHT = 5
    THREE_OF_A_KIND = 4
    TWO_PAIR = 3
    ONE_PAIR = 2
    HIGH_CARD = 1


HAND_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.ONE_PAIR: "Pair",
    HandRank.HIGH_CARD: "High Card",
}

BAND_SIZE = 1_000_000
KICKER_BASE = 15


@dataclass(frozen=True)
class HandEvaluation:
    """Result of evaluating a hand. Only computed at showdown."""
    category: HandRank
    score: int
    description: str
    cards: Tuple[Card, ...] = ()

    @property
    def name(self) -> str:
        return HAND_NAMES[self.category]


def evaluate_hand(cards: Sequence[Card]) -> HandEvaluation:
    """
    Evaluate a poker hand of exactly 5 or 7 cards.

    For 7 cards all 21 five-card subsets are scored and the best one is
    returned; when several subsets tie any of them is acceptable.

    Raises:
        InvalidHandSize: If not exactly 5 or 7 cards are provided
    """
    if len(cards) == 5:
        return _evaluate_5_cards(list(cards))

    if len(cards) != 7:
        raise InvalidHandSize(len(cards))

    best: Optional[HandEvaluation] = None
    for combo in combinations(cards, 5):
        evaluation = _evaluate_5_cards(list(combo))
        if best is None or evaluation.score > best.score:
            best = evaluation
    return best


def _evaluate_5_cards(cards: List[Card]) -> HandEvaluation:
    """Evaluate exactly 5 cards."""
    sorted_cards = sorted(cards, key=lambda c: c.value, reverse=True)
    ranks = [c.rank for c in sorted_cards]

    is_flush = len({c.suit for c in cards}) == 1
    straight_high = _straight_high(ranks)

    rank_counts = Counter(ranks)
    counts = sorted(rank_counts.values(), reverse=True)
    # Ranks ordered by group size, then by rank
    grouped = sorted(rank_counts, key=lambda r: (rank_counts[r], r), reverse=True)
    hand = tuple(sorted_cards)

    if straight_high is not None and is_flush:
        if straight_high == Rank.ACE:
            return HandEvaluation(
                HandRank.ROYAL_FLUSH, _score(HandRank.ROYAL_FLUSH, []), "Royal Flush", hand
            )
        return HandEvaluation(
            HandRank.STRAIGHT_FLUSH,
            _score(HandRank.STRAIGHT_FLUSH, [straight_high]),
            f"Straight Flush, {_rank_name(straight_high)} high",
            hand,
        )

    if counts == [4, 1]:
        quad_rank, kicker = grouped
        return HandEvaluation(
            HandRank.FOUR_OF_A_KIND,
            _score(HandRank.FOUR_OF_A_KIND, [quad_rank, kicker]),
            f"Four of a Kind, {_rank_plural(quad_rank)}",
            hand,
        )

    if counts == [3, 2]:
        trips_rank, pair_rank = grouped
        return HandEvaluation(
            HandRank.FULL_HOUSE,
            _score(HandRank.FULL_HOUSE, [trips_rank, pair_rank]),
            f"Full House, {_rank_plural(trips_rank)} over {_rank_plural(pair_rank)}",
            hand,
        )

    if is_flush:
        return HandEvaluation(
            HandRank.FLUSH,
            _score(HandRank.FLUSH, ranks),
            f"Flush, {_rank_name(ranks[0])} high",
            hand,
        )

    if straight_high is not None:
        return HandEvaluation(
            HandRank.STRAIGHT,
            _score(HandRank.STRAIGHT, [straight_high]),
            f"Straight, {_rank_name(straight_high)} high",
            hand,
        )

    if counts == [3, 1, 1]:
        return HandEvaluation(
            HandRank.THREE_OF_A_KIND,
            _score(HandRank.THREE_OF_A_KIND, grouped),
            f"Three of a Kind, {_rank_plural(grouped[0])}",
            hand,
        )

    if counts == [2, 2, 1]:
        high_pair, low_pair, _ = grouped
        return HandEvaluation(
            HandRank.TWO_PAIR,
            _score(HandRank.TWO_PAIR, grouped),
            f"Two Pair, {_rank_plural(high_pair)} and {_rank_plural(low_pair)}",
            hand,
        )

    if counts == [2, 1, 1, 1]:
        return HandEvaluation(
            HandRank.ONE_PAIR,
            _score(HandRank.ONE_PAIR, grouped),
            f"Pair of {_rank_plural(grouped[0])}",
            hand,
        )

    return HandEvaluation(
        HandRank.HIGH_CARD,
        _score(HandRank.HIGH_CARD, ranks),
        f"High Card, {_rank_name(ranks[0])}",
        hand,
    )


def _straight_high(ranks: List[Rank]) -> Optional[Rank]:
    """
    Return the high card of a straight formed by five ranks, or None.

    The wheel (A-2-3-4-5) is a 5-high straight.
    """
    unique_ranks = sorted(set(ranks), reverse=True)
    if len(unique_ranks) != 5:
        return None

    if unique_ranks[0] - unique_ranks[4] == 4:
        return unique_ranks[0]

    if unique_ranks == [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]:
        return Rank.FIVE

    return None


def _score(hand_type: HandRank, deciding_ranks: Sequence[Rank]) -> int:
    """Category band plus a positional tiebreak over the deciding ranks."""
    tiebreak = 0
    for rank in deciding_ranks:
        tiebreak = tiebreak * KICKER_BASE + int(rank)
    return int(hand_type) * BAND_SIZE + tiebreak


def category_of(score: int) -> HandRank:
    """Recover the hand category from a score."""
    return HandRank(score // BAND_SIZE)


def compare_hands(a: HandEvaluation, b: HandEvaluation) -> int:
    """
    Compare two evaluated hands.

    Returns:
        1 if ``a`` wins, -1 if ``b`` wins, 0 if tie
    """
    if a.score > b.score:
        return 1
    if a.score < b.score:
        return -1
    return 0


def find_winners(
    seats: Sequence[Seat],
    evaluations: Sequence[Optional[HandEvaluation]],
) -> List[int]:
    """
    Return the index of every seat holding the best hand.

    Seats that folded or have no evaluation are ignored. Several indices are
    returned when hands tie.
    """
    contenders = [
        (seat.index, evaluation)
        for seat, evaluation in zip(seats, evaluations)
        if evaluation is not None and seat.status != SeatStatus.FOLDED
    ]
    if not contenders:
        return []

    best_score = max(evaluation.score for _, evaluation in contenders)
    return [index for index, evaluation in contenders if evaluation.score == best_score]


def _rank_name(rank: Rank) -> str:
    names = {
        Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
        Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
        Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
        Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
        Rank.ACE: "Ace"
    }
    return names[rank]


def _rank_plural(rank: Rank) -> str:
    name = _rank_name(rank)
    return name + ("es" if rank == Rank.SIX else "s")
