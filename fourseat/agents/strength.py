"""
Hand-strength estimators for the CPU heuristic.

Both estimators return a score on a 0-100 scale. Preflop uses a closed-form
formula over the two hole cards. Postflop looks for the best made hand or
draw across every known card and maps it to a fixed band.
"""

from collections import Counter
from typing import List, Sequence

from fourseat.core.card import Card, Rank


def preflop_strength(hole_cards: Sequence[Card]) -> int:
    """
    Estimate the strength of two hole cards.

    Pairs score 50 + 3 x rank (capped at 100), so aces score 92. Other
    hands build up from the high card, then add suited, connector and
    ace/king bonuses, capped at 95.
    """
    if len(hole_cards) != 2:
        return 0

    high, low = sorted((c.value for c in hole_cards), reverse=True)

    if high == low:
        return min(50 + high * 3, 100)

    strength = 0
    if high >= Rank.JACK:
        strength += (high - 10) * 10

    if hole_cards[0].suit == hole_cards[1].suit:
        strength += 15

    gap = high - low
    if gap == 1:
        strength += 10
    elif gap == 2:
        strength += 5

    if high == Rank.ACE:
        strength += 15
        if low >= Rank.TEN:
            strength += 10

    if high == Rank.KING and low >= Rank.JACK:
        strength += 10

    return min(strength, 95)


def postflop_strength(hole_cards: Sequence[Card], board: Sequence[Card]) -> int:
    """
    Estimate hand strength once community cards are out.

    Made hands map to fixed scores (quads 100, full house 95, flush 90,
    straight 85, trips 70, two pair 60, pair 35 + 2 x pair rank). Without a
    made hand a four-flush scores 45 and four to a straight 40; anything
    else is 10 + the high card.
    """
    if len(hole_cards) != 2:
        return 0
    if not board:
        return preflop_strength(hole_cards)

    cards = list(hole_cards) + list(board)
    values = [c.value for c in cards]
    counts = Counter(values)
    groups = sorted(counts.values(), reverse=True)
    suit_counts = Counter(c.suit for c in cards)
    longest_suit = max(suit_counts.values())
    run = _longest_run(values, ace_low=True)

    if groups[0] >= 4:
        return 100
    if groups[0] >= 3 and len(groups) > 1 and groups[1] >= 2:
        return 95
    if longest_suit >= 5:
        return 90
    if run >= 5:
        return 85
    if groups[0] == 3:
        return 70

    pairs = [value for value, count in counts.items() if count == 2]
    if len(pairs) >= 2:
        return 60
    if pairs:
        return 35 + max(pairs) * 2

    if longest_suit == 4:
        return 45
    if _longest_run(values) >= 4:
        return 40

    return 10 + max(values)


def _longest_run(values: List[int], ace_low: bool = False) -> int:
    """Length of the longest run of consecutive ranks."""
    unique = set(values)
    if ace_low and Rank.ACE in unique:
        unique.add(1)

    longest = 0
    for value in unique:
        if value - 1 in unique:
            continue
        length = 1
        while value + length in unique:
            length += 1
        longest = max(longest, length)
    return longest
