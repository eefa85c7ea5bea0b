"""
Card and Deck values for Texas Hold'em.

Both are immutable: a Deck is never modified in place, drawing returns the
dealt cards together with the remaining deck and callers continue with the
remainder.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import List, Tuple
from enum import IntEnum

from fourseat.core.errors import InsufficientCards


class Suit(IntEnum):
    """Card suits. The integer values only serve as identifiers."""
    CLUBS = 0     # ♣
    DIAMONDS = 1  # ♦
    HEARTS = 2    # ♥
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks; the integer value is the rank value used for scoring."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


@dataclass(frozen=True)
class Card:
    """
    A playing card.

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As"), Card.from_string("A♠"),
      Card.from_string("10h")

    ``value`` is precomputed from the rank (2..14, Ace high).
    """

    rank: Rank
    suit: Suit
    value: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rank", Rank(self.rank))
        object.__setattr__(self, "suit", Suit(self.suit))
        object.__setattr__(self, "value", int(self.rank))

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "2c" (rank + suit char)
        - "A♠", "K♥", "T♦", "2♣" (rank + suit symbol)
        - "10s" (ten written out)
        """
        s = s.strip()
        if s.startswith("10"):
            s = "T" + s[2:]
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_char = s[0].upper()
        suit_part = s[1]

        if rank_char not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(CHAR_TO_RANK[rank_char], suit)

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Kh'."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        return {
            "rank": RANK_CHARS[self.rank],
            "suit": SUIT_SYMBOLS[self.suit],
            "value": self.value,
            "text": str(self),
            "color": self.color,
        }


@dataclass(frozen=True)
class Deck:
    """
    An ordered, duplicate-free sequence of cards.

    Usage:
        deck = Deck.build().shuffle(rng)
        hole_cards, deck = deck.draw(2)
        flop, deck = deck.draw(3)
    """

    cards: Tuple[Card, ...] = ()

    @classmethod
    def build(cls) -> Deck:
        """Return the 52 canonical cards."""
        return cls(tuple(Card(rank, suit) for suit in Suit for rank in Rank))

    def shuffle(self, rng: random.Random) -> Deck:
        """Return a uniformly shuffled copy (Fisher-Yates via ``rng.shuffle``)."""
        cards = list(self.cards)
        rng.shuffle(cards)
        return Deck(tuple(cards))

    def draw(self, n: int = 1) -> Tuple[List[Card], Deck]:
        """
        Take ``n`` cards off the top (the end of the sequence).

        Returns:
            Tuple of (dealt cards, remaining deck)

        Raises:
            InsufficientCards: If not enough cards remain.
        """
        if n > len(self.cards):
            raise InsufficientCards(n, len(self.cards))
        if n <= 0:
            return [], self
        dealt = list(reversed(self.cards[-n:]))
        return dealt, Deck(self.cards[:-n])

    def __len__(self) -> int:
        return len(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def __repr__(self) -> str:
        return f"Deck({len(self.cards)} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "As Kh Td" (space-separated)
    - "AsKhTd" (no separator, 2 chars each)
    - "A♠ K♥ T♦" (with symbols)
    """
    cards_str = cards_str.strip()

    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    result = []
    i = 0
    while i < len(cards_str):
        chunk = cards_str[i:i + 2]
        if len(chunk) == 2 and (chunk[1] in SYMBOL_TO_SUIT or chunk[1].lower() in CHAR_TO_SUIT):
            result.append(Card.from_string(chunk))
            i += 2
        else:
            raise ValueError(f"Cannot parse card at position {i}: {cards_str[i:]}")

    return result
