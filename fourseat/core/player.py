"""
Seat (player) model for Texas Hold'em.

A Seat is an immutable value. Every change (committing chips, folding,
resetting for a new hand) returns a new Seat; the orchestrator places it
back into the game state.
"""

from __future__ import annotations
from typing import Tuple, Dict, Any, Sequence
from dataclasses import dataclass, replace
from enum import Enum

from fourseat.core.card import Card


class SeatStatus(Enum):
    """Seat states during a hand."""
    ACTIVE = "ACTIVE"     # Still in the hand, can act
    FOLDED = "FOLDED"     # Has folded
    ALL_IN = "ALL_IN"     # No chips behind, no more actions
    OUT = "OUT"           # Eliminated (no chips between hands)


@dataclass(frozen=True)
class Seat:
    """
    One of the fixed seats at the table.

    Attributes:
        index: Stable seat index (0..num_seats-1)
        name: Display name
        chips: Chips behind (not yet committed)
        bet: Chips committed in the current betting round
        hole_cards: Zero or two private cards
        status: Current seat status
        is_human: True when a person controls the seat
        position: Fixed table position
    """
    index: int
    name: str
    chips: int
    bet: int = 0
    hole_cards: Tuple[Card, ...] = ()
    status: SeatStatus = SeatStatus.ACTIVE
    is_human: bool = False
    position: int = 0

    def reset_for_new_hand(self) -> Seat:
        """Clear cards and bet; seats without chips are out."""
        return replace(
            self,
            hole_cards=(),
            bet=0,
            status=SeatStatus.ACTIVE if self.chips > 0 else SeatStatus.OUT,
        )

    def deal_cards(self, cards: Sequence[Card]) -> Seat:
        return replace(self, hole_cards=tuple(cards))

    def commit(self, amount: int) -> Tuple[Seat, int]:
        """
        Move chips from the stack into the current bet.

        The amount is clamped to the chips available; a seat that commits
        its last chip becomes ALL_IN.

        Returns:
            Tuple of (updated seat, amount actually committed)
        """
        actual = max(0, min(amount, self.chips))
        chips = self.chips - actual
        status = SeatStatus.ALL_IN if chips == 0 and actual > 0 else self.status
        return replace(self, chips=chips, bet=self.bet + actual, status=status), actual

    def fold(self) -> Seat:
        return replace(self, status=SeatStatus.FOLDED)

    @property
    def is_active(self) -> bool:
        """Check if the seat can still act."""
        return self.status == SeatStatus.ACTIVE

    @property
    def is_in_hand(self) -> bool:
        """Check if the seat still contests the pot (not folded, not out)."""
        return self.status in (SeatStatus.ACTIVE, SeatStatus.ALL_IN)

    def to_dict(self, hide_cards: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary for serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "index": self.index,
            "name": self.name,
            "chips": self.chips,
            "bet": self.bet,
            "status": self.status.value,
            "is_human": self.is_human,
            "position": self.position,
        }

        if not hide_cards:
            result["hole_cards"] = [card.to_dict() for card in self.hole_cards]

        return result

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"Seat {self.index} {self.name} [{cards_str}] ${self.chips}"
