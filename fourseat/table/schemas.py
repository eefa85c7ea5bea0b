"""
Pydantic schemas for the observable table state.

The core always computes full information: every seat's hole cards are
included. Hiding CPU cards before showdown is the presentation's decision.
"""

from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel

from fourseat.core.card import Card
from fourseat.core.player import Seat
from fourseat.core.state import GameState


class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    value: int
    text: str
    color: str

    @classmethod
    def from_card(cls, card: Card) -> CardSchema:
        return cls(**card.to_dict())


class SeatSchema(BaseModel):
    """One seat as seen by the presentation layer."""
    index: int
    name: str
    chips: int
    bet: int
    status: str
    is_human: bool
    hole_cards: List[CardSchema] = []

    @classmethod
    def from_seat(cls, seat: Seat) -> SeatSchema:
        return cls(
            index=seat.index,
            name=seat.name,
            chips=seat.chips,
            bet=seat.bet,
            status=seat.status.value,
            is_human=seat.is_human,
            hole_cards=[CardSchema.from_card(c) for c in seat.hole_cards],
        )


class LogEntrySchema(BaseModel):
    hand_number: int
    text: str


class TableStateSchema(BaseModel):
    """Complete observable state of the table."""
    seats: List[SeatSchema]
    community_cards: List[CardSchema]
    pot: int
    current_bet: int
    min_raise: int
    phase: str
    to_act: Optional[int] = None
    dealer: int
    hand_number: int
    messages: List[LogEntrySchema]
    winners: Optional[List[int]] = None
    game_over: bool = False

    @classmethod
    def from_state(cls, state: GameState) -> TableStateSchema:
        return cls(
            seats=[SeatSchema.from_seat(s) for s in state.seats],
            community_cards=[CardSchema.from_card(c) for c in state.community_cards],
            pot=state.pot,
            current_bet=state.betting.current_bet,
            min_raise=state.betting.min_raise,
            phase=state.phase.value,
            to_act=state.to_act,
            dealer=state.dealer,
            hand_number=state.hand_number,
            messages=[
                LogEntrySchema(hand_number=e.hand_number, text=e.text) for e in state.messages
            ],
            winners=list(state.winners) if state.winners is not None else None,
            game_over=state.game_over,
        )
