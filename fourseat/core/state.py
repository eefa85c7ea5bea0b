"""
Game state aggregate.

GameState is the single authoritative value for a table. It is frozen:
every component produces a new GameState (via ``dataclasses.replace``)
instead of mutating seats or betting bookkeeping in place.
"""

from __future__ import annotations
from typing import Optional, Tuple, TYPE_CHECKING
from dataclasses import dataclass, field, replace

from fourseat.config import TableConfig
from fourseat.core.card import Card, Deck
from fourseat.core.player import Seat
from fourseat.core.rules import GamePhase, BETTING_PHASES

if TYPE_CHECKING:
    from fourseat.core.hand import HandEvaluation


WELCOME_MESSAGE = "Welcome to Texas Hold'em Poker!"


@dataclass(frozen=True)
class RoundBetting:
    """
    Live bet-matching state of the current betting round.

    Attributes:
        current_bet: Highest total commitment a seat must match this round
        min_raise: Smallest legal raise increment
        last_raiser: Seat that made the last bet/raise (or the big blind)
        acted: Seats that acted since the last bet/raise reset, in order
    """
    current_bet: int = 0
    min_raise: int = 0
    last_raiser: Optional[int] = None
    acted: Tuple[int, ...] = ()

    def mark_acted(self, seat_index: int) -> RoundBetting:
        return replace(self, acted=self.acted + (seat_index,))


@dataclass(frozen=True)
class LogEntry:
    """One line of the per-hand message log."""
    hand_number: int
    text: str


@dataclass(frozen=True)
class GameState:
    """
    Complete table state.

    ``side_pots`` is reserved and always empty: all chips go to a single pot.
    ``winners`` stays None until a hand is won by default or at showdown.
    """
    seats: Tuple[Seat, ...]
    small_blind: int
    big_blind: int
    community_cards: Tuple[Card, ...] = ()
    pot: int = 0
    side_pots: Tuple[int, ...] = ()
    deck: Deck = field(default_factory=Deck)
    dealer: int = 0
    to_act: Optional[int] = None
    phase: GamePhase = GamePhase.PREFLOP
    betting: RoundBetting = field(default_factory=RoundBetting)
    hand_number: int = 0
    messages: Tuple[LogEntry, ...] = ()
    winners: Optional[Tuple[int, ...]] = None
    evaluations: Tuple[Optional["HandEvaluation"], ...] = ()
    game_over: bool = False

    @property
    def num_seats(self) -> int:
        return len(self.seats)

    @property
    def message(self) -> str:
        """Most recent log message."""
        return self.messages[-1].text if self.messages else ""

    @property
    def total_bets(self) -> int:
        """Chips committed in the current round and not yet swept."""
        return sum(seat.bet for seat in self.seats)

    @property
    def pot_total(self) -> int:
        """Pot plus every outstanding bet."""
        return self.pot + self.total_bets

    @property
    def is_betting_phase(self) -> bool:
        return self.phase in BETTING_PHASES and self.winners is None

    @property
    def current_seat(self) -> Optional[Seat]:
        """The seat whose turn it is to act."""
        if self.to_act is None or not self.is_betting_phase:
            return None
        return self.seats[self.to_act]

    def with_seat(self, seat: Seat) -> GameState:
        """Return a copy with ``seat`` placed at its index."""
        seats = list(self.seats)
        seats[seat.index] = seat
        return replace(self, seats=tuple(seats))

    def log(self, text: str) -> GameState:
        """Append a message to the log under the current hand number."""
        return replace(self, messages=self.messages + (LogEntry(self.hand_number, text),))

    def messages_for_hand(self, hand_number: int) -> Tuple[str, ...]:
        return tuple(entry.text for entry in self.messages if entry.hand_number == hand_number)


def create_seats(config: TableConfig) -> Tuple[Seat, ...]:
    """Create the fixed seats with full starting stacks."""
    return tuple(
        Seat(
            index=i,
            name=name,
            chips=config.starting_chips,
            is_human=i in config.human_seats,
            position=i,
        )
        for i, name in enumerate(config.seat_names)
    )


def initialize_game(config: Optional[TableConfig] = None) -> GameState:
    """Create the table state at process start (no hand dealt yet)."""
    config = config or TableConfig()
    state = GameState(
        seats=create_seats(config),
        small_blind=config.small_blind,
        big_blind=config.big_blind,
        betting=RoundBetting(min_raise=config.big_blind),
    )
    return state.log(WELCOME_MESSAGE)
