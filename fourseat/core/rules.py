"""
Texas Hold'em rules and constants for a fixed four-seat table.

Seat order is fixed; the dealer button rotates to the next seat holding
chips. The small blind sits left of the dealer, the big blind left of the
small blind (seats without chips are skipped), and the first seat to act
preflop is the next seat able to act after the big blind. After the flop
the first seat able to act left of the dealer opens each round.
"""

from enum import Enum
from typing import Callable, Optional

from fourseat.config import NUM_SEATS


class GamePhase(Enum):
    """
    Phases of a hand.

    The DEAL_* phases are transitional: a betting round has closed and the
    next street is waiting to be dealt. SHOWDOWN with no winners yet means
    the showdown is pending.
    """
    PREFLOP = "preflop"
    DEAL_FLOP = "deal_flop"
    FLOP = "flop"
    DEAL_TURN = "deal_turn"
    TURN = "turn"
    DEAL_RIVER = "deal_river"
    RIVER = "river"
    SHOWDOWN = "showdown"


class ActionType(Enum):
    """Possible seat actions."""
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"
    ALL_IN = "all-in"


class Position(Enum):
    """Coarse position relative to the dealer button."""
    EARLY = "early"    # small blind
    MIDDLE = "middle"  # big blind
    LATE = "late"      # everyone else, including the button


MIN_PLAYERS = 2

# Cards per street
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

BETTING_PHASES = (GamePhase.PREFLOP, GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER)

# Phase entered when the betting round of a street closes
ROUND_CLOSED_PHASE = {
    GamePhase.PREFLOP: GamePhase.DEAL_FLOP,
    GamePhase.FLOP: GamePhase.DEAL_TURN,
    GamePhase.TURN: GamePhase.DEAL_RIVER,
    GamePhase.RIVER: GamePhase.SHOWDOWN,
}

# Street dealt from each transitional phase: (cards, resulting phase, label)
STREETS = {
    GamePhase.DEAL_FLOP: (FLOP_CARDS, GamePhase.FLOP, "Flop"),
    GamePhase.DEAL_TURN: (TURN_CARDS, GamePhase.TURN, "Turn"),
    GamePhase.DEAL_RIVER: (RIVER_CARDS, GamePhase.RIVER, "River"),
}


def next_seat(
    num_seats: int,
    start: int,
    predicate: Callable[[int], bool],
) -> Optional[int]:
    """
    Find the first seat after ``start`` (wrapping) that satisfies ``predicate``.

    ``start`` itself is checked last, after every other seat.

    Returns:
        Seat index, or None when no seat qualifies
    """
    for offset in range(1, num_seats + 1):
        index = (start + offset) % num_seats
        if predicate(index):
            return index
    return None


def seat_offset(seat_index: int, dealer: int, num_seats: int = NUM_SEATS) -> int:
    """Distance from the dealer button going clockwise (0 = dealer)."""
    return (seat_index - dealer + num_seats) % num_seats


def position_for_offset(offset: int) -> Position:
    """
    Map a dealer offset to a coarse position.

    Offset 1 is the small blind (early), offset 2 the big blind (middle),
    every other offset is late.
    """
    if offset == 1:
        return Position.EARLY
    if offset == 2:
        return Position.MIDDLE
    return Position.LATE
