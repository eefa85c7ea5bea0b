"""
Betting engine for a single betting round.

Legality is seat-scoped: ``legal_actions`` lists what the seat may do
given the live RoundBetting, and ``apply_action`` validates against that
list before moving any chips. Requested amounts are always clamped to the
seat's stack, so callers must read the resulting state rather than assume
the request was honored in full.

A bet, a raise, or an all-in that lifts the current bet resets the round:
the acting seat becomes the last raiser and the acted set restarts with
it. Folds, checks and calls only append to the acted set.
"""

from __future__ import annotations
from typing import List, Optional
from dataclasses import replace
import logging

from fourseat.core.errors import IllegalAction
from fourseat.core.player import Seat, SeatStatus
from fourseat.core.rules import ActionType, next_seat
from fourseat.core.state import GameState, RoundBetting


logger = logging.getLogger(__name__)


def call_amount(seat: Seat, state: GameState) -> int:
    """Chips the seat must add to match the current bet."""
    return max(0, state.betting.current_bet - seat.bet)


def legal_actions(seat: Seat, state: GameState) -> List[ActionType]:
    """
    List the actions available to a seat.

    Returns an empty list for any seat that is not ACTIVE. The order is
    fixed (fold, check, call, bet, raise, all-in) so repeated calls on the
    same state return the same list.
    """
    if seat.status != SeatStatus.ACTIVE:
        return []

    to_call = call_amount(seat, state)
    current_bet = state.betting.current_bet

    actions = [ActionType.FOLD]
    if to_call == 0:
        actions.append(ActionType.CHECK)
    if to_call > 0 and seat.chips >= to_call:
        actions.append(ActionType.CALL)
    if current_bet == 0 and seat.chips > 0:
        actions.append(ActionType.BET)
    if current_bet > 0 and seat.chips > to_call:
        actions.append(ActionType.RAISE)
    if seat.chips > 0:
        actions.append(ActionType.ALL_IN)
    return actions


def apply_action(
    state: GameState,
    seat_index: int,
    action: ActionType,
    amount: int = 0,
) -> GameState:
    """
    Apply one betting action for a seat.

    Args:
        state: Current game state
        seat_index: Seat taking the action
        action: The action type
        amount: Chips for BET, or the raise increment above the call for RAISE.
            Ignored for every other action.

    Returns:
        New game state with the seat, RoundBetting and log updated

    Raises:
        IllegalAction: If the action is not legal for the seat, or a bet or
            raise names fewer than one chip
    """
    if not 0 <= seat_index < state.num_seats:
        raise IllegalAction(f"No seat {seat_index} at this table")

    seat = state.seats[seat_index]
    legal = legal_actions(seat, state)
    if action not in legal:
        raise IllegalAction(
            f"{seat.name} cannot {action.value} "
            f"(legal: {', '.join(a.value for a in legal) or 'none'})"
        )
    if action in (ActionType.BET, ActionType.RAISE) and amount < 1:
        raise IllegalAction(f"{action.value} amount must be at least 1, got {amount}")

    betting = state.betting
    to_call = call_amount(seat, state)

    if action == ActionType.FOLD:
        return _settle(state, seat.fold(), betting.mark_acted(seat_index), f"{seat.name} folds")

    if action == ActionType.CHECK:
        return _settle(state, seat, betting.mark_acted(seat_index), f"{seat.name} checks")

    if action == ActionType.CALL:
        seat, actual = seat.commit(to_call)
        return _settle(
            state, seat, betting.mark_acted(seat_index), f"{seat.name} calls {actual}"
        )

    if action == ActionType.BET:
        seat, actual = seat.commit(amount)
        betting = _reopen(seat, min_raise=actual)
        return _settle(state, seat, betting, f"{seat.name} bets {actual}")

    if action == ActionType.RAISE:
        seat, actual = seat.commit(to_call + amount)
        betting = _reopen(seat, min_raise=amount)
        return _settle(state, seat, betting, f"{seat.name} raises to {seat.bet}")

    # ALL_IN
    seat, actual = seat.commit(seat.chips)
    if seat.bet > betting.current_bet:
        increment = seat.bet - betting.current_bet
        betting = _reopen(seat, min_raise=increment)
    else:
        betting = betting.mark_acted(seat_index)
    return _settle(state, seat, betting, f"{seat.name} goes all-in with {actual}")


def _reopen(seat: Seat, min_raise: int) -> RoundBetting:
    """Round betting after an aggressive action by ``seat``."""
    return RoundBetting(
        current_bet=seat.bet,
        min_raise=min_raise,
        last_raiser=seat.index,
        acted=(seat.index,),
    )


def _settle(state: GameState, seat: Seat, betting: RoundBetting, message: str) -> GameState:
    logger.debug(message)
    return replace(state.with_seat(seat), betting=betting).log(message)


def is_round_complete(state: GameState) -> bool:
    """
    Check whether the current betting round is closed.

    All-in seats never block completion. With no ACTIVE seat the round is
    complete, and so is it with a single ACTIVE seat left, even one facing
    an all-in. Otherwise every ACTIVE seat must have acted since the last
    reset and matched the current bet.
    """
    betting = state.betting
    active = [seat for seat in state.seats if seat.status == SeatStatus.ACTIVE]

    if len(active) <= 1:
        return True

    return all(
        seat.index in betting.acted and seat.bet == betting.current_bet
        for seat in active
    )


def collect_bets(state: GameState) -> GameState:
    """Sweep every round bet into the pot and reset RoundBetting."""
    swept = state.total_bets
    seats = tuple(replace(seat, bet=0) for seat in state.seats)
    logger.debug(f"Collected {swept} into pot of {state.pot}")
    return replace(
        state,
        seats=seats,
        pot=state.pot + swept,
        betting=RoundBetting(current_bet=0, min_raise=state.big_blind),
    )


def first_to_act(state: GameState, after: int) -> Optional[int]:
    """Next ACTIVE seat after ``after`` in seat order, wrapping."""
    return next_seat(
        state.num_seats, after, lambda i: state.seats[i].status == SeatStatus.ACTIVE
    )
