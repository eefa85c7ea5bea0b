"""
Texas Hold'em Game Engine - State Machine Implementation.

This module orchestrates a hand from blinds to payout:
- Dealer button rotation and blind posting
- Acting-seat advancement and betting-round closure
- Street dealing (flop, turn, river) and the all-in run-out
- Default win when a single seat is left in the hand
- Showdown evaluation and chip distribution

The engine never holds game state. Every method maps a GameState to a new
GameState, and ``transition`` is the reducer over inbound commands. Delays
are not applied here: a transition returns effects (``ScheduledCommand``,
``CpuTurn``) that tell the driver what to run next and after how long.

Usage:
    engine = TexasHoldemEngine(TableConfig(), random.Random(7))
    result = engine.transition(engine.initialize_game(), StartGame())
    state, effects = result.state, result.effects
"""

from __future__ import annotations
from typing import Optional, Tuple, Union
from dataclasses import dataclass, replace
import logging
import random

from fourseat.config import TableConfig
from fourseat.core.card import Deck
from fourseat.core.errors import IllegalAction, InsufficientCards
from fourseat.core.hand import evaluate_hand, find_winners
from fourseat.core.player import SeatStatus
from fourseat.core.rules import (
    GamePhase, ActionType,
    MIN_PLAYERS, HOLE_CARDS,
    ROUND_CLOSED_PHASE, STREETS,
    next_seat,
)
from fourseat.core.betting import (
    apply_action, is_round_complete, collect_bets, first_to_act,
)
from fourseat.core.state import GameState, RoundBetting, initialize_game
from fourseat.table.commands import (
    Command,
    StartGame, StartNewHand, PlayerAction, AdvanceToNextPlayer,
    DealStreet, RunShowdown, EndHand, RestartGame,
)


logger = logging.getLogger(__name__)

GAME_OVER_MESSAGE = "Game Over! Not enough players with chips."


@dataclass(frozen=True)
class ScheduledCommand:
    """Run ``command`` after ``delay`` seconds unless cancelled."""
    command: Command
    delay: float


@dataclass(frozen=True)
class CpuTurn:
    """Ask the CPU agent of ``seat`` for a decision after ``delay`` seconds."""
    seat: int
    delay: float


Effect = Union[ScheduledCommand, CpuTurn]


@dataclass(frozen=True)
class Transition:
    """Result of applying one command."""
    state: GameState
    effects: Tuple[Effect, ...] = ()


class TexasHoldemEngine:
    """
    Stateless Texas Hold'em orchestrator.

    Args:
        config: Table settings (defaults to a standard four-seat table)
        rng: Random source used for shuffling. Seed it for reproducible hands.
    """

    def __init__(
        self,
        config: Optional[TableConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or TableConfig()
        self.rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Reducer
    # ------------------------------------------------------------------

    def transition(self, state: GameState, command: Command) -> Transition:
        """
        Apply an inbound command to ``state``.

        Raises:
            IllegalAction: If a PlayerAction is rejected. ``state`` is untouched.
        """
        if isinstance(command, StartGame):
            new_state = self.start_new_hand(self.initialize_game())
            return Transition(new_state, self._follow_up(new_state))

        if isinstance(command, StartNewHand):
            new_state = self.start_new_hand(state)
            return Transition(new_state, self._follow_up(new_state))

        if isinstance(command, PlayerAction):
            new_state = self.apply_player_action(
                state, command.seat, command.action, command.amount
            )
            if new_state.winners is not None:
                return Transition(new_state)
            return Transition(
                new_state,
                (ScheduledCommand(AdvanceToNextPlayer(), self.config.action_delay),),
            )

        if isinstance(command, AdvanceToNextPlayer):
            new_state = self.advance_to_next_player(state)
            return Transition(new_state, self._follow_up(new_state))

        if isinstance(command, DealStreet):
            new_state = self.deal_street(state)
            return Transition(new_state, self._follow_up(new_state))

        if isinstance(command, RunShowdown):
            return Transition(self.run_showdown(state))

        if isinstance(command, EndHand):
            return Transition(self.end_hand(state))

        if isinstance(command, RestartGame):
            return Transition(self.restart_game())

        raise TypeError(f"Unknown command: {command!r}")

    def _follow_up(self, state: GameState) -> Tuple[Effect, ...]:
        """Effects that keep the hand moving from ``state``."""
        if state.game_over or state.winners is not None:
            return ()
        if state.phase in STREETS:
            return (ScheduledCommand(DealStreet(), self.config.phase_delay),)
        if state.phase == GamePhase.SHOWDOWN:
            return (ScheduledCommand(RunShowdown(), self.config.phase_delay),)

        seat = state.current_seat
        if seat is not None and not seat.is_human:
            return (CpuTurn(seat.index, self.config.cpu_think_delay),)
        return ()

    # ------------------------------------------------------------------
    # Table lifecycle
    # ------------------------------------------------------------------

    def initialize_game(self) -> GameState:
        """Fresh table: full stacks, no hand dealt."""
        return initialize_game(self.config)

    def restart_game(self) -> GameState:
        logger.info("Restarting game")
        return self.initialize_game()

    def start_new_hand(self, state: GameState) -> GameState:
        """
        Start the next hand.

        Rotates the button to the next seat with chips, deals two hole cards
        to every ACTIVE seat in seat order, and posts the blinds. Seats
        without chips are skipped for the button and both blinds.

        With fewer than two funded seats the game is over and no hand is
        dealt.
        """
        funded = [seat for seat in state.seats if seat.chips > 0]
        if len(funded) < MIN_PLAYERS:
            logger.warning(f"Cannot start hand: only {len(funded)} seat(s) with chips")
            return replace(state, game_over=True, to_act=None).log(GAME_OVER_MESSAGE)

        n = state.num_seats
        hand_number = state.hand_number + 1
        dealer = next_seat(n, state.dealer, lambda i: state.seats[i].chips > 0)

        seats = [seat.reset_for_new_hand() for seat in state.seats]
        deck = Deck.build().shuffle(self.rng)
        for i, seat in enumerate(seats):
            if seat.status == SeatStatus.ACTIVE:
                cards, deck = self._draw(deck, HOLE_CARDS)
                seats[i] = seat.deal_cards(cards)

        small_blind_seat = next_seat(n, dealer, lambda i: seats[i].chips > 0)
        big_blind_seat = next_seat(n, small_blind_seat, lambda i: seats[i].chips > 0)
        seats[small_blind_seat], sb_amount = seats[small_blind_seat].commit(state.small_blind)
        seats[big_blind_seat], bb_amount = seats[big_blind_seat].commit(state.big_blind)

        logger.info(f"Starting hand #{hand_number} (dealer: seat {dealer})")
        logger.debug(
            f"Blinds posted: SB seat {small_blind_seat}={sb_amount} "
            f"BB seat {big_blind_seat}={bb_amount}"
        )

        state = replace(
            state,
            seats=tuple(seats),
            community_cards=(),
            pot=0,
            side_pots=(),
            deck=deck,
            dealer=dealer,
            to_act=None,
            phase=GamePhase.PREFLOP,
            betting=RoundBetting(
                current_bet=state.big_blind,
                min_raise=state.big_blind,
                last_raiser=big_blind_seat,
            ),
            hand_number=hand_number,
            winners=None,
            evaluations=(),
            game_over=False,
        ).log(f"Hand #{hand_number} - Blinds posted")

        to_act = first_to_act(state, big_blind_seat)
        if to_act is None or is_round_complete(state):
            return self._close_round(state)
        return replace(state, to_act=to_act)

    def end_hand(self, state: GameState) -> GameState:
        """Clear the winner set once the presentation has shown it."""
        return replace(state, winners=None, to_act=None)

    # ------------------------------------------------------------------
    # Betting
    # ------------------------------------------------------------------

    def apply_player_action(
        self,
        state: GameState,
        seat_index: int,
        action: ActionType,
        amount: int = 0,
    ) -> GameState:
        """
        Apply an action for the seat whose turn it is.

        The acting seat is cleared until the next AdvanceToNextPlayer. If
        only one seat is left in the hand afterwards, it wins immediately.

        Raises:
            IllegalAction: If no betting round is running, the seat is not
                the one to act, or the action is not legal for it
        """
        if not state.is_betting_phase:
            raise IllegalAction(f"No betting round in progress (phase: {state.phase.value})")
        if seat_index != state.to_act:
            raise IllegalAction(
                f"Seat {seat_index} cannot act: waiting on seat {state.to_act}"
            )

        state = apply_action(state, seat_index, action, amount)

        in_hand = [seat for seat in state.seats if seat.is_in_hand]
        if len(in_hand) == 1:
            return self._award_default_win(state, in_hand[0].index)
        return replace(state, to_act=None)

    def advance_to_next_player(self, state: GameState) -> GameState:
        """
        Move the turn to the next ACTIVE seat, or close the betting round.

        Closing sweeps the bets into the pot and enters the dealing phase of
        the next street (or the showdown after the river). Outside a betting
        round this is a no-op.
        """
        if not state.is_betting_phase:
            return state

        if state.to_act is not None:
            start = state.to_act
        elif state.betting.acted:
            start = state.betting.acted[-1]
        else:
            start = state.dealer

        next_index = first_to_act(state, start)
        if next_index is None or is_round_complete(state):
            return self._close_round(state)
        return replace(state, to_act=next_index)

    def _close_round(self, state: GameState) -> GameState:
        phase = ROUND_CLOSED_PHASE[state.phase]
        logger.debug(f"Betting round closed in {state.phase.value}, next: {phase.value}")
        return replace(collect_bets(state), phase=phase, to_act=None)

    def _award_default_win(self, state: GameState, winner: int) -> GameState:
        """Give the pot and every outstanding bet to the last seat in the hand."""
        total = state.pot_total
        seats = []
        for seat in state.seats:
            chips = seat.chips + total if seat.index == winner else seat.chips
            status = SeatStatus.OUT if chips == 0 else seat.status
            seats.append(replace(seat, chips=chips, bet=0, status=status))

        name = state.seats[winner].name
        logger.info(f"Hand #{state.hand_number}: {name} wins {total} uncontested")
        return replace(
            state,
            seats=tuple(seats),
            pot=0,
            to_act=None,
            phase=GamePhase.SHOWDOWN,
            winners=(winner,),
        ).log(f"{name} wins {total} chips!")

    # ------------------------------------------------------------------
    # Dealing
    # ------------------------------------------------------------------

    def deal_street(self, state: GameState) -> GameState:
        """
        Deal the street waiting in a DEAL_* phase and open its betting round.

        The first seat to act is the next ACTIVE seat after the dealer. When
        nobody can bet (everyone else is all-in) the round closes straight
        away so the board runs out to showdown.
        """
        if state.phase not in STREETS:
            return state

        count, phase, label = STREETS[state.phase]
        cards, deck = self._draw(state.deck, count)
        state = replace(
            state,
            community_cards=state.community_cards + tuple(cards),
            deck=deck,
            phase=phase,
        ).log(f"{label} dealt")
        logger.debug(f"{label}: {' '.join(str(c) for c in state.community_cards)}")

        to_act = first_to_act(state, state.dealer)
        if to_act is None or is_round_complete(state):
            return self._close_round(state)
        return replace(state, to_act=to_act)

    def _draw(self, deck: Deck, count: int):
        try:
            return deck.draw(count)
        except InsufficientCards:
            logger.error(f"Deck exhausted drawing {count} card(s); aborting hand")
            raise

    # ------------------------------------------------------------------
    # Showdown
    # ------------------------------------------------------------------

    def run_showdown(self, state: GameState) -> GameState:
        """
        Evaluate every seat still in the hand and pay the winners.

        The pot plus any outstanding bets is split evenly between tied
        winners, floored to whole chips; the remainder is not tracked. A
        showdown that already has winners, or has nothing to pay, is a no-op.
        """
        if (state.phase != GamePhase.SHOWDOWN
                or state.winners is not None
                or state.pot_total == 0):
            return state

        board = list(state.community_cards)
        evaluations = tuple(
            evaluate_hand(list(seat.hole_cards) + board)
            if seat.is_in_hand and seat.hole_cards else None
            for seat in state.seats
        )
        winners = find_winners(state.seats, evaluations)
        if not winners:
            return replace(state, evaluations=evaluations)

        share = state.pot_total // len(winners)
        seats = []
        for seat in state.seats:
            chips = seat.chips + share if seat.index in winners else seat.chips
            status = SeatStatus.OUT if chips == 0 else seat.status
            seats.append(replace(seat, chips=chips, bet=0, status=status))

        names = ", ".join(state.seats[i].name for i in winners)
        description = evaluations[winners[0]].description
        logger.info(
            f"Hand #{state.hand_number} showdown: {names} win(s) {share} each "
            f"with {description}"
        )
        return replace(
            state,
            seats=tuple(seats),
            pot=0,
            to_act=None,
            winners=tuple(winners),
            evaluations=evaluations,
        ).log(f"{names} wins with {description}!")
