"""
Heuristic CPU agent.

The decision blends hand strength, table position, pot odds and a little
randomness into a single aggression score, then walks a five-tier ladder:

    < 20   check, else fold
    < 40   check, call a small bet, else fold
    < 60   call, small bet, check
    < 80   raise, bet, call, check
    >= 80  sometimes shove, else big raise, big bet, call

Each tier falls through to the first legal action in the order
raise > bet > call > check > fold. Every constant comes from
HeuristicConfig so personalities can differ and tests can pin the
random draws down with a seeded ``random.Random``.
"""

import logging
import random
from typing import Optional, Tuple

from fourseat.config import HeuristicConfig
from fourseat.core.betting import call_amount, legal_actions
from fourseat.core.player import Seat
from fourseat.core.rules import ActionType, GamePhase, Position, position_for_offset, seat_offset
from fourseat.core.state import GameState
from fourseat.agents.base import BaseAgent
from fourseat.agents.strength import preflop_strength, postflop_strength


logger = logging.getLogger(__name__)

DEFAULT_HEURISTIC = HeuristicConfig()


def hand_strength(seat: Seat, state: GameState) -> int:
    """Strength of the seat's hand on the 0-100 scale for the current street."""
    if state.phase == GamePhase.PREFLOP:
        return preflop_strength(seat.hole_cards)
    return postflop_strength(seat.hole_cards, state.community_cards)


def position_of(seat: Seat, state: GameState) -> Position:
    """Coarse position of the seat relative to the dealer button."""
    return position_for_offset(seat_offset(seat.position, state.dealer, state.num_seats))


def pot_odds(seat: Seat, state: GameState) -> float:
    """Share of the final pot the seat must put in to call (0 when nothing to call)."""
    to_call = call_amount(seat, state)
    if to_call <= 0:
        return 0.0
    return to_call / (state.pot_total + to_call)


def decide(
    seat: Seat,
    state: GameState,
    rng=None,
    config: Optional[HeuristicConfig] = None,
) -> Tuple[ActionType, int]:
    """
    Choose an action for a CPU seat.

    Args:
        seat: The deciding seat
        state: Current game state
        rng: Random source (``random.Random`` or the ``random`` module)
        config: Heuristic constants

    Returns:
        Tuple of (action, amount); amount is the bet size for BET, the raise
        increment for RAISE, and 0 otherwise
    """
    rng = rng or random
    config = config or DEFAULT_HEURISTIC

    legal = legal_actions(seat, state)
    if not legal:
        return ActionType.FOLD, 0

    strength = hand_strength(seat, state)
    position = position_of(seat, state)
    odds = pot_odds(seat, state)
    to_call = call_amount(seat, state)

    jitter = rng.random() * 2 * config.strength_jitter - config.strength_jitter
    adjusted = max(0.0, min(100.0, strength + jitter))

    aggression = adjusted
    if position == Position.LATE:
        aggression += config.position_bonus
    elif position == Position.EARLY:
        aggression -= config.position_bonus

    if odds > 0 and adjusted > config.pot_odds_min_strength:
        aggression += (1 - odds) * config.pot_odds_bonus

    # Bluff
    if position == Position.LATE and rng.random() < config.bluff_probability:
        aggression += config.bluff_bonus

    # Trap: slow-play a monster
    if adjusted > config.trap_min_strength and rng.random() < config.trap_probability:
        aggression -= config.trap_penalty

    logger.debug(
        f"{seat.name}: strength={strength} adjusted={adjusted:.1f} "
        f"aggression={aggression:.1f} position={position.value}"
    )

    can_check = ActionType.CHECK in legal
    can_call = ActionType.CALL in legal
    can_bet = ActionType.BET in legal
    can_raise = ActionType.RAISE in legal
    can_all_in = ActionType.ALL_IN in legal
    big_blind = state.big_blind
    min_raise = state.betting.min_raise

    if aggression < config.fold_threshold:
        return (ActionType.CHECK, 0) if can_check else (ActionType.FOLD, 0)

    if aggression < config.passive_threshold:
        if can_check:
            return ActionType.CHECK, 0
        if can_call and to_call < seat.chips * config.small_call_fraction:
            return ActionType.CALL, 0
        return ActionType.FOLD, 0

    if aggression < config.call_threshold:
        if can_call:
            return ActionType.CALL, 0
        if can_bet:
            return ActionType.BET, min(big_blind * config.medium_bet_blinds, seat.chips)
        if can_check:
            return ActionType.CHECK, 0
        return ActionType.FOLD, 0

    if aggression < config.raise_threshold:
        if can_raise:
            return ActionType.RAISE, min(min_raise * config.strong_raise_multiple, seat.chips - to_call)
        if can_bet:
            return ActionType.BET, min(big_blind * config.strong_bet_blinds, seat.chips)
        if can_call:
            return ActionType.CALL, 0
        if can_check:
            return ActionType.CHECK, 0
    else:
        if (can_all_in and adjusted > config.shove_min_strength
                and rng.random() < config.shove_probability):
            return ActionType.ALL_IN, 0
        if can_raise:
            return ActionType.RAISE, min(min_raise * config.monster_raise_multiple, seat.chips - to_call)
        if can_bet:
            return ActionType.BET, min(big_blind * config.monster_bet_blinds, seat.chips)
        if can_call:
            return ActionType.CALL, 0

    if can_check:
        return ActionType.CHECK, 0
    return ActionType.FOLD, 0


class HeuristicAgent(BaseAgent):
    """
    CPU seat driven by ``decide``.

    Args:
        config: Heuristic constants (the personality)
        rng: Random source; seed it for reproducible play
        name: Optional name
    """

    def __init__(
        self,
        config: Optional[HeuristicConfig] = None,
        rng: Optional[random.Random] = None,
        name: Optional[str] = None,
    ):
        super().__init__(name)
        self.config = config or DEFAULT_HEURISTIC
        self.rng = rng or random.Random()

    def act(self, seat_index: int, state: GameState) -> Tuple[ActionType, int]:
        return decide(state.seats[seat_index], state, self.rng, self.config)
