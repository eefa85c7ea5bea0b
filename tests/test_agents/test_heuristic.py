"""
Tests for the heuristic CPU agent.
"""

import random

import pytest
from fourseat.agents.base import HumanAgent
from fourseat.agents.heuristic import HeuristicAgent, decide, position_of, pot_odds
from fourseat.config import HeuristicConfig
from fourseat.core.betting import legal_actions
from fourseat.core.player import SeatStatus
from fourseat.core.rules import ActionType, GamePhase, Position


class ScriptedRandom:
    """Random source returning a fixed sequence; fails on any extra draw."""

    def __init__(self, values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


# random() == 0.5 gives zero strength jitter
NO_JITTER = 0.5


@pytest.fixture
def preflop(make_state):
    """Seat 2 (big-blind position, dealer 0) facing a 20 bet before the flop."""
    def _make(hole):
        return make_state(
            bets=(0, 10, 0, 20),
            hole_cards=["", "", hole, ""],
            current_bet=20,
            last_raiser=3,
            phase=GamePhase.PREFLOP,
            to_act=2,
            dealer=0,
        )
    return _make


class TestPosition:
    """Tests for position and pot odds."""

    def test_positions_relative_to_dealer(self, make_state):
        state = make_state(dealer=0)
        assert position_of(state.seats[0], state) == Position.LATE
        assert position_of(state.seats[1], state) == Position.EARLY
        assert position_of(state.seats[2], state) == Position.MIDDLE
        assert position_of(state.seats[3], state) == Position.LATE

    def test_positions_wrap(self, make_state):
        state = make_state(dealer=3)
        assert position_of(state.seats[0], state) == Position.EARLY
        assert position_of(state.seats[1], state) == Position.MIDDLE
        assert position_of(state.seats[3], state) == Position.LATE

    def test_pot_odds(self, make_state):
        state = make_state(bets=(0, 10, 0, 20), current_bet=20)
        assert pot_odds(state.seats[0], state) == pytest.approx(0.4)

    def test_pot_odds_nothing_to_call(self, make_state):
        state = make_state(pot=100)
        assert pot_odds(state.seats[0], state) == 0.0


class TestDecide:
    """Tests for the decision ladder."""

    def test_no_legal_actions_folds(self, make_state):
        state = make_state(statuses=[SeatStatus.FOLDED] + [SeatStatus.ACTIVE] * 3)
        assert decide(state.seats[0], state, ScriptedRandom([])) == (ActionType.FOLD, 0)

    def test_trash_folds_to_a_bet(self, preflop):
        state = preflop("7c 2d")
        assert decide(state.seats[2], state, ScriptedRandom([NO_JITTER])) == (ActionType.FOLD, 0)

    def test_monster_raises_three_min_raises(self, preflop):
        state = preflop("As Ah")
        rng = ScriptedRandom([NO_JITTER, 0.9, 0.9])
        assert decide(state.seats[2], state, rng) == (ActionType.RAISE, 60)

    def test_monster_sometimes_shoves(self, preflop):
        state = preflop("As Ah")
        rng = ScriptedRandom([NO_JITTER, 0.9, 0.1])
        assert decide(state.seats[2], state, rng) == (ActionType.ALL_IN, 0)

    def test_trap_slows_down(self, preflop):
        """A trapped monster drops a tier and raises two min-raises."""
        state = preflop("As Ah")
        rng = ScriptedRandom([NO_JITTER, 0.01])
        assert decide(state.seats[2], state, rng) == (ActionType.RAISE, 40)

    def test_small_call(self, preflop):
        state = preflop("Jc 9d")
        # jitter +8: aggression 23
        assert decide(state.seats[2], state, ScriptedRandom([0.9])) == (ActionType.CALL, 0)

    def test_weak_hand_folds_to_big_bet(self, make_state):
        state = make_state(
            bets=(0, 200, 0, 0),
            hole_cards=["", "", "Jc 9d", ""],
            current_bet=200,
            phase=GamePhase.PREFLOP,
            to_act=2,
        )
        assert decide(state.seats[2], state, ScriptedRandom([0.9])) == (ActionType.FOLD, 0)

    def test_medium_hand_bets_two_blinds(self, make_state):
        state = make_state(
            hole_cards=["", "", "9c 9d", ""],
            community="2h 5s Jc",
            to_act=2,
        )
        assert decide(state.seats[2], state, ScriptedRandom([NO_JITTER])) == (ActionType.BET, 40)

    def test_medium_hand_calls_from_early_position(self, make_state):
        state = make_state(
            bets=(0, 0, 100, 0),
            hole_cards=["", "9c 9d", "", ""],
            community="2h 5s Jc",
            current_bet=100,
            last_raiser=2,
            acted=(2,),
            to_act=1,
        )
        assert decide(state.seats[1], state, ScriptedRandom([NO_JITTER])) == (ActionType.CALL, 0)

    def test_late_position_checks_weak_hand(self, make_state):
        state = make_state(hole_cards=["", "", "", "Ac 9d"], community="2h 5s Jc",
                           to_act=3, dealer=3)
        rng = ScriptedRandom([NO_JITTER, 0.5])
        assert decide(state.seats[3], state, rng) == (ActionType.CHECK, 0)

    def test_late_position_bluff(self, make_state):
        state = make_state(hole_cards=["", "", "", "Ac 9d"], community="2h 5s Jc",
                           to_act=3, dealer=3)
        rng = ScriptedRandom([NO_JITTER, 0.05])
        assert decide(state.seats[3], state, rng) == (ActionType.BET, 60)

    def test_bet_clamped_to_stack(self, make_state):
        state = make_state(chips=(1000, 1000, 25, 1000), hole_cards=["", "", "9c 9d", ""],
                           community="2h 5s Jc", to_act=2)
        assert decide(state.seats[2], state, ScriptedRandom([NO_JITTER])) == (ActionType.BET, 25)

    def test_tight_personality(self, preflop):
        """Thresholds come from the config."""
        config = HeuristicConfig(fold_threshold=200)
        state = preflop("As Ah")
        assert decide(state.seats[2], state, random.Random(0), config) == (ActionType.FOLD, 0)


class TestHeuristicAgent:
    """Tests for the agent wrapper."""

    @pytest.mark.parametrize("seed", range(30))
    def test_always_legal(self, engine, hand_state, seed):
        agent = HeuristicAgent(rng=random.Random(seed))
        action, amount = agent.act(0, hand_state)
        assert action in legal_actions(hand_state.seats[0], hand_state)
        if action in (ActionType.BET, ActionType.RAISE):
            assert amount >= 1
        engine.apply_player_action(hand_state, 0, action, amount)

    def test_seeded_agents_agree(self, hand_state):
        a = HeuristicAgent(rng=random.Random(9))
        b = HeuristicAgent(rng=random.Random(9))
        assert [a.act(0, hand_state) for _ in range(5)] == [b.act(0, hand_state) for _ in range(5)]

    def test_human_agent_does_not_decide(self, hand_state):
        with pytest.raises(NotImplementedError):
            HumanAgent("You").act(0, hand_state)
