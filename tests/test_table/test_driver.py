"""
Tests for the asyncio table driver.

Each test runs its own event loop through asyncio.run.
"""

import asyncio
import random

import pytest
from fourseat.agents.base import HumanAgent
from fourseat.agents.heuristic import HeuristicAgent
from fourseat.config import TableConfig
from fourseat.core.game import TexasHoldemEngine
from fourseat.core.player import SeatStatus
from fourseat.core.rules import ActionType
from fourseat.table.commands import PlayerAction, RestartGame, StartGame, StartNewHand
from fourseat.table.driver import TableDriver


@pytest.fixture
def cpu_driver():
    """Four CPU seats with seeded agents and no delays."""
    config = TableConfig(human_seats=[]).without_delays()
    agents = {i: HeuristicAgent(rng=random.Random(100 + i)) for i in range(4)}
    return lambda: TableDriver(
        TexasHoldemEngine(config, random.Random(1)), agents=agents, rng=random.Random(2)
    )


@pytest.fixture
def human_driver():
    """Default table (seat 0 human) with no delays."""
    config = TableConfig().without_delays()
    agents = {i: HeuristicAgent(rng=random.Random(200 + i)) for i in (1, 2, 3)}
    return lambda: TableDriver(
        TexasHoldemEngine(config, random.Random(3)), agents=agents, rng=random.Random(4)
    )


@pytest.fixture
def slow_driver():
    """Default table with long delays, for cancellation tests."""
    config = TableConfig(
        action_delay=10, cpu_think_delay=10, cpu_think_jitter=0, phase_delay=10,
    )
    return lambda: TableDriver(TexasHoldemEngine(config, random.Random(5)), rng=random.Random(6))


def total_chips(state):
    return sum(seat.chips + seat.bet for seat in state.seats) + state.pot


class TestDriverSetup:
    """Tests for driver construction."""

    def test_default_agents(self):
        driver = TableDriver()
        assert sorted(driver.agents) == [0, 1, 2, 3]
        assert isinstance(driver.agents[0], HumanAgent)
        assert all(isinstance(driver.agents[i], HeuristicAgent) for i in (1, 2, 3))

    def test_explicit_agents_kept(self):
        agent = HeuristicAgent(name="Bot")
        driver = TableDriver(agents={0: agent})
        assert driver.agents[0] is agent

    def test_starts_before_first_hand(self):
        driver = TableDriver()
        assert driver.state.hand_number == 0
        assert driver.pending == 0


class TestCpuPlay:
    """Tests for hands played entirely by CPU seats."""

    def test_hand_plays_out(self, cpu_driver):
        async def scenario():
            driver = cpu_driver()
            state = await driver.play_hand()
            return driver, state

        driver, state = asyncio.run(scenario())
        assert state.hand_number == 1
        assert state.winners is not None
        assert driver.pending == 0
        assert 4000 - 3 <= total_chips(state) <= 4000

    def test_many_hands(self, cpu_driver):
        async def scenario():
            driver = cpu_driver()
            for _ in range(15):
                state = await driver.play_hand()
                assert state.game_over or state.winners is not None
                assert all(seat.chips >= 0 for seat in state.seats)
                assert 4000 - 3 * state.hand_number <= total_chips(state) <= 4000
                if state.game_over:
                    break
            return driver.state

        state = asyncio.run(scenario())
        assert state.hand_number >= 1


class TestHumanPlay:
    """Tests for a table with a human seat."""

    def test_waits_for_human(self, human_driver):
        async def scenario():
            driver = human_driver()
            await driver.dispatch(StartGame())
            await driver.wait_idle()
            return driver

        driver = asyncio.run(scenario())
        assert driver.state.to_act == 0
        assert driver.pending == 0

    def test_human_fold_lets_cpus_finish(self, human_driver):
        async def scenario():
            driver = human_driver()
            await driver.dispatch(StartGame())
            accepted = await driver.dispatch(PlayerAction(seat=0, action=ActionType.FOLD))
            await driver.wait_idle()
            return driver, accepted

        driver, accepted = asyncio.run(scenario())
        assert accepted
        assert driver.state.seats[0].status == SeatStatus.FOLDED
        assert driver.state.winners is not None
        assert 0 not in driver.state.winners

    def test_out_of_turn_rejected(self, human_driver):
        async def scenario():
            driver = human_driver()
            await driver.dispatch(StartGame())
            before = driver.state
            accepted = await driver.dispatch(PlayerAction(seat=2, action=ActionType.FOLD))
            return driver, before, accepted

        driver, before, accepted = asyncio.run(scenario())
        assert not accepted
        assert driver.state is before
        assert driver.pending == 0


class TestCancellation:
    """Pending transitions never apply to a newer hand."""

    def test_new_hand_cancels_pending_advance(self, slow_driver):
        async def scenario():
            driver = slow_driver()
            await driver.dispatch(StartGame())
            await driver.dispatch(PlayerAction(seat=0, action=ActionType.CALL))
            assert driver.pending == 1
            generation = driver.generation

            await driver.dispatch(StartNewHand())
            await asyncio.sleep(0)
            result = (driver.generation, generation, driver.state, driver.pending)
            await driver.close()
            return result

        new_generation, old_generation, state, pending = asyncio.run(scenario())
        assert new_generation == old_generation + 1
        assert state.hand_number == 2
        assert state.to_act == 1
        # Only the CPU turn of the new hand is scheduled
        assert pending == 1

    def test_restart_cancels_everything(self, slow_driver):
        async def scenario():
            driver = slow_driver()
            await driver.dispatch(StartGame())
            await driver.dispatch(PlayerAction(seat=0, action=ActionType.CALL))
            await driver.dispatch(RestartGame())
            return driver

        driver = asyncio.run(scenario())
        assert driver.pending == 0
        assert driver.state.hand_number == 0
        assert all(seat.chips == 1000 for seat in driver.state.seats)


class TestSubscribers:
    """Tests for state notifications."""

    def test_sync_and_async_subscribers(self, human_driver):
        seen = []

        async def on_state_async(state):
            seen.append(("async", state.hand_number))

        async def scenario():
            driver = human_driver()
            driver.subscribe(lambda state: seen.append(("sync", state.hand_number)))
            driver.subscribe(on_state_async)
            await driver.dispatch(StartGame())

        asyncio.run(scenario())
        assert seen == [("sync", 1), ("async", 1)]

    def test_failing_subscriber_does_not_block(self, human_driver):
        def broken(state):
            raise RuntimeError("render failed")

        async def scenario():
            driver = human_driver()
            driver.subscribe(broken)
            return await driver.dispatch(StartGame()), driver

        accepted, driver = asyncio.run(scenario())
        assert accepted
        assert driver.state.hand_number == 1


class TestHandleMessage:
    """Tests for raw message handling."""

    def test_start_game_message(self, human_driver):
        async def scenario():
            return await human_driver().handle_message({"type": "start_game"})

        response = asyncio.run(scenario())
        assert response["type"] == "state"
        assert response["hand_number"] == 1
        assert len(response["seats"]) == 4

    def test_invalid_message(self, human_driver):
        async def scenario():
            return await human_driver().handle_message({"type": "deal_me_in"})

        response = asyncio.run(scenario())
        assert response["type"] == "error"

    def test_illegal_message(self, human_driver):
        async def scenario():
            driver = human_driver()
            await driver.handle_message({"type": "start_game"})
            return await driver.handle_message(
                {"type": "player_action", "seat": 3, "action": "fold"}
            )

        response = asyncio.run(scenario())
        assert response == {"type": "error", "message": "Illegal command: player_action"}
