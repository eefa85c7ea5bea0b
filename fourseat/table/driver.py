"""
Asyncio table driver.

The driver owns the one authoritative GameState and runs the engine's
effects on the event loop:
- ScheduledCommand: dispatch the command after its delay
- CpuTurn: after the thinking delay (plus jitter) ask the seat's agent for a
  decision and dispatch it as a PlayerAction

StartGame, StartNewHand and RestartGame cancel every pending task and bump
a generation counter, so a delayed transition scheduled for an earlier
hand is never applied to the new one.

Usage:
    driver = TableDriver(TexasHoldemEngine(config))
    driver.subscribe(render)
    await driver.dispatch(StartGame())
    ...
    await driver.dispatch(PlayerAction(seat=0, action=ActionType.CALL))
"""

from __future__ import annotations
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set, Union
import asyncio
import inspect
import logging
import random

from pydantic import ValidationError

from fourseat.agents.base import BaseAgent, HumanAgent
from fourseat.agents.heuristic import HeuristicAgent
from fourseat.core.errors import IllegalAction
from fourseat.core.game import CpuTurn, Effect, ScheduledCommand, TexasHoldemEngine
from fourseat.core.state import GameState
from fourseat.table.commands import (
    Command, PlayerAction, RESETTING_COMMANDS, StartNewHand, parse_command,
)
from fourseat.table.schemas import TableStateSchema


logger = logging.getLogger(__name__)

Subscriber = Callable[[GameState], Union[None, Awaitable[None]]]


class TableDriver:
    """
    Runs one table: applies commands, notifies subscribers, schedules effects.

    Args:
        engine: The rules engine (defaults to a standard four-seat table)
        agents: Agent per seat index. Human seats without one get a
            HumanAgent, CPU seats a HeuristicAgent.
        rng: Random source for the CPU thinking jitter
    """

    def __init__(
        self,
        engine: Optional[TexasHoldemEngine] = None,
        agents: Optional[Dict[int, BaseAgent]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.engine = engine or TexasHoldemEngine()
        self.rng = rng or random.Random()
        self.state: GameState = self.engine.initialize_game()

        self.agents: Dict[int, BaseAgent] = dict(agents or {})
        for seat in self.state.seats:
            if seat.index in self.agents:
                continue
            if seat.is_human:
                self.agents[seat.index] = HumanAgent(name=seat.name)
            else:
                self.agents[seat.index] = HeuristicAgent(name=seat.name)

        self._subscribers: List[Subscriber] = []
        self._pending: Set[asyncio.Task] = set()
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> int:
        """Number of scheduled tasks not yet run."""
        return len(self._pending)

    def subscribe(self, callback: Subscriber) -> None:
        """Call ``callback(state)`` after every applied command."""
        self._subscribers.append(callback)

    async def dispatch(self, command: Command) -> bool:
        """
        Apply a command to the current state.

        Returns:
            True if applied, False if rejected as illegal (state unchanged)
        """
        if isinstance(command, RESETTING_COMMANDS):
            self.cancel_pending()
            self._generation += 1

        try:
            result = self.engine.transition(self.state, command)
        except IllegalAction as e:
            logger.warning(f"Rejected {command.type}: {e}")
            return False

        self.state = result.state
        await self._notify()

        for effect in result.effects:
            self._schedule(effect, self._generation)
        return True

    async def handle_message(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """
        Handle a raw message from the presentation layer.

        Returns:
            Response dict: the table state, or an error
        """
        try:
            command = parse_command(message)
        except ValidationError as e:
            return {"type": "error", "message": f"Invalid command: {e.errors()[0]['msg']}"}

        if not await self.dispatch(command):
            return {"type": "error", "message": f"Illegal command: {command.type}"}

        return {"type": "state", **self.snapshot()}

    def snapshot(self) -> Dict[str, Any]:
        """Current observable state as plain data."""
        return TableStateSchema.from_state(self.state).model_dump()

    def cancel_pending(self) -> None:
        """Cancel every scheduled task except the one currently running."""
        current = asyncio.current_task()
        for task in list(self._pending):
            if task is not current:
                task.cancel()
        self._pending.clear()

    async def wait_idle(self) -> None:
        """
        Wait until no scheduled work remains.

        Exceptions raised by a task (a fatal deck exhaustion, say) are
        re-raised here.
        """
        while self._pending:
            tasks = list(self._pending)
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    raise result

    async def play_hand(self) -> GameState:
        """Start the next hand and let it run until nothing is scheduled."""
        await self.dispatch(StartNewHand())
        await self.wait_idle()
        return self.state

    async def close(self) -> None:
        self.cancel_pending()
        self._generation += 1

    def _schedule(self, effect: Effect, generation: int) -> None:
        if isinstance(effect, CpuTurn):
            delay = effect.delay + self.rng.uniform(0, self.engine.config.cpu_think_jitter)
            coro = self._run_cpu_turn(effect.seat, delay, generation)
        elif isinstance(effect, ScheduledCommand):
            coro = self._run_later(effect.command, effect.delay, generation)
        else:
            raise TypeError(f"Unknown effect: {effect!r}")

        task = asyncio.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_later(self, command: Command, delay: float, generation: int) -> None:
        await asyncio.sleep(delay)
        if generation != self._generation:
            logger.debug(f"Dropping stale {command.type} from generation {generation}")
            return
        await self.dispatch(command)

    async def _run_cpu_turn(self, seat_index: int, delay: float, generation: int) -> None:
        await asyncio.sleep(delay)
        if generation != self._generation or self.state.to_act != seat_index:
            logger.debug(f"Dropping stale CPU turn for seat {seat_index}")
            return

        agent = self.agents[seat_index]
        action, amount = agent.act(seat_index, self.state)
        logger.debug(f"{agent!r} seat {seat_index} decides {action.value} {amount}")
        if not await self.dispatch(PlayerAction(seat=seat_index, action=action, amount=amount)):
            logger.error(f"Agent for seat {seat_index} chose an illegal action: {action.value}")

    async def _notify(self) -> None:
        for callback in self._subscribers:
            try:
                result = callback(self.state)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Error notifying subscriber {callback!r}: {e}")
