"""
Base Agent Interface for FourSeat.

An agent decides for one seat. The driver asks the agent of the seat to act
once its thinking delay has elapsed and dispatches the returned action as a
PlayerAction command.

Usage:
    class MyAgent(BaseAgent):
        def act(self, seat_index, state):
            return ActionType.CALL, 0
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from fourseat.core.rules import ActionType
from fourseat.core.state import GameState


class BaseAgent(ABC):
    """
    Abstract base class for seat agents.

    Attributes:
        name: Human-readable name
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__

    @abstractmethod
    def act(self, seat_index: int, state: GameState) -> Tuple[ActionType, int]:
        """
        Choose an action for ``seat_index`` in ``state``.

        The state carries full information, including every seat's hole
        cards. Agents are expected to look only at their own.

        Returns:
            Tuple of (action, amount). The amount is the bet size for BET,
            the raise increment above the call for RAISE, and 0 otherwise.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


class HumanAgent(BaseAgent):
    """
    Placeholder agent for human seats.

    It doesn't make decisions: human actions come from the presentation
    layer as PlayerAction commands.
    """

    def act(self, seat_index: int, state: GameState) -> Tuple[ActionType, int]:
        raise NotImplementedError("Human actions come from the presentation layer")
