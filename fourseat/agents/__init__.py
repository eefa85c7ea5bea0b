"""
FourSeat Agents - seat decision makers

BaseAgent is the interface the table driver calls for CPU seats.
HeuristicAgent implements the strength/position/pot-odds heuristic.
"""

from fourseat.agents.base import BaseAgent, HumanAgent
from fourseat.agents.heuristic import HeuristicAgent, decide

__all__ = ["BaseAgent", "HumanAgent", "HeuristicAgent", "decide"]
