"""
FourSeat - Four-seat Texas Hold'em Engine

A Texas Hold'em table for one human and three CPU seats:
- Pure Python game core (deck, hand evaluator, betting, orchestration)
- Heuristic CPU agents
- Asyncio driver that runs delayed transitions with cancellation

Usage:
    from fourseat import TableConfig, TexasHoldemEngine, TableDriver
    from fourseat.table import StartGame, PlayerAction
"""

__version__ = "0.1.0"

from fourseat.config import TableConfig, HeuristicConfig
from fourseat.core.card import Card, Deck
from fourseat.core.game import TexasHoldemEngine
from fourseat.core.hand import HandRank, evaluate_hand
from fourseat.core.state import GameState
from fourseat.table.driver import TableDriver

__all__ = [
    "TableConfig",
    "HeuristicConfig",
    "Card",
    "Deck",
    "TexasHoldemEngine",
    "HandRank",
    "evaluate_hand",
    "GameState",
    "TableDriver",
    "__version__",
]
