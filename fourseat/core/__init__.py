"""
FourSeat Core - Pure Python Texas Hold'em Game Logic

This module contains all game logic without any scheduling or I/O.
"""

from fourseat.core.card import Card, Deck, Rank, Suit
from fourseat.core.errors import PokerError, InsufficientCards, InvalidHandSize, IllegalAction
from fourseat.core.player import Seat, SeatStatus
from fourseat.core.rules import GamePhase, ActionType
from fourseat.core.hand import HandRank, HandEvaluation, evaluate_hand, find_winners
from fourseat.core.state import GameState, RoundBetting, initialize_game
from fourseat.core.betting import legal_actions, apply_action, is_round_complete, collect_bets
from fourseat.core.game import TexasHoldemEngine, Transition, ScheduledCommand, CpuTurn

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "PokerError",
    "InsufficientCards",
    "InvalidHandSize",
    "IllegalAction",
    "Seat",
    "SeatStatus",
    "GamePhase",
    "ActionType",
    "HandRank",
    "HandEvaluation",
    "evaluate_hand",
    "find_winners",
    "GameState",
    "RoundBetting",
    "initialize_game",
    "legal_actions",
    "apply_action",
    "is_round_complete",
    "collect_bets",
    "TexasHoldemEngine",
    "Transition",
    "ScheduledCommand",
    "CpuTurn",
]
