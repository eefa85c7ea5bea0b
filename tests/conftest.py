"""
Pytest configuration and shared fixtures for FourSeat tests.
"""

import random

import pytest

from fourseat.config import TableConfig
from fourseat.core.card import Card, Rank, Suit, parse_cards
from fourseat.core.game import TexasHoldemEngine
from fourseat.core.player import Seat, SeatStatus
from fourseat.core.rules import GamePhase
from fourseat.core.state import GameState, RoundBetting


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def config():
    """Standard four-seat table without presentational delays."""
    return TableConfig().without_delays()


@pytest.fixture
def engine(config):
    """Engine with a seeded shuffle."""
    return TexasHoldemEngine(config, random.Random(7))


@pytest.fixture
def fresh_state(engine):
    """Table state before the first hand."""
    return engine.initialize_game()


@pytest.fixture
def hand_state(engine, fresh_state):
    """
    First hand just dealt.

    Dealer is seat 1, small blind seat 2, big blind seat 3, and seat 0 (the
    human) acts first.
    """
    return engine.start_new_hand(fresh_state)


@pytest.fixture
def make_state():
    """
    Factory for hand-built game states.

    Seats default to four ACTIVE seats with 1000 chips and no bet.
    """
    def _make(
        chips=(1000, 1000, 1000, 1000),
        bets=(0, 0, 0, 0),
        statuses=None,
        hole_cards=None,
        community="",
        current_bet=0,
        min_raise=20,
        last_raiser=None,
        acted=(),
        pot=0,
        phase=GamePhase.FLOP,
        to_act=0,
        dealer=0,
    ):
        names = ("You", "CPU 1", "CPU 2", "CPU 3")
        statuses = statuses or [SeatStatus.ACTIVE] * len(chips)
        hole_cards = hole_cards or [""] * len(chips)
        seats = tuple(
            Seat(
                index=i,
                name=names[i],
                chips=chips[i],
                bet=bets[i],
                hole_cards=tuple(parse_cards(hole_cards[i])) if hole_cards[i] else (),
                status=statuses[i],
                is_human=i == 0,
                position=i,
            )
            for i in range(len(chips))
        )
        return GameState(
            seats=seats,
            small_blind=10,
            big_blind=20,
            community_cards=tuple(parse_cards(community)) if community else (),
            pot=pot,
            dealer=dealer,
            to_act=to_act,
            phase=phase,
            betting=RoundBetting(
                current_bet=current_bet,
                min_raise=min_raise,
                last_raiser=last_raiser,
                acted=tuple(acted),
            ),
            hand_number=1,
        )

    return _make


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
