"""
Exceptions raised by the FourSeat core.

Every core operation is all-or-nothing: when one of these is raised the
caller's state value is untouched.
"""


class PokerError(Exception):
    """Base class for all engine errors."""


class InsufficientCards(PokerError, ValueError):
    """
    Raised when a draw asks for more cards than the deck holds.

    With a fixed 52-card deck this indicates a state-machine defect and
    should abort the hand.
    """

    def __init__(self, requested: int, remaining: int):
        super().__init__(f"Cannot deal {requested} cards, only {remaining} remain")
        self.requested = requested
        self.remaining = remaining


class InvalidHandSize(PokerError, ValueError):
    """Raised when the evaluator is given anything other than 5 or 7 cards."""

    def __init__(self, size: int):
        super().__init__(f"Need exactly 5 or 7 cards, got {size}")
        self.size = size


class IllegalAction(PokerError, ValueError):
    """Raised when a command is not legal for the seat or the current phase."""
