"""
FourSeat Table - boundary with the presentation layer

Inbound command schemas, the observable state schema and the asyncio
driver. Import the driver from ``fourseat.table.driver``.
"""

from fourseat.table.commands import (
    Command,
    StartGame,
    StartNewHand,
    PlayerAction,
    AdvanceToNextPlayer,
    DealStreet,
    RunShowdown,
    EndHand,
    RestartGame,
    parse_command,
)
from fourseat.table.schemas import TableStateSchema

__all__ = [
    "Command",
    "StartGame",
    "StartNewHand",
    "PlayerAction",
    "AdvanceToNextPlayer",
    "DealStreet",
    "RunShowdown",
    "EndHand",
    "RestartGame",
    "parse_command",
    "TableStateSchema",
]
