"""
Inbound command schemas.

Every command the presentation layer can send is a pydantic model tagged by
its ``type`` field, so raw messages (dicts decoded from any transport) can be
validated with ``parse_command``. ``DealStreet`` is internal: the engine
schedules it when a betting round closes.
"""

from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from fourseat.core.rules import ActionType


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True)


class StartGame(_Command):
    """Fresh table and first hand."""
    type: Literal["start_game"] = "start_game"


class StartNewHand(_Command):
    type: Literal["start_new_hand"] = "start_new_hand"


class PlayerAction(_Command):
    """A betting action for the seat whose turn it is."""
    type: Literal["player_action"] = "player_action"
    seat: int = Field(ge=0)
    action: ActionType
    amount: int = Field(default=0, ge=0, description="Chips for BET, raise increment for RAISE")


class AdvanceToNextPlayer(_Command):
    type: Literal["advance_to_next_player"] = "advance_to_next_player"


class DealStreet(_Command):
    type: Literal["deal_street"] = "deal_street"


class RunShowdown(_Command):
    type: Literal["run_showdown"] = "run_showdown"


class EndHand(_Command):
    """Clear the winner set after it has been shown."""
    type: Literal["end_hand"] = "end_hand"


class RestartGame(_Command):
    type: Literal["restart_game"] = "restart_game"


Command = Annotated[
    Union[
        StartGame,
        StartNewHand,
        PlayerAction,
        AdvanceToNextPlayer,
        DealStreet,
        RunShowdown,
        EndHand,
        RestartGame,
    ],
    Field(discriminator="type"),
]

_command_adapter = TypeAdapter(Command)

# Commands after which any pending delayed transition is stale
RESETTING_COMMANDS = (StartGame, StartNewHand, RestartGame)


def parse_command(data: Dict[str, Any]) -> Command:
    """
    Validate a raw message into a command model.

    Raises:
        pydantic.ValidationError: If the message is not a known command
    """
    return _command_adapter.validate_python(data)
