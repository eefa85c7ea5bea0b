"""
Configuration models for FourSeat.

TableConfig describes the table (seats, stacks, blinds and the
presentational delays handed to the driver). HeuristicConfig carries every
tunable constant of the CPU decision heuristic so different personalities
can be seated and tests can pin behaviour down.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Default table settings
NUM_SEATS = 4
DEFAULT_STARTING_CHIPS = 1000
DEFAULT_SMALL_BLIND = 10
DEFAULT_BIG_BLIND = 20
DEFAULT_SEAT_NAMES = ("You", "CPU 1", "CPU 2", "CPU 3")


class TableConfig(BaseModel):
    """Table settings."""
    model_config = ConfigDict(frozen=True)

    num_seats: int = Field(ge=2, le=10, default=NUM_SEATS)
    starting_chips: int = Field(gt=0, default=DEFAULT_STARTING_CHIPS)
    small_blind: int = Field(gt=0, default=DEFAULT_SMALL_BLIND)
    big_blind: int = Field(gt=0, default=DEFAULT_BIG_BLIND)
    seat_names: List[str] = Field(default_factory=lambda: list(DEFAULT_SEAT_NAMES))
    human_seats: List[int] = Field(default_factory=lambda: [0])

    # Presentational delays (seconds); they never gate game logic
    cpu_think_delay: float = Field(ge=0, default=0.8)
    cpu_think_jitter: float = Field(ge=0, default=0.7)
    action_delay: float = Field(ge=0, default=0.3)
    phase_delay: float = Field(ge=0, default=0.5)

    @model_validator(mode="after")
    def _check_table(self) -> "TableConfig":
        if self.small_blind > self.big_blind:
            raise ValueError("small_blind cannot exceed big_blind")
        if len(self.seat_names) != self.num_seats:
            raise ValueError(
                f"Expected {self.num_seats} seat names, got {len(self.seat_names)}"
            )
        for seat in self.human_seats:
            if not 0 <= seat < self.num_seats:
                raise ValueError(f"Human seat {seat} is not at the table")
        return self

    def without_delays(self) -> "TableConfig":
        """Copy with every delay set to zero (simulations and tests)."""
        return self.model_copy(update={
            "cpu_think_delay": 0.0,
            "cpu_think_jitter": 0.0,
            "action_delay": 0.0,
            "phase_delay": 0.0,
        })


class HeuristicConfig(BaseModel):
    """Constants of the CPU decision heuristic."""
    model_config = ConfigDict(frozen=True)

    # Random jitter added to hand strength: uniform in [-jitter, +jitter]
    strength_jitter: float = Field(ge=0, default=10.0)
    position_bonus: float = 10.0
    # Bonus scaled by (1 - pot odds) when a call is priced
    pot_odds_bonus: float = 20.0
    pot_odds_min_strength: float = 30.0

    bluff_probability: float = Field(ge=0, le=1, default=0.1)
    bluff_bonus: float = 30.0
    trap_probability: float = Field(ge=0, le=1, default=0.05)
    trap_penalty: float = 40.0
    trap_min_strength: float = 80.0

    # Aggression thresholds of the five action tiers
    fold_threshold: float = 20.0
    passive_threshold: float = 40.0
    call_threshold: float = 60.0
    raise_threshold: float = 80.0

    # Calls below this fraction of the stack are "small"
    small_call_fraction: float = Field(ge=0, le=1, default=0.1)

    # Bet sizes in big blinds, raise sizes in multiples of the minimum raise
    medium_bet_blinds: int = Field(ge=1, default=2)
    strong_bet_blinds: int = Field(ge=1, default=3)
    monster_bet_blinds: int = Field(ge=1, default=4)
    strong_raise_multiple: int = Field(ge=1, default=2)
    monster_raise_multiple: int = Field(ge=1, default=3)

    # Chance to shove a monster hand instead of raising
    shove_probability: float = Field(ge=0, le=1, default=0.3)
    shove_min_strength: float = 90.0
