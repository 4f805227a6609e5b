"""Race configuration and the read-only views the engine hands out."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from nascarsim.models import CarState, Driver, Track, XPGain
from nascarsim.simulation.decisions import Decision


class RaceStatus(str, Enum):
    """Engine lifecycle."""

    UNINITIALIZED = "uninitialized"
    GRID = "grid"
    RUNNING = "running"
    PAUSED = "paused"
    AWAITING_DECISION = "awaiting-decision"
    COMPLETE = "complete"


class RaceConfig(BaseModel):
    """Everything needed to set up a race."""

    track: Track
    laps: int = Field(..., gt=0, description="Race distance in laps")
    player_driver: Driver
    ai_drivers: list[Driver] = Field(default_factory=list)
    starting_position: int | None = Field(
        default=None,
        ge=1,
        description="Player grid slot; random when omitted",
    )

    @model_validator(mode="after")
    def check_unique_drivers(self) -> "RaceConfig":
        ids = [self.player_driver.id] + [d.id for d in self.ai_drivers]
        if len(set(ids)) != len(ids):
            raise ValueError("driver ids must be unique")
        return self

    @property
    def field_size(self) -> int:
        return 1 + len(self.ai_drivers)


class Position(BaseModel):
    """One row of the running order."""

    position: int = Field(..., ge=1)
    driver_id: str
    driver_name: str
    number: str = "00"
    lap_time: float = Field(default=0.0, ge=0.0, description="Most recent lap time")
    gap_to_leader: float = Field(default=0.0, ge=0.0, description="Seconds behind the leader")
    gap_to_next: float = Field(default=0.0, ge=0.0, description="Seconds behind the car ahead")
    laps_led: int = Field(default=0, ge=0)
    laps_completed: int = Field(default=0, ge=0)


class LapProgress(BaseModel):
    """Fraction of the current lap a driver has covered."""

    driver_id: str
    progress: float = Field(..., ge=0.0, le=1.0)


class RaceState(BaseModel):
    """Snapshot of the race for renderers and decision managers."""

    current_lap: int
    total_laps: int
    positions: list[Position]
    leader_lap_time: float = 0.0
    player_position: int
    player_driver: Driver
    player_car: CarState
    track: Track
    active_decision: Decision | None = None
    lap_progress: list[LapProgress] = Field(default_factory=list)
    status: RaceStatus = RaceStatus.RUNNING


class RaceResults(BaseModel):
    """The player's race, summarized."""

    finish_position: int = Field(..., ge=1)
    start_position: int = Field(..., ge=1)
    positions_gained: int
    laps_led: int = Field(..., ge=0)
    laps_completed: int = Field(..., ge=0)
    fastest_lap: float = Field(..., ge=0.0, description="0 when no lap was completed")
    average_lap: float = Field(..., ge=0.0)
    clean_laps: int = Field(..., ge=0)
    decisions_total: int = Field(default=0, ge=0)
    decisions_correct: int = Field(default=0, ge=0)
    xp_gained: list[XPGain] = Field(default_factory=list)
