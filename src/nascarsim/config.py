"""Simulation settings."""

import json
from pathlib import Path

from pydantic import BaseModel, Field

from nascarsim.models import Car

# Draft zone: a car within this many car lengths of the car ahead is drafting
DRAFT_ZONE_LENGTH = 2.0
DRAFT_SPEED_BOOST = 4.0  # MPH
DRAFT_FUEL_SAVINGS = 10.0  # percent


class SimulationConfig(BaseModel):
    """Tunable knobs for a race engine instance."""

    car: Car = Field(default_factory=Car, description="Car spec shared by the whole field")
    draft_speed_boost: float = Field(
        default=DRAFT_SPEED_BOOST,
        gt=0.0,
        le=20.0,
        description="Flat straight-line speed bonus while drafting (MPH)",
    )
    draft_fuel_savings: float = Field(
        default=DRAFT_FUEL_SAVINGS,
        ge=0.0,
        le=50.0,
        description="Fuel savings while drafting (percent)",
    )
    grid_stagger: float = Field(
        default=0.1,
        ge=0.0,
        description="Synthetic time offset per grid slot in seconds",
    )
    mental_decay_rate: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Per-lap decay of mental state toward baseline",
    )
    apply_mental_events: bool = Field(
        default=True,
        description="Apply pass/got-passed mental events at lap boundaries",
    )
    tick_ms: float = Field(default=100.0, gt=0.0, description="Default tick size in milliseconds")

    @classmethod
    def from_json(cls, path: str | Path) -> "SimulationConfig":
        """Load settings from a JSON file; missing keys keep their defaults."""
        with open(path) as f:
            return cls.model_validate(json.load(f))
