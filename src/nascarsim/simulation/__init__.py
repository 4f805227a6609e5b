"""Simulation engine components."""

from .decisions import (
    Decision,
    DecisionEffects,
    DecisionManager,
    DecisionOption,
    DecisionOutcome,
    DecisionResult,
    DecisionType,
    RaceContext,
    RiskLevel,
    build_race_context,
)
from .race import DriverRaceState, RaceEngine, SimulationMode, calculate_race_xp
from .state import LapProgress, Position, RaceConfig, RaceResults, RaceState, RaceStatus

__all__ = [
    "Decision",
    "DecisionEffects",
    "DecisionManager",
    "DecisionOption",
    "DecisionOutcome",
    "DecisionResult",
    "DecisionType",
    "DriverRaceState",
    "LapProgress",
    "Position",
    "RaceConfig",
    "RaceContext",
    "RaceEngine",
    "RaceResults",
    "RaceState",
    "RaceStatus",
    "RiskLevel",
    "SimulationMode",
    "build_race_context",
    "calculate_race_xp",
]
