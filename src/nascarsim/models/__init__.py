"""Data models for stock-car simulation."""

from .car import NO_DRAFT, Car, CarState, DraftStatus
from .driver import CareerStats, Driver, DriverSkills, XPGain, apply_xp
from .mental_state import (
    MentalEvent,
    MentalModifiers,
    MentalState,
    apply_mental_state_decay,
    apply_mental_state_event,
    calculate_mental_resilience,
    calculate_mental_state_modifier,
)
from .track import Banking, SectionType, Track, TrackSection, TrackType

__all__ = [
    "NO_DRAFT",
    "Banking",
    "Car",
    "CarState",
    "CareerStats",
    "DraftStatus",
    "Driver",
    "DriverSkills",
    "MentalEvent",
    "MentalModifiers",
    "MentalState",
    "SectionType",
    "Track",
    "TrackSection",
    "TrackType",
    "XPGain",
    "apply_mental_state_decay",
    "apply_mental_state_event",
    "apply_xp",
    "calculate_mental_resilience",
    "calculate_mental_state_modifier",
]
