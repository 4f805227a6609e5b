"""Closed-form stock-car physics: tires, fuel, speed and lap time."""

from .draft import calculate_draft_status, gap_to_car_lengths
from .fuel import fuel_consumption, fuel_weight_penalty
from .laptime import (
    CALIBRATION,
    LapSimulator,
    LapTimeBreakdown,
    calculate_lap_time,
    calculate_lap_time_breakdown,
    effective_driver_skill,
)
from .speed import base_speed, corner_speed, section_speed
from .tires import lap_time_from_wear, tire_grip, wear_rate_per_lap

__all__ = [
    "CALIBRATION",
    "LapSimulator",
    "LapTimeBreakdown",
    "base_speed",
    "calculate_draft_status",
    "calculate_lap_time",
    "calculate_lap_time_breakdown",
    "corner_speed",
    "effective_driver_skill",
    "fuel_consumption",
    "fuel_weight_penalty",
    "gap_to_car_lengths",
    "lap_time_from_wear",
    "section_speed",
    "tire_grip",
    "wear_rate_per_lap",
]
