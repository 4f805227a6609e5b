"""Aerodynamic draft detection."""

from nascarsim.config import DRAFT_FUEL_SAVINGS, DRAFT_SPEED_BOOST, DRAFT_ZONE_LENGTH
from nascarsim.models import NO_DRAFT, DraftStatus
from nascarsim.physics.speed import MPH_TO_FPS

CAR_LENGTH_FEET = 16.0


def gap_to_car_lengths(gap_seconds: float, speed_mph: float) -> float:
    """Convert a time gap into car lengths at a given speed."""
    return max(0.0, gap_seconds) * speed_mph * MPH_TO_FPS / CAR_LENGTH_FEET


def calculate_draft_status(
    distance: float,
    speed_boost: float = DRAFT_SPEED_BOOST,
    fuel_savings: float = DRAFT_FUEL_SAVINGS,
) -> DraftStatus:
    """Draft status for a car a given number of car lengths behind another.

    Args:
        distance: Distance to the car ahead in car lengths
        speed_boost: Straight-line bonus while drafting (MPH)
        fuel_savings: Consumption reduction while drafting (percent)

    Returns:
        DraftStatus; not drafting outside the draft zone
    """
    if distance > DRAFT_ZONE_LENGTH:
        return NO_DRAFT.model_copy(update={"distance": distance})

    return DraftStatus(
        in_draft=True,
        distance=max(0.0, distance),
        speed_boost=speed_boost,
        fuel_savings=fuel_savings,
    )
