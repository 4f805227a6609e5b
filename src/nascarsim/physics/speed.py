"""Straight-line, corner and per-section speed calculations."""

import logging
import math

from nascarsim.config import DRAFT_SPEED_BOOST
from nascarsim.models import SectionType, TrackType
from nascarsim.physics.fuel import fuel_weight_penalty
from nascarsim.physics.tires import section_speed_from_tire_wear, tire_grip

logger = logging.getLogger(__name__)

GRAVITY = 32.174  # ft/s^2
FPS_TO_MPH = 0.681818
MPH_TO_FPS = 5280 / 3600

REFERENCE_WEIGHT = 3450.0
SPEED_EXPONENT = 0.33
SPEED_MULTIPLIER = 13.8

# Fraction of speed lost per second of fuel-weight penalty
FUEL_SPEED_COEFFICIENT: dict[TrackType, float] = {
    TrackType.SHORT: 0.065,  # ~15.5s lap
    TrackType.INTERMEDIATE: 0.033,  # ~30s lap
    TrackType.SUPERSPEEDWAY: 0.020,  # ~50s lap
    TrackType.ROAD: 0.040,
}


def base_speed(horsepower: float, drag_coefficient: float, weight: float) -> float:
    """Calculate straight-line speed from the car's power, drag and weight.

    The power-to-drag ratio, normalized by weight against a 3450 lb car, is
    raised to roughly the cube root and scaled into MPH.

    Args:
        horsepower: Engine horsepower
        drag_coefficient: Aerodynamic drag coefficient
        weight: Car weight in pounds

    Returns:
        Speed in MPH
    """
    if horsepower <= 0:
        return 0.0

    power_to_drag = horsepower / drag_coefficient
    weight_factor = REFERENCE_WEIGHT / weight
    return (power_to_drag * weight_factor) ** SPEED_EXPONENT * SPEED_MULTIPLIER


def grip_coefficient(grip: float) -> float:
    """Effective friction coefficient: 0.88 on fresh tires, 0.73 at the floor."""
    return 0.580 + grip * 0.300


def skill_modifier(driver_skill: float) -> float:
    """Corner-speed multiplier: +/-5% around skill 50."""
    return 1.0 + (driver_skill - 50) / 1000


def corner_speed(banking: float, radius: float, grip: float, driver_skill: float) -> float:
    """Calculate the maximum speed through a banked turn.

    Uses the banked-circle formula
    ``v = sqrt(r * g * (sin(t) + mu * cos(t)) / (cos(t) - mu * sin(t)))``.
    When the denominator is not positive the flat-turn form
    ``v = sqrt(r * g * mu)`` is used instead, without the skill modifier.

    Args:
        banking: Banking angle in degrees
        radius: Turn radius in feet
        grip: Tire grip fraction (0.5-1.0)
        driver_skill: Effective driver skill (0-100)

    Returns:
        Corner speed in MPH
    """
    theta = math.radians(banking)
    mu = grip_coefficient(grip)

    numerator = math.sin(theta) + mu * math.cos(theta)
    denominator = math.cos(theta) - mu * math.sin(theta)

    if denominator <= 0:
        logger.debug(
            "Banked-circle denominator %.4f at %.1f deg, mu=%.3f; using flat-turn speed",
            denominator, banking, mu,
        )
        return math.sqrt(max(0.0, radius * GRAVITY * mu)) * FPS_TO_MPH

    v_squared = radius * GRAVITY * (numerator / denominator)
    speed_fps = math.sqrt(max(0.0, v_squared))
    return speed_fps * FPS_TO_MPH * skill_modifier(driver_skill)


def section_speed(
    base: float,
    section_type: SectionType | str,
    laps_on_tires: float,
    fuel_gallons: float,
    track_type: TrackType | str,
    is_drafting: bool,
    draft_boost: float = DRAFT_SPEED_BOOST,
    corner_grip_applied: bool = False,
) -> float:
    """Apply tire, fuel and draft adjustments to a section's base speed.

    Order of operations:
    1. Tire wear: full grip factor in turns, half-weighted on straights.
       Skipped for turns when the corner speed was computed with the current
       grip already (``corner_grip_applied``).
    2. Fuel weight: the lap-time penalty for the fuel on board becomes a
       percentage speed reduction using per-track-type coefficients.
    3. Draft: a flat bonus on straights only.

    Args:
        base: Section base speed in MPH
        section_type: 'straight' or 'turn'
        laps_on_tires: Laps on the current set
        fuel_gallons: Fuel on board in gallons
        track_type: Track category
        is_drafting: Whether the car is in another car's draft
        draft_boost: Draft bonus in MPH
        corner_grip_applied: Turn base speed already includes current grip

    Returns:
        Adjusted section speed in MPH
    """
    section_type = SectionType(section_type)
    track_type = TrackType(track_type)
    is_turn = section_type == SectionType.TURN

    speed = base
    if not (is_turn and corner_grip_applied):
        speed = section_speed_from_tire_wear(speed, tire_grip(laps_on_tires, track_type), is_turn)

    if fuel_gallons > 0:
        penalty = fuel_weight_penalty(fuel_gallons, track_type)
        speed *= 1 - penalty * FUEL_SPEED_COEFFICIENT[track_type]

    speed = max(0.0, speed)

    if is_drafting and not is_turn:
        speed += draft_boost

    return speed
