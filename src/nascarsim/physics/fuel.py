"""Fuel consumption and fuel-weight penalty."""

from nascarsim.models import DraftStatus, Driver, MentalState, TrackType

# Gallons per lap for an average driver in clean air
BASE_FUEL_CONSUMPTION: dict[TrackType, float] = {
    TrackType.SUPERSPEEDWAY: 0.27,  # sustained full throttle
    TrackType.INTERMEDIATE: 0.20,
    TrackType.SHORT: 0.11,  # brake/accelerate cycles, short lap
    TrackType.ROAD: 0.18,
}

# Seconds of lap time per gallon carried
FUEL_WEIGHT_PENALTY: dict[TrackType, float] = {
    TrackType.SUPERSPEEDWAY: 0.025,
    TrackType.INTERMEDIATE: 0.045,
    TrackType.SHORT: 0.055,  # braking/accel zones amplify mass
    TrackType.ROAD: 0.040,
}

SKILL_MAX_BONUS = 0.12
CONFIDENCE_MAX_BONUS = 0.08
FRUSTRATION_MAX_PENALTY = 0.20


def base_fuel_consumption(track_type: TrackType | str) -> float:
    """Baseline gallons per lap before any modifier."""
    return BASE_FUEL_CONSUMPTION[TrackType(track_type)]


def apply_driver_skill_modifier(fuel: float, consistency: float) -> float:
    """Smoother inputs save fuel: up to 12% at consistency 100."""
    return fuel * (1 - (consistency / 100) * SKILL_MAX_BONUS)


def apply_mental_state_modifier(fuel: float, mental_state: MentalState) -> float:
    """Frustration burns up to 20% more, then confidence saves up to 8%."""
    fuel *= 1 + (mental_state.frustration / 100) * FRUSTRATION_MAX_PENALTY
    fuel *= 1 - (mental_state.confidence / 100) * CONFIDENCE_MAX_BONUS
    return fuel


def apply_draft_bonus(fuel: float, draft: DraftStatus) -> float:
    """Reduce consumption by the draft's own savings percentage."""
    if not draft.in_draft:
        return fuel
    return fuel * (1 - draft.fuel_savings / 100)


def fuel_weight_penalty(fuel_gallons: float, track_type: TrackType | str) -> float:
    """Lap time lost to carried fuel, in seconds."""
    return max(0.0, fuel_gallons) * FUEL_WEIGHT_PENALTY[TrackType(track_type)]


def fuel_consumption(driver: Driver, track_type: TrackType | str, draft: DraftStatus) -> float:
    """Calculate fuel burned over one lap.

    Modifiers are applied in a fixed order: consistency skill, mental state
    (frustration before confidence), then draft savings.

    Args:
        driver: Driver with skills and mental state
        track_type: Track category
        draft: Current draft situation

    Returns:
        Fuel consumption in gallons for the lap
    """
    fuel = base_fuel_consumption(track_type)
    fuel = apply_driver_skill_modifier(fuel, driver.skills.consistency)
    fuel = apply_mental_state_modifier(fuel, driver.mental_state)
    return apply_draft_bonus(fuel, draft)
