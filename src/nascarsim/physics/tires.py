"""Tire grip degradation and its effect on lap time."""

from nascarsim.models import TrackType

# Laps until a set of tires reaches its grip floor
TIRE_LIFE: dict[TrackType, int] = {
    TrackType.SHORT: 100,
    TrackType.INTERMEDIATE: 120,
    TrackType.SUPERSPEEDWAY: 140,
    TrackType.ROAD: 110,
}

MIN_GRIP = 0.5
SIDE_BY_SIDE_WEAR = 1.10
MAX_AGGRESSION_MULTIPLIER = 1.5


def tire_life(track_type: TrackType | str) -> int:
    """Tire life in laps for a track type."""
    return TIRE_LIFE[TrackType(track_type)]


def tire_grip(laps_since_pit: float, track_type: TrackType | str) -> float:
    """Calculate remaining tire grip.

    Grip falls linearly from 1.0 on fresh tires to 0.5 at the end of the
    track's tire life and never drops below 0.5.

    Args:
        laps_since_pit: Laps completed on the current set
        track_type: Track category (sets tire life)

    Returns:
        Grip fraction from 0.5 to 1.0
    """
    laps = max(0.0, laps_since_pit)
    return max(MIN_GRIP, 1.0 - (laps / tire_life(track_type)) * 0.5)


def laps_on_tires_from_wear(tire_wear: float, track_type: TrackType | str) -> float:
    """Invert ``tire_grip``: laps that produce a tire-wear percentage.

    Tire wear is stored as remaining grip in percent, so 100 means fresh and
    50 means the set is at the end of its life.
    """
    grip = min(100.0, max(0.0, tire_wear)) / 100
    return ((1.0 - grip) / 0.5) * tire_life(track_type)


def lap_time_from_wear(base_lap_time: float, grip_percent: float) -> float:
    """Apply the tire-wear penalty to a lap time.

    Above 80% grip there is no penalty. From 80% down to 50% the penalty is
    linear, reaching 4% at 50%. Below 50% it grows with exponent 1.5 toward
    20% at zero grip.

    Args:
        base_lap_time: Lap time on fresh tires in seconds
        grip_percent: Remaining grip (0-100)

    Returns:
        Adjusted lap time in seconds
    """
    if grip_percent > 80:
        return base_lap_time

    if grip_percent >= 50:
        penalty = (1.0 - grip_percent / 100) * 0.08
        return base_lap_time * (1 + penalty)

    severe = ((1.0 - max(0.0, grip_percent) / 100) ** 1.5) * 0.20
    return base_lap_time * (1 + severe)


def aggression_multiplier(aggression: float) -> float:
    """Map an aggression skill (0-100) onto a wear multiplier.

    Drivers at or below 50 aggression wear tires at the base rate; above
    that the multiplier climbs linearly to 1.5 at 100.
    """
    excess = max(0.0, min(100.0, aggression) - 50) / 50
    return 1.0 + excess * (MAX_AGGRESSION_MULTIPLIER - 1.0)


def worn_tire_percent(
    tire_wear: float,
    track_type: TrackType | str,
    aggression_mult: float = 1.0,
    side_by_side: bool = False,
) -> float:
    """Tire-wear percentage after one more lap.

    One lap uses ``wear_rate_per_lap`` percent of tire life, and a full tire
    life costs half the grip, so the grip percentage drops by half the wear
    rate. The result never goes below the 50% grip floor.
    """
    rate = wear_rate_per_lap(track_type, aggression_mult, side_by_side)
    return max(MIN_GRIP * 100, min(100.0, tire_wear) - rate * 0.5)


def wear_rate_per_lap(
    track_type: TrackType | str,
    aggression_mult: float = 1.0,
    side_by_side: bool = False,
) -> float:
    """Percentage of tire life used per lap.

    Args:
        track_type: Track category
        aggression_mult: 1.0 for a neutral driver, up to 1.5 for aggressive
        side_by_side: Whether the car is racing wheel-to-wheel (+10%)

    Returns:
        Percent of tire life consumed this lap
    """
    rate = 100 / tire_life(track_type)
    rate *= min(MAX_AGGRESSION_MULTIPLIER, max(1.0, aggression_mult))
    if side_by_side:
        rate *= SIDE_BY_SIDE_WEAR
    return rate


def section_speed_from_tire_wear(base_speed: float, grip: float, is_turn: bool) -> float:
    """Scale a section speed by tire grip.

    Turns are grip-limited and take the full grip factor. Straights are
    power-limited and take half of it (0.5 + 0.5 * grip).
    """
    if is_turn:
        return base_speed * grip
    return base_speed * (0.5 + grip * 0.5)
