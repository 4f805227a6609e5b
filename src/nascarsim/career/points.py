"""NASCAR-style championship points."""

from pydantic import BaseModel

WIN_POINTS = 40
LAPS_LED_BONUS = 5
MOST_LAPS_LED_BONUS = 5
MIN_POINTS = 1

# 1st: 40, 2nd: 35, then one point less per place down to 1 at 36th
POINTS_TABLE: dict[int, int] = {1: WIN_POINTS, **{pos: 37 - pos for pos in range(2, 37)}}


class PointsAwarded(BaseModel):
    """Points breakdown for one race."""

    finish_points: int
    laps_led_bonus: int
    most_laps_led_bonus: int
    total_points: int


def calculate_race_points(finish_position: int, laps_led: int, most_laps_led: bool) -> PointsAwarded:
    """Calculate championship points for a race finish.

    Args:
        finish_position: Final position (1 is the winner)
        laps_led: Number of laps led
        most_laps_led: Whether the driver led the most laps

    Returns:
        Points breakdown; a win with both bonuses is worth 50

    Raises:
        ValueError: If the position is below 1 or laps led is negative
    """
    if finish_position < 1:
        raise ValueError(f"Invalid finish position: {finish_position}. Must be at least 1.")
    if laps_led < 0:
        raise ValueError(f"Invalid laps led: {laps_led}. Cannot be negative.")

    finish_points = POINTS_TABLE.get(finish_position, MIN_POINTS)
    laps_led_bonus = LAPS_LED_BONUS if laps_led > 0 else 0
    most_laps_led_bonus = MOST_LAPS_LED_BONUS if most_laps_led else 0

    return PointsAwarded(
        finish_points=finish_points,
        laps_led_bonus=laps_led_bonus,
        most_laps_led_bonus=most_laps_led_bonus,
        total_points=finish_points + laps_led_bonus + most_laps_led_bonus,
    )
