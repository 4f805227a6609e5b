"""Career-mode scoring."""

from .points import POINTS_TABLE, PointsAwarded, calculate_race_points

__all__ = ["POINTS_TABLE", "PointsAwarded", "calculate_race_points"]
