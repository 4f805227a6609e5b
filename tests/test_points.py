"""Tests for championship points."""

import pytest

from nascarsim.career import POINTS_TABLE, calculate_race_points


def test_winner_with_both_bonuses_scores_fifty():
    points = calculate_race_points(1, laps_led=120, most_laps_led=True)
    assert points.finish_points == 40
    assert points.laps_led_bonus == 5
    assert points.most_laps_led_bonus == 5
    assert points.total_points == 50


def test_points_table():
    assert POINTS_TABLE[2] == 35
    assert POINTS_TABLE[3] == 34
    assert POINTS_TABLE[35] == 2
    assert POINTS_TABLE[36] == 1


def test_deep_field_scores_one():
    assert calculate_race_points(40, 0, False).total_points == 1
    assert calculate_race_points(43, 0, False).total_points == 1


def test_leading_a_single_lap_earns_bonus():
    assert calculate_race_points(10, 1, False).total_points == 27 + 5


@pytest.mark.parametrize("position", [0, -3])
def test_invalid_position_raises(position):
    with pytest.raises(ValueError):
        calculate_race_points(position, 0, False)


def test_negative_laps_led_raises():
    with pytest.raises(ValueError):
        calculate_race_points(5, -1, False)
