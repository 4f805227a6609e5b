"""Tests for speed formulas."""

import pytest

from nascarsim.models import SectionType, TrackType
from nascarsim.physics.draft import calculate_draft_status, gap_to_car_lengths
from nascarsim.physics.speed import base_speed, corner_speed, grip_coefficient, section_speed


def test_base_speed_in_nascar_range():
    speed = base_speed(670, 0.32, 3450)
    assert 170 < speed < 200


def test_base_speed_responds_to_car_spec():
    assert base_speed(750, 0.32, 3450) > base_speed(670, 0.32, 3450)
    assert base_speed(670, 0.28, 3450) > base_speed(670, 0.36, 3450)
    assert base_speed(670, 0.32, 3400) > base_speed(670, 0.32, 3500)
    assert base_speed(0, 0.32, 3450) == 0


def test_grip_coefficient_calibration():
    assert grip_coefficient(1.0) == pytest.approx(0.88)
    assert grip_coefficient(0.5) == pytest.approx(0.73)


def test_corner_speed_geometry():
    assert corner_speed(30, 500, 1.0, 50) > corner_speed(10, 500, 1.0, 50)
    assert corner_speed(26, 1000, 1.0, 50) > corner_speed(26, 500, 1.0, 50)
    assert corner_speed(26, 550, 0.5, 50) < corner_speed(26, 550, 1.0, 50)


def test_corner_speed_skill_modifier():
    neutral = corner_speed(26, 550, 1.0, 50)
    assert corner_speed(26, 550, 1.0, 100) == pytest.approx(neutral * 1.05)
    assert corner_speed(26, 550, 1.0, 0) == pytest.approx(neutral * 0.95)


def test_corner_speed_falls_back_at_extreme_banking():
    # cos(50) - 0.88 * sin(50) < 0
    speed = corner_speed(50, 500, 1.0, 50)
    assert speed == pytest.approx((500 * 32.174 * 0.88) ** 0.5 * 0.681818)


def test_flat_turn_fallback_ignores_skill():
    assert corner_speed(50, 500, 1.0, 100) == corner_speed(50, 500, 1.0, 0)


@pytest.mark.parametrize("laps,fuel", [(0, 0), (40, 9), (120, 18)])
def test_draft_never_slows_straights(laps, fuel):
    drafting = section_speed(180, SectionType.STRAIGHT, laps, fuel, TrackType.SUPERSPEEDWAY, True)
    clean = section_speed(180, SectionType.STRAIGHT, laps, fuel, TrackType.SUPERSPEEDWAY, False)
    assert drafting > clean
    assert drafting - clean == pytest.approx(4.0)


def test_no_draft_in_turns():
    drafting = section_speed(150, "turn", 20, 10, TrackType.SUPERSPEEDWAY, True)
    clean = section_speed(150, "turn", 20, 10, TrackType.SUPERSPEEDWAY, False)
    assert drafting == clean


def test_tire_wear_hits_turns_harder_than_straights():
    fresh_turn = section_speed(150, "turn", 0, 0, TrackType.SHORT, False)
    worn_turn = section_speed(150, "turn", 50, 0, TrackType.SHORT, False)
    fresh_straight = section_speed(150, "straight", 0, 0, TrackType.SHORT, False)
    worn_straight = section_speed(150, "straight", 50, 0, TrackType.SHORT, False)
    assert worn_turn / fresh_turn < worn_straight / fresh_straight < 1


def test_corner_grip_not_applied_twice():
    assert section_speed(150, "turn", 50, 0, "short", False, corner_grip_applied=True) == 150
    assert section_speed(150, "straight", 50, 0, "short", False, corner_grip_applied=True) < 150


def test_fuel_slows_sections():
    assert section_speed(150, "straight", 0, 18, "short", False) < section_speed(150, "straight", 0, 0, "short", False)


def test_draft_zone():
    assert calculate_draft_status(1.5).in_draft
    assert calculate_draft_status(2.0).in_draft
    outside = calculate_draft_status(3.0)
    assert not outside.in_draft
    assert outside.speed_boost == 0
    assert outside.distance == 3.0


def test_gap_to_car_lengths():
    # 0.1s at 180 mph is 26.4 ft
    assert gap_to_car_lengths(0.1, 180) == pytest.approx(26.4 / 16)
    assert gap_to_car_lengths(-1.0, 180) == 0
