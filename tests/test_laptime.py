"""Tests for lap time integration against the reference tracks."""

import pytest

from nascarsim.data.tracks import TRACKS
from nascarsim.models import Car, CarState, Driver, DriverSkills, MentalState
from nascarsim.physics.laptime import (
    LapSimulator,
    calculate_lap_time,
    calculate_lap_time_breakdown,
    effective_driver_skill,
)


def test_bristol_fresh_lap_time(bristol, veteran, fresh_car):
    lap = calculate_lap_time(bristol, veteran, fresh_car)
    assert 14.0 <= lap <= 16.5


def test_bristol_tire_wear_penalty(bristol, veteran, fresh_car):
    fresh = calculate_lap_time(bristol, veteran, fresh_car)
    # 50 laps on a short track leaves 75% grip
    worn = calculate_lap_time(bristol, veteran, CarState(tire_wear=75, laps_since_pit=50))
    assert 0.3 <= worn - fresh <= 4.5


def test_bristol_fuel_weight_cost(bristol, veteran, fresh_car):
    full = calculate_lap_time(bristol, veteran, fresh_car)
    empty = calculate_lap_time(bristol, veteran, CarState(fuel_level=0))
    assert 0.3 <= full - empty <= 1.5


def test_daytona_draft_benefit(daytona, veteran, fresh_car):
    clean = calculate_lap_time(daytona, veteran, fresh_car, is_drafting=False)
    drafting = calculate_lap_time(daytona, veteran, fresh_car, is_drafting=True)
    assert 0.1 <= clean - drafting <= 1.0


def test_skill_makes_laps_faster(bristol, fresh_car):
    rookie = Driver(id="rookie", name="Rookie", skills=DriverSkills(racecraft=30))
    expert = Driver(id="expert", name="Expert", skills=DriverSkills(racecraft=90))
    assert calculate_lap_time(bristol, expert, fresh_car) < calculate_lap_time(bristol, rookie, fresh_car)


@pytest.mark.parametrize("track_id", sorted(TRACKS))
def test_breakdown_agrees_with_lap_time(track_id, veteran):
    track = TRACKS[track_id]
    car = CarState(tire_wear=82, fuel_level=60)

    lap = calculate_lap_time(track, veteran, car)
    breakdown = calculate_lap_time_breakdown(track, veteran, car)

    assert breakdown.total_time == pytest.approx(lap)
    assert sum(breakdown.section_times) == pytest.approx(lap)
    assert len(breakdown.section_speeds) == len(track.sections)
    assert breakdown.top_speed == max(breakdown.section_speeds)
    assert breakdown.average_speed == pytest.approx(track.length / lap * 3600)


def test_track_types_order_by_speed(veteran, fresh_car):
    bristol = calculate_lap_time_breakdown(TRACKS["bristol"], veteran, fresh_car)
    daytona = calculate_lap_time_breakdown(TRACKS["daytona"], veteran, fresh_car)
    assert daytona.average_speed > bristol.average_speed


def test_more_power_is_faster(bristol, veteran, fresh_car):
    stock = LapSimulator()
    more_power = LapSimulator(car=Car(horsepower=850))
    assert more_power.calculate_lap_time(bristol, veteran, fresh_car) < stock.calculate_lap_time(
        bristol, veteran, fresh_car
    )


def test_effective_driver_skill():
    assert effective_driver_skill(70, MentalState(confidence=75, frustration=15)) == pytest.approx(71.75)
    assert effective_driver_skill(50, MentalState(confidence=50, frustration=100)) == pytest.approx(47.5)
    assert effective_driver_skill(100, MentalState(confidence=100, frustration=0)) == 100


def test_confidence_changes_lap_time(bristol, fresh_car):
    confident = Driver(id="a", name="A", mental_state=MentalState(confidence=95))
    shaken = Driver(id="b", name="B", mental_state=MentalState(confidence=5, frustration=95))
    assert calculate_lap_time(bristol, confident, fresh_car) < calculate_lap_time(bristol, shaken, fresh_car)
