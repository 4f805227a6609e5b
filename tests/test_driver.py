"""Tests for driver values and skill progression."""

import pytest
from pydantic import ValidationError

from nascarsim.models import Driver, DriverSkills, MentalState, XPGain, apply_xp


def test_skills_are_bounded():
    with pytest.raises(ValidationError):
        DriverSkills(racecraft=101)
    with pytest.raises(ValidationError):
        DriverSkills(focus=-1)


def test_driver_is_immutable():
    driver = Driver(id="d", name="Driver")
    with pytest.raises(ValidationError):
        driver.name = "Other"


def test_with_mental_state_copies():
    driver = Driver(id="d", name="Driver")
    calm = driver.with_mental_state(MentalState(frustration=0))
    assert calm.mental_state.frustration == 0
    assert driver.mental_state.frustration == 50
    assert calm.id == driver.id


def test_apply_xp_scales_with_skill():
    driver = Driver(id="d", name="Driver", skills=DriverSkills(racecraft=50, focus=5))
    improved = apply_xp(driver, XPGain(racecraft=10, focus=10))
    assert improved.skills.racecraft == pytest.approx(50.2)
    assert improved.skills.focus == pytest.approx(6.0)
    assert driver.skills.racecraft == 50


def test_apply_xp_caps_at_100():
    driver = Driver(id="d", name="Driver", skills=DriverSkills(racecraft=99.9))
    assert apply_xp(driver, XPGain(racecraft=10_000)).skills.racecraft == 100


def test_apply_no_xp_returns_same_driver():
    driver = Driver(id="d", name="Driver")
    assert apply_xp(driver, XPGain()) is driver


def test_xp_total():
    assert XPGain(racecraft=10, consistency=15, focus=5).total == 30
