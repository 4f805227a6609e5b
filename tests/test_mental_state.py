"""Tests for mental state reducers."""

import pytest

from nascarsim.models import (
    DriverSkills,
    MentalEvent,
    MentalState,
    apply_mental_state_decay,
    apply_mental_state_event,
    calculate_mental_resilience,
    calculate_mental_state_modifier,
)


def test_baseline_is_neutral():
    modifiers = calculate_mental_state_modifier(MentalState(distraction=0))
    assert modifiers.speed_modifier == pytest.approx(1.0)
    assert modifiers.skill_modifier == pytest.approx(0.0)


def test_speed_modifier_is_clamped():
    best = calculate_mental_state_modifier(MentalState(confidence=100, frustration=0, distraction=0))
    worst = calculate_mental_state_modifier(MentalState(confidence=0, frustration=100, distraction=100))
    assert best.speed_modifier == pytest.approx(1.05)
    assert worst.speed_modifier == pytest.approx(0.92)


def test_events_return_new_state():
    state = MentalState()
    after = apply_mental_state_event(state, MentalEvent.PASS)
    assert after is not state
    assert after.confidence > state.confidence
    assert after.frustration < state.frustration
    assert state.confidence == 50


def test_event_magnitude_and_clamping():
    state = MentalState(confidence=95)
    assert apply_mental_state_event(state, "pass", magnitude=5).confidence == 100
    crashed = apply_mental_state_event(MentalState(), MentalEvent.CRASH, magnitude=10)
    assert crashed.confidence == 0
    assert crashed.frustration == 100


def test_decay_moves_toward_baseline():
    state = MentalState(confidence=90, frustration=10, focus=30, distraction=50)
    decayed = apply_mental_state_decay(state, 0.5)
    assert decayed.confidence == pytest.approx(70)
    assert decayed.frustration == pytest.approx(30)
    assert decayed.focus == pytest.approx(50)
    assert decayed.distraction == pytest.approx(30)


def test_full_decay_reaches_baseline():
    decayed = apply_mental_state_decay(MentalState(confidence=0, frustration=100), 1.0)
    assert decayed == MentalState()


def test_resilience_range():
    assert calculate_mental_resilience(DriverSkills(focus=0, composure=0)) == 0.5
    assert calculate_mental_resilience(DriverSkills(focus=100, composure=100)) == pytest.approx(2.0)
    assert calculate_mental_resilience(DriverSkills()) == pytest.approx(1.25)
