"""Mental state model and the pure functions that evolve it."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from nascarsim.models.driver import DriverSkills

CONFIDENCE_BASELINE = 50.0
FRUSTRATION_BASELINE = 50.0
FOCUS_BASELINE = 70.0
DISTRACTION_BASELINE = 10.0


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp a value into [low, high]."""
    return max(low, min(high, value))


class MentalEvent(str, Enum):
    """Race events that move a driver's mental state."""

    GOOD_LAP = "good_lap"
    BAD_LAP = "bad_lap"
    PASS = "pass"
    GOT_PASSED = "got_passed"
    CRASH = "crash"


# (confidence, frustration, focus, distraction) deltas at magnitude 1.0
_EVENT_DELTAS: dict[MentalEvent, tuple[float, float, float, float]] = {
    MentalEvent.GOOD_LAP: (7.0, -3.0, 0.0, 0.0),
    MentalEvent.BAD_LAP: (-4.0, 7.0, 0.0, 0.0),
    MentalEvent.PASS: (4.0, -2.0, 0.0, 0.0),
    MentalEvent.GOT_PASSED: (-2.0, 5.0, 0.0, 0.0),
    MentalEvent.CRASH: (-15.0, 20.0, -10.0, 10.0),
}


class MentalState(BaseModel):
    """Transient psychological state (0-100 per attribute)."""

    model_config = ConfigDict(frozen=True)

    confidence: float = Field(
        default=CONFIDENCE_BASELINE,
        ge=0.0,
        le=100.0,
        description="Self-belief, raises effective skill above 50",
    )
    frustration: float = Field(
        default=FRUSTRATION_BASELINE,
        ge=0.0,
        le=100.0,
        description="Anger, lowers effective skill above 50 and burns fuel",
    )
    focus: float = Field(default=FOCUS_BASELINE, ge=0.0, le=100.0, description="Concentration")
    distraction: float = Field(
        default=DISTRACTION_BASELINE,
        ge=0.0,
        le=100.0,
        description="Mental noise",
    )


@dataclass(frozen=True)
class MentalModifiers:
    """Performance multipliers derived from a mental state."""

    speed_modifier: float
    skill_modifier: float
    decision_quality: float


def calculate_mental_state_modifier(state: MentalState) -> MentalModifiers:
    """Derive speed, skill and decision-quality modifiers.

    Args:
        state: Current mental state

    Returns:
        Speed multiplier in [0.92, 1.08], skill offset in points (focus vs. the
        rested baseline of 70) and decision quality in [0.5, 1.5]
    """
    speed = 1.0
    speed += ((state.confidence - 50) / 50) * 0.05
    speed -= max(0.0, (state.frustration - 50) / 50) * 0.08
    speed -= (state.distraction / 100) * 0.03
    speed = clamp(speed, 0.92, 1.08)

    skill = ((state.focus - FOCUS_BASELINE) / 30) * 10

    quality = clamp(0.5 + (state.focus / 100) * 0.8 - (state.distraction / 100) * 0.3, 0.5, 1.5)

    return MentalModifiers(speed_modifier=speed, skill_modifier=skill, decision_quality=quality)


def apply_mental_state_event(
    state: MentalState,
    event: MentalEvent | str,
    magnitude: float = 1.0,
) -> MentalState:
    """Return the mental state after a race event."""
    d_conf, d_frus, d_focus, d_dist = _EVENT_DELTAS[MentalEvent(event)]
    return MentalState(
        confidence=clamp(state.confidence + d_conf * magnitude),
        frustration=clamp(state.frustration + d_frus * magnitude),
        focus=clamp(state.focus + d_focus * magnitude),
        distraction=clamp(state.distraction + d_dist * magnitude),
    )


def apply_mental_state_decay(state: MentalState, decay_rate: float = 0.1) -> MentalState:
    """Move every attribute a fraction of the way back toward its baseline."""
    rate = clamp(decay_rate, 0.0, 1.0)
    return MentalState(
        confidence=clamp(state.confidence + (CONFIDENCE_BASELINE - state.confidence) * rate),
        frustration=clamp(state.frustration + (FRUSTRATION_BASELINE - state.frustration) * rate),
        focus=clamp(state.focus + (FOCUS_BASELINE - state.focus) * rate),
        distraction=clamp(state.distraction + (DISTRACTION_BASELINE - state.distraction) * rate),
    )


def calculate_mental_resilience(skills: "DriverSkills") -> float:
    """Recovery-speed multiplier from focus and composure (0.5 to 2.0)."""
    mental_skills = (skills.focus + skills.composure) / 2
    return clamp(0.5 + (mental_skills / 100) * 1.5, 0.5, 2.0)
