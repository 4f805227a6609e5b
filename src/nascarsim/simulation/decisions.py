"""Decision prompts raised at lap boundaries and the manager interface."""

from enum import Enum
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, Field

from nascarsim.exceptions import UnknownDecisionOptionError
from nascarsim.models import Driver, MentalState, XPGain

if TYPE_CHECKING:
    from nascarsim.simulation.state import RaceState


class DecisionType(str, Enum):
    """Decision categories."""

    PIT_STRATEGY = "pit-strategy"
    PASSING = "passing"
    TRAFFIC_MANAGEMENT = "traffic-management"
    INCIDENT_RESPONSE = "incident-response"
    TIRE_MANAGEMENT = "tire-management"
    MENTAL_STATE = "mental-state"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DecisionOutcome(str, Enum):
    SUCCESS = "success"
    NEUTRAL = "neutral"
    FAILURE = "failure"


class DecisionOption(BaseModel):
    """One choice offered by a decision."""

    id: str = Field(..., description="Unique option identifier")
    label: str = Field(..., description="Short label for the UI")
    description: str = Field(default="", description="Detailed description")
    risk_level: RiskLevel = Field(default=RiskLevel.MEDIUM)
    skill_requirements: dict[str, float] = Field(
        default_factory=dict,
        description="Skills that affect the outcome, by skill name",
    )


class RaceContext(BaseModel):
    """The player's race situation when a decision was raised."""

    lap: int = Field(..., ge=0)
    position: int = Field(..., ge=1)
    laps_to_go: int = Field(..., ge=0)
    gap_to_leader: float = Field(default=0.0, ge=0.0)
    gap_to_next: float = Field(default=0.0, ge=0.0)
    tire_wear: float = Field(default=100.0, ge=0.0, le=100.0)
    fuel_level: float = Field(default=100.0, ge=0.0, le=100.0)
    mental_state: MentalState = Field(default_factory=MentalState)


class Decision(BaseModel):
    """A pending prompt for the player."""

    id: str = Field(..., description="Unique decision id")
    type: DecisionType
    prompt: str = Field(..., description="Situation description")
    options: list[DecisionOption] = Field(..., min_length=1)
    time_limit: float = Field(default=10.0, gt=0, description="Seconds to decide")
    default_option: str = Field(..., description="Option chosen on timeout")
    context: RaceContext

    def option(self, choice_id: str) -> DecisionOption:
        """Look up an option by id.

        Raises:
            UnknownDecisionOptionError: If the decision does not offer it
        """
        for option in self.options:
            if option.id == choice_id:
                return option
        raise UnknownDecisionOptionError(
            f"Decision {self.id!r} has no option {choice_id!r}"
        )


class DecisionEffects(BaseModel):
    """What a decision changes for the player.

    A tire or fuel change of exactly 100 means a full reset (pit stop);
    any other value is a delta that gets clamped into range.
    """

    position_change: int = Field(default=0, description="Positions gained (positive) or lost")
    mental_state_change: dict[str, float] = Field(default_factory=dict)
    tire_wear_change: float | None = None
    fuel_change: float | None = None
    damage_change: float = 0.0


class DecisionResult(BaseModel):
    """Evaluated outcome of the player's choice."""

    option_chosen: str
    outcome: DecisionOutcome
    effects: DecisionEffects = Field(default_factory=DecisionEffects)
    xp_gained: XPGain = Field(default_factory=XPGain)
    message: str | None = None


class DecisionManager(Protocol):
    """Supplies decision content to the race engine."""

    def should_trigger_decision(self, state: "RaceState") -> Decision | None:
        """Return a decision to raise for this race state, or None."""
        ...

    def evaluate_decision(self, decision: Decision, choice_id: str, driver: Driver) -> DecisionResult:
        """Resolve the player's choice into effects and XP."""
        ...


def build_race_context(state: "RaceState") -> RaceContext:
    """Snapshot the player's situation for a decision prompt."""
    player = next(
        (p for p in state.positions if p.driver_id == state.player_driver.id),
        None,
    )
    return RaceContext(
        lap=state.current_lap,
        position=state.player_position,
        laps_to_go=max(0, state.total_laps - state.current_lap),
        gap_to_leader=player.gap_to_leader if player else 0.0,
        gap_to_next=player.gap_to_next if player else 0.0,
        tire_wear=state.player_car.tire_wear,
        fuel_level=state.player_car.fuel_level,
        mental_state=state.player_driver.mental_state,
    )
