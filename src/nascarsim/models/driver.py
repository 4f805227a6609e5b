"""Driver model with skill attributes."""

from pydantic import BaseModel, ConfigDict, Field

from nascarsim.models.mental_state import MentalState

SKILL_NAMES = (
    "racecraft",
    "consistency",
    "aggression",
    "focus",
    "stamina",
    "composure",
    "draft_sense",
    "tire_management",
    "fuel_management",
    "pit_strategy",
)


def _skill(description: str):
    return Field(default=50.0, ge=0.0, le=100.0, description=description)


class DriverSkills(BaseModel):
    """Persistent skill ratings (0-100), changed only by XP."""

    model_config = ConfigDict(frozen=True)

    racecraft: float = _skill("Overall racing ability, drives corner speed")
    consistency: float = _skill("Ability to hold pace, drives fuel economy")
    aggression: float = _skill("Willingness to take risks, drives tire wear")
    focus: float = _skill("Mental sharpness")
    stamina: float = _skill("Physical endurance")
    composure: float = _skill("Emotional control under pressure")
    draft_sense: float = _skill("Reading aerodynamic situations")
    tire_management: float = _skill("Preserving tire life")
    fuel_management: float = _skill("Efficient fuel usage")
    pit_strategy: float = _skill("Understanding pit timing")


class XPGain(BaseModel):
    """Experience earned per skill. Missing skills earn nothing."""

    racecraft: float = 0.0
    consistency: float = 0.0
    aggression: float = 0.0
    focus: float = 0.0
    stamina: float = 0.0
    composure: float = 0.0
    draft_sense: float = 0.0
    tire_management: float = 0.0
    fuel_management: float = 0.0
    pit_strategy: float = 0.0

    @property
    def total(self) -> float:
        """Sum of XP across all skills."""
        return sum(getattr(self, name) for name in SKILL_NAMES)


class CareerStats(BaseModel):
    """Career statistics carried alongside the driver."""

    model_config = ConfigDict(frozen=True)

    races: int = Field(default=0, ge=0)
    wins: int = Field(default=0, ge=0)
    top5: int = Field(default=0, ge=0)
    top10: int = Field(default=0, ge=0)
    poles: int = Field(default=0, ge=0)
    laps_led: int = Field(default=0, ge=0)
    avg_finish: float = Field(default=0.0, ge=0.0)


class Driver(BaseModel):
    """Represents a stock-car driver.

    Drivers are immutable values. Race events and XP produce new instances
    through ``with_mental_state`` and ``apply_xp`` rather than mutating in place.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique driver identifier")
    name: str = Field(..., description="Full name")
    number: str = Field(default="00", description="Car number")
    is_player: bool = Field(default=False, description="True for the player's driver")
    skills: DriverSkills = Field(default_factory=DriverSkills)
    mental_state: MentalState = Field(default_factory=MentalState)
    stats: CareerStats = Field(default_factory=CareerStats)

    def with_mental_state(self, mental_state: MentalState) -> "Driver":
        """Return a copy of this driver with a new mental state."""
        return self.model_copy(update={"mental_state": mental_state})


def apply_xp(driver: Driver, xp: XPGain) -> Driver:
    """Convert earned XP into skill points and return the improved driver.

    Higher skills need more XP for the same gain:
    ``gain = xp / (10 * max(1, skill / 10))``, capped at 100.
    """
    updates: dict[str, float] = {}
    for name in SKILL_NAMES:
        amount = getattr(xp, name)
        if amount <= 0:
            continue
        current = getattr(driver.skills, name)
        gain = amount / (10 * max(1.0, current / 10))
        updates[name] = min(100.0, current + gain)

    if not updates:
        return driver
    return driver.model_copy(update={"skills": driver.skills.model_copy(update=updates)})
