"""Track model with sections and banking."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TrackType(str, Enum):
    """Track categories, each with its own tire, fuel and calibration tables."""

    SHORT = "short"
    INTERMEDIATE = "intermediate"
    SUPERSPEEDWAY = "superspeedway"
    ROAD = "road"


class SectionType(str, Enum):
    """Kinds of track section."""

    STRAIGHT = "straight"
    TURN = "turn"


class TrackSection(BaseModel):
    """One piece of the closed loop: a straight or a banked turn."""

    model_config = ConfigDict(frozen=True)

    type: SectionType = Field(..., description="Straight or turn")
    length: float = Field(..., gt=0, description="Section length in feet")
    banking: float | None = Field(
        default=None,
        ge=0.0,
        lt=90.0,
        description="Banking angle in degrees (turns only)",
    )
    radius: float | None = Field(
        default=None,
        gt=0,
        description="Turn radius in feet (turns only)",
    )

    @model_validator(mode="after")
    def _turns_carry_geometry(self) -> "TrackSection":
        if self.type == SectionType.TURN and (self.banking is None or self.radius is None):
            raise ValueError("turn sections require banking and radius")
        return self

    @property
    def is_turn(self) -> bool:
        """Whether this section is grip-limited."""
        return self.type == SectionType.TURN


class Banking(BaseModel):
    """Average banking of the turns and straights."""

    model_config = ConfigDict(frozen=True)

    turns: float = Field(default=0.0, ge=0.0, lt=90.0, description="Turn banking in degrees")
    straights: float = Field(default=0.0, ge=0.0, lt=90.0, description="Straight banking in degrees")


class Track(BaseModel):
    """Represents an oval or road course, loaded once and never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Track identifier (e.g., 'bristol')")
    name: str = Field(..., description="Official track name")
    type: TrackType = Field(..., description="Track category")
    length: float = Field(..., gt=0, description="Lap length in miles")
    banking: Banking = Field(default_factory=Banking, description="Average banking")
    surface_grip: float = Field(
        default=0.9,
        ge=0.5,
        le=1.0,
        description="Base grip level of the racing surface",
    )
    sections: tuple[TrackSection, ...] = Field(
        ...,
        min_length=1,
        description="Ordered sections forming one closed loop",
    )
    race_laps: int = Field(default=500, gt=0, description="Standard race distance in laps")

    @property
    def section_length_feet(self) -> float:
        """Sum of all section lengths in feet."""
        return sum(section.length for section in self.sections)

    @property
    def turns(self) -> list[TrackSection]:
        """Turn sections in lap order."""
        return [s for s in self.sections if s.is_turn]

    @property
    def straights(self) -> list[TrackSection]:
        """Straight sections in lap order."""
        return [s for s in self.sections if not s.is_turn]
