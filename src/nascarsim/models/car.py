"""Car specification and per-race consumable state."""

from pydantic import BaseModel, ConfigDict, Field

from nascarsim.models.mental_state import clamp


class Car(BaseModel):
    """Represents a stock car's fixed performance characteristics."""

    model_config = ConfigDict(frozen=True)

    horsepower: float = Field(default=750.0, ge=0.0, description="Engine horsepower")
    weight: float = Field(default=3400.0, gt=0, description="Car weight in pounds")
    drag_coefficient: float = Field(
        default=0.32,
        gt=0,
        le=1.0,
        description="Aerodynamic drag coefficient",
    )
    downforce: float = Field(default=1500.0, ge=0.0, description="Downforce in pounds")
    fuel_capacity: float = Field(default=18.0, gt=0, description="Fuel cell size in gallons")


class CarState(BaseModel):
    """Consumables for one car during a race.

    Every mutation goes through the helpers below so values stay inside
    their valid ranges instead of being rejected.
    """

    tire_wear: float = Field(
        default=100.0,
        ge=0.0,
        le=100.0,
        description="Remaining tire grip in percent (100 = fresh)",
    )
    fuel_level: float = Field(default=100.0, ge=0.0, le=100.0, description="Fuel remaining in percent")
    damage: float = Field(default=0.0, ge=0.0, le=100.0, description="Damage in percent")
    laps_since_pit: int = Field(default=0, ge=0, description="Laps run on the current tires")
    in_pit: bool = Field(default=False, description="Currently in pit lane")
    fuel_consumption_per_lap: float = Field(
        default=0.0,
        ge=0.0,
        description="Gallons burned on the most recent lap",
    )

    def fuel_gallons(self, capacity: float) -> float:
        """Fuel on board in gallons for a given fuel cell size."""
        return (self.fuel_level / 100) * capacity

    def burn_fuel(self, gallons: float, capacity: float) -> None:
        """Remove burned fuel, expressed in gallons."""
        self.fuel_consumption_per_lap = max(0.0, gallons)
        self.fuel_level = clamp(self.fuel_level - (gallons / capacity) * 100)

    def set_tire_wear(self, value: float) -> None:
        self.tire_wear = clamp(value)

    def adjust_tire_wear(self, delta: float) -> None:
        self.tire_wear = clamp(self.tire_wear + delta)

    def adjust_fuel(self, delta: float) -> None:
        self.fuel_level = clamp(self.fuel_level + delta)

    def adjust_damage(self, delta: float) -> None:
        self.damage = clamp(self.damage + delta)

    def service(self, tires: bool = True, fuel: bool = True) -> None:
        """Pit service: fresh tires and/or a full fuel cell."""
        if tires:
            self.tire_wear = 100.0
            self.laps_since_pit = 0
        if fuel:
            self.fuel_level = 100.0


class DraftStatus(BaseModel):
    """Aerodynamic draft situation behind another car."""

    model_config = ConfigDict(frozen=True)

    in_draft: bool = Field(default=False, description="Currently drafting")
    distance: float = Field(default=10.0, ge=0.0, description="Distance to car ahead in car lengths")
    speed_boost: float = Field(default=0.0, ge=0.0, description="Straight-line speed gain in MPH")
    fuel_savings: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Fuel consumption reduction in percent",
    )


NO_DRAFT = DraftStatus()
