"""Lap time integration across track sections."""

from dataclasses import dataclass, field

from nascarsim.config import DRAFT_SPEED_BOOST
from nascarsim.models import Car, CarState, Driver, MentalState, Track, TrackSection, TrackType
from nascarsim.physics.speed import MPH_TO_FPS, base_speed, corner_speed, section_speed
from nascarsim.physics.tires import laps_on_tires_from_wear, tire_grip

MIN_SECTION_SPEED = 1.0  # MPH


@dataclass(frozen=True)
class Calibration:
    """Multipliers pulling the closed-form speeds onto real lap times."""

    corner: float
    straight: float


# Corner and straight multipliers per track type, one table for every lap-time path
CALIBRATION: dict[TrackType, Calibration] = {
    TrackType.SHORT: Calibration(corner=0.830, straight=0.757),
    TrackType.INTERMEDIATE: Calibration(corner=0.925, straight=0.975),
    TrackType.SUPERSPEEDWAY: Calibration(corner=0.717, straight=0.791),
    TrackType.ROAD: Calibration(corner=0.830, straight=0.791),
}


@dataclass
class LapTimeBreakdown:
    """Per-section view of one lap."""

    total_time: float
    section_times: list[float] = field(default_factory=list)
    section_speeds: list[float] = field(default_factory=list)
    average_speed: float = 0.0
    top_speed: float = 0.0


def effective_driver_skill(racecraft: float, mental_state: MentalState) -> float:
    """Racecraft adjusted for mental state.

    Confidence moves skill by up to +/-5% around 50. Frustration above 50
    costs up to another 5%. The result is clamped to 0-100.
    """
    skill = racecraft
    skill *= 1 + ((mental_state.confidence - 50) / 50) * 0.05
    skill *= 1 - max(0.0, (mental_state.frustration - 50) / 50) * 0.05
    return max(0.0, min(100.0, skill))


class LapSimulator:
    """Composes speed, tire and fuel physics into lap times."""

    def __init__(self, car: Car | None = None, draft_boost: float = DRAFT_SPEED_BOOST):
        """Initialize the lap simulator.

        Args:
            car: Car spec for the straight-line formula and fuel capacity
            draft_boost: Straight-line draft bonus in MPH
        """
        self.car = car if car is not None else Car()
        self.draft_boost = draft_boost

    @property
    def straight_base_speed(self) -> float:
        """Uncalibrated straight-line speed of the configured car."""
        return base_speed(self.car.horsepower, self.car.drag_coefficient, self.car.weight)

    def calculate_lap_time(
        self,
        track: Track,
        driver: Driver,
        car_state: CarState,
        is_drafting: bool = False,
    ) -> float:
        """Calculate the time for one lap in the car's current condition.

        Args:
            track: Circuit being raced
            driver: Driver (skills and mental state)
            car_state: Current tires and fuel
            is_drafting: Whether the car runs in a draft this lap

        Returns:
            Lap time in seconds
        """
        skill, laps_on_tires, fuel_gallons = self._lap_inputs(track, driver, car_state)
        return sum(
            section.length / (speed * MPH_TO_FPS)
            for section, speed in self._section_speeds(
                track, skill, laps_on_tires, fuel_gallons, is_drafting
            )
        )

    def calculate_breakdown(
        self,
        track: Track,
        driver: Driver,
        car_state: CarState,
        is_drafting: bool = False,
    ) -> LapTimeBreakdown:
        """Calculate section times, average speed and top speed for one lap."""
        skill, laps_on_tires, fuel_gallons = self._lap_inputs(track, driver, car_state)

        times: list[float] = []
        speeds: list[float] = []
        for section, speed in self._section_speeds(
            track, skill, laps_on_tires, fuel_gallons, is_drafting
        ):
            times.append(section.length / (speed * MPH_TO_FPS))
            speeds.append(speed)

        total = sum(times)
        return LapTimeBreakdown(
            total_time=total,
            section_times=times,
            section_speeds=speeds,
            average_speed=(track.length / total) * 3600,
            top_speed=max(speeds),
        )

    def _lap_inputs(
        self,
        track: Track,
        driver: Driver,
        car_state: CarState,
    ) -> tuple[float, float, float]:
        skill = effective_driver_skill(driver.skills.racecraft, driver.mental_state)
        laps_on_tires = laps_on_tires_from_wear(car_state.tire_wear, track.type)
        fuel_gallons = car_state.fuel_gallons(self.car.fuel_capacity)
        return skill, laps_on_tires, fuel_gallons

    def _section_speeds(
        self,
        track: Track,
        driver_skill: float,
        laps_on_tires: float,
        fuel_gallons: float,
        is_drafting: bool,
    ):
        for section in track.sections:
            yield section, self.section_speed(
                section, track, driver_skill, laps_on_tires, fuel_gallons, is_drafting
            )

    def section_speed(
        self,
        section: TrackSection,
        track: Track,
        driver_skill: float,
        laps_on_tires: float,
        fuel_gallons: float,
        is_drafting: bool = False,
    ) -> float:
        """Fully adjusted speed through one section in MPH."""
        calibration = CALIBRATION[track.type]

        if section.is_turn:
            grip = tire_grip(laps_on_tires, track.type)
            base = corner_speed(section.banking, section.radius, grip, driver_skill)
            base *= calibration.corner
        else:
            base = self.straight_base_speed * calibration.straight

        speed = section_speed(
            base,
            section.type,
            laps_on_tires,
            fuel_gallons,
            track.type,
            is_drafting,
            draft_boost=self.draft_boost,
            corner_grip_applied=True,
        )
        return max(MIN_SECTION_SPEED, speed)


_DEFAULT_SIMULATOR = LapSimulator()


def calculate_lap_time(
    track: Track,
    driver: Driver,
    car_state: CarState,
    is_drafting: bool = False,
) -> float:
    """Lap time for the standard car spec."""
    return _DEFAULT_SIMULATOR.calculate_lap_time(track, driver, car_state, is_drafting)


def calculate_lap_time_breakdown(
    track: Track,
    driver: Driver,
    car_state: CarState,
    is_drafting: bool = False,
) -> LapTimeBreakdown:
    """Lap breakdown for the standard car spec."""
    return _DEFAULT_SIMULATOR.calculate_breakdown(track, driver, car_state, is_drafting)
