"""Shared fixtures."""

import numpy as np
import pytest

from nascarsim.data.tracks import BRISTOL, DAYTONA
from nascarsim.models import CarState, Driver, DriverSkills, MentalState
from nascarsim.simulation import RaceConfig, RaceEngine


def make_driver(driver_id: str, racecraft: float = 50.0, **skills) -> Driver:
    return Driver(
        id=driver_id,
        name=driver_id.title(),
        skills=DriverSkills(racecraft=racecraft, **skills),
    )


@pytest.fixture
def bristol():
    return BRISTOL


@pytest.fixture
def daytona():
    return DAYTONA


@pytest.fixture
def veteran() -> Driver:
    """A sharp, confident driver."""
    return Driver(
        id="veteran",
        name="Veteran Driver",
        skills=DriverSkills(racecraft=70),
        mental_state=MentalState(confidence=75, frustration=15),
    )


@pytest.fixture
def fresh_car() -> CarState:
    return CarState()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def three_car_config(bristol) -> RaceConfig:
    """Identical drivers on Bristol, player starting last."""
    return RaceConfig(
        track=bristol,
        laps=10,
        player_driver=make_driver("player"),
        ai_drivers=[make_driver("alpha"), make_driver("bravo")],
        starting_position=3,
    )


@pytest.fixture
def engine(rng) -> RaceEngine:
    return RaceEngine(rng=rng)
