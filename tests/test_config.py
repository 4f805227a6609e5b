"""Tests for settings and reference data."""

import json

import pytest
from pydantic import ValidationError

from nascarsim.config import SimulationConfig
from nascarsim.data.tracks import TRACKS, get_track, load_track
from nascarsim.models import SectionType, Track, TrackSection, TrackType


def test_defaults():
    config = SimulationConfig()
    assert config.car.horsepower == 750
    assert config.car.fuel_capacity == 18
    assert config.draft_speed_boost == 4.0
    assert config.grid_stagger == 0.1
    assert config.tick_ms == 100


def test_from_json(tmp_path):
    path = tmp_path / "sim.json"
    path.write_text(json.dumps({"grid_stagger": 0.25, "car": {"horsepower": 670}}))

    config = SimulationConfig.from_json(path)
    assert config.grid_stagger == 0.25
    assert config.car.horsepower == 670
    assert config.car.weight == 3400
    assert config.mental_decay_rate == 0.1


def test_invalid_config_rejected():
    with pytest.raises(ValidationError):
        SimulationConfig(draft_speed_boost=0)


def test_reference_tracks_close_the_loop():
    for track in TRACKS.values():
        assert track.section_length_feet == pytest.approx(track.length * 5280, rel=0.01)
        assert track.turns
        assert track.straights


def test_get_track():
    assert get_track("bristol").type == TrackType.SHORT
    assert get_track("daytona").banking.turns == 31
    with pytest.raises(KeyError):
        get_track("talladega")


def test_load_track_roundtrip(tmp_path):
    path = tmp_path / "bristol.json"
    path.write_text(get_track("bristol").model_dump_json())
    assert load_track(path) == get_track("bristol")


def test_turn_requires_geometry():
    with pytest.raises(ValidationError):
        TrackSection(type=SectionType.TURN, length=500)
    with pytest.raises(ValidationError):
        TrackSection(type=SectionType.STRAIGHT, length=-1)
    with pytest.raises(ValidationError):
        TrackSection(type=SectionType.TURN, length=500, banking=95, radius=500)


def test_track_needs_sections():
    with pytest.raises(ValidationError):
        Track(id="empty", name="Empty", type="short", length=0.5, sections=[])
