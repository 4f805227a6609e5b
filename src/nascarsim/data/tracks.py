"""Reference track data."""

import json
from pathlib import Path

from nascarsim.models import Banking, SectionType, Track, TrackSection, TrackType


def _turn(length: float, banking: float, radius: float) -> TrackSection:
    return TrackSection(type=SectionType.TURN, length=length, banking=banking, radius=radius)


def _straight(length: float) -> TrackSection:
    return TrackSection(type=SectionType.STRAIGHT, length=length)


def _oval(
    turn_length: float,
    turn_banking: float,
    turn_radius: float,
    straight_length: float,
) -> tuple[TrackSection, ...]:
    """Two matched turns joined by two equal straights."""
    turn = _turn(turn_length, turn_banking, turn_radius)
    straight = _straight(straight_length)
    return (turn, straight, turn, straight)


BRISTOL = Track(
    id="bristol",
    name="Bristol Motor Speedway",
    type=TrackType.SHORT,
    length=0.533,
    banking=Banking(turns=26, straights=6),
    surface_grip=0.95,
    sections=_oval(703.5, 26, 550, 703.5),
    race_laps=500,
)

MARTINSVILLE = Track(
    id="martinsville",
    name="Martinsville Speedway",
    type=TrackType.SHORT,
    length=0.526,
    banking=Banking(turns=12, straights=0),
    surface_grip=0.93,
    sections=_oval(700, 12, 300, 688.5),
    race_laps=500,
)

CHARLOTTE = Track(
    id="charlotte",
    name="Charlotte Motor Speedway",
    type=TrackType.INTERMEDIATE,
    length=1.5,
    banking=Banking(turns=24, straights=5),
    surface_grip=0.90,
    sections=_oval(2000, 24, 750, 1960),
    race_laps=400,
)

DAYTONA = Track(
    id="daytona",
    name="Daytona International Speedway",
    type=TrackType.SUPERSPEEDWAY,
    length=2.5,
    banking=Banking(turns=31, straights=3),
    surface_grip=0.88,
    sections=_oval(3400, 31, 1500, 3200),
    race_laps=200,
)

WATKINS_GLEN = Track(
    id="watkins-glen",
    name="Watkins Glen International",
    type=TrackType.ROAD,
    length=2.45,
    banking=Banking(turns=6, straights=0),
    surface_grip=0.90,
    sections=(
        _straight(2000),
        _turn(400, 6, 150),  # turn 1
        _straight(1800),
        _turn(600, 10, 400),  # esses
        _turn(500, 4, 250),
        _straight(2200),  # back straight
        _turn(700, 8, 600),  # inner loop
        _straight(1500),
        _turn(436, 5, 180),
        _straight(2800),
    ),
    race_laps=90,
)

TRACKS: dict[str, Track] = {
    track.id: track
    for track in (BRISTOL, MARTINSVILLE, CHARLOTTE, DAYTONA, WATKINS_GLEN)
}


def get_track(track_id: str) -> Track:
    """Look up a reference track.

    Raises:
        KeyError: If no track has this id
    """
    try:
        return TRACKS[track_id]
    except KeyError:
        raise KeyError(f"Unknown track {track_id!r}; available: {', '.join(sorted(TRACKS))}") from None


def load_track(path: str | Path) -> Track:
    """Load and validate a track from a JSON file."""
    with open(path) as f:
        return Track.model_validate(json.load(f))
