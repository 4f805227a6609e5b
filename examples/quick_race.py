#!/usr/bin/env python3
"""Quick race example against a synthetic field.

Runs one race at a reference track, answers pit-stop prompts automatically
and prints the standings and the player's results.

Usage:
    python examples/quick_race.py [--track TRACK] [--laps N] [--ticks]

Examples:
    python examples/quick_race.py --track daytona --laps 20
    python examples/quick_race.py --track bristol --laps 30 --ticks --seed 7
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from nascarsim.career import calculate_race_points
from nascarsim.data.tracks import TRACKS, get_track
from nascarsim.models import Driver, DriverSkills, MentalState, XPGain
from nascarsim.output import ConsoleOutput, Exporter
from nascarsim.simulation import (
    Decision,
    DecisionEffects,
    DecisionOption,
    DecisionOutcome,
    DecisionResult,
    DecisionType,
    RaceConfig,
    RaceEngine,
    RaceState,
    RiskLevel,
    build_race_context,
)


class PitCallManager:
    """Offers a pit stop once the player's tires fall below a threshold."""

    def __init__(self, tire_threshold: float = 90.0):
        self.tire_threshold = tire_threshold
        self._count = 0

    def should_trigger_decision(self, state: RaceState) -> Decision | None:
        if state.player_car.tire_wear >= self.tire_threshold:
            return None

        self._count += 1
        return Decision(
            id=f"pit-{self._count}",
            type=DecisionType.PIT_STRATEGY,
            prompt=f"Tires at {state.player_car.tire_wear:.0f}%. Pit this lap?",
            options=[
                DecisionOption(id="pit", label="Four tires and fuel", risk_level=RiskLevel.LOW),
                DecisionOption(id="stay", label="Stay out", risk_level=RiskLevel.HIGH),
            ],
            default_option="pit",
            context=build_race_context(state),
        )

    def evaluate_decision(self, decision: Decision, choice_id: str, driver: Driver) -> DecisionResult:
        if choice_id == "pit":
            return DecisionResult(
                option_chosen=choice_id,
                outcome=DecisionOutcome.SUCCESS,
                effects=DecisionEffects(position_change=-3, tire_wear_change=100, fuel_change=100),
                xp_gained=XPGain(pit_strategy=10),
                message="Fresh tires, lost a few spots on pit road",
            )
        return DecisionResult(
            option_chosen=choice_id,
            outcome=DecisionOutcome.NEUTRAL,
            effects=DecisionEffects(mental_state_change={"frustration": 5}),
            message="Staying out on worn tires",
        )


def create_field(rng: np.random.Generator, size: int = 12) -> tuple[Driver, list[Driver]]:
    """Create the player and an AI field with spread-out skills."""
    player = Driver(
        id="player",
        name="Player One",
        number="7",
        is_player=True,
        skills=DriverSkills(racecraft=68, consistency=65, focus=70, composure=60),
        mental_state=MentalState(confidence=60, frustration=40),
    )

    ai_drivers = []
    for i in range(size - 1):
        skill = float(np.clip(rng.normal(65, 12), 30, 95))
        ai_drivers.append(Driver(
            id=f"ai-{i + 1}",
            name=f"AI Driver {i + 1}",
            number=str(10 + i),
            skills=DriverSkills(
                racecraft=skill,
                consistency=float(np.clip(skill + rng.normal(0, 5), 0, 100)),
                aggression=float(rng.uniform(30, 90)),
                focus=skill,
                composure=skill,
            ),
        ))
    return player, ai_drivers


def main():
    parser = argparse.ArgumentParser(description="Run a quick stock-car race")
    parser.add_argument("--track", default="bristol", choices=sorted(TRACKS))
    parser.add_argument("--laps", type=int, default=25, help="Race distance in laps")
    parser.add_argument("--start", type=int, default=None, help="Player grid slot")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--ticks", action="store_true", help="Drive the race in 100ms ticks")
    parser.add_argument("--export", default=None, help="Directory to export results to")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rng = np.random.default_rng(args.seed)
    track = get_track(args.track)
    player, ai_drivers = create_field(rng)

    engine = RaceEngine(decision_manager=PitCallManager(), rng=rng)
    engine.initialize(RaceConfig(
        track=track,
        laps=args.laps,
        player_driver=player,
        ai_drivers=ai_drivers,
        starting_position=args.start,
    ))

    ConsoleOutput.print_lap_breakdown(track, engine.get_lap_breakdown(player.id))
    engine.start()

    while not engine.is_complete():
        if args.ticks:
            engine.run()
        else:
            engine.simulate_lap()

        state = engine.get_current_state()
        if state.active_decision is not None:
            ConsoleOutput.print_standings(state, limit=5)
            decision = state.active_decision
            result = engine.apply_decision(decision, decision.default_option)
            print(f"  -> {result.message}")

    state = engine.get_current_state()
    results = engine.get_results()
    ConsoleOutput.print_standings(state)
    ConsoleOutput.print_race_results(results)

    player_row = next(p for p in state.positions if p.driver_id == player.id)
    most_led = max(p.laps_led for p in state.positions)
    points = calculate_race_points(
        results.finish_position,
        results.laps_led,
        most_laps_led=results.laps_led > 0 and player_row.laps_led == most_led,
    )
    print(f"Championship points: {points.total_points}")

    if args.export:
        files = Exporter(output_dir=args.export).export_all(
            state, results, engine.get_lap_times(), prefix=track.id
        )
        for fmt, path in files.items():
            print(f"  {fmt}: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
