"""Console output formatting."""

from nascarsim.models import Track
from nascarsim.physics.laptime import LapTimeBreakdown
from nascarsim.simulation.state import RaceResults, RaceState


def format_lap_time(seconds: float) -> str:
    """Format seconds as ``15.512s`` or ``1:02.345``."""
    if seconds < 60:
        return f"{seconds:.3f}s"
    mins = int(seconds // 60)
    secs = seconds % 60
    return f"{mins}:{secs:06.3f}"


def format_gap(seconds: float) -> str:
    if seconds == 0:
        return "Leader"
    return f"+{seconds:.3f}s"


class ConsoleOutput:
    """Formats race state and results for console display."""

    @staticmethod
    def print_standings(state: RaceState, limit: int | None = None) -> None:
        """Print the running order.

        Args:
            state: Race snapshot from the engine
            limit: Only show this many positions (the player is always shown)
        """
        print("\n" + "=" * 64)
        print(f"{state.track.name.upper()} - LAP {state.current_lap}/{state.total_laps}")
        print("=" * 64)
        print(f"{'Pos':<4} {'#':<4} {'Driver':<22} {'Last Lap':<11} {'Gap':<11} {'Led':<4}")
        print("-" * 64)

        for pos in state.positions:
            is_player = pos.driver_id == state.player_driver.id
            if limit is not None and pos.position > limit and not is_player:
                continue

            marker = "*" if is_player else " "
            last_lap = format_lap_time(pos.lap_time) if pos.lap_time > 0 else "-"
            print(
                f"{pos.position:<4} "
                f"{pos.number:<4} "
                f"{pos.driver_name[:21] + marker:<22} "
                f"{last_lap:<11} "
                f"{format_gap(pos.gap_to_leader):<11} "
                f"{pos.laps_led:<4}"
            )

        car = state.player_car
        print("-" * 64)
        print(
            f"Player P{state.player_position}  "
            f"Tires: {car.tire_wear:5.1f}%  "
            f"Fuel: {car.fuel_level:5.1f}%  "
            f"Damage: {car.damage:4.1f}%"
        )
        if state.active_decision is not None:
            print(f"DECISION: {state.active_decision.prompt}")
            for option in state.active_decision.options:
                print(f"  [{option.id}] {option.label} ({option.risk_level.value} risk)")
        print("=" * 64)

    @staticmethod
    def print_race_results(results: RaceResults) -> None:
        """Print the player's race summary.

        Args:
            results: Results from ``RaceEngine.get_results``
        """
        print("\n" + "=" * 50)
        print("RACE RESULTS")
        print("=" * 50)

        gained = results.positions_gained
        change = f"+{gained}" if gained > 0 else str(gained)
        print(f"  Finish:          P{results.finish_position} (started P{results.start_position}, {change})")
        print(f"  Laps completed:  {results.laps_completed}")
        print(f"  Laps led:        {results.laps_led}")
        print(f"  Fastest lap:     {format_lap_time(results.fastest_lap)}")
        print(f"  Average lap:     {format_lap_time(results.average_lap)}")
        print(f"  Clean laps:      {results.clean_laps}")
        if results.decisions_total:
            print(f"  Decisions:       {results.decisions_correct}/{results.decisions_total} successful")

        total_xp = sum(xp.total for xp in results.xp_gained)
        print(f"  XP earned:       {total_xp:.1f}")
        print("=" * 50)

    @staticmethod
    def print_lap_breakdown(track: Track, breakdown: LapTimeBreakdown) -> None:
        """Print section times and speeds for one lap."""
        print(f"\n{track.name} lap breakdown")
        print("-" * 44)
        print(f"{'#':<4} {'Section':<10} {'Length':<10} {'Speed':<10} {'Time':<8}")

        for i, (section, speed, time) in enumerate(
            zip(track.sections, breakdown.section_speeds, breakdown.section_times), 1
        ):
            print(
                f"{i:<4} "
                f"{section.type.value:<10} "
                f"{section.length:<10.0f} "
                f"{speed:<10.1f} "
                f"{time:<8.3f}"
            )

        print("-" * 44)
        print(
            f"Lap {format_lap_time(breakdown.total_time)}  "
            f"avg {breakdown.average_speed:.1f} mph  "
            f"top {breakdown.top_speed:.1f} mph"
        )
