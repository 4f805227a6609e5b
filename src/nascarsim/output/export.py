"""Export race state and results to CSV and JSON."""

import csv
import json
from pathlib import Path

from nascarsim.simulation.state import RaceResults, RaceState


class Exporter:
    """Writes race snapshots, results and lap history to disk."""

    def __init__(self, output_dir: str | Path = "output"):
        """Initialize exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_state_json(self, state: RaceState, filename: str = "race_state.json") -> Path:
        """Export a race snapshot as JSON.

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename
        filepath.write_text(state.model_dump_json(indent=2))
        return filepath

    def export_results_json(self, results: RaceResults, filename: str = "race_results.json") -> Path:
        """Export the player's race results as JSON.

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename
        filepath.write_text(results.model_dump_json(indent=2))
        return filepath

    def export_lap_history_csv(
        self,
        lap_times: dict[str, list[float]],
        filename: str = "lap_history.csv",
    ) -> Path:
        """Export every driver's lap times to CSV.

        Args:
            lap_times: Lap times per driver id (``RaceEngine.get_lap_times``)
            filename: Output filename

        Returns:
            Path to created file
        """
        filepath = self.output_dir / filename

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["driver_id", "lap", "lap_time", "total_time"])

            for driver_id, laps in lap_times.items():
                total = 0.0
                for lap, lap_time in enumerate(laps, 1):
                    total += lap_time
                    writer.writerow([driver_id, lap, f"{lap_time:.3f}", f"{total:.3f}"])

        return filepath

    def export_all(
        self,
        state: RaceState,
        results: RaceResults,
        lap_times: dict[str, list[float]],
        prefix: str = "",
    ) -> dict[str, Path]:
        """Export all formats.

        Returns:
            Dictionary of format -> filepath
        """
        prefix = f"{prefix}_" if prefix else ""

        summary = {
            "track": state.track.id,
            "laps": state.total_laps,
            "finish_position": results.finish_position,
        }
        summary_path = self.output_dir / f"{prefix}summary.json"
        with open(summary_path, "w") as f:
            json.dump(summary, f, indent=2)

        return {
            "state_json": self.export_state_json(state, f"{prefix}race_state.json"),
            "results_json": self.export_results_json(results, f"{prefix}race_results.json"),
            "laps_csv": self.export_lap_history_csv(lap_times, f"{prefix}lap_history.csv"),
            "summary_json": summary_path,
        }
