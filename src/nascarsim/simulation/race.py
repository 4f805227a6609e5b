"""Race simulation engine."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from nascarsim.config import SimulationConfig
from nascarsim.exceptions import DecisionMismatchError, RaceNotReadyError, SimulationError
from nascarsim.models import (
    NO_DRAFT,
    CarState,
    DraftStatus,
    Driver,
    MentalEvent,
    MentalState,
    Track,
    TrackType,
    XPGain,
    apply_mental_state_decay,
    apply_mental_state_event,
    calculate_mental_resilience,
)
from nascarsim.models.mental_state import clamp
from nascarsim.physics.draft import calculate_draft_status, gap_to_car_lengths
from nascarsim.physics.fuel import fuel_consumption
from nascarsim.physics.laptime import LapSimulator, LapTimeBreakdown
from nascarsim.physics.tires import aggression_multiplier, worn_tire_percent
from nascarsim.simulation.decisions import (
    Decision,
    DecisionEffects,
    DecisionManager,
    DecisionOutcome,
    DecisionResult,
)
from nascarsim.simulation.state import (
    LapProgress,
    Position,
    RaceConfig,
    RaceResults,
    RaceState,
    RaceStatus,
)

logger = logging.getLogger(__name__)

# Aero matters enough to draft only on the big ovals
DRAFTING_TRACKS = frozenset({TrackType.SUPERSPEEDWAY, TrackType.INTERMEDIATE})
SIDE_BY_SIDE_GAP = 0.25  # seconds
POSITION_OFFSET = 0.001  # seconds (lap mode) or laps (tick mode)
FULL_RESET = 100.0


class SimulationMode(str, Enum):
    """Granularity the race is being driven at. Fixed by the first advance."""

    LAP = "lap"
    TICK = "tick"


@dataclass
class DriverRaceState:
    """Tracks a driver's state during the race."""

    slot: int
    driver: Driver
    car_state: CarState
    start_position: int
    position: int
    total_time: float = 0.0
    current_lap_time: float = 0.0
    fastest_lap: float = float("inf")
    laps_led: int = 0
    lap_times: list[float] = field(default_factory=list)
    gap_to_next: float = 0.0
    boundary_position: int = 0  # position at the previous race-lap boundary

    # Tick mode
    progress: float = 0.0
    expected_lap_time: float | None = None
    start_delay: float = 0.0
    draft: DraftStatus = NO_DRAFT

    @property
    def laps_completed(self) -> int:
        return len(self.lap_times)

    @property
    def distance(self) -> float:
        """Laps covered including the current partial lap."""
        return self.laps_completed + self.progress

    @property
    def effective_time(self) -> float:
        """Completed race time plus the time-equivalent of lap progress."""
        if self.expected_lap_time is None:
            return self.total_time
        return self.total_time + self.progress * self.expected_lap_time


def calculate_race_xp(finish_position: int, start_position: int, laps_led: int) -> XPGain:
    """XP earned from race performance.

    Args:
        finish_position: Where the driver finished
        start_position: Where the driver started
        laps_led: Laps led during the race

    Returns:
        Racecraft, consistency and focus XP
    """
    racecraft = 10.0
    if finish_position <= 5:
        racecraft += (6 - finish_position) * 5

    positions_gained = start_position - finish_position
    if positions_gained > 0:
        racecraft += positions_gained * 2

    racecraft += laps_led * 0.5

    return XPGain(racecraft=racecraft, consistency=15.0, focus=5.0)


class RaceEngine:
    """Runs a stock-car race, either a whole lap at a time or in small ticks.

    The engine is driven by its caller: nothing advances unless
    ``simulate_lap`` or ``simulate_tick`` is called, and both are ignored
    unless the race is running.
    """

    def __init__(
        self,
        decision_manager: DecisionManager | None = None,
        config: SimulationConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        """Initialize race engine.

        Args:
            decision_manager: Source of player decisions; None disables them
            config: Simulation settings
            rng: Random number generator (random grid slot for the player)
        """
        self.config = config if config is not None else SimulationConfig()
        self.decision_manager = decision_manager
        self.rng = rng if rng is not None else np.random.default_rng()
        self.lap_simulator = LapSimulator(
            car=self.config.car,
            draft_boost=self.config.draft_speed_boost,
        )
        self._reset()

    def _reset(self) -> None:
        self.track: Track | None = None
        self.total_laps = 0
        self.current_lap = 0
        self._states: list[DriverRaceState] = []
        self._order: list[DriverRaceState] = []
        self._positions: list[Position] = []
        self._player: DriverRaceState | None = None
        self._mode: SimulationMode | None = None
        self._started = False
        self._paused = False
        self._complete = False
        self._pending_decision: Decision | None = None
        self._decisions_total = 0
        self._decisions_correct = 0
        self._decision_xp: list[XPGain] = []

    # ------------------------------------------------------------------
    # Lifecycle

    @property
    def status(self) -> RaceStatus:
        if self.track is None:
            return RaceStatus.UNINITIALIZED
        if self._complete:
            return RaceStatus.COMPLETE
        if not self._started:
            return RaceStatus.GRID
        if self._pending_decision is not None:
            return RaceStatus.AWAITING_DECISION
        if self._paused:
            return RaceStatus.PAUSED
        return RaceStatus.RUNNING

    def initialize(self, race_config: RaceConfig) -> None:
        """Build the grid and reset all race state.

        The player takes the configured grid slot (random when omitted) and
        the AI drivers fill the remaining slots in roster order. Each slot
        starts ``grid_stagger`` seconds behind the one ahead so the initial
        running order matches the grid.
        """
        self._reset()

        field_size = race_config.field_size
        if race_config.starting_position is not None:
            start = min(race_config.starting_position, field_size)
        else:
            start = int(self.rng.integers(1, field_size + 1))

        ai_drivers = iter(race_config.ai_drivers)
        for slot in range(field_size):
            grid_position = slot + 1
            is_player = grid_position == start
            driver = race_config.player_driver if is_player else next(ai_drivers)
            stagger = self.config.grid_stagger * slot

            state = DriverRaceState(
                slot=slot,
                driver=driver,
                car_state=CarState(),
                start_position=grid_position,
                position=grid_position,
                boundary_position=grid_position,
                total_time=stagger,
                start_delay=stagger,
            )
            self._states.append(state)
            if is_player:
                self._player = state

        self.track = race_config.track
        self.total_laps = race_config.laps
        self._update_positions()

        logger.info(
            "Race initialized at %s: %d laps, %d cars, player starts P%d",
            self.track.name,
            self.total_laps,
            field_size,
            start,
        )

    def start(self) -> None:
        """Drop the green flag."""
        if self.track is None:
            logger.debug("start() ignored: race not initialized")
            return
        if self._started:
            return

        self._started = True
        self.current_lap = 1
        logger.info("Green flag at %s", self.track.name)

    def pause(self) -> None:
        if self.track is None:
            logger.debug("pause() ignored: race not initialized")
            return
        self._paused = True
        logger.info("Race paused on lap %d", self.current_lap)

    def resume(self) -> None:
        if self.track is None:
            logger.debug("resume() ignored: race not initialized")
            return
        self._paused = False
        logger.info("Race resumed on lap %d", self.current_lap)

    def is_complete(self) -> bool:
        return self._complete

    # ------------------------------------------------------------------
    # Advancing the race

    def simulate_lap(self) -> None:
        """Run one full lap for every car, then re-rank by total time."""
        if not self._can_advance(SimulationMode.LAP):
            return

        # Draft is decided from the running order before anyone moves
        drafts = [self._draft_status(state) for state in self._states]

        for state, draft in zip(self._states, drafts):
            lap_time = self.lap_simulator.calculate_lap_time(
                self.track,
                state.driver,
                state.car_state,
                is_drafting=draft.in_draft,
            )
            self._finish_driver_lap(state, lap_time, draft)

        self._update_positions()
        self._close_race_lap()

    def simulate_tick(self, elapsed_ms: float) -> None:
        """Advance every car by ``elapsed_ms`` of race time.

        Each car covers ``elapsed / expected_lap_time`` of its lap, where the
        expected lap time is fixed when the car starts the lap. A car that
        reaches the line finishes its lap; surplus time in that tick is
        dropped. The race lap advances once every car has finished it.
        """
        if not self._can_advance(SimulationMode.TICK):
            return

        dt = max(0.0, elapsed_ms) / 1000
        for state in self._states:
            if state.laps_completed >= self.total_laps:
                continue

            remaining = dt
            if state.start_delay > 0:
                used = min(state.start_delay, remaining)
                state.start_delay -= used
                remaining -= used
                if remaining <= 0:
                    continue

            if state.expected_lap_time is None:
                state.draft = self._draft_status(state)
                state.expected_lap_time = self.lap_simulator.calculate_lap_time(
                    self.track,
                    state.driver,
                    state.car_state,
                    is_drafting=state.draft.in_draft,
                )

            state.progress = min(1.0, state.progress + remaining / state.expected_lap_time)
            if state.progress >= 1.0:
                self._finish_driver_lap(state, state.expected_lap_time, state.draft)
                state.progress = 0.0
                state.expected_lap_time = None

        self._update_positions()

        if min(state.laps_completed for state in self._states) >= self.current_lap:
            self._close_race_lap()

    def run(
        self,
        tick_ms: float | None = None,
        on_tick: Callable[["RaceEngine"], None] | None = None,
    ) -> None:
        """Tick until the race is complete or stops running.

        Returns early when the race is paused or waiting on a decision; call
        again after resuming or applying the decision.

        Args:
            tick_ms: Tick size in milliseconds (defaults to ``config.tick_ms``)
            on_tick: Called with the engine after every tick
        """
        tick = tick_ms if tick_ms is not None else self.config.tick_ms
        while self.status == RaceStatus.RUNNING:
            self.simulate_tick(tick)
            if on_tick is not None:
                on_tick(self)

    def _can_advance(self, mode: SimulationMode) -> bool:
        status = self.status
        if status != RaceStatus.RUNNING:
            logger.debug("Ignoring %s advance while race is %s", mode.value, status.value)
            return False

        if self._mode is None:
            self._mode = mode
        elif self._mode != mode:
            raise SimulationError(
                f"Race is driven in {self._mode.value} mode; cannot advance by {mode.value}"
            )
        return True

    def _finish_driver_lap(self, state: DriverRaceState, lap_time: float, draft: DraftStatus) -> None:
        """Book a completed lap: consumables, timing and lap history."""
        car = state.car_state
        track_type = self.track.type

        gallons = fuel_consumption(state.driver, track_type, draft)
        car.burn_fuel(gallons, self.config.car.fuel_capacity)
        car.laps_since_pit += 1

        side_by_side = state.position > 1 and state.gap_to_next < SIDE_BY_SIDE_GAP
        car.set_tire_wear(
            worn_tire_percent(
                car.tire_wear,
                track_type,
                aggression_multiplier(state.driver.skills.aggression),
                side_by_side=side_by_side,
            )
        )

        state.current_lap_time = lap_time
        state.total_time += lap_time
        state.lap_times.append(lap_time)
        state.fastest_lap = min(state.fastest_lap, lap_time)

        logger.debug(
            "%s lap %d: %.3fs (tires %.1f%%, fuel %.1f%%, draft=%s)",
            state.driver.name,
            state.laps_completed,
            lap_time,
            car.tire_wear,
            car.fuel_level,
            draft.in_draft,
        )

    def _close_race_lap(self) -> None:
        """Everything that happens once the whole field has finished a lap."""
        self._order[0].laps_led += 1
        self._update_mental_states()
        self._update_positions()

        if self.current_lap >= self.total_laps:
            self._complete = True
            logger.info(
                "Checkered flag after %d laps, winner %s",
                self.total_laps,
                self._order[0].driver.name,
            )
            return

        self.current_lap += 1
        self._check_for_decision()

    def _update_mental_states(self) -> None:
        for state in self._states:
            mental = state.driver.mental_state

            if self.config.apply_mental_events:
                change = state.boundary_position - state.position
                if change > 0:
                    mental = apply_mental_state_event(mental, MentalEvent.PASS, change)
                elif change < 0:
                    mental = apply_mental_state_event(mental, MentalEvent.GOT_PASSED, -change)

            rate = self.config.mental_decay_rate * calculate_mental_resilience(state.driver.skills)
            mental = apply_mental_state_decay(mental, min(1.0, rate))

            state.driver = state.driver.with_mental_state(mental)
            state.boundary_position = state.position

    def _check_for_decision(self) -> None:
        if self.decision_manager is None or self._player is None:
            return
        if self._pending_decision is not None:
            return

        decision = self.decision_manager.should_trigger_decision(self.get_current_state())
        if decision is not None:
            self._pending_decision = decision
            logger.info("Decision raised on lap %d: %s", self.current_lap, decision.prompt)

    # ------------------------------------------------------------------
    # Running order

    def _update_positions(self) -> None:
        """Re-rank the field and rebuild the public position rows."""
        if self._mode == SimulationMode.TICK:
            # Distance first: effective time is wall-clock time for every car on
            # track, and the surplus of a line-crossing tick is dropped, so
            # effective time alone stops tracking who is ahead
            order = sorted(self._states, key=lambda s: (-s.distance, s.effective_time))
        else:
            order = sorted(self._states, key=lambda s: s.total_time)

        leader = order[0]
        positions: list[Position] = []
        ahead: DriverRaceState | None = None
        for rank, state in enumerate(order, 1):
            state.position = rank
            state.gap_to_next = self._gap(ahead, state) if ahead is not None else 0.0
            positions.append(Position(
                position=rank,
                driver_id=state.driver.id,
                driver_name=state.driver.name,
                number=state.driver.number,
                lap_time=state.current_lap_time,
                gap_to_leader=self._gap(leader, state),
                gap_to_next=state.gap_to_next,
                laps_led=state.laps_led,
                laps_completed=state.laps_completed,
            ))
            ahead = state

        self._order = order
        self._positions = positions

    def _gap(self, ahead: DriverRaceState, behind: DriverRaceState) -> float:
        """Seconds between two cars."""
        if self._mode == SimulationMode.TICK:
            deficit = ahead.distance - behind.distance
            if deficit > 0:
                gap = deficit * self._reference_lap_time(behind)
                return max(0.0, gap + behind.start_delay - ahead.start_delay)
            return max(0.0, behind.effective_time - ahead.effective_time)
        return max(0.0, behind.total_time - ahead.total_time)

    def _reference_lap_time(self, state: DriverRaceState) -> float:
        if state.expected_lap_time is not None:
            return state.expected_lap_time
        if state.current_lap_time > 0:
            return state.current_lap_time
        return self.lap_simulator.calculate_lap_time(self.track, state.driver, state.car_state)

    def _draft_status(self, state: DriverRaceState) -> DraftStatus:
        if self.track.type not in DRAFTING_TRACKS or state.position == 1:
            return NO_DRAFT

        speed = self.track.length / self._reference_lap_time(state) * 3600
        return calculate_draft_status(
            gap_to_car_lengths(state.gap_to_next, speed),
            speed_boost=self.config.draft_speed_boost,
            fuel_savings=self.config.draft_fuel_savings,
        )

    # ------------------------------------------------------------------
    # Read surface

    def get_current_state(self) -> RaceState | None:
        """Snapshot of the race, or None before ``initialize``."""
        if self.track is None or self._player is None:
            return None

        player = self._player
        return RaceState(
            current_lap=self.current_lap,
            total_laps=self.total_laps,
            positions=list(self._positions),
            leader_lap_time=self._order[0].current_lap_time,
            player_position=player.position,
            player_driver=player.driver,
            player_car=player.car_state.model_copy(),
            track=self.track,
            active_decision=self._pending_decision,
            lap_progress=[
                LapProgress(driver_id=state.driver.id, progress=state.progress)
                for state in self._order
            ],
            status=self.status,
        )

    def get_lap_times(self) -> dict[str, list[float]]:
        """Completed lap times per driver id, in running order."""
        return {state.driver.id: list(state.lap_times) for state in self._order}

    def get_lap_breakdown(self, driver_id: str) -> LapTimeBreakdown:
        """Section-by-section preview of a driver's next lap.

        Raises:
            RaceNotReadyError: Before ``initialize``
            KeyError: If the driver is not in the race
        """
        if self.track is None:
            raise RaceNotReadyError("Race has not been initialized")

        for state in self._states:
            if state.driver.id == driver_id:
                return self.lap_simulator.calculate_breakdown(
                    self.track,
                    state.driver,
                    state.car_state,
                    is_drafting=state.draft.in_draft,
                )
        raise KeyError(driver_id)

    def get_results(self) -> RaceResults:
        """Summarize the player's race.

        Raises:
            RaceNotReadyError: If there is no player driver
        """
        if self._player is None:
            raise RaceNotReadyError("Cannot get results: player driver not found")

        player = self._player
        laps = player.lap_times
        xp = calculate_race_xp(player.position, player.start_position, player.laps_led)

        return RaceResults(
            finish_position=player.position,
            start_position=player.start_position,
            positions_gained=player.start_position - player.position,
            laps_led=player.laps_led,
            laps_completed=len(laps),
            fastest_lap=player.fastest_lap if laps else 0.0,
            average_lap=float(np.mean(laps)) if laps else 0.0,
            clean_laps=len(laps),
            decisions_total=self._decisions_total,
            decisions_correct=self._decisions_correct,
            xp_gained=[xp, *self._decision_xp],
        )

    # ------------------------------------------------------------------
    # Decisions

    def apply_decision(self, decision: Decision, choice_id: str) -> DecisionResult | None:
        """Resolve the pending decision and apply its effects to the player.

        Args:
            decision: The decision from ``RaceState.active_decision``
            choice_id: Id of the chosen option

        Returns:
            The evaluated result, or None when the race is not initialized

        Raises:
            DecisionMismatchError: If ``decision`` is not the pending one
            UnknownDecisionOptionError: If ``choice_id`` is not offered
        """
        if self._player is None:
            logger.debug("apply_decision() ignored: race not initialized")
            return None

        pending = self._pending_decision
        if pending is None or decision.id != pending.id:
            raise DecisionMismatchError(f"Decision {decision.id!r} is not pending")

        pending.option(choice_id)
        result = self.decision_manager.evaluate_decision(pending, choice_id, self._player.driver)

        self._apply_effects(self._player, result.effects)
        self._decisions_total += 1
        if result.outcome == DecisionOutcome.SUCCESS:
            self._decisions_correct += 1
        self._decision_xp.append(result.xp_gained)
        self._pending_decision = None
        self._update_positions()

        logger.info(
            "Decision %s resolved: %s (%s)",
            pending.id,
            result.option_chosen,
            result.outcome.value,
        )
        return result

    def _apply_effects(self, state: DriverRaceState, effects: DecisionEffects) -> None:
        if effects.mental_state_change:
            mental = state.driver.mental_state
            updates = {
                name: clamp(getattr(mental, name) + delta)
                for name, delta in effects.mental_state_change.items()
                if name in MentalState.model_fields
            }
            state.driver = state.driver.with_mental_state(mental.model_copy(update=updates))

        car = state.car_state
        if effects.tire_wear_change is not None:
            if effects.tire_wear_change == FULL_RESET:
                car.service(tires=True, fuel=False)
            else:
                car.adjust_tire_wear(effects.tire_wear_change)

        if effects.fuel_change is not None:
            if effects.fuel_change == FULL_RESET:
                car.service(tires=False, fuel=True)
            else:
                car.adjust_fuel(effects.fuel_change)

        if effects.damage_change:
            car.adjust_damage(effects.damage_change)

        if effects.position_change:
            self._shift_position(state, effects.position_change)

    def _shift_position(self, state: DriverRaceState, change: int) -> None:
        """Move a car ``change`` places up (positive) or down the order."""
        target = min(len(self._order), max(1, state.position - change))
        if target == state.position:
            return

        other = self._order[target - 1]
        moving_up = target < state.position

        if self._mode != SimulationMode.TICK:
            state.total_time = other.total_time + (-POSITION_OFFSET if moving_up else POSITION_OFFSET)
        elif moving_up:
            # Progress may only grow within a lap
            desired = other.distance + POSITION_OFFSET - state.laps_completed
            state.progress = min(1.0, max(state.progress, desired))
        else:
            # Hold the car until the target is past it; one extra tick covers
            # time the target drops when it crosses the line
            hold = self._gap(state, other) + self.config.tick_ms / 1000
            state.start_delay += hold
            logger.debug("%s held %.3fs to drop to P%d", state.driver.name, hold, target)
