"""Tests for tick-driven race simulation."""

import pytest

from nascarsim.simulation import RaceConfig, RaceEngine, RaceStatus

from conftest import make_driver


def snapshot(engine):
    state = engine.get_current_state()
    laps = {p.driver_id: p.laps_completed for p in state.positions}
    progress = {lp.driver_id: lp.progress for lp in state.lap_progress}
    return state, laps, progress


def run_ticks(engine, tick_ms=100, limit=100_000):
    """Tick to completion, yielding the state after every tick."""
    for _ in range(limit):
        if engine.is_complete():
            return
        engine.simulate_tick(tick_ms)
        yield snapshot(engine)
    raise AssertionError("race did not finish")


@pytest.fixture
def ticking_engine(engine, three_car_config):
    engine.initialize(three_car_config.model_copy(update={"laps": 3}))
    engine.start()
    return engine


def test_progress_is_monotonic_and_resets_once_per_lap(ticking_engine):
    _, prev_laps, prev_progress = snapshot(ticking_engine)

    for _, laps, progress in run_ticks(ticking_engine):
        for driver_id in laps:
            completed = laps[driver_id] - prev_laps[driver_id]
            assert completed in (0, 1)
            if completed:
                assert progress[driver_id] == 0.0
            else:
                assert progress[driver_id] >= prev_progress[driver_id]
            assert 0.0 <= progress[driver_id] <= 1.0
        prev_laps, prev_progress = laps, progress

    assert all(n == 3 for n in prev_laps.values())


def test_ranks_are_a_permutation_every_tick(ticking_engine):
    for state, _, _ in run_ticks(ticking_engine):
        assert sorted(p.position for p in state.positions) == [1, 2, 3]
        assert state.positions[0].gap_to_leader == 0


def test_race_lap_waits_for_the_whole_field(ticking_engine):
    saw_split_lap = False
    for state, laps, _ in run_ticks(ticking_engine):
        if ticking_engine.is_complete():
            break
        assert state.current_lap == min(laps.values()) + 1
        if max(laps.values()) > min(laps.values()):
            saw_split_lap = True

    assert saw_split_lap
    assert ticking_engine.current_lap == 3


def test_lap_time_matches_elapsed_ticks(ticking_engine):
    ticks = 0
    while not any(p.laps_completed for p in ticking_engine.get_current_state().positions):
        ticking_engine.simulate_tick(100)
        ticks += 1

    leader = ticking_engine.get_current_state().positions[0]
    # The lap finishes on the first tick that covers the expected lap time
    assert ticks * 0.1 == pytest.approx(leader.lap_time, abs=0.15)


def test_tick_ignored_while_paused(ticking_engine):
    ticking_engine.simulate_tick(500)
    before = snapshot(ticking_engine)[2]

    ticking_engine.pause()
    ticking_engine.simulate_tick(500)
    assert snapshot(ticking_engine)[2] == before

    ticking_engine.resume()
    ticking_engine.simulate_tick(500)
    assert snapshot(ticking_engine)[2] != before


def test_grid_stagger_delays_start(ticking_engine):
    ticking_engine.simulate_tick(100)
    _, _, progress = snapshot(ticking_engine)

    assert progress["alpha"] > 0
    assert progress["bravo"] == 0
    assert progress["player"] == 0

    state = ticking_engine.get_current_state()
    assert [p.driver_id for p in state.positions] == ["alpha", "bravo", "player"]
    assert state.positions[2].gap_to_leader == pytest.approx(0.2, abs=1e-6)


def test_run_finishes_race(ticking_engine):
    calls = []
    ticking_engine.run(on_tick=lambda e: calls.append(e.current_lap))

    assert ticking_engine.is_complete()
    assert ticking_engine.status == RaceStatus.COMPLETE
    assert calls
    results = ticking_engine.get_results()
    assert results.laps_completed == 3


def test_tick_race_agrees_with_lap_race(bristol, rng):
    config = RaceConfig(
        track=bristol,
        laps=4,
        player_driver=make_driver("player", racecraft=90),
        ai_drivers=[make_driver("rookie", racecraft=30), make_driver("mid", racecraft=60)],
        starting_position=3,
    )

    by_lap = RaceEngine(rng=rng)
    by_lap.initialize(config)
    by_lap.start()
    while not by_lap.is_complete():
        by_lap.simulate_lap()

    by_tick = RaceEngine(rng=rng)
    by_tick.initialize(config)
    by_tick.start()
    by_tick.run(tick_ms=50)

    lap_order = [p.driver_id for p in by_lap.get_current_state().positions]
    tick_order = [p.driver_id for p in by_tick.get_current_state().positions]
    assert lap_order == tick_order == ["player", "mid", "rookie"]


def test_finished_cars_wait_for_the_field(ticking_engine):
    ticking_engine.run()
    laps = ticking_engine.get_lap_times()
    assert all(len(times) == 3 for times in laps.values())
