import numpy as np
from physics_demos import (
    PendulumEngine,
    ProjectileConfig,
    ProjectileEngine,
    SimulationDriver,
    TimestepPolicy,
    VelocityThrottle,
)
from physics_demos.constants import DEFAULT_DT, MAX_DT
from physics_demos.profiler import Profiler


def test_pause_resume_reset():
    driver = SimulationDriver(PendulumEngine())
    assert driver.tick() is None

    driver.start()
    for _ in range(10):
        driver.tick()
    t = driver.engine.state.time
    assert np.isclose(t, 10 * DEFAULT_DT)

    driver.pause()
    assert driver.tick() is None
    assert driver.engine.state.time == t

    driver.resume()
    driver.tick()
    assert driver.engine.state.time > t

    state = driver.reset()
    assert state.time == 0.0
    assert driver.running


def test_wall_clock_policy_clamps_frame_deltas():
    driver = SimulationDriver(PendulumEngine(), policy=TimestepPolicy.wall_clock())
    driver.start()

    driver.tick(10.0)                       # first frame: no previous timestamp
    assert driver.engine.state.time == 0.0

    driver.tick(10.02)
    assert np.isclose(driver.engine.state.time, 0.02)

    driver.tick(11.0)                       # long stall
    assert np.isclose(driver.engine.state.time, 0.02 + MAX_DT)

    driver.tick(10.5)                       # clock went backwards
    assert np.isclose(driver.engine.state.time, 0.02 + MAX_DT)


def test_projectile_stops_driver_on_landing():
    driver = SimulationDriver(ProjectileEngine())
    state = driver.run(10000)
    assert state.grounded
    assert not driver.running
    assert driver.tick() is None


def test_configure_returns_clamped_values():
    driver = SimulationDriver(ProjectileEngine())
    clamped = driver.configure(ProjectileConfig(gravity=-5.0))
    assert [c.name for c in clamped] == ["gravity"]
    assert driver.engine.config.gravity == 1.0
    assert driver.engine.state.time == 0.0


def test_velocity_throttle():
    throttle = VelocityThrottle(threshold=0.1)
    assert throttle.should_report(1.0, 2.0)
    assert not throttle.should_report(1.05, 1.95)
    assert throttle.should_report(1.2, 1.95)
    assert throttle.last_reported == (1.2, 1.95)
    throttle.reset()
    assert throttle.last_reported is None
    assert throttle.should_report(1.2, 1.95)


def test_velocity_reports_are_throttled():
    """With g = 1 m/s², vy changes by 1/60 m/s per tick: roughly one report per 7 ticks."""
    reports = []
    engine = ProjectileEngine(ProjectileConfig(gravity=1.0))
    driver = SimulationDriver(engine, on_velocity=lambda vx, vy: reports.append((vx, vy)))
    driver.run(60)

    print("reports", len(reports))
    assert 5 <= len(reports) <= 12
    for (_, vy0), (_, vy1) in zip(reports, reports[1:]):
        assert vy0 - vy1 > 0.1


def test_profiler_records_sections():
    profiler = Profiler()
    driver = SimulationDriver(PendulumEngine(), profiler=profiler)
    driver.run(30)
    driver.readout()

    summary = profiler.stats.summary()
    assert summary["step"]["n"] == 30
    assert summary["derive"]["n"] == 1
    assert summary["step"]["max_ms"] >= summary["step"]["mean_ms"] >= 0.0

    profiler.stats.clear()
    assert profiler.stats.summary() == {}
