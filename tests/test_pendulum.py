import math

import numpy as np
from physics_demos.engines import PendulumEngine
from physics_demos.config import PendulumConfig
from physics_demos.constants import MAX_DT
from physics_demos.observers import PeriodEstimator
from physics_demos.types import PendulumState
from physics_demos.util import wrap_angle


def test_small_angle_period():
    """
    Small-angle period T = 2π sqrt(L/g).
    Measured from successive turning points over 10+ oscillations.
    """
    L, g = 1.0, 9.8
    engine = PendulumEngine(PendulumConfig(length=L, gravity=g, damping=0.0, initial_angle_deg=10))
    estimator = PeriodEstimator()
    engine.attach(estimator)
    engine.reset()

    for _ in range(1500):
        engine.step(1/60)

    T = 2 * math.pi * math.sqrt(L / g)
    periods = estimator.periods
    print("T", T, "measured", periods)

    assert len(periods) >= 10
    for p in periods:
        assert abs(p - T) / T <= 0.05
    assert np.isclose(engine.get_derived().period, T)
    assert np.isclose(engine.theoretical_period, T)


def test_large_angle_runs_slower_than_small_angle_period():
    """Nonlinear pendulum: T(θ0) grows with amplitude (≈ +7% at 60°)."""
    engine = PendulumEngine(PendulumConfig(damping=0.0, initial_angle_deg=60))
    estimator = PeriodEstimator()
    engine.attach(estimator)
    engine.reset()
    for _ in range(900):
        engine.step(1/60)

    print("T0", engine.theoretical_period, "measured", estimator.estimate)
    assert estimator.estimate is not None
    assert estimator.estimate > 1.03 * engine.theoretical_period


def test_undamped_energy_stays_bounded():
    """
    b = 0: semi-implicit Euler is symplectic, so E = m g L (1 - cos θ) + 1/2 m (L ω)^2
    oscillates around E0 without drifting.
    """
    engine = PendulumEngine(PendulumConfig(damping=0.0, initial_angle_deg=45))
    e0 = engine.get_derived().total_energy
    energies = []
    for _ in range(2400):
        engine.step(1/120)
        energies.append(engine.get_derived().total_energy)

    energies = np.array(energies)
    max_dev = np.max(np.abs(energies - e0)) / e0
    drift = abs(energies[-240:].mean() - energies[:240].mean()) / e0
    print("max deviation", max_dev, "drift", drift)

    assert max_dev <= 0.05
    assert drift <= 0.02


def test_damping_removes_energy():
    """With b/m = 0.05 1/s, E decays roughly as exp(-(b/m) t)."""
    engine = PendulumEngine(PendulumConfig(damping=0.05, mass=1.0, initial_angle_deg=45))
    e0 = engine.get_derived().total_energy
    for _ in range(1200):
        engine.step(1/60)
    e1 = engine.get_derived().total_energy
    print("E0", e0, "E20s", e1)
    assert e1 < 0.5 * e0


def test_release_from_horizontal_stays_finite():
    engine = PendulumEngine(PendulumConfig(initial_angle_deg=90))
    max_angle = 0.0
    for _ in range(600):
        s = engine.step(1/60)
        assert math.isfinite(s.angle) and math.isfinite(s.angular_velocity)
        max_angle = max(max_angle, abs(s.angle))
    assert max_angle <= math.pi / 2 + 0.05


def test_timestep_is_clamped():
    engine = PendulumEngine(PendulumConfig())
    start = engine.state.copy()

    engine.step(-1.0)
    engine.step(float("nan"))
    engine.step(0.0)
    assert engine.state == start

    engine.step(1.0)
    assert np.isclose(engine.state.time, MAX_DT)


def test_angle_is_not_wrapped():
    """Physics keeps the raw angle; wrapping is a display helper."""
    engine = PendulumEngine(PendulumConfig(damping=0.0, length=0.1, gravity=1.0, initial_angle_deg=5))
    engine.state.angular_velocity = 20.0
    for _ in range(30):
        engine.step(1/60)
    assert engine.state.angle > math.pi
    assert -math.pi < wrap_angle(engine.state.angle) <= math.pi


def test_bob_position():
    """
    Canvas bob position (y down):
      x = pivot_x + sin θ L scale
      y = pivot_y + cos θ L scale
    """
    engine = PendulumEngine(PendulumConfig(length=1.0))
    x, y = engine.bob_position_of(PendulumState(angle=0.0))
    assert np.isclose(x, 400.0) and np.isclose(y, 250.0)

    x, y = engine.bob_position_of(PendulumState(angle=math.pi / 2))
    assert np.isclose(x, 550.0) and np.isclose(y, 100.0)

    x, y = engine.bob_position(pivot=(0.0, 0.0), scale=1.0)
    theta = math.radians(45)
    assert np.isclose(x, math.sin(theta)) and np.isclose(y, math.cos(theta))


def test_reset_readouts():
    engine = PendulumEngine(PendulumConfig(length=2.0, mass=0.5, initial_angle_deg=30))
    d = engine.get_derived()
    h = 2.0 * (1 - math.cos(math.radians(30)))
    assert d.kinetic_energy == 0.0
    assert np.isclose(d.potential_energy, 0.5 * 9.8 * h)
    assert np.isclose(engine.reference_energy(), d.total_energy)
    assert engine.phase_point() == (engine.state.angle, 0.0)
