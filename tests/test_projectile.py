import numpy as np
from physics_demos.engines import ProjectileEngine
from physics_demos.config import ProjectileConfig
from physics_demos.core.forces import quadratic_drag_acceleration
from physics_demos.observers import ImpactRecorder


def fly(engine: ProjectileEngine, dt: float = 1/60, max_steps: int = 20000):
    steps = 0
    while not engine.state.grounded and steps < max_steps:
        engine.step(dt)
        steps += 1
    return engine.state


def test_basic_flight_matches_analytic():
    """
    Drag-free flight (constant g):
      x(t) = v cosθ t
      y(t) = v sinθ t - 1/2 g t^2
    Semi-implicit Euler lags y by g·dt·t/2, well under 1% here.
    """
    g, v, theta = 9.8, 60.0, np.radians(45.0)
    engine = ProjectileEngine(ProjectileConfig(launch_angle_deg=45, launch_speed=v, gravity=g))
    for _ in range(60):
        engine.step(1/60)

    t = engine.state.time
    x_exp = v*np.cos(theta)*t
    y_exp = v*np.sin(theta)*t - 0.5*g*t*t
    vy_exp = v*np.sin(theta) - g*t

    x_err = abs(engine.state.position[0] - x_exp) / x_exp
    y_err = abs(engine.state.position[1] - y_exp) / y_exp
    vy_err = abs(engine.state.velocity[1] - vy_exp) / abs(vy_exp)
    print("x relerr", x_err, "y relerr", y_err, "vy relerr", vy_err)

    assert abs(t - 1.0) < 1e-9
    assert x_err <= 1e-9
    assert y_err <= 0.01
    assert vy_err <= 1e-9


def test_complementary_angles_have_equal_range():
    """
    Drag-free range R = v^2 sin(2θ)/g is the same for θ and 90°-θ.
    """
    ranges = {}
    for angle in (30, 60):
        engine = ProjectileEngine(ProjectileConfig(launch_angle_deg=angle, launch_speed=50, gravity=9.8))
        fly(engine)
        ranges[angle] = engine.state.position[0]

    r_exp = 50.0**2 * np.sin(np.radians(60.0)) / 9.8
    print("ranges", ranges, "exp", r_exp)

    assert abs(ranges[30] - ranges[60]) / r_exp <= 0.01
    assert abs(ranges[30] - r_exp) / r_exp <= 0.01
    assert abs(ranges[60] - r_exp) / r_exp <= 0.01


def test_theoretical_readouts():
    engine = ProjectileEngine(ProjectileConfig(launch_angle_deg=30, launch_speed=40, gravity=10))
    vx, vy = engine.launch_components()
    assert np.isclose(vx, 40*np.cos(np.radians(30)))
    assert np.isclose(vy, 20.0)
    assert np.isclose(engine.theoretical_max_height(), 20.0)
    assert np.isclose(engine.theoretical_flight_time(), 4.0)
    assert np.isclose(engine.theoretical_range(), 1600*np.sin(np.radians(60))/10)


def test_impact_is_emitted_once_and_projectile_stays_down():
    engine = ProjectileEngine(ProjectileConfig())
    impacts = ImpactRecorder()
    engine.attach(impacts)
    engine.reset()

    fly(engine)
    landed = engine.state.copy()
    for _ in range(30):
        engine.step(1/60)

    assert len(impacts.events) == 1
    event = impacts.last
    assert event.position[1] == 0.0
    assert event.velocity[1] < 0.0
    assert np.isclose(event.horizontal_range, landed.position[0])
    assert engine.state.grounded
    assert engine.state.position[1] == 0.0
    assert np.array_equal(engine.state.velocity, np.zeros(2))
    assert engine.state.time == landed.time
    assert np.array_equal(engine.state.position, landed.position)


def test_reset_relaunches():
    engine = ProjectileEngine(ProjectileConfig())
    fly(engine)
    state = engine.reset()
    assert not state.grounded
    assert state.time == 0.0
    assert np.array_equal(state.position, np.zeros(2))
    vx, vy = engine.launch_components()
    assert np.array_equal(state.velocity, np.array([vx, vy]))


def test_drag_shortens_range_and_wind_shifts_it():
    """
    Quadratic drag a = -(1/2 ρ Cd A |v_rel|^2 / m) v_rel/|v_rel|.
    Tailwind lowers the relative airspeed (longer range), headwind raises it.
    """
    base = dict(launch_angle_deg=45, launch_speed=60, gravity=9.8,
                mass=10, drag_coefficient=1.0, cross_section_area_cm2=150)

    def range_for(**kw):
        engine = ProjectileEngine(ProjectileConfig(**{**base, **kw}))
        fly(engine)
        return engine.state.position[0]

    vacuum = range_for(advanced=False)
    still = range_for(advanced=True, wind_speed=0.0)
    tail = range_for(advanced=True, wind_speed=20.0)
    head = range_for(advanced=True, wind_speed=-20.0)
    print("vacuum", vacuum, "still", still, "tail", tail, "head", head)

    assert still < vacuum
    assert head < still < tail


def test_zero_drag_coefficient_matches_basic_mode():
    basic = ProjectileEngine(ProjectileConfig(advanced=False))
    adv = ProjectileEngine(ProjectileConfig(advanced=True, drag_coefficient=0.0))
    for _ in range(200):
        basic.step(1/60)
        adv.step(1/60)
    assert np.array_equal(basic.state.position, adv.state.position)
    assert np.array_equal(basic.state.velocity, adv.state.velocity)


def test_drag_is_zero_at_rest_relative_to_air():
    a = quadratic_drag_acceleration(np.array([5.0, 0.0]), wind_speed=5.0, mass=50.0,
                                    drag_coefficient=0.47, area_m2=0.005)
    assert np.all(np.isfinite(a))
    assert np.array_equal(a, np.zeros(2))


def test_degenerate_launch_does_not_crash():
    engine = ProjectileEngine(ProjectileConfig(launch_angle_deg=0.0, launch_speed=0.0))
    assert engine.config.launch_angle_deg == 5.0
    assert engine.config.launch_speed == 10.0
    state = fly(engine)
    assert state.grounded
    assert np.all(np.isfinite(state.position))


def test_energy_readout_without_drag():
    """
    PE + KE is conserved up to the O(dt) semi-implicit Euler error.
    """
    engine = ProjectileEngine(ProjectileConfig(launch_speed=60))
    e0 = engine.get_derived().total_energy
    for _ in range(120):
        engine.step(1/60)
        d = engine.get_derived()
        assert d.potential_energy >= 0.0
        assert d.kinetic_energy >= 0.0
        assert abs(d.total_energy - e0) / e0 <= 0.01
    assert d.period is None
