"""
Microbenchmark: time per tick for each engine, against the 60 Hz frame budget.
Run:
  python benchmarks/bench_engines.py
"""
import time

from physics_demos import (
    BouncingBallEngine,
    PendulumEngine,
    ProjectileConfig,
    ProjectileEngine,
    SimulationDriver,
)
from physics_demos.constants import BALL_TRAIL_LEN, PENDULUM_TRAIL_LEN, PROJECTILE_TRAIL_LEN
from physics_demos.observers import NullObserver, PhaseSpaceRecorder, TrailRecorder
from physics_demos.profiler import Profiler


def make_engines():
    projectile = ProjectileEngine(ProjectileConfig(advanced=True, launch_speed=100, launch_angle_deg=85))
    projectile.attach(TrailRecorder(PROJECTILE_TRAIL_LEN))
    projectile.attach(NullObserver())

    ball = BouncingBallEngine()
    ball.attach(TrailRecorder(BALL_TRAIL_LEN))

    pendulum = PendulumEngine()
    pendulum.attach(TrailRecorder(PENDULUM_TRAIL_LEN, point=pendulum.bob_position_of))
    pendulum.attach(PhaseSpaceRecorder())
    return {"projectile": projectile, "bouncing_ball": ball, "pendulum": pendulum}


def run(engine, ticks: int = 1000):
    prof = Profiler()
    driver = SimulationDriver(engine, profiler=prof)
    driver.reset()

    # warmup
    driver.run(30)
    driver.reset()
    prof.stats.clear()

    t0 = time.perf_counter()
    driver.start()
    n = 0
    for _ in range(ticks):
        if driver.tick() is None:
            break
        driver.readout()
        n += 1
    t1 = time.perf_counter()
    return (t1 - t0) / max(n, 1), n, prof.stats.summary()


if __name__ == "__main__":
    for name, engine in make_engines().items():
        per_tick, n, summary = run(engine)
        print(f"{name:14s} ticks={n:5d}  tick={1e3*per_tick:8.4f} ms  ticks/s={1/per_tick:10.1f}")
        for k in ["step", "derive"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
