# examples/pendulum.py
from physics_demos import PendulumEngine, PendulumConfig
from physics_demos.observers import PeriodEstimator, PhaseSpaceRecorder
from physics_demos.util import rad_to_deg

engine = PendulumEngine(PendulumConfig(length=1.5, damping=0.0, initial_angle_deg=20))
period = PeriodEstimator()
phase = PhaseSpaceRecorder()
engine.attach(period)
engine.attach(phase)
engine.reset()

for _ in range(60 * 20):
    engine.step(1/60)

print("small-angle period:", engine.theoretical_period)
print("measured period:   ", period.estimate)
print("angle now (deg):   ", rad_to_deg(engine.state.angle))
print("bob on canvas:     ", engine.bob_position())
print("phase points:", len(phase.points), "max |ω|:", max(abs(w) for _, w in phase.points))
print("energy:", engine.get_derived().total_energy, "at release:", engine.reference_energy())
