# examples/bouncing_ball.py
from loguru import logger

from physics_demos import BouncingBallEngine, BouncingBallConfig, SimulationDriver

logger.enable("physics_demos")

engine = BouncingBallEngine(BouncingBallConfig(elasticity=0.8, initial_speed=3.0, air_resistance=0.02))
driver = SimulationDriver(engine)
print("clamped:", [c.name for c in engine.clamped])

e_ref = engine.reference_energy()
driver.start()
for frame in range(1, 601):
    driver.tick()
    if frame % 60 == 0:
        d = driver.readout()
        print(f"t={engine.state.time:5.2f}s  pos={engine.canvas_position()}  E={d.total_energy:7.3f} J ({100*d.total_energy/e_ref:5.1f}%)")
