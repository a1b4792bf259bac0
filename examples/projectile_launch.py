# examples/projectile_launch.py
from physics_demos import ProjectileEngine, ProjectileConfig
from physics_demos.observers import ImpactRecorder, TrailRecorder
from physics_demos.constants import PROJECTILE_ORIGIN_PX, PROJECTILE_TRAIL_LEN
from physics_demos.util import to_canvas

engine = ProjectileEngine(ProjectileConfig(launch_angle_deg=40, launch_speed=55, advanced=True, wind_speed=-5))

trail = TrailRecorder(PROJECTILE_TRAIL_LEN)
impacts = ImpactRecorder()
engine.attach(trail)
engine.attach(impacts)
engine.reset()

while not engine.state.grounded:
    engine.step(1/60)

hit = impacts.last
print("impact t:", hit.time)
print("range:", hit.horizontal_range, "(no drag:", engine.theoretical_range(), ")")
print("impact velocity:", hit.velocity)
print("trail points:", len(trail), "last on canvas:", to_canvas(trail.points[-1], PROJECTILE_ORIGIN_PX))
