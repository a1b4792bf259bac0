# MIT License (see LICENSE)
"""
The three demo engines.

This subpackage provides:
    - ProjectileEngine: Launch over flat ground, optional drag and wind.
    - BouncingBallEngine (+ Arena): Ball in a box with restitution,
      floor friction and quadratic drag.
    - PendulumEngine: Damped nonlinear simple pendulum.
    - Engine: The Protocol all three satisfy.

Engines are independent; none imports another.
"""
from .base import Engine, ObserverHub
from .projectile import ProjectileEngine
from .bouncing_ball import Arena, BouncingBallEngine
from .pendulum import PendulumEngine

__all__ = [
    "Engine",
    "ObserverHub",
    "ProjectileEngine",
    "Arena",
    "BouncingBallEngine",
    "PendulumEngine",
]
