import math

import numpy as np
from physics_demos import (
    BouncingBallConfig,
    BouncingBallEngine,
    ClampedParameter,
    Engine,
    PendulumConfig,
    PendulumEngine,
    ProjectileConfig,
    ProjectileEngine,
    clamp_config,
)
from physics_demos.io import state_to_json


def test_negative_gravity_is_clamped_to_minimum():
    for cls in (ProjectileConfig, BouncingBallConfig, PendulumConfig):
        effective, clamped = clamp_config(cls(gravity=-5.0))
        assert effective.gravity == 1.0
        assert clamped == (ClampedParameter("gravity", -5.0, 1.0),)


def test_in_range_config_is_untouched():
    config = PendulumConfig(length=2.0)
    effective, clamped = clamp_config(config)
    assert effective is config
    assert clamped == ()


def test_nan_falls_back_to_default_and_inf_to_bound():
    effective, clamped = clamp_config(BouncingBallConfig(elasticity=float("nan"), initial_speed=float("inf")))
    assert effective.elasticity == 0.7
    assert effective.initial_speed == 10.0
    names = {c.name for c in clamped}
    assert names == {"elasticity", "initial_speed"}
    nan_entry = next(c for c in clamped if c.name == "elasticity")
    assert math.isnan(nan_entry.requested)


def test_engine_reports_clamped_parameters():
    engine = PendulumEngine(PendulumConfig(length=0.0, damping=5.0))
    assert engine.config.length == 0.1
    assert engine.config.damping == 0.5
    assert {c.name for c in engine.clamped} == {"length", "damping"}
    assert math.isfinite(engine.theoretical_period)

    engine.configure(PendulumConfig())
    assert engine.clamped == ()


def test_engines_satisfy_protocol():
    for engine in (ProjectileEngine(), BouncingBallEngine(), PendulumEngine()):
        assert isinstance(engine, Engine)


def test_reset_is_idempotent():
    """reset(); reset() produces the same state as a single reset()."""
    for engine in (ProjectileEngine(), BouncingBallEngine(), PendulumEngine()):
        fresh = state_to_json(engine.reset())
        for _ in range(45):
            engine.step(1/60)
        first = state_to_json(engine.reset())
        second = state_to_json(engine.reset())
        assert first == fresh
        assert second == fresh
        assert state_to_json(engine.state) == fresh


def test_snapshots_do_not_alias_live_state():
    engine = BouncingBallEngine()
    snap = engine.step(1/60)
    snap.position[0] = -100.0
    assert engine.state.position[0] != -100.0
    assert not np.shares_memory(snap.velocity, engine.state.velocity)
