# MIT License (see LICENSE)
"""
Physical and display constants used throughout the demos.

Physics runs in SI units with y pointing up. The pixel constants describe
how the reference 800x400 canvases map onto the physical frame; the engines
only use them to derive arena geometry and never draw anything.
"""
from __future__ import annotations

# Sea-level air density in kg/m³ (ISA standard atmosphere, 15 °C).
AIR_DENSITY: float = 1.225

# Conversion factor for cross-section areas entered in cm².
CM2_TO_M2: float = 1e-4

# Reference animation rate of the per-frame pixel rules.
FRAME_RATE: float = 60.0
DEFAULT_DT: float = 1.0 / FRAME_RATE

# Largest timestep any engine accepts; slower frames are clamped to this.
MAX_DT: float = 1.0 / 30.0

# =============================================================================
# Canvas geometry (pixels)
# =============================================================================

CANVAS_WIDTH_PX: float = 800.0
CANVAS_HEIGHT_PX: float = 400.0

# Projectile launch point on the canvas; the ground is level with it.
PROJECTILE_ORIGIN_PX: tuple[float, float] = (50.0, CANVAS_HEIGHT_PX - 50.0)

# Bouncing ball: 50 px per metre, 20 px ground strip at the bottom.
BALL_SCALE: float = 50.0
BALL_GROUND_STRIP_PX: float = 20.0
BALL_DROP_PX: tuple[float, float] = (CANVAS_WIDTH_PX / 2.0, 50.0)

# Pendulum: 150 px per metre, pivot near the top centre.
PENDULUM_SCALE: float = 150.0
PENDULUM_PIVOT_PX: tuple[float, float] = (CANVAS_WIDTH_PX / 2.0, 100.0)

# =============================================================================
# Bouncing-ball arena (metres, floor at y = 0)
# =============================================================================

ARENA_WIDTH: float = CANVAS_WIDTH_PX / BALL_SCALE
ARENA_HEIGHT: float = (CANVAS_HEIGHT_PX - BALL_GROUND_STRIP_PX) / BALL_SCALE
BALL_DROP_POINT: tuple[float, float] = (
    BALL_DROP_PX[0] / BALL_SCALE,
    (CANVAS_HEIGHT_PX - BALL_GROUND_STRIP_PX - BALL_DROP_PX[1]) / BALL_SCALE,
)

# Vertical speeds below this after a floor bounce snap to zero.
# 0.2 px per frame at the reference frame rate, expressed in m/s.
REST_SPEED: float = 0.2 * FRAME_RATE / BALL_SCALE

# =============================================================================
# Display buffer sizes
# =============================================================================

PROJECTILE_TRAIL_LEN: int = 2000
BALL_TRAIL_LEN: int = 30
PENDULUM_TRAIL_LEN: int = 100
PHASE_TRAIL_LEN: int = 200

# Turning points kept by the period estimator (the estimate averages these).
PERIOD_CROSSINGS_LEN: int = 20

# Frames kept by FrameRecorder: one minute at the reference frame rate.
FRAME_LOG_LEN: int = 3600
