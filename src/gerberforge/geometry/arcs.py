from __future__ import annotations

"""Arc sweep normalisation and chord-bounded tessellation."""

import math

import numpy as np

FULL_TURN_DEG = 360.0


def normalize_sweep(start_deg: float, end_deg: float) -> float:
    # Positive sweep is counter-clockwise; anything past one turn is clamped.
    sweep = float(end_deg) - float(start_deg)
    if sweep > FULL_TURN_DEG:
        return FULL_TURN_DEG
    if sweep < -FULL_TURN_DEG:
        return -FULL_TURN_DEG
    return sweep


def is_full_turn(sweep_deg: float) -> bool:
    return abs(sweep_deg) >= FULL_TURN_DEG


def max_step_angle(radius: float, tolerance: float) -> float:
    """Largest angular step (radians) whose chord sagitta stays within tolerance."""
    if radius <= tolerance:
        return math.pi
    return 2.0 * math.acos(1.0 - tolerance / radius)


def segment_count(radius: float, sweep_deg: float, tolerance: float) -> int:
    sweep = abs(math.radians(sweep_deg))
    if sweep == 0.0 or radius <= 0.0:
        return 1
    step = max_step_angle(radius, tolerance)
    return max(1, int(math.ceil(sweep / step)))


def arc_points(
    center: tuple[float, float],
    radius: float,
    start_deg: float,
    sweep_deg: float,
    tolerance: float,
    x_scale: float = 1.0,
    y_scale: float = 1.0,
) -> np.ndarray:
    """Return (n + 1, 2) points from start to end along the arc.

    ``x_scale``/``y_scale`` stretch the circle into an axis-aligned ellipse.
    The step is sized for the larger semi-axis, which keeps every chord of
    the ellipse within ``tolerance``.
    """
    count = segment_count(radius * max(x_scale, y_scale), sweep_deg, tolerance)
    start = math.radians(start_deg)
    angles = start + np.linspace(0.0, math.radians(sweep_deg), count + 1)
    cx, cy = center
    pts = np.column_stack(
        (cx + radius * x_scale * np.cos(angles), cy + radius * y_scale * np.sin(angles))
    )
    return pts
