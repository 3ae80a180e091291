"""Angle helpers used by characters and parts that turn towards a target."""

from __future__ import annotations

import math

__all__ = ["lock_on", "homing_spin", "homing_spin_to", "spin"]


def _normalise(angle: float) -> float:
    """Map an angle into the range [-pi, pi]."""
    return math.atan2(math.sin(angle), math.cos(angle))


def _turn(current: float, target: float, spin_speed: float) -> float:
    """Turn ``current`` towards ``target`` by at most ``spin_speed`` radians.

    Both angles must already lie in [-pi, pi].
    """
    if 0.0 <= target * current:
        if abs(target - current) <= spin_speed:
            return target
        return current + spin_speed if current < target else current - spin_speed

    sub_right = abs(target) + abs(current)
    sub_left = abs(2.0 * math.pi - sub_right)
    step = spin_speed if 0.0 < current else -spin_speed
    if sub_right <= spin_speed or sub_left <= spin_speed:
        return target
    if sub_right < sub_left:
        return current - step
    return current + step


def lock_on(cx: float, cy: float, dx: float, dy: float) -> float:
    """Return the angle from (cx, cy) towards (dx, dy)."""
    return math.atan2(dy - cy, dx - cx)


def homing_spin(angle: float, spin_speed: float, target_angle: float) -> float:
    """Turn ``angle`` towards ``target_angle`` by at most ``spin_speed``."""
    return _turn(_normalise(angle), _normalise(target_angle), spin_speed)


def homing_spin_to(
    angle: float,
    spin_speed: float,
    x: float,
    y: float,
    target_x: float,
    target_y: float,
) -> float:
    """Turn ``angle`` at (x, y) towards the point (target_x, target_y)."""
    target = math.atan2(target_y - y, target_x - x)
    return _turn(_normalise(angle), target, spin_speed)


def spin(angle: float, spin_speed: float, spin_max: float, spin_min: float) -> float:
    """Rotate by ``spin_speed`` and clamp the result to [spin_min, spin_max]."""
    angle += spin_speed
    if spin_max < angle:
        angle = spin_max
    if angle < spin_min:
        angle = spin_min
    return angle