"""Z-up trackball camera controls and cycling through named items."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

from carbonk.transform import angle_axis, quat_multiply, quat_rotate, quat_to_mat3

_PI = 3.1415926
_MIN_RADIUS = 1e-1
_MAX_RADIUS = 1e6


def _round_half_away(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _wrap_angle(angle: float) -> float:
    """Wrap ``angle`` into [-pi, pi]."""
    turns = angle / (2.0 * _PI)
    turns -= _round_half_away(turns)
    return turns * 2.0 * _PI


@dataclass
class TrackballCamera:
    """Orbit camera around ``target``; azimuth is measured ccw from -y, elevation above ground."""

    radius: float = 2.0
    azimuth: float = 0.3
    elevation: float = 0.2
    target: np.ndarray = field(default_factory=lambda: np.zeros(3))
    flip_x: bool = False

    def begin_drag(self) -> None:
        """Start a drag; horizontal motion is reversed while the camera is upside-down."""
        self.flip_x = abs(self.elevation) > 0.5 * _PI

    def drag(self, xrel: float, yrel: float, window_size, pan: bool = False) -> None:
        """Apply mouse motion in window pixels: pan the target, or tumble around it."""
        width, height = (float(v) for v in window_size)
        dx = xrel / width * 2.0 * (height / width)
        dy = yrel / height * -2.0

        if pan:
            frame = quat_to_mat3(self.rotation())
            self.target = np.asarray(self.target, dtype=float) - (
                frame[:, 0] * (dx * self.radius) + frame[:, 1] * (dy * self.radius)
            )
            return

        self.azimuth -= 3.0 * dx * (-1.0 if self.flip_x else 1.0)
        self.elevation -= 3.0 * dy
        self.azimuth = _wrap_angle(self.azimuth)
        self.elevation = _wrap_angle(self.elevation)

    def dolly(self, wheel_y: float) -> None:
        """Move toward (positive) or away from (negative) the target by wheel steps."""
        self.radius *= math.pow(0.5, 0.1 * wheel_y)
        self.radius = min(max(self.radius, _MIN_RADIUS), _MAX_RADIUS)

    def rotation(self) -> np.ndarray:
        """Camera orientation quaternion ``(w, x, y, z)``."""
        return quat_multiply(
            angle_axis(self.azimuth, (0.0, 0.0, 1.0)),
            angle_axis(0.5 * _PI - self.elevation, (1.0, 0.0, 0.0)),
        )

    def position(self) -> np.ndarray:
        """Camera position, ``radius`` away from ``target`` along the camera's +z axis."""
        offset = quat_rotate(self.rotation(), (0.0, 0.0, 1.0))
        return np.asarray(self.target, dtype=float) + self.radius * offset


def next_name(names: Iterable[str], current: str) -> str:
    """The name after ``current`` in sorted order; the last name if there is none."""
    ordered = sorted(set(names))
    if not ordered:
        return ""
    if current in ordered:
        index = ordered.index(current)
        if index + 1 < len(ordered):
            return ordered[index + 1]
    return ordered[-1]


def prev_name(names: Iterable[str], current: str) -> str:
    """The name before ``current`` in sorted order; the first name if there is none."""
    ordered = sorted(set(names))
    if not ordered:
        return ""
    if current in ordered:
        index = ordered.index(current)
        if index > 0:
            return ordered[index - 1]
    return ordered[0]